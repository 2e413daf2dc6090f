from __future__ import annotations

from typing import Optional

from songtag.config import ProcessorConfig
from songtag.models import RecognizedData
from songtag.processor import SongProcessor


def process_song(
    path: str, config: Optional[ProcessorConfig] = None, **collaborators
) -> RecognizedData:
    """Run every stage for one file and always clean up afterwards.

    Stage errors propagate unchanged (see songtag.errors).
    """
    processor = SongProcessor(path, config, **collaborators)
    try:
        processor.preprocess()
        data = processor.recognize()
        processor.write_metadata()
        return data
    finally:
        processor.cleanup()
