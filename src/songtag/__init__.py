"""Recognize the song in an audio file and tag it with artist/title.

Public API:
- SongProcessor / ProcessorState
- ProcessorConfig
- RecognizedData
- process_song
- error types from songtag.errors
"""

from .config import ProcessorConfig
from .errors import (
    NoMetadataAvailable,
    NotPreprocessed,
    PreprocessFailure,
    RecognitionFailure,
    SongProcessingError,
    TaggingFailure,
    UnsupportedFormat,
)
from .models import RecognizedData
from .pipeline import process_song
from .processor import ProcessorState, SongProcessor

__all__ = [
    "SongProcessor",
    "ProcessorState",
    "ProcessorConfig",
    "RecognizedData",
    "process_song",
    "SongProcessingError",
    "UnsupportedFormat",
    "PreprocessFailure",
    "NotPreprocessed",
    "RecognitionFailure",
    "NoMetadataAvailable",
    "TaggingFailure",
]

__version__ = "0.1.0"
