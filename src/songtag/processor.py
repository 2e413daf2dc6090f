from __future__ import annotations

import enum
import os
import uuid
from typing import Optional

from songtag import logger as log
from songtag.config import ProcessorConfig
from songtag.errors import (
    NoMetadataAvailable,
    NotPreprocessed,
    PreprocessFailure,
    RecognitionFailure,
    TaggingFailure,
    UnsupportedFormat,
)
from songtag.io.ffmpeg_io import FfmpegIO
from songtag.io.kid3_io import Kid3IO
from songtag.io.songrec_io import SongrecIO
from songtag.models import RecognizedData


class ProcessorState(enum.Enum):
    CREATED = "created"
    PREPROCESSED = "preprocessed"
    RECOGNIZED = "recognized"
    TAGGED = "tagged"


def build_tag_writer(config: ProcessorConfig):
    if config.tag_writer == "music_tag":
        from songtag.io.music_tag_io import MusicTagIO

        return MusicTagIO()
    return Kid3IO(config.kid3_bin)


class SongProcessor:
    """Identify one audio file and write the artist/title back into its tags.

    Stages are called explicitly and in order:

        p = SongProcessor(path, config)
        try:
            p.preprocess()
            p.recognize()
            p.write_metadata()
        finally:
            p.cleanup()

    One instance per source file. When trimming is enabled the instance owns a
    temporary clip in `config.temp_dir`; only `cleanup()` removes it.
    """

    def __init__(
        self,
        source_path: str,
        config: Optional[ProcessorConfig] = None,
        *,
        ffmpeg: Optional[FfmpegIO] = None,
        recognizer: Optional[SongrecIO] = None,
        tag_writer=None,
    ) -> None:
        self._source_path = str(source_path)
        self.config = config or ProcessorConfig.from_env()
        self._ffmpeg = ffmpeg or FfmpegIO(
            self.config.ffmpeg_bin, self.config.ffprobe_bin
        )
        self._recognizer = recognizer or SongrecIO(
            self.config.songrec_bin,
            codec=self.config.recognition_codec,
            base64_bin=self.config.base64_bin,
        )
        self._tag_writer = tag_writer or build_tag_writer(self.config)

        self.temp_path: Optional[str] = None
        self._clip_ready = False
        self.recognized_data: Optional[RecognizedData] = None
        self.state = ProcessorState.CREATED

    @property
    def source_path(self) -> str:
        return self._source_path

    @property
    def extension(self) -> str:
        return os.path.splitext(self._source_path)[1].lower()

    def _new_temp_path(self) -> str:
        return os.path.join(self.config.temp_dir, f"{uuid.uuid4().hex}{self.extension}")

    def preprocess(self) -> None:
        if self.extension not in self.config.supported_formats:
            raise UnsupportedFormat("Unsupported audio format.")

        if not self.config.trim_audio:
            self.state = ProcessorState.PREPROCESSED
            return

        # Never hold more than one clip.
        self.state = ProcessorState.CREATED
        try:
            self.cleanup()
            self.temp_path = self._new_temp_path()
            os.makedirs(self.config.temp_dir, exist_ok=True)
            self._ffmpeg.trim(
                self._source_path,
                self.temp_path,
                offset=self.config.trim_offset,
                length=self.config.trim_length,
            )
            if not os.path.exists(self.temp_path):
                raise FileNotFoundError(f"Could not trim song: {self.temp_path}")

            duration = self._ffmpeg.ensure_min_duration(
                self.temp_path, self.config.trim_length
            )
            log.debug(f"[PREPROCESS] {self._source_path}: clip duration={duration}")
        except Exception as e:
            log.error(f"[PREPROCESS] Preprocessing for {self._source_path} failed: {e}")
            raise PreprocessFailure("Internal Server Error.") from None

        self._clip_ready = True
        self.state = ProcessorState.PREPROCESSED

    def recognize(self) -> RecognizedData:
        if self.config.trim_audio and not (self.temp_path and self._clip_ready):
            raise NotPreprocessed("No path was loaded into the SongProcessor.")

        target = self.temp_path or self._source_path
        try:
            data = self._recognizer.recognize(target)
        except Exception as e:
            log.error(f"[RECOGNIZE] Could not recognize song {self._source_path}: {e}")
            raise RecognitionFailure("Could not recognize song.") from None

        if data is None:
            log.error(f"[RECOGNIZE] No match for {self._source_path}")
            raise RecognitionFailure("Could not recognize song.")

        self.recognized_data = data
        self.state = ProcessorState.RECOGNIZED
        log.info(
            f"[RECOGNIZE] {os.path.basename(self._source_path)}: "
            f"{data.artist!r} - {data.title!r}"
        )
        return data

    def write_metadata(self) -> None:
        if self.recognized_data is None:
            raise NoMetadataAvailable("No metadata was found to write.")

        # Tags go on the original file, never on the clip.
        try:
            self._tag_writer.write(self._source_path, self.recognized_data.as_tags())
        except Exception as e:
            log.error(f"[TAG-WRITE] Could not tag songfile {self._source_path}: {e}")
            raise TaggingFailure("Could not tag the songfile.") from None

        self.state = ProcessorState.TAGGED

    def cleanup(self) -> None:
        self._clip_ready = False
        if not self.config.trim_audio or not self.temp_path:
            return
        try:
            os.remove(self.temp_path)
            log.debug(f"[CLEANUP] removed {self.temp_path}")
        except FileNotFoundError:
            pass
        finally:
            self.temp_path = None
