from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

from dotenv import load_dotenv

from .errors import ConfigError

# Load from .env if it exists (useful for local development)
load_dotenv()

LOGGING_LEVEL = os.getenv("LOGGING_LEVEL", "INFO").upper()

DEFAULT_TEMP_PATH = "/tmp_songs/"
DEFAULT_TRIM_OFFSET = 55  # seconds
DEFAULT_TRIM_LENGTH = 45  # seconds
DEFAULT_SUPPORTED_FORMATS = (".mp3", ".ogg")

TAG_WRITERS = ("kid3", "music_tag")
RECOGNITION_CODECS = ("base64", "identity")

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


def _parse_bool(name: str, raw: Optional[str], default: bool) -> bool:
    if raw is None or raw.strip() == "":
        return default
    v = raw.strip().lower()
    if v in _TRUTHY:
        return True
    if v in _FALSY:
        return False
    raise ConfigError(f"{name} must be a boolean, got {raw!r}")


def _parse_int(name: str, raw: Optional[str], default: int) -> int:
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw.strip(), 10)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from None
    if value < 0:
        raise ConfigError(f"{name} must not be negative, got {value}")
    return value


def _parse_formats(raw: Optional[str]) -> Tuple[str, ...]:
    if raw is None or raw.strip() == "":
        return DEFAULT_SUPPORTED_FORMATS
    out = []
    for part in raw.split(","):
        ext = part.strip().lower()
        if not ext:
            continue
        if not ext.startswith("."):
            ext = "." + ext
        out.append(ext)
    return tuple(out)


def _parse_choice(name: str, raw: Optional[str], choices: Tuple[str, ...]) -> str:
    if raw is None or raw.strip() == "":
        return choices[0]
    v = raw.strip().lower()
    if v not in choices:
        raise ConfigError(f"{name} must be one of {', '.join(choices)}, got {raw!r}")
    return v


@dataclass(frozen=True)
class ProcessorConfig:
    """Immutable settings for a SongProcessor.

    Built once (usually via `from_env()`) and handed to every processor, so two
    processors can run side by side with different trim windows or formats.
    """

    temp_dir: str = DEFAULT_TEMP_PATH
    trim_audio: bool = True
    trim_offset: int = DEFAULT_TRIM_OFFSET
    trim_length: int = DEFAULT_TRIM_LENGTH
    supported_formats: Tuple[str, ...] = DEFAULT_SUPPORTED_FORMATS
    tag_writer: str = "kid3"
    recognition_codec: str = "base64"

    ffmpeg_bin: str = "ffmpeg"
    ffprobe_bin: str = "ffprobe"
    songrec_bin: str = "songrec"
    base64_bin: str = "base64"
    kid3_bin: str = "kid3-cli"

    def __post_init__(self) -> None:
        if self.trim_length <= 0:
            raise ConfigError(f"trim_length must be positive, got {self.trim_length}")
        if self.trim_offset < 0:
            raise ConfigError(
                f"trim_offset must not be negative, got {self.trim_offset}"
            )
        if self.tag_writer not in TAG_WRITERS:
            raise ConfigError(f"Unknown tag writer: {self.tag_writer}")
        if self.recognition_codec not in RECOGNITION_CODECS:
            raise ConfigError(f"Unknown recognition codec: {self.recognition_codec}")
        # Normalise so lookups in the processor are case-insensitive.
        object.__setattr__(
            self,
            "supported_formats",
            tuple(ext.lower() for ext in self.supported_formats),
        )

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "ProcessorConfig":
        e = os.environ if env is None else env
        return cls(
            temp_dir=e.get("TEMP_PATH") or DEFAULT_TEMP_PATH,
            trim_audio=_parse_bool("TRIM_AUDIO", e.get("TRIM_AUDIO"), True),
            trim_offset=_parse_int(
                "TRIM_OFFSET", e.get("TRIM_OFFSET"), DEFAULT_TRIM_OFFSET
            ),
            trim_length=_parse_int(
                "TRIM_LENGTH", e.get("TRIM_LENGTH"), DEFAULT_TRIM_LENGTH
            ),
            supported_formats=_parse_formats(e.get("SUPPORTED_FORMATS")),
            tag_writer=_parse_choice("TAG_WRITER", e.get("TAG_WRITER"), TAG_WRITERS),
            recognition_codec=_parse_choice(
                "RECOGNITION_CODEC", e.get("RECOGNITION_CODEC"), RECOGNITION_CODECS
            ),
            ffmpeg_bin=e.get("FFMPEG_BIN") or "ffmpeg",
            ffprobe_bin=e.get("FFPROBE_BIN") or "ffprobe",
            songrec_bin=e.get("SONGREC_BIN") or "songrec",
            base64_bin=e.get("BASE64_BIN") or "base64",
            kid3_bin=e.get("KID3_BIN") or "kid3-cli",
        )
