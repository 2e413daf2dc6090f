from __future__ import annotations

import math
from typing import Optional

from . import _run


class FfmpegIO:
    """Trim clips with `ffmpeg` and measure them with `ffprobe`."""

    def __init__(self, ffmpeg_bin: str = "ffmpeg", ffprobe_bin: str = "ffprobe"):
        self.ffmpeg_bin = ffmpeg_bin
        self.ffprobe_bin = ffprobe_bin

    def trim(self, src: str, dest: str, *, offset: int, length: int) -> None:
        """Copy `length` seconds of `src` starting at `offset` into `dest`.

        The codec stream is copied, not re-encoded.
        """
        _run.run(
            [
                self.ffmpeg_bin,
                "-y",
                "-v",
                "error",
                "-ss",
                str(offset),
                "-i",
                src,
                "-t",
                str(length),
                "-c",
                "copy",
                dest,
            ]
        )

    def probe_duration(self, path: str) -> Optional[float]:
        """Duration of `path` in seconds, or None if ffprobe reports none."""
        out = _run.run(
            [
                self.ffprobe_bin,
                "-v",
                "quiet",
                "-show_entries",
                "format=duration",
                "-of",
                "default=noprint_wrappers=1:nokey=1",
                path,
            ]
        )
        text = out.decode("utf-8", errors="replace").strip()
        if not text:
            return None
        # Some builds still print `duration=...`.
        if "=" in text:
            text = text.split("=", 1)[1].strip()
        try:
            value = float(text.splitlines()[0])
        except ValueError:
            return None
        if not math.isfinite(value):
            return None
        return value

    def ensure_min_duration(self, path: str, length: int) -> float:
        """Probe `path` and insist its ceiled duration covers `length` seconds."""
        duration = self.probe_duration(path)
        ceiled = math.ceil(duration) if duration is not None else 0
        if not ceiled or ceiled < length:
            raise ValueError(
                f"trimmed clip is too short: duration={duration!r} required={length}"
            )
        return duration
