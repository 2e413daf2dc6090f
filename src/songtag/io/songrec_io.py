from __future__ import annotations

import json
from typing import Any, Optional

from songtag.codec import BASE64, decode_payload
from songtag.models import RecognizedData

from . import _run


def parse_response(text: str) -> Optional[RecognizedData]:
    """Pull artist/title out of a songrec JSON response.

    Returns None when the response carries no `track` object (no match).
    Raises ValueError for anything that is not a well-formed response.
    """
    try:
        response: Any = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"Recognition output is not JSON: {e}") from e

    if not isinstance(response, dict):
        raise ValueError("Recognition output is not a JSON object")

    track = response.get("track")
    if not track:
        return None
    if not isinstance(track, dict):
        raise ValueError("`track` is not an object")

    artist = track.get("subtitle")
    title = track.get("title")
    if not isinstance(artist, str) or not isinstance(title, str):
        raise ValueError(
            f"`track` is missing subtitle/title: subtitle={artist!r} title={title!r}"
        )
    return RecognizedData(artist=artist, title=title)


class SongrecIO:
    """Run `songrec audio-file-to-recognized-song` and read its answer.

    Codec contract: with `codec="base64"` the tool's stdout is piped through
    `base64 -w 0` before capture and decoded here; with `codec="identity"` the
    raw stdout is used as-is.
    """

    def __init__(
        self,
        songrec_bin: str = "songrec",
        *,
        codec: str = BASE64,
        base64_bin: str = "base64",
    ):
        self.songrec_bin = songrec_bin
        self.codec = codec
        self.base64_bin = base64_bin

    def capture(self, path: str) -> bytes:
        cmd = [self.songrec_bin, "audio-file-to-recognized-song", path]
        if self.codec == BASE64:
            return _run.run_piped(cmd, [self.base64_bin, "-w", "0"])
        return _run.run(cmd)

    def recognize(self, path: str) -> Optional[RecognizedData]:
        raw = self.capture(path)
        return parse_response(decode_payload(raw, self.codec))
