from __future__ import annotations

from typing import Any, Mapping

from . import _run

# metadata key -> kid3 frame name
KID3_FIELDS = {
    "artist": "artist",
    "title": "title",
}


def sanitize(value: Any) -> str:
    """Escape a value for a single-quoted kid3-cli command argument.

    kid3 unescapes `\\` and `\\'` inside quotes, so the written tag is the
    literal original text.
    """
    s = "" if value is None else str(value)
    return s.replace("\\", "\\\\").replace("'", "\\'")


class Kid3IO:
    """Write tags with `kid3-cli`.

    Only kid3's own command language is quoted here; the process itself is
    started from an argument list, so the values never meet a shell.
    """

    def __init__(self, kid3_bin: str = "kid3-cli"):
        self.kid3_bin = kid3_bin

    def build_argv(self, path: str, metadata: Mapping[str, Any]) -> list:
        argv = [self.kid3_bin]
        for key, frame in KID3_FIELDS.items():
            if key not in metadata or metadata[key] is None:
                continue
            argv += ["-c", f"set {frame} '{sanitize(metadata[key])}'"]
        argv += ["-c", "save", path]
        return argv

    def write(self, path: str, metadata: Mapping[str, Any]) -> None:
        _run.run(self.build_argv(path, metadata))
