from __future__ import annotations

from typing import Any, Mapping

import music_tag

from songtag import logger as log

# metadata key -> music_tag key
MUSIC_TAG_FIELDS = {
    "artist": "artist",
    "title": "tracktitle",
}


class MusicTagIO:
    """In-process alternative to kid3-cli, backed by the `music_tag` library."""

    def write(self, path: str, metadata: Mapping[str, Any]) -> None:
        f = music_tag.load_file(path)
        if f is None:
            raise ValueError(f"music_tag cannot open {path}")

        for key, tag in MUSIC_TAG_FIELDS.items():
            val = metadata.get(key)
            if val is None:
                continue
            f[tag] = str(val)
            log.debug(f"[TAG-WRITE] {path}: {tag}={val!r}")

        f.save()
