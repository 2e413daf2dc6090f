from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class RecognizedData:
    artist: str
    title: str

    def as_tags(self) -> Dict[str, Any]:
        """Metadata mapping understood by the tag writers."""
        return {"artist": self.artist, "title": self.title}
