"""Domain models for page assets."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any


class AssetGroup(str, Enum):
    JS = "js"
    CSS = "css"

    @classmethod
    def parse(cls, value: Any) -> "AssetGroup":
        """Case-insensitive lookup; raises ValueError for unknown groups."""
        if isinstance(value, cls):
            return value
        return cls(str(value).strip().lower())


@dataclass(frozen=True, slots=True)
class Bundle:
    group: AssetGroup
    page_key: str
    path: Path
    files: tuple[str, ...]
    checksum_sha256: str
    size_bytes: int

    @property
    def name(self) -> str:
        return self.path.name
