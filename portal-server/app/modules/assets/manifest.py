"""Static manifest describing which source files compose each page bundle."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Optional, Union

from .exceptions import AssetManifestError, AssetNotFoundError
from .models import AssetGroup

logger = logging.getLogger(__name__)

# Order inside each list is the load order; base libraries must precede
# the scripts that depend on them.
DEFAULT_MANIFEST: Dict[str, Dict[str, List[str]]] = {
    "js": {
        "homepage": ["htmx.min.js", "tailwindcss.js", "flowbite.min.js", "swiper-bundle.min.js", "zmain.js"],
        "nohomepage": ["htmx.min.js", "tailwindcss.js", "flowbite.min.js", "zmain.js"],
        "pagamentos": ["htmx.min.js", "tailwindcss.js", "flowbite.min.js", "choices.min.js", "card.js", "zmain.js"],
        "dashboard": [
            "htmx.min.js",
            "tailwindcss.js",
            "flowbite.min.js",
            "choices.min.js",
            "sweetalert2.all.min.js",
            "zmain.js",
        ],
    },
    "css": {
        "site": ["all.min.css", "aos.css", "choices.min.css", "swiper-bundle.min.css", "tailwind.css"],
    },
}


class AssetManifest:
    """Read-only mapping of ``group -> page key -> ordered file names``."""

    __slots__ = ("_groups",)

    def __init__(self, groups: Mapping[AssetGroup, Mapping[str, tuple[str, ...]]]) -> None:
        frozen = {
            group: MappingProxyType({page: tuple(files) for page, files in pages.items()})
            for group, pages in groups.items()
        }
        object.__setattr__(self, "_groups", MappingProxyType(frozen))

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("AssetManifest is immutable")

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "AssetManifest":
        if not isinstance(payload, Mapping):
            raise AssetManifestError("manifest root must be an object")

        groups: Dict[AssetGroup, Dict[str, tuple[str, ...]]] = {}
        for raw_group, pages in payload.items():
            try:
                group = AssetGroup.parse(raw_group)
            except ValueError as exc:
                raise AssetManifestError(f"unknown asset group '{raw_group}'") from exc
            if not isinstance(pages, Mapping):
                raise AssetManifestError(f"group '{group.value}' must map page keys to file lists")

            parsed: Dict[str, tuple[str, ...]] = {}
            for page_key, files in pages.items():
                parsed[str(page_key)] = _parse_files(group, str(page_key), files)
            groups[group] = parsed
        return cls(groups)

    def to_mapping(self) -> Dict[str, Dict[str, List[str]]]:
        return {
            group.value: {page: list(files) for page, files in pages.items()}
            for group, pages in self._groups.items()
        }

    def groups(self) -> tuple[AssetGroup, ...]:
        return tuple(self._groups)

    def pages(self, group: Union[AssetGroup, str]) -> tuple[str, ...]:
        try:
            pages = self._groups.get(AssetGroup.parse(group))
        except ValueError:
            return ()
        if pages is None:
            return ()
        return tuple(pages)

    def files_for(self, group: Union[AssetGroup, str], page_key: str) -> tuple[str, ...]:
        try:
            resolved = AssetGroup.parse(group)
        except ValueError as exc:
            raise AssetNotFoundError(str(group), page_key) from exc
        pages = self._groups.get(resolved)
        if pages is None or page_key not in pages:
            raise AssetNotFoundError(resolved.value, page_key)
        return pages[page_key]

    def __contains__(self, item: object) -> bool:
        if not isinstance(item, tuple) or len(item) != 2:
            return False
        group, page_key = item
        try:
            self.files_for(group, page_key)
        except AssetNotFoundError:
            return False
        return True

    def __repr__(self) -> str:
        counts = ", ".join(f"{group.value}={len(pages)}" for group, pages in self._groups.items())
        return f"AssetManifest({counts})"


def _parse_files(group: AssetGroup, page_key: str, files: Any) -> tuple[str, ...]:
    if isinstance(files, (str, bytes)) or not isinstance(files, (list, tuple)):
        raise AssetManifestError(f"{group.value}/{page_key} must be a list of file names")

    seen: set[str] = set()
    for name in files:
        if not isinstance(name, str) or not name.strip():
            raise AssetManifestError(f"{group.value}/{page_key} contains an empty file name")
        if name in seen:
            raise AssetManifestError(f"{group.value}/{page_key} lists '{name}' more than once")
        seen.add(name)
    return tuple(files)


def load_manifest(path: Optional[Path] = None) -> AssetManifest:
    """Build the manifest from a JSON file, or the built-in default."""
    if path is None:
        return AssetManifest.from_mapping(DEFAULT_MANIFEST)

    if not path.exists():
        raise AssetManifestError(f"manifest file not found: {path}")
    try:
        with path.open("r", encoding="utf-8") as fh:
            payload = json.load(fh)
    except json.JSONDecodeError as exc:
        raise AssetManifestError(f"manifest file is not valid JSON: {path}") from exc

    manifest = AssetManifest.from_mapping(payload)
    logger.info("Loaded asset manifest from %s: %r", path, manifest)
    return manifest
