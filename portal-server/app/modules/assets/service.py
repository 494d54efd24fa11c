"""Bundling service: concatenates manifest entries into one file per page."""

from __future__ import annotations

import hashlib
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from app.core.config import Settings, get_settings, resolve_path

from .exceptions import AssetNotFoundError, BundleError
from .manifest import AssetManifest, load_manifest
from .models import AssetGroup, Bundle

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024


def bundle_name(group: Union[AssetGroup, str], page_key: str) -> str:
    return f"{page_key}.{AssetGroup.parse(group).value}"


@dataclass(slots=True)
class AssetBundler:
    manifest: AssetManifest
    source_root: Path
    bundle_root: Path

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None, manifest: Optional[AssetManifest] = None) -> "AssetBundler":
        settings = settings or get_settings()
        if manifest is None:
            path = settings.assets.manifest_path
            manifest = load_manifest(resolve_path(path) if path is not None else None)
        return cls(
            manifest=manifest,
            source_root=resolve_path(settings.assets.source_dir),
            bundle_root=resolve_path(settings.assets.bundle_dir),
        )

    def source_path(self, group: AssetGroup, file_name: str) -> Path:
        return self.source_root / group.value / file_name

    def bundle_path(self, group: Union[AssetGroup, str], page_key: str) -> Path:
        return self.bundle_root / bundle_name(group, page_key)

    def build(self, group: Union[AssetGroup, str], page_key: str) -> Bundle:
        group = _as_group(group, page_key)
        files = self.manifest.files_for(group, page_key)

        missing = [name for name in files if not self.source_path(group, name).is_file()]
        if missing:
            raise BundleError(f"{group.value}/{page_key}: missing source files: {', '.join(missing)}")

        self.bundle_root.mkdir(parents=True, exist_ok=True)
        target_path = self.bundle_path(group, page_key)
        tmp_path = target_path.with_name(f".{target_path.name}.{os.urandom(4).hex()}.tmp")

        hasher = hashlib.sha256()
        total_size = 0
        try:
            with tmp_path.open("wb") as buffer:
                for name in files:
                    header = f"/* {name} */\n".encode("utf-8")
                    for chunk in _iter_source(self.source_path(group, name), header):
                        buffer.write(chunk)
                        hasher.update(chunk)
                        total_size += len(chunk)
            tmp_path.replace(target_path)
        finally:
            tmp_path.unlink(missing_ok=True)

        logger.info("Built bundle %s (%d files, %d bytes)", target_path.name, len(files), total_size)
        return Bundle(
            group=group,
            page_key=page_key,
            path=target_path,
            files=files,
            checksum_sha256=hasher.hexdigest(),
            size_bytes=total_size,
        )

    def build_all(self, group: Union[AssetGroup, str, None] = None) -> list[Bundle]:
        groups = self.manifest.groups() if group is None else (_as_group(group, ""),)
        return [self.build(item, page_key) for item in groups for page_key in self.manifest.pages(item)]


def _iter_source(path: Path, header: bytes):
    yield header
    last = b""
    with path.open("rb") as stream:
        while True:
            chunk = stream.read(CHUNK_SIZE)
            if not chunk:
                break
            last = chunk
            yield chunk
    # each source ends on its own line
    if not last.endswith(b"\n"):
        yield b"\n"


@dataclass(slots=True)
class AssetUrlResolver:
    """Builds the URLs templates use to reference a page's assets."""

    manifest: AssetManifest
    use_bundles: bool
    static_url: str = "/static"
    bundle_url: str = "/bundles"
    version: Optional[str] = None

    @classmethod
    def from_settings(cls, settings: Settings, manifest: AssetManifest) -> "AssetUrlResolver":
        return cls(
            manifest=manifest,
            use_bundles=settings.use_bundles,
            bundle_url=settings.assets.bundle_url,
            version=settings.version,
        )

    def urls(self, group: Union[AssetGroup, str], page_key: str) -> list[str]:
        group = _as_group(group, page_key)
        files = self.manifest.files_for(group, page_key)
        if self.use_bundles:
            return [self._with_version(f"{self.bundle_url.rstrip('/')}/{bundle_name(group, page_key)}")]
        return [self._with_version(f"{self.static_url.rstrip('/')}/{group.value}/{name}") for name in files]

    def _with_version(self, url: str) -> str:
        if not self.version:
            return url
        return f"{url}?v={self.version}"


def _as_group(group: Union[AssetGroup, str], page_key: str) -> AssetGroup:
    try:
        return AssetGroup.parse(group)
    except ValueError as exc:
        raise AssetNotFoundError(str(group), page_key) from exc
