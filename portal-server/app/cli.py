"""
Build page bundles from the asset manifest.

Sources are read from <source>/js and <source>/css. Only the app-owned files
(zmain.js, tailwind.css) live in app/web/static; the vendor files the
manifest lists (htmx.min.js, tailwindcss.js, flowbite.min.js,
swiper-bundle.min.js, choices.min.js, card.js, sweetalert2.all.min.js,
all.min.css, aos.css, choices.min.css, swiper-bundle.min.css) must be copied
into the same directories from their npm packages or CDN releases before
building. Until then a build reports them as missing source files.

Example:
    portal-assets --list
    portal-assets --source /srv/portal/assets --output build/bundles
    portal-assets --group js --page dashboard --source /srv/portal/assets
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Optional, Sequence

from app.core.config import get_settings, resolve_path
from app.core.logging import configure_logging
from app.modules.assets import AssetBundler, AssetError, AssetGroup, load_manifest


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Concatenate manifest entries into page bundles")
    parser.add_argument("--manifest", type=Path, default=None, help="JSON manifest (default: built-in manifest)")
    parser.add_argument("--source", type=Path, default=None, help="Directory holding js/ and css/ sources")
    parser.add_argument("--output", type=Path, default=None, help="Directory the bundles are written to")
    parser.add_argument("--group", type=AssetGroup.parse, choices=list(AssetGroup), default=None, help="js or css")
    parser.add_argument("--page", default=None, help="Build a single page key (requires --group)")
    parser.add_argument("--list", action="store_true", help="Print the manifest and exit")
    return parser


def run(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(settings)

    if args.page and not args.group:
        raise SystemExit("--page requires --group")

    manifest_path = args.manifest or settings.assets.manifest_path
    manifest = load_manifest(resolve_path(manifest_path) if manifest_path is not None else None)

    if args.list:
        print(json.dumps(manifest.to_mapping(), ensure_ascii=False, indent=2))
        return 0

    bundler = AssetBundler.from_settings(settings, manifest=manifest)
    if args.source:
        bundler.source_root = resolve_path(args.source)
    if args.output:
        bundler.bundle_root = resolve_path(args.output)
    if args.page:
        bundles = [bundler.build(args.group, args.page)]
    else:
        bundles = bundler.build_all(args.group)

    for bundle in bundles:
        print(f"[bundle] {bundle.name}: {len(bundle.files)} files, {bundle.size_bytes} bytes, sha256={bundle.checksum_sha256[:12]}")
    print(f"[done] {len(bundles)} bundle(s) written to {bundler.bundle_root}")
    return 0


def main() -> None:
    try:
        sys.exit(run())
    except AssetError as exc:
        sys.exit(f"[error] {exc}")
    except KeyboardInterrupt:
        sys.exit("aborted by user")


if __name__ == "__main__":
    main()
