"""Asset domain exports."""

from .exceptions import AssetError, AssetManifestError, AssetNotFoundError, BundleError
from .manifest import DEFAULT_MANIFEST, AssetManifest, load_manifest
from .models import AssetGroup, Bundle
from .service import AssetBundler, AssetUrlResolver, bundle_name

__all__ = [
    "AssetBundler",
    "AssetError",
    "AssetGroup",
    "AssetManifest",
    "AssetManifestError",
    "AssetNotFoundError",
    "AssetUrlResolver",
    "Bundle",
    "BundleError",
    "DEFAULT_MANIFEST",
    "bundle_name",
    "load_manifest",
]
