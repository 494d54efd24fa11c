"""Asset domain specific exceptions."""


class AssetError(Exception):
    """Base class for asset manifest and bundling errors."""


class AssetManifestError(AssetError):
    """Raised when a manifest payload is malformed."""


class AssetNotFoundError(AssetError, LookupError):
    """Raised when a page key is not declared for the requested group."""

    def __init__(self, group: str, page_key: str) -> None:
        super().__init__(f"no {group} assets declared for page '{page_key}'")
        self.group = group
        self.page_key = page_key


class BundleError(AssetError):
    """Raised when a bundle cannot be built from its source files."""
