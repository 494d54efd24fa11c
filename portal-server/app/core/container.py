"""Simple dependency container for wiring core services."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from fastapi.templating import Jinja2Templates

from app.core.config import Settings, resolve_path
from app.modules.assets import AssetManifest, AssetUrlResolver, load_manifest
from app.web.errors import ErrorHandler, select_error_handler
from app.web.session import SessionManager


@dataclass(slots=True)
class ApplicationContainer:
    settings: Settings
    manifest: AssetManifest
    templates: Jinja2Templates
    asset_urls: AssetUrlResolver
    session_manager: SessionManager
    error_handler: ErrorHandler

    @property
    def static_dir(self) -> Path:
        return resolve_path(self.settings.static_dir)

    @property
    def bundle_dir(self) -> Path:
        return resolve_path(self.settings.assets.bundle_dir)


def build_container(settings: Settings) -> ApplicationContainer:
    manifest_path = settings.assets.manifest_path
    manifest = load_manifest(resolve_path(manifest_path) if manifest_path is not None else None)

    templates = Jinja2Templates(directory=str(resolve_path(settings.template_dir)))
    asset_urls = AssetUrlResolver.from_settings(settings, manifest)
    templates.env.globals["project_name"] = settings.project_name

    return ApplicationContainer(
        settings=settings,
        manifest=manifest,
        templates=templates,
        asset_urls=asset_urls,
        session_manager=SessionManager(settings),
        error_handler=select_error_handler(settings.environment, templates.env, settings.errors),
    )


__all__ = ["ApplicationContainer", "build_container", "resolve_path"]
