import json

import pytest
from fastapi import Request
from fastapi.testclient import TestClient

from app.core.config import AssetSettings, Settings
from app.main import create_app
from app.web.exceptions import HttpError


@pytest.fixture
def make_settings(tmp_path):
    def factory(environment="development", **overrides):
        overrides.setdefault("assets", AssetSettings(bundle_dir=tmp_path / "bundles"))
        return Settings(_env_file=None, environment=environment, **overrides)

    return factory


def _install_test_routes(app):
    @app.get("/boom")
    async def boom():
        raise RuntimeError("kaboom")

    @app.get("/missing")
    async def missing():
        raise HttpError("Página não encontrada", 404)

    @app.get("/zero-code")
    async def zero_code():
        raise HttpError("internal detail", 0)

    @app.get("/whoami")
    async def whoami(request: Request):
        return {"sid": request.session.get("sid")}


@pytest.fixture
def make_client(make_settings):
    def factory(environment="development", **overrides):
        app = create_app(make_settings(environment, **overrides))
        _install_test_routes(app)
        return TestClient(app)

    return factory


@pytest.fixture
def source_tree(tmp_path):
    """Small js/css source directory plus a JSON manifest describing it."""
    root = tmp_path / "static"
    (root / "js").mkdir(parents=True)
    (root / "css").mkdir(parents=True)
    (root / "js" / "base.js").write_text("var base = 1;\n", encoding="utf-8")
    (root / "js" / "plugin.js").write_text("base.plugin = true;", encoding="utf-8")
    (root / "js" / "page.js").write_text("// page\n", encoding="utf-8")
    (root / "css" / "reset.css").write_text("* { margin: 0; }\n", encoding="utf-8")

    manifest = tmp_path / "bundler.json"
    manifest.write_text(
        json.dumps(
            {
                "js": {"home": ["base.js", "plugin.js", "page.js"], "bare": ["base.js"]},
                "css": {"site": ["reset.css"]},
            }
        ),
        encoding="utf-8",
    )
    return root, manifest
