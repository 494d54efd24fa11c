import logging
import os
from zoneinfo import ZoneInfoNotFoundError

import pytest

from app.core.timezone import get_default_timezone

FALLBACK = "Erro ao processar requisição"


def _error_records(caplog):
    return [r for r in caplog.records if r.name == "app.web.errors" and r.levelno == logging.ERROR]


def test_pages_render_with_their_bundles(make_client):
    client = make_client()

    resp = client.get("/dashboard")

    assert resp.status_code == 200
    body = resp.text
    assert "/static/js/sweetalert2.all.min.js" in body
    assert body.index("htmx.min.js") < body.index("flowbite.min.js") < body.index("zmain.js")
    assert "/static/css/tailwind.css" in body


@pytest.mark.parametrize(
    "path, marker",
    [("/", "swiper-bundle.min.js"), ("/sobre", "flowbite.min.js"), ("/pagamentos", "card.js")],
)
def test_each_page_loads_its_script_bundle(make_client, path, marker):
    resp = make_client().get(path)
    assert resp.status_code == 200
    assert marker in resp.text


def test_production_pages_reference_bundles(make_client):
    resp = make_client("prod").get("/pagamentos")

    assert resp.status_code == 200
    assert "/bundles/pagamentos.js?v=" in resp.text
    assert "/bundles/site.css?v=" in resp.text
    assert "/static/js/card.js" not in resp.text


def test_session_is_started_once_and_resumed(make_client):
    client = make_client()

    first = client.get("/whoami").json()["sid"]
    second = client.get("/whoami").json()["sid"]

    assert first
    assert first == second
    assert "portal_session" in client.cookies


def test_timezone_is_fixed_at_startup(make_client):
    make_client(timezone="America/Sao_Paulo")

    assert os.environ["TZ"] == "America/Sao_Paulo"
    assert get_default_timezone().key == "America/Sao_Paulo"


def test_unknown_timezone_prevents_startup(make_client):
    with pytest.raises(ZoneInfoNotFoundError):
        make_client(timezone="Mars/Olympus_Mons")


def test_development_errors_use_debug_page(make_client, caplog):
    caplog.set_level(logging.ERROR, logger="app.web.errors")

    resp = make_client("development").get("/boom")

    assert resp.status_code == 500
    assert resp.headers["X-Error-Handler"] == "debug"
    assert "kaboom" in resp.text and "Traceback" in resp.text
    assert not any(r.getMessage().startswith("Error: ") for r in _error_records(caplog))


def test_production_error_with_code(make_client, caplog):
    caplog.set_level(logging.ERROR, logger="app.web.errors")

    resp = make_client("prod").get("/missing")

    assert resp.status_code == 404
    assert resp.headers["X-Error-Handler"] == "production"
    assert "Página não encontrada" in resp.text
    assert len(_error_records(caplog)) == 1


def test_production_error_without_code(make_client, caplog):
    caplog.set_level(logging.ERROR, logger="app.web.errors")
    client = make_client("prod")

    resp = client.get("/boom")

    assert resp.status_code == 500
    assert FALLBACK in resp.text
    assert "kaboom" not in resp.text and "Traceback" not in resp.text
    records = _error_records(caplog)
    assert len(records) == 1
    assert "kaboom" in records[0].getMessage()
    assert "Traceback" in records[0].getMessage()


def test_production_zero_code_counts_as_no_code(make_client):
    resp = make_client("prod").get("/zero-code")

    assert resp.status_code == 500
    assert FALLBACK in resp.text
    assert "internal detail" not in resp.text


def test_unknown_route_goes_through_error_handler(make_client):
    resp = make_client("prod").get("/does-not-exist")

    assert resp.status_code == 404
    assert resp.headers["X-Error-Handler"] == "production"
    assert "<title>Error</title>" in resp.text


def test_session_cookie_survives_error_response(make_client):
    client = make_client("prod")

    client.get("/boom")

    assert "portal_session" in client.cookies


def test_health(make_client):
    data = make_client("prod").get("/health").json()

    assert data["status"] == "ok"
    assert data["environment"] == "production"
    assert data["timezone"] == "America/Sao_Paulo"


def test_api_lists_page_assets(make_client):
    client = make_client()

    resp = client.get("/api/assets/css/site")

    assert resp.status_code == 200
    assert resp.json()["files"] == ["all.min.css", "aos.css", "choices.min.css", "swiper-bundle.min.css", "tailwind.css"]
    assert len(resp.json()["urls"]) == 5


def test_api_missing_page_is_json_404(make_client):
    resp = make_client("prod").get("/api/assets/js/site")

    assert resp.status_code == 404
    assert "site" in resp.json()["detail"]


def test_api_returns_whole_manifest(make_client):
    data = make_client().get("/api/assets").json()
    assert list(data["js"]) == ["homepage", "nohomepage", "pagamentos", "dashboard"]


def test_api_group_is_case_insensitive(make_client):
    client = make_client("prod")

    resp = client.get("/api/assets/JS/dashboard")

    assert resp.status_code == 200
    data = resp.json()
    assert data["group"] == "js"
    assert data["files"][-1] == "zmain.js"
    assert data["urls"][0].startswith("/bundles/dashboard.js")


def test_api_unknown_group_is_json_404(make_client):
    resp = make_client().get("/api/assets/fonts/dashboard")

    assert resp.status_code == 404
    assert "fonts" in resp.json()["detail"]


def test_method_not_allowed_keeps_allow_header(make_client):
    resp = make_client("prod").post("/health")

    assert resp.status_code == 405
    assert resp.headers["X-Error-Handler"] == "production"
    assert "GET" in resp.headers["allow"]
