from typing import Optional

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from app import __version__
from app.api import create_api_router
from app.api.routers import pages
from app.core.config import Settings, get_settings
from app.core.container import build_container
from app.core.logging import configure_logging
from app.core.timezone import set_default_timezone
from app.web.front_controller import FrontController, http_error_handler


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)
    # before anything time-sensitive runs
    set_default_timezone(settings.timezone)

    container = build_container(settings)

    app = FastAPI(
        title=settings.project_name,
        version=__version__,
        docs_url=None if settings.is_production else "/docs",
        redoc_url=None,
        openapi_url=None if settings.is_production else "/openapi.json",
    )
    app.state.container = container

    # The session middleware is added last so it wraps the front controller.
    app.add_middleware(
        FrontController,
        session_manager=container.session_manager,
        error_handler=container.error_handler,
    )
    container.session_manager.install(app)
    app.add_exception_handler(
        StarletteHTTPException,
        http_error_handler(container.error_handler, settings.api_prefix),
    )

    if container.static_dir.exists():
        app.mount("/static", StaticFiles(directory=str(container.static_dir)), name="static")
    if settings.use_bundles:
        container.bundle_dir.mkdir(parents=True, exist_ok=True)
        app.mount(settings.assets.bundle_url, StaticFiles(directory=str(container.bundle_dir)), name="bundles")

    app.include_router(create_api_router(settings.api_prefix))
    app.include_router(pages.router)

    return app


app = create_app()
