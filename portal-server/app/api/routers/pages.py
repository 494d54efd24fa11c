"""Server-rendered pages; each one loads the script bundle named after it."""
from dataclasses import dataclass

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from app.api.deps import get_app_container
from app.core.container import ApplicationContainer
from app.core.timezone import now
from app.schemas import HealthResponse

router = APIRouter()

STYLE_BUNDLE = "site"


@dataclass(frozen=True)
class Page:
    template: str
    script_bundle: str
    title: str


PAGES = {
    "homepage": Page("homepage.html", "homepage", "Início"),
    "about": Page("about.html", "nohomepage", "Sobre"),
    "payments": Page("payments.html", "pagamentos", "Pagamentos"),
    "dashboard": Page("dashboard.html", "dashboard", "Painel"),
}


def _render(request: Request, container: ApplicationContainer, page: Page) -> HTMLResponse:
    return container.templates.TemplateResponse(
        request,
        page.template,
        {
            "title": page.title,
            "scripts": container.asset_urls.urls("js", page.script_bundle),
            "styles": container.asset_urls.urls("css", STYLE_BUNDLE),
        },
    )


@router.get("/", response_class=HTMLResponse)
async def homepage(request: Request, container: ApplicationContainer = Depends(get_app_container)):
    return _render(request, container, PAGES["homepage"])


@router.get("/sobre", response_class=HTMLResponse)
async def about_page(request: Request, container: ApplicationContainer = Depends(get_app_container)):
    return _render(request, container, PAGES["about"])


@router.get("/pagamentos", response_class=HTMLResponse)
async def payments_page(request: Request, container: ApplicationContainer = Depends(get_app_container)):
    return _render(request, container, PAGES["payments"])


@router.get("/dashboard", response_class=HTMLResponse)
async def dashboard_page(request: Request, container: ApplicationContainer = Depends(get_app_container)):
    return _render(request, container, PAGES["dashboard"])


@router.get("/health", response_model=HealthResponse)
async def health(container: ApplicationContainer = Depends(get_app_container)) -> HealthResponse:
    settings = container.settings
    return HealthResponse(
        environment=settings.environment,
        timezone=settings.timezone,
        timestamp=now().isoformat(),
    )
