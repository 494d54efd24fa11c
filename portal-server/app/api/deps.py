"""Reusable FastAPI dependencies."""

from fastapi import Request

from app.core.container import ApplicationContainer


def get_app_container(request: Request) -> ApplicationContainer:
    return request.app.state.container


__all__ = ["get_app_container"]
