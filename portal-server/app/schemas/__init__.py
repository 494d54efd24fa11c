"""Pydantic schemas used across the project."""
from typing import Dict, List

from pydantic import BaseModel

from app.core.config import Environment
from app.modules.assets import AssetGroup


class HealthResponse(BaseModel):
    status: str = "ok"
    environment: Environment
    timezone: str
    timestamp: str


class AssetFilesResponse(BaseModel):
    group: AssetGroup
    page_key: str
    files: List[str]
    urls: List[str]


class ManifestResponse(BaseModel):
    js: Dict[str, List[str]] = {}
    css: Dict[str, List[str]] = {}
