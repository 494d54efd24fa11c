"""Read-only view of the asset manifest."""
from fastapi import APIRouter, Depends, HTTPException, status

from app.api.deps import get_app_container
from app.core.container import ApplicationContainer
from app.modules.assets import AssetGroup, AssetNotFoundError
from app.schemas import AssetFilesResponse, ManifestResponse

router = APIRouter()


@router.get("", response_model=ManifestResponse, summary="Whole asset manifest")
async def get_manifest(container: ApplicationContainer = Depends(get_app_container)) -> ManifestResponse:
    return ManifestResponse(**container.manifest.to_mapping())


@router.get("/{group}/{page_key}", response_model=AssetFilesResponse, summary="Ordered files of one page bundle")
async def get_page_assets(
    group: str,
    page_key: str,
    container: ApplicationContainer = Depends(get_app_container),
) -> AssetFilesResponse:
    try:
        asset_group = AssetGroup.parse(group)
        files = container.manifest.files_for(asset_group, page_key)
        urls = container.asset_urls.urls(asset_group, page_key)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(AssetNotFoundError(group, page_key))) from exc
    except AssetNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return AssetFilesResponse(group=asset_group, page_key=page_key, files=list(files), urls=urls)
