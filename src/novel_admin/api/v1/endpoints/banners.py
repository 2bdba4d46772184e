"""Homepage banner endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, File, UploadFile, status

from novel_admin.core.settings import settings
from novel_admin.schemas.coin import UploadResponse
from novel_admin.schemas.common import DeleteResponse, MoveResponse
from novel_admin.schemas.site import BannerPayload, BannerResponse
from novel_admin.services.ordering import OrderMaintainer

from ..dependencies import (
    ConfirmDep,
    GatewayDep,
    StorageDep,
    delete_one,
    get_admin_session,
    toggle_flag,
)
from .uploads import store_image

router = APIRouter(prefix="/banners", tags=["banners"], dependencies=[Depends(get_admin_session)])

COLLECTION = "homepage_banners"


@router.get("/", response_model=list[BannerResponse])
async def list_banners(gateway: GatewayDep) -> list[dict]:
    return OrderMaintainer(gateway, COLLECTION).load()


@router.post("/", response_model=list[BannerResponse], status_code=status.HTTP_201_CREATED)
async def create_banner(payload: BannerPayload, gateway: GatewayDep) -> list[dict]:
    """Append a banner to the carousel and return the carousel."""
    maintainer = OrderMaintainer(gateway, COLLECTION)
    row = payload.model_dump()
    row["sort_order"] = maintainer.append_position()
    gateway.insert(COLLECTION, [row])
    return maintainer.load()


@router.put("/{banner_id}", response_model=list[BannerResponse])
async def update_banner(banner_id: str, payload: BannerPayload, gateway: GatewayDep) -> list[dict]:
    gateway.get(COLLECTION, banner_id)
    gateway.update(COLLECTION, payload.model_dump(), {"id": banner_id})
    return OrderMaintainer(gateway, COLLECTION).load()


@router.delete("/{banner_id}", response_model=DeleteResponse, dependencies=[ConfirmDep])
async def delete_banner(banner_id: str, gateway: GatewayDep) -> dict:
    return delete_one(gateway, COLLECTION, banner_id)


@router.post("/{banner_id}/toggle-active", response_model=BannerResponse)
async def toggle_banner(banner_id: str, gateway: GatewayDep) -> dict:
    return toggle_flag(gateway, COLLECTION, banner_id, "is_active")


@router.post("/{banner_id}/move-up", response_model=MoveResponse[BannerResponse])
async def move_banner_up(banner_id: str, gateway: GatewayDep) -> dict:
    maintainer = OrderMaintainer(gateway, COLLECTION)
    moved = maintainer.move_up(banner_id)
    return {"moved": moved, "items": maintainer.load()}


@router.post("/{banner_id}/move-down", response_model=MoveResponse[BannerResponse])
async def move_banner_down(banner_id: str, gateway: GatewayDep) -> dict:
    maintainer = OrderMaintainer(gateway, COLLECTION)
    moved = maintainer.move_down(banner_id)
    return {"moved": moved, "items": maintainer.load()}


@router.post("/image", response_model=UploadResponse, status_code=status.HTTP_201_CREATED)
async def upload_banner_image(
    storage: StorageDep,
    file: Annotated[UploadFile, File(description="Banner image, at most 5MB")],
) -> dict:
    """Store a banner image and return its public URL for use as ``image_url``."""
    return await store_image(
        storage,
        file,
        bucket=settings.banner_bucket,
        prefix="banner",
        max_bytes=settings.banner_max_bytes,
    )
