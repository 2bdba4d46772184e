"""Coin transaction ledger and coin package endpoints."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Annotated, Literal

from fastapi import APIRouter, Depends, File, Query, Response, UploadFile, status

from novel_admin.core.settings import settings
from novel_admin.db.time import utcnow
from novel_admin.models.coin import TRANSACTION_TYPES
from novel_admin.schemas.coin import (
    CoinPackagePayload,
    CoinPackageResponse,
    CoinTransactionResponse,
    UploadResponse,
)
from novel_admin.schemas.common import DeleteResponse, MoveResponse, Page
from novel_admin.services.gateway import DataGateway, Where, any_of
from novel_admin.services.ordering import OrderMaintainer
from novel_admin.services.transaction_export import (
    export_filename,
    export_transactions_csv,
    type_label,
)

from ..dependencies import (
    ConfirmDep,
    GatewayDep,
    PageQuery,
    SortOrder,
    StorageDep,
    delete_one,
    get_admin_session,
    page_of,
    page_window,
    search_pattern,
    toggle_flag,
)
from .uploads import store_image

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/coins", tags=["coins"], dependencies=[Depends(get_admin_session)])

PACKAGES = "coin_packages"
TransactionType = Literal["all", "recharge", "unlock", "gift", "system"]


def _transaction_filters(
    gateway: DataGateway,
    search: str | None,
    transaction_type: str,
    start: datetime | None,
    end: datetime | None,
) -> list:
    filters: list = []
    if search:
        pattern = search_pattern(search)
        users, _ = gateway.select("user_profiles", [Where("username", "ilike", pattern)], columns=["id"])
        clauses = [Where("description", "ilike", pattern)]
        if users:
            clauses.append(Where("user_id", "in", [user["id"] for user in users]))
        filters.append(any_of(*clauses))
    if transaction_type != "all":
        filters.append(Where("type", "eq", transaction_type))
    if start is not None:
        filters.append(Where("created_at", "gte", start))
    if end is not None:
        filters.append(Where("created_at", "lte", end))
    return filters


def _with_users(gateway: DataGateway, rows: list[dict]) -> list[dict]:
    gateway.embed(
        rows,
        collection="user_profiles",
        foreign_key="user_id",
        into="user",
        columns=["id", "username"],
    )
    for row in rows:
        row["type_label"] = type_label(row["type"])
    return rows


@router.get("/transactions", response_model=Page[CoinTransactionResponse])
async def list_transactions(
    gateway: GatewayDep,
    page: PageQuery = 1,
    search: str | None = None,
    transaction_type: Annotated[TransactionType, Query(alias="type")] = "all",
    start: datetime | None = None,
    end: datetime | None = None,
    sort: Literal["created_at", "amount"] = "created_at",
    order: SortOrder = "desc",
) -> dict:
    """Page through the coin ledger with search, type and date filters."""
    page_size = settings.page_size_default
    rows, total = gateway.select(
        "coin_transactions",
        _transaction_filters(gateway, search, transaction_type, start, end),
        ordering=[(sort, order == "asc")],
        window=page_window(page, page_size),
    )
    return page_of(_with_users(gateway, rows), total, page, page_size)


@router.get("/transactions/export")
async def export_transactions(
    gateway: GatewayDep,
    search: str | None = None,
    transaction_type: Annotated[TransactionType, Query(alias="type")] = "all",
    start: datetime | None = None,
    end: datetime | None = None,
    sort: Literal["created_at", "amount"] = "created_at",
    order: SortOrder = "desc",
) -> Response:
    """Download every transaction matching the filters as CSV."""
    rows, _ = gateway.select(
        "coin_transactions",
        _transaction_filters(gateway, search, transaction_type, start, end),
        ordering=[(sort, order == "asc")],
    )
    # Rows whose user profile is gone are left out.
    exported = [
        {**row, "username": row["user"]["username"]}
        for row in _with_users(gateway, rows)
        if row["user"] is not None
    ]
    body = export_transactions_csv(exported)
    filename = export_filename(utcnow().date())
    logger.info("Exported %d coin transactions", len(exported))
    return Response(
        content=body,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/types", response_model=list[str])
async def transaction_types() -> list[str]:
    return list(TRANSACTION_TYPES)


@router.get("/packages", response_model=list[CoinPackageResponse])
async def list_packages(gateway: GatewayDep) -> list[dict]:
    """Coin packages in display order."""
    return OrderMaintainer(gateway, PACKAGES).load()


@router.post("/packages", response_model=list[CoinPackageResponse], status_code=status.HTTP_201_CREATED)
async def create_package(payload: CoinPackagePayload, gateway: GatewayDep) -> list[dict]:
    maintainer = OrderMaintainer(gateway, PACKAGES)
    row = payload.model_dump()
    row["sort_order"] = maintainer.append_position()
    gateway.insert(PACKAGES, [row])
    return maintainer.load()


@router.put("/packages/{package_id}", response_model=list[CoinPackageResponse])
async def update_package(package_id: str, payload: CoinPackagePayload, gateway: GatewayDep) -> list[dict]:
    gateway.get(PACKAGES, package_id)
    patch = payload.model_dump(exclude_none=True)
    gateway.update(PACKAGES, patch, {"id": package_id})
    return OrderMaintainer(gateway, PACKAGES).load()


@router.delete("/packages/{package_id}", response_model=DeleteResponse, dependencies=[ConfirmDep])
async def delete_package(package_id: str, gateway: GatewayDep) -> dict:
    return delete_one(gateway, PACKAGES, package_id)


@router.post("/packages/{package_id}/toggle-active", response_model=CoinPackageResponse)
async def toggle_package(package_id: str, gateway: GatewayDep) -> dict:
    return toggle_flag(gateway, PACKAGES, package_id, "is_active")


@router.post("/packages/{package_id}/move-up", response_model=MoveResponse[CoinPackageResponse])
async def move_package_up(package_id: str, gateway: GatewayDep) -> dict:
    maintainer = OrderMaintainer(gateway, PACKAGES)
    moved = maintainer.move_up(package_id)
    return {"moved": moved, "items": maintainer.load()}


@router.post("/packages/{package_id}/move-down", response_model=MoveResponse[CoinPackageResponse])
async def move_package_down(package_id: str, gateway: GatewayDep) -> dict:
    maintainer = OrderMaintainer(gateway, PACKAGES)
    moved = maintainer.move_down(package_id)
    return {"moved": moved, "items": maintainer.load()}


@router.post("/packages/icon", response_model=UploadResponse, status_code=status.HTTP_201_CREATED)
async def upload_package_icon(
    storage: StorageDep,
    file: Annotated[UploadFile, File(description="Package icon, at most 2MB")],
) -> dict:
    """Store an icon image and return its public URL for use as ``icon_url``."""
    return await store_image(
        storage,
        file,
        bucket=settings.coin_icon_bucket,
        prefix="coin-package",
        max_bytes=settings.coin_icon_max_bytes,
    )
