"""Forum category endpoints, including manual reordering."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from novel_admin.schemas.common import DeleteResponse, MoveResponse
from novel_admin.schemas.forum import ForumCategoryPayload, ForumCategoryResponse
from novel_admin.services.ordering import OrderMaintainer

from ..dependencies import ConfirmDep, GatewayDep, delete_one, get_admin_session, toggle_flag

router = APIRouter(
    prefix="/forum/categories",
    tags=["forum"],
    dependencies=[Depends(get_admin_session)],
)

COLLECTION = "forum_categories"


@router.get("/", response_model=list[ForumCategoryResponse])
async def list_categories(gateway: GatewayDep) -> list[dict]:
    """Categories in display order."""
    return OrderMaintainer(gateway, COLLECTION).load()


@router.post("/", response_model=ForumCategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(payload: ForumCategoryPayload, gateway: GatewayDep) -> dict:
    """Create a category at the end of the display order."""
    row = payload.model_dump()
    row["sort_order"] = OrderMaintainer(gateway, COLLECTION).append_position()
    return gateway.insert(COLLECTION, [row])[0]


@router.put("/{category_id}", response_model=ForumCategoryResponse)
async def update_category(
    category_id: str,
    payload: ForumCategoryPayload,
    gateway: GatewayDep,
) -> dict:
    gateway.get(COLLECTION, category_id)
    return gateway.update(COLLECTION, payload.model_dump(), {"id": category_id})[0]


@router.delete("/{category_id}", response_model=DeleteResponse, dependencies=[ConfirmDep])
async def delete_category(category_id: str, gateway: GatewayDep) -> dict:
    """Delete a category; its threads and their posts go with it."""
    return delete_one(gateway, COLLECTION, category_id)


@router.post("/{category_id}/toggle-active", response_model=ForumCategoryResponse)
async def toggle_category(category_id: str, gateway: GatewayDep) -> dict:
    return toggle_flag(gateway, COLLECTION, category_id, "is_active")


@router.post("/{category_id}/move-up", response_model=MoveResponse[ForumCategoryResponse])
async def move_category_up(category_id: str, gateway: GatewayDep) -> dict:
    maintainer = OrderMaintainer(gateway, COLLECTION)
    moved = maintainer.move_up(category_id)
    return {"moved": moved, "items": maintainer.load()}


@router.post("/{category_id}/move-down", response_model=MoveResponse[ForumCategoryResponse])
async def move_category_down(category_id: str, gateway: GatewayDep) -> dict:
    maintainer = OrderMaintainer(gateway, COLLECTION)
    moved = maintainer.move_down(category_id)
    return {"moved": moved, "items": maintainer.load()}
