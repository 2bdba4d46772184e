"""Genre and short-story tag endpoints.

Both label sets share one shape, so a single factory builds their routers.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from novel_admin.schemas.book import TaxonomyPayload, TaxonomyResponse
from novel_admin.schemas.common import DeleteResponse
from novel_admin.services.gateway import DataGateway

from ..dependencies import ConfirmDep, GatewayDep, delete_one, get_admin_session


def _list(gateway: DataGateway, collection: str) -> list[dict]:
    rows, _ = gateway.select(collection, ordering=[("name", True)])
    return rows


def build_taxonomy_router(prefix: str, collection: str, tag: str) -> APIRouter:
    """Create list / create / edit / delete routes for ``collection``."""
    taxonomy_router = APIRouter(
        prefix=prefix,
        tags=[tag],
        dependencies=[Depends(get_admin_session)],
    )

    @taxonomy_router.get("/", response_model=list[TaxonomyResponse])
    async def list_labels(gateway: GatewayDep) -> list[dict]:
        return _list(gateway, collection)

    @taxonomy_router.post(
        "/",
        response_model=list[TaxonomyResponse],
        status_code=status.HTTP_201_CREATED,
    )
    async def create_label(payload: TaxonomyPayload, gateway: GatewayDep) -> list[dict]:
        gateway.insert(collection, [payload.model_dump()])
        return _list(gateway, collection)

    @taxonomy_router.put("/{label_id}", response_model=list[TaxonomyResponse])
    async def update_label(label_id: str, payload: TaxonomyPayload, gateway: GatewayDep) -> list[dict]:
        gateway.get(collection, label_id)
        gateway.update(collection, payload.model_dump(), {"id": label_id})
        return _list(gateway, collection)

    @taxonomy_router.delete(
        "/{label_id}",
        response_model=DeleteResponse,
        dependencies=[ConfirmDep],
    )
    async def delete_label(label_id: str, gateway: GatewayDep) -> dict:
        return delete_one(gateway, collection, label_id)

    return taxonomy_router


genres_router = build_taxonomy_router("/genres", "genres", "genres")
short_story_tags_router = build_taxonomy_router(
    "/short-story-tags",
    "short_story_tags",
    "short-story-tags",
)
