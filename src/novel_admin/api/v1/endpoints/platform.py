"""Platform-wide settings and site notification endpoints."""

from __future__ import annotations

import json
import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query, status

from novel_admin.core.settings import settings
from novel_admin.models.site import GLOBAL_SETTINGS_KEY
from novel_admin.schemas.site import (
    NotificationCreate,
    NotificationResponse,
    PlatformSettingsPayload,
    PlatformSettingsResponse,
)
from novel_admin.schemas.user import RecipientResponse
from novel_admin.services.gateway import Where

from ..dependencies import GatewayDep, get_admin_session, search_pattern

logger = logging.getLogger(__name__)

router = APIRouter(tags=["platform"], dependencies=[Depends(get_admin_session)])


def _json_value(raw: str | None) -> dict[str, Any]:
    if not raw:
        return {}
    try:
        value = json.loads(raw)
    except json.JSONDecodeError:
        logger.warning("Ignoring malformed JSON in platform settings")
        return {}
    return value if isinstance(value, dict) else {}


def resolve_settings(row: dict[str, Any] | None) -> dict[str, Any]:
    """Read coin rate and author share, preferring dedicated columns over JSON.

    Missing or unparsable values fall back to the configured defaults.
    """
    if row is None:
        return {
            "coin_to_usd": settings.default_coin_to_usd,
            "author_share_percent": settings.default_author_share_percent,
            "updated_at": None,
        }
    fallback = _json_value(row.get("value"))

    def pick(name: str, default: Any, cast: Any) -> Any:
        for candidate in (row.get(name), fallback.get(name)):
            if candidate in (None, ""):
                continue
            try:
                return cast(candidate)
            except (TypeError, ValueError):
                continue
        return default

    return {
        "coin_to_usd": pick("coin_to_usd", settings.default_coin_to_usd, float),
        "author_share_percent": pick(
            "author_share_percent",
            settings.default_author_share_percent,
            lambda value: int(float(value)),
        ),
        "updated_at": row.get("updated_at"),
    }


@router.get("/platform-settings", response_model=PlatformSettingsResponse)
async def get_platform_settings(gateway: GatewayDep) -> dict:
    rows, _ = gateway.select("platform_settings", {"key": GLOBAL_SETTINGS_KEY})
    return resolve_settings(rows[0] if rows else None)


@router.put("/platform-settings", response_model=PlatformSettingsResponse)
async def update_platform_settings(payload: PlatformSettingsPayload, gateway: GatewayDep) -> dict:
    """Write both the dedicated columns and the JSON ``value`` copy."""
    row = gateway.upsert(
        "platform_settings",
        {
            "key": GLOBAL_SETTINGS_KEY,
            "coin_to_usd": str(payload.coin_to_usd),
            "author_share_percent": str(payload.author_share_percent),
            "value": json.dumps(payload.model_dump()),
        },
        key="key",
    )
    logger.info(
        "Platform settings updated: coin_to_usd=%s author_share_percent=%s",
        payload.coin_to_usd,
        payload.author_share_percent,
    )
    return resolve_settings(row)


@router.get("/notifications/recipients", response_model=list[RecipientResponse])
async def search_recipients(
    gateway: GatewayDep,
    q: Annotated[str, Query(description="Username fragment")] = "",
) -> list[dict]:
    """Users whose name contains ``q``; queries shorter than two characters match nobody."""
    term = q.strip()
    if len(term) < 2:
        return []
    rows, _ = gateway.select(
        "user_profiles",
        [Where("username", "ilike", search_pattern(term))],
        ordering=[("username", True)],
        window=(0, settings.recipient_search_limit - 1),
        columns=["id", "username"],
    )
    return rows


@router.post("/notifications", response_model=NotificationResponse, status_code=status.HTTP_201_CREATED)
async def send_notification(payload: NotificationCreate, gateway: GatewayDep) -> dict:
    """Send an in-site message to one user or, without ``user_id``, to everyone."""
    if payload.user_id is not None:
        gateway.get("user_profiles", payload.user_id)
    row = payload.model_dump()
    row["is_read"] = False
    created = gateway.insert("site_notifications", [row])[0]
    logger.info("Notification %s sent to %s", created["id"], payload.user_id or "all users")
    return created
