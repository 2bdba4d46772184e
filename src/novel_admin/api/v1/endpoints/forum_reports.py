"""Forum report handling endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from novel_admin.core.settings import settings
from novel_admin.models.forum import REPORT_TARGET_POST
from novel_admin.schemas.common import Page
from novel_admin.schemas.forum import ForumReportDeleteResponse, ForumReportResponse
from novel_admin.services.gateway import Where

from ..dependencies import ConfirmDep, GatewayDep, PageQuery, get_admin_session, page_of, page_window

router = APIRouter(
    prefix="/forum/reports",
    tags=["forum"],
    dependencies=[Depends(get_admin_session)],
)


@router.get("/", response_model=Page[ForumReportResponse])
async def list_forum_reports(gateway: GatewayDep, page: PageQuery = 1) -> dict:
    """Page through reports, newest first; post reports include the post content."""
    page_size = settings.page_size_default
    rows, total = gateway.select(
        "forum_reports",
        ordering=[("created_at", False)],
        window=page_window(page, page_size),
    )
    gateway.embed(
        rows,
        collection="user_profiles",
        foreign_key="reporter_id",
        into="reporter",
        columns=["id", "username"],
    )

    post_ids = [row["target_id"] for row in rows if row["target_type"] == REPORT_TARGET_POST]
    posts: dict[str, dict] = {}
    if post_ids:
        found, _ = gateway.select(
            "forum_posts",
            [Where("id", "in", post_ids)],
            columns=["id", "content"],
        )
        posts = {post["id"]: post for post in found}
    for row in rows:
        post = posts.get(row["target_id"]) if row["target_type"] == REPORT_TARGET_POST else None
        row["target_info"] = {"content": post["content"]} if post else None
    return page_of(rows, total, page, page_size)


@router.delete("/{report_id}", response_model=ForumReportDeleteResponse, dependencies=[ConfirmDep])
async def delete_reported_content(report_id: str, gateway: GatewayDep) -> dict:
    """Delete the reported post (if any) and the report in one transaction."""
    return gateway.invoke_procedure("delete_reported_content", {"p_report_id": report_id})
