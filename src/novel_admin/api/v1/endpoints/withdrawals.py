"""Author withdrawal review endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from novel_admin.db.time import utcnow
from novel_admin.schemas.withdraw import MarkPaidRequest, WithdrawRequestResponse
from novel_admin.services.gateway import DataGateway, Where

from ..dependencies import GatewayDep, get_admin_session

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/withdrawals", tags=["withdrawals"], dependencies=[Depends(get_admin_session)])


def _with_authors(gateway: DataGateway, rows: list[dict]) -> list[dict]:
    """Embed each request's author and the author's payment accounts."""
    gateway.embed(
        rows,
        collection="user_profiles",
        foreign_key="author_id",
        into="author",
        columns=["id", "username"],
    )
    author_ids = sorted({row["author_id"] for row in rows})
    accounts: dict[str, list[dict]] = {}
    if author_ids:
        found, _ = gateway.select("author_payment_accounts", [Where("author_id", "in", author_ids)])
        for account in found:
            accounts.setdefault(account["author_id"], []).append(account)
    for row in rows:
        if row["author"] is not None:
            row["author"]["payment_accounts"] = accounts.get(row["author_id"], [])
    return rows


@router.get("/", response_model=list[WithdrawRequestResponse])
async def list_withdrawals(gateway: GatewayDep) -> list[dict]:
    """All withdrawal requests, newest first."""
    rows, _ = gateway.select("withdraw_requests", ordering=[("created_at", False)])
    return _with_authors(gateway, rows)


@router.post("/{request_id}/paid", response_model=WithdrawRequestResponse)
async def mark_paid(request_id: str, payload: MarkPaidRequest, gateway: GatewayDep) -> dict:
    """Record that a payout was sent, with its method and reference."""
    gateway.get("withdraw_requests", request_id)
    rows = gateway.update(
        "withdraw_requests",
        {
            "paid_at": utcnow(),
            "payment_method": payload.payment_method,
            "payment_reference": payload.payment_reference,
        },
        {"id": request_id},
    )
    logger.info("Withdrawal %s marked paid via %s", request_id, payload.payment_method)
    return _with_authors(gateway, rows)[0]
