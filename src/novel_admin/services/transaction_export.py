"""CSV export of coin transactions."""

from __future__ import annotations

import csv
import io
from collections.abc import Iterable, Mapping
from datetime import date, datetime
from typing import Any

EXPORT_COLUMNS = ("Username", "Amount", "Type", "Description", "Transaction Date")

TYPE_LABELS = {
    "recharge": "充值",
    "unlock": "解锁",
    "gift": "打赏",
    "system": "系统赠送",
}


def type_label(transaction_type: str) -> str:
    return TYPE_LABELS.get(transaction_type, transaction_type)


def _format_timestamp(value: Any) -> str:
    if isinstance(value, datetime):
        return value.strftime("%Y-%m-%d %H:%M:%S")
    return "" if value is None else str(value)


def export_transactions_csv(transactions: Iterable[Mapping[str, Any]]) -> str:
    """Render transactions as CSV text.

    Each mapping carries ``username``, ``amount``, ``type``, ``description``
    and ``created_at``. Text cells are double-quoted with embedded quotes
    doubled, numeric cells are written bare, and lines are separated by
    ``\\n`` without a trailing newline.
    """
    buffer = io.StringIO()
    buffer.write(",".join(EXPORT_COLUMNS) + "\n")
    writer = csv.writer(buffer, quoting=csv.QUOTE_NONNUMERIC, lineterminator="\n")
    for item in transactions:
        writer.writerow(
            [
                item.get("username") or "",
                item["amount"],
                type_label(item["type"]),
                item.get("description") or "",
                _format_timestamp(item.get("created_at")),
            ]
        )
    return buffer.getvalue().rstrip("\n")


def export_filename(today: date) -> str:
    """Attachment name for an export produced on ``today``."""
    return f"coin_transactions_{today.isoformat()}.csv"
