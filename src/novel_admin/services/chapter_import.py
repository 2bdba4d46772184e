"""Parse chapter CSV files into rows ready for insertion."""

from __future__ import annotations

import csv
import io
import logging
import math
from typing import Any

from novel_admin.services.errors import ValidationFailure

logger = logging.getLogger(__name__)

CHAPTER_CSV_FIELDS = ("order", "title", "content", "is_vip", "publish_at")


def _parse_order(raw: str | None) -> float | int:
    """Numeric coercion of the ``order`` cell.

    A missing cell or non-numeric text yields NaN; a blank cell yields 0.
    """
    if raw is None:
        return math.nan
    text = raw.strip()
    if not text:
        return 0
    try:
        value = float(text)
    except ValueError:
        return math.nan
    if value.is_integer():
        return int(value)
    return value


def parse_chapter_csv(text: str, book_id: str | None) -> list[dict[str, Any]]:
    """Turn CSV ``text`` into chapter rows for ``book_id``.

    The header row names the fields ``order, title, content, is_vip,
    publish_at``. Blank lines are skipped. A non-numeric ``order`` becomes NaN
    and is passed on unchanged; the database decides whether to accept it.
    Blank titles are replaced with ``章节 <n>`` where ``n`` is the 1-based
    data row number.

    Raises:
        ValidationFailure: If no book is selected.
    """
    if not book_id:
        raise ValidationFailure("Select a book before importing chapters", field="book_id")

    reader = csv.DictReader(io.StringIO(text.lstrip("\ufeff")))
    chapters: list[dict[str, Any]] = []
    for index, record in enumerate(reader):
        content = record.get("content") or ""
        title = (record.get("title") or "").strip()
        chapters.append(
            {
                "book_id": book_id,
                "order": _parse_order(record.get("order")),
                "title": title or f"章节 {index + 1}",
                "content": content,
                "is_vip": str(record.get("is_vip")).lower() == "true",
                "publish_at": record.get("publish_at") or None,
                "word_count": len(content.split()),
            }
        )
    logger.debug("Parsed %d chapter rows for book %s", len(chapters), book_id)
    return chapters
