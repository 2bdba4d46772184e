"""Adjacent-swap reordering for collections with a dense ``sort_order``."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from novel_admin.services.errors import RecordNotFoundError
from novel_admin.services.gateway import DataGateway, Row

logger = logging.getLogger(__name__)


class OrderMaintainer:
    """Keeps ``sort_order`` of one collection a permutation of ``0..N-1``.

    New rows are appended at ``N``; deletions leave gaps that are not closed.
    """

    def __init__(self, gateway: DataGateway, collection: str, column: str = "sort_order") -> None:
        self.gateway = gateway
        self.collection = collection
        self.column = column

    def load(self) -> list[Row]:
        rows, _ = self.gateway.select(self.collection, ordering=[(self.column, True)])
        return rows

    def append_position(self) -> int:
        """Return the ``sort_order`` for a newly created row."""
        return self.gateway.count(self.collection)

    def move_up(self, record_id: str, records: Sequence[Row] | None = None) -> bool:
        return self._move(record_id, -1, records)

    def move_down(self, record_id: str, records: Sequence[Row] | None = None) -> bool:
        return self._move(record_id, 1, records)

    def _move(self, record_id: str, step: int, records: Sequence[Row] | None) -> bool:
        """Swap ``record_id`` with its neighbour ``step`` positions away.

        Returns False without writing when the row already sits at the edge
        or the neighbouring position is empty.
        """
        rows = list(records) if records is not None else self.load()
        current = next((row for row in rows if row["id"] == record_id), None)
        if current is None:
            raise RecordNotFoundError(self.collection, record_id)

        position = current[self.column]
        highest = max(row[self.column] for row in rows)
        if (step < 0 and position <= 0) or (step > 0 and position >= highest):
            return False

        target = position + step
        neighbour = next((row for row in rows if row[self.column] == target), None)
        if neighbour is None:
            logger.info(
                "No %s row at position %d; leaving %s in place",
                self.collection,
                target,
                record_id,
            )
            return False

        self.gateway.invoke_procedure(
            "swap_sort_order",
            {
                "p_collection": self.collection,
                "p_first_id": current["id"],
                "p_second_id": neighbour["id"],
            },
        )
        return True
