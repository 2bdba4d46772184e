# tests/test_gateway.py
from datetime import datetime

import pytest
from sqlalchemy.exc import OperationalError

from novel_admin.models import Genre
from novel_admin.services.errors import (
    ConflictError,
    DataAccessError,
    ProcedureError,
    RecordNotFoundError,
    ValidationFailure,
)
from novel_admin.services.gateway import DataGateway, Where, any_of
from novel_admin.services.procedures import ProcedureRegistry


def _books(gateway: DataGateway, *titles: str) -> list[dict]:
    return gateway.insert("books", [{"title": title, "author_name": "Writer"} for title in titles])


def test_insert_returns_rows_with_defaults(gateway: DataGateway) -> None:
    (row,) = _books(gateway, "Dune")

    assert row["id"]
    assert row["title"] == "Dune"
    assert row["is_internal"] is False
    assert row["status"] == "ongoing"


def test_select_counts_before_window(gateway: DataGateway) -> None:
    _books(gateway, "A", "B", "C", "D", "E")

    rows, total = gateway.select("books", ordering=[("title", True)], window=(1, 2))

    assert total == 5
    assert [row["title"] for row in rows] == ["B", "C"]


def test_select_filters_with_any_of(gateway: DataGateway) -> None:
    gateway.insert(
        "books",
        [
            {"title": "Sea of Stars", "author_name": "Lee"},
            {"title": "Forest", "author_name": "Starling"},
            {"title": "Desert", "author_name": "Moss"},
        ],
    )

    rows, total = gateway.select(
        "books",
        [any_of(Where("title", "ilike", "%star%"), Where("author_name", "ilike", "%star%"))],
        ordering=[("title", True)],
    )

    assert total == 2
    assert [row["title"] for row in rows] == ["Forest", "Sea of Stars"]


def test_select_restricts_columns(gateway: DataGateway) -> None:
    _books(gateway, "Only")

    rows, _ = gateway.select("books", columns=["id", "title"])

    assert set(rows[0]) == {"id", "title"}


def test_select_rejects_inverted_window(gateway: DataGateway) -> None:
    with pytest.raises(ValidationFailure):
        gateway.select("books", window=(5, 2))


def test_unknown_collection_and_column(gateway: DataGateway) -> None:
    with pytest.raises(DataAccessError):
        gateway.select("auth_users")
    with pytest.raises(DataAccessError):
        gateway.select("books", {"nope": 1})
    with pytest.raises(DataAccessError):
        gateway.select("books", [Where("title", "regex", ".*")])


def test_get_missing_row_raises(gateway: DataGateway) -> None:
    with pytest.raises(RecordNotFoundError):
        gateway.get("books", "missing")


def test_update_and_delete_require_filters(gateway: DataGateway) -> None:
    with pytest.raises(DataAccessError):
        gateway.update("books", {"title": "x"}, {})
    with pytest.raises(DataAccessError):
        gateway.delete("books", None)


def test_update_returns_changed_rows(gateway: DataGateway) -> None:
    (row,) = _books(gateway, "Draft")

    updated = gateway.update("books", {"status": "completed"}, {"id": row["id"]})

    assert [item["status"] for item in updated] == ["completed"]
    assert gateway.get("books", row["id"])["status"] == "completed"


def test_iso_timestamps_are_parsed(gateway: DataGateway) -> None:
    (book,) = _books(gateway, "Dated")

    (chapter,) = gateway.insert(
        "chapters",
        [{"book_id": book["id"], "title": "One", "publish_at": "2024-02-03T04:05:06"}],
    )

    assert chapter["publish_at"] == datetime(2024, 2, 3, 4, 5, 6)


def test_bad_timestamp_is_a_validation_failure(gateway: DataGateway) -> None:
    (book,) = _books(gateway, "Dated")

    with pytest.raises(ValidationFailure) as excinfo:
        gateway.insert("chapters", [{"book_id": book["id"], "title": "One", "publish_at": "soon"}])

    assert excinfo.value.field == "publish_at"


def test_fractional_value_for_integer_column_is_rejected(gateway: DataGateway) -> None:
    (book,) = _books(gateway, "Numbered")

    for bad in (1.5, float("inf")):
        with pytest.raises(ValidationFailure) as excinfo:
            gateway.insert("chapters", [{"book_id": book["id"], "title": "One", "order": bad}])
        assert excinfo.value.field == "order"

    (chapter,) = gateway.insert("chapters", [{"book_id": book["id"], "title": "Two", "order": 2.0}])
    assert chapter["order"] == 2
    assert gateway.count("chapters") == 1


def test_delete_cascades_to_children(gateway: DataGateway) -> None:
    (book,) = _books(gateway, "Parent")
    gateway.insert("chapters", [{"book_id": book["id"], "title": "Child"}])

    assert gateway.delete("books", {"id": book["id"]}) == 1

    assert gateway.count("chapters") == 0


def test_integrity_error_becomes_conflict(gateway: DataGateway) -> None:
    gateway.insert("genres", [{"name": "Fantasy"}])

    with pytest.raises(ConflictError):
        gateway.insert("genres", [{"name": "Fantasy"}])

    assert gateway.count("genres") == 1


def test_upsert_inserts_then_updates(gateway: DataGateway) -> None:
    gateway.upsert("platform_settings", {"key": "global", "coin_to_usd": "0.01"}, key="key")
    row = gateway.upsert("platform_settings", {"key": "global", "coin_to_usd": "0.02"}, key="key")

    assert row["coin_to_usd"] == "0.02"
    assert gateway.count("platform_settings") == 1


def test_embed_attaches_related_rows(gateway: DataGateway) -> None:
    (book,) = _books(gateway, "Linked")
    rows = [{"book_id": book["id"]}, {"book_id": None}]

    gateway.embed(rows, collection="books", foreign_key="book_id", into="book", columns=["id", "title"])

    assert rows[0]["book"] == {"id": book["id"], "title": "Linked"}
    assert rows[1]["book"] is None


def test_invoke_procedure_rejects_bad_arguments(gateway: DataGateway) -> None:
    with pytest.raises(ProcedureError):
        gateway.invoke_procedure("get_total_users", {"unexpected": 1})
    with pytest.raises(ProcedureError):
        gateway.invoke_procedure("no_such_procedure")


def test_procedure_failure_rolls_back(db_session) -> None:
    procedures = ProcedureRegistry()

    @procedures.register("half_done")
    def half_done(db) -> None:
        db.add(Genre(name="Orphan"))
        db.flush()
        raise ProcedureError("stop")

    gateway = DataGateway(db_session, procedures)

    with pytest.raises(ProcedureError):
        gateway.invoke_procedure("half_done")

    assert gateway.count("genres") == 0


def test_driver_errors_become_data_access_errors(gateway: DataGateway, mocker) -> None:
    mocker.patch.object(
        gateway.db,
        "query",
        side_effect=OperationalError("SELECT", {}, Exception("database is locked")),
    )

    with pytest.raises(DataAccessError) as excinfo:
        gateway.count("books")

    assert not isinstance(excinfo.value, ConflictError)
