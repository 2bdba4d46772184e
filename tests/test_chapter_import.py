# tests/test_chapter_import.py
import math

import pytest

from novel_admin.services.chapter_import import parse_chapter_csv
from novel_admin.services.errors import ValidationFailure

HEADER = "order,title,content,is_vip,publish_at\n"


def test_parses_rows_for_selected_book() -> None:
    text = HEADER + "1,Prologue,The night was dark,true,2024-01-01T00:00:00Z\n"

    rows = parse_chapter_csv(text, "book-1")

    assert rows == [
        {
            "book_id": "book-1",
            "order": 1,
            "title": "Prologue",
            "content": "The night was dark",
            "is_vip": True,
            "publish_at": "2024-01-01T00:00:00Z",
            "word_count": 4,
        }
    ]


def test_chinese_row_imports_verbatim() -> None:
    (row,) = parse_chapter_csv(HEADER + "1,第一章,内容,false,\n", "book-1")

    assert row["order"] == 1
    assert row["title"] == "第一章"
    assert row["content"] == "内容"
    assert row["is_vip"] is False
    assert row["publish_at"] is None


def test_blank_title_defaults_to_row_number() -> None:
    text = HEADER + '2,"",Body,false,\n'

    rows = parse_chapter_csv(text, "book-1")

    assert rows[0]["title"] == "章节 1"
    assert rows[0]["is_vip"] is False
    assert rows[0]["publish_at"] is None


def test_default_titles_follow_data_row_position() -> None:
    text = HEADER + "1,First,a,false,\n2,,b,false,\n3,  ,c,false,\n"

    titles = [row["title"] for row in parse_chapter_csv(text, "book-1")]

    assert titles == ["First", "章节 2", "章节 3"]


def test_blank_lines_are_skipped() -> None:
    text = HEADER + "1,One,a,false,\n\n2,Two,b,false,\n\n"

    rows = parse_chapter_csv(text, "book-1")

    assert [row["order"] for row in rows] == [1, 2]


def test_non_numeric_order_becomes_nan() -> None:
    rows = parse_chapter_csv(HEADER + "abc,Title,Body,false,\n", "book-1")

    assert math.isnan(rows[0]["order"])


def test_empty_order_becomes_zero() -> None:
    rows = parse_chapter_csv(HEADER + ",Title,Body,false,\n", "book-1")

    assert rows[0]["order"] == 0


def test_is_vip_only_true_for_literal_true() -> None:
    text = HEADER + "1,A,x,TRUE,\n2,B,x,yes,\n3,C,x,1,\n4,D,x,,\n"

    flags = [row["is_vip"] for row in parse_chapter_csv(text, "book-1")]

    assert flags == [True, False, False, False]


def test_quoted_content_keeps_commas_and_newlines() -> None:
    text = HEADER + '1,Quoted,"one, two\nthree ""four""",false,\n'

    rows = parse_chapter_csv(text, "book-1")

    assert rows[0]["content"] == 'one, two\nthree "four"'
    assert rows[0]["word_count"] == 4


def test_byte_order_mark_is_ignored() -> None:
    rows = parse_chapter_csv("\ufeff" + HEADER + "5,Title,Body,false,\n", "book-1")

    assert rows[0]["order"] == 5


def test_header_only_file_yields_no_rows() -> None:
    assert parse_chapter_csv(HEADER, "book-1") == []


@pytest.mark.parametrize("book_id", [None, ""])
def test_missing_book_is_rejected(book_id) -> None:
    with pytest.raises(ValidationFailure) as excinfo:
        parse_chapter_csv(HEADER + "1,A,x,false,\n", book_id)

    assert excinfo.value.field == "book_id"
