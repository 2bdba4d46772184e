# tests/v1/test_books.py
from fastapi import status
from fastapi.testclient import TestClient

from novel_admin.models import Chapter

BASE = "/api/v1/books"


def test_list_books_paginates(client: TestClient, auth_headers, make_book) -> None:
    for index in range(25):
        make_book(f"Book {index:02d}")

    response = client.get(f"{BASE}/", params={"sort": "title", "order": "asc", "page": 2}, headers=auth_headers)

    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["total"] == 25
    assert body["page_size"] == 20
    assert body["total_pages"] == 2
    assert [item["title"] for item in body["items"]] == [f"Book {index:02d}" for index in range(20, 25)]


def test_search_title_or_author(client: TestClient, auth_headers, make_book) -> None:
    make_book("Moonlight", author_name="Ann")
    make_book("Harbor", author_name="Moony")
    make_book("Desert", author_name="Sam")

    response = client.get(f"{BASE}/", params={"search": "moon", "sort": "title", "order": "asc"}, headers=auth_headers)

    assert [item["title"] for item in response.json()["items"]] == ["Harbor", "Moonlight"]


def test_status_filter(client: TestClient, auth_headers, make_book) -> None:
    make_book("Running", status="ongoing")
    make_book("Done", status="completed")

    response = client.get(f"{BASE}/", params={"status": "completed"}, headers=auth_headers)

    assert [item["title"] for item in response.json()["items"]] == ["Done"]


def test_sort_by_metric(client: TestClient, auth_headers, make_book) -> None:
    make_book("Quiet", views=10)
    make_book("Popular", views=900)

    response = client.get(f"{BASE}/", params={"sort": "views"}, headers=auth_headers)

    assert [item["title"] for item in response.json()["items"]] == ["Popular", "Quiet"]


def test_invalid_sort_field(client: TestClient, auth_headers) -> None:
    response = client.get(f"{BASE}/", params={"sort": "password"}, headers=auth_headers)

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_toggle_internal(client: TestClient, auth_headers, make_book) -> None:
    book = make_book()

    response = client.post(f"{BASE}/{book.id}/toggle-internal", headers=auth_headers)
    assert response.json()["is_internal"] is True

    response = client.post(f"{BASE}/{book.id}/toggle-internal", headers=auth_headers)
    assert response.json()["is_internal"] is False


def test_delete_book_removes_chapters(client: TestClient, auth_headers, make_book, db_session, gateway) -> None:
    book = make_book()
    db_session.add(Chapter(book_id=book.id, title="Only"))
    db_session.commit()

    response = client.delete(f"{BASE}/{book.id}", headers=auth_headers)
    assert response.status_code == status.HTTP_428_PRECONDITION_REQUIRED

    response = client.delete(f"{BASE}/{book.id}?confirm=true", headers=auth_headers)
    assert response.status_code == status.HTTP_200_OK
    assert gateway.count("books") == 0
    assert gateway.count("chapters") == 0


def test_unknown_book(client: TestClient, auth_headers) -> None:
    response = client.post(f"{BASE}/missing/toggle-internal", headers=auth_headers)

    assert response.status_code == status.HTTP_404_NOT_FOUND
