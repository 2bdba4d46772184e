# tests/v1/test_taxonomy.py
import pytest
from fastapi import status
from fastapi.testclient import TestClient


@pytest.mark.parametrize("base", ["/api/v1/genres", "/api/v1/short-story-tags"])
def test_label_lifecycle(client: TestClient, auth_headers, base: str) -> None:
    """Create, rename and delete a label; lists come back sorted by name."""
    client.post(f"{base}/", json={"name": "Romance"}, headers=auth_headers)
    response = client.post(f"{base}/", json={"name": "Horror", "description": "Scary"}, headers=auth_headers)

    assert response.status_code == status.HTTP_201_CREATED
    labels = response.json()
    assert [label["name"] for label in labels] == ["Horror", "Romance"]

    response = client.put(
        f"{base}/{labels[0]['id']}",
        json={"name": "Thriller", "description": "Tense"},
        headers=auth_headers,
    )
    assert [label["name"] for label in response.json()] == ["Romance", "Thriller"]

    response = client.delete(f"{base}/{labels[0]['id']}", headers=auth_headers)
    assert response.status_code == status.HTTP_428_PRECONDITION_REQUIRED

    response = client.delete(f"{base}/{labels[0]['id']}?confirm=true", headers=auth_headers)
    assert response.status_code == status.HTTP_200_OK
    assert [label["name"] for label in client.get(f"{base}/", headers=auth_headers).json()] == ["Romance"]


def test_duplicate_genre_conflicts(client: TestClient, auth_headers) -> None:
    client.post("/api/v1/genres/", json={"name": "Mystery"}, headers=auth_headers)

    response = client.post("/api/v1/genres/", json={"name": "Mystery"}, headers=auth_headers)

    assert response.status_code == status.HTTP_409_CONFLICT


def test_empty_name_rejected(client: TestClient, auth_headers) -> None:
    response = client.post("/api/v1/genres/", json={"name": ""}, headers=auth_headers)

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_update_unknown_label(client: TestClient, auth_headers) -> None:
    response = client.put("/api/v1/genres/missing", json={"name": "X"}, headers=auth_headers)

    assert response.status_code == status.HTTP_404_NOT_FOUND
