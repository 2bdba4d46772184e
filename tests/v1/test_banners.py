# tests/v1/test_banners.py
from fastapi import status
from fastapi.testclient import TestClient

from novel_admin.core.settings import settings

BASE = "/api/v1/banners"


def _banner(title: str) -> dict:
    return {
        "image_url": f"http://test/storage/banners/{title}.png",
        "title": title,
        "link_url": f"/books/{title}",
    }


def test_create_returns_carousel_in_order(client: TestClient, auth_headers) -> None:
    client.post(f"{BASE}/", json=_banner("first"), headers=auth_headers)
    response = client.post(f"{BASE}/", json=_banner("second"), headers=auth_headers)

    assert response.status_code == status.HTTP_201_CREATED
    assert [(item["title"], item["sort_order"]) for item in response.json()] == [
        ("first", 0),
        ("second", 1),
    ]


def test_blank_fields_are_rejected(client: TestClient, auth_headers) -> None:
    response = client.post(
        f"{BASE}/",
        json={"image_url": "", "title": "x", "link_url": "/"},
        headers=auth_headers,
    )

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_reorder_and_toggle(client: TestClient, auth_headers) -> None:
    for title in ("a", "b", "c"):
        banners = client.post(f"{BASE}/", json=_banner(title), headers=auth_headers).json()

    response = client.post(f"{BASE}/{banners[0]['id']}/move-down", headers=auth_headers)
    assert [item["title"] for item in response.json()["items"]] == ["b", "a", "c"]

    response = client.post(f"{BASE}/{banners[2]['id']}/move-down", headers=auth_headers)
    assert response.json()["moved"] is False

    response = client.post(f"{BASE}/{banners[1]['id']}/toggle-active", headers=auth_headers)
    assert response.json()["is_active"] is False


def test_update_keeps_position(client: TestClient, auth_headers) -> None:
    banners = client.post(f"{BASE}/", json=_banner("old"), headers=auth_headers).json()

    response = client.put(f"{BASE}/{banners[0]['id']}", json=_banner("new"), headers=auth_headers)

    assert response.status_code == status.HTTP_200_OK
    assert [(item["title"], item["sort_order"]) for item in response.json()] == [("new", 0)]


def test_delete_banner(client: TestClient, auth_headers) -> None:
    banners = client.post(f"{BASE}/", json=_banner("gone"), headers=auth_headers).json()

    assert client.delete(f"{BASE}/{banners[0]['id']}", headers=auth_headers).status_code == (
        status.HTTP_428_PRECONDITION_REQUIRED
    )
    response = client.delete(f"{BASE}/{banners[0]['id']}?confirm=true", headers=auth_headers)
    assert response.status_code == status.HTTP_200_OK
    assert client.get(f"{BASE}/", headers=auth_headers).json() == []


def test_image_upload_stores_file(client: TestClient, auth_headers, storage) -> None:
    response = client.post(
        f"{BASE}/image",
        files={"file": ("hero.png", b"\x89PNG\r\n", "image/png")},
        headers=auth_headers,
    )

    assert response.status_code == status.HTTP_201_CREATED
    body = response.json()
    assert body["bucket"] == "banners"
    assert body["key"].startswith("banner-") and body["key"].endswith(".png")
    assert body["url"] == f"http://test/storage/banners/{body['key']}"
    assert (storage.root / "banners" / body["key"]).read_bytes() == b"\x89PNG\r\n"


def test_image_upload_rejects_non_images(client: TestClient, auth_headers, storage) -> None:
    response = client.post(
        f"{BASE}/image",
        files={"file": ("notes.txt", b"hello", "text/plain")},
        headers=auth_headers,
    )

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    assert response.json()["field"] == "file"


def test_image_upload_enforces_size_limit(client: TestClient, auth_headers, storage, mocker) -> None:
    mocker.patch.object(settings, "banner_max_bytes", 4)

    response = client.post(
        f"{BASE}/image",
        files={"file": ("big.png", b"0123456789", "image/png")},
        headers=auth_headers,
    )

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    assert not (storage.root / "banners").exists()
