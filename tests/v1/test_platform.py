# tests/v1/test_platform.py
import json

from fastapi import status
from fastapi.testclient import TestClient

from novel_admin.models import PlatformSetting, SiteNotification


def test_settings_default_when_row_missing(client: TestClient, auth_headers) -> None:
    response = client.get("/api/v1/platform-settings", headers=auth_headers)

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"coin_to_usd": 0.01, "author_share_percent": 70, "updated_at": None}


def test_settings_fall_back_to_json_value(client: TestClient, auth_headers, db_session) -> None:
    """Rows written before the dedicated columns existed keep values in JSON."""
    db_session.add(
        PlatformSetting(
            key="global",
            coin_to_usd=None,
            author_share_percent="65",
            value=json.dumps({"coin_to_usd": 0.02, "author_share_percent": 50}),
        )
    )
    db_session.commit()

    body = client.get("/api/v1/platform-settings", headers=auth_headers).json()

    assert body["coin_to_usd"] == 0.02
    assert body["author_share_percent"] == 65


def test_update_settings_writes_columns_and_json(client: TestClient, auth_headers, db_session) -> None:
    response = client.put(
        "/api/v1/platform-settings",
        json={"coin_to_usd": 0.015, "author_share_percent": 80},
        headers=auth_headers,
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["author_share_percent"] == 80
    row = db_session.get(PlatformSetting, "global")
    assert row.coin_to_usd == "0.015"
    assert json.loads(row.value) == {"coin_to_usd": 0.015, "author_share_percent": 80}


def test_update_settings_validates_ranges(client: TestClient, auth_headers) -> None:
    response = client.put(
        "/api/v1/platform-settings",
        json={"coin_to_usd": 0.01, "author_share_percent": 120},
        headers=auth_headers,
    )

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_recipient_search(client: TestClient, auth_headers, make_user) -> None:
    for name in ("reader_one", "reader_two", "writer"):
        make_user(name)

    response = client.get("/api/v1/notifications/recipients", params={"q": "read"}, headers=auth_headers)
    assert [item["username"] for item in response.json()] == ["reader_one", "reader_two"]

    response = client.get("/api/v1/notifications/recipients", params={"q": "r"}, headers=auth_headers)
    assert response.json() == []


def test_send_notification_to_user(client: TestClient, auth_headers, make_user, db_session) -> None:
    user = make_user("target")

    response = client.post(
        "/api/v1/notifications",
        json={"title": "Hello", "content": "Welcome aboard", "type": "review", "user_id": user.id},
        headers=auth_headers,
    )

    assert response.status_code == status.HTTP_201_CREATED
    body = response.json()
    assert body["user_id"] == user.id
    assert body["is_read"] is False
    assert db_session.get(SiteNotification, body["id"]) is not None


def test_broadcast_notification(client: TestClient, auth_headers) -> None:
    response = client.post(
        "/api/v1/notifications",
        json={"title": "Maintenance", "content": "Tonight at 2am"},
        headers=auth_headers,
    )

    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["user_id"] is None
    assert response.json()["type"] == "system"


def test_notification_validation(client: TestClient, auth_headers) -> None:
    response = client.post(
        "/api/v1/notifications",
        json={"title": " ", "content": "x"},
        headers=auth_headers,
    )
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    response = client.post(
        "/api/v1/notifications",
        json={"title": "Hi", "content": "x", "user_id": "missing"},
        headers=auth_headers,
    )
    assert response.status_code == status.HTTP_404_NOT_FOUND
