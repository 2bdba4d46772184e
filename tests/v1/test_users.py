# tests/v1/test_users.py
from fastapi import status
from fastapi.testclient import TestClient

from novel_admin.models import UserProfile

BASE = "/api/v1/users"


def test_list_users_sorted_by_stat(client: TestClient, auth_headers, make_user) -> None:
    """Sorting by a stats field orders across the whole result set."""
    make_user("low", total_spent=5)
    make_user("high", total_spent=500)
    make_user("mid", total_spent=50)

    response = client.get(f"{BASE}/", params={"sort": "total_spent"}, headers=auth_headers)

    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["total"] == 4
    assert [item["username"] for item in body["items"]] == ["high", "mid", "low", "admin"]
    assert body["items"][0]["stats"]["total_spent"] == 500

    response = client.get(
        f"{BASE}/",
        params={"search": "i", "sort": "total_spent", "order": "asc"},
        headers=auth_headers,
    )
    assert [item["username"] for item in response.json()["items"]] == ["admin", "mid", "high"]


def test_missing_stats_are_zero_filled(client: TestClient, auth_headers, db_session, admin_user) -> None:
    db_session.add(UserProfile(id="bare-user", username="bare"))
    db_session.commit()

    response = client.get(f"{BASE}/", params={"search": "bare"}, headers=auth_headers)

    assert response.json()["items"][0]["stats"] == {
        "total_recharge": 0,
        "total_spent": 0,
        "total_comments": 0,
        "gold_balance": 0,
        "silver_balance": 0,
        "popularity_ticket_balance": 0,
    }


def test_level_filter(client: TestClient, auth_headers, make_user) -> None:
    make_user("novice", level=1)
    make_user("veteran", level=9)

    response = client.get(f"{BASE}/", params={"level": 9}, headers=auth_headers)

    assert [item["username"] for item in response.json()["items"]] == ["veteran"]


def test_update_wallet_balance(client: TestClient, auth_headers, make_user) -> None:
    user = make_user("wallet", gold_balance=1)

    response = client.put(
        f"{BASE}/{user.id}/balance",
        json={"balance_type": "gold", "value": 250},
        headers=auth_headers,
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["stats"]["gold_balance"] == 250


def test_update_votes_on_profile(client: TestClient, auth_headers, make_user) -> None:
    user = make_user("voter")

    response = client.put(
        f"{BASE}/{user.id}/balance",
        json={"balance_type": "current_votes", "value": 12},
        headers=auth_headers,
    )

    assert response.json()["current_votes"] == 12


def test_negative_balance_is_rejected(client: TestClient, auth_headers, make_user) -> None:
    user = make_user()

    response = client.put(
        f"{BASE}/{user.id}/balance",
        json={"balance_type": "silver", "value": -1},
        headers=auth_headers,
    )

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_balance_for_unknown_user(client: TestClient, auth_headers) -> None:
    response = client.put(
        f"{BASE}/missing/balance",
        json={"balance_type": "silver", "value": 1},
        headers=auth_headers,
    )

    assert response.status_code == status.HTTP_404_NOT_FOUND
