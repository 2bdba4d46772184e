# tests/v1/test_forum_stats.py
from datetime import timedelta

from fastapi import status
from fastapi.testclient import TestClient

from novel_admin.db.time import utcnow


def test_forum_totals_and_categories(
    client: TestClient,
    auth_headers,
    make_category,
    make_thread,
) -> None:
    general = make_category("General", 0)
    quiet = make_category("Quiet", 1)
    make_thread(general, "Busy", posts=3, last_reply_at=utcnow())
    make_thread(general, "Stale", posts=1, last_reply_at=utcnow() - timedelta(days=60))

    response = client.get("/api/v1/forum/stats/", headers=auth_headers)

    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["totals"] == {
        "total_threads": 2,
        "total_posts": 4,
        "total_users": 1,
        "active_threads": 1,
        "posts_today": 4,
        "posts_week": 4,
        "posts_month": 4,
    }
    assert body["categories"] == [
        {"id": general.id, "name": "General", "thread_count": 2, "post_count": 4},
        {"id": quiet.id, "name": "Quiet", "thread_count": 0, "post_count": 0},
    ]


def test_series_lengths(client: TestClient, auth_headers) -> None:
    week = client.get("/api/v1/forum/stats/", params={"range": "week"}, headers=auth_headers).json()
    month = client.get("/api/v1/forum/stats/", headers=auth_headers).json()
    year = client.get("/api/v1/forum/stats/", params={"range": "year"}, headers=auth_headers).json()

    assert len(week["series"]) == 7
    assert len(month["series"]) == 30
    assert len(year["series"]) == 12
    assert year["series"][-1]["label"] == utcnow().strftime("%Y-%m")


def test_series_counts_todays_activity(client: TestClient, auth_headers, make_category, make_thread) -> None:
    make_thread(make_category("General", 0), posts=2)

    series = client.get("/api/v1/forum/stats/", params={"range": "week"}, headers=auth_headers).json()["series"]

    assert series[-1]["label"] == utcnow().date().isoformat()
    assert series[-1]["threads"] == 1
    assert series[-1]["posts"] == 2
    assert sum(point["posts"] for point in series) == 2
