import pytest
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

from fastapi.testclient import TestClient

from analytics.config import HandicapSettings
from api.dependencies import get_db, get_handicap_settings
from api.main import app
from database.converters import handicap_record_from_row
from database.exceptions import DatabaseError
from models import Hole, Round, TeeBox

USER_ID = str(uuid4())


def _build_rounds(overs, rating=72.0, slope=113):
    start = date(2024, 1, 1)
    return [
        Round(
            id=str(uuid4()),
            user_id=USER_ID,
            course_name="Pebble Beach",
            date=start + timedelta(days=i),
            total_score=72 + over,
            course_par=72,
            tee_box=TeeBox(name="Blue", rating=rating, slope=slope),
            holes=[Hole(number=h, par=4, score=4, putts=2) for h in range(1, 18)]
            + [Hole(number=18, par=4, score=4 + over // 2, putts=2)],
        )
        for i, over in enumerate(overs)
    ]


@pytest.fixture
def db_manager():
    manager = MagicMock()
    manager.rounds.fetch_rounds = AsyncMock(return_value=_build_rounds([10, 12, 14, 8]))
    manager.rounds.get_round = AsyncMock(return_value=None)
    manager.handicap_records.get_latest = AsyncMock(return_value=None)
    manager.handicap_records.save_record = AsyncMock(
        side_effect=lambda record: record.model_copy(update={"id": "rec-1"})
    )
    manager.handicap_records.get_history = AsyncMock(return_value=[])
    return manager


@pytest.fixture
def client(db_manager):
    app.dependency_overrides[get_db] = lambda: db_manager
    app.dependency_overrides[get_handicap_settings] = lambda: HandicapSettings()
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health_without_database(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "degraded", "database": False}


def test_rounds_for_user_newest_first(client, db_manager):
    response = client.get(f"/api/rounds/user/{USER_ID}", params={"limit": 10})
    assert response.status_code == 200

    body = response.json()
    assert [row["total_score"] for row in body] == [80, 86, 84, 82]
    assert body[0]["to_par"] == 8
    assert body[0]["tee_box"] == "Blue"
    assert body[0]["total_putts"] == 36

    filters = db_manager.rounds.fetch_rounds.await_args.args[1]
    assert filters.limit == 10


def test_rounds_for_user_bad_date_range(client):
    response = client.get(
        f"/api/rounds/user/{USER_ID}",
        params={"date_from": "2024-02-01", "date_to": "2024-01-01"},
    )
    assert response.status_code == 422


def test_rounds_for_user_bad_user_id(client):
    assert client.get("/api/rounds/user/not-a-uuid").status_code == 422


def test_round_not_found(client):
    assert client.get(f"/api/rounds/{uuid4()}").status_code == 404
    assert client.get("/api/rounds/not-a-uuid").status_code == 404


def test_round_database_failure(client, db_manager):
    db_manager.rounds.get_round.side_effect = DatabaseError("down")
    response = client.get(f"/api/rounds/{uuid4()}")
    assert response.status_code == 500
    assert response.json() == {"detail": "Database error"}


def test_handicap_report(client):
    response = client.get(f"/api/stats/handicap/{USER_ID}")
    assert response.status_code == 200

    body = response.json()
    assert body["current_index"] == pytest.approx(8.0)
    assert body["trend"] == "stable"
    assert len(body["history"]) == 4
    assert body["history"][0]["index"] is None
    assert body["counting_rounds"][0]["differential"] == pytest.approx(8.0)
    assert body["potential_index"] is not None
    assert body["course_handicap"] == 8
    assert body["playing_handicap"] == 8
    # the 8-over 18th is capped at net double bogey (6)
    assert body["counting_rounds"][0]["adjusted_gross_score"] == 74


def test_handicap_report_database_failure(client, db_manager):
    db_manager.rounds.fetch_rounds.side_effect = DatabaseError("down")
    assert client.get(f"/api/stats/handicap/{USER_ID}").status_code == 500


def test_scoring_summary(client):
    response = client.get(f"/api/stats/scoring/{USER_ID}")
    assert response.status_code == 200

    body = response.json()
    assert len(body["per_hole_performance"]) == 18
    assert body["worst_hole"]["hole_number"] == 18
    assert body["per_par_type_stats"][0]["par"] == 4
    assert body["per_par_type_stats"][0]["score_types"]["par"] == 68
    assert sum(row["count"] for row in body["score_distribution"]) == 4


def test_overview(client):
    response = client.get(f"/api/stats/overview/{USER_ID}")
    assert response.status_code == 200

    body = response.json()
    assert body["total_rounds"] == 4
    assert body["best_round"]["score"] == 80
    assert body["putts_per_round"] == pytest.approx(36.0)
    assert body["handicap_index"] == pytest.approx(8.0)


def test_overview_without_rounds(client, db_manager):
    db_manager.rounds.fetch_rounds.return_value = []
    assert client.get(f"/api/stats/overview/{USER_ID}").status_code == 404


def test_recalculate_saves_new_record(client, db_manager):
    response = client.post(f"/api/stats/handicap/{USER_ID}/recalculate")
    assert response.status_code == 200

    body = response.json()
    assert body["updated"] is True
    assert body["record"]["handicap_index"] == pytest.approx(8.0)
    db_manager.handicap_records.save_record.assert_awaited_once()


def test_recalculate_unchanged_index(client, db_manager):
    db_manager.rounds.fetch_rounds.return_value = _build_rounds([13, 16, 18], rating=71.3, slope=131)
    # index 11.8175... as stored in a NUMERIC(6, 3) column
    db_manager.handicap_records.get_latest.return_value = handicap_record_from_row({
        "id": uuid4(),
        "user_id": uuid4(),
        "handicap_index": Decimal("11.818"),
        "record_date": date(2024, 5, 1),
        "included_rounds": "[]",
        "differentials": "[]",
        "trend": "stable",
        "low_index": Decimal("11.818"),
        "created_at": datetime(2024, 5, 1, tzinfo=timezone.utc),
    })
    previous_id = db_manager.handicap_records.get_latest.return_value.id

    body = client.post(f"/api/stats/handicap/{USER_ID}/recalculate").json()
    assert body["updated"] is False
    assert body["record"]["id"] == previous_id
    db_manager.handicap_records.save_record.assert_not_awaited()


def test_recalculate_saves_stored_precision(client, db_manager):
    db_manager.rounds.fetch_rounds.return_value = _build_rounds([13, 16, 18], rating=71.3, slope=131)

    body = client.post(f"/api/stats/handicap/{USER_ID}/recalculate").json()
    assert body["updated"] is True
    assert body["record"]["handicap_index"] == 11.818


def test_handicap_records(client, db_manager):
    response = client.get(f"/api/stats/handicap/{USER_ID}/records", params={"limit": 5})
    assert response.status_code == 200
    assert response.json() == []
    assert db_manager.handicap_records.get_history.await_args.kwargs == {"limit": 5}


def test_handicap_records_database_failure(client, db_manager):
    db_manager.handicap_records.get_history.side_effect = DatabaseError("down")
    response = client.get(f"/api/stats/handicap/{USER_ID}/records")
    assert response.status_code == 500
    assert response.json() == {"detail": "Database error"}
