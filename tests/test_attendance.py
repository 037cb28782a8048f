from sqlalchemy.exc import OperationalError

from fieldforce.db import get_db
from fieldforce.main import app
from fieldforce.models import SalesmanAttendance


def _commit_fails(session_factory, statement: str):
    def broken_db():
        db = session_factory()

        def _commit():
            raise OperationalError(statement, {}, Exception("disk full"))

        db.commit = _commit
        try:
            yield db
        finally:
            db.close()

    return broken_db


def _check_in(**overrides) -> dict:
    payload = {
        "userId": 1,
        "attendanceDate": "2024-05-01",
        "locationName": "Zoo Road, Guwahati",
        "inTimeImageCaptured": True,
        "inTimeImageUrl": "https://img.example.com/in.jpg",
        "inTimeLatitude": 26.1445,
        "inTimeLongitude": 91.7362,
    }
    payload.update(overrides)
    return payload


def _check_out(**overrides) -> dict:
    payload = {
        "userId": 1,
        "attendanceDate": "2024-05-01",
        "outTimeImageCaptured": True,
        "outTimeImageUrl": "https://img.example.com/out.jpg",
        "outTimeLatitude": 26.15,
        "outTimeLongitude": 91.74,
        "outTimeAccuracy": 12.5,
    }
    payload.update(overrides)
    return payload


def test_check_in_creates_open_record(client) -> None:
    resp = client.post("/api/attendance/check-in", json=_check_in())
    assert resp.status_code == 201
    body = resp.json()
    assert body["success"] is True
    assert body["message"] == "Check-in successful"
    data = body["data"]
    assert data["userId"] == 1
    assert data["attendanceDate"] == "2024-05-01"
    assert data["inTimeTimestamp"] is not None
    assert data["inTimeLatitude"] == 26.1445
    assert data["inTimeAccuracy"] is None
    assert data["outTimeTimestamp"] is None
    assert data["outTimeImageCaptured"] is False
    assert data["outTimeImageUrl"] is None
    assert data["outTimeLatitude"] is None


def test_second_check_in_same_day_is_rejected(client) -> None:
    first = client.post("/api/attendance/check-in", json=_check_in())
    assert first.status_code == 201
    record_id = first.json()["data"]["id"]
    before = client.get(f"/api/salesman-attendance/{record_id}").json()["data"]

    second = client.post("/api/attendance/check-in", json=_check_in(locationName="Elsewhere"))
    assert second.status_code == 400
    assert second.json() == {"success": False, "error": "User has already checked in today"}

    after = client.get(f"/api/salesman-attendance/{record_id}").json()["data"]
    assert after == before
    assert len(client.get("/api/salesman-attendance").json()["data"]) == 1


def test_check_in_other_day_or_user_is_allowed(client) -> None:
    assert client.post("/api/attendance/check-in", json=_check_in()).status_code == 201
    assert client.post("/api/attendance/check-in", json=_check_in(attendanceDate="2024-05-02")).status_code == 201
    assert client.post("/api/attendance/check-in", json=_check_in(userId=2)).status_code == 201


def test_check_in_keeps_zero_valued_optional_readings(client) -> None:
    resp = client.post(
        "/api/attendance/check-in",
        json=_check_in(inTimeSpeed=0, inTimeHeading=0, inTimeAltitude=55.2),
    )
    data = resp.json()["data"]
    assert data["inTimeSpeed"] == 0
    assert data["inTimeHeading"] == 0
    assert data["inTimeAltitude"] == 55.2
    assert data["inTimeAccuracy"] is None


def test_check_in_payload_is_validated(client) -> None:
    payload = _check_in()
    del payload["inTimeLatitude"]
    resp = client.post("/api/attendance/check-in", json=payload)
    assert resp.status_code == 400
    body = resp.json()
    assert body["error"] == "Validation failed"
    assert body["details"][0]["field"] == "inTimeLatitude"


def test_check_out_without_check_in_is_not_found(client) -> None:
    resp = client.post("/api/attendance/check-out", json=_check_out())
    assert resp.status_code == 404
    body = resp.json()
    assert body["success"] is False
    assert body["error"].startswith("No check-in record found")
    assert client.get("/api/salesman-attendance").json()["data"] == []


def test_check_out_updates_only_out_fields(client) -> None:
    checked_in = client.post("/api/attendance/check-in", json=_check_in()).json()["data"]

    resp = client.post("/api/attendance/check-out", json=_check_out())
    assert resp.status_code == 200
    body = resp.json()
    assert body["message"] == "Check-out successful"
    data = body["data"]
    assert data["id"] == checked_in["id"]
    assert data["outTimeTimestamp"] is not None
    assert data["outTimeImageCaptured"] is True
    assert data["outTimeImageUrl"] == "https://img.example.com/out.jpg"
    assert data["outTimeLatitude"] == 26.15
    assert data["outTimeAccuracy"] == 12.5
    assert data["outTimeSpeed"] is None
    for key in ("inTimeTimestamp", "inTimeLatitude", "inTimeLongitude", "inTimeImageUrl", "locationName", "createdAt"):
        assert data[key] == checked_in[key]


def test_second_check_out_is_not_found_and_record_unchanged(client) -> None:
    client.post("/api/attendance/check-in", json=_check_in())
    first = client.post("/api/attendance/check-out", json=_check_out()).json()["data"]

    again = client.post("/api/attendance/check-out", json=_check_out(outTimeLatitude=10, outTimeLongitude=10))
    assert again.status_code == 404

    stored = client.get(f"/api/salesman-attendance/{first['id']}").json()["data"]
    assert stored == first


def test_check_in_after_check_out_is_still_duplicate(client) -> None:
    client.post("/api/attendance/check-in", json=_check_in())
    client.post("/api/attendance/check-out", json=_check_out())
    resp = client.post("/api/attendance/check-in", json=_check_in())
    assert resp.status_code == 400


def test_blank_image_urls_are_stored_as_null(client) -> None:
    checked_in = client.post("/api/attendance/check-in", json=_check_in(inTimeImageUrl=""))
    assert checked_in.status_code == 201
    assert checked_in.json()["data"]["inTimeImageUrl"] is None

    checked_out = client.post("/api/attendance/check-out", json=_check_out(outTimeImageUrl=""))
    assert checked_out.status_code == 200
    assert checked_out.json()["data"]["outTimeImageUrl"] is None


def test_check_in_persistence_failure_rolls_back(client, session_factory) -> None:
    working_db = app.dependency_overrides[get_db]
    app.dependency_overrides[get_db] = _commit_fails(session_factory, "INSERT INTO salesman_attendance")
    resp = client.post("/api/attendance/check-in", json=_check_in())
    assert resp.status_code == 500
    body = resp.json()
    assert body["success"] is False
    assert body["error"] == "Failed to check in"
    assert "disk full" in body["details"]

    app.dependency_overrides[get_db] = working_db
    assert client.get("/api/salesman-attendance").json()["data"] == []
    assert client.post("/api/attendance/check-in", json=_check_in()).status_code == 201


def test_check_out_persistence_failure_leaves_record_open(client, session_factory) -> None:
    record_id = client.post("/api/attendance/check-in", json=_check_in()).json()["data"]["id"]

    working_db = app.dependency_overrides[get_db]
    app.dependency_overrides[get_db] = _commit_fails(session_factory, "UPDATE salesman_attendance")
    resp = client.post("/api/attendance/check-out", json=_check_out())
    assert resp.status_code == 500
    assert resp.json()["error"] == "Failed to check out"

    db = session_factory()
    try:
        stored = db.get(SalesmanAttendance, record_id)
        assert stored.out_time_timestamp is None
        assert stored.out_time_image_url is None
        assert stored.out_time_latitude is None
        assert stored.out_time_image_captured is False
    finally:
        db.close()

    app.dependency_overrides[get_db] = working_db
    assert client.post("/api/attendance/check-out", json=_check_out()).status_code == 200
