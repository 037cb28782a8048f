from datetime import datetime, timezone

import pytest

from fieldforce.models import User
from fieldforce.routes.auth import hash_password, verify_password


@pytest.fixture
def salesperson(session_factory) -> int:
    now = datetime.now(timezone.utc)
    db = session_factory()
    try:
        user = User(
            email="asha@example.com",
            first_name="Asha",
            last_name="Das",
            role="salesperson",
            company_id=1,
            salesman_login_id="EMP-0001",
            hashed_password=hash_password("s3cret"),
            created_at=now,
            updated_at=now,
        )
        db.add(user)
        db.commit()
        return user.id
    finally:
        db.close()


def _dealer(user_id: int, name: str) -> dict:
    return {
        "userId": user_id,
        "type": "Dealer-Best",
        "name": name,
        "region": "Kamrup M",
        "area": "Guwahati",
        "phoneNo": "9876543210",
        "address": "GS Road, Guwahati, Assam",
        "totalPotential": 100,
        "bestPotential": 60,
        "brandSelling": ["Star"],
        "feedbacks": "Interested",
    }


def test_password_hash_round_trip() -> None:
    hashed = hash_password("s3cret")
    assert hashed.startswith("pbkdf2_sha256$")
    assert "s3cret" not in hashed
    assert verify_password("s3cret", hashed)
    assert not verify_password("other", hashed)
    assert not verify_password("s3cret", "not-a-hash")


def test_login_with_login_id_or_email(client, salesperson) -> None:
    resp = client.post("/api/auth/login", json={"loginId": " EMP-0001 ", "password": "s3cret"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["message"] == "Login successful"
    assert body["data"]["id"] == salesperson
    assert body["data"]["firstName"] == "Asha"
    assert "hashedPassword" not in body["data"]

    by_email = client.post("/api/auth/login", json={"loginId": "asha@example.com", "password": "s3cret"})
    assert by_email.status_code == 200


@pytest.mark.parametrize(
    "login_id, password",
    [("EMP-0001", "wrong"), ("EMP-9999", "s3cret")],
)
def test_login_rejects_bad_credentials(client, salesperson, login_id, password) -> None:
    resp = client.post("/api/auth/login", json={"loginId": login_id, "password": password})
    assert resp.status_code == 401
    assert resp.json() == {"success": False, "error": "Invalid credentials"}


def test_login_requires_both_fields(client) -> None:
    resp = client.post("/api/auth/login", json={"loginId": "   "})
    assert resp.status_code == 400
    fields = {item["field"] for item in resp.json()["details"]}
    assert fields == {"loginId", "password"}


def test_get_user_hides_password(client, salesperson) -> None:
    resp = client.get(f"/api/users/{salesperson}")
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["email"] == "asha@example.com"
    assert data["salesmanLoginId"] == "EMP-0001"
    assert "hashedPassword" not in data

    missing = client.get("/api/users/999")
    assert missing.status_code == 404
    assert missing.json() == {"success": False, "error": "User not found"}


def test_dealers_for_user(client, salesperson) -> None:
    for user_id, name in ((salesperson, "Zeta Traders"), (salesperson, "Alpha Cement"), (77, "Someone Else")):
        assert client.post("/api/dealers", json=_dealer(user_id, name)).status_code == 201

    resp = client.get(f"/api/users/{salesperson}/dealers")
    assert resp.status_code == 200
    assert [row["name"] for row in resp.json()["data"]] == ["Alpha Cement", "Zeta Traders"]

    assert client.get("/api/users/999/dealers").status_code == 404


def test_brands_create_and_list(client) -> None:
    for name in ("Star", "Amrit"):
        resp = client.post("/api/brands", json={"name": name})
        assert resp.status_code == 201
        assert resp.json()["message"] == "Brand created successfully"

    listed = client.get("/api/brands").json()["data"]
    assert [row["name"] for row in listed] == ["Star", "Amrit"]
    assert client.post("/api/brands", json={"name": ""}).status_code == 400
