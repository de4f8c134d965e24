"""User profile and wallet endpoint tests."""

from uuid import uuid4

from fastapi.testclient import TestClient

from app.api.utils.exceptions import StorageException

WALLET = "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed"


def test_update_my_wallet(alice):
    """Test linking a wallet address to the signed-in user."""
    client, user = alice
    response = client.put("/api/user/wallet", json={"walletAddress": WALLET})

    assert response.status_code == 200
    assert response.json()["id"] == user["id"]
    assert response.json()["walletAddress"] == WALLET
    assert client.get("/api/auth/me").json()["walletAddress"] == WALLET


def test_update_my_wallet_with_patch(alice):
    client, _ = alice
    response = client.patch("/api/user/wallet", json={"walletAddress": WALLET})
    assert response.status_code == 200


def test_invalid_wallet_leaves_record_unchanged(alice):
    """Test a malformed address is rejected and nothing is written."""
    client, _ = alice
    client.put("/api/user/wallet", json={"walletAddress": WALLET})

    for address in ("not-an-address", "0x123", WALLET + "00", "1x" + WALLET[2:], ""):
        response = client.patch("/api/user/wallet", json={"walletAddress": address})
        assert response.status_code == 400
        assert response.json()["error"] == "VALIDATION_ERROR"

    assert client.get("/api/auth/me").json()["walletAddress"] == WALLET


def test_wallet_update_requires_session(app):
    response = TestClient(app).put("/api/user/wallet", json={"walletAddress": WALLET})
    assert response.status_code == 401
    assert response.json()["error"] == "AUTHENTICATION_REQUIRED"


def test_update_profile(alice):
    client, _ = alice
    response = client.patch("/api/user/profile", json={"name": "Alice Liddell"})

    assert response.status_code == 200
    assert response.json()["name"] == "Alice Liddell"


def test_update_profile_rejects_empty_name(alice):
    client, _ = alice
    response = client.patch("/api/user/profile", json={"name": ""})

    assert response.status_code == 400
    assert client.get("/api/auth/me").json()["name"] == "Alice"


def test_my_transactions_require_session(app):
    """Test listing transactions without a cookie is rejected."""
    response = TestClient(app).get("/api/user/transactions")

    assert response.status_code == 401
    assert response.json() == {
        "message": "Authentication required. Please log in.",
        "error": "AUTHENTICATION_REQUIRED",
    }


def test_my_transactions_start_empty(alice):
    client, _ = alice
    response = client.get("/api/user/transactions")

    assert response.status_code == 200
    assert response.json() == []


def test_update_wallet_by_id(alice):
    client, user = alice
    response = client.patch(f"/api/users/{user['id']}/wallet", json={"walletAddress": WALLET})

    assert response.status_code == 200
    assert response.json()["walletAddress"] == WALLET


def test_update_wallet_by_id_validates_after_ownership(alice, bob):
    """Test another user's wallet is off limits even with an invalid body."""
    client, user = alice
    _, other = bob

    response = client.put(f"/api/users/{other['id']}/wallet", json={"walletAddress": WALLET})
    assert response.status_code == 403
    assert response.json()["message"] == "You can only update your own wallet"

    response = client.put(f"/api/users/{other['id']}/wallet", json={"walletAddress": "bad"})
    assert response.status_code == 403

    response = client.put(f"/api/users/{user['id']}/wallet", json={"walletAddress": "bad"})
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid wallet address format"


def test_update_wallet_for_unknown_user(alice):
    client, _ = alice
    response = client.put(f"/api/users/{uuid4()}/wallet", json={"walletAddress": WALLET})

    assert response.status_code == 404
    assert response.json()["error"] == "USER_NOT_FOUND"


def test_user_transactions_by_id(alice, bob):
    client, user = alice
    _, other = bob

    assert client.get(f"/api/users/{user['id']}/transactions").status_code == 200

    response = client.get(f"/api/users/{other['id']}/transactions")
    assert response.status_code == 403
    assert response.json()["error"] == "ACCESS_DENIED"


def test_malformed_user_id(alice):
    client, _ = alice
    response = client.get("/api/users/not-a-uuid/transactions")
    assert response.status_code == 400
    assert response.json()["error"] == "VALIDATION_ERROR"


def test_storage_failure_is_reported(alice, storage, monkeypatch):
    """Test a failing store surfaces as a 500 with the route's error code."""
    client, _ = alice

    async def broken(user_id):
        raise StorageException()

    monkeypatch.setattr(storage, "get_transactions_by_user_id", broken)
    response = client.get("/api/user/transactions")

    assert response.status_code == 500
    assert response.json() == {"message": "Failed to get transactions", "error": "FETCH_ERROR"}
