"""Transaction endpoint tests."""

from uuid import uuid4

from fastapi.testclient import TestClient

RECIPIENT = "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed"


def _create(client, **overrides):
    body = {"type": "transfer", "recipient": RECIPIENT, "amount": "25.00", **overrides}
    response = client.post("/api/transactions", json=body)
    assert response.status_code == 200, response.text
    return response.json()


def test_create_transaction(alice):
    """Test a new transaction is pending, gasless and owned by the caller."""
    client, user = alice
    transaction = _create(client)

    assert transaction["userId"] == user["id"]
    assert transaction["type"] == "transfer"
    assert transaction["status"] == "pending"
    assert transaction["gasless"] is True
    assert transaction["tokenSymbol"] == "USDC"
    assert transaction["amount"] == "25.00"
    assert transaction["hash"] is None


def test_create_transaction_ignores_client_owner_and_status(alice, bob):
    """Test userId, status and gasless in the body cannot be forced."""
    client, user = alice
    _, other = bob
    transaction = _create(client, userId=other["id"], status="completed", gasless=False)

    assert transaction["userId"] == user["id"]
    assert transaction["status"] == "pending"
    assert transaction["gasless"] is True


def test_create_transaction_accepts_legacy_field_names(alice):
    client, _ = alice
    response = client.post(
        "/api/transactions",
        json={"type": "batch", "to": f"  {RECIPIENT} ", "value": "1.5", "tokenSymbol": "DAI",
              "batchOperations": [{"to": RECIPIENT, "value": "1.5"}]},
    )

    assert response.status_code == 200
    assert response.json()["recipient"] == RECIPIENT
    assert response.json()["amount"] == "1.5"
    assert response.json()["tokenSymbol"] == "DAI"
    assert response.json()["batchOperations"] == [{"to": RECIPIENT, "value": "1.5"}]


def test_create_transaction_validation(alice):
    client, _ = alice
    for body in (
        {"type": "swap", "recipient": RECIPIENT, "amount": "1"},
        {"type": "transfer", "recipient": "   ", "amount": "1"},
        {"type": "transfer", "amount": "1"},
        {"type": "transfer", "recipient": RECIPIENT},
    ):
        response = client.post("/api/transactions", json=body)
        assert response.status_code == 400
        assert response.json()["error"] == "VALIDATION_ERROR"

    assert client.get("/api/user/transactions").json() == []


def test_create_transaction_requires_session(app):
    response = TestClient(app).post(
        "/api/transactions", json={"type": "transfer", "recipient": RECIPIENT, "amount": "1"}
    )
    assert response.status_code == 401


def test_transactions_listed_newest_first(alice, bob):
    """Test listings contain only the caller's transactions, newest first."""
    client, _ = alice
    bob_client, _ = bob
    created = [_create(client, amount=str(i)) for i in range(3)]
    _create(bob_client)

    listed = client.get("/api/user/transactions").json()

    assert [tx["id"] for tx in listed] == [tx["id"] for tx in reversed(created)]


def test_get_transaction(alice):
    client, _ = alice
    transaction = _create(client)

    response = client.get(f"/api/transactions/{transaction['id']}")
    assert response.status_code == 200
    assert response.json() == transaction


def test_get_transaction_not_found(alice):
    client, _ = alice
    response = client.get(f"/api/transactions/{uuid4()}")

    assert response.status_code == 404
    assert response.json()["error"] == "TRANSACTION_NOT_FOUND"


def test_other_users_transaction_is_forbidden(alice, bob):
    """Test reading or updating someone else's transaction is denied."""
    client, _ = alice
    bob_client, _ = bob
    transaction = _create(bob_client)

    response = client.get(f"/api/transactions/{transaction['id']}")
    assert response.status_code == 403
    assert response.json()["message"] == "You can only access your own transactions"

    response = client.patch(f"/api/transactions/{transaction['id']}", json={"status": "failed"})
    assert response.status_code == 403
    assert response.json()["message"] == "You can only update your own transactions"

    response = client.patch(f"/api/transactions/{transaction['id']}", json={"status": "bogus"})
    assert response.status_code == 403

    assert bob_client.get(f"/api/transactions/{transaction['id']}").json()["status"] == "pending"


def test_update_transaction(alice):
    client, _ = alice
    transaction = _create(client)

    response = client.patch(
        f"/api/transactions/{transaction['id']}",
        json={"status": "processing", "hash": "0xabc"},
    )

    assert response.status_code == 200
    assert response.json()["status"] == "processing"
    assert response.json()["hash"] == "0xabc"
    assert response.json()["userId"] == transaction["userId"]


def test_legacy_success_status_is_completed(alice):
    """Test the legacy "success" status is stored as completed."""
    client, _ = alice
    transaction = _create(client)

    response = client.patch(f"/api/transactions/{transaction['id']}", json={"status": "success"})

    assert response.status_code == 200
    assert response.json()["status"] == "completed"


def test_failed_transaction_keeps_error(alice):
    client, _ = alice
    transaction = _create(client)

    response = client.patch(
        f"/api/transactions/{transaction['id']}",
        json={"status": "failed", "error": "insufficient funds"},
    )

    assert response.json()["status"] == "failed"
    assert response.json()["errorMessage"] == "insufficient funds"


def test_update_transaction_rejects_unknown_status(alice):
    client, _ = alice
    transaction = _create(client)

    response = client.patch(f"/api/transactions/{transaction['id']}", json={"status": "bogus"})

    assert response.status_code == 400
    assert response.json()["message"] == "Invalid update data"
    assert client.get(f"/api/transactions/{transaction['id']}").json()["status"] == "pending"


def test_update_cannot_move_transaction(alice, bob):
    """Test owner and id are not writable through an update."""
    client, user = alice
    _, other = bob
    transaction = _create(client)

    response = client.patch(
        f"/api/transactions/{transaction['id']}",
        json={"userId": other["id"], "id": str(uuid4()), "hash": "0x1"},
    )

    assert response.status_code == 200
    assert response.json()["id"] == transaction["id"]
    assert response.json()["userId"] == user["id"]


def test_update_transaction_rejects_null_status(alice):
    """Test a null status is a validation error and the record is untouched."""
    client, _ = alice
    transaction = _create(client)

    response = client.patch(f"/api/transactions/{transaction['id']}", json={"status": None})

    assert response.status_code == 400
    assert response.json()["error"] == "VALIDATION_ERROR"
    assert client.get(f"/api/transactions/{transaction['id']}").json() == transaction
    assert client.get("/api/user/transactions").status_code == 200
