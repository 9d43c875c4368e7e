import sqlite3
from datetime import datetime
from decimal import Decimal

from fastapi.testclient import TestClient

from ledger.config import settings
from ledger.database import ensure_sqlite_dir
from ledger.main import create_app

SEED_PASSWORD = "Dayou123?"


def _create_customer(client, name="A Co", contact="Wang", phone="138-0"):
    resp = client.post(
        "/api/customers", json={"name": name, "contact": contact, "phone": phone}
    )
    assert resp.status_code == 200
    return resp.json()


def _create_payment(client, customer, date="2025-01-15", amount=1000.00):
    resp = client.post("/api/payments", json={
        "date": date,
        "customerId": customer["id"],
        "customerName": customer["name"],
        "amount": amount,
    })
    assert resp.status_code == 200
    return resp.json()


def _payments_by_id(client) -> dict:
    resp = client.get("/api/payments")
    assert resp.status_code == 200
    return {p["id"]: p for p in resp.json()}


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


# --- auth ---


def test_login_success(client):
    resp = client.post("/api/auth/login", json={"username": "dayou", "password": SEED_PASSWORD})
    assert resp.status_code == 200
    assert resp.json() == {"id": settings.OPERATOR_ACCOUNT_ID, "username": "dayou"}


def test_login_failures_look_identical(client):
    wrong = client.post("/api/auth/login", json={"username": "dayou", "password": "wrong"})
    unknown = client.post("/api/auth/login", json={"username": "nouser", "password": "x"})

    assert wrong.status_code == unknown.status_code == 401
    assert wrong.json() == unknown.json()
    assert set(wrong.json()) == {"error"}


def test_rotate_account(client):
    resp = client.put(
        "/api/auth/account", json={"username": "boss", "newPassword": "N3w-pass"}
    )
    assert resp.status_code == 200
    assert resp.json() == {"username": "boss"}

    ok = client.post("/api/auth/login", json={"username": "boss", "password": "N3w-pass"})
    assert ok.status_code == 200


# --- customers ---


def test_customer_crud(client):
    seeded = client.get("/api/customers").json()
    assert len(seeded) == len(settings.SEED_CUSTOMERS)

    created = _create_customer(client)
    assert set(created) == {"id", "name", "contact", "phone", "createdAt"}

    listed = client.get("/api/customers").json()
    assert listed[0]["id"] == created["id"]

    resp = client.put(
        f"/api/customers/{created['id']}",
        json={"name": "B Co", "contact": "Li", "phone": "139-1"},
    )
    assert resp.status_code == 200
    assert resp.json()["name"] == "B Co"
    assert resp.json()["id"] == created["id"]


def test_update_unknown_customer(client):
    resp = client.put("/api/customers/missing", json={"name": "X", "contact": "Y", "phone": "Z"})
    assert resp.status_code == 404
    assert "error" in resp.json()


# --- payments ---


def test_verification_scenario(client):
    customer = _create_customer(client)
    payment = _create_payment(client, customer)

    assert payment["status"] == "Unverified"
    assert payment["businessDate"] is None
    assert payment["remarks"] is None
    assert Decimal(payment["amount"]) == Decimal("1000.00")

    resp = client.post("/api/payments/verify", json={
        "ids": [payment["id"]], "businessDate": "2025-01-20", "remarks": "batch-1",
    })
    assert resp.status_code == 200
    assert resp.json() == {"success": True}

    verified = client.get(f"/api/payments/{payment['id']}").json()
    assert verified["status"] == "Verified"
    assert verified["businessDate"] == "2025-01-20"
    assert verified["remarks"] == "batch-1"

    resp = client.post(f"/api/payments/{payment['id']}/undo-verification")
    assert resp.json() == {"success": True}

    undone = client.get(f"/api/payments/{payment['id']}").json()
    assert undone["status"] == "Unverified"
    assert undone["businessDate"] is None
    assert undone["remarks"] is None


def test_verify_with_unknown_ids_succeeds(client):
    customer = _create_customer(client)
    payment = _create_payment(client, customer)

    resp = client.post("/api/payments/verify", json={
        "ids": [payment["id"], "does-not-exist"], "businessDate": "2025-01-20",
    })

    assert resp.status_code == 200
    assert _payments_by_id(client)[payment["id"]]["status"] == "Verified"


def test_undo_unknown_id_succeeds(client):
    resp = client.post("/api/payments/missing/undo-verification")
    assert resp.status_code == 200
    assert resp.json() == {"success": True}


def test_update_payment(client):
    customer = _create_customer(client)
    payment = _create_payment(client, customer)

    resp = client.put(f"/api/payments/{payment['id']}", json={
        "date": "2025-02-01",
        "customerId": customer["id"],
        "customerName": "A Co",
        "amount": "99.95",
        "status": "Verified",
        "businessDate": "2025-02-03",
        "remarks": "manual",
    })

    assert resp.status_code == 200
    body = resp.json()
    assert body["amount"] == "99.95"
    assert body["status"] == "Verified"
    assert body["businessDate"] == "2025-02-03"


def test_update_verified_without_business_date_rejected(client):
    customer = _create_customer(client)
    payment = _create_payment(client, customer)

    resp = client.put(f"/api/payments/{payment['id']}", json={
        "date": payment["date"],
        "customerId": customer["id"],
        "customerName": "A Co",
        "amount": payment["amount"],
        "status": "Verified",
    })

    assert resp.status_code == 400
    assert "error" in resp.json()
    assert _payments_by_id(client)[payment["id"]]["status"] == "Unverified"


def test_delete_payment(client):
    customer = _create_customer(client)
    payment = _create_payment(client, customer)
    client.post("/api/payments/verify", json={"ids": [payment["id"]], "businessDate": "2025-01-20"})

    resp = client.delete(f"/api/payments/{payment['id']}")

    assert resp.json() == {"success": True}
    assert payment["id"] not in _payments_by_id(client)
    assert client.get(f"/api/payments/{payment['id']}").status_code == 404


def test_list_filter_by_status(client):
    customer = _create_customer(client)
    a = _create_payment(client, customer)
    _create_payment(client, customer)
    client.post("/api/payments/verify", json={"ids": [a["id"]], "businessDate": "2025-01-20"})

    verified = client.get("/api/payments", params={"status": "Verified"}).json()
    assert [p["id"] for p in verified] == [a["id"]]


def test_integrity_report(client):
    customer = _create_customer(client)
    payment = _create_payment(client, customer)
    client.put(
        f"/api/customers/{customer['id']}",
        json={"name": "Renamed", "contact": "Wang", "phone": "138-0"},
    )

    report = client.get("/api/payments/integrity").json()

    assert report["orphanedPayments"] == []
    assert report["staleCustomerNames"] == [{
        "paymentId": payment["id"],
        "customerId": customer["id"],
        "customerName": "A Co",
        "currentName": "Renamed",
    }]


def test_store_failure_during_verify(client, db_path):
    customer = _create_customer(client)
    payments = [_create_payment(client, customer) for _ in range(3)]

    conn = sqlite3.connect(db_path)
    try:
        conn.execute(
            "CREATE TRIGGER fail_verify BEFORE UPDATE ON payments "
            f"WHEN NEW.id = '{payments[-1]['id']}' "
            "BEGIN SELECT RAISE(FAIL, 'disk on fire'); END"
        )
        conn.commit()
    finally:
        conn.close()

    resp = client.post("/api/payments/verify", json={
        "ids": [p["id"] for p in payments], "businessDate": "2025-01-20",
    })

    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to verify payments"}
    stored = _payments_by_id(client)
    assert all(stored[p["id"]]["status"] == "Unverified" for p in payments)


# --- sheet ---


def test_sheet_round_trip(client):
    assert client.get("/api/sheet/load").json() == {"data": None}

    document = {"rows": [{"cells": ["a", 1, None]}], "version": 2}
    resp = client.post("/api/sheet/save", json={"sheetData": document})
    assert resp.json() == {"success": True}

    assert client.get("/api/sheet/load").json() == {"data": document}


# --- wire format ---


def test_created_at_same_on_create_and_read(client):
    customer = _create_customer(client)
    payment = _create_payment(client, customer)

    listed = {c["id"]: c for c in client.get("/api/customers").json()}
    assert listed[customer["id"]]["createdAt"] == customer["createdAt"]
    fetched = client.get(f"/api/payments/{payment['id']}").json()
    assert fetched["createdAt"] == payment["createdAt"]

    stamp = datetime.fromisoformat(fetched["createdAt"].replace("Z", "+00:00"))
    assert stamp.utcoffset().total_seconds() == 0


def test_string_amount_keeps_trailing_zeros(client):
    customer = _create_customer(client)
    payment = _create_payment(client, customer, amount="1000.00")

    assert payment["amount"] == "1000.00"
    assert client.get(f"/api/payments/{payment['id']}").json()["amount"] == "1000.00"


def test_malformed_body_gets_error_envelope(client):
    resp = client.post("/api/payments", json={"date": "2025-01-15", "amount": "lots"})

    assert resp.status_code == 422
    assert resp.json() == {"error": "Invalid request"}
    assert "lots" not in resp.text


def test_malformed_query_gets_error_envelope(client):
    resp = client.get("/api/payments", params={"status": "Pending"})

    assert resp.status_code == 422
    assert resp.json() == {"error": "Invalid request"}


# --- store location ---


def test_sqlite_file_in_missing_folder(tmp_path):
    db_file = tmp_path / "nested" / "store" / "ledger.db"
    app = create_app(database_url=f"sqlite+aiosqlite:///{db_file}", seed=False)

    with TestClient(app) as c:
        assert c.get("/health").json() == {"status": "ok"}
        assert c.get("/api/customers").json() == []

    assert db_file.exists()


def test_ensure_sqlite_dir_ignores_memory_and_servers(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    ensure_sqlite_dir("sqlite+aiosqlite:///:memory:")
    ensure_sqlite_dir("sqlite+aiosqlite://")
    ensure_sqlite_dir("postgresql+asyncpg://user:pw@db.example/ledger")

    assert list(tmp_path.iterdir()) == []
