from fastapi.testclient import TestClient
from freightdesk.main import app

client = TestClient(app)


def test_list_and_search():
    assert len(client.get("/payments").json()) == 2
    response = client.get("/payments", params={"q": "acme"})
    assert [p["id"] for p in response.json()] == ["PMT-2509-101"]


def test_record_payment_status_follows_invoice():
    response = client.post("/payments", json={
        "received_on": "2025-09-30", "method": "UPI", "amount_inr": 5000,
    })
    assert response.status_code == 201
    assert response.json()["status"] == "Unallocated"

    response = client.post("/payments", json={
        "received_on": "2025-09-30", "method": "Card", "amount_inr": 5000, "invoice_id": "INV-2509-001",
    })
    assert response.json()["status"] == "Allocated"


def test_record_payment_validation():
    response = client.post("/payments", json={"received_on": "2025-09-30", "method": "UPI", "amount_inr": 0})
    assert response.status_code == 422
    response = client.post("/payments", json={"received_on": "2025-09-30", "method": "Cheque", "amount_inr": 10})
    assert response.status_code == 422


def test_allocate_unallocated_payment():
    response = client.post("/payments/PMT-2509-102/allocate", json={"invoice_id": "INV-2509-002"})
    assert response.status_code == 200
    assert response.json()["status"] == "Allocated"
    assert response.json()["invoice_id"] == "INV-2509-002"

    # Already allocated
    assert client.post("/payments/PMT-2509-102/allocate").status_code == 409


def test_allocate_without_invoice_uses_placeholder():
    response = client.post("/payments/PMT-2509-102/allocate")
    assert response.json()["invoice_id"] == "INV-TBD"


def test_allocate_to_unknown_invoice():
    response = client.post("/payments/PMT-2509-102/allocate", json={"invoice_id": "INV-NOPE"})
    assert response.status_code == 404


def test_refund():
    assert client.post("/payments/PMT-2509-101/refund").json()["status"] == "Refunded"
    assert client.post("/payments/PMT-2509-101/refund").status_code == 409


def test_record_payment_against_unknown_invoice():
    response = client.post("/payments", json={
        "received_on": "2025-09-30", "method": "UPI", "amount_inr": 5000, "invoice_id": "INV-NOPE",
    })
    assert response.status_code == 404
    assert response.json()["detail"] == "Invoice INV-NOPE not found"
    assert len(client.get("/payments").json()) == 2


def test_record_payment_rejects_timestamp_date():
    response = client.post("/payments", json={"received_on": 1759622400, "method": "UPI", "amount_inr": 10})
    assert response.status_code == 422
    assert "Date must be in YYYY-MM-DD format" in response.text
