from fastapi.testclient import TestClient
from freightdesk.main import app

client = TestClient(app)


def test_list_disputes():
    response = client.get("/disputes", params={"status": "Investigating"})
    assert [d["id"] for d in response.json()] == ["DSP-1002"]


def test_raise_dispute_copies_customer():
    response = client.post("/disputes", json={"invoice_id": "INV-2509-001", "reason": " Wrong container size "})
    assert response.status_code == 201
    dispute = response.json()
    assert dispute["id"] == "DSP-1003"
    assert dispute["customer"] == "Acme Textiles Pvt Ltd"
    assert dispute["reason"] == "Wrong container size"
    assert dispute["status"] == "Open"


def test_raise_dispute_on_unknown_invoice():
    response = client.post("/disputes", json={"invoice_id": "INV-NOPE", "reason": "?"})
    assert response.status_code == 404


def test_resolution_defaults():
    response = client.post("/disputes/DSP-1001/resolve")
    assert response.json()["status"] == "Resolved"
    assert response.json()["resolution"] == "Credit note issued"

    response = client.post("/disputes/DSP-1002/reject", json={"resolution": "Billed once only"})
    assert response.json()["status"] == "Rejected"
    assert response.json()["resolution"] == "Billed once only"


def test_investigate_only_from_open():
    assert client.post("/disputes/DSP-1001/investigate").json()["status"] == "Investigating"
    assert client.post("/disputes/DSP-1002/investigate").status_code == 409
    client.post("/disputes/DSP-1001/resolve")
    assert client.post("/disputes/DSP-1001/reject").status_code == 409
