from fastapi.testclient import TestClient
from freightdesk.main import app

client = TestClient(app)


def test_list_vendors():
    response = client.get("/vendors", params={"status": "Pending"})
    assert [v["id"] for v in response.json()] == ["VND-0001", "VND-0003"]

    response = client.get("/vendors", params={"q": "27ABCDE"})
    assert [v["id"] for v in response.json()] == ["VND-0001"]


def test_register_vendor():
    response = client.post("/vendors", json={
        "name": "Coastal Movers",
        "category": "Trucking",
        "contact": "Farah Ali",
        "email": "Ops@CoastalMovers.in",
        "gstin": "29abcde1234f1z5",
    })
    assert response.status_code == 201
    vendor = response.json()
    assert vendor["id"] == "VND-0004"
    assert vendor["status"] == "Pending"
    assert vendor["email"] == "ops@coastalmovers.in"
    assert vendor["gstin"] == "29ABCDE1234F1Z5"
    assert client.get("/vendors").json()[-1]["id"] == "VND-0004"


def test_register_vendor_validation():
    base = {"name": "Coastal Movers", "category": "Trucking", "contact": "Farah Ali", "email": "ops@coastal.in"}

    response = client.post("/vendors", json={**base, "gstin": "NOT-A-GSTIN"})
    assert response.status_code == 422
    assert "Invalid GSTIN format" in response.text

    response = client.post("/vendors", json={**base, "email": "no-at-sign"})
    assert response.status_code == 422
    assert "Invalid email address" in response.text

    response = client.post("/vendors", json={**base, "gstin": "  "})
    assert response.status_code == 201
    assert response.json()["gstin"] is None


def test_approve_and_reject():
    assert client.post("/vendors/VND-0001/approve").json()["status"] == "Approved"
    assert client.post("/vendors/VND-0001/approve").status_code == 409
    # An approved vendor can still be rejected later
    assert client.post("/vendors/VND-0001/reject").json()["status"] == "Rejected"
    assert client.post("/vendors/VND-0001/reject").status_code == 409


def test_unknown_vendor():
    assert client.get("/vendors/VND-9999").status_code == 404
