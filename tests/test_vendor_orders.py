from fastapi.testclient import TestClient
from freightdesk.main import app

client = TestClient(app)


def test_list_orders():
    response = client.get("/vendor-orders", params={"status": "In Progress"})
    assert [o["id"] for o in response.json()] == ["VO-102"]

    response = client.get("/vendor-orders", params={"q": "job-22451"})
    assert [o["id"] for o in response.json()] == ["VO-101"]


def test_order_lifecycle():
    assert client.post("/vendor-orders/VO-101/start").json()["status"] == "In Progress"
    assert client.post("/vendor-orders/VO-101/start").status_code == 409
    assert client.post("/vendor-orders/VO-101/complete").json()["status"] == "Completed"
    assert client.post("/vendor-orders/VO-101/cancel").status_code == 409


def test_completed_order_is_closed():
    response = client.post("/vendor-orders/VO-103/cancel")
    assert response.status_code == 409
    assert response.json()["detail"] == "Cannot cancel vendor order VO-103 while it is Completed"


def test_unknown_order():
    assert client.post("/vendor-orders/VO-999/start").status_code == 404
