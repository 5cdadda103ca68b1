from fastapi.testclient import TestClient
from freightdesk.main import app

client = TestClient(app)


def test_list_newest_first():
    response = client.get("/notifications")
    assert [n["id"] for n in response.json()] == ["ALR-0001", "ALR-0004", "ALR-0002", "ALR-0003"]


def test_filters():
    response = client.get("/notifications", params={"status": "Unread"})
    assert {n["id"] for n in response.json()} == {"ALR-0001", "ALR-0002"}

    response = client.get("/notifications", params={"type": "Billing", "severity": "Critical"})
    assert [n["id"] for n in response.json()] == ["ALR-0003"]

    response = client.get("/notifications", params={"q": "BK-250916-001"})
    assert [n["id"] for n in response.json()] == ["ALR-0004"]


def test_mark_read():
    response = client.post("/notifications/mark", json={"ids": ["ALR-0001", "ALR-0002"], "status": "Read"})
    assert response.status_code == 200
    assert {n["status"] for n in response.json()} == {"Read"}
    assert client.get("/notifications", params={"status": "Unread"}).json() == []


def test_mark_unknown_changes_nothing():
    response = client.post("/notifications/mark", json={"ids": ["ALR-0001", "ALR-9999"], "status": "Resolved"})
    assert response.status_code == 404
    assert client.get("/notifications/ALR-0001").json()["status"] == "Unread"


def test_delete():
    response = client.post("/notifications/delete", json={"ids": ["ALR-0003", "ALR-0004", "ALR-9999"]})
    assert response.json() == {"deleted": 2}
    assert client.get("/notifications/ALR-0003").status_code == 404
    assert len(client.get("/notifications").json()) == 2
