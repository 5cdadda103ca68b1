from fastapi.testclient import TestClient
from datetime import date
from freightdesk.main import app

client = TestClient(app)


def test_list_reports_current_status():
    response = client.get("/tracking")
    statuses = {s["id"]: s["current_status"] for s in response.json()}
    assert statuses == {"JOB-240921-001": "Gate-in", "JOB-240921-014": "Planned"}

    response = client.get("/tracking", params={"q": "cma"})
    assert [s["id"] for s in response.json()] == ["JOB-240921-014"]


def test_toggle_milestone():
    response = client.post("/tracking/JOB-240921-001/milestones/4/toggle")
    shipment = response.json()
    assert shipment["current_status"] == "Sailed"
    assert shipment["milestones"][4]["when"] == date.today().isoformat()

    response = client.post("/tracking/JOB-240921-001/milestones/4/toggle")
    shipment = response.json()
    assert shipment["current_status"] == "Gate-in"
    assert shipment["milestones"][4]["done"] is False
    assert shipment["milestones"][4]["when"] is None


def test_toggle_out_of_range():
    assert client.post("/tracking/JOB-240921-001/milestones/9/toggle").status_code == 404
    assert client.post("/tracking/JOB-000/milestones/0/toggle").status_code == 404


def test_record_manual_milestone():
    response = client.post("/tracking/JOB-240921-014/milestones", json={"name": "Delivered", "when": "2025-10-09"})
    shipment = response.json()
    assert shipment["current_status"] == "Delivered"
    assert shipment["milestones"][-1] == {"name": "Delivered", "done": True, "when": "2025-10-09"}


def test_record_manual_milestone_validation():
    response = client.post("/tracking/JOB-240921-014/milestones", json={"name": "Sailed", "when": "09-10-2025"})
    assert response.status_code == 422
    response = client.post("/tracking/JOB-240921-014/milestones", json={"name": "Departed"})
    assert response.status_code == 422
