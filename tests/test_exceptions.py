from fastapi.testclient import TestClient
from datetime import date
from freightdesk.main import app
from freightdesk.api.exceptions import action_queue, compute_kpis
from freightdesk.db.memory import rows

client = TestClient(app)


def test_list_and_filter():
    assert len(client.get("/exceptions").json()) == 4

    response = client.get("/exceptions", params={"priority": "High"})
    assert [e["exception_id"] for e in response.json()] == ["EX-1024", "EX-1007"]

    response = client.get("/exceptions", params={"owner": "Priya"})
    assert [e["exception_id"] for e in response.json()] == ["EX-1019"]

    response = client.get("/exceptions", params={"q": "customs"})
    assert [e["exception_id"] for e in response.json()] == ["EX-1024"]


def test_owners_in_first_seen_order():
    assert client.get("/exceptions/owners").json() == ["Unassigned", "Priya", "Rohan", "Aditi"]


def test_kpis():
    kpis = client.get("/exceptions/kpis").json()
    assert kpis == {"open": 4, "high": 2, "avg_resolution_hours": 6.2, "resolved_today": 0}


def test_kpis_clamp_and_empty():
    assert compute_kpis([]).avg_resolution_hours == 0.0
    one = rows("exceptions")[:1]
    assert compute_kpis(one).avg_resolution_hours == 2.1
    assert compute_kpis(rows("exceptions") * 3).avg_resolution_hours == 9.8


def test_queue_orders_by_priority_then_status():
    queue = client.get("/exceptions/queue").json()
    assert [e["exception_id"] for e in queue] == ["EX-1024", "EX-1007", "EX-1019", "EX-1012"]

    client.post("/exceptions/EX-1024/resolve")
    queue = client.get("/exceptions/queue").json()
    assert [e["exception_id"] for e in queue] == ["EX-1007", "EX-1019", "EX-1012"]


def test_queue_size_limit():
    assert len(action_queue(rows("exceptions"), size=2)) == 2


def test_create_exception():
    response = client.post("/exceptions", json={
        "shipment_id": "SH-9200", "route": "INNSA → NLRTM", "priority": "Medium",
    }, headers={"X-Actor": "Neha"})
    assert response.status_code == 201
    record = response.json()
    assert record["exception_id"] == "EX-1025"
    assert record["status"] == "Open"
    assert record["owner"] == "Unassigned"
    assert record["created_at"] == date.today().isoformat()
    assert record["activity"] == [{"at": date.today().isoformat(), "by": "Neha", "text": "Exception created"}]


def test_assign_owner():
    response = client.post("/exceptions/EX-1024/assign", json={"owner": "Priya"}, headers={"X-Actor": "Lead"})
    record = response.json()
    assert record["owner"] == "Priya"
    assert record["last_updated_at"] == date.today().isoformat()
    assert record["activity"][-1]["text"] == "Assigned owner: Priya"
    assert record["activity"][-1]["by"] == "Lead"


def test_drawer_update_maps_me_to_actor():
    response = client.post(
        "/exceptions/EX-1024/update",
        json={"owner": "Me", "status": "In Progress", "root_cause": "Customs Query", "notes": "Broker chased"},
        headers={"X-Actor": "Kiran"},
    )
    assert response.status_code == 200
    record = response.json()
    assert record["owner"] == "Kiran"
    assert record["status"] == "In Progress"
    assert record["notes"] == "Broker chased"
    assert record["activity"][-1]["text"] == (
        "Updated: Owner → Kiran • Status → In Progress • Notes added. Root cause: Customs Query."
    )


def test_drawer_update_without_changes():
    response = client.post(
        "/exceptions/EX-1019/update",
        json={"owner": "Priya", "status": "In Progress", "root_cause": "Carrier Delay"},
    )
    record = response.json()
    assert record["notes"] == "Carrier indicated vessel schedule shift. Updating ETA."
    assert record["activity"][-1]["text"] == "Updated: No changes. Root cause: Carrier Delay."


def test_escalation_emits_critical_notification():
    response = client.post("/exceptions/EX-1012/update", json={"owner": "Rohan", "status": "Escalated", "root_cause": "Customer Pending"})
    assert response.json()["status"] == "Escalated"

    alert = rows("notifications")[0]
    assert alert.title == "Exception Escalated"
    assert alert.severity.value == "Critical"
    assert alert.type.value == "Shipment"
    assert alert.related_id == "EX-1012"


def test_illegal_drawer_transition():
    # Waiting External cannot drop back to Open
    response = client.post("/exceptions/EX-1012/update", json={"status": "Open", "root_cause": "Other"})
    assert response.status_code == 409
    assert response.json()["detail"] == "Cannot move to Open exception EX-1012 while it is Waiting External"


def test_quick_resolve():
    response = client.post("/exceptions/EX-1007/resolve")
    record = response.json()
    assert record["status"] == "Resolved"
    assert record["sla_state"] == "ok"
    assert record["sla_text"] == "Resolved"
    assert record["activity"][-1]["text"] == "Marked Resolved"
    assert client.get("/exceptions/kpis").json()["resolved_today"] == 1

    assert client.post("/exceptions/EX-1007/resolve").status_code == 409

    # Reopening is allowed through the drawer
    response = client.post("/exceptions/EX-1007/update", json={"status": "Open", "root_cause": "Other"})
    assert response.json()["status"] == "Open"


def test_unknown_exception():
    assert client.get("/exceptions/EX-0000").status_code == 404
    assert client.post("/exceptions/EX-0000/resolve").status_code == 404


def test_notes_only_update_keeps_resolved_exception_closed():
    client.post("/exceptions/EX-1007/resolve")

    response = client.post(
        "/exceptions/EX-1007/update",
        json={"root_cause": "Other", "notes": "closing note"},
        headers={"X-Actor": "Kiran"},
    )
    assert response.status_code == 200
    record = response.json()
    assert record["status"] == "Resolved"
    assert record["owner"] == "Aditi"
    assert record["notes"] == "closing note"
    assert record["activity"][-1]["text"] == "Updated: Notes added. Root cause: Other."


def test_notes_only_update_keeps_escalated_exception():
    client.post("/exceptions/EX-1024/update", json={"status": "Escalated", "root_cause": "Customs Query"})
    alerts_before = len(rows("notifications"))

    response = client.post("/exceptions/EX-1024/update", json={"root_cause": "Customs Query", "notes": "Broker on it"})
    record = response.json()
    assert record["status"] == "Escalated"
    assert record["owner"] == "Unassigned"
    # Staying Escalated does not raise a second alert
    assert len(rows("notifications")) == alerts_before


def test_drawer_update_requires_root_cause():
    response = client.post("/exceptions/EX-1024/update", json={"notes": "no cause given"})
    assert response.status_code == 422
