from fastapi.testclient import TestClient
from freightdesk.main import app

client = TestClient(app)


def test_summary_from_seed():
    summary = client.get("/dashboard/summary").json()
    assert summary == {
        "active_bookings": 2,
        "pending_quote_approvals": 2,
        "open_rate_requests": 3,
        "open_exceptions": 4,
        "critical_exceptions": 2,
        "customs_holds": 1,
        "overdue_invoices": 1,
        "outstanding_receivables_inr": 708384.0,
        "unallocated_payments": 1,
        "open_disputes": 2,
        "pending_vendors": 2,
        "unread_notifications": 2,
    }


def test_summary_tracks_workflow_changes():
    client.post("/exceptions/EX-1024/resolve")
    client.post("/bookings/BK-250916-002/cancel")
    client.post("/invoices/INV-2509-002/mark-paid")

    summary = client.get("/dashboard/summary").json()
    assert summary["customs_holds"] == 0
    assert summary["critical_exceptions"] == 1
    assert summary["active_bookings"] == 1
    assert summary["overdue_invoices"] == 0
    assert summary["outstanding_receivables_inr"] == 519384.0


def test_overview_page():
    response = client.get("/")
    assert response.status_code == 200
    assert "text/html" in response.headers["content-type"]
    assert "Freight Desk Back Office" in response.text
    assert "EX-1024" in response.text
    assert "708,384.00" in response.text


def test_resolve_from_overview_form():
    response = client.post(
        "/ui/exceptions/EX-1024/resolve",
        data={"actor": "Desk Lead"},
        follow_redirects=False,
    )
    assert response.status_code == 303
    assert response.headers["location"] == "/"

    record = client.get("/exceptions/EX-1024").json()
    assert record["status"] == "Resolved"
    assert record["activity"][-1]["by"] == "Desk Lead"
