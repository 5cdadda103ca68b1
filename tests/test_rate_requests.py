from fastapi.testclient import TestClient
from freightdesk.main import app
from freightdesk.db.memory import get_record

client = TestClient(app)


def test_list_and_filter():
    response = client.get("/rate-requests")
    assert len(response.json()) == 3

    response = client.get("/rate-requests", params={"q": "rohit"})
    assert [r["id"] for r in response.json()] == ["CR-240917-003"]

    response = client.get("/rate-requests", params={"status": "Sales Review"})
    assert [r["id"] for r in response.json()] == ["CR-240917-002"]


def test_create_uses_lane_defaults():
    response = client.post("/rate-requests", json={"customer": "Harbor Foods", "target_rate_inr": 250000})
    assert response.status_code == 201
    request = response.json()
    assert request["status"] == "New"
    assert request["origin_code"] == "INNSA"
    assert request["destination_code"] == "DEHAM"
    assert request["incoterm"] == "FOB"


def test_assign_moves_to_review():
    response = client.post("/rate-requests/CR-240917-001/assign", json={"role": "Pricing"})
    assert response.status_code == 200
    request = response.json()
    assert request["status"] == "Pricing Review"
    assert request["assignee_name"] == "Auto-Pricing"


def test_convert_creates_draft_quote():
    response = client.post("/rate-requests/CR-240917-001/convert")
    assert response.status_code == 200
    request = response.json()
    assert request["status"] == "Quoted"

    quote = get_record("quotes", request["quote_ref"], "Quote")
    assert quote.status.value == "Draft"
    assert quote.customer == "Acme Textiles Pvt Ltd"
    assert quote.price_inr == 1500000
    assert quote.source_request_id == "CR-240917-001"

    # A quoted request is closed for further actions
    assert client.post("/rate-requests/CR-240917-001/reject").status_code == 409


def test_convert_without_target_rate_prices_at_zero():
    response = client.post("/rate-requests/CR-240917-003/convert")
    quote = get_record("quotes", response.json()["quote_ref"], "Quote")
    assert quote.price_inr == 0


def test_reject_unknown_request():
    assert client.post("/rate-requests/CR-000000-000/reject").status_code == 404
