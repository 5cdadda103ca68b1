from fastapi.testclient import TestClient
from freightdesk.main import app
from freightdesk.core.audit import audit_repo
from freightdesk.core.config import settings
from freightdesk.core.middleware import action_type_for, record_id_for
from freightdesk.db.memory import get_record
from freightdesk.schemas.audit import AuditStatus
import hashlib

client = TestClient(app)

EMPTY_HASH = "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"


def test_health():
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}

    health_log = next(l for l in audit_repo.get_all() if l.endpoint == "/health")
    assert health_log.action_type == "HEALTH_CHECK"
    assert health_log.status == AuditStatus.SUCCESS
    assert health_log.input_hash == EMPTY_HASH
    assert health_log.actor == "You"


def test_action_is_audited_with_actor_and_hashes():
    body = b'{"remarks": "ok"}'
    response = client.post(
        "/quotes/QT-240917-001/approve",
        content=body,
        headers={"X-Actor": "Meera", "Content-Type": "application/json"},
    )
    assert response.status_code == 200

    entry = next(l for l in audit_repo.get_all() if l.endpoint == "/quotes/QT-240917-001/approve")
    assert entry.action_type == "APPROVE"
    assert entry.actor == "Meera"
    assert entry.input_hash == hashlib.sha256(body).hexdigest()
    assert entry.output_hash == hashlib.sha256(response.content).hexdigest()
    assert entry.status == AuditStatus.SUCCESS


def test_failures_are_audited():
    client.post("/quotes/QT-240916-003/lock")
    client.get("/no-such-page")

    logs = audit_repo.get_all()
    lock_log = next(l for l in logs if l.endpoint == "/quotes/QT-240916-003/lock")
    assert lock_log.status == AuditStatus.FAILURE
    missing_log = next(l for l in logs if l.endpoint == "/no-such-page")
    assert missing_log.action_type == "READ"
    assert missing_log.status == AuditStatus.FAILURE


def test_action_type_naming():
    assert action_type_for("GET", "/quotes") == "READ"
    assert action_type_for("POST", "/invoices/INV-1/mark-paid") == "MARK_PAID"
    assert action_type_for("PUT", "/bookings/BK-1/ref") == "REF"
    assert action_type_for("GET", "/health") == "HEALTH_CHECK"


def test_audit_trail_endpoint():
    client.get("/quotes")
    trail = client.get("/audit").json()
    assert trail[0]["endpoint"] == "/quotes"
    assert trail[0]["action_type"] == "READ"


def test_admin_reset_restores_seed():
    client.post("/quotes/QT-240917-001/approve")
    response = client.post("/admin/reset")
    assert response.json() == {"status": "reset"}
    assert get_record("quotes", "QT-240917-001", "Quote").status.value == "Pending Approval"


def test_admin_reset_can_be_disabled(monkeypatch):
    monkeypatch.setattr(settings, "ENABLE_ADMIN_RESET", False)
    assert client.post("/admin/reset").status_code == 403


def test_record_id_and_status_code_are_captured():
    client.post("/quotes/QT-240917-001/approve", headers={"X-Actor": "Meera"})
    client.post("/quotes/QT-240916-003/lock")

    logs = audit_repo.get_all()
    approve = next(l for l in logs if l.endpoint == "/quotes/QT-240917-001/approve")
    assert approve.record_id == "QT-240917-001"
    assert approve.status_code == 200
    lock = next(l for l in logs if l.endpoint == "/quotes/QT-240916-003/lock")
    assert lock.status_code == 409
    assert lock.status == AuditStatus.FAILURE


def test_record_id_for_paths():
    assert record_id_for("/quotes") is None
    assert record_id_for("/rates/metrics") is None
    assert record_id_for("/bookings/BK-240920-007/ref") == "BK-240920-007"


def test_audit_trail_filters():
    client.get("/quotes", headers={"X-Actor": "Meera"})
    client.post("/quotes/QT-240917-001/approve", headers={"X-Actor": "Meera"})
    client.post("/quotes/QT-240916-003/lock", headers={"X-Actor": "Ravi"})

    by_actor = client.get("/audit", params={"actor": "meera"}).json()
    assert [e["endpoint"] for e in by_actor] == ["/quotes", "/quotes/QT-240917-001/approve"]

    by_action = client.get("/audit", params={"action_type": "approve"}).json()
    assert [e["actor"] for e in by_action] == ["Meera"]

    by_record = client.get("/audit", params={"record_id": "QT-240916-003"}).json()
    assert len(by_record) == 1
    assert by_record[0]["status"] == "FAILURE"

    failures = client.get("/audit", params={"status": "FAILURE"}).json()
    assert [e["endpoint"] for e in failures] == ["/quotes/QT-240916-003/lock"]
