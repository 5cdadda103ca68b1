import pytest
from freightdesk.core.audit import audit_repo
from freightdesk.db.memory import reset_state


@pytest.fixture(autouse=True)
def fresh_store():
    # Every test starts from the seed data and an empty audit trail
    reset_state()
    audit_repo.clear()
    yield
