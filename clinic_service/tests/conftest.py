import sys
from pathlib import Path

import pytest

# Add the project root to sys.path so that "clinic_service" can be found
# structure: <root>/clinic_service/tests/conftest.py

current_dir = Path(__file__).parent.absolute()
root_dir = current_dir.parent.parent
sys.path.insert(0, str(root_dir))


# ==================== Shared Fixtures ====================

@pytest.fixture
def monday_availability():
    """Weekly availability with one morning window on Mondays."""
    return {
        "monday": [{"isAvailable": True, "start": "09:00", "end": "10:00"}],
        "tuesday": [],
    }


@pytest.fixture
def clients():
    """Small client list used by matcher and search tests."""
    from clinic_service.schemas.clients import ClientRecord

    return [
        ClientRecord(id="c1", first_name="Jane", last_name="Smith", id_number="7802035087081",
                     email="jane@example.com", city="Cape Town"),
        ClientRecord(id="c2", first_name="Jan", last_name="Smithy", email="jan@example.com",
                     city="Durban", occupation="Nurse"),
        ClientRecord(id="c3", first_name="Peter", last_name="Jones", id_number="8001015009087",
                     company="Smith & Co"),
    ]
