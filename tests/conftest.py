# tests/conftest.py
import sys
from pathlib import Path

# ---------------------------------------------------------
# Ensure project root is on PYTHONPATH BEFORE app imports
# ---------------------------------------------------------
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

# ---------------------------------------------------------
# Now safe to import app + dependencies
# ---------------------------------------------------------
from datetime import date
from unittest.mock import AsyncMock

import pytest

from core.intent import AmbientContext, ProjectRef


MONDAY = date(2026, 10, 19)
WEDNESDAY = date(2026, 10, 21)


@pytest.fixture
def monday():
    return MONDAY


@pytest.fixture
def context():
    """A signed-in user with no project open."""
    return AmbientContext(user_id="user-123")


@pytest.fixture
def willow_creek():
    return ProjectRef(id="p1", title="Willow Creek")


@pytest.fixture
def project_context(willow_creek):
    """A signed-in user looking at the Willow Creek project."""
    return AmbientContext(user_id="user-123", project=willow_creek)


@pytest.fixture
def no_match_lookup():
    lookup = AsyncMock()
    lookup.find_project_by_name.return_value = None
    return lookup


@pytest.fixture
def matching_lookup():
    lookup = AsyncMock()
    lookup.find_project_by_name.return_value = ProjectRef(id="p9", title="Willow Creek Farm")
    return lookup
