from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from API_LAYER.app import app


@pytest.fixture
def db():
    """API tests must NOT hit a real DB."""
    db = MagicMock()
    db.project.find_first = AsyncMock(return_value=None)
    db.task.create = AsyncMock(return_value=SimpleNamespace(id="t1"))
    db.item.create = AsyncMock(return_value=SimpleNamespace(id="i1"))
    db.project.create = AsyncMock(return_value=SimpleNamespace(id="n1"))
    return db


@pytest.fixture
def client(db):
    app.state.db = db
    yield TestClient(app)
    app.state.db = None
