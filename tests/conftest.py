# Imports for testing tools
import pytest
from fastapi.testclient import TestClient
from unittest.mock import AsyncMock, MagicMock

# Import your application code
from lightbnb.main import app
from lightbnb.database import Database, get_db


# --- Connection Provider Mock ---
@pytest.fixture(scope="function")
def mock_db():
    """
    A stand-in for the pooled connection. Tests set
    mock_db.execute.return_value (or side_effect) to the rows the store would return.
    """
    db = MagicMock(spec=Database)
    db.execute = AsyncMock(return_value=[])
    db.dispose = AsyncMock()
    return db


# --- API Test Client Fixture ---
@pytest.fixture(scope="function")
def client(mock_db, mocker):
    """Provides a TestClient whose routes talk to mock_db."""
    # The lifespan must not build a real engine
    mocker.patch("lightbnb.main.create_database", return_value=mock_db)

    app.dependency_overrides[get_db] = lambda: mock_db

    with TestClient(app) as c:
        yield c

    # Clean up overrides
    app.dependency_overrides.clear()
