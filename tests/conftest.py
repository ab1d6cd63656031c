"""
Fixtures partagées : DB SQLite temporaire, token admin de test.
DB_PATH est lu à l'import de codex_site.database : à fixer avant tout import.
"""
import sys, os, tempfile
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

os.environ["DB_PATH"] = os.path.join(tempfile.mkdtemp(prefix="codex_site_"), "test.db")
os.environ["ADMIN_TOKEN"] = "test-token"

import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def client():
    """Client de test, tables recréées à chaque test."""
    from codex_site.api.main import app
    from codex_site.database import ENGINE
    from codex_site.models import Base
    Base.metadata.drop_all(bind=ENGINE)
    Base.metadata.create_all(bind=ENGINE)

    with TestClient(app) as c:
        yield c
