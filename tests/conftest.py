# tests/conftest.py
import os
import sys
import pytest
from pathlib import Path

# Add project root to Python path
project_root = str(Path(__file__).parent.parent)
if project_root not in sys.path:
    sys.path.insert(0, project_root)

# Must be set before core.config is first read
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("WP_BOOK_NONCE_SECRET", "test-secret")

from core.host import Host
from core.plugin import bootstrap
from core.repositories import InMemoryBookRepository, InMemorySettingsStore
from core.sa.database import Database
from core.sa.repositories import SQLBookRepository, SQLSettingsStore
from core.security import Identity, NonceManager

# A fixed point in time so nonces are reproducible
NOW = 1_700_000_000.0


class Clock:
    """Adjustable time source for nonce tests"""

    def __init__(self, now: float = NOW):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return Clock()


@pytest.fixture
def nonces(clock):
    return NonceManager(secret="test-secret", lifetime=86400, clock=clock)


@pytest.fixture
def books():
    """In-memory book repository"""
    return InMemoryBookRepository()


@pytest.fixture
def settings_store():
    return InMemorySettingsStore()


@pytest.fixture
def host(books, settings_store, nonces):
    """Host over the in-memory fakes"""
    return Host(books=books, settings_store=settings_store, nonces=nonces)


@pytest.fixture
def plugin(host):
    """Plugin booted for an admin screen"""
    return bootstrap(host, admin=True)


@pytest.fixture
def admin():
    return Identity.for_role(1, "administrator", "admin-session")


@pytest.fixture
def editor():
    return Identity.for_role(2, "editor", "editor-session")


@pytest.fixture
def author():
    return Identity.for_role(3, "author", "author-session")


@pytest.fixture
def subscriber():
    return Identity.for_role(4, "subscriber", "subscriber-session")


@pytest.fixture
def test_db_path(tmp_path):
    """Path of a throwaway SQLite database"""
    return tmp_path / "test_books.db"


@pytest.fixture
def database(test_db_path):
    """Test database with the schema created"""
    db = Database(f"sqlite:///{test_db_path}")
    db.init_db()
    yield db
    db.engine.dispose()


@pytest.fixture
def db_session(database):
    """Create a new database session for a test"""
    session = database.get_session()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def sql_books(db_session):
    return SQLBookRepository(db_session)


@pytest.fixture
def sql_settings(db_session):
    return SQLSettingsStore(db_session)
