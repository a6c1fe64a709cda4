"""Shared fixtures: a throwaway SQLite file database and uploads dir per test."""
import pytest
from fastapi.testclient import TestClient

from account_service.core.config import Settings
from account_service.core.db import Database
from account_service.core.security import PasswordHasher
from account_service.main import create_app
from account_service.services.accounts import AccountService
from account_service.services.storage import UploadStorage


@pytest.fixture
def settings(tmp_path):
    return Settings(
        DATABASE_URL=f"sqlite:///{tmp_path / 'accounts.db'}",
        UPLOADS_DIR=str(tmp_path / "uploads"),
        BCRYPT_ROUNDS=4,
        DB_CONNECT_ATTEMPTS=1,
        DB_RETRY_BASE_DELAY=0.0,
        LOG_LEVEL="DEBUG",
    )


@pytest.fixture
def database(settings):
    db = Database(settings)
    db.create_all()
    yield db
    db.dispose()


@pytest.fixture
def storage(settings):
    return UploadStorage(settings.UPLOADS_DIR)


@pytest.fixture
def accounts(database, storage):
    return AccountService(database, PasswordHasher(rounds=4), storage)


@pytest.fixture
def client(settings):
    app = create_app(settings)
    with TestClient(app) as c:
        yield c
