"""
Test configuration for pytest
"""

import os

# Test environment variables, set before any settings are read
os.environ["JWT_SECRET_KEY"] = "test-jwt-secret"
os.environ["STORAGE_BACKEND"] = "memory"
os.environ["RUN_FIXTURE_MIGRATION"] = "false"
os.environ["DEBUG"] = "false"

import json
import shutil
from pathlib import Path
from typing import Any, Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import Engine

from sportsbar.core.database import build_engine
from sportsbar.main import create_app
from sportsbar.storage import DatabaseStorage, MemoryStorage, Storage
from sportsbar.storage.fixtures import DEFAULT_FIXTURES_DIR


@pytest.fixture
def engine() -> Generator[Engine, None, None]:
    """Fresh in-memory SQLite database for each test"""
    engine = build_engine("sqlite:///:memory:")
    yield engine
    engine.dispose()


@pytest.fixture(params=["memory", "database"])
def storage(request) -> Storage:
    """Every contract test runs against both adapters"""
    if request.param == "memory":
        return MemoryStorage()
    return DatabaseStorage(request.getfixturevalue("engine"))


@pytest.fixture
def fixtures_dir(tmp_path: Path) -> Path:
    """Writable copy of the bundled fixtures"""
    target = tmp_path / "fixtures"
    shutil.copytree(DEFAULT_FIXTURES_DIR, target)
    return target


@pytest.fixture
def write_fixture(fixtures_dir: Path):
    """Overwrite one fixture file in the temporary fixtures directory"""

    def write(file_name: str, content: Any) -> None:
        with open(fixtures_dir / file_name, "w", encoding="utf-8") as f:
            if isinstance(content, str):
                f.write(content)
            else:
                json.dump(content, f)

    return write


@pytest.fixture
def client(storage: Storage) -> Generator[TestClient, None, None]:
    with TestClient(create_app(storage=storage)) as test_client:
        yield test_client


@pytest.fixture
def admin_headers(client: TestClient) -> dict:
    """Register the first admin account and log in"""
    response = client.post(
        "/api/auth/register",
        json={"username": "manager", "email": "manager@example.com", "password": "s3cret-pass"},
    )
    assert response.status_code == 201
    response = client.post("/api/auth/login", json={"username": "manager", "password": "s3cret-pass"})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}
