"""
Pytest configuration for the showcase backend.

Provides fixtures for:
- Seed records and submission payloads
- Both store backends built on a temporary directory
- A TestClient whose store dependency is overridden
"""

from __future__ import annotations

from pathlib import Path
from typing import Generator, List

import pytest
from fastapi.testclient import TestClient

from core.database import make_engine
from main import app
from schemas.build_schema import BuildRecord
from schemas.form_schema import FormState
from services.store_service import BuildStore, FileBuildStore, KVBuildStore, get_store

from tests.factory import DESCRIPTION, TODAY, make_record


@pytest.fixture
def seed_records() -> List[BuildRecord]:
    return [
        make_record("001", "2025-01-10", tags=["productivity", "tool"]),
        make_record("002", "2025-01-14", tags=["automation"]),
        make_record("003", "2025-01-12", tags=["game", "creative"]),
    ]


@pytest.fixture
def valid_body() -> dict:
    return {
        "projectName": "Lecture Notes Bot",
        "builderName": "Sam Rivera",
        "school": "Rice University",
        "githubUrl": "github.com/samrivera/lecture-notes-bot",
        "description": DESCRIPTION,
        "tags": ["productivity", "tool"],
    }


@pytest.fixture
def valid_state() -> FormState:
    return FormState(
        project_name="Lecture Notes Bot",
        builder_name="Sam Rivera",
        school="Rice University",
        github_url="github.com/samrivera/lecture-notes-bot",
        description=DESCRIPTION,
        tags=("productivity", "tool"),
    )


@pytest.fixture
def file_store(tmp_path: Path, seed_records) -> FileBuildStore:
    store = FileBuildStore(tmp_path / "builds.json", seed_records=seed_records, today=lambda: TODAY)
    store.initialize()
    return store


@pytest.fixture
def kv_store(tmp_path: Path, seed_records) -> KVBuildStore:
    engine = make_engine(f"sqlite:///{tmp_path / 'kv.db'}")
    store = KVBuildStore(engine, "submissions", seed_records=seed_records, today=lambda: TODAY)
    store.initialize()
    return store


@pytest.fixture(params=["file", "kv"])
def store(request) -> BuildStore:
    """Each test using this fixture runs once per backend."""
    return request.getfixturevalue(f"{request.param}_store")


@pytest.fixture
def client(store: BuildStore) -> Generator[TestClient, None, None]:
    app.dependency_overrides[get_store] = lambda: store
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
