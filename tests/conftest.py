# tests/conftest.py
from __future__ import annotations

from collections.abc import Iterator
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from dodel.api.v1 import dependencies
from dodel.core.settings import VotePolicy, settings
from dodel.main import app as fastapi_app
from dodel.services.snapshot import SnapshotStore
from dodel.services.store import PostStore

START = datetime(2024, 1, 1, 12, 0, tzinfo=UTC)


class FakeClock:
    """Controllable replacement for the store clock.

    A non-zero ``step`` moves time forward after every read.
    """

    def __init__(self, start: datetime = START) -> None:
        self.now = start
        self.step = timedelta(0)

    def __call__(self) -> datetime:
        current = self.now
        self.now += self.step
        return current

    def advance(self, **kwargs: float) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def store(clock: FakeClock) -> PostStore:
    return PostStore(clock=clock)


@pytest.fixture()
def strict_store(clock: FakeClock) -> PostStore:
    return PostStore(policy=VotePolicy.STRICT, clock=clock)


@pytest.fixture()
def snapshot_path(tmp_path: Path) -> Path:
    return tmp_path / "dodel.json"


@pytest.fixture()
def snapshots(snapshot_path: Path) -> SnapshotStore:
    return SnapshotStore(snapshot_path, allow_missing=True)


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[Path]:
    """Point the process-wide snapshot at a temporary file for every test."""
    live_path = tmp_path / "live.json"
    monkeypatch.setattr(settings, "snapshot_path", str(live_path))
    monkeypatch.setattr(settings, "snapshot_allow_missing", True)
    monkeypatch.setattr(settings, "checkpoint_interval_seconds", 0.0)
    dependencies.get_store.cache_clear()
    dependencies.get_snapshot_store.cache_clear()
    try:
        yield live_path
    finally:
        dependencies.get_store.cache_clear()
        dependencies.get_snapshot_store.cache_clear()


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture()
def client(app: FastAPI, store: PostStore) -> Iterator[TestClient]:
    """API client whose requests are served by the ``store`` fixture."""
    app.dependency_overrides[dependencies.get_store] = lambda: store
    try:
        with TestClient(app, base_url="http://test") as test_client:
            yield test_client
    finally:
        app.dependency_overrides.pop(dependencies.get_store, None)
