"""Tests for loading and saving the snapshot around the application lifespan."""

import json
import time
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from dodel.core.settings import settings
from dodel.services.errors import PersistenceError


def _write_snapshot(path: Path) -> None:
    now = int(time.time())
    path.write_text(
        json.dumps(
            {
                "posts": [
                    {"id": "p1", "topic": "", "user": "alice", "text": "loaded", "timestamp": now},
                    {"id": "p2", "topic": "p1", "user": "bob", "text": "reply", "timestamp": now},
                ],
                "votes": [{"user": "bob", "post": "p1", "upvote": True, "time": now}],
            }
        ),
        encoding="utf-8",
    )


def test_snapshot_loaded_on_startup_and_saved_on_shutdown(app, isolated_settings: Path) -> None:
    _write_snapshot(isolated_settings)

    with TestClient(app) as client:
        feed = client.get("/api/v1/posts").json()
        assert [(post["id"], post["votes"], post["comments"]) for post in feed] == [("p1", 1, 1)]

        response = client.post("/api/v1/posts", json={"user": "carol", "text": "new"})
        new_id = response.json()["id"]

    document = json.loads(isolated_settings.read_text(encoding="utf-8"))
    assert [entry["id"] for entry in document["posts"]] == ["p1", "p2", new_id]
    assert document["posts"][0]["votes"] == 1


def test_missing_snapshot_starts_empty(app, isolated_settings: Path) -> None:
    with TestClient(app) as client:
        assert client.get("/api/v1/posts").json() == []
    assert json.loads(isolated_settings.read_text(encoding="utf-8")) == {"posts": [], "votes": []}


def test_missing_snapshot_is_fatal_when_required(
    app, isolated_settings: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(settings, "snapshot_allow_missing", False)

    with pytest.raises(PersistenceError):
        with TestClient(app):
            pass
    assert not isolated_settings.exists()


def test_corrupt_snapshot_is_fatal(app, isolated_settings: Path) -> None:
    isolated_settings.write_text("{broken", encoding="utf-8")

    with pytest.raises(PersistenceError):
        with TestClient(app):
            pass
    # The unreadable snapshot is left in place for inspection.
    assert isolated_settings.read_text(encoding="utf-8") == "{broken"


def test_snapshot_saved_when_worker_stop_fails(app, isolated_settings: Path, mocker) -> None:
    mocker.patch("dodel.main.CheckpointWorker.stop", side_effect=RuntimeError("stop failed"))

    with pytest.raises(RuntimeError, match="stop failed"):
        with TestClient(app) as client:
            response = client.post("/api/v1/posts", json={"user": "carol", "text": "kept"})
            new_id = response.json()["id"]

    document = json.loads(isolated_settings.read_text(encoding="utf-8"))
    assert [entry["id"] for entry in document["posts"]] == [new_id]
