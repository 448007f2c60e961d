import asyncio
from pathlib import Path

import pytest

from dodel.services.checkpoint import CheckpointWorker
from dodel.services.snapshot import SnapshotStore
from dodel.services.store import PostStore


@pytest.mark.asyncio
async def test_disabled_worker_does_not_start(store: PostStore, snapshots: SnapshotStore) -> None:
    worker = CheckpointWorker(store, snapshots, interval=0)
    await worker.start()
    assert worker.enabled is False
    assert worker._task is None
    await worker.stop()


@pytest.mark.asyncio
async def test_run_once_writes_snapshot(
    store: PostStore, snapshots: SnapshotStore, snapshot_path: Path
) -> None:
    store.submit_post("alice", "hello", "red")
    worker = CheckpointWorker(store, snapshots, interval=60)

    assert await worker.run_once() is True
    assert worker.state.saved == 1
    assert snapshot_path.exists()


@pytest.mark.asyncio
async def test_run_once_counts_failures(store: PostStore, snapshots: SnapshotStore, mocker) -> None:
    mocker.patch.object(snapshots, "checkpoint", return_value=False)
    worker = CheckpointWorker(store, snapshots, interval=60)

    assert await worker.run_once() is False
    assert worker.state.failed == 1
    assert worker.state.saved == 0


@pytest.mark.asyncio
async def test_worker_saves_periodically(store: PostStore, snapshots: SnapshotStore, mocker) -> None:
    checkpoint = mocker.patch.object(snapshots, "checkpoint", return_value=True)
    worker = CheckpointWorker(store, snapshots, interval=0.1)

    await worker.start()
    await asyncio.sleep(0.5)
    await worker.stop()

    assert checkpoint.call_count >= 1
    assert worker.state.saved == checkpoint.call_count
    assert worker._task is None


@pytest.mark.asyncio
async def test_stop_is_prompt(store: PostStore, snapshots: SnapshotStore, mocker) -> None:
    checkpoint = mocker.patch.object(snapshots, "checkpoint", return_value=True)
    worker = CheckpointWorker(store, snapshots, interval=3600)

    await worker.start()
    await asyncio.wait_for(worker.stop(), timeout=1.0)

    checkpoint.assert_not_called()


@pytest.mark.asyncio
async def test_worker_survives_unexpected_errors(
    store: PostStore, snapshots: SnapshotStore, mocker
) -> None:
    checkpoint = mocker.patch.object(snapshots, "checkpoint", side_effect=RuntimeError("disk gone"))
    worker = CheckpointWorker(store, snapshots, interval=0.1)

    await worker.start()
    await asyncio.sleep(0.5)
    assert worker._task is not None and not worker._task.done()
    await worker.stop()

    assert checkpoint.call_count >= 2
    assert worker.state.failed == checkpoint.call_count
    assert worker.state.saved == 0
