"""Periodic snapshot checkpoints.

This module provides the CheckpointWorker class which saves the store to its
snapshot file at a fixed interval while the server runs. Checkpoints are best
effort: a failed save is logged and retried on the next tick.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

from dodel.services.snapshot import SnapshotStore
from dodel.services.store import PostStore

# Configure logger for this module
logger = logging.getLogger(__name__)


@dataclass
class CheckpointState:
    """Counters describing checkpoint outcomes."""

    saved: int = 0
    failed: int = 0


class CheckpointWorker:
    """Saves a store snapshot every ``interval`` seconds in the background."""

    def __init__(self, store: PostStore, snapshots: SnapshotStore, interval: float) -> None:
        """Initialize the worker.

        Args:
            store: Store to capture.
            snapshots: Snapshot location to write to.
            interval: Seconds between checkpoints; values <= 0 disable the worker.
        """
        self.store = store
        self.snapshots = snapshots
        self.interval = interval
        self.state = CheckpointState()
        self._task: asyncio.Task[None] | None = None
        self._stopping = asyncio.Event()

    @property
    def enabled(self) -> bool:
        return self.interval > 0

    async def start(self) -> None:
        """Start the background checkpoint loop."""

        if not self.enabled:
            return

        if self._task is None or self._task.done():
            self._stopping.clear()
            self._task = asyncio.create_task(self._run())
            logger.info("Checkpoint worker started (every %.1fs)", self.interval)

    async def stop(self) -> None:
        """Stop the background checkpoint loop."""

        if self._task is None:
            return

        self._stopping.set()
        await self._task
        self._task = None
        logger.info("Checkpoint worker stopped")

    async def run_once(self) -> bool:
        """Write a single checkpoint off the event loop."""
        ok = await asyncio.to_thread(self.snapshots.checkpoint, self.store)
        if ok:
            self.state.saved += 1
        else:
            self.state.failed += 1
        return ok

    async def _run(self) -> None:
        interval = max(0.1, float(self.interval))

        while not self._stopping.is_set():
            try:
                await asyncio.wait_for(self._stopping.wait(), timeout=interval)
            except TimeoutError:
                pass
            else:
                return

            try:
                await self.run_once()
            except Exception as e:
                logger.error("CheckpointWorker encountered error: %s", e, exc_info=True)
                self.state.failed += 1
