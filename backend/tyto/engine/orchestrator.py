"""
Sync orchestrator - Serialize Fetch -> Scan -> Aggregate -> Publish runs.

One worker task waits on a single-slot mailbox. ``request_sync`` never
blocks: it drops the signal while a run (or the cooldown after it) is in
progress, and merges it into an already pending signal otherwise, so a
burst of N requests produces at most one extra run.

Blocking work (git, file reads, rendering) runs in worker threads via
``asyncio.to_thread`` so request handlers on the event loop keep serving
reads from the SnapshotStore while a sync is in flight.

State machine:
    IDLE --signal--> RUNNING --(success | failure)--> COOLDOWN --> IDLE
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import os
from datetime import datetime, timezone

from tyto.engine.aggregator import DEFAULT_UNCATEGORIZED_LABEL, Aggregator, BuildResult
from tyto.engine.errors import (
    AggregationError,
    FetchError,
    ScanError,
    SyncBusyError,
    SyncError,
)
from tyto.engine.protocols import Fetcher, Renderer
from tyto.engine.scanner import scan
from tyto.engine.store import SnapshotStore
from tyto.models.scan import DirectoryRecord
from tyto.models.sync import SyncRequestResult, SyncState, SyncStatus

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _is_running_loop(loop: asyncio.AbstractEventLoop) -> bool:
    try:
        return asyncio.get_running_loop() is loop
    except RuntimeError:
        return False


class SyncOrchestrator:
    """Owns the sync trigger mailbox and the pipeline gate"""

    def __init__(
        self,
        store: SnapshotStore,
        fetcher: Fetcher,
        renderer: Renderer,
        remote: str,
        local_path: str | os.PathLike[str],
        cooldown_seconds: float = 1.0,
        uncategorized_label: str = DEFAULT_UNCATEGORIZED_LABEL,
    ):
        self.store = store
        self.fetcher = fetcher
        self.remote = remote
        self.local_path = os.fspath(local_path)
        self.cooldown_seconds = cooldown_seconds
        self.aggregator = Aggregator(renderer, uncategorized_label)

        self._mailbox: asyncio.Queue[None] = asyncio.Queue(maxsize=1)
        self._gate = asyncio.Lock()
        self._status = SyncStatus()
        self._worker: asyncio.Task | None = None
        self._loop: asyncio.AbstractEventLoop | None = None

    # =========================================================================
    # Triggering
    # =========================================================================

    @property
    def state(self) -> SyncState:
        return self._status.state

    @property
    def busy(self) -> bool:
        return self._status.state != SyncState.IDLE

    def request_sync(self) -> SyncRequestResult:
        """Signal that the source may have changed.

        Safe to call from the event loop and from any other thread. Calls
        from another thread are handed to the worker's loop and wait only
        for that hand-off, never for a sync run.
        """
        loop = self._loop
        if loop is not None and not _is_running_loop(loop):
            future = asyncio.run_coroutine_threadsafe(self._offer_async(), loop)
            return future.result()
        return self._offer()

    async def _offer_async(self) -> SyncRequestResult:
        return self._offer()

    def _offer(self) -> SyncRequestResult:
        if self.busy:
            logger.warning("Sync worker is busy, dropping sync request")
            return SyncRequestResult.BUSY
        try:
            self._mailbox.put_nowait(None)
        except asyncio.QueueFull:
            logger.info("Sync already pending, coalescing request")
            return SyncRequestResult.COALESCED
        logger.info("Sync signal accepted")
        return SyncRequestResult.ACCEPTED

    def start(self) -> None:
        """Start the background worker on the running loop"""
        self._loop = asyncio.get_running_loop()
        if self._worker is None or self._worker.done():
            self._worker = asyncio.create_task(self.run_forever(), name="tyto-sync-worker")

    async def stop(self) -> None:
        """Cancel the background worker and wait for it to exit"""
        self._loop = None
        if self._worker is None:
            return
        self._worker.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._worker
        self._worker = None

    async def run_forever(self) -> None:
        """Worker loop: wait for a signal, run once, cool down"""
        logger.info("Sync worker started")
        while True:
            await self._mailbox.get()
            try:
                await self.run_once()
            except SyncBusyError as e:
                logger.warning(f"Sync skipped: {e}")
            except SyncError as e:
                logger.error(f"Error updating content: {e}")
            except Exception:
                logger.exception("Unexpected error in sync worker")

            if self.cooldown_seconds > 0:
                self._status.state = SyncState.COOLDOWN
                try:
                    await asyncio.sleep(self.cooldown_seconds)
                finally:
                    self._status.state = SyncState.IDLE

    # =========================================================================
    # Pipeline
    # =========================================================================

    async def run_once(self) -> BuildResult:
        """
        Perform one full pipeline pass.

        Returns:
            BuildResult of the published snapshot

        Raises:
            SyncBusyError: If another run is in flight (the call is dropped)
            FetchError, ScanError, AggregationError: If a step fails; the
                previously published snapshot stays live
        """
        if self._gate.locked():
            raise SyncBusyError("a sync run is already in progress")

        async with self._gate:
            status = self._status
            status.state = SyncState.RUNNING
            status.runs += 1
            status.last_started_at = _now()
            try:
                result = await self._run_pipeline()
            except SyncError as e:
                status.failures += 1
                status.last_error = str(e)
                raise
            finally:
                status.state = SyncState.IDLE
                status.last_finished_at = _now()

            status.last_success_at = status.last_finished_at
            status.last_error = None
            status.last_rendered = result.rendered
            status.last_reused = result.reused
            status.last_item_failures = len(result.failures)
            return result

    async def _run_pipeline(self) -> BuildResult:
        output = await self._fetch()
        if output:
            logger.info(f"Fetch output: {output}")

        directories = await self._scan()

        previous = self.store.current().contents
        try:
            result = await asyncio.to_thread(self.aggregator.build, directories, previous)
        except Exception as e:
            raise AggregationError(f"cannot build snapshot: {e}") from e

        for failure in result.failures:
            logger.warning(f"Document failure: {failure}")

        self.store.publish(result.snapshot)
        logger.info(
            f"Sync completed: {len(result.snapshot.categories)} categories, "
            f"{result.snapshot.document_count} documents "
            f"(rendered={result.rendered}, reused={result.reused}, "
            f"failures={len(result.failures)})"
        )
        return result

    async def _fetch(self) -> str:
        try:
            return await asyncio.to_thread(self.fetcher, self.remote, self.local_path)
        except FetchError:
            raise
        except Exception as e:
            raise FetchError(f"fetch failed: {type(e).__name__}: {e}") from e

    async def _scan(self) -> list[DirectoryRecord]:
        try:
            return await asyncio.to_thread(scan, self.local_path)
        except ScanError:
            raise
        except Exception as e:
            raise ScanError(f"scan failed: {type(e).__name__}: {e}") from e

    # =========================================================================
    # Reporting
    # =========================================================================

    def status(self) -> SyncStatus:
        """Copy of the current status with the published document count"""
        return self._status.model_copy(
            update={"documents": self.store.current().document_count}
        )
