"""
Sync models - Orchestrator state and status reporting.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel


class SyncState(str, Enum):
    """Orchestrator state machine.

    Attributes:
        IDLE: Waiting for the next refresh signal
        RUNNING: A Fetch -> Scan -> Aggregate -> Publish pass is in flight
        COOLDOWN: Pause after a run; new signals are dropped as busy
    """

    IDLE = "idle"
    RUNNING = "running"
    COOLDOWN = "cooldown"


class SyncRequestResult(str, Enum):
    """Outcome of a non-blocking sync request.

    Attributes:
        ACCEPTED: Signal placed in the empty mailbox
        COALESCED: A signal was already pending; this one merged into it
        BUSY: A run (or its cooldown) is in progress; signal dropped
    """

    ACCEPTED = "accepted"
    COALESCED = "coalesced"
    BUSY = "busy"


class SyncStatus(BaseModel):
    """Snapshot of orchestrator progress for the status endpoint"""

    state: SyncState = SyncState.IDLE
    runs: int = 0
    failures: int = 0
    last_started_at: datetime | None = None
    last_finished_at: datetime | None = None
    last_success_at: datetime | None = None
    last_error: str | None = None
    last_rendered: int = 0
    last_reused: int = 0
    last_item_failures: int = 0
    documents: int = 0
