"""
Sync error taxonomy.

Fatal-to-run failures derive from SyncError and abort one pass while the
previously published snapshot stays live. Per-item failures never raise;
they are collected as DocumentFailure records on the aggregator result.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


class SyncError(Exception):
    """Base class for failures that abort a sync run"""


class FetchError(SyncError):
    """The fetch collaborator could not update the working copy"""

    def __init__(self, message: str, output: str = ""):
        super().__init__(message)
        self.output = output


class ScanError(SyncError):
    """The document root could not be listed"""


class AggregationError(SyncError):
    """The scanned tree could not be turned into a snapshot"""


class SyncBusyError(SyncError):
    """A run was requested while another one is in flight"""


@dataclass(frozen=True)
class DocumentFailure:
    """A tolerated per-document failure recorded during aggregation.

    Attributes:
        path: File that failed
        document_id: Its DocumentID; an empty value was published for it
        stage: "read" or "render"
        reason: Error description
    """

    path: Path
    document_id: str
    stage: str
    reason: str

    def __str__(self) -> str:
        return f"{self.stage} failed for {self.path} ({self.document_id}): {self.reason}"
