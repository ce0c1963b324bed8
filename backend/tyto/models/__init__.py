"""Pydantic and snapshot models for Tyto"""

from tyto.models.content import (
    CategoryItem,
    CategoryTreeItem,
    CategoryTreeParent,
    Snapshot,
)
from tyto.models.scan import DirectoryMeta, DirectoryRecord, DocumentRecord
from tyto.models.sync import SyncRequestResult, SyncState, SyncStatus

__all__ = [
    # Published content models
    "CategoryItem",
    "CategoryTreeItem",
    "CategoryTreeParent",
    "Snapshot",
    # Scan models
    "DirectoryMeta",
    "DirectoryRecord",
    "DocumentRecord",
    # Sync models
    "SyncRequestResult",
    "SyncState",
    "SyncStatus",
]
