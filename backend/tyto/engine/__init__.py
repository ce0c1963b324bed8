"""Sync-and-publish pipeline.

- `hasher.py`: XXH64 content fingerprints (DocumentID / CategoryID)
- `scanner.py`: Walks the working copy into DirectoryRecords
- `aggregator.py`: Builds Snapshots, reusing rendered content by ID
- `store.py`: Atomic publish / lock-free read of the current Snapshot
- `orchestrator.py`: Trigger mailbox, busy gate and the pipeline driver
- `protocols.py`: Fetcher and Renderer collaborator interfaces
- `errors.py`: Fatal-to-run errors and per-document failure records

Import directly from submodules:
    from tyto.engine.orchestrator import SyncOrchestrator
    from tyto.engine.store import SnapshotStore
"""
