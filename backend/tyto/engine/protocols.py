"""
Protocol definitions for the sync pipeline's external collaborators.

The pipeline owns scanning, aggregation and publishing. Two steps are
delegated to injected callables so they can be swapped or faked in tests:

    RequestSync -> Fetcher (remote -> local working copy)
                       |
                       v
                   TreeScanner -> Aggregator -> Renderer (unseen IDs only)
                                      |
                                      v
                               SnapshotStore.publish

Example implementations:
    - GitFetcher: shallow git clone / pull
    - MarkdownRenderer: Python-Markdown with Pygments highlighting
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Fetcher(Protocol):
    """Protocol for updating a local working copy from a remote location.

    Implementations must leave ``local_path`` in its prior usable state
    when they fail, and should apply their own timeouts.
    """

    def __call__(self, remote: str, local_path: str) -> str:
        """Bring ``local_path`` up to the latest revision of ``remote``.

        Args:
            remote: Remote repository location
            local_path: Directory holding (or to hold) the working copy

        Returns:
            Human-readable log output of the fetch

        Raises:
            FetchError: If the working copy could not be updated
        """
        ...


@runtime_checkable
class Renderer(Protocol):
    """Protocol for converting raw document bytes into displayable text.

    Must be a pure function of its input. Any exception it raises is
    treated as a per-document failure by the aggregator.
    """

    def __call__(self, data: bytes) -> str:
        ...
