"""
Aggregator - Turn scanned directories into a publishable Snapshot.

Rendering is the expensive step, so every document is first looked up by
its DocumentID in the previous snapshot's contents. Only IDs that are not
there are read from disk and passed to the renderer. Because IDs are
derived from bytes, a document that was renamed, moved or recategorised
without being edited is never rendered again.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from tyto.engine.errors import DocumentFailure
from tyto.engine.hasher import fingerprint_hex
from tyto.engine.protocols import Renderer
from tyto.models.content import (
    CategoryItem,
    CategoryTreeItem,
    CategoryTreeParent,
    Snapshot,
)
from tyto.models.scan import DirectoryRecord, DocumentRecord

logger = logging.getLogger(__name__)

DEFAULT_UNCATEGORIZED_LABEL = "Uncategorized"


@dataclass
class BuildResult:
    """Output of one aggregation pass.

    Attributes:
        snapshot: The new immutable snapshot
        failures: Tolerated per-document read/render failures
        rendered: Number of renderer invocations
        reused: Number of documents served from the reuse cache
    """

    snapshot: Snapshot
    failures: list[DocumentFailure] = field(default_factory=list)
    rendered: int = 0
    reused: int = 0


def category_id(name: str) -> str:
    """CategoryID for a display name"""
    return fingerprint_hex(name.encode("utf-8"))


class Aggregator:
    """Builds snapshots, reusing rendered content across passes"""

    def __init__(
        self,
        renderer: Renderer,
        uncategorized_label: str = DEFAULT_UNCATEGORIZED_LABEL,
    ):
        self.renderer = renderer
        self.uncategorized_label = uncategorized_label

    def _render(self, document: DocumentRecord, result: BuildResult) -> str:
        try:
            data = document.path.read_bytes()
        except OSError as e:
            result.failures.append(
                DocumentFailure(document.path, document.id, "read", str(e))
            )
            return ""

        result.rendered += 1
        try:
            return self.renderer(data)
        except Exception as e:
            result.failures.append(
                DocumentFailure(
                    document.path, document.id, "render", f"{type(e).__name__}: {e}"
                )
            )
            return ""

    def build(
        self,
        directories: Iterable[DirectoryRecord],
        previous_contents: Mapping[str, str] | None = None,
    ) -> BuildResult:
        """
        Build a snapshot from scanned directories.

        Args:
            directories: Scan output
            previous_contents: Rendered content of the currently published
                snapshot, keyed by DocumentID

        Returns:
            BuildResult holding the snapshot and per-document failures
        """
        cache = previous_contents or {}
        contents: dict[str, str] = {}
        category_names: dict[str, str] = {}
        tree: dict[str, list[CategoryTreeParent]] = {}
        result = BuildResult(snapshot=Snapshot.empty())

        for directory in directories:
            if not directory.files:
                continue

            items = []
            for document in directory.files:
                items.append(CategoryTreeItem(id=document.id, file=document.name))
                if document.id in contents:
                    continue
                if document.id in cache:
                    contents[document.id] = cache[document.id]
                    result.reused += 1
                else:
                    contents[document.id] = self._render(document, result)

            name = directory.category or self.uncategorized_label
            cid = category_id(name)
            category_names[cid] = name
            tree.setdefault(cid, []).append(
                CategoryTreeParent(title=directory.title, files=tuple(items))
            )

        categories = sorted(
            (CategoryItem(id=cid, name=name) for cid, name in category_names.items()),
            key=lambda item: item.name,
        )
        for parents in tree.values():
            parents.sort(key=lambda parent: parent.title)

        result.snapshot = Snapshot.build(
            contents=contents, categories=categories, category_tree=tree
        )
        logger.debug(
            f"Built snapshot: {len(categories)} categories, {len(contents)} documents "
            f"(rendered={result.rendered}, reused={result.reused}, "
            f"failures={len(result.failures)})"
        )
        return result

