"""
Snapshot store - Holds the currently published Snapshot.

Publishing is a single reference assignment, which is atomic in CPython,
so readers never take a lock and always see one complete snapshot. A
superseded snapshot is simply dropped; readers still holding it keep it
alive until they finish.
"""

from __future__ import annotations

from tyto.models.content import CategoryItem, CategoryTreeParent, Snapshot


class SnapshotStore:
    """Atomic publish, lock-free read"""

    def __init__(self, initial: Snapshot | None = None):
        self._current = initial if initial is not None else Snapshot.empty()

    def publish(self, snapshot: Snapshot) -> None:
        """Install ``snapshot`` as the current snapshot"""
        self._current = snapshot

    def current(self) -> Snapshot:
        return self._current

    def categories(self) -> tuple[CategoryItem, ...]:
        return self._current.categories

    def category_tree(self, category_id: str) -> tuple[CategoryTreeParent, ...]:
        """Tree parents for a category; empty for an unknown id"""
        return self._current.category_tree.get(category_id, ())

    def content(self, document_id: str) -> str:
        """Rendered content for a document; empty for an unknown id"""
        return self._current.contents.get(document_id, "")

    def all_content(self) -> dict[str, str]:
        """Independent copy of every document's rendered content"""
        return dict(self._current.contents)
