"""
Content models - Published navigation and rendered-document views.

CategoryItem, CategoryTreeItem and CategoryTreeParent are the wire shapes
returned by the read API. Snapshot bundles them with the rendered content
of every reachable document into one immutable, publishable value.

Example:
    >>> snapshot = Snapshot.build(
    ...     contents={"a1": "<p>hi</p>"},
    ...     categories=[CategoryItem(id="c1", name="Guides")],
    ...     category_tree={"c1": [CategoryTreeParent(
    ...         title="Intro",
    ...         files=[CategoryTreeItem(id="a1", file="hello")],
    ...     )]},
    ... )
    >>> snapshot.contents["a1"]
    '<p>hi</p>'
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field


class CategoryItem(BaseModel):
    """A category in the navigation list"""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str


class CategoryTreeItem(BaseModel):
    """A document entry under a tree parent.

    ``file`` is the document's base name without extension, used as its
    display name.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    file: str


class CategoryTreeParent(BaseModel):
    """One scanned directory as it appears inside a category"""

    model_config = ConfigDict(frozen=True)

    title: str
    files: tuple[CategoryTreeItem, ...] = Field(default_factory=tuple)


def _freeze_tree(
    tree: Mapping[str, Iterable[CategoryTreeParent]],
) -> Mapping[str, tuple[CategoryTreeParent, ...]]:
    return MappingProxyType({key: tuple(parents) for key, parents in tree.items()})


@dataclass(frozen=True)
class Snapshot:
    """Immutable published view of categories, tree and rendered content.

    Mappings are read-only proxies over private dicts and sequences are
    tuples, so a published snapshot cannot be changed through any of its
    attributes. Use ``Snapshot.build`` to construct one from plain
    containers.

    Attributes:
        contents: DocumentID -> rendered text (empty string for failures)
        categories: Category list sorted by name
        category_tree: CategoryID -> tree parents sorted by title
    """

    contents: Mapping[str, str] = field(
        default_factory=lambda: MappingProxyType({})
    )
    categories: tuple[CategoryItem, ...] = ()
    category_tree: Mapping[str, tuple[CategoryTreeParent, ...]] = field(
        default_factory=lambda: MappingProxyType({})
    )

    @classmethod
    def build(
        cls,
        contents: Mapping[str, str],
        categories: Iterable[CategoryItem],
        category_tree: Mapping[str, Iterable[CategoryTreeParent]],
    ) -> "Snapshot":
        """Copy the given containers into a frozen snapshot."""
        return cls(
            contents=MappingProxyType(dict(contents)),
            categories=tuple(categories),
            category_tree=_freeze_tree(category_tree),
        )

    @classmethod
    def empty(cls) -> "Snapshot":
        """The value served before the first publish."""
        return cls()

    @property
    def document_count(self) -> int:
        return len(self.contents)

    def document_ids(self) -> set[str]:
        """Every DocumentID reachable from the category tree."""
        return {
            item.id
            for parents in self.category_tree.values()
            for parent in parents
            for item in parent.files
        }
