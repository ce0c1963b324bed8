"""
Scan models - Records produced while walking the local document tree.

These exist only for the duration of one sync pass. DirectoryMeta is the
validated form of a directory's metadata file (meta.json / meta.yaml).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DirectoryMeta(BaseModel):
    """Per-directory metadata.

    Example meta.json:
        {"title": "Getting Started", "category": "Guides",
         "order": ["install", "configure"]}
    """

    model_config = ConfigDict(extra="ignore")

    title: str = ""
    category: str = ""
    order: list[str] = Field(default_factory=list)  # Document base names, first-listed first

    @field_validator("title", "category", mode="before")
    @classmethod
    def null_to_empty_string(cls, value: object) -> object:
        return "" if value is None else value

    @field_validator("order", mode="before")
    @classmethod
    def null_to_empty_list(cls, value: object) -> object:
        return [] if value is None else value


@dataclass(frozen=True)
class DocumentRecord:
    """A markdown file found during a scan"""

    name: str  # Base name without extension
    path: Path  # Absolute path
    id: str  # Content fingerprint (DocumentID)


@dataclass(frozen=True)
class DirectoryRecord:
    """A scanned directory with its documents in display order"""

    name: str
    title: str
    category: str = ""
    files: tuple[DocumentRecord, ...] = field(default_factory=tuple)
