"""
Tree scanner - Walk the local document tree into DirectoryRecords.

Layout supported (one level of nesting):

    <root>/
        <directory>/
            meta.json        optional: title, category, order
            intro.md
            setup.md
        .git/                hidden, skipped

Per-file failures (unreadable markdown, malformed metadata) are logged and
skipped; only failing to list the root itself aborts the scan.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

import yaml
from pydantic import ValidationError

from tyto.engine.errors import ScanError
from tyto.engine.hasher import fingerprint_file, to_hex
from tyto.models.scan import DirectoryMeta, DirectoryRecord, DocumentRecord

logger = logging.getLogger(__name__)

MARKDOWN_EXTENSION = ".md"

# Reserved metadata file names in precedence order
META_FILE_NAMES = ("meta.json", "meta.yaml", "meta.yml")


def is_hidden(name: str) -> bool:
    return name.startswith(".")


def load_meta(path: Path) -> DirectoryMeta:
    """
    Parse a metadata file into DirectoryMeta.

    Raises:
        OSError: If the file cannot be read
        ValueError: If the content is not valid JSON/YAML or fails validation
    """
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        data = json.loads(text)
    else:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ValueError(f"invalid YAML: {e}") from e
    if data is None:
        data = {}
    try:
        return DirectoryMeta.model_validate(data)
    except ValidationError as e:
        raise ValueError(str(e)) from e


def order_documents(
    documents: dict[str, DocumentRecord], order: list[str]
) -> tuple[DocumentRecord, ...]:
    """
    Apply the display ordering rule.

    Names listed in ``order`` come first in that order (names with no
    matching document are ignored, duplicates count once); the remaining
    documents follow sorted by name.
    """
    remaining = dict(documents)
    ordered = []
    for name in order:
        record = remaining.pop(name, None)
        if record is not None:
            ordered.append(record)
    ordered.extend(remaining[name] for name in sorted(remaining))
    return tuple(ordered)


def scan_directory(path: Path) -> DirectoryRecord:
    """
    Scan one directory's immediate files.

    Args:
        path: Directory to scan

    Returns:
        DirectoryRecord, possibly with no files

    Raises:
        OSError: If the directory cannot be listed
    """
    path = path.absolute()
    documents: dict[str, DocumentRecord] = {}
    meta_files: dict[str, Path] = {}

    for entry in sorted(path.iterdir(), key=lambda p: p.name):
        try:
            if not entry.is_file():
                continue
        except OSError as e:
            logger.warning(f"Skipping {entry}: {e}")
            continue

        lower_name = entry.name.lower()
        if entry.suffix.lower() == MARKDOWN_EXTENSION:
            try:
                document_id = to_hex(fingerprint_file(entry))
            except OSError as e:
                logger.warning(f"Skipping unreadable document {entry}: {e}")
                continue
            name = entry.name[: -len(entry.suffix)]
            documents[name] = DocumentRecord(name=name, path=entry, id=document_id)
        elif lower_name in META_FILE_NAMES:
            meta_files.setdefault(lower_name, entry)

    meta = None
    for meta_name in META_FILE_NAMES:
        meta_path = meta_files.get(meta_name)
        if meta_path is None:
            continue
        try:
            meta = load_meta(meta_path)
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring malformed metadata {meta_path}: {e}")
        break

    name = path.name
    title = name
    category = ""
    order: list[str] = []
    if meta is not None:
        title = meta.title or name
        category = meta.category
        order = meta.order

    return DirectoryRecord(
        name=name,
        title=title,
        category=category,
        files=order_documents(documents, order),
    )


def scan(root: str | os.PathLike[str]) -> list[DirectoryRecord]:
    """
    Scan every visible subdirectory of ``root``.

    Directories that cannot be listed or that contain no documents are
    left out. Results are sorted by directory name.

    Raises:
        ScanError: If ``root`` itself cannot be listed
    """
    root_path = Path(root).absolute()
    try:
        entries = sorted(root_path.iterdir(), key=lambda p: p.name)
    except OSError as e:
        raise ScanError(f"cannot list document root {root_path}: {e}") from e

    directories = []
    for entry in entries:
        if is_hidden(entry.name):
            continue
        try:
            if not entry.is_dir():
                continue
            record = scan_directory(entry)
        except OSError as e:
            logger.warning(f"Skipping directory {entry}: {e}")
            continue
        if not record.files:
            logger.debug(f"Skipping directory without documents: {entry}")
            continue
        directories.append(record)

    logger.info(
        f"Scanned {root_path}: {len(directories)} directories, "
        f"{sum(len(d.files) for d in directories)} documents"
    )
    return directories
