"""
Shared pytest fixtures for Tyto backend tests.

This module provides:
- write_tree: Factory that lays out a document tree on disk
- sample_tree: A small knowledge base with metadata, hidden and empty dirs
- recording_renderer / fake_fetcher: Deterministic collaborators
- settings: Settings pointing at a temporary working copy
- Custom markers for test categorization
"""

from __future__ import annotations

import json
import sys
from collections.abc import Callable
from pathlib import Path

import pytest

# Add backend to path for imports
backend_path = Path(__file__).parent.parent
if str(backend_path) not in sys.path:
    sys.path.insert(0, str(backend_path))

from tyto.config import Settings  # noqa: E402
from tests.mocks.collaborators import FakeFetcher, RecordingRenderer  # noqa: E402

TreeLayout = dict[str, dict[str, "str | bytes | dict"]]


# =============================================================================
# Pytest Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line("markers", "integration: marks tests as integration tests")


# =============================================================================
# Document Tree Fixtures
# =============================================================================


def _write_tree(root: Path, layout: TreeLayout) -> Path:
    """Write ``{directory: {filename: content}}`` under ``root``.

    Dict content is dumped as JSON (for meta.json files).
    """
    root.mkdir(parents=True, exist_ok=True)
    for directory, files in layout.items():
        dir_path = root / directory
        dir_path.mkdir(parents=True, exist_ok=True)
        for filename, content in files.items():
            path = dir_path / filename
            if isinstance(content, dict):
                path.write_text(json.dumps(content), encoding="utf-8")
            elif isinstance(content, bytes):
                path.write_bytes(content)
            else:
                path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def write_tree(tmp_path: Path) -> Callable[..., Path]:
    """Factory fixture writing a document tree.

    Usage:
        def test_something(write_tree):
            root = write_tree({"guides": {"intro.md": "# Intro"}})
    """

    def _factory(layout: TreeLayout, name: str = "docs") -> Path:
        return _write_tree(tmp_path / name, layout)

    return _factory


@pytest.fixture
def sample_layout() -> TreeLayout:
    """A small knowledge base.

    Layout:
        guides/       meta: "Getting Started" in "Guides", order [setup, intro]
        reference/    meta: "API Reference" in "Guides"
        notes/        no meta -> uncategorized, title "notes"
        empty/        only non-markdown files -> dropped
        .git/         hidden -> skipped
    """
    return {
        "guides": {
            "meta.json": {
                "title": "Getting Started",
                "category": "Guides",
                "order": ["setup", "intro"],
            },
            "intro.md": "# Intro\n",
            "setup.md": "# Setup\n",
            "zeta.md": "# Zeta\n",
        },
        "reference": {
            "meta.json": {"title": "API Reference", "category": "Guides"},
            "endpoints.md": "# Endpoints\n",
        },
        "notes": {
            "scratch.md": "# Scratch\n",
            "image.png": b"\x89PNG",
        },
        "empty": {"readme.txt": "nothing here"},
        ".git": {"HEAD.md": "ref: refs/heads/main"},
    }


@pytest.fixture
def sample_tree(write_tree, sample_layout) -> Path:
    return write_tree(sample_layout)


# =============================================================================
# Collaborator Fixtures
# =============================================================================


@pytest.fixture
def recording_renderer() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture
def fake_fetcher(sample_tree: Path) -> FakeFetcher:
    """Fetcher mirroring ``sample_tree`` into the working copy."""
    return FakeFetcher(source=sample_tree)


@pytest.fixture
def working_copy(tmp_path: Path) -> Path:
    return tmp_path / "checkout"


@pytest.fixture
def settings(working_copy: Path) -> Settings:
    """Settings for a test app; no startup sync and no cooldown."""
    return Settings(
        git_repo_url="https://example.com/docs.git",
        repository_dir=str(working_copy),
        webhook_secret="s3cret",
        sync_cooldown_seconds=0,
        sync_on_startup=False,
    )
