"""Unit tests for GitFetcher with subprocess stubbed out.

Tests cover:
- Clone when no working copy exists, fetch + hard reset otherwise
- Output returned stripped
- Non-zero exit, missing git, timeout -> FetchError
"""

import subprocess

import pytest

from tyto.engine.errors import FetchError
from tyto.services.git import GitFetcher


class FakeRun:
    """Stand-in for subprocess.run recording invocations."""

    def __init__(self, returncode: int = 0, stdout: str = "", exc: Exception | None = None):
        self.returncode = returncode
        self.stdout = stdout
        self.exc = exc
        self.calls: list[tuple[list[str], dict]] = []

    def __call__(self, args, **kwargs):
        self.calls.append((args, kwargs))
        if self.exc is not None:
            raise self.exc
        return subprocess.CompletedProcess(args, self.returncode, stdout=self.stdout)


@pytest.fixture
def fake_run(monkeypatch) -> FakeRun:
    run = FakeRun(stdout="  Already up to date.\n")
    monkeypatch.setattr(subprocess, "run", run)
    return run


class TestGitFetcher:
    """Tests for clone/pull selection and error mapping."""

    def test_clones_when_no_working_copy(self, tmp_path, fake_run) -> None:
        target = tmp_path / "parent" / "checkout"
        output = GitFetcher()("https://example.com/docs.git", str(target))

        args, kwargs = fake_run.calls[0]
        assert args == ["git", "clone", "--depth", "1", "https://example.com/docs.git", str(target)]
        assert target.parent.is_dir()
        assert output == "Already up to date."
        assert kwargs["env"]["GIT_TERMINAL_PROMPT"] == "0"

    def test_updates_existing_working_copy(self, tmp_path, fake_run) -> None:
        (tmp_path / ".git").mkdir()
        output = GitFetcher()("https://example.com/docs.git", str(tmp_path))

        assert [args for args, _ in fake_run.calls] == [
            ["git", "-C", str(tmp_path), "fetch", "--depth", "1", "origin"],
            ["git", "-C", str(tmp_path), "reset", "--hard", "FETCH_HEAD"],
        ]
        assert output == "Already up to date.\nAlready up to date."

    def test_failed_fetch_skips_reset(self, tmp_path, monkeypatch) -> None:
        run = FakeRun(returncode=128, stdout="fatal: could not read from remote\n")
        monkeypatch.setattr(subprocess, "run", run)
        (tmp_path / ".git").mkdir()

        with pytest.raises(FetchError, match="fetch failed"):
            GitFetcher()("remote", str(tmp_path))

        assert len(run.calls) == 1

    def test_timeout_passed_through(self, tmp_path, fake_run) -> None:
        GitFetcher(timeout=7)("remote", str(tmp_path / "c"))
        _, kwargs = fake_run.calls[0]
        assert kwargs["timeout"] == 7

    def test_nonzero_exit_raises(self, tmp_path, monkeypatch) -> None:
        monkeypatch.setattr(subprocess, "run", FakeRun(returncode=128, stdout="fatal: repository not found\n"))

        with pytest.raises(FetchError) as exc_info:
            GitFetcher()("remote", str(tmp_path / "c"))

        assert exc_info.value.output == "fatal: repository not found"
        assert "clone failed" in str(exc_info.value)

    def test_missing_git_raises(self, tmp_path, monkeypatch) -> None:
        monkeypatch.setattr(subprocess, "run", FakeRun(exc=FileNotFoundError("git")))

        with pytest.raises(FetchError, match="not found"):
            GitFetcher()("remote", str(tmp_path / "c"))

    def test_timeout_raises(self, tmp_path, monkeypatch) -> None:
        exc = subprocess.TimeoutExpired(cmd=["git"], timeout=1, output=b"Receiving objects")
        monkeypatch.setattr(subprocess, "run", FakeRun(exc=exc))
        (tmp_path / ".git").mkdir()

        with pytest.raises(FetchError, match="timed out") as exc_info:
            GitFetcher(timeout=1)("remote", str(tmp_path))

        assert exc_info.value.output == "Receiving objects"
