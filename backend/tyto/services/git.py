"""
Git fetcher - Keep a shallow working copy of the document repository.

The first fetch clones with ``--depth 1``. Later fetches download the tip of
the tracked branch with ``fetch --depth 1`` and hard-reset the working copy
to it; a shallow ``pull`` cannot merge a tip whose parent it never fetched.
Output of the git command (stdout and stderr combined) is returned so the
orchestrator can log it.
"""

from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path

from tyto.engine.errors import FetchError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 120.0


class GitFetcher:
    """Fetch collaborator backed by the git command line"""

    def __init__(self, timeout: float | None = DEFAULT_TIMEOUT_SECONDS, git: str = "git"):
        """
        Args:
            timeout: Seconds before a git command is killed (None = no limit)
            git: git executable to run
        """
        self.timeout = timeout
        self.git = git

    def __call__(self, remote: str, local_path: str) -> str:
        path = Path(local_path)
        if not (path / ".git").exists():
            return self.clone(remote, path)
        return self.update(path)

    def clone(self, remote: str, path: Path) -> str:
        logger.info(f"Cloning {remote} to {path}...")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FetchError(f"failed to create parent dir {path.parent}: {e}") from e
        return self._run([self.git, "clone", "--depth", "1", remote, str(path)], "clone")

    def update(self, path: Path) -> str:
        logger.info(f"Updating {path} to the latest remote commit...")
        fetched = self._run(
            [self.git, "-C", str(path), "fetch", "--depth", "1", "origin"], "fetch"
        )
        reset = self._run(
            [self.git, "-C", str(path), "reset", "--hard", "FETCH_HEAD"], "reset"
        )
        return "\n".join(part for part in (fetched, reset) if part)

    def _run(self, args: list[str], action: str) -> str:
        # Never block on a credential prompt
        env = {**os.environ, "GIT_TERMINAL_PROMPT": "0"}
        try:
            completed = subprocess.run(
                args,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                timeout=self.timeout,
                env=env,
            )
        except FileNotFoundError as e:
            raise FetchError(f"git executable not found: {self.git}") from e
        except subprocess.TimeoutExpired as e:
            output = e.output.decode(errors="replace") if isinstance(e.output, bytes) else (e.output or "")
            raise FetchError(
                f"git {action} timed out after {self.timeout}s", output.strip()
            ) from e

        output = (completed.stdout or "").strip()
        if completed.returncode != 0:
            raise FetchError(
                f"git {action} failed (exit {completed.returncode}), output: {output}",
                output,
            )
        return output
