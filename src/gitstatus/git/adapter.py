"""Git subprocess wrapper — repo root and captured status output."""

from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path
from typing import List, Optional

logger = logging.getLogger(__name__)


class GitError(Exception):
    """Raised when git is unavailable or returns an unexpected error."""


def _run_git(
    args: list[str],
    cwd: Path,
    executable: str = "git",
    timeout: int = 30,
) -> str:
    """Run a git command and return stdout. Raises GitError on failure."""
    # Section headings are matched in English
    env = {**os.environ, "LC_ALL": "C", "LANG": "C"}
    logger.debug("Running %s %s in %s", executable, " ".join(args), cwd)
    try:
        result = subprocess.run(
            [executable, *args],
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=timeout,
            encoding="utf-8",
            errors="replace",
            env=env,
        )
    except FileNotFoundError:
        raise GitError(f"{executable} is not installed or not on PATH")
    except subprocess.TimeoutExpired:
        raise GitError(f"git command timed out after {timeout}s: git {' '.join(args)}")

    if result.returncode != 0:
        stderr = result.stderr.strip()
        # Old git exits 1 from status when there is nothing to commit
        if not stderr or "fatal" not in stderr.lower():
            return result.stdout
        raise GitError(f"git error: {stderr}")
    return result.stdout


def get_repo_root(cwd: Optional[Path] = None, executable: str = "git") -> Path:
    """Return the root of the current git repository."""
    cwd = cwd or Path.cwd()
    out = _run_git(["rev-parse", "--show-toplevel"], cwd=cwd, executable=executable)
    return Path(out.strip())


def get_status_lines(
    repo_root: Path,
    executable: str = "git",
    timeout: int = 30,
) -> List[str]:
    """Return the long-format ``git status`` output, one entry per line.

    ``--long`` overrides ``status.short`` / ``status.branch`` from the
    user's config; ``core.quotePath=false`` keeps non-ASCII paths readable.
    """
    output = _run_git(
        [
            "-c", "color.status=never",
            "-c", "core.quotePath=false",
            "status", "--long",
        ],
        cwd=repo_root,
        executable=executable,
        timeout=timeout,
    )
    return output.splitlines()
