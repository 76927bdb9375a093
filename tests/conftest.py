"""Shared test fixtures — sample status outputs, temp git repos."""

from __future__ import annotations

import subprocess
import textwrap
from pathlib import Path

import pytest


@pytest.fixture
def classic_staged_add() -> list[str]:
    """The smallest useful '#'-prefixed status: one staged new file."""
    return [
        "# On branch main",
        "# Changes to be committed:",
        "#   new file:   foo.txt",
    ]


@pytest.fixture
def classic_full_output() -> str:
    """git 1.6 style output touching every bucket."""
    return textwrap.dedent("""\
        # On branch master
        # Changes to be committed:
        #   (use "git reset HEAD <file>..." to unstage)
        #
        #\tnew file:   src/new.py
        #\tdeleted:    old.txt
        #\tmodified:   README
        #
        # Changed but not updated:
        #   (use "git add/rm <file>..." to update what will be committed)
        #
        #\tdeleted:    gone.c
        #\tmodified:   main.c
        #
        # Untracked files:
        #   (use "git add <file>..." to include in what will be committed)
        #
        #\tnotes.txt
        #\tbuild/
    """)


@pytest.fixture
def classic_clean_output() -> str:
    """Clean working tree, with the free-text trailer line."""
    return textwrap.dedent("""\
        # On branch master
        nothing to commit (working directory clean)
    """)


@pytest.fixture
def modern_full_output() -> str:
    """git 2.x style output touching every bucket."""
    return textwrap.dedent("""\
        On branch main
        Your branch is up to date with 'origin/main'.

        Changes to be committed:
          (use "git restore --staged <file>..." to unstage)
        \tnew file:   src/new.py
        \tdeleted:    old.txt
        \tmodified:   README.md

        Changes not staged for commit:
          (use "git add/rm <file>..." to update what will be committed)
          (use "git restore <file>..." to discard changes in working directory)
        \tdeleted:    gone.c
        \tmodified:   main.c

        Untracked files:
          (use "git add <file>..." to include in what will be committed)
        \tnotes.txt
        \tbuild/

    """)


@pytest.fixture
def modern_detached_output() -> str:
    """Detached HEAD: no branch header at all."""
    return textwrap.dedent("""\
        HEAD detached at 1a2b3c4
        Untracked files:
          (use "git add <file>..." to include in what will be committed)
        \tscratch.txt

        nothing added to commit but untracked files present (use "git add" to track)
    """)


@pytest.fixture
def custom_grammar_yaml() -> str:
    """A small non-English grammar as a user would drop it on disk."""
    return textwrap.dedent("""\
        name: deutsch
        description: German long-format output
        comment_prefix: ""
        branch_marker: "Auf Branch "
        sections:
          "Zum Commit vorgemerkte Änderungen": staged
          "Änderungen, die nicht zum Commit vorgemerkt sind": unstaged
          "Unversionierte Dateien": untracked
        actions:
          staged:
            "neue Datei": new_to_commit
            "gelöscht": deleted_to_commit
            "geändert": modified_to_commit
          unstaged:
            "gelöscht": deleted_not_updated
            "geändert": modified_not_updated
        advisories:
          - "(benutzen Sie "
        error_prefixes:
          - "fatal:"
          - "Fehler:"
    """)


@pytest.fixture
def tmp_git_repo(tmp_path: Path) -> Path:
    """Create a temporary git repository for integration tests."""
    subprocess.run(["git", "init", str(tmp_path)], capture_output=True, check=True)
    subprocess.run(
        ["git", "config", "user.email", "test@test.com"],
        cwd=tmp_path, capture_output=True, check=True,
    )
    subprocess.run(
        ["git", "config", "user.name", "Test"],
        cwd=tmp_path, capture_output=True, check=True,
    )
    # Initial commit
    readme = tmp_path / "README.md"
    readme.write_text("# Test\n")
    subprocess.run(["git", "add", "."], cwd=tmp_path, capture_output=True, check=True)
    subprocess.run(
        ["git", "commit", "-m", "init"],
        cwd=tmp_path, capture_output=True, check=True,
    )
    return tmp_path
