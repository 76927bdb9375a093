"""Data models for git status parsing."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Sequence, Tuple


class StatusIndexError(IndexError):
    """Raised when a bucket or error accessor is given an index outside [0, size)."""


class Bucket(str, Enum):
    """The six file buckets of a status response.

    Each value is the attribute name of the matching sequence on
    :class:`StatusResponse`.
    """

    NEW_TO_COMMIT = "new_files_to_commit"
    DELETED_TO_COMMIT = "deleted_files_to_commit"
    MODIFIED_TO_COMMIT = "modified_files_to_commit"
    DELETED_NOT_UPDATED = "deleted_files_not_updated"
    MODIFIED_NOT_UPDATED = "modified_files_not_updated"
    UNTRACKED = "untracked_files"


class Section(str, Enum):
    STAGED = "staged"
    UNSTAGED = "unstaged"
    UNTRACKED = "untracked"
    UNMERGED = "unmerged"


@dataclass(frozen=True, slots=True)
class Ref:
    """Symbolic name of the checked-out branch."""

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True, slots=True)
class ErrorDetails:
    """A status output line that could not be classified."""

    line_no: int  # 1-based position in the raw output
    error: str

    def __str__(self) -> str:
        return f"{self.line_no}. {self.error}"


def _check_index(seq: Sequence, index: int, what: str) -> None:
    if not 0 <= index < len(seq):
        raise StatusIndexError(
            f"{what} index {index} out of range (size {len(seq)})"
        )


@dataclass(frozen=True)
class StatusResponse:
    """Immutable result of parsing one ``git status`` invocation.

    Buckets are stored as tuples so the response can be shared freely;
    :meth:`files` still hands out a fresh list on every call.
    """

    new_files_to_commit: Tuple[str, ...] = ()
    deleted_files_to_commit: Tuple[str, ...] = ()
    modified_files_to_commit: Tuple[str, ...] = ()
    deleted_files_not_updated: Tuple[str, ...] = ()
    modified_files_not_updated: Tuple[str, ...] = ()
    untracked_files: Tuple[str, ...] = ()
    branch: Optional[Ref] = None
    message: Optional[str] = None
    errors: Tuple[ErrorDetails, ...] = ()
    grammar: str = "modern"

    def __post_init__(self) -> None:
        for bucket in Bucket:
            object.__setattr__(self, bucket.value, tuple(getattr(self, bucket.value)))
        object.__setattr__(self, "errors", tuple(self.errors))

    # ---- buckets ----

    def _bucket(self, bucket: Bucket) -> Tuple[str, ...]:
        return getattr(self, Bucket(bucket).value)

    def files(self, bucket: Bucket) -> List[str]:
        """Return an independent copy of *bucket*, in output order."""
        return list(self._bucket(bucket))

    def iter_files(self, bucket: Bucket) -> Iterator[str]:
        return iter(self._bucket(bucket))

    def file_at(self, bucket: Bucket, index: int) -> str:
        entries = self._bucket(bucket)
        _check_index(entries, index, Bucket(bucket).name)
        return entries[index]

    def count(self, bucket: Bucket) -> int:
        return len(self._bucket(bucket))

    @property
    def total_files(self) -> int:
        return sum(self.count(b) for b in Bucket)

    @property
    def is_clean(self) -> bool:
        return self.total_files == 0 and not self.errors

    # ---- errors ----

    def get_error(self, index: int) -> str:
        """Return error *index* formatted as ``"<line_no>. <text>"``."""
        _check_index(self.errors, index, "error")
        return str(self.errors[index])

    def error_text(self) -> str:
        """All errors concatenated, separated by a single space."""
        return " ".join(str(e) for e in self.errors)

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @property
    def error_state(self) -> bool:
        return len(self.errors) > 0
