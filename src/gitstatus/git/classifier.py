"""Line classifier for ``git status`` long-format output.

Looks at one line at a time and decides what it is: branch header,
section heading, file entry, advisory, free-text message or error. The
only state carried between lines is the current section, which is what
gives a bare indented path its meaning.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from gitstatus.git.grammar import MODERN, StatusGrammar
from gitstatus.git.models import Bucket, Section

# "new file:   foo.txt" → action="new file", path="foo.txt"
_ENTRY_RE = re.compile(r"^(?P<action>[^:]+?):\s+(?P<path>\S.*)$")
_OCTAL_RE = re.compile(r"[0-7]{3}")

_C_ESCAPES = {
    "a": 0x07, "b": 0x08, "f": 0x0C, "n": 0x0A, "r": 0x0D,
    "t": 0x09, "v": 0x0B, "\\": 0x5C, '"': 0x22,
}


def unquote_path(path: str) -> str:
    """Undo git's C-style quoting of unusual path names.

    ``"\\303\\244.txt"`` → ``ä.txt``. Unquoted paths are returned as is.
    """
    if len(path) < 2 or not (path.startswith('"') and path.endswith('"')):
        return path
    body = path[1:-1]
    out = bytearray()
    i = 0
    while i < len(body):
        ch = body[i]
        if ch == "\\" and i + 1 < len(body):
            nxt = body[i + 1]
            if nxt in _C_ESCAPES:
                out.append(_C_ESCAPES[nxt])
                i += 2
                continue
            if _OCTAL_RE.fullmatch(body, i + 1, i + 4):
                out.append(int(body[i + 1:i + 4], 8) & 0xFF)
                i += 4
                continue
        out += ch.encode("utf-8")
        i += 1
    return out.decode("utf-8", errors="replace")


def _strip_bom(line: str) -> str:
    """Remove UTF-8 BOM if present."""
    return line.lstrip("\ufeff")


def _normalise(line: str) -> str:
    """Strip trailing CR (CRLF → LF) and trailing whitespace for matching."""
    return line.rstrip("\r\n").rstrip()


class LineKind(str, Enum):
    BLANK = "blank"
    BRANCH = "branch"
    SECTION = "section"
    ENTRY = "entry"
    ADVISORY = "advisory"
    MESSAGE = "message"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class ClassifiedLine:
    """Outcome of classifying a single output line.

    ``text`` is the payload: the branch name, the file path, the message,
    or for errors the raw line.
    """

    line_no: int
    kind: LineKind
    text: str = ""
    bucket: Optional[Bucket] = None
    section: Optional[Section] = None


class LineClassifier:
    """Classify status output lines against one grammar.

    Usage::

        classifier = LineClassifier(MODERN)
        for no, line in enumerate(lines, start=1):
            item = classifier.classify(no, line)
    """

    def __init__(self, grammar: StatusGrammar = MODERN) -> None:
        self.grammar = grammar
        self.section: Optional[Section] = None

    def reset(self) -> None:
        self.section = None

    def classify(self, line_no: int, line: str) -> ClassifiedLine:
        g = self.grammar
        text = _normalise(_strip_bom(line))

        # --- tool errors interleaved into the output ---
        if any(text.startswith(p) for p in g.error_prefixes):
            return self._error(line_no, line)

        body, commented = g.strip_comment(text)
        stripped = body.strip()
        if not stripped:
            return ClassifiedLine(line_no, LineKind.BLANK)

        # --- indented → file entry or hint inside a section ---
        if body[0] in (" ", "\t"):
            if g.comment_prefix and not commented:
                # entries of a prefixed grammar always sit behind the prefix
                self.section = None
                return ClassifiedLine(line_no, LineKind.MESSAGE, stripped)
            return self._classify_indented(line_no, line, stripped)

        # --- branch header ---
        if stripped.startswith(g.branch_marker):
            name = stripped[len(g.branch_marker):].strip()
            self.section = None
            return ClassifiedLine(line_no, LineKind.BRANCH, name)

        # --- section heading ---
        section = g.section_for(stripped)
        if section is not None:
            self.section = section
            return ClassifiedLine(line_no, LineKind.SECTION, section=section)

        if g.is_advisory(stripped):
            return ClassifiedLine(line_no, LineKind.ADVISORY, stripped)

        # Unknown comment line: the grammar has no free text behind its prefix
        if commented:
            return self._error(line_no, line)

        self.section = None
        return ClassifiedLine(line_no, LineKind.MESSAGE, stripped)

    def _classify_indented(self, line_no: int, line: str, stripped: str) -> ClassifiedLine:
        g = self.grammar
        if g.is_advisory(stripped):
            return ClassifiedLine(line_no, LineKind.ADVISORY, stripped)

        section = self.section
        if section is None:
            return self._error(line_no, line)

        if section is Section.UNTRACKED:
            return ClassifiedLine(
                line_no, LineKind.ENTRY, unquote_path(stripped),
                bucket=Bucket.UNTRACKED, section=section,
            )

        m = _ENTRY_RE.match(stripped)
        if m:
            bucket = g.actions.get((section, m.group("action")))
            if bucket is not None:
                return ClassifiedLine(
                    line_no, LineKind.ENTRY, unquote_path(m.group("path")),
                    bucket=bucket, section=section,
                )
        # renamed:, typechange:, unmerged entries... have no bucket
        return self._error(line_no, line)

    @staticmethod
    def _error(line_no: int, line: str) -> ClassifiedLine:
        return ClassifiedLine(line_no, LineKind.ERROR, line.rstrip("\r\n"))
