"""Status output grammars — marker vocabulary for the line classifier.

A grammar is pure data: which prefix marks comment lines, which text
introduces the branch header, which headings open a section and which
(section, action word) pairs map to a bucket. Supporting another git
version or locale means adding a grammar, either built in below or as a
YAML file loaded by :class:`GrammarRegistry`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

import yaml

from gitstatus.git.models import Bucket, Section

logger = logging.getLogger(__name__)


class GrammarError(Exception):
    """Raised for unknown grammar names or malformed grammar files."""


@dataclass(frozen=True)
class StatusGrammar:
    """Vocabulary of one ``git status`` long-format dialect."""

    name: str
    comment_prefix: str
    branch_marker: str
    sections: Mapping[str, Section]
    actions: Mapping[Tuple[Section, str], Bucket]
    advisories: Tuple[str, ...] = ()
    error_prefixes: Tuple[str, ...] = ("fatal:", "error:")
    description: str = ""

    def __post_init__(self) -> None:
        # read-only views: built-in grammars are shared by every caller
        object.__setattr__(self, "sections", MappingProxyType(dict(self.sections)))
        object.__setattr__(self, "actions", MappingProxyType(dict(self.actions)))
        object.__setattr__(self, "advisories", tuple(self.advisories))
        object.__setattr__(self, "error_prefixes", tuple(self.error_prefixes))

    def strip_comment(self, line: str) -> Tuple[str, bool]:
        """Return (*line* without the comment prefix, whether it had one).

        One space following the prefix is a separator and is dropped too,
        so ``"# On branch x"`` and ``"#\\tfoo.c"`` keep their relative
        indentation.
        """
        if self.comment_prefix and line.startswith(self.comment_prefix):
            rest = line[len(self.comment_prefix):]
            if rest.startswith(" "):
                rest = rest[1:]
            return rest, True
        return line, False

    def section_for(self, text: str) -> Optional[Section]:
        return self.sections.get(text.rstrip(":").strip())

    def is_advisory(self, text: str) -> bool:
        return any(text.startswith(a) for a in self.advisories)

    def recognizes(self, line: str) -> bool:
        """True if *line* looks like a header line written in this grammar."""
        body, commented = self.strip_comment(line)
        if self.comment_prefix and not commented:
            return False
        text = body.strip()
        return bool(text) and (
            text.startswith(self.branch_marker)
            or self.section_for(text) is not None
            or self.is_advisory(text)
        )


_ACTIONS: Dict[Tuple[Section, str], Bucket] = {
    (Section.STAGED, "new file"): Bucket.NEW_TO_COMMIT,
    (Section.STAGED, "deleted"): Bucket.DELETED_TO_COMMIT,
    (Section.STAGED, "modified"): Bucket.MODIFIED_TO_COMMIT,
    (Section.UNSTAGED, "deleted"): Bucket.DELETED_NOT_UPDATED,
    (Section.UNSTAGED, "modified"): Bucket.MODIFIED_NOT_UPDATED,
}

CLASSIC = StatusGrammar(
    name="classic",
    comment_prefix="#",
    branch_marker="On branch ",
    sections={
        "Changes to be committed": Section.STAGED,
        "Changed but not updated": Section.UNSTAGED,
        "Changes not staged for commit": Section.UNSTAGED,
        "Untracked files": Section.UNTRACKED,
        "Unmerged paths": Section.UNMERGED,
    },
    actions=_ACTIONS,
    advisories=(
        "(use ",
        "Initial commit",
        "Not currently on any branch",
        "Your branch is",
        "and have ",
    ),
    description="'#'-prefixed output of git 1.x",
)

MODERN = StatusGrammar(
    name="modern",
    comment_prefix="",
    branch_marker="On branch ",
    sections={
        "Changes to be committed": Section.STAGED,
        "Changes not staged for commit": Section.UNSTAGED,
        "Untracked files": Section.UNTRACKED,
        "Unmerged paths": Section.UNMERGED,
    },
    actions=_ACTIONS,
    advisories=(
        "(use ",
        "(all conflicts fixed",
        "(fix conflicts",
        "Initial commit",
        "No commits yet",
        "HEAD detached ",
        "Not currently on any branch",
        "Your branch is",
        "Your branch and ",
        "and have ",
        "You have unmerged paths",
        "All conflicts fixed",
    ),
    description="un-prefixed output of git >= 1.8.5",
)

BUILTIN_GRAMMARS: Tuple[StatusGrammar, ...] = (CLASSIC, MODERN)


def _parse_grammar(data: dict, source: Path) -> StatusGrammar:
    """Build a StatusGrammar from a YAML mapping."""
    try:
        sections = {
            heading: Section(value) for heading, value in data["sections"].items()
        }
        actions: Dict[Tuple[Section, str], Bucket] = {}
        for section_name, mapping in data["actions"].items():
            section = Section(section_name)
            for action, bucket_name in mapping.items():
                actions[(section, action)] = Bucket[bucket_name.upper()]
        return StatusGrammar(
            name=data["name"],
            comment_prefix=data.get("comment_prefix", ""),
            branch_marker=data["branch_marker"],
            sections=sections,
            actions=actions,
            advisories=tuple(data.get("advisories", [])),
            error_prefixes=tuple(data.get("error_prefixes", ["fatal:", "error:"])),
            description=data.get("description", ""),
        )
    except (KeyError, ValueError, AttributeError, TypeError) as exc:
        raise GrammarError(f"Invalid grammar in {source}: {exc!r}") from exc


class GrammarRegistry:
    """Central store for built-in and custom grammars."""

    def __init__(self, default: str = "modern") -> None:
        self._grammars: Dict[str, StatusGrammar] = {}
        self.default = default
        self.register_many(BUILTIN_GRAMMARS)

    # ---- registration ----

    def register(self, grammar: StatusGrammar) -> None:
        self._grammars[grammar.name] = grammar

    def register_many(self, grammars: Iterable[StatusGrammar]) -> None:
        for g in grammars:
            self.register(g)

    def load_directory(self, directory: Path) -> int:
        """Load every ``*.yaml`` / ``*.yml`` grammar in *directory*.

        Returns the number of grammars loaded.
        """
        if not directory.is_dir():
            return 0
        count = 0
        for path in sorted(directory.iterdir()):
            if path.suffix in (".yaml", ".yml"):
                self.register(self._load_yaml_grammar(path))
                count += 1
        logger.debug("Loaded %d grammar(s) from %s", count, directory)
        return count

    def _load_yaml_grammar(self, path: Path) -> StatusGrammar:
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as exc:
            raise GrammarError(f"Failed to read grammar {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise GrammarError(f"Grammar file {path} must contain a mapping")
        return _parse_grammar(data, path)

    # ---- queries ----

    @property
    def names(self) -> List[str]:
        return list(self._grammars)

    @property
    def all_grammars(self) -> List[StatusGrammar]:
        return list(self._grammars.values())

    def get(self, name: str) -> StatusGrammar:
        try:
            return self._grammars[name]
        except KeyError:
            raise GrammarError(
                f"Unknown grammar {name!r} (available: {', '.join(self.names)})"
            ) from None

    def detect(self, lines: Iterable[str]) -> StatusGrammar:
        """Pick the grammar that recognizes the first non-blank line.

        Grammars with a comment prefix are tried first, since an
        un-prefixed grammar would also match their text after stripping.
        Falls back to the default grammar.
        """
        first = next((ln for ln in lines if ln.strip()), None)
        if first is not None:
            first = first.lstrip("\ufeff").rstrip()
            ordered = sorted(
                self._grammars.values(), key=lambda g: not g.comment_prefix
            )
            for grammar in ordered:
                if grammar.recognizes(first):
                    logger.debug("Detected grammar %r", grammar.name)
                    return grammar
        return self.get(self.default)


def build_registry(
    default: str = "modern", grammars_dir: Optional[Path] = None
) -> GrammarRegistry:
    """Build a registry with built-ins plus any custom grammars on disk."""
    registry = GrammarRegistry(default=default)
    if grammars_dir is not None:
        registry.load_directory(grammars_dir)
    registry.get(default)  # fail early on an unknown default
    return registry
