"""Build a StatusResponse from raw ``git status`` output lines."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Union

from gitstatus.git.classifier import ClassifiedLine, LineClassifier, LineKind
from gitstatus.git.grammar import GrammarRegistry, StatusGrammar
from gitstatus.git.models import Bucket, ErrorDetails, Ref, StatusResponse

logger = logging.getLogger(__name__)

GrammarArg = Union[StatusGrammar, str, None]


class StatusResponseBuilder:
    """Accumulate classified lines and freeze them into a StatusResponse.

    Malformed lines never raise; they become error records. The first
    free-text message wins, later ones are dropped. A later branch header
    replaces an earlier one.
    """

    def __init__(self, grammar: StatusGrammar) -> None:
        self.grammar = grammar
        self._classifier = LineClassifier(grammar)
        self._buckets: Dict[Bucket, List[str]] = {b: [] for b in Bucket}
        self._branch: Optional[Ref] = None
        self._message: Optional[str] = None
        self._errors: List[ErrorDetails] = []

    def feed(self, line_no: int, line: str) -> ClassifiedLine:
        item = self._classifier.classify(line_no, line)

        if item.kind is LineKind.ENTRY:
            self._buckets[item.bucket].append(item.text)  # type: ignore[index]
        elif item.kind is LineKind.BRANCH:
            self._branch = Ref(item.text)
        elif item.kind is LineKind.MESSAGE:
            if self._message is None:
                self._message = item.text
            else:
                logger.debug("Line %d: extra message dropped: %r", line_no, item.text)
        elif item.kind is LineKind.ERROR:
            logger.debug("Line %d: unrecognized status line: %r", line_no, item.text)
            self._errors.append(ErrorDetails(line_no=line_no, error=item.text))
        return item

    def feed_all(self, lines: Iterable[str]) -> None:
        """Feed *lines* in order, numbering them from 1."""
        for line_no, line in enumerate(lines, start=1):
            self.feed(line_no, line)

    def build(self) -> StatusResponse:
        response = StatusResponse(
            new_files_to_commit=tuple(self._buckets[Bucket.NEW_TO_COMMIT]),
            deleted_files_to_commit=tuple(self._buckets[Bucket.DELETED_TO_COMMIT]),
            modified_files_to_commit=tuple(self._buckets[Bucket.MODIFIED_TO_COMMIT]),
            deleted_files_not_updated=tuple(self._buckets[Bucket.DELETED_NOT_UPDATED]),
            modified_files_not_updated=tuple(self._buckets[Bucket.MODIFIED_NOT_UPDATED]),
            untracked_files=tuple(self._buckets[Bucket.UNTRACKED]),
            branch=self._branch,
            message=self._message,
            errors=tuple(self._errors),
            grammar=self.grammar.name,
        )
        logger.debug(
            "Parsed status (%s): %d file(s), %d error(s)",
            self.grammar.name, response.total_files, response.error_count,
        )
        return response


def _resolve_grammar(
    grammar: GrammarArg, lines: List[str], registry: Optional[GrammarRegistry]
) -> StatusGrammar:
    if isinstance(grammar, StatusGrammar):
        return grammar
    registry = registry or GrammarRegistry()
    if grammar is None or grammar == "auto":
        return registry.detect(lines)
    return registry.get(grammar)


def parse_status(
    lines: Iterable[str],
    grammar: GrammarArg = None,
    registry: Optional[GrammarRegistry] = None,
) -> StatusResponse:
    """Parse captured status output lines into a StatusResponse.

    *grammar* is a StatusGrammar, the name of a registered grammar, or
    ``None`` / ``"auto"`` to detect it from the output. Raises
    ``TypeError`` if *lines* is None and ``GrammarError`` for an unknown
    grammar name; never raises for the content of the lines.
    """
    if lines is None:
        raise TypeError("parse_status() requires a sequence of lines, got None")
    if isinstance(lines, str):
        lines = lines.splitlines()
    lines = list(lines)

    builder = StatusResponseBuilder(_resolve_grammar(grammar, lines, registry))
    builder.feed_all(lines)
    return builder.build()


def parse_status_output(
    text: str,
    grammar: GrammarArg = None,
    registry: Optional[GrammarRegistry] = None,
) -> StatusResponse:
    """Parse the full captured stdout of one ``git status`` run."""
    if text is None:
        raise TypeError("parse_status_output() requires text, got None")
    return parse_status(text.splitlines(), grammar=grammar, registry=registry)
