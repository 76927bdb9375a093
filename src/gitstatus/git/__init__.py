"""Git interface layer — adapter, status grammar, classifier, response model."""

from gitstatus.git.adapter import GitError, get_repo_root, get_status_lines
from gitstatus.git.builder import StatusResponseBuilder, parse_status, parse_status_output
from gitstatus.git.classifier import ClassifiedLine, LineClassifier, LineKind
from gitstatus.git.grammar import (
    CLASSIC,
    MODERN,
    GrammarError,
    GrammarRegistry,
    StatusGrammar,
    build_registry,
)
from gitstatus.git.models import (
    Bucket,
    ErrorDetails,
    Ref,
    Section,
    StatusIndexError,
    StatusResponse,
)

__all__ = [
    "CLASSIC",
    "MODERN",
    "Bucket",
    "ClassifiedLine",
    "ErrorDetails",
    "GitError",
    "GrammarError",
    "GrammarRegistry",
    "LineClassifier",
    "LineKind",
    "Ref",
    "Section",
    "StatusGrammar",
    "StatusIndexError",
    "StatusResponse",
    "StatusResponseBuilder",
    "build_registry",
    "get_repo_root",
    "get_status_lines",
    "parse_status",
    "parse_status_output",
]
