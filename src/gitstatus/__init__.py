"""gitstatus — structured, queryable responses from ``git status`` output."""

from gitstatus.git.builder import parse_status, parse_status_output
from gitstatus.git.models import Bucket, StatusResponse

__version__ = "0.1.0"

__all__ = ["Bucket", "StatusResponse", "__version__", "parse_status", "parse_status_output"]
