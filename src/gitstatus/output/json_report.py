"""JSON reporter for scripts and CI pipelines."""

from __future__ import annotations

import json
from typing import Any, Dict, List

from gitstatus import __version__
from gitstatus.git.models import Bucket, StatusResponse


def to_dict(response: StatusResponse) -> Dict[str, Any]:
    """Convert a StatusResponse to a JSON-serialisable dict."""
    errors_list: List[Dict[str, Any]] = []
    for e in response.errors:
        errors_list.append({"line": e.line_no, "error": e.error})

    return {
        "version": "1.0",
        "tool": f"gitstatus {__version__}",
        "grammar": response.grammar,
        "branch": str(response.branch) if response.branch else None,
        "message": response.message,
        **{bucket.value: response.files(bucket) for bucket in Bucket},
        "errors": errors_list,
        "error_count": response.error_count,
        "error_state": response.error_state,
    }


def render(response: StatusResponse) -> str:
    """Return formatted JSON string."""
    return json.dumps(to_dict(response), indent=2)
