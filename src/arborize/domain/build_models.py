from __future__ import annotations

"""
Build Result Data Models.

Result object and factories used to hand the outcome of a tree build from
the service layer to the CLI. Building itself never produces these: they
exist only at the caller-side error boundary.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union


@dataclass(frozen=True)
class BuildResult:
    """
    Outcome of one tree build.

    Attributes:
        ok: Flag indicating success or failure.
        error: Failure message (empty on success).
        error_type: Exception class name of the failure (empty on success).
        source: Description of what was built (path or sample root).
        lines: Rendered output lines.
        node_count: Number of nodes in the built tree.
        max_depth: Edges on the longest root-to-leaf path.
        output_path: File the rendering was saved to, if any.
        summary: Free-form execution metadata.
    """
    ok: bool
    error: str
    source: str
    error_type: str = ""
    lines: List[str] = field(default_factory=list)
    node_count: int = 0
    max_depth: int = 0
    output_path: str = ""
    summary: Dict[str, Any] = field(default_factory=dict)


def create_success_result(
        source: str,
        lines: List[str],
        node_count: int,
        max_depth: int,
        output_path: str = "",
        summary: Optional[Dict[str, Any]] = None,
) -> BuildResult:
    """Create the result of a completed build."""
    return BuildResult(
        ok=True,
        error="",
        source=source,
        lines=list(lines),
        node_count=node_count,
        max_depth=max_depth,
        output_path=output_path,
        summary=dict(summary or {}),
    )


def create_error_result(
        error: Union[BaseException, str],
        source: str,
        summary: Optional[Dict[str, Any]] = None,
        message: str = "",
) -> BuildResult:
    """
    Create the result of a failed build from an exception or message.

    An explicit ``message`` replaces the exception text, which is empty for
    some exceptions (e.g. timeouts).
    """
    if isinstance(error, BaseException):
        message = message or str(error) or type(error).__name__
        error_type = type(error).__name__
    else:
        message = message or error
        error_type = ""

    return BuildResult(
        ok=False,
        error=message,
        error_type=error_type,
        source=source,
        summary=dict(summary or {}),
    )
