# Area: Shared
"""Error formatting for structured engine error logs."""

from __future__ import annotations
import json
from datetime import datetime, timezone
from typing import Any, Dict, Optional


def format_error_block(
    error_type: str,
    message: str,
    phase: Optional[str],
    details: Optional[Dict[str, Any]],
) -> str:
    """Format a structured error block for stderr and the log file."""
    timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"

    lines = [
        "",
        "=" * 64,
        " ENGINE ERROR — RUN ABORTED",
        "=" * 64,
        f" Timestamp:    {timestamp}",
        f" Error Type:   {error_type}",
    ]

    if phase is not None:
        lines.append(f" Phase:        {phase}")

    lines.append(f" Message:      {message}")

    if details:
        lines.append("")
        lines.append(" ── DETAILS " + "─" * 52)
        lines.append(indent_json(details))

    lines.append("")
    lines.append("=" * 64)
    lines.append("")

    return "\n".join(lines)


def indent_json(data: Dict[str, Any], indent: int = 2) -> str:
    """Format JSON with indentation for error logs."""
    try:
        formatted = json.dumps(data, indent=indent, default=str)
        return "\n".join(" " + line for line in formatted.split("\n"))
    except (TypeError, ValueError):
        return f" {repr(data)}"
