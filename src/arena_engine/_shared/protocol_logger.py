# Area: Shared
"""
arena_engine._shared.protocol_logger — Protocol line tracing
=============================================================

Colored one-line trace of every protocol line crossing the wrapper
channel. Output goes to stderr; stdout belongs to the wrapper.
"""

from __future__ import annotations
import sys
from datetime import datetime
from typing import Optional, TextIO

# ══════════════════════════════════════════════════════════════
# ANSI COLOR CODES
# ══════════════════════════════════════════════════════════════

GREEN = "\033[32m"         # Protocol messages
GREY = "\033[90m"          # Discarded lines
RED = "\033[31m"           # Errors
RESET = "\033[0m"

# ══════════════════════════════════════════════════════════════
# COMMAND → DISPLAY NAME MAPPINGS
# ══════════════════════════════════════════════════════════════

# Commands the engine RECEIVES from the wrapper
RECEIVE_DISPLAY_NAMES = {
    "initialize": "INITIALIZE",
    "bot_ids": "BOT-IDS",
    "start": "START",
    "details": "DETAILS-REQUEST",
    "game": "REPLAY-REQUEST",
}

# Commands the engine SENDS to the wrapper
SEND_DISPLAY_NAMES = {
    "ok": "ACK",
    "end": "GAME-END",
    "bot": "BOT-MESSAGE",
}

# Maximum characters of a line echoed in the trace
MAX_TRACE_WIDTH = 80


def _command(line: str) -> str:
    parts = line.split(" ", 1)
    return parts[0] if parts else ""


def _shorten(line: str) -> str:
    if len(line) <= MAX_TRACE_WIDTH:
        return line
    return line[: MAX_TRACE_WIDTH - 3] + "..."


class ProtocolLogger:
    """Trace logger for wrapper protocol lines."""

    def __init__(self, enabled: bool = False, stream: Optional[TextIO] = None):
        self.enabled = enabled
        self._stream = stream
        self._phase = "-"

    def set_phase(self, phase: str) -> None:
        """Set current engine phase for logging context."""
        self._phase = phase or "-"

    def _out(self) -> TextIO:
        return self._stream or sys.stderr

    def _now(self) -> str:
        return datetime.now().strftime("%H:%M:%S")

    def _display(self, line: str, names: dict) -> str:
        command = _command(line)
        if command.startswith("{"):
            return "RESULT-DETAILS"
        return names.get(command, "OTHER")

    def log_received(self, line: str) -> None:
        """Trace a line read from the wrapper."""
        if not self.enabled:
            return
        display = self._display(line, RECEIVE_DISPLAY_NAMES)
        print(
            f"{GREEN}{self._now()} | PHASE: {self._phase:16} | RECEIVED  | "
            f"{display:16} | {_shorten(line)}{RESET}",
            file=self._out(),
        )

    def log_sent(self, line: str) -> None:
        """Trace a line written to the wrapper."""
        if not self.enabled:
            return
        display = self._display(line, SEND_DISPLAY_NAMES)
        print(
            f"{GREEN}{self._now()} | PHASE: {self._phase:16} | SENT      | "
            f"{display:16} | {_shorten(line)}{RESET}",
            file=self._out(),
        )

    def log_discarded(self, line: str, expected: str) -> None:
        """Trace a line dropped while waiting for another one."""
        if not self.enabled:
            return
        print(
            f"{GREY}{self._now()} | PHASE: {self._phase:16} | DISCARDED | "
            f"waiting for {expected!r:16} | {_shorten(line)}{RESET}",
            file=self._out(),
        )

    def log_error(self, description: str) -> None:
        """Trace a transport error."""
        if not self.enabled:
            return
        print(f"{RED}[ERROR] {self._now()} | {description}{RESET}", file=self._out())


# Global singleton instance
_protocol_logger: Optional[ProtocolLogger] = None


def get_protocol_logger() -> ProtocolLogger:
    """Get or create the global protocol logger instance."""
    global _protocol_logger
    if _protocol_logger is None:
        _protocol_logger = ProtocolLogger()
    return _protocol_logger


def enable_protocol_trace() -> None:
    """Turn on protocol line tracing."""
    get_protocol_logger().enabled = True


def disable_protocol_trace() -> None:
    """Turn off protocol line tracing."""
    get_protocol_logger().enabled = False
