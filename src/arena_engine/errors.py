# Area: Shared
"""
arena_engine.errors — Custom exception classes
===============================================

Defines the exception hierarchy for engine failures.
Each exception stores enough context for structured logging.
"""

from __future__ import annotations
from typing import Any, Dict, Optional

from .error_formatter import format_error_block


class EngineError(Exception):
    """Base exception for all arena engine errors."""

    error_type = "ENGINE_ERROR"

    def __init__(self, message: str, phase: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.phase = phase
        self.details = details or {}
        super().__init__(message)

    def format_error_log(self) -> str:
        return format_error_block(
            error_type=self.error_type,
            message=self.message,
            phase=self.phase,
            details=self.details,
        )


class TransportError(EngineError):
    """Raised when the line channel is closed or a read/write fails."""

    error_type = "TRANSPORT_FAILURE"


class SetupError(EngineError):
    """Raised when the setup stream carries a structurally invalid line."""

    error_type = "SETUP_ERROR"


class SetupAbortedError(SetupError):
    """Raised when setup could not complete because the transport failed."""

    error_type = "SETUP_ABORTED"


class MissingProcessorError(EngineError):
    """Raised when the game collaborator returns no processor."""

    error_type = "MISSING_PROCESSOR"

    def __init__(self, game_name: str):
        self.game_name = game_name
        super().__init__(
            f"Processor has not been set by '{game_name}'",
            phase="SETUP_DONE",
            details={"game": game_name},
        )


class ConfigurationError(EngineError):
    """Raised on invalid configuration reads, writes, or settings files."""

    error_type = "CONFIGURATION_ERROR"
