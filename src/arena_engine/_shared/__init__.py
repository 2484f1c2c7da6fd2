# Area: Shared
"""
Shared utilities used by the engine and game collaborators.

This package contains:
- Line channel to the wrapper process
- Logging configuration
- Protocol line tracing
"""

from .channel import MessageChannel
from .logging_config import setup_logging, log_engine_error
from .protocol_logger import (
    ProtocolLogger,
    get_protocol_logger,
    enable_protocol_trace,
    disable_protocol_trace,
)

__all__ = [
    "MessageChannel",
    "setup_logging",
    "log_engine_error",
    "ProtocolLogger",
    "get_protocol_logger",
    "enable_protocol_trace",
    "disable_protocol_trace",
]
