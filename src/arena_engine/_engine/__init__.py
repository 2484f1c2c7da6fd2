# Area: Engine
"""
Engine internals - handshake bookkeeping.

This package handles:
- Setup and finish handshake phase tracking
- Player registry
"""

from .phases import (
    SetupPhase,
    FinishPhase,
    PhaseTracker,
    setup_tracker,
    finish_tracker,
)
from .registry import PlayerRegistry

__all__ = [
    "SetupPhase",
    "FinishPhase",
    "PhaseTracker",
    "setup_tracker",
    "finish_tracker",
    "PlayerRegistry",
]
