# Area: Engine
"""
arena_engine._engine.phases — Handshake phase tracking
======================================================

The setup and finish handshakes are small state machines. Each phase
tracker holds a transition table and rejects any step that is not in it.
"""

from __future__ import annotations
import logging
from enum import Enum
from typing import Dict, Generic, TypeVar

logger = logging.getLogger("arena_engine.engine")


class SetupPhase(Enum):
    """
    Phases of the setup handshake.

    AWAIT_INITIALIZE -> SENT_OK (``initialize`` received, ``ok`` sent)
    SENT_OK -> PARSING_SETTINGS
    PARSING_SETTINGS -> SETUP_DONE (``start`` received)
    """
    AWAIT_INITIALIZE = "AWAIT_INITIALIZE"
    SENT_OK = "SENT_OK"
    PARSING_SETTINGS = "PARSING_SETTINGS"
    SETUP_DONE = "SETUP_DONE"


class FinishPhase(Enum):
    """
    Phases of the finish handshake.

    NOT_STARTED -> AWAIT_DETAILS (``end`` sent)
    AWAIT_DETAILS -> AWAIT_GAME (``details`` received, summary sent)
    AWAIT_GAME -> REPORTED (``game`` received, replay sent)
    """
    NOT_STARTED = "NOT_STARTED"
    AWAIT_DETAILS = "AWAIT_DETAILS"
    AWAIT_GAME = "AWAIT_GAME"
    REPORTED = "REPORTED"


SETUP_TRANSITIONS = {
    SetupPhase.AWAIT_INITIALIZE: SetupPhase.SENT_OK,
    SetupPhase.SENT_OK: SetupPhase.PARSING_SETTINGS,
    SetupPhase.PARSING_SETTINGS: SetupPhase.SETUP_DONE,
    SetupPhase.SETUP_DONE: None,
}

FINISH_TRANSITIONS = {
    FinishPhase.NOT_STARTED: FinishPhase.AWAIT_DETAILS,
    FinishPhase.AWAIT_DETAILS: FinishPhase.AWAIT_GAME,
    FinishPhase.AWAIT_GAME: FinishPhase.REPORTED,
    FinishPhase.REPORTED: None,
}

P = TypeVar("P", SetupPhase, FinishPhase)


class PhaseTracker(Generic[P]):
    """
    Linear phase machine.

    Attributes:
        current: The current phase
    """

    def __init__(self, initial: P, transitions: Dict[P, P]):
        self.initial = initial
        self.current = initial
        self._transitions = transitions

    def can_advance_to(self, phase: P) -> bool:
        return self._transitions.get(self.current) == phase

    def advance_to(self, phase: P) -> P:
        """
        Move to ``phase``.

        Raises:
            ValueError: If ``phase`` does not follow the current phase
        """
        if not self.can_advance_to(phase):
            raise ValueError(
                f"Invalid transition: {self.current.value} -> {phase.value}"
            )
        logger.debug(f"Phase {self.current.value} -> {phase.value}")
        self.current = phase
        return phase

    def reset(self) -> None:
        self.current = self.initial


def setup_tracker() -> PhaseTracker[SetupPhase]:
    return PhaseTracker(SetupPhase.AWAIT_INITIALIZE, SETUP_TRANSITIONS)


def finish_tracker() -> PhaseTracker[FinishPhase]:
    return PhaseTracker(FinishPhase.NOT_STARTED, FINISH_TRANSITIONS)
