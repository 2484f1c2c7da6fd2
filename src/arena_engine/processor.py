# Area: Game Contract
"""
arena_engine.processor — Processor base class
=============================================

The processor owns the game rules: it turns one state into the next,
decides when the game is over and who won. One processor exists per
run, created right after setup.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Optional, Sequence

from .player import AbstractPlayer
from .state import AbstractState


class AbstractProcessor(ABC):
    """
    Abstract base class for a game processor.

    Subclass this and implement the four abstract methods. The game loop
    calls ``has_game_ended`` before every round and ``play_round`` to
    advance; the engine calls ``get_winner`` and ``get_score`` once the
    loop is done.
    """

    def __init__(self, players: Sequence[AbstractPlayer]):
        self.players: List[AbstractPlayer] = list(players)

    def pre_game_phase(self) -> None:
        """Runs once before the first round. Default does nothing."""

    @abstractmethod
    def play_round(self, round_number: int, state: AbstractState) -> AbstractState:
        """
        Advance the game by exactly one round.

        Parameters
        ----------
        round_number : int
            1-based number of the round being played.
        state : AbstractState
            State at the start of the round.

        Returns
        -------
        AbstractState
            The new current state.
        """
        ...

    @abstractmethod
    def has_game_ended(self, state: AbstractState) -> bool:
        """Return True once ``state`` is terminal."""
        ...

    @abstractmethod
    def get_winner(self) -> Optional[AbstractPlayer]:
        """Return the winning player, or None on a draw or aborted game."""
        ...

    @abstractmethod
    def get_score(self) -> Any:
        """Return the JSON-serializable score reported to the wrapper."""
        ...
