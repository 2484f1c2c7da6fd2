# Area: Engine
"""
arena_engine.game_loop — Turn loop strategies
=============================================

A game loop drives the processor from the initial state until the
processor reports the game finished. It makes no rule decisions.
"""

from abc import ABC, abstractmethod
import logging

from .processor import AbstractProcessor
from .state import AbstractState

logger = logging.getLogger("arena_engine.loop")


class GameLoop(ABC):
    """Strategy the engine uses to run the game between setup and finish."""

    @abstractmethod
    def run(self, initial_state: AbstractState,
            processor: AbstractProcessor) -> AbstractState:
        """Play the game and return the last state."""
        ...


class SimpleGameLoop(GameLoop):
    """
    Synchronous round-by-round loop.

    Checks ``has_game_ended`` before every round, so a processor that is
    terminal from the start is never asked to play.
    """

    def __init__(self):
        self.rounds_played = 0

    def run(self, initial_state: AbstractState,
            processor: AbstractProcessor) -> AbstractState:
        state = initial_state
        round_number = 0

        while not processor.has_game_ended(state):
            round_number += 1
            logger.debug(f"Playing round {round_number}")
            state = processor.play_round(round_number, state)

        self.rounds_played = round_number
        logger.info(f"Game loop finished after {round_number} rounds")
        return state
