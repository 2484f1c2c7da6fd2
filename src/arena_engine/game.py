# Area: Game Contract
"""
arena_engine.game — The collaborator contract a concrete game implements
========================================================================

Games subclass GameAdapter and implement the 5 abstract methods. The
engine calls them at fixed points of the run; games never see the
wrapper protocol itself.

Call order
----------
1. create_player()          once per id in ``bot_ids``, in order
2. parse_setting()          for every non-``bot_ids`` setup line
3. create_processor()       once, right after ``start``
4. send_game_settings()     once per player, in ``bot_ids`` order
5. get_initial_state()      once, before the game loop
6. get_played_game()        once, when the wrapper asks for the replay
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from .configuration import Configuration
from .player import AbstractPlayer
from .processor import AbstractProcessor
from .state import AbstractState


class GameAdapter(ABC):
    """
    Abstract base class for a concrete game.

    Subclass this and implement all 5 methods. Override
    ``parse_setting`` to accept game-specific setup lines.
    """

    name = "game"

    @abstractmethod
    def create_player(self, player_id: int) -> AbstractPlayer:
        """
        Return the player handle for one bot.

        Parameters
        ----------
        player_id : int
            Id parsed from the ``bot_ids`` line.
        """
        ...

    @abstractmethod
    def create_processor(
        self, players: Sequence[AbstractPlayer], configuration: Configuration
    ) -> Optional[AbstractProcessor]:
        """
        Return the processor for this run.

        Returning None is a fatal configuration error; the engine raises
        MissingProcessorError.
        """
        ...

    @abstractmethod
    def send_game_settings(
        self, player: AbstractPlayer, configuration: Configuration
    ) -> None:
        """Send the game-specific settings to one player's bot."""
        ...

    @abstractmethod
    def get_initial_state(
        self, players: Sequence[AbstractPlayer], configuration: Configuration
    ) -> AbstractState:
        """Return the start-of-game state."""
        ...

    @abstractmethod
    def get_played_game(self, initial_state: AbstractState) -> str:
        """
        Return the replay of the entire game as a single line of text.

        ``initial_state`` is the head of the state history chain; walk
        ``next_state`` to reach later states.
        """
        ...

    def parse_setting(
        self, command: str, args: List[str], configuration: Configuration
    ) -> None:
        """
        Handle one setup line whose command is not ``bot_ids``.

        The default ignores it. Override and write into ``configuration``
        for the settings your game understands.

        Example
        -------
        >>> def parse_setting(self, command, args, configuration):
        ...     if command == "max_rounds":
        ...         configuration.put("max_rounds", int(args[0]))
        """
