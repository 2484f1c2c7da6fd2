# Area: Demo
"""
arena_engine.demo_game — Demo game implementation
=================================================

A small ready-to-run game for trying the engine against a wrapper or a
set of debug input files.

Counting race: every round each bot is asked ``action move`` and answers
1, 2 or 3. The answer is added to its total. The game ends when a bot
reaches the target or the round limit is hit; the highest total wins.

Usage:
    from arena_engine import DemoGame, Engine

    result = Engine(game=DemoGame()).run()
"""

from __future__ import annotations
import json
import logging
from typing import Any, Dict, List, Optional, Sequence

from .configuration import Configuration
from .errors import ConfigurationError
from .game import GameAdapter
from .player import AbstractPlayer
from .processor import AbstractProcessor
from .state import AbstractState

logger = logging.getLogger("arena_engine.demo")

DEFAULT_MAX_ROUNDS = 10
DEFAULT_TARGET = 15
VALID_MOVES = (1, 2, 3)

# Settings the demo accepts during setup
INT_SETTINGS = ("max_rounds", "target")


class DemoPlayer(AbstractPlayer):
    """Player handle; the race keeps totals in the state, not here."""


class RaceState(AbstractState):
    """Totals after a round, plus the moves played in it."""

    def __init__(
        self,
        players: Sequence[AbstractPlayer],
        totals: Dict[int, int],
        moves: Optional[Dict[int, int]] = None,
        round_number: int = 0,
        previous_state: Optional[AbstractState] = None,
    ):
        super().__init__(players, round_number, previous_state)
        self.totals = dict(totals)
        self.moves = dict(moves or {})

    def to_dict(self) -> Dict[str, Any]:
        return {
            "round": self.round_number,
            "moves": [{"player": pid, "move": m} for pid, m in self.moves.items()],
            "totals": [{"player": pid, "total": t} for pid, t in self.totals.items()],
        }


def parse_move(reply: str) -> Optional[int]:
    """Return the move in ``reply``, or None if it is not a valid move."""
    try:
        move = int(reply.strip())
    except ValueError:
        return None
    return move if move in VALID_MOVES else None


class RaceProcessor(AbstractProcessor):
    """Rules of the counting race."""

    def __init__(self, players: Sequence[AbstractPlayer], max_rounds: int, target: int):
        super().__init__(players)
        self.max_rounds = max_rounds
        self.target = target
        self._last_state: Optional[RaceState] = None

    def pre_game_phase(self) -> None:
        logger.info(f"Race to {self.target} in at most {self.max_rounds} rounds")

    def play_round(self, round_number: int, state: RaceState) -> RaceState:
        totals = dict(state.totals)
        moves: Dict[int, int] = {}

        for player in self.players:
            player.send_update("round", round_number)
            reply = player.request_move("move")
            move = parse_move(reply)
            if move is None:
                player.send_warning(f"Invalid move '{reply}', counted as 0")
                move = 0
            moves[player.id] = move
            totals[player.id] = totals.get(player.id, 0) + move

        next_state = RaceState(
            self.players, totals, moves,
            round_number=round_number, previous_state=state,
        )
        self._last_state = next_state
        return next_state

    def has_game_ended(self, state: RaceState) -> bool:
        self._last_state = state
        if state.round_number >= self.max_rounds:
            return True
        return any(total >= self.target for total in state.totals.values())

    def get_winner(self) -> Optional[AbstractPlayer]:
        if self._last_state is None or not self._last_state.totals:
            return None
        totals = self._last_state.totals
        best = max(totals.values())
        leaders = [pid for pid, total in totals.items() if total == best]
        if len(leaders) != 1:
            return None
        for player in self.players:
            if player.id == leaders[0]:
                return player
        return None

    def get_score(self) -> int:
        return self._last_state.round_number if self._last_state else 0


class DemoGame(GameAdapter):
    """GameAdapter for the counting race."""

    name = "counting_race"

    def __init__(self, max_rounds: int = DEFAULT_MAX_ROUNDS, target: int = DEFAULT_TARGET):
        self.default_max_rounds = max_rounds
        self.default_target = target
        self._settings: Dict[str, int] = {}

    def parse_setting(self, command: str, args: List[str],
                      configuration: Configuration) -> None:
        if command not in INT_SETTINGS:
            logger.debug(f"Ignoring setting {command!r}")
            return
        if len(args) != 1:
            logger.warning(f"Setting {command!r} expects one value, got {args}")
            return
        try:
            configuration.put(command, int(args[0]))
        except ValueError:
            logger.warning(f"Setting {command!r} is not an integer: {args[0]!r}")
        except ConfigurationError as e:
            logger.warning(str(e))

    def create_player(self, player_id: int) -> DemoPlayer:
        return DemoPlayer(player_id)

    def create_processor(self, players: Sequence[AbstractPlayer],
                         configuration: Configuration) -> RaceProcessor:
        self._settings = {
            "max_rounds": configuration.get_int("max_rounds", self.default_max_rounds),
            "target": configuration.get_int("target", self.default_target),
        }
        return RaceProcessor(players, **self._settings)

    def send_game_settings(self, player: AbstractPlayer,
                           configuration: Configuration) -> None:
        player.send_setting("your_botid", player.id)
        player.send_setting("max_rounds", self._settings["max_rounds"])
        player.send_setting("target", self._settings["target"])

    def get_initial_state(self, players: Sequence[AbstractPlayer],
                          configuration: Configuration) -> RaceState:
        return RaceState(players, {player.id: 0 for player in players})

    def get_played_game(self, initial_state: AbstractState) -> str:
        states = [state.to_dict() for state in initial_state.iter_states()]
        return json.dumps({
            "game": self.name,
            "settings": self._settings,
            "players": [player.id for player in initial_state.players],
            "states": states,
        })
