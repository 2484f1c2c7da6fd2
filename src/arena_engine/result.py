# Area: Engine
"""
arena_engine.result — Game outcome types
========================================

GameDetails is the result summary sent to the wrapper after ``details``.
RunResult is what Engine.run() hands back to its caller; the outermost
layer turns its exit_code into the process exit status.
"""

from dataclasses import dataclass
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, StrictStr

from .state import AbstractState

# Winner id reported when there is no winner
NO_WINNER = "null"


class GameDetails(BaseModel):
    """Result summary line: ``{"winner": <id or "null">, "score": <value>}``."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    winner: StrictStr = NO_WINNER
    score: Any = None

    @classmethod
    def from_winner(cls, winner_id: Optional[int], score: Any) -> "GameDetails":
        return cls(
            winner=NO_WINNER if winner_id is None else str(winner_id),
            score=score,
        )

    def to_line(self) -> str:
        return self.model_dump_json()


@dataclass
class RunResult:
    """
    Outcome of one engine run.

    Attributes:
        winner_id: Id of the winning player, or None if no winner
        score: Score reported by the processor
        details: Summary sent to the wrapper
        played_game: Replay text sent to the wrapper
        initial_state: Head of the state history chain
        final_state: Last state the game loop produced
        rounds_played: Rounds the game loop ran, when it tracks them
        exit_code: Process exit status suggested to the caller
    """

    winner_id: Optional[int]
    score: Any
    details: GameDetails
    played_game: str
    initial_state: AbstractState
    final_state: AbstractState
    rounds_played: Optional[int] = None
    exit_code: int = 0

    @property
    def is_draw(self) -> bool:
        return self.winner_id is None
