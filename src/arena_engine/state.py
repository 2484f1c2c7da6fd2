# Area: Game Contract
"""
arena_engine.state — Game state base class
==========================================

A state is a snapshot of the game world at a turn boundary. The engine
treats it as opaque; only the processor builds successors. States form
a doubly linked history chain so the replay can be rebuilt by walking
forward from the initial state.
"""

from __future__ import annotations
from typing import Iterator, Optional, Sequence

from .player import AbstractPlayer


class AbstractState:
    """
    Base state with a history chain.

    Attributes:
        players: Players taking part in the game
        round_number: Round this state closes (0 for the initial state)
        previous_state: State this one was derived from
        next_state: State derived from this one, once it exists
    """

    def __init__(
        self,
        players: Sequence[AbstractPlayer] = (),
        round_number: int = 0,
        previous_state: Optional["AbstractState"] = None,
    ):
        self.players = list(players)
        self.round_number = round_number
        self.previous_state = previous_state
        self.next_state: Optional[AbstractState] = None
        if previous_state is not None:
            previous_state.next_state = self

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(round={self.round_number})"

    def has_next_state(self) -> bool:
        return self.next_state is not None

    def has_previous_state(self) -> bool:
        return self.previous_state is not None

    def iter_states(self) -> Iterator["AbstractState"]:
        """Yield this state and every later state in the chain."""
        state: Optional[AbstractState] = self
        while state is not None:
            yield state
            state = state.next_state
