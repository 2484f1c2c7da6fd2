# Area: Engine
"""
arena_engine._engine.registry — Player registry
===============================================

Ordered collection of player handles. Order is the ``bot_ids`` order
and never changes; once setup seals the registry its size is fixed.
"""

from __future__ import annotations
from typing import Iterator, List, Optional

from ..errors import SetupError
from ..player import AbstractPlayer


class PlayerRegistry:
    """Ordered, sealable list of players keyed by id."""

    def __init__(self):
        self._players: List[AbstractPlayer] = []
        self._sealed = False

    def __iter__(self) -> Iterator[AbstractPlayer]:
        return iter(self._players)

    def __len__(self) -> int:
        return len(self._players)

    def __getitem__(self, index: int) -> AbstractPlayer:
        return self._players[index]

    def __repr__(self) -> str:
        return f"PlayerRegistry({self._players!r})"

    @property
    def sealed(self) -> bool:
        return self._sealed

    def register(self, player: AbstractPlayer) -> None:
        """Append a player; ids must be unique and the registry open."""
        if self._sealed:
            raise SetupError(
                f"Player registry is sealed, cannot add player {player.id}",
                phase="SETUP_DONE",
            )
        if self.get(player.id) is not None:
            raise SetupError(
                f"Duplicate player id {player.id}",
                phase="PARSING_SETTINGS",
                details={"player_id": player.id},
            )
        self._players.append(player)

    def seal(self) -> None:
        self._sealed = True

    def get(self, player_id: int) -> Optional[AbstractPlayer]:
        for player in self._players:
            if player.id == player_id:
                return player
        return None

    def ids(self) -> List[int]:
        return [player.id for player in self._players]
