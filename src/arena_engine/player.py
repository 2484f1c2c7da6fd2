# Area: Game Contract
"""
arena_engine.player — Player handle base class
==============================================

A player is the engine's handle on one bot. Games subclass
AbstractPlayer to add their own mutable per-player state.

In live mode every bot message is relayed through the wrapper channel.
In debug mode a player can be bound to an input file; bot replies are
then read from that file one line per request.
"""

from __future__ import annotations
import logging
from pathlib import Path
from typing import Any, Optional, TextIO, Union

from ._shared.channel import MessageChannel, strip_line_terminator
from .errors import TransportError

logger = logging.getLogger("arena_engine.player")


class AbstractPlayer:
    """
    Base player handle.

    Attributes:
        id: Player id received in ``bot_ids``; stable for the run
        input_file: Per-bot input file in debug mode, else None
        channel: Wrapper channel bound by the engine
    """

    def __init__(self, player_id: int):
        self.id = player_id
        self.input_file: Optional[Path] = None
        self.channel: Optional[MessageChannel] = None
        self._input: Optional[TextIO] = None

    @property
    def name(self) -> str:
        return f"player{self.id}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(id={self.id})"

    # ── Binding ───────────────────────────────────────────────

    def attach(self, channel: MessageChannel) -> None:
        """Bind the wrapper channel used to reach this player's bot."""
        self.channel = channel

    def set_input_file(self, path: Union[str, Path]) -> None:
        """Bind a debug-mode input file holding this bot's replies."""
        self.input_file = Path(path)
        self.close()

    def close(self) -> None:
        if self._input is not None:
            self._input.close()
            self._input = None

    # ── Bot messaging ─────────────────────────────────────────

    def send_message(self, text: str) -> None:
        if self.channel is None:
            logger.warning(f"{self.name}: no channel bound, dropping {text!r}")
            return
        self.channel.send_to_bot(self.id, text)

    def send_setting(self, key: str, value: Any) -> None:
        self.send_message(f"settings {key} {value}")

    def send_update(self, key: str, value: Any, target: str = "game") -> None:
        self.send_message(f"update {target} {key} {value}")

    def send_warning(self, text: str) -> None:
        self.send_message(f"warning {text}")

    def request_move(self, move_type: str) -> str:
        """Ask the bot for an action and return its reply line."""
        return self.request(f"action {move_type}")

    def request(self, text: str) -> str:
        if self.input_file is not None:
            return self._read_input_file()
        if self.channel is None:
            raise TransportError(
                f"{self.name} has no channel to request from",
                details={"player_id": self.id},
            )
        return self.channel.request_from_bot(self.id, text)

    def _read_input_file(self) -> str:
        try:
            if self._input is None:
                self._input = open(self.input_file, encoding="utf-8")
            line = self._input.readline()
        except OSError as e:
            raise TransportError(
                f"Cannot read input file for {self.name}: {e}",
                details={"path": str(self.input_file)},
            ) from e
        if line == "":
            raise TransportError(
                f"Input file for {self.name} is exhausted",
                details={"path": str(self.input_file)},
            )
        return strip_line_terminator(line)
