# Area: Shared
"""
arena_engine._shared.channel — Line channel to the wrapper
===========================================================

Handles all I/O with the external wrapper process. Every message is a
single line of text. The engine calls get_next_message() and
wait_for_message() to read and send_message() to write.

Debug mode sources the wrapper lines from a file instead of stdin;
the protocol is the same.
"""

from __future__ import annotations
import logging
import sys
from pathlib import Path
from typing import Optional, TextIO, Union

from ..errors import TransportError
from .protocol_logger import get_protocol_logger

logger = logging.getLogger("arena_engine.channel")


def strip_line_terminator(line: str) -> str:
    """Remove one trailing ``\\n`` or ``\\r\\n``; keep everything else."""
    if line.endswith("\n"):
        line = line[:-1]
        if line.endswith("\r"):
            line = line[:-1]
    return line


class MessageChannel:
    """Blocking, line-oriented duplex channel to one external process."""

    def __init__(
        self,
        input_stream: Optional[TextIO] = None,
        output_stream: Optional[TextIO] = None,
    ):
        self._input = input_stream if input_stream is not None else sys.stdin
        self._output = output_stream if output_stream is not None else sys.stdout
        self._owned: list = []
        self._protocol_logger = get_protocol_logger()

    @classmethod
    def from_file(
        cls,
        path: Union[str, Path],
        output_stream: Optional[TextIO] = None,
    ) -> "MessageChannel":
        """Build a channel that reads wrapper lines from a file."""
        try:
            handle = open(path, encoding="utf-8")
        except OSError as e:
            raise TransportError(
                f"Cannot open wrapper input file '{path}': {e}",
                details={"path": str(path)},
            ) from e
        channel = cls(input_stream=handle, output_stream=output_stream)
        channel._owned.append(handle)
        logger.info(f"Reading wrapper input from {path}")
        return channel

    # ── Wrapper protocol ──────────────────────────────────────

    def send_message(self, text: str) -> None:
        """Write one line and flush immediately."""
        try:
            self._output.write(text + "\n")
            self._output.flush()
        except (OSError, ValueError) as e:
            self._protocol_logger.log_error(f"write failed: {e}")
            raise TransportError(f"Failed to send message: {e}") from e
        self._protocol_logger.log_sent(text)

    def get_next_message(self) -> str:
        """
        Block until one line is available and return it.

        The trailing newline is stripped; everything else is verbatim.

        Raises
        ------
        TransportError
            If the stream is closed or the read fails.
        """
        try:
            line = self._input.readline()
        except (OSError, ValueError) as e:
            self._protocol_logger.log_error(f"read failed: {e}")
            raise TransportError(f"Failed to read message: {e}") from e

        if line == "":
            self._protocol_logger.log_error("input stream closed")
            raise TransportError("Input stream closed")

        line = strip_line_terminator(line)
        self._protocol_logger.log_received(line)
        return line

    def wait_for_message(self, expected: str) -> None:
        """Block, discarding every line until ``expected`` arrives."""
        while True:
            line = self.get_next_message()
            if line == expected:
                return
            logger.debug(f"Discarded {line!r} while waiting for {expected!r}")
            self._protocol_logger.log_discarded(line, expected)

    # ── Bot addressing ────────────────────────────────────────

    def send_to_bot(self, bot_id: int, text: str) -> None:
        """Relay a message to one bot through the wrapper."""
        self.send_message(f"bot {bot_id} send {text}")

    def request_from_bot(self, bot_id: int, text: str) -> str:
        """Ask one bot for a reply through the wrapper and return it."""
        self.send_message(f"bot {bot_id} ask {text}")
        return self.get_next_message()

    def close(self) -> None:
        """Close streams this channel opened itself."""
        for handle in self._owned:
            handle.close()
        self._owned.clear()
