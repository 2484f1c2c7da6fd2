# Area: Engine
"""
arena_engine.engine — Engine lifecycle
======================================

The Engine is what a game's entry point instantiates and calls .run()
on. It performs the setup handshake with the wrapper, runs the game
loop over the game's processor, and reports the outcome through the
finish handshake, all in one blocking, single-threaded pass.

Usage
-----
    from arena_engine import Engine
    from my_game import MyGame

    result = Engine(game=MyGame()).run()
    sys.exit(result.exit_code)
"""

from __future__ import annotations
import logging
from pathlib import Path
from typing import Optional, Sequence, Union

from ._engine import (
    FinishPhase,
    PlayerRegistry,
    SetupPhase,
    finish_tracker,
    setup_tracker,
)
from ._shared import MessageChannel, get_protocol_logger
from .configuration import Configuration
from .errors import (
    MissingProcessorError,
    SetupAbortedError,
    SetupError,
    TransportError,
)
from .game import GameAdapter
from .game_loop import GameLoop, SimpleGameLoop
from .processor import AbstractProcessor
from .result import GameDetails, RunResult
from .state import AbstractState

logger = logging.getLogger("arena_engine.engine")

# Wrapper protocol tokens
MSG_INITIALIZE = "initialize"
MSG_OK = "ok"
MSG_START = "start"
MSG_BOT_IDS = "bot_ids"
MSG_END = "end"
MSG_DETAILS = "details"
MSG_GAME = "game"


class Engine:
    """
    Generic turn-based engine host.

    Parameters
    ----------
    game : GameAdapter
        The concrete game: player, processor and state factories plus
        the replay serializer.
    channel : MessageChannel, optional
        Wrapper channel. Defaults to stdin/stdout, or to a file channel
        when ``wrapper_input_file`` is given.
    wrapper_input_file : path, optional
        Debug mode: read wrapper lines from this file.
    bot_input_files : list of paths, optional
        Debug mode: per-bot reply files, bound to players by position.
    game_loop : GameLoop, optional
        Loop strategy. Defaults to SimpleGameLoop.
    """

    def __init__(
        self,
        game: GameAdapter,
        channel: Optional[MessageChannel] = None,
        wrapper_input_file: Optional[Union[str, Path]] = None,
        bot_input_files: Optional[Sequence[Union[str, Path]]] = None,
        game_loop: Optional[GameLoop] = None,
    ):
        self.game = game
        if channel is None:
            channel = (MessageChannel.from_file(wrapper_input_file)
                       if wrapper_input_file else MessageChannel())
        self.channel = channel
        self.bot_input_files = list(bot_input_files) if bot_input_files else None
        self.game_loop = game_loop or SimpleGameLoop()

        self.configuration = Configuration()
        self.players = PlayerRegistry()
        self.processor: Optional[AbstractProcessor] = None

        self._setup = setup_tracker()
        self._finish = finish_tracker()
        self._protocol_logger = get_protocol_logger()
        self._protocol_logger.set_phase(self._setup.current.value)

    @property
    def setup_phase(self) -> SetupPhase:
        return self._setup.current

    @property
    def finish_phase(self) -> FinishPhase:
        return self._finish.current

    # ── Main entry ────────────────────────────────────────────

    def run(self) -> RunResult:
        """
        Run the whole game: setup, game loop, finish.

        Blocks until the wrapper has received the replay. Does not exit
        the process; the caller decides what to do with the result.
        """
        logger.info("Starting...")

        try:
            self.setup()

            logger.info("Running pre-game phase...")
            self.processor.pre_game_phase()

            logger.info("Starting game loop...")
            initial_state = self.game.get_initial_state(list(self.players), self.configuration)
            self._protocol_logger.set_phase("GAME_LOOP")
            final_state = self.game_loop.run(initial_state, self.processor)

            return self.finish(initial_state, final_state)
        finally:
            self._close_players()

    # ── Setup handshake ───────────────────────────────────────

    def setup(self) -> None:
        """
        Do everything needed before the game can start: handshake with
        the wrapper, create the players and the processor, and send the
        game settings to the bots.

        Raises
        ------
        SetupAbortedError
            If the channel fails before ``start`` arrives.
        SetupError
            If a ``bot_ids`` line is malformed.
        MissingProcessorError
            If the game returns no processor.
        """
        logger.info("Setting up engine. Waiting for initialize...")

        try:
            self.channel.wait_for_message(MSG_INITIALIZE)
            self.channel.send_message(MSG_OK)
            self._advance_setup(SetupPhase.SENT_OK)
            self._advance_setup(SetupPhase.PARSING_SETTINGS)

            logger.info("Got initialize. Parsing settings...")

            line = ""
            while line != MSG_START:
                line = self.channel.get_next_message()
                if line != MSG_START:
                    self.parse_setup_input(line)
        except TransportError as e:
            logger.error(f"Setup aborted in {self.setup_phase.value}: {e}", exc_info=True)
            raise SetupAbortedError(
                f"Setup aborted: {e.message}",
                phase=self.setup_phase.value,
            ) from e

        self._advance_setup(SetupPhase.SETUP_DONE)
        self.configuration.freeze()
        self.players.seal()

        processor = self.game.create_processor(list(self.players), self.configuration)
        if processor is None:
            raise MissingProcessorError(self.game.name)
        self.processor = processor

        logger.info(f"Got start. Sending game settings to {len(self.players)} bots...")

        for player in self.players:
            self.game.send_game_settings(player, self.configuration)

        logger.info("Settings sent. Setting up engine done...")

    def parse_setup_input(self, line: str) -> None:
        """
        Handle one setup line from the wrapper.

        ``bot_ids`` creates the players; everything else goes to the
        game's ``parse_setting`` hook, which ignores it by default.
        """
        parts = line.split()
        if not parts:
            return

        command, args = parts[0], parts[1:]
        if command == MSG_BOT_IDS:
            self._create_players(args)
        else:
            self.game.parse_setting(command, args, self.configuration)

    def _create_players(self, args: Sequence[str]) -> None:
        if len(self.players) > 0:
            raise SetupError(
                "Received bot_ids more than once",
                phase=self.setup_phase.value,
                details={"players": self.players.ids()},
            )
        if not args:
            raise SetupError("bot_ids line has no ids", phase=self.setup_phase.value)

        raw_ids = [part for part in ",".join(args).split(",") if part]
        try:
            ids = [int(raw) for raw in raw_ids]
        except ValueError as e:
            raise SetupError(
                f"Invalid bot id in {raw_ids}",
                phase=self.setup_phase.value,
                details={"bot_ids": raw_ids},
            ) from e

        for index, player_id in enumerate(ids):
            player = self.game.create_player(player_id)
            player.attach(self.channel)

            if self.bot_input_files is not None:
                if index >= len(self.bot_input_files):
                    raise SetupError(
                        f"No bot input file for player {player_id} at position {index}",
                        phase=self.setup_phase.value,
                        details={"bot_input_files": [str(p) for p in self.bot_input_files]},
                    )
                player.set_input_file(self.bot_input_files[index])

            self.players.register(player)

        logger.info(f"Registered players: {self.players.ids()}")

    def _advance_setup(self, phase: SetupPhase) -> None:
        self._setup.advance_to(phase)
        self._protocol_logger.set_phase(phase.value)

    # ── Finish handshake ──────────────────────────────────────

    def finish(self, initial_state: AbstractState,
               final_state: Optional[AbstractState] = None) -> RunResult:
        """
        Report the game to the wrapper: ``end``, then the result summary
        after ``details``, then the replay after ``game``.

        Out-of-order wrapper lines are discarded while waiting, so the
        engine stalls rather than send anything early.
        """
        self._protocol_logger.set_phase("FINISH")

        try:
            # let the wrapper know the game has ended
            self.channel.send_message(MSG_END)
            self._advance_finish(FinishPhase.AWAIT_DETAILS)

            # send game details
            self.channel.wait_for_message(MSG_DETAILS)
            winner = self.processor.get_winner()
            winner_id = winner.id if winner is not None else None
            score = self.processor.get_score()
            details = GameDetails.from_winner(winner_id, score)
            self.channel.send_message(details.to_line())
            self._advance_finish(FinishPhase.AWAIT_GAME)

            # send the game file
            self.channel.wait_for_message(MSG_GAME)
            played_game = self.game.get_played_game(initial_state)
            self.channel.send_message(played_game)
            self._advance_finish(FinishPhase.REPORTED)
        except TransportError as e:
            logger.error(f"Finish aborted in {self.finish_phase.value}: {e}", exc_info=True)
            raise

        logger.info(f"Game reported. Winner: {details.winner}, score: {score}")
        self._close_players()

        return RunResult(
            winner_id=winner_id,
            score=score,
            details=details,
            played_game=played_game,
            initial_state=initial_state,
            final_state=final_state if final_state is not None else initial_state,
            rounds_played=getattr(self.game_loop, "rounds_played", None),
            exit_code=0,
        )

    def _advance_finish(self, phase: FinishPhase) -> None:
        self._finish.advance_to(phase)
        self._protocol_logger.set_phase(phase.value)

    def _close_players(self) -> None:
        for player in self.players:
            player.close()
