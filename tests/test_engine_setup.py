# Area: Engine Tests
"""Tests for the engine setup handshake."""

import io
from pathlib import Path

import pytest

from arena_engine._engine.phases import SetupPhase
from arena_engine._shared.channel import MessageChannel
from arena_engine.engine import Engine
from arena_engine.errors import (
    ConfigurationError,
    MissingProcessorError,
    SetupAbortedError,
    SetupError,
)
from arena_engine.game import GameAdapter
from arena_engine.player import AbstractPlayer
from arena_engine.processor import AbstractProcessor
from arena_engine.state import AbstractState


class StubProcessor(AbstractProcessor):
    """Processor that is terminal from the start."""

    def play_round(self, round_number, state):
        return state

    def has_game_ended(self, state):
        return True

    def get_winner(self):
        return None

    def get_score(self):
        return 0


class StubGame(GameAdapter):
    """Records every collaborator call."""

    name = "stub"

    def __init__(self, processor_factory=StubProcessor):
        self.processor_factory = processor_factory
        self.settings_sent_to = []
        self.parsed = []

    def create_player(self, player_id):
        return AbstractPlayer(player_id)

    def create_processor(self, players, configuration):
        if self.processor_factory is None:
            return None
        return self.processor_factory(players)

    def send_game_settings(self, player, configuration):
        self.settings_sent_to.append(player.id)

    def get_initial_state(self, players, configuration):
        return AbstractState(players)

    def get_played_game(self, initial_state):
        return "replay"


class SettingsGame(StubGame):
    """Stores ``max_rounds`` through the parse_setting hook."""

    def parse_setting(self, command, args, configuration):
        self.parsed.append((command, args))
        if command == "max_rounds":
            configuration.put("max_rounds", int(args[0]))


def make_engine(lines, game=None, **kwargs):
    """Engine over in-memory streams; returns (engine, output)."""
    out = io.StringIO()
    text = "".join(line + "\n" for line in lines)
    channel = MessageChannel(io.StringIO(text), out)
    return Engine(game=game or StubGame(), channel=channel, **kwargs), out


class TestSetupHappyPath:
    """Tests for a well-formed setup stream."""

    def test_basic_scenario(self):
        """initialize / bot_ids 0,1 / start gives two players and a processor."""
        engine, out = make_engine(["initialize", "bot_ids 0,1", "start"])

        engine.setup()

        assert engine.players.ids() == [0, 1]
        assert len(engine.configuration) == 0
        assert engine.processor is not None
        assert engine.setup_phase == SetupPhase.SETUP_DONE
        assert out.getvalue() == "ok\n"

    @pytest.mark.parametrize("ids", [[0], [0, 1], [5, 3, 9], [1, 2, 3, 4, 5, 6]])
    def test_registry_matches_bot_ids(self, ids):
        """N ids give exactly N players, in input order."""
        line = "bot_ids " + ",".join(str(i) for i in ids)
        engine, _ = make_engine(["initialize", line, "start"])

        engine.setup()

        assert len(engine.players) == len(ids)
        assert [player.id for player in engine.players] == ids

    def test_lines_before_initialize_are_discarded(self):
        engine, out = make_engine(["hello", "start", "initialize", "bot_ids 0", "start"])
        engine.setup()
        assert engine.players.ids() == [0]
        assert out.getvalue() == "ok\n"

    def test_settings_sent_in_registry_order(self):
        game = StubGame()
        engine, _ = make_engine(["initialize", "bot_ids 2,0,1", "start"], game=game)

        engine.setup()

        assert game.settings_sent_to == [2, 0, 1]

    def test_players_bound_to_channel(self):
        engine, _ = make_engine(["initialize", "bot_ids 0,1", "start"])
        engine.setup()
        assert all(player.channel is engine.channel for player in engine.players)

    def test_processor_receives_players(self):
        engine, _ = make_engine(["initialize", "bot_ids 3,4", "start"])
        engine.setup()
        assert [p.id for p in engine.processor.players] == [3, 4]


class TestSetupSettings:
    """Tests for non-bot_ids setup lines."""

    def test_unknown_settings_ignored_by_default(self):
        engine, _ = make_engine(
            ["initialize", "timebank 10000", "bot_ids 0,1", "whatever", "", "start"]
        )
        engine.setup()
        assert len(engine.configuration) == 0
        assert engine.players.ids() == [0, 1]

    def test_parse_setting_hook_receives_command_and_args(self):
        game = SettingsGame()
        engine, _ = make_engine(
            ["initialize", "max_rounds 12", "field 3 3", "bot_ids 0", "start"], game=game
        )

        engine.setup()

        assert game.parsed == [("max_rounds", ["12"]), ("field", ["3", "3"])]
        assert engine.configuration.get_int("max_rounds") == 12

    def test_configuration_frozen_after_setup(self):
        engine, _ = make_engine(["initialize", "bot_ids 0", "start"])
        engine.setup()
        assert engine.configuration.frozen
        with pytest.raises(ConfigurationError):
            engine.configuration.put("late", 1)


class TestSetupFailures:
    """Tests for setup error handling."""

    def test_missing_processor_is_fatal(self):
        game = StubGame(processor_factory=None)
        engine, _ = make_engine(["initialize", "bot_ids 0", "start"], game=game)

        with pytest.raises(MissingProcessorError):
            engine.setup()
        assert game.settings_sent_to == []

    def test_stream_closed_before_start_aborts(self):
        engine, _ = make_engine(["initialize", "bot_ids 0,1"])

        with pytest.raises(SetupAbortedError) as exc_info:
            engine.setup()

        assert engine.processor is None
        assert engine.setup_phase == SetupPhase.PARSING_SETTINGS
        assert exc_info.value.phase == "PARSING_SETTINGS"

    def test_stream_closed_before_initialize_aborts(self):
        engine, out = make_engine(["noise"])

        with pytest.raises(SetupAbortedError):
            engine.setup()

        assert engine.setup_phase == SetupPhase.AWAIT_INITIALIZE
        assert out.getvalue() == ""

    def test_non_integer_bot_id(self):
        engine, _ = make_engine(["initialize", "bot_ids 0,x", "start"])
        with pytest.raises(SetupError, match="Invalid bot id"):
            engine.setup()

    def test_bot_ids_without_ids(self):
        engine, _ = make_engine(["initialize", "bot_ids", "start"])
        with pytest.raises(SetupError):
            engine.setup()

    def test_second_bot_ids_rejected(self):
        engine, _ = make_engine(["initialize", "bot_ids 0,1", "bot_ids 2", "start"])
        with pytest.raises(SetupError, match="more than once"):
            engine.setup()
        assert engine.players.ids() == [0, 1]


class TestDebugModeBinding:
    """Tests for binding per-bot input files."""

    def test_input_files_bound_by_position(self, tmp_path):
        files = [tmp_path / "bot_a.txt", tmp_path / "bot_b.txt"]
        engine, _ = make_engine(
            ["initialize", "bot_ids 7,3", "start"], bot_input_files=files
        )

        engine.setup()

        assert engine.players[0].input_file == Path(files[0])
        assert engine.players[1].input_file == Path(files[1])

    def test_too_few_input_files(self, tmp_path):
        engine, _ = make_engine(
            ["initialize", "bot_ids 0,1", "start"],
            bot_input_files=[tmp_path / "only_one.txt"],
        )
        with pytest.raises(SetupError, match="No bot input file"):
            engine.setup()

    def test_no_input_files_in_live_mode(self):
        engine, _ = make_engine(["initialize", "bot_ids 0", "start"])
        engine.setup()
        assert engine.players[0].input_file is None
