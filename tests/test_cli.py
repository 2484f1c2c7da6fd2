# Area: Shared Tests
"""Tests for the command-line entry point."""

import json
import logging

import pytest

from arena_engine._engine_config import ENV_MAPPINGS, EngineSettings
from arena_engine._shared import disable_protocol_trace
from arena_engine.cli import get_game, load_game, main
from arena_engine.demo_game import DemoGame
from arena_engine.errors import ConfigurationError


@pytest.fixture(autouse=True)
def isolated(monkeypatch, tmp_path):
    """Run in an empty directory with no ARENA_* env and restore logging."""
    monkeypatch.chdir(tmp_path)
    for env_key in ENV_MAPPINGS:
        monkeypatch.delenv(env_key, raising=False)

    pkg_logger = logging.getLogger("arena_engine")
    handlers = list(pkg_logger.handlers)
    propagate = pkg_logger.propagate
    level = pkg_logger.level
    yield
    for handler in list(pkg_logger.handlers):
        pkg_logger.removeHandler(handler)
        handler.close()
    for handler in handlers:
        pkg_logger.addHandler(handler)
    pkg_logger.propagate = propagate
    pkg_logger.setLevel(level)
    disable_protocol_trace()


def write_lines(path, lines):
    path.write_text("".join(line + "\n" for line in lines), encoding="utf-8")
    return str(path)


class TestGameSelection:
    """Tests for get_game / load_game."""

    def test_demo_game(self):
        game = get_game(EngineSettings(demo=True, game_options={"max_rounds": 3}))
        assert isinstance(game, DemoGame)
        assert game.default_max_rounds == 3

    def test_load_game_by_path(self):
        game = load_game("arena_engine.demo_game:DemoGame", {"target": 7})
        assert isinstance(game, DemoGame)
        assert game.default_target == 7

    def test_load_game_bad_module(self):
        with pytest.raises(ConfigurationError):
            load_game("no_such_module_here:Game", {})

    def test_load_game_not_an_adapter(self):
        with pytest.raises(ConfigurationError):
            load_game("arena_engine.configuration:Configuration", {})

    def test_no_game_selected(self):
        with pytest.raises(ConfigurationError):
            get_game(EngineSettings())

    def test_unknown_demo_option(self):
        with pytest.raises(ConfigurationError) as exc_info:
            get_game(EngineSettings(demo=True, game_options={"rounds": 3}))
        assert exc_info.value.details == {"game_options": {"rounds": 3}}

    def test_unknown_option_for_loaded_game(self):
        with pytest.raises(ConfigurationError):
            load_game("arena_engine.demo_game:DemoGame", {"colour": "red"})


class TestMain:
    """Tests for main()."""

    def test_demo_run_from_files(self, tmp_path, capsys):
        wrapper = write_lines(tmp_path / "wrapper.txt", [
            "initialize", "bot_ids 0,1", "max_rounds 2", "start", "details", "game",
        ])
        bot0 = write_lines(tmp_path / "bot0.txt", ["3", "3"])
        bot1 = write_lines(tmp_path / "bot1.txt", ["1", "1"])

        code = main([
            "--demo",
            "--wrapper-input", wrapper,
            "--bot-input", bot0, bot1,
            "--log-file", str(tmp_path / "engine.log"),
        ])

        assert code == 0
        lines = capsys.readouterr().out.splitlines()
        end_index = lines.index("end")
        assert json.loads(lines[end_index + 1]) == {"winner": "0", "score": 2}
        assert (tmp_path / "engine.log").exists()

    def test_missing_wrapper_file_exits_one(self, tmp_path):
        code = main([
            "--demo",
            "--wrapper-input", str(tmp_path / "missing.txt"),
            "--log-file", str(tmp_path / "engine.log"),
        ])
        assert code == 1

    def test_no_game_exits_one(self, tmp_path, capsys):
        code = main(["--log-file", str(tmp_path / "engine.log")])
        assert code == 1
        assert "CONFIGURATION_ERROR" in capsys.readouterr().err

    def test_bad_config_file_exits_one(self, tmp_path):
        assert main(["--demo", "--config", str(tmp_path / "nope.json")]) == 1

    def test_truncated_setup_exits_one(self, tmp_path, capsys):
        wrapper = write_lines(tmp_path / "wrapper.txt", ["initialize", "bot_ids 0"])
        code = main([
            "--demo",
            "--wrapper-input", wrapper,
            "--log-file", str(tmp_path / "engine.log"),
        ])
        assert code == 1
        assert "SETUP_ABORTED" in capsys.readouterr().err

    def test_bad_game_options_exit_one(self, tmp_path, capsys):
        config = tmp_path / "config.json"
        config.write_text(
            json.dumps({"demo": True, "game_options": {"rounds": 3}}), encoding="utf-8"
        )
        code = main(["--config", str(config), "--log-file", str(tmp_path / "engine.log")])
        assert code == 1
        assert "CONFIGURATION_ERROR" in capsys.readouterr().err
