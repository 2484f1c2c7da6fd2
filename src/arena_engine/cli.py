# Area: Shared
"""
arena_engine.cli — Command-line interface
=========================================

Provides the CLI entry point for running one game.

Usage:
    python -m arena_engine --demo                            # Demo game over stdin/stdout
    python -m arena_engine --game my_game:MyGame             # Your own game
    python -m arena_engine --demo --wrapper-input wrapper.txt \\
        --bot-input bot0.txt bot1.txt                        # Debug mode from files

Settings can also come from a JSON config file (--config), from
environment variables (ARENA_*), or from a .env file in the working
directory.
"""

import argparse
import importlib
from typing import Any, Dict, List, Optional

from dotenv import find_dotenv, load_dotenv

from ._engine_config import EngineSettings, load_settings
from ._shared import enable_protocol_trace, log_engine_error, setup_logging
from .demo_game import DemoGame
from .engine import Engine
from .errors import ConfigurationError, EngineError
from .game import GameAdapter


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Arena engine - run one turn-based bot game",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m arena_engine --demo
  python -m arena_engine --game my_game:MyGame --config config.json
  python -m arena_engine --demo --wrapper-input wrapper.txt --bot-input bot0.txt bot1.txt
  ARENA_DEMO=true python -m arena_engine
        """,
    )

    parser.add_argument(
        "--demo",
        action="store_true",
        default=None,
        help="Run the built-in counting race demo game",
    )

    parser.add_argument(
        "--game",
        type=str,
        help="Game to run, as 'package.module:ClassName'",
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to JSON config file",
    )

    parser.add_argument(
        "--wrapper-input",
        type=str,
        dest="wrapper_input_file",
        help="Debug mode: read wrapper lines from this file",
    )

    parser.add_argument(
        "--bot-input",
        type=str,
        nargs="+",
        dest="bot_input_files",
        help="Debug mode: per-bot reply files, in bot_ids order",
    )

    parser.add_argument(
        "--log-file",
        type=str,
        dest="log_file",
        help="Path to the JSON log file (default: arena_engine.log)",
    )

    parser.add_argument(
        "--protocol-trace",
        action="store_true",
        default=None,
        dest="protocol_trace",
        help="Trace every protocol line on stderr",
    )

    return parser.parse_args(argv)


def build_game(game_cls: type, options: Dict[str, Any], label: str) -> Any:
    """Instantiate ``game_cls`` with ``options``; bad options are a config error."""
    try:
        return game_cls(**options)
    except TypeError as e:
        raise ConfigurationError(
            f"Invalid game options for '{label}': {e}",
            details={"game_options": options},
        ) from e


def load_game(spec: str, options: Dict[str, Any]) -> GameAdapter:
    """Import ``module:ClassName`` and instantiate it with ``options``."""
    module_name, _, class_name = spec.partition(":")
    try:
        module = importlib.import_module(module_name)
        game_cls = getattr(module, class_name)
    except (ImportError, AttributeError) as e:
        raise ConfigurationError(f"Cannot load game '{spec}': {e}") from e

    game = build_game(game_cls, options, spec)
    if not isinstance(game, GameAdapter):
        raise ConfigurationError(f"'{spec}' is not a GameAdapter")
    return game


def get_game(settings: EngineSettings) -> GameAdapter:
    """Get the game instance based on mode."""
    if settings.demo:
        return build_game(DemoGame, settings.game_options, "demo")
    if settings.game:
        return load_game(settings.game, settings.game_options)
    raise ConfigurationError("No game selected. Use --demo or --game module:ClassName.")


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point. Returns the process exit code."""
    load_dotenv(find_dotenv(usecwd=True))
    args = parse_args(argv)

    overrides = {
        "demo": args.demo,
        "game": args.game,
        "wrapper_input_file": args.wrapper_input_file,
        "bot_input_files": args.bot_input_files,
        "log_file": args.log_file,
        "protocol_trace": args.protocol_trace,
    }

    try:
        settings = load_settings(args.config, overrides)
    except ConfigurationError as e:
        log_engine_error(e)
        return 1

    setup_logging(log_file_path=settings.log_file, level=settings.level())
    if settings.protocol_trace:
        enable_protocol_trace()

    engine = None
    try:
        game = get_game(settings)
        engine = Engine(
            game=game,
            wrapper_input_file=settings.wrapper_input_file,
            bot_input_files=settings.bot_input_files or None,
        )
        result = engine.run()
    except EngineError as e:
        log_engine_error(e)
        return 1
    finally:
        if engine is not None:
            engine.channel.close()

    return result.exit_code
