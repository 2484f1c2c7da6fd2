"""
arena_engine — Turn-based bot game engine core
==============================================

Hosts one game between bots on behalf of an external wrapper process:
handshakes to learn the bot ids and settings, drives the turn loop over
a pluggable processor, and reports winner, score and replay back over
the same line channel.

Quick Start (no implementation needed):
    from arena_engine import DemoGame, Engine
    result = Engine(game=DemoGame()).run()

Custom Implementation:
    from arena_engine import Engine, GameAdapter
    class MyGame(GameAdapter): ...  # Implement 5 methods
    result = Engine(game=MyGame()).run()
    sys.exit(result.exit_code)

Debug mode reads the wrapper and bot lines from files:
    Engine(game=MyGame(), wrapper_input_file="wrapper.txt",
           bot_input_files=["bot0.txt", "bot1.txt"]).run()
"""

from .engine import Engine
from .game import GameAdapter
from .processor import AbstractProcessor
from .player import AbstractPlayer
from .state import AbstractState
from .game_loop import GameLoop, SimpleGameLoop
from .configuration import Configuration
from .result import GameDetails, RunResult, NO_WINNER
from .demo_game import DemoGame
from ._engine import PlayerRegistry, SetupPhase, FinishPhase
from ._shared import MessageChannel, setup_logging
from .errors import (
    EngineError,
    TransportError,
    SetupError,
    SetupAbortedError,
    MissingProcessorError,
    ConfigurationError,
)

__all__ = [
    # Main classes
    "Engine",
    "GameAdapter",
    "AbstractProcessor",
    "AbstractPlayer",
    "AbstractState",
    "GameLoop",
    "SimpleGameLoop",
    "Configuration",
    "PlayerRegistry",
    "MessageChannel",
    "SetupPhase",
    "FinishPhase",
    "DemoGame",
    "setup_logging",
    # Results
    "GameDetails",
    "RunResult",
    "NO_WINNER",
    # Errors
    "EngineError",
    "TransportError",
    "SetupError",
    "SetupAbortedError",
    "MissingProcessorError",
    "ConfigurationError",
]
__version__ = "1.0.0"
