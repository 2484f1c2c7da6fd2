"""
main.py — Run your game under the arena engine
===============================================

This is the entry point. Point it at your game and run it; the wrapper
talks to it over stdin/stdout.

    python main.py

For local debugging without a wrapper, give the engine files to read
from instead:

    python main.py wrapper.txt bot0.txt bot1.txt

The engine will:
  1. Wait for "initialize" and read the bot ids and settings
  2. Create YOUR processor and send YOUR settings to the bots
  3. Run the game loop until your processor says the game is over
  4. Send winner, score and replay back to the wrapper
"""

import sys

from arena_engine import Engine, EngineError, setup_logging
from my_game import MyGame

# ── Setup logging (stderr + JSON file; stdout belongs to the wrapper) ──
setup_logging(log_file_path="my_game.log")

# ── Debug mode if input files were given ──
wrapper_input = sys.argv[1] if len(sys.argv) > 1 else None
bot_inputs = sys.argv[2:] or None

# ── Create your game and run ──
try:
    result = Engine(
        game=MyGame(upper=50),
        wrapper_input_file=wrapper_input,
        bot_input_files=bot_inputs,
    ).run()
except EngineError as e:
    print(e.format_error_log(), file=sys.stderr)
    sys.exit(1)

sys.exit(result.exit_code)
