"""Run the engine: ``python -m arena_engine``."""

import sys

from .cli import main

sys.exit(main())
