# Area: Shared
"""
arena_engine._engine_config — Engine process settings
=====================================================

Settings for the engine process itself (logging, debug-mode input files,
which game to load). These are separate from the per-game Configuration
store that the wrapper fills during setup.

Precedence: JSON config file < environment variables < CLI overrides.
"""

from __future__ import annotations
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigurationError

logger = logging.getLogger("arena_engine")

LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}

# Environment variable → settings field
ENV_MAPPINGS = {
    "ARENA_LOG_FILE": "log_file",
    "ARENA_LOG_LEVEL": "log_level",
    "ARENA_WRAPPER_INPUT": "wrapper_input_file",
    "ARENA_BOT_INPUTS": "bot_input_files",
    "ARENA_PROTOCOL_TRACE": "protocol_trace",
    "ARENA_GAME": "game",
    "ARENA_DEMO": "demo",
}


class EngineSettings(BaseModel):
    """Validated engine process settings."""

    model_config = ConfigDict(extra="forbid")

    log_file: Optional[str] = "arena_engine.log"
    log_level: str = "INFO"
    wrapper_input_file: Optional[str] = None
    bot_input_files: List[str] = Field(default_factory=list)
    protocol_trace: bool = False
    game: Optional[str] = None
    demo: bool = False
    game_options: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("log_level")
    @classmethod
    def _check_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(LOG_LEVELS)}")
        return level

    @field_validator("bot_input_files", mode="before")
    @classmethod
    def _split_paths(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [part.strip() for part in value.split(",") if part.strip()]
        return value

    @field_validator("game")
    @classmethod
    def _check_game(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and ":" not in value:
            raise ValueError("game must look like 'package.module:ClassName'")
        return value

    @property
    def debug_mode(self) -> bool:
        return self.wrapper_input_file is not None

    def level(self) -> int:
        return getattr(logging, self.log_level)


def _read_config_file(config_path: Optional[str]) -> Dict[str, Any]:
    if not config_path:
        return {}
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(
            f"Config file not found: {config_path}",
            details={"path": config_path},
        )
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Cannot read config file {config_path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {config_path} must hold a JSON object")
    return data


def _read_environment() -> Dict[str, Any]:
    values: Dict[str, Any] = {}
    for env_key, field in ENV_MAPPINGS.items():
        if env_key in os.environ:
            values[field] = os.environ[env_key]
    return values


def load_settings(
    config_path: Optional[str] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> EngineSettings:
    """
    Build EngineSettings from file, environment and overrides.

    Args:
        config_path: Optional path to a JSON config file
        overrides: Values from the command line; None values are skipped

    Raises:
        ConfigurationError: If the file is unreadable or a value is invalid
    """
    values = _read_config_file(config_path)
    values.update(_read_environment())
    for key, value in (overrides or {}).items():
        if value is not None:
            values[key] = value

    try:
        return EngineSettings(**values)
    except ValidationError as e:
        raise ConfigurationError(
            "Invalid engine settings",
            details={"errors": [err["msg"] for err in e.errors()]},
        ) from e
