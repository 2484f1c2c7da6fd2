# Area: Engine
"""
arena_engine.configuration — Game configuration store
=====================================================

Setting name → value mapping filled while the wrapper streams setup
lines. Each key may be written once; after setup the store is frozen
and game collaborators only read from it.
"""

from __future__ import annotations
from collections.abc import Mapping
from typing import Any, Dict, Iterator, Optional

from .errors import ConfigurationError

_MISSING = object()

TRUE_VALUES = {"true", "1", "yes", "on"}
FALSE_VALUES = {"false", "0", "no", "off"}


class Configuration(Mapping):
    """Write-once-per-key, freeze-after-setup settings mapping."""

    def __init__(self):
        self._values: Dict[str, Any] = {}
        self._frozen = False

    # ── Mapping protocol ──────────────────────────────────────

    def __getitem__(self, key: str) -> Any:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        state = "frozen" if self._frozen else "open"
        return f"Configuration({self._values!r}, {state})"

    # ── Writes (setup only) ───────────────────────────────────

    @property
    def frozen(self) -> bool:
        return self._frozen

    def put(self, key: str, value: Any) -> None:
        """
        Store a setting.

        Raises
        ------
        ConfigurationError
            If the store is frozen or the key was already written.
        """
        if self._frozen:
            raise ConfigurationError(
                f"Configuration is read-only, cannot set '{key}'",
                phase="SETUP_DONE",
            )
        if key in self._values:
            raise ConfigurationError(
                f"Setting '{key}' was already set",
                details={"key": key, "existing": self._values[key], "new": value},
            )
        self._values[key] = value

    def freeze(self) -> None:
        """Make the store read-only."""
        self._frozen = True

    # ── Typed reads ───────────────────────────────────────────

    def _lookup(self, key: str, default: Any) -> Any:
        value = self._values.get(key, _MISSING)
        if value is _MISSING:
            if default is _MISSING:
                raise ConfigurationError(f"Missing setting '{key}'")
            return default
        return value

    def get_str(self, key: str, default: Any = _MISSING) -> Optional[str]:
        value = self._lookup(key, default)
        return None if value is None else str(value)

    def get_int(self, key: str, default: Any = _MISSING) -> Optional[int]:
        value = self._lookup(key, default)
        if value is None or isinstance(value, int):
            return value
        try:
            return int(str(value).strip())
        except ValueError as e:
            raise ConfigurationError(
                f"Setting '{key}' is not an integer: {value!r}"
            ) from e

    def get_bool(self, key: str, default: Any = _MISSING) -> Optional[bool]:
        value = self._lookup(key, default)
        if value is None or isinstance(value, bool):
            return value
        text = str(value).strip().lower()
        if text in TRUE_VALUES:
            return True
        if text in FALSE_VALUES:
            return False
        raise ConfigurationError(f"Setting '{key}' is not a boolean: {value!r}")

    def as_dict(self) -> Dict[str, Any]:
        """Return a plain copy of the stored settings."""
        return dict(self._values)
