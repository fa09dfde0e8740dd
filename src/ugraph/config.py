"""Library settings, read from ``UGRAPH_*`` environment variables.

Settings are loaded once and cached; call ``clear_config_cache()`` after
changing the environment.
A ``Graph`` built with an explicit ``config=`` ignores the environment.
"""

from __future__ import annotations

import logging
import os
from typing import Any

import pydantic

from ugraph import exceptions
from ugraph.types import DisconnectedPolicy

logger = logging.getLogger(__name__)

ENV_PREFIX = "UGRAPH_"

_TRUTHY = ("1", "true", "yes", "on")
_FALSY = ("0", "false", "no", "off", "")

_config_cache: GraphConfig | None = None


class GraphConfig(pydantic.BaseModel):
    """Behavior switches for search and spanning tree construction."""

    model_config = pydantic.ConfigDict(frozen=True, extra="forbid")

    search_early_exit: bool = False
    disconnected_policy: DisconnectedPolicy = DisconnectedPolicy.FOREST

    @pydantic.field_validator("search_early_exit", mode="before")
    @classmethod
    def parse_bool(cls, v: Any) -> bool | Any:
        """Accept the usual environment spellings of true/false."""
        if isinstance(v, str):
            lowered = v.strip().lower()
            if lowered in _TRUTHY:
                return True
            if lowered in _FALSY:
                return False
        return v

    @pydantic.field_validator("disconnected_policy", mode="before")
    @classmethod
    def normalize_policy(cls, v: Any) -> str | Any:
        if isinstance(v, str):
            return v.strip().lower()
        return v


def _read_environ() -> dict[str, str]:
    """Collect UGRAPH_* variables that map onto GraphConfig fields."""
    values = dict[str, str]()
    for field_name in GraphConfig.model_fields:
        env_name = f"{ENV_PREFIX}{field_name.upper()}"
        raw = os.environ.get(env_name)
        if raw is not None:
            values[field_name] = raw
    return values


def load_config() -> GraphConfig:
    """Load and cache settings from the environment."""
    global _config_cache

    if _config_cache is not None:
        return _config_cache

    raw = _read_environ()
    try:
        _config_cache = GraphConfig.model_validate(raw)
    except pydantic.ValidationError as e:
        fields = ", ".join(f"{ENV_PREFIX}{str(err['loc'][0]).upper()}" for err in e.errors())
        raise exceptions.ConfigError(f"Invalid value for {fields}: {e}") from e

    logger.debug(f"Loaded config from environment: {_config_cache}")
    return _config_cache


def clear_config_cache() -> None:
    """Forget cached settings so the next load_config() re-reads the environment."""
    global _config_cache
    _config_cache = None
