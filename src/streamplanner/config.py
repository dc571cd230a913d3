"""Runtime configuration objects for streamplanner."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from .utils.exceptions import ConfigurationError

_TRUE_VALUES = ("true", "1", "yes", "on")
_FALSE_VALUES = ("false", "0", "no", "off")


@dataclass
class PlannerConfig:
    """Container for all planner configuration knobs."""

    interval_join_enabled: bool = True
    regular_join_enabled: bool = True
    log_decisions: bool = False  # Log rule decisions at INFO instead of DEBUG
    options: dict[str, object] = field(default_factory=dict)


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigurationError(
        f"Invalid boolean value {raw!r} for {name}",
        suggestion=f"Use one of: {', '.join(_TRUE_VALUES + _FALSE_VALUES)}",
    )


def _load_env_config() -> dict[str, object]:
    """Load configuration from environment variables.

    Returns:
        Dictionary of configuration values from environment
    """
    config: dict[str, object] = {}

    if "STREAMPLANNER_INTERVAL_JOIN_ENABLED" in os.environ:
        config["interval_join_enabled"] = _parse_bool(
            "STREAMPLANNER_INTERVAL_JOIN_ENABLED",
            os.environ["STREAMPLANNER_INTERVAL_JOIN_ENABLED"],
        )

    if "STREAMPLANNER_REGULAR_JOIN_ENABLED" in os.environ:
        config["regular_join_enabled"] = _parse_bool(
            "STREAMPLANNER_REGULAR_JOIN_ENABLED",
            os.environ["STREAMPLANNER_REGULAR_JOIN_ENABLED"],
        )

    if "STREAMPLANNER_LOG_DECISIONS" in os.environ:
        config["log_decisions"] = _parse_bool(
            "STREAMPLANNER_LOG_DECISIONS", os.environ["STREAMPLANNER_LOG_DECISIONS"]
        )

    return config


def create_config(**kwargs: object) -> PlannerConfig:
    """Build a :class:`PlannerConfig` from keyword arguments and the environment.

    Supports environment variables for configuration:
    - STREAMPLANNER_INTERVAL_JOIN_ENABLED: Register the interval join rule (true/false)
    - STREAMPLANNER_REGULAR_JOIN_ENABLED: Register the regular join rule (true/false)
    - STREAMPLANNER_LOG_DECISIONS: Log rule decisions at INFO level (true/false)

    Args:
        **kwargs: Configuration options. Valid keys are the fields of
            :class:`PlannerConfig`; other options are stored in ``config.options``.

    Returns:
        PlannerConfig instance with parsed configuration

    Raises:
        ConfigurationError: If an environment variable holds an invalid value
    """
    env_config = _load_env_config()

    # Merge: kwargs override env vars, env vars override defaults
    merged_kwargs = {**env_config, **kwargs}

    known: dict[str, object] = {
        k: merged_kwargs.pop(k)
        for k in list(merged_kwargs)
        if k in PlannerConfig.__dataclass_fields__ and k != "options"
    }
    extra = merged_kwargs.pop("options", None)
    options = dict(extra) if isinstance(extra, dict) else {}
    options.update(merged_kwargs)
    return PlannerConfig(options=options, **known)  # type: ignore[arg-type]
