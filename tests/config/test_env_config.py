"""Tests for environment variable configuration."""

from __future__ import annotations

import os
from unittest.mock import patch

import pytest

from streamplanner.config import PlannerConfig, create_config
from streamplanner.planner.optimizer import StreamPlanner
from streamplanner.utils.exceptions import ConfigurationError


def test_defaults():
    with patch.dict(os.environ, {}, clear=True):
        config = create_config()
    assert config == PlannerConfig()
    assert config.interval_join_enabled is True
    assert config.log_decisions is False


def test_env_interval_join_enabled():
    """Test that the interval join rule can be disabled via environment variable."""
    with patch.dict(os.environ, {"STREAMPLANNER_INTERVAL_JOIN_ENABLED": "false"}):
        config = create_config()
        assert config.interval_join_enabled is False

    with patch.dict(os.environ, {"STREAMPLANNER_INTERVAL_JOIN_ENABLED": "ON"}):
        config = create_config()
        assert config.interval_join_enabled is True


def test_env_regular_join_and_logging():
    with patch.dict(
        os.environ,
        {
            "STREAMPLANNER_REGULAR_JOIN_ENABLED": "0",
            "STREAMPLANNER_LOG_DECISIONS": "yes",
        },
    ):
        config = create_config()
        assert config.regular_join_enabled is False
        assert config.log_decisions is True


def test_env_invalid_boolean():
    with patch.dict(os.environ, {"STREAMPLANNER_LOG_DECISIONS": "maybe"}):
        with pytest.raises(ConfigurationError, match="STREAMPLANNER_LOG_DECISIONS"):
            create_config()


def test_env_override_with_kwargs():
    """Test that kwargs override environment variables."""
    with patch.dict(os.environ, {"STREAMPLANNER_INTERVAL_JOIN_ENABLED": "false"}):
        config = create_config(interval_join_enabled=True)
        assert config.interval_join_enabled is True


def test_unknown_options_are_kept():
    with patch.dict(os.environ, {}, clear=True):
        config = create_config(parallelism=4, options={"source": "kafka"})
    assert config.options == {"source": "kafka", "parallelism": 4}


def test_planner_reads_environment():
    with patch.dict(os.environ, {"STREAMPLANNER_INTERVAL_JOIN_ENABLED": "false"}):
        planner = StreamPlanner()
    assert [rule.description for rule in planner.rules] == ["StreamPhysicalJoinRule"]
