"""Tests for exception hierarchy."""

from __future__ import annotations

from streamplanner.utils.exceptions import (
    ConfigurationError,
    InternalPlannerError,
    PlanningError,
    StreamPlannerError,
    ValidationError,
)


def test_exception_hierarchy():
    """Test that all exceptions inherit from StreamPlannerError."""
    assert issubclass(ValidationError, StreamPlannerError)
    assert issubclass(PlanningError, StreamPlannerError)
    assert issubclass(ConfigurationError, StreamPlannerError)
    assert issubclass(InternalPlannerError, PlanningError)
    assert not issubclass(ValidationError, PlanningError)


def test_exception_instantiation():
    """Test that exceptions can be instantiated with messages."""
    msg = "Test error message"

    assert msg in str(ValidationError(msg))
    assert msg in str(PlanningError(msg))
    assert msg in str(InternalPlannerError(msg))
    assert str(ConfigurationError(msg)) == msg


def test_exception_with_suggestion_and_context():
    error = PlanningError("boom", suggestion="try again", context={"rule": "X"})
    text = str(error)
    assert "boom" in text
    assert "Suggestion: try again" in text
    assert "Context: rule=X" in text
    assert error.message == "boom"


def test_rowtime_validation_error_has_suggestion():
    error = ValidationError(
        "Interval join with rowtime attribute requires same rowtime types, "
        "but the types are A and B."
    )
    assert error.suggestion is not None
    assert "TIMESTAMP_LTZ" in error.suggestion


def test_internal_error_suggests_reporting():
    assert "bug" in InternalPlannerError("invariant").suggestion
