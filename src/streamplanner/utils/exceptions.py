"""Custom exception hierarchy."""

from typing import Optional


class StreamPlannerError(Exception):
    """Base exception for streamplanner-specific failures."""

    def __init__(
        self, message: str, suggestion: Optional[str] = None, context: Optional[dict] = None
    ):
        """Initialize exception with message, optional suggestion, and context.

        Args:
            message: Error message
            suggestion: Optional suggestion for fixing the error
            context: Optional dictionary with additional context
        """
        super().__init__(message)
        self.message = message
        self.suggestion = suggestion
        self.context = context or {}

    def __str__(self) -> str:
        """Return formatted error message with suggestion if available."""
        msg = self.message
        if self.suggestion:
            msg += f"\n\nSuggestion: {self.suggestion}"
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            msg += f"\n\nContext: {context_str}"
        return msg


class ValidationError(StreamPlannerError):
    """Raised when a query is well-shaped but semantically invalid.

    These errors are user-facing: rewriting the query fixes them.
    """

    def __init__(
        self, message: str, suggestion: Optional[str] = None, context: Optional[dict] = None
    ):
        """Initialize validation error.

        Common suggestions:
        - Cast time attributes so both sides of a join agree
        """
        if suggestion is None:
            if "rowtime" in message.lower() and "types" in message.lower():
                suggestion = (
                    "Both time attributes of an interval join must have the same type. "
                    "Declare the watermarked columns of both inputs as TIMESTAMP or "
                    "both as TIMESTAMP_LTZ."
                )
        super().__init__(message, suggestion, context)


class PlanningError(StreamPlannerError):
    """Raised when the planner hits a violated contract.

    Unlike :class:`ValidationError` these usually point at an earlier planning
    pass or a malformed hint rather than at the query text.
    """


class InternalPlannerError(PlanningError):
    """Raised when an internal planner invariant does not hold."""

    def __init__(
        self, message: str, suggestion: Optional[str] = None, context: Optional[dict] = None
    ):
        """Initialize internal planner error."""
        if suggestion is None:
            suggestion = "This is a bug in the planner. Please report it with the query plan."
        super().__init__(message, suggestion, context)


class ConfigurationError(StreamPlannerError):
    """Raised when planner configuration values cannot be parsed."""
