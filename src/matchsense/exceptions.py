"""
Exception types raised by the MatchSense core.

All errors are raised synchronously at the call that violates a
precondition. Callers correct the configuration and re-invoke.
"""

from __future__ import annotations


class MatchSenseError(Exception):
    """Base class for all MatchSense errors."""


class InvalidModeError(MatchSenseError, ValueError):
    """Unsupported presentation mode (anything other than 'deaf' or 'blind')."""

    def __init__(self, mode: object) -> None:
        self.mode = mode
        super().__init__(
            f"Unsupported mode {mode!r}. Use 'deaf' or 'blind'."
        )


class NotReadyError(MatchSenseError, RuntimeError):
    """Fusion was started before both producers were wired."""


class ConfigurationError(MatchSenseError, ValueError):
    """Configuration values outside their valid range.

    Attributes
    ----------
    errors : list[str]
        Individual validation messages.
    recovery_suggestions : list[str]
        Actionable fixes, when the validator produced any.
    """

    def __init__(
        self,
        errors: list[str] | str,
        recovery_suggestions: list[str] | None = None,
    ) -> None:
        if isinstance(errors, str):
            errors = [errors]
        self.errors = list(errors)
        self.recovery_suggestions = list(recovery_suggestions or [])
        super().__init__(" ".join(self.errors))
