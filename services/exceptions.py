"""
Plan Engine Exceptions

Raised to callers of plan generation. Content problems are never raised;
they are logged and degrade to fallbacks.
"""


class FitplanError(Exception):
    """Base class for errors surfaced by the plan engine."""
    pass


class ProfileIncompleteError(FitplanError):
    """Raised when a plan is requested for a user without a profile."""

    def __init__(self, user_id):
        self.user_id = user_id
        super().__init__('Complete profile first')


class PlanGenerationError(FitplanError):
    """Raised when persisting a generated plan fails. Safe to retry."""

    def __init__(self, message='Failed to generate plan. Please try again.', details=None):
        self.details = details
        super().__init__(message)
