"""Exception taxonomy shared by the extraction, generation and wizard layers."""

from __future__ import annotations


class TalentScoutError(Exception):
    """Base class for every error raised by talent_scout."""


class ConfigurationError(TalentScoutError):
    """Raised when the completion service credential is not configured."""


class ServiceError(TalentScoutError):
    """Raised when the completion call fails or returns an empty body."""


class ParseError(TalentScoutError, ValueError):
    """Raised when the completion body is not JSON or does not fit the schema."""


class WizardStateError(TalentScoutError):
    """Raised when a wizard intent is issued in a stage that does not allow it."""
