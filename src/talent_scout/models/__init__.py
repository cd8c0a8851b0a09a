"""Data models for the sourcing wizard."""

from talent_scout.models.candidate import CandidateProfile
from talent_scout.models.persona import LIST_FIELDS, Persona
from talent_scout.models.wizard import WizardStage, WizardState

__all__ = [
    "CandidateProfile",
    "LIST_FIELDS",
    "Persona",
    "WizardStage",
    "WizardState",
]
