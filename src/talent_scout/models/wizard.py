"""Wizard stage enum and the state container owned by WizardController."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from talent_scout.models.candidate import CandidateProfile
from talent_scout.models.persona import Persona


class WizardStage(str, Enum):
    AWAITING_JOB_DESCRIPTION = "awaiting_job_description"
    EXTRACTING = "extracting"
    REVIEWING_PERSONA = "reviewing_persona"
    SOURCING = "sourcing"
    SHOWING_RESULTS = "showing_results"


@dataclass
class WizardState:
    """Everything the presentation layer reads. Only the controller writes it."""

    stage: WizardStage = WizardStage.AWAITING_JOB_DESCRIPTION
    job_description: str = ""
    persona: Persona | None = None
    candidates: list[CandidateProfile] = field(default_factory=list)
    shortlist: list[CandidateProfile] = field(default_factory=list)
    loading: bool = False
    error: str | None = None

    def is_shortlisted(self, candidate_id: str) -> bool:
        return any(c.id == candidate_id for c in self.shortlist)

    @property
    def shortlist_ids(self) -> set[str]:
        return {c.id for c in self.shortlist}
