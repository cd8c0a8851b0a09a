"""Pydantic model for a simulated candidate profile."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class CandidateProfile(BaseModel):
    id: str
    name: str
    headline: str
    current_company: str = Field("", alias="currentCompany")
    location: str = ""
    match_score: int = Field(alias="matchScore")  # 0-100 requested, not enforced
    summary: str = ""
    matching_skills: list[str] = Field(alias="matchingSkills")
    missing_skills: list[str] = Field(default_factory=list, alias="missingSkills")
    linkedin_url: str = Field("", alias="linkedInUrl")  # derived, never sent by the service

    model_config = {"populate_by_name": True}

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value):
        # Models sometimes number candidates with bare integers
        if isinstance(value, int):
            return str(value)
        return value

    @field_validator("current_company", "location", "summary", mode="before")
    @classmethod
    def _null_to_empty_text(cls, value):
        return "" if value is None else value

    @field_validator("missing_skills", mode="before")
    @classmethod
    def _null_to_empty_list(cls, value):
        return [] if value is None else value

    @property
    def display_score(self) -> int:
        return max(0, min(100, self.match_score))

    @property
    def match_tier(self) -> str:
        """Badge tier used by the results view: strong, good or partial."""
        if self.display_score >= 90:
            return "strong"
        if self.display_score >= 75:
            return "good"
        return "partial"
