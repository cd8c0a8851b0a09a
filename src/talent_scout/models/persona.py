"""Pydantic model for the hiring persona extracted from a job description."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

LIST_FIELDS = ("must_have_skills", "nice_to_have_skills", "keywords")


class Persona(BaseModel):
    role_title: str = Field(alias="roleTitle")
    seniority_level: str = Field(alias="seniorityLevel")
    must_have_skills: list[str] = Field(alias="mustHaveSkills")
    nice_to_have_skills: list[str] = Field(default_factory=list, alias="niceToHaveSkills")
    years_of_experience: str = Field("", alias="yearsOfExperience")
    location_preference: str = Field("", alias="locationPreference")
    keywords: list[str]  # used for people-search queries
    cultural_fit: str = Field("", alias="culturalFit")

    model_config = {"populate_by_name": True}

    @field_validator("years_of_experience", "location_preference", "cultural_fit", mode="before")
    @classmethod
    def _null_to_empty_text(cls, value):
        return "" if value is None else value

    @field_validator("nice_to_have_skills", mode="before")
    @classmethod
    def _null_to_empty_list(cls, value):
        return [] if value is None else value

    @classmethod
    def field_name(cls, name: str) -> str:
        """Resolve a wire alias (``roleTitle``) or attribute name to the attribute name."""
        if name in cls.model_fields:
            return name
        for attr, info in cls.model_fields.items():
            if info.alias == name:
                return attr
        raise KeyError(f"Unknown persona field: {name!r}")

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True)
