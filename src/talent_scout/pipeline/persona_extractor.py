"""Persona extraction: turns free-text job descriptions into a structured Persona."""

from __future__ import annotations

import logging

from pydantic import ValidationError

from talent_scout.clients.llm_client import DEFAULT_MODEL, LLMClient
from talent_scout.errors import ParseError
from talent_scout.models.persona import Persona

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = "Extract structured data from job descriptions to create search profiles."

PERSONA_SCHEMA: dict = {
    "type": "object",
    "properties": {
        "roleTitle": {"type": "string", "description": "The inferred job title"},
        "seniorityLevel": {"type": "string", "description": "Junior, Mid, Senior, Lead, etc."},
        "mustHaveSkills": {
            "type": "array",
            "items": {"type": "string"},
            "description": "Critical technical or hard skills required",
        },
        "niceToHaveSkills": {
            "type": "array",
            "items": {"type": "string"},
            "description": "Bonus skills that are not mandatory",
        },
        "yearsOfExperience": {"type": "string", "description": "e.g. '3-5 years'"},
        "locationPreference": {"type": "string", "description": "Remote, Hybrid, or specific city"},
        "keywords": {
            "type": "array",
            "items": {"type": "string"},
            "description": "Keywords optimized for LinkedIn boolean search",
        },
        "culturalFit": {
            "type": "string",
            "description": "Description of the ideal personality or work style",
        },
    },
    "required": ["roleTitle", "mustHaveSkills", "keywords", "seniorityLevel"],
}


def build_prompt(jd_text: str) -> str:
    return (
        "You are an expert technical recruiter. Analyze the following Job Description "
        "and build a precise candidate persona.\n\n"
        f"JOB DESCRIPTION:\n{jd_text}"
    )


class PersonaExtractor:
    def __init__(self, llm: LLMClient, model: str = DEFAULT_MODEL):
        self.llm = llm
        self.model = model

    async def extract_persona(self, jd_text: str) -> Persona:
        """Analyze a job description and return the hiring persona.

        Errors from the client (ConfigurationError, ServiceError, ParseError)
        propagate unchanged. A payload that is not an object or misses a
        required field is reported as ParseError.
        """
        data = await self.llm.generate_json(
            prompt=build_prompt(jd_text),
            system=SYSTEM_PROMPT,
            schema=PERSONA_SCHEMA,
            schema_name="record_persona",
            model=self.model,
        )
        if not isinstance(data, dict):
            raise ParseError(f"Expected a JSON object for the persona, got {type(data).__name__}")
        try:
            persona = Persona.model_validate(data)
        except ValidationError as exc:
            raise ParseError(f"Persona does not match the schema: {exc}") from exc
        logger.info("Extracted persona: %s (%s)", persona.role_title, persona.seniority_level)
        return persona
