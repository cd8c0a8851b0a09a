"""Candidate generation: asks the model for simulated profiles matching a persona."""

from __future__ import annotations

import json
import logging

from pydantic import ValidationError

from talent_scout.clients.llm_client import DEFAULT_MODEL, LLMClient
from talent_scout.config import PEOPLE_SEARCH_URL
from talent_scout.errors import ParseError
from talent_scout.models.candidate import CandidateProfile
from talent_scout.models.persona import Persona
from talent_scout.utils.search_links import candidate_search_url

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a sourcing engine simulating LinkedIn search results. "
    "Generate realistic profiles."
)

CANDIDATE_SCHEMA: dict = {
    "type": "object",
    "properties": {
        "id": {"type": "string"},
        "name": {"type": "string"},
        "headline": {"type": "string"},
        "currentCompany": {"type": "string"},
        "location": {"type": "string"},
        "matchScore": {"type": "integer", "description": "Score from 0 to 100"},
        "summary": {
            "type": "string",
            "description": "Brief professional summary tailored to the persona",
        },
        "matchingSkills": {"type": "array", "items": {"type": "string"}},
        "missingSkills": {"type": "array", "items": {"type": "string"}},
    },
    "required": ["id", "name", "headline", "matchScore", "matchingSkills"],
}

# Tool inputs must be objects, so the list travels under one key.
CANDIDATE_LIST_SCHEMA: dict = {
    "type": "object",
    "properties": {
        "candidates": {"type": "array", "items": CANDIDATE_SCHEMA},
    },
    "required": ["candidates"],
}


def build_prompt(persona: Persona, count: int = 6) -> str:
    return (
        f"Based on the following candidate persona, generate {count} realistic candidate "
        "profiles that might be found on LinkedIn.\n"
        "Some should be perfect matches, some slightly less perfect.\n\n"
        f"PERSONA:\n{json.dumps(persona.to_wire(), ensure_ascii=False)}"
    )


def _unwrap(data: dict | list) -> list:
    if isinstance(data, dict) and isinstance(data.get("candidates"), list):
        return data["candidates"]
    if isinstance(data, list):
        return data
    raise ParseError(f"Expected a JSON array of candidates, got {type(data).__name__}")


class CandidateGenerator:
    def __init__(
        self,
        llm: LLMClient,
        model: str = DEFAULT_MODEL,
        *,
        count: int = 6,
        search_base_url: str = PEOPLE_SEARCH_URL,
        temperature: float = 0.7,
    ):
        self.llm = llm
        self.model = model
        self.count = count
        self.search_base_url = search_base_url
        self.temperature = temperature

    async def generate_candidates(self, persona: Persona) -> list[CandidateProfile]:
        """Return simulated profiles for ``persona`` with search links attached.

        The requested count is a hint; whatever the model returns is kept.
        """
        data = await self.llm.generate_json(
            prompt=build_prompt(persona, self.count),
            system=SYSTEM_PROMPT,
            schema=CANDIDATE_LIST_SCHEMA,
            schema_name="record_candidates",
            model=self.model,
            temperature=self.temperature,
        )
        try:
            profiles = [CandidateProfile.model_validate(item) for item in _unwrap(data)]
        except ValidationError as exc:
            raise ParseError(f"Candidate profile does not match the schema: {exc}") from exc

        for profile in profiles:
            profile.linkedin_url = candidate_search_url(profile, self.search_base_url)

        if len(profiles) != self.count:
            logger.info("Requested %d candidates, model returned %d", self.count, len(profiles))
        return profiles
