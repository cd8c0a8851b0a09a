"""Shared test fixtures."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from talent_scout.clients.llm_client import LLMClient
from talent_scout.models.candidate import CandidateProfile
from talent_scout.models.persona import Persona
from talent_scout.pipeline.candidate_generator import CandidateGenerator
from talent_scout.pipeline.persona_extractor import PersonaExtractor
from talent_scout.pipeline.wizard import WizardController


@pytest.fixture
def sample_jd_text() -> str:
    return """Senior Backend Engineer

We are hiring a backend engineer to build our payments platform.

Requirements:
- 5+ years of experience with Go
- Kubernetes and PostgreSQL in production
- Nice to have: Kafka, gRPC

Location: Remote
"""


@pytest.fixture
def sample_persona_json() -> dict:
    return {
        "roleTitle": "Backend Engineer",
        "seniorityLevel": "Senior",
        "mustHaveSkills": ["Go", "Kubernetes", "PostgreSQL"],
        "niceToHaveSkills": ["Kafka", "gRPC"],
        "yearsOfExperience": "5+ years",
        "locationPreference": "Remote",
        "keywords": ["Go", "Kubernetes"],
        "culturalFit": "Ownership, async communication",
    }


@pytest.fixture
def sample_persona(sample_persona_json) -> Persona:
    return Persona.model_validate(sample_persona_json)


@pytest.fixture
def sample_candidates_json() -> list[dict]:
    return [
        {
            "id": "1",
            "name": "A. Test",
            "headline": "Backend Engineer",
            "currentCompany": "Acme Pay",
            "location": "Remote",
            "matchScore": 92,
            "summary": "Go and Kubernetes for payments.",
            "matchingSkills": ["Go", "Kubernetes", "PostgreSQL"],
            "missingSkills": [],
        },
        {
            "id": "2",
            "name": "B. Sample",
            "headline": "Platform Engineer",
            "currentCompany": "Cloudly",
            "location": "Berlin, Germany",
            "matchScore": 78,
            "summary": "Infra-heavy background.",
            "matchingSkills": ["Kubernetes"],
            "missingSkills": ["Go"],
        },
        {
            "id": "3",
            "name": "C. Example",
            "headline": "Software Engineer",
            "matchScore": 61,
            "matchingSkills": ["PostgreSQL"],
        },
    ]


@pytest.fixture
def sample_candidates(sample_candidates_json) -> list[CandidateProfile]:
    return [CandidateProfile.model_validate(c) for c in sample_candidates_json]


@pytest.fixture
def mock_llm_client() -> LLMClient:
    """Create a mock LLM client."""
    client = AsyncMock(spec=LLMClient)
    client.generate_json = AsyncMock(return_value={})
    client.get_token_summary.return_value = {"input": 0, "output": 0, "calls": []}
    return client


@pytest.fixture
def mock_extractor(sample_persona) -> PersonaExtractor:
    extractor = AsyncMock(spec=PersonaExtractor)
    extractor.extract_persona = AsyncMock(return_value=sample_persona.model_copy(deep=True))
    return extractor


@pytest.fixture
def mock_generator(sample_candidates) -> CandidateGenerator:
    generator = AsyncMock(spec=CandidateGenerator)
    generator.generate_candidates = AsyncMock(return_value=list(sample_candidates))
    return generator


@pytest.fixture
def controller(mock_extractor, mock_generator) -> WizardController:
    return WizardController(mock_extractor, mock_generator, sourcing_delay=0)
