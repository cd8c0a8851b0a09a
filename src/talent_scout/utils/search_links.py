"""Build outbound people-search links from personas and candidate profiles."""

from __future__ import annotations

from urllib.parse import quote_plus

from talent_scout.config import PEOPLE_SEARCH_URL
from talent_scout.models.candidate import CandidateProfile
from talent_scout.models.persona import Persona

REMOTE_LOCATION = "Remote"


def build_search_url(query: str, base_url: str = PEOPLE_SEARCH_URL) -> str:
    """Append the form-encoded query to the people-search endpoint."""
    return f"{base_url}{quote_plus(query.strip())}"


def candidate_query(profile: CandidateProfile) -> str:
    """Headline, the first two matching skills, then location unless remote."""
    parts = [profile.headline, *profile.matching_skills[:2]]
    if profile.location and profile.location != REMOTE_LOCATION:
        parts.append(profile.location)
    return " ".join(p for p in parts if p)


def persona_query(persona: Persona) -> str:
    """Role title followed by a boolean OR group of quoted keywords."""
    if not persona.keywords:
        return persona.role_title
    group = " OR ".join(f'"{k}"' for k in persona.keywords)
    return f"{persona.role_title} ({group})"


def candidate_search_url(profile: CandidateProfile, base_url: str = PEOPLE_SEARCH_URL) -> str:
    return build_search_url(candidate_query(profile), base_url)


def persona_search_url(persona: Persona, base_url: str = PEOPLE_SEARCH_URL) -> str:
    return build_search_url(persona_query(persona), base_url)
