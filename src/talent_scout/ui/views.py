"""Presentation helpers shared by the Streamlit app and the CLI.

Nothing here touches Streamlit so it can be tested directly.
"""

from __future__ import annotations

from talent_scout.models.candidate import CandidateProfile
from talent_scout.models.wizard import WizardStage, WizardState

STEPS: list[tuple[str, set[WizardStage]]] = [
    ("1. Job Description", {WizardStage.AWAITING_JOB_DESCRIPTION, WizardStage.EXTRACTING}),
    ("2. Persona", {WizardStage.REVIEWING_PERSONA}),
    ("3. Sourcing", {WizardStage.SOURCING, WizardStage.SHOWING_RESULTS}),
]

TIER_COLORS = {"strong": "green", "good": "blue", "partial": "orange"}

SIMULATION_NOTE = (
    "These profiles are simulated by AI. The LinkedIn link searches for real "
    "people matching the same criteria."
)

EXAMPLE_JD = """Senior Frontend Engineer

We are looking for an experienced Frontend Engineer to join our product team.

Responsibilities:
- Build high-quality, responsive web applications using React and TypeScript.
- Collaborate with designers and backend engineers.
- Optimize application for maximum speed and scalability.

Requirements:
- 5+ years of experience in web development.
- Strong proficiency in JavaScript, TypeScript, and React (Hooks, Context).
- Experience with Tailwind CSS.
- Familiarity with modern build pipelines (Vite, Webpack).
- Good communication skills and ability to work in a remote team.
- Bonus: Experience with AI/LLM integration.

Location: Remote (US/Canada preferred)"""


def step_labels(stage: WizardStage) -> list[tuple[str, bool]]:
    """Header breadcrumb as (label, active) pairs."""
    return [(label, stage in stages) for label, stages in STEPS]


def tab_labels(state: WizardState) -> tuple[str, str]:
    return (
        f"All Matches ({len(state.candidates)})",
        f"Shortlist ({len(state.shortlist)})",
    )


def score_badge(candidate: CandidateProfile) -> str:
    """Streamlit colored-text markdown for the match score."""
    color = TIER_COLORS[candidate.match_tier]
    return f":{color}[**{candidate.display_score}% Match**]"


def empty_view_message(view: str) -> str:
    if view == "shortlist":
        return (
            "Your shortlist is empty. Star candidates from the All Matches tab "
            "to save them here for later review."
        )
    return "No candidates found."


def screen_for(state: WizardState, sourcing_requested: bool = False) -> str:
    """Name of the screen the app renders for ``state``.

    ``sourcing_requested`` is set by the confirm button; that run shows the
    sourcing log on its own page rather than under the persona editor.
    """
    stage = state.stage
    if stage is WizardStage.REVIEWING_PERSONA:
        if state.persona is None:
            return "job_input"
        return "sourcing" if sourcing_requested else "persona_review"
    if stage is WizardStage.SOURCING:
        # Only seen when a rerun cut an in-flight sourcing call short
        return "interrupted"
    if stage is WizardStage.SHOWING_RESULTS:
        return "results"
    return "job_input"
