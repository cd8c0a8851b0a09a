"""Wizard controller - sequences extraction, persona review, sourcing and results."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable

from talent_scout.clients.llm_client import LLMClient
from talent_scout.config import API_KEY_ENV, PEOPLE_SEARCH_URL, AppConfig
from talent_scout.errors import ConfigurationError, TalentScoutError, WizardStateError
from talent_scout.models.candidate import CandidateProfile
from talent_scout.models.persona import LIST_FIELDS, Persona
from talent_scout.models.wizard import WizardStage, WizardState
from talent_scout.pipeline.candidate_generator import CandidateGenerator
from talent_scout.pipeline.persona_extractor import PersonaExtractor
from talent_scout.utils.jd_text import normalize_jd
from talent_scout.utils.search_links import persona_search_url

logger = logging.getLogger(__name__)

EMPTY_JD_MESSAGE = "Paste a job description first."
EXTRACTION_FAILED = "Failed to analyze Job Description. Please check your API key and try again."
SOURCING_FAILED = "Failed to search candidates."
MISSING_ROLE_TITLE = "Add a job title before starting the search."
MISSING_KEY = f"{API_KEY_ENV} is not set. Add it to your environment or .env file and try again."

NEW_ITEM = "New Item"

ProgressCallback = Callable[[str], None]


def sourcing_log(persona: Persona) -> list[str]:
    """Scripted agent log shown while the sourcing delay runs."""
    return [
        "Initializing search agent...",
        "Connecting to knowledge base...",
        "Applying boolean search strings...",
        "Scanning professional networks (simulated)...",
        f"Filtering for '{persona.seniority_level or 'any'}' level candidates...",
        "Analyzing skill matches...",
        "Removing duplicates...",
        "Ranking candidates by relevance...",
        "Finalizing list...",
    ]


class WizardController:
    """Single writer of WizardState.

    Each outbound call is tagged with the generation current when it was
    issued. ``reset()`` advances the generation, so a late completion from an
    abandoned request is dropped instead of overwriting the fresh state.
    """

    def __init__(
        self,
        extractor: PersonaExtractor,
        generator: CandidateGenerator,
        *,
        sourcing_delay: float = 4.5,
        search_base_url: str = PEOPLE_SEARCH_URL,
    ):
        self.extractor = extractor
        self.generator = generator
        self.sourcing_delay = sourcing_delay
        self.search_base_url = search_base_url
        self.state = WizardState()
        self._generation = 0
        self._delay_cancelled: asyncio.Event | None = None

    @property
    def generation(self) -> int:
        return self._generation

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _require(self, *stages: WizardStage) -> None:
        if self.state.stage not in stages:
            allowed = ", ".join(s.value for s in stages)
            raise WizardStateError(
                f"Not allowed in stage {self.state.stage.value} (needs {allowed})"
            )

    def _next_generation(self) -> int:
        self._generation += 1
        return self._generation

    def _is_stale(self, token: int, what: str) -> bool:
        if token != self._generation:
            logger.warning("Discarding stale %s (request %d, current %d)", what, token, self._generation)
            return True
        return False

    def _persona(self) -> Persona:
        self._require(WizardStage.REVIEWING_PERSONA)
        if self.state.persona is None:
            raise WizardStateError("No persona to edit")
        return self.state.persona

    def _list(self, field: str) -> list[str]:
        name = Persona.field_name(field)
        if name not in LIST_FIELDS:
            raise KeyError(f"{field!r} is not a list field")
        return getattr(self._persona(), name)

    @staticmethod
    def _user_message(exc: TalentScoutError, fallback: str) -> str:
        if isinstance(exc, ConfigurationError):
            return MISSING_KEY
        return fallback

    def _fall_back(self, stage: WizardStage, message: str) -> None:
        self.state.stage = stage
        self.state.loading = False
        self.state.error = message

    # ------------------------------------------------------------------
    # Stage 1: job description -> persona
    # ------------------------------------------------------------------

    async def submit_job_description(self, text: str) -> bool:
        """Extract a persona from ``text``. Returns True on success."""
        self._require(WizardStage.AWAITING_JOB_DESCRIPTION)
        jd_text = normalize_jd(text or "")
        if not jd_text:
            self.state.error = EMPTY_JD_MESSAGE
            return False

        token = self._next_generation()
        self.state.job_description = jd_text
        self.state.stage = WizardStage.EXTRACTING
        self.state.loading = True
        self.state.error = None
        logger.info("Extracting persona from %d chars of job description", len(jd_text))

        try:
            persona = await self.extractor.extract_persona(jd_text)
        except TalentScoutError as exc:
            if self._is_stale(token, "extraction failure"):
                return False
            logger.warning("Persona extraction failed: %s", exc)
            self._fall_back(
                WizardStage.AWAITING_JOB_DESCRIPTION,
                self._user_message(exc, EXTRACTION_FAILED),
            )
            return False
        except Exception:
            if not self._is_stale(token, "extraction failure"):
                self._fall_back(WizardStage.AWAITING_JOB_DESCRIPTION, EXTRACTION_FAILED)
            raise

        if self._is_stale(token, "persona"):
            return False
        self.state.persona = persona
        self.state.stage = WizardStage.REVIEWING_PERSONA
        self.state.loading = False
        return True

    # ------------------------------------------------------------------
    # Stage 2: persona editing
    # ------------------------------------------------------------------

    def update_field(self, field: str, value) -> None:
        persona = self._persona()
        name = Persona.field_name(field)
        if name in LIST_FIELDS:
            if isinstance(value, str):
                raise TypeError(f"{field!r} takes a list of strings, not a single string")
            value = list(value)
        setattr(persona, name, value)

    def update_list_item(self, field: str, index: int, value: str) -> None:
        self._list(field)[index] = value

    def add_list_item(self, field: str, value: str = NEW_ITEM) -> None:
        self._list(field).append(value)

    def remove_list_item(self, field: str, index: int) -> None:
        del self._list(field)[index]

    def persona_search_url(self) -> str:
        """Manual test-search link for the persona under review."""
        return persona_search_url(self._persona(), self.search_base_url)

    # ------------------------------------------------------------------
    # Stage 3: sourcing
    # ------------------------------------------------------------------

    async def confirm_persona(
        self,
        persona: Persona | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> bool:
        """Confirm the (possibly edited) persona and source candidates.

        Args:
            persona: Replacement for the persona under review, e.g. an edited copy.
            on_progress: Optional callback receiving each scripted log line.

        Returns True when results are showing.
        """
        self._require(WizardStage.REVIEWING_PERSONA)
        if persona is not None:
            self.state.persona = persona
        persona = self._persona()
        if not persona.role_title.strip():
            self.state.error = MISSING_ROLE_TITLE
            return False

        token = self._next_generation()
        self.state.stage = WizardStage.SOURCING
        self.state.loading = True
        self.state.error = None
        logger.info("Sourcing candidates for %s", persona.role_title)

        if not await self._sourcing_pause(persona, on_progress):
            return False
        if self._is_stale(token, "sourcing delay"):
            return False

        try:
            candidates = await self.generator.generate_candidates(persona)
        except TalentScoutError as exc:
            if self._is_stale(token, "sourcing failure"):
                return False
            logger.warning("Candidate generation failed: %s", exc)
            self._fall_back(
                WizardStage.REVIEWING_PERSONA,
                self._user_message(exc, SOURCING_FAILED),
            )
            return False
        except Exception:
            if not self._is_stale(token, "sourcing failure"):
                self._fall_back(WizardStage.REVIEWING_PERSONA, SOURCING_FAILED)
            raise

        if self._is_stale(token, "candidate list"):
            return False
        self.state.candidates = candidates
        self.state.stage = WizardStage.SHOWING_RESULTS
        self.state.loading = False
        logger.info("Showing %d candidates", len(candidates))
        return True

    async def _sourcing_pause(
        self,
        persona: Persona,
        on_progress: ProgressCallback | None,
    ) -> bool:
        """Play the scripted log over ``sourcing_delay`` seconds.

        Returns False if ``reset()`` cancelled the pause.
        """
        cancelled = asyncio.Event()
        self._delay_cancelled = cancelled
        messages = sourcing_log(persona)
        interval = self.sourcing_delay / len(messages)
        try:
            for message in messages:
                if cancelled.is_set():
                    break
                if on_progress:
                    on_progress(message)
                if interval <= 0:
                    continue
                try:
                    await asyncio.wait_for(cancelled.wait(), timeout=interval)
                except asyncio.TimeoutError:
                    continue
        finally:
            if self._delay_cancelled is cancelled:
                self._delay_cancelled = None

        if cancelled.is_set():
            logger.info("Sourcing delay cancelled")
            return False
        return True

    # ------------------------------------------------------------------
    # Stage 4: results
    # ------------------------------------------------------------------

    def toggle_shortlist(self, candidate: CandidateProfile) -> bool:
        """Add or remove ``candidate`` by id. Returns True if now shortlisted."""
        self._require(WizardStage.SHOWING_RESULTS)
        shortlist = self.state.shortlist
        if self.state.is_shortlisted(candidate.id):
            self.state.shortlist = [c for c in shortlist if c.id != candidate.id]
            return False
        self.state.shortlist = [*shortlist, candidate]
        return True

    def displayed_candidates(self, view: str = "all") -> list[CandidateProfile]:
        """Candidates for the ``all`` or ``shortlist`` tab."""
        if view == "shortlist":
            return list(self.state.shortlist)
        if view == "all":
            return list(self.state.candidates)
        raise ValueError(f"Unknown view: {view!r}")

    # ------------------------------------------------------------------
    # Any stage
    # ------------------------------------------------------------------

    def dismiss_error(self) -> None:
        self.state.error = None

    def reset(self) -> None:
        """Discard all state and return to the job description screen."""
        self._next_generation()
        if self._delay_cancelled is not None:
            self._delay_cancelled.set()
        self.state = WizardState()
        logger.info("Wizard reset")


def build_controller(config: AppConfig, llm: LLMClient | None = None) -> WizardController:
    """Wire extractor, generator and controller from an ``AppConfig``."""
    if llm is None:
        llm = LLMClient(
            timeout=config.llm.timeout,
            max_retries=config.llm.max_retries,
            max_tokens=config.llm.max_tokens,
        )
    extractor = PersonaExtractor(llm, model=config.llm.model)
    generator = CandidateGenerator(
        llm,
        model=config.llm.model,
        count=config.sourcing.candidate_count,
        search_base_url=config.sourcing.search_base_url,
    )
    return WizardController(
        extractor,
        generator,
        sourcing_delay=config.sourcing.delay_seconds,
        search_base_url=config.sourcing.search_base_url,
    )
