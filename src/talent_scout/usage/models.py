"""In-memory usage summary for one wizard session."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, Field

from talent_scout.models.wizard import WizardState
from talent_scout.usage.cost_calculator import calculate_cost


class UsageLog(BaseModel):
    """Usage of a single wizard session. Never persisted."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: datetime = Field(default_factory=datetime.now)
    stage: str
    role_title: str | None = None
    candidate_count: int = 0
    shortlist_count: int = 0
    llm_calls: int = 0
    total_input_tokens: int = 0
    total_output_tokens: int = 0
    estimated_cost_usd: float = 0.0
    error_message: str | None = None

    @classmethod
    def from_session(cls, state: WizardState, token_summary: dict) -> "UsageLog":
        """Build a summary from wizard state and ``LLMClient.get_token_summary()``."""
        calls = token_summary.get("calls", [])
        return cls(
            stage=state.stage.value,
            role_title=state.persona.role_title if state.persona else None,
            candidate_count=len(state.candidates),
            shortlist_count=len(state.shortlist),
            llm_calls=len(calls),
            total_input_tokens=token_summary.get("input", 0),
            total_output_tokens=token_summary.get("output", 0),
            estimated_cost_usd=calculate_cost(calls),
            error_message=state.error,
        )

    def merge_tokens(self, token_summary: dict) -> "UsageLog":
        """Return a copy with another token summary added on top."""
        calls = token_summary.get("calls", [])
        return self.model_copy(
            update={
                "llm_calls": self.llm_calls + len(calls),
                "total_input_tokens": self.total_input_tokens + token_summary.get("input", 0),
                "total_output_tokens": self.total_output_tokens + token_summary.get("output", 0),
                "estimated_cost_usd": self.estimated_cost_usd + calculate_cost(calls),
            }
        )
