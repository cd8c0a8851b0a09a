"""Tests for presentation helpers."""

import pytest

from talent_scout.models.wizard import WizardStage, WizardState
from talent_scout.ui.views import (
    EXAMPLE_JD,
    empty_view_message,
    score_badge,
    screen_for,
    step_labels,
    tab_labels,
)


class TestStepLabels:
    def test_input_stage_highlights_first_step(self):
        labels = step_labels(WizardStage.AWAITING_JOB_DESCRIPTION)
        assert [active for _, active in labels] == [True, False, False]

    def test_review_highlights_persona(self):
        labels = step_labels(WizardStage.REVIEWING_PERSONA)
        assert labels[1] == ("2. Persona", True)

    def test_sourcing_and_results_share_last_step(self):
        for stage in (WizardStage.SOURCING, WizardStage.SHOWING_RESULTS):
            assert [active for _, active in step_labels(stage)] == [False, False, True]


def test_tab_labels_count(sample_candidates):
    state = WizardState(candidates=sample_candidates, shortlist=sample_candidates[:1])
    assert tab_labels(state) == ("All Matches (3)", "Shortlist (1)")


def test_score_badge_colors(sample_candidates):
    assert score_badge(sample_candidates[0]) == ":green[**92% Match**]"
    assert score_badge(sample_candidates[1]) == ":blue[**78% Match**]"
    assert score_badge(sample_candidates[2]) == ":orange[**61% Match**]"


def test_empty_view_messages():
    assert "shortlist is empty" in empty_view_message("shortlist")
    assert empty_view_message("all") == "No candidates found."


def test_example_jd_is_not_blank():
    assert EXAMPLE_JD.startswith("Senior Frontend Engineer")


class TestScreenFor:
    @pytest.mark.parametrize(
        "stage,screen",
        [
            (WizardStage.AWAITING_JOB_DESCRIPTION, "job_input"),
            (WizardStage.EXTRACTING, "job_input"),
            (WizardStage.SOURCING, "interrupted"),
            (WizardStage.SHOWING_RESULTS, "results"),
        ],
    )
    def test_stage_to_screen(self, stage, screen):
        assert screen_for(WizardState(stage=stage)) == screen

    def test_review_shows_editor(self, sample_persona):
        state = WizardState(stage=WizardStage.REVIEWING_PERSONA, persona=sample_persona)
        assert screen_for(state) == "persona_review"

    def test_confirm_replaces_editor_with_sourcing(self, sample_persona):
        state = WizardState(stage=WizardStage.REVIEWING_PERSONA, persona=sample_persona)
        assert screen_for(state, sourcing_requested=True) == "sourcing"

    def test_sourcing_request_ignored_outside_review(self):
        state = WizardState(stage=WizardStage.SHOWING_RESULTS)
        assert screen_for(state, sourcing_requested=True) == "results"

    def test_review_without_persona_falls_back_to_input(self):
        state = WizardState(stage=WizardStage.REVIEWING_PERSONA)
        assert screen_for(state) == "job_input"
