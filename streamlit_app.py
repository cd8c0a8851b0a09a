"""Streamlit Web UI for talent-scout.

Four screens driven by WizardController:
  1) Job description input
  2) Persona review and editing
  3) Sourcing (scripted agent log while candidates are generated)
  4) Results with All Matches / Shortlist tabs
"""

from __future__ import annotations

import logging
import os

logger = logging.getLogger(__name__)

import nest_asyncio
import streamlit as st
from dotenv import load_dotenv

load_dotenv()
nest_asyncio.apply()

# Streamlit Cloud: sync st.secrets -> os.environ so the LLM client can read it
if "ANTHROPIC_API_KEY" not in os.environ:
    try:
        os.environ["ANTHROPIC_API_KEY"] = st.secrets["ANTHROPIC_API_KEY"]
    except Exception:
        pass

from talent_scout.clients.llm_client import LLMClient, run_closing
from talent_scout.config import load_config
from talent_scout.errors import WizardStateError
from talent_scout.models.candidate import CandidateProfile
from talent_scout.models.wizard import WizardStage
from talent_scout.pipeline.wizard import WizardController, build_controller
from talent_scout.ui.views import (
    EXAMPLE_JD,
    SIMULATION_NOTE,
    empty_view_message,
    score_badge,
    screen_for,
    step_labels,
    tab_labels,
)
from talent_scout.usage.models import UsageLog

# ---------------------------------------------------------------------------
# Page config
# ---------------------------------------------------------------------------

st.set_page_config(
    page_title="TalentScout AI",
    page_icon=":robot_face:",
    layout="wide",
)

# ---------------------------------------------------------------------------
# Session objects
# ---------------------------------------------------------------------------

if "controller" not in st.session_state:
    config = load_config()
    llm = LLMClient(
        timeout=config.llm.timeout,
        max_retries=config.llm.max_retries,
        max_tokens=config.llm.max_tokens,
    )
    st.session_state.llm = llm
    st.session_state.controller = build_controller(config, llm)
    st.session_state.usage = UsageLog(stage=WizardStage.AWAITING_JOB_DESCRIPTION.value)
    # Bumped whenever list items move so widget keys do not keep stale values
    st.session_state.revision = 0
    st.session_state.jd_input = ""

controller: WizardController = st.session_state.controller
llm: LLMClient = st.session_state.llm


def _record_usage() -> None:
    st.session_state.usage = st.session_state.usage.merge_tokens(llm.get_token_summary())


def _bump_revision() -> None:
    st.session_state.revision += 1


def _reset() -> None:
    controller.reset()
    st.session_state.jd_input = ""
    _bump_revision()


# ---------------------------------------------------------------------------
# Sidebar
# ---------------------------------------------------------------------------

with st.sidebar:
    st.title("TalentScout AI")
    st.caption("Job description to candidate shortlist")
    st.button("New Search", on_click=_reset, use_container_width=True)

    st.divider()
    usage: UsageLog = st.session_state.usage
    st.caption("Session usage")
    st.markdown(
        f"LLM calls: **{usage.llm_calls}**  \n"
        f"Tokens: {usage.total_input_tokens} in / {usage.total_output_tokens} out  \n"
        f"Estimated cost: ${usage.estimated_cost_usd:.4f}"
    )

# ---------------------------------------------------------------------------
# Header + error banner
# ---------------------------------------------------------------------------

state = controller.state
screen = screen_for(state, st.session_state.pop("start_sourcing", False))
shown_stage = WizardStage.SOURCING if screen == "sourcing" else state.stage
st.markdown(
    "  >  ".join(
        f"**:blue[{label}]**" if active else label
        for label, active in step_labels(shown_stage)
    )
)

if state.error:
    err_col, btn_col = st.columns([8, 1])
    err_col.error(state.error)
    btn_col.button("Dismiss", on_click=controller.dismiss_error)


# ---------------------------------------------------------------------------
# Screen 1: job description
# ---------------------------------------------------------------------------


def _fill_example() -> None:
    st.session_state.jd_input = EXAMPLE_JD


def _screen_job_input() -> None:
    st.header("Step 1: Job Description")
    st.markdown("Paste the job description. The agent extracts a search persona from it.")

    if not st.session_state.jd_input and state.job_description:
        st.session_state.jd_input = state.job_description

    st.button("Load example", on_click=_fill_example)
    jd_text = st.text_area(
        "Job description",
        key="jd_input",
        height=320,
        placeholder="Paste the full job description here...",
    )

    if st.button("Analyze & Build Persona", type="primary", disabled=not jd_text.strip()):
        with st.spinner("Analyzing job description..."):
            try:
                run_closing(llm, controller.submit_job_description(jd_text))
            except Exception:
                logger.exception("Persona extraction crashed")
            finally:
                _record_usage()
        _bump_revision()
        st.rerun()


# ---------------------------------------------------------------------------
# Screen 2: persona review
# ---------------------------------------------------------------------------


def _on_field(field: str, key: str) -> None:
    controller.update_field(field, st.session_state[key])


def _on_item(field: str, index: int, key: str) -> None:
    controller.update_list_item(field, index, st.session_state[key])


def _on_add(field: str) -> None:
    controller.add_list_item(field)
    _bump_revision()


def _on_remove(field: str, index: int) -> None:
    controller.remove_list_item(field, index)
    _bump_revision()


def _text_field(col, label: str, field: str) -> None:
    key = f"persona_{field}_{st.session_state.revision}"
    col.text_input(
        label,
        value=getattr(state.persona, field),
        key=key,
        on_change=_on_field,
        args=(field, key),
    )


def _list_editor(label: str, field: str) -> None:
    head, add = st.columns([4, 1])
    head.markdown(f"**{label}**")
    add.button("+ Add", key=f"add_{field}", on_click=_on_add, args=(field,))
    rev = st.session_state.revision
    for idx, item in enumerate(getattr(state.persona, field)):
        item_col, remove_col = st.columns([6, 1])
        key = f"{field}_{idx}_{rev}"
        item_col.text_input(
            f"{label} {idx + 1}",
            value=item,
            key=key,
            label_visibility="collapsed",
            on_change=_on_item,
            args=(field, idx, key),
        )
        remove_col.button("×", key=f"rm_{field}_{idx}_{rev}", on_click=_on_remove, args=(field, idx))


def _screen_persona_review() -> None:
    st.header("Step 2: Review Persona")
    st.markdown("The agent extracted this profile. Adjust it before sourcing.")

    c1, c2, c3 = st.columns(3)
    _text_field(c1, "Job Title", "role_title")
    _text_field(c2, "Seniority", "seniority_level")
    _text_field(c3, "Experience", "years_of_experience")

    c4, c5 = st.columns(2)
    _text_field(c4, "Location Strategy", "location_preference")
    _text_field(c5, "Cultural Alignment", "cultural_fit")

    left, right = st.columns(2)
    with left:
        _list_editor("Must-Have Skills", "must_have_skills")
    with right:
        _list_editor("Nice-to-Have Skills", "nice_to_have_skills")

    st.divider()
    _list_editor("Boolean Search Keywords", "keywords")
    st.caption("These keywords are used to build the search query on external platforms.")
    st.link_button("Test Search on LinkedIn", controller.persona_search_url())

    st.divider()
    st.button("Confirm & Start Sourcing", type="primary", on_click=_request_sourcing)


# ---------------------------------------------------------------------------
# Screen 3: sourcing
# ---------------------------------------------------------------------------


def _request_sourcing() -> None:
    st.session_state.start_sourcing = True


def _screen_sourcing() -> None:
    st.header("Step 3: Sourcing")
    st.subheader("AI Agent is sourcing...")
    log_box = st.empty()
    lines: list[str] = []

    def on_progress(message: str) -> None:
        lines.append(message)
        log_box.code("\n".join(f"✓ {line}" for line in lines[:-1]) + f"\n… {lines[-1]}")

    try:
        run_closing(llm, controller.confirm_persona(on_progress=on_progress))
    except WizardStateError:
        logger.warning("Confirm ignored outside persona review")
    except Exception:
        logger.exception("Candidate sourcing crashed")
    finally:
        _record_usage()
    st.rerun()


# ---------------------------------------------------------------------------
# Screen 4: results
# ---------------------------------------------------------------------------


def _candidate_card(candidate: CandidateProfile, view: str) -> None:
    with st.container(border=True):
        main, actions = st.columns([4, 1])
        with main:
            st.markdown(f"### {candidate.name}  {score_badge(candidate)}")
            st.markdown(f":blue[{candidate.headline}]")
            st.caption(f"{candidate.current_company or '-'}  ·  {candidate.location or '-'}")
            if candidate.summary:
                st.info(candidate.summary)
            st.markdown(
                "**Matched skills:** "
                + (" ".join(f":green[`{s}`]" for s in candidate.matching_skills) or "-")
            )
            if candidate.missing_skills:
                st.markdown(
                    "**Missing / not mentioned:** "
                    + " ".join(f"`{s}`" for s in candidate.missing_skills)
                )
        with actions:
            st.link_button("View on LinkedIn", candidate.linkedin_url, use_container_width=True)
            shortlisted = state.is_shortlisted(candidate.id)
            st.button(
                "★ Shortlisted" if shortlisted else "☆ Shortlist",
                key=f"star_{view}_{candidate.id}",
                on_click=controller.toggle_shortlist,
                args=(candidate,),
                use_container_width=True,
            )


def _screen_results() -> None:
    head, reset = st.columns([5, 1])
    head.header("Candidates")
    head.markdown("Review generated matches and manage your shortlist.")
    reset.button("New Search", key="reset_results", on_click=_reset)

    all_label, shortlist_label = tab_labels(state)
    tab_all, tab_short = st.tabs([all_label, shortlist_label])
    for tab, view in ((tab_all, "all"), (tab_short, "shortlist")):
        with tab:
            shown = controller.displayed_candidates(view)
            if not shown:
                st.info(empty_view_message(view))
            for candidate in shown:
                _candidate_card(candidate, view)
            if view == "all" and shown:
                st.warning(SIMULATION_NOTE)


# ---------------------------------------------------------------------------
# Router
# ---------------------------------------------------------------------------


def _screen_interrupted() -> None:
    # The in-flight result is stale now
    st.info("Sourcing was interrupted.")
    st.button("Start over", on_click=_reset)


SCREENS = {
    "job_input": _screen_job_input,
    "persona_review": _screen_persona_review,
    "sourcing": _screen_sourcing,
    "interrupted": _screen_interrupted,
    "results": _screen_results,
}

SCREENS[screen]()

st.divider()
st.caption("TalentScout AI. Powered by Claude.")
