"""CLI interface using typer + rich."""

from __future__ import annotations

import json
import logging
import subprocess
import sys
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from talent_scout.clients.llm_client import run_closing
from talent_scout.config import load_config
from talent_scout.errors import TalentScoutError
from talent_scout.models.candidate import CandidateProfile
from talent_scout.models.persona import Persona
from talent_scout.models.wizard import WizardStage
from talent_scout.pipeline.wizard import WizardController, build_controller
from talent_scout.ui.views import TIER_COLORS
from talent_scout.usage.models import UsageLog
from talent_scout.utils.jd_text import load_jd_file
from talent_scout.utils.search_links import persona_search_url

app = typer.Typer(
    name="talent-scout",
    help="AI candidate sourcing from a job description",
    no_args_is_help=True,
)
console = Console()


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def _read_jd(jd: Path) -> str:
    if not jd.exists():
        console.print(f"[red]Job description file not found: {jd}[/red]")
        raise typer.Exit(1)
    return load_jd_file(jd)


def _extract(controller: WizardController, jd_text: str) -> Persona:
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        progress.add_task("Analyzing job description...", total=None)
        run_closing(controller.extractor.llm, controller.submit_job_description(jd_text))

    if controller.state.stage is not WizardStage.REVIEWING_PERSONA:
        console.print(f"[red]{controller.state.error}[/red]")
        raise typer.Exit(1)
    return controller.state.persona


def _print_persona(persona: Persona) -> None:
    lines = [
        f"[bold]{persona.role_title}[/bold] ({persona.seniority_level})",
        f"Experience: {persona.years_of_experience or '-'}",
        f"Location: {persona.location_preference or '-'}",
        f"Must have: {', '.join(persona.must_have_skills) or '-'}",
        f"Nice to have: {', '.join(persona.nice_to_have_skills) or '-'}",
        f"Keywords: {', '.join(persona.keywords) or '-'}",
    ]
    if persona.cultural_fit:
        lines.append(f"Cultural fit: {persona.cultural_fit}")
    console.print(Panel("\n".join(lines), title="Candidate Persona"))


def _print_candidates(candidates: list[CandidateProfile], shortlist_ids: set[str]) -> None:
    table = Table(title=f"Candidates ({len(candidates)})")
    table.add_column("", width=1)
    table.add_column("Score", justify="right")
    table.add_column("Name")
    table.add_column("Headline")
    table.add_column("Company")
    table.add_column("Location")
    table.add_column("Matched skills")
    for c in candidates:
        color = TIER_COLORS[c.match_tier]
        table.add_row(
            "*" if c.id in shortlist_ids else "",
            f"[{color}]{c.display_score}%[/{color}]",
            c.name,
            c.headline,
            c.current_company,
            c.location,
            ", ".join(c.matching_skills),
        )
    console.print(table)


@app.command()
def persona(
    jd: Path = typer.Option(..., "--jd", help="Job description text file"),
    as_json: bool = typer.Option(False, "--json", help="Print the persona as JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Extract a candidate persona from a job description."""
    _setup_logging(verbose)
    controller = build_controller(load_config())
    result = _extract(controller, _read_jd(jd))
    if as_json:
        typer.echo(json.dumps(result.to_wire(), indent=2, ensure_ascii=False))
    else:
        _print_persona(result)


@app.command("search-url")
def search_url(
    jd: Path = typer.Option(..., "--jd", help="Job description text file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Print the LinkedIn people-search link for the extracted persona."""
    _setup_logging(verbose)
    config = load_config()
    controller = build_controller(config)
    result = _extract(controller, _read_jd(jd))
    typer.echo(persona_search_url(result, config.sourcing.search_base_url))


@app.command()
def source(
    jd: Path = typer.Option(..., "--jd", help="Job description text file"),
    shortlist_top: int = typer.Option(0, "--shortlist-top", help="Shortlist the N best matches"),
    as_json: bool = typer.Option(False, "--json", help="Print candidates as JSON"),
    no_delay: bool = typer.Option(False, "--no-delay", help="Skip the scripted sourcing log"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Run the whole wizard: persona, sourcing and shortlist."""
    _setup_logging(verbose)
    config = load_config()
    controller = build_controller(config)
    if no_delay:
        controller.sourcing_delay = 0
    llm = controller.extractor.llm

    result = _extract(controller, _read_jd(jd))
    if not as_json:
        _print_persona(result)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task("AI Agent is sourcing...", total=None)

        def on_progress(message: str) -> None:
            progress.update(task, description=message)

        run_closing(llm, controller.confirm_persona(on_progress=on_progress))

    state = controller.state
    if state.stage is not WizardStage.SHOWING_RESULTS:
        console.print(f"[red]{state.error}[/red]")
        raise typer.Exit(1)

    ranked = sorted(state.candidates, key=lambda c: c.match_score, reverse=True)
    for candidate in ranked[:shortlist_top]:
        controller.toggle_shortlist(candidate)

    if as_json:
        payload = [c.model_dump(by_alias=True) for c in state.candidates]
        typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))
        return

    _print_candidates(state.candidates, state.shortlist_ids)
    for c in state.shortlist:
        console.print(f"[yellow]*[/yellow] {c.name}: {c.linkedin_url}")

    usage = UsageLog.from_session(state, llm.get_token_summary())
    console.print(
        f"[dim]{usage.llm_calls} LLM calls, "
        f"{usage.total_input_tokens}/{usage.total_output_tokens} tokens, "
        f"~${usage.estimated_cost_usd:.4f}[/dim]"
    )


@app.command()
def ui(
    port: int = typer.Option(8501, "--port", help="Streamlit server port"),
) -> None:
    """Launch the Streamlit wizard."""
    app_path = Path(__file__).resolve().parent.parent.parent / "streamlit_app.py"
    if not app_path.exists():
        console.print(f"[red]Streamlit app not found: {app_path}[/red]")
        raise typer.Exit(1)
    raise typer.Exit(
        subprocess.call(
            [sys.executable, "-m", "streamlit", "run", str(app_path), "--server.port", str(port)]
        )
    )


def main() -> None:
    try:
        app()
    except TalentScoutError as exc:
        console.print(f"[red]{exc}[/red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
