"""CLI for meditriage: analyze / view / speak-text / history / export commands."""

from __future__ import annotations

import asyncio
import mimetypes
from pathlib import Path
from typing import List, NoReturn, Optional

import typer
from rich.console import Console
from rich.markdown import Markdown
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from meditriage.client.litellm_client import LiteLLMAnalysisClient
from meditriage.core.config import AppSettings
from meditriage.core.logging_config import setup_logging
from meditriage.exceptions import ExportError
from meditriage.formatters.json_formatter import JSONFormatter
from meditriage.history.store import HistoryStore
from meditriage.models import (
    AnalysisRecord,
    AnalysisRequest,
    Language,
    MediaPayload,
    PatientInput,
    Sex,
    TriageLevel,
)
from meditriage.parsing.interpreter import AnalysisView, interpret
from meditriage.persistence import create_backend
from meditriage.services.analysis_service import AnalysisService

app = typer.Typer(name="meditriage", help="AI health triage: analyze symptoms, review history, export reports")
history_app = typer.Typer(help="Browse saved analyses")
app.add_typer(history_app, name="history")
console = Console()

_TRIAGE_STYLES = {
    TriageLevel.EMERGENCY: "bold red",
    TriageLevel.URGENT: "bold dark_orange",
    TriageLevel.MILD: "bold green",
    TriageLevel.UNKNOWN: "bold cyan",
}


def _build_settings(
    model: Optional[str] = None,
    api_key: Optional[str] = None,
    verbose: bool = False,
) -> AppSettings:
    """Build settings, overriding env defaults with CLI flags."""
    settings = AppSettings()
    llm_overrides: dict = {}
    if model:
        llm_overrides["model"] = model
    if api_key:
        llm_overrides["api_key"] = api_key
    if llm_overrides:
        settings.llm = settings.llm.model_copy(update=llm_overrides)
    if verbose:
        settings.observability = settings.observability.model_copy(update={"log_level": "DEBUG"})
    setup_logging(settings.observability)
    return settings


def _open_history(settings: AppSettings) -> HistoryStore:
    return HistoryStore(
        create_backend(settings.history),
        slot=settings.history.slot,
        max_records=settings.history.max_records,
    )


def _load_payload(path: Path) -> MediaPayload:
    mime_type, _ = mimetypes.guess_type(path.name)
    return MediaPayload(
        data=path.read_bytes(),
        mime_type=mime_type or "application/octet-stream",
        filename=path.name,
    )


def _fail(message: str) -> NoReturn:
    console.print(f"[red]{escape(message)}[/red]")
    raise typer.Exit(code=1)


def _find_record(store: HistoryStore, record_id: str) -> AnalysisRecord:
    record = store.get(record_id)
    if record is None:
        _fail(f"No saved analysis matches '{record_id}'")
    return record


def _print_quick_view(view: AnalysisView) -> None:
    style = _TRIAGE_STYLES[view.triage]
    body = f"[{style}]{view.triage.headline}[/{style}]\n{view.triage.guidance}\n\n{escape(view.snippet)}"
    if view.actions:
        body += "\n\n[bold]Next steps[/bold]\n" + "\n".join(f"  • {escape(a)}" for a in view.actions)
    console.print(Panel(body, title="Quick View", border_style=style.split()[-1]))


def _print_outline(view: AnalysisView) -> None:
    for section in view.outline:
        console.rule(f"[bold]{escape(section.title)}[/bold]")
        console.print(Markdown("\n".join(section.content)))


@app.command()
def analyze(
    age: str = typer.Option("", "--age", help="Patient age"),
    sex: Sex = typer.Option(Sex.MALE, "--sex", case_sensitive=False),
    language: Language = typer.Option(Language.AUTO, "--language", case_sensitive=False),
    duration: str = typer.Option("", "--duration", help="How long symptoms have lasted"),
    conditions: str = typer.Option("", "--conditions", help="Existing conditions"),
    medications: str = typer.Option("", "--medications", help="Current medications"),
    symptoms: str = typer.Option("", "--symptoms", help="Symptom description"),
    image: Optional[List[Path]] = typer.Option(
        None, "--image", exists=True, dir_okay=False, help="Photo of the affected area (repeatable)"
    ),
    report: Optional[Path] = typer.Option(
        None, "--report", exists=True, dir_okay=False, help="Lab report or prescription (PDF/image)"
    ),
    audio: Optional[Path] = typer.Option(
        None, "--audio", exists=True, dir_okay=False, help="Voice recording describing symptoms"
    ),
    ayurveda: bool = typer.Option(False, "--ayurveda", help="Include an Ayurvedic perspective"),
    model: Optional[str] = typer.Option(None, "--model", help="LiteLLM model id"),
    api_key: Optional[str] = typer.Option(None, "--api-key", help="Provider API key"),
    full: bool = typer.Option(False, "--full", help="Print every section after the quick view"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Analyze symptoms and save the result to history."""
    settings = _build_settings(model, api_key, verbose)
    request = AnalysisRequest(
        patient=PatientInput(
            age=age,
            sex=sex,
            language=language,
            duration=duration,
            conditions=conditions,
            medications=medications,
            symptoms=symptoms,
            include_ayurveda=ayurveda,
        ),
        images=[_load_payload(p) for p in image or []],
        document=_load_payload(report) if report else None,
        audio=_load_payload(audio) if audio else None,
    )
    service = AnalysisService(LiteLLMAnalysisClient(settings.llm), _open_history(settings))

    with console.status("Analyzing..."):
        outcome = asyncio.run(service.run(request))

    if not outcome.ok:
        _fail(outcome.error or "Something went wrong. Please try again.")

    _print_quick_view(outcome.view)
    if full:
        _print_outline(outcome.view)
    console.print(f"[green]Saved analysis {outcome.record.id}[/green]")


@app.command()
def view(
    markdown_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Saved markdown response"),
    outline: bool = typer.Option(True, "--outline/--no-outline", help="Print the section outline"),
) -> None:
    """Show the quick view of a saved AI markdown response."""
    result = interpret(markdown_file.read_text(encoding="utf-8"))
    _print_quick_view(result)
    if outline:
        _print_outline(result)


@app.command("speak-text")
def speak_text(
    markdown_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Saved markdown response"),
    language: Language = typer.Option(Language.AUTO, "--language", case_sensitive=False),
) -> None:
    """Print the narration text and the language tag it would be spoken in."""
    result = interpret(markdown_file.read_text(encoding="utf-8"))
    console.print(f"[dim]language: {language.speech_tag}[/dim]")
    console.print(result.speech_text, soft_wrap=True, markup=False)


@history_app.command("list")
def history_list(
    triage: Optional[TriageLevel] = typer.Option(None, "--triage", case_sensitive=False),
    search: Optional[str] = typer.Option(None, "--search", help="Match conditions, summary or age"),
) -> None:
    """List saved analyses, newest first."""
    settings = _build_settings()
    records = _open_history(settings).filter(triage=triage, search=search)
    if not records:
        console.print("No patient records found matching your criteria.")
        return

    table = Table(title=f"Analysis History ({len(records)})")
    table.add_column("ID", style="cyan")
    table.add_column("Created")
    table.add_column("Patient")
    table.add_column("Triage")
    table.add_column("Summary", max_width=60)
    for record in records:
        level = TriageLevel.from_label(record.triage_level)
        table.add_row(
            record.id[:8],
            record.created_at[:16].replace("T", " "),
            f"{record.patient_age or 'N/A'} / {record.patient_sex or 'N/A'}",
            f"[{_TRIAGE_STYLES[level]}]{record.triage_level}[/]",
            escape(record.summary_quick),
        )
    console.print(table)


@history_app.command("show")
def history_show(
    record_id: str = typer.Argument(..., help="Record id or unique prefix"),
) -> None:
    """Show one saved analysis in full."""
    settings = _build_settings()
    record = _find_record(_open_history(settings), record_id)
    console.print(f"[bold]{record.id}[/bold]  {record.created_at}")
    console.print(f"Triage: {record.triage_level}")
    _print_quick_view(interpret(record.markdown))
    console.print(Markdown(record.markdown))


@app.command()
def export(
    record_id: str = typer.Argument(..., help="Record id or unique prefix"),
    fmt: str = typer.Option("pdf", "--format", help="pdf or json"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output file path"),
) -> None:
    """Export a saved analysis as a PDF report or JSON."""
    settings = _build_settings()
    record = _find_record(_open_history(settings), record_id)

    if fmt == "pdf":
        from meditriage.formatters.pdf_formatter import ReportPDFFormatter, export_filename

        formatter = ReportPDFFormatter(settings.pdf)
        target = output or Path(export_filename(record))
    elif fmt == "json":
        formatter = JSONFormatter()
        target = output or Path(f"MediAI-Report-{record.id[:8]}.json")
    else:
        raise typer.BadParameter(f"Unsupported format '{fmt}'; use pdf or json", param_hint="--format")

    try:
        formatter.format_to_file(record, target)
    except ExportError as e:
        _fail(f"Failed to generate PDF. {e}" if fmt == "pdf" else str(e))
    console.print(f"[green]Report saved to {target}[/green]")


if __name__ == "__main__":
    app()
