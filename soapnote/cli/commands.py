"""CLI commands for SoapNote."""

import json
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from soapnote.config import get_settings

app = typer.Typer(
    name="soapnote",
    help="Pediatric OT SOAP note composer with CPT billing-time reconciliation",
    add_completion=False,
)
console = Console()


def _read_text_file(path: Path, what: str) -> str:
    if not path.exists():
        console.print(f"[red]{what} not found: {path}[/red]")
        raise typer.Exit(1)
    return path.read_text(encoding="utf-8")


@app.command()
def interpret(
    lines: Optional[list[str]] = typer.Argument(None, help="CPT lines, e.g. '97530 x 2'"),
    cpt_file: Optional[Path] = typer.Option(None, "--file", "-f", help="Text file with one CPT entry per line"),
    duration: Optional[int] = typer.Option(
        None, "--duration", "-d", min=0, help="Documented session minutes (used when nothing parses)"
    ),
    output_json: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """Interpret CPT entries and show billed minutes and units."""
    from soapnote.billing import parse_cpt_text, summarize_billing

    text = "\n".join(lines or [])
    if cpt_file:
        text = "\n".join(filter(None, [text, _read_text_file(cpt_file, "CPT file")]))

    summary = summarize_billing(parse_cpt_text(text), fallback_minutes=duration)

    if output_json:
        typer.echo(summary.model_dump_json(indent=2))
        return

    table = Table(title="CPT Entries")
    table.add_column("Code")
    table.add_column("Units", justify="right")
    table.add_column("Minutes", justify="right")
    table.add_column("Input")
    for entry in summary.entries:
        code = escape(entry.code) if entry.is_parsed else "[yellow]unparsed[/yellow]"
        table.add_row(code, str(entry.units), str(entry.minutes), escape(entry.raw))
    console.print(table)
    console.print(summary.status_line(), markup=False)


@app.command()
def generate(
    form_file: Optional[Path] = typer.Option(None, "--form", "-F", help="JSON file with the note form"),
    child_name: Optional[str] = typer.Option(None, "--child", "-c", help="Child's name"),
    date: Optional[str] = typer.Option(None, "--date", help="Session date"),
    therapist: Optional[str] = typer.Option(None, "--therapist", "-t", help="Therapist name"),
    duration: Optional[int] = typer.Option(None, "--duration", "-d", min=0, help="Documented session minutes"),
    icd: Optional[list[str]] = typer.Option(None, "--icd", help="ICD-10 code(s); repeat or comma-separate"),
    cpt: Optional[list[str]] = typer.Option(None, "--cpt", help="CPT line, e.g. '97530 x 2'; repeatable"),
    cpt_file: Optional[Path] = typer.Option(None, "--cpt-file", help="Text file with one CPT entry per line"),
    subjective: Optional[str] = typer.Option(None, "--subjective", "-S", help="Subjective narrative"),
    objective: Optional[str] = typer.Option(None, "--objective", "-O", help="Objective narrative"),
    assessment: Optional[str] = typer.Option(None, "--assessment", "-A", help="Assessment narrative"),
    plan: Optional[str] = typer.Option(None, "--plan", "-P", help="Plan narrative"),
    pdf: bool = typer.Option(False, "--pdf", help="Write the note as PDF"),
    text: bool = typer.Option(False, "--text", help="Write the note as a text file"),
    out_dir: Path = typer.Option(Path("."), "--out-dir", "-o", help="Directory for written files"),
    output_json: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """Compose a SOAP note from form fields and optionally export it."""
    from soapnote.billing import reconcile_duration
    from soapnote.compose import compose_note
    from soapnote.export import get_output
    from soapnote.models import NoteForm

    data: dict = {}
    if form_file:
        try:
            data = json.loads(_read_text_file(form_file, "Form file"))
        except json.JSONDecodeError as e:
            console.print(f"[red]Invalid form file {form_file}: {e}[/red]")
            raise typer.Exit(1)

    overrides = {
        "child_name": child_name,
        "date": date,
        "therapist": therapist,
        "duration": duration,
        "subjective": subjective,
        "objective": objective,
        "assessment": assessment,
        "plan": plan,
    }
    data.update({k: v for k, v in overrides.items() if v is not None})
    if icd:
        data["icd"] = "\n".join(icd)
    if cpt or cpt_file:
        cpt_lines = list(cpt or [])
        if cpt_file:
            cpt_lines.append(_read_text_file(cpt_file, "CPT file"))
        data["cpt"] = "\n".join(cpt_lines)
        data.pop("cpt_items", None)

    try:
        form = NoteForm.model_validate(data)
    except ValidationError as e:
        console.print(f"[red]Invalid note form: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    note = compose_note(form)
    billing = note.draft.billing
    reconciled = reconcile_duration(form.duration, billing)

    if output_json:
        typer.echo(
            json.dumps(
                {
                    "note": note.text,
                    "cpt_entries": [e.model_dump() for e in billing.entries],
                    "total_minutes": billing.total_minutes,
                    "total_units": billing.total_units,
                    "icd_pretty": note.draft.icd_pretty,
                    "status": billing.status_line(),
                    "duration": reconciled,
                },
                indent=2,
            )
        )
    else:
        console.print(Panel(Text(note.text), title="SOAP Note"))
        console.print(billing.status_line(), markup=False)
        if reconciled != form.duration:
            console.print(f"Session duration set to {reconciled} min")

    formats = [kind for kind, wanted in (("text", text), ("pdf", pdf)) if wanted]
    if formats:
        out_dir.mkdir(parents=True, exist_ok=True)
    for kind in formats:
        output = get_output(kind)
        path = out_dir / output.filename(note.draft)
        path.write_bytes(output.render(note))
        if not output_json:
            console.print(f"[green]Wrote {escape(str(path))}[/green]")


@app.command()
def template():
    """Print a cleared note form as JSON (use with generate --form)."""
    from soapnote.models import NoteForm

    typer.echo(NoteForm.blank().model_dump_json(indent=2))


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", "-h", help="Host to bind"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Port to bind"),
    reload: bool = typer.Option(False, "--reload", help="Enable auto-reload"),
):
    """Start the REST API server."""
    import uvicorn

    settings = get_settings()
    host = host or settings.api_host
    port = port or settings.api_port

    console.print(f"Starting SoapNote API server on {host}:{port}")
    uvicorn.run(
        "soapnote.api.app:create_app",
        host=host,
        port=port,
        reload=reload,
        factory=True,
    )


@app.command()
def version():
    """Show version information."""
    from soapnote import __version__

    console.print(f"SoapNote v{__version__}")
