#!/usr/bin/env python3
"""
Resume Rendering CLI

Lays out markdown-like resume text and writes it to PDF using the layout and
rendering contexts.

Commands:
    render   - Render a resume text file to PDF
    blocks   - Show how each line was classified
    preview  - Write an HTML preview of the classified resume
    validate - Check a written PDF against the layout of its source
    events   - Show recent pipeline events

Examples:\n

    render_resume.py render resume.md                          # Render to outs/results/<date>/

    render_resume.py render resume.md -p spacing_compact       # Apply a layout preset

    render_resume.py render resume.md --validate               # Render and validate

    render_resume.py blocks resume.md --markdown               # Canonical markdown form

    render_resume.py validate resume.md resume_modified.pdf    # Validate an existing PDF
"""

from pathlib import Path
from typing import List, Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from folio.contexts.layout import FolioError, normalize_resume, to_markdown
from folio.contexts.layout.config_resolver import resolve_settings
from folio.contexts.rendering import (
    PreviewRenderer,
    convert_resume,
    render_resume_pdf,
    validate_document,
)
from folio.utils.event_logging import get_recent_events
from folio.utils.timestamp import format_timestamp

load_dotenv()


def display_path(path: Path) -> str:
    """Return path relative to the working directory for cleaner display."""
    try:
        return str(Path(path).resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


def read_source(source: Path) -> str:
    if not source.exists():
        typer.secho(f"Error: Resume not found: {source}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    return source.read_text(encoding="utf-8")


app = typer.Typer(
    help="Lay out resume text and render it to PDF",
    add_completion=False,
    invoke_without_command=True,
)

SourceArgument = Annotated[
    Path,
    typer.Argument(help="Resume text file (markdown-like, UTF-8)"),
]

PresetOption = Annotated[
    Optional[List[str]],
    typer.Option(
        "--preset",
        "-p",
        help="Layout preset to apply (repeatable, later presets win), e.g. spacing_compact",
    ),
]


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@app.command("render")
def render_command(
    source: SourceArgument,
    output_dir: Annotated[
        Optional[Path],
        typer.Option(
            "--output-dir",
            "-o",
            help="Directory for the PDF (default: RESULTS_PATH/<date>)",
        ),
    ] = None,
    original_name: Annotated[
        Optional[str],
        typer.Option(
            "--name",
            "-n",
            help="Original upload name used to derive the PDF name (default: source file name)",
        ),
    ] = None,
    presets: PresetOption = None,
    validate: Annotated[
        bool,
        typer.Option(
            "--validate",
            "-v",
            help="Re-read the written PDF and check page placement of every section",
        ),
    ] = False,
):
    """
    Render a resume text file to PDF.

    Examples:\n

        $ render_resume.py render resume.md

        $ render_resume.py render resume.md -o out/ -p margins_narrow -p spacing_compact

        $ render_resume.py render upload.txt --name "Jane Doe.docx"
    """
    typer.secho(f"\nRendering: {source}", fg=typer.colors.BLUE, bold=True)
    if presets:
        typer.echo(f"Presets: {', '.join(presets)}")
    typer.echo("")

    try:
        result = render_resume_pdf(
            source_path=source,
            output_dir=output_dir,
            original_filename=original_name,
            preset_names=presets,
            validate=validate,
        )
    except (FileNotFoundError, ValueError, FolioError) as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.echo("")
    typer.secho("✓ Rendering succeeded", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  Pages: {result.page_count}")
    typer.echo(f"  PDF: {display_path(result.pdf_path)}")
    if result.discarded_lines:
        typer.echo(f"  Discarded lines: {result.discarded_lines}")

    exit_code = 0
    if result.validation is not None:
        if result.validation.is_valid:
            typer.secho("✓ Validation passed", fg=typer.colors.GREEN, bold=True)
        else:
            typer.secho("✗ Validation failed", fg=typer.colors.RED, bold=True)
            for issue in result.validation.issues:
                typer.secho(f"  - {issue}", fg=typer.colors.RED)
            exit_code = 1

    typer.echo(f"  Log: {display_path(result.log_dir / 'render.log')}")
    typer.echo("")
    raise typer.Exit(code=exit_code)


@app.command("blocks")
def blocks_command(
    source: SourceArgument,
    markdown: Annotated[
        bool,
        typer.Option(
            "--markdown",
            "-m",
            help="Print the canonical markdown form instead of one block per line",
        ),
    ] = False,
):
    """
    Show how each line of a resume was classified.

    Examples:\n

        $ render_resume.py blocks resume.md

        $ render_resume.py blocks resume.md --markdown > canonical.md
    """
    result = normalize_resume(read_source(source))

    if markdown:
        typer.echo(to_markdown(result.blocks))
        raise typer.Exit()

    width = max((len(block.kind) for block in result.blocks), default=0)
    for block in result.blocks:
        typer.echo(f"{block.kind:<{width}}  {block.text_content}")

    typer.echo("")
    typer.secho(
        f"{len(result.blocks)} blocks, {result.discarded_lines} discarded lines",
        fg=typer.colors.BLUE,
    )


@app.command("preview")
def preview_command(
    source: SourceArgument,
    output: Annotated[
        Optional[Path],
        typer.Option(
            "--output",
            "-o",
            help="HTML file to write (default: next to the source, .html suffix)",
        ),
    ] = None,
    presets: PresetOption = None,
):
    """
    Write an HTML preview of the classified resume.

    Examples:\n

        $ render_resume.py preview resume.md

        $ render_resume.py preview resume.md -o /tmp/preview.html -p type_large
    """
    text = read_source(source)
    try:
        settings = resolve_settings(presets)
    except ValueError as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    html = PreviewRenderer(settings).render(normalize_resume(text).blocks)
    output = output or source.with_suffix(".html")
    output.write_text(html, encoding="utf-8")
    typer.secho(f"✓ Preview written to {display_path(output)}", fg=typer.colors.GREEN, bold=True)


@app.command("validate")
def validate_command(
    source: SourceArgument,
    pdf_path: Annotated[
        Path,
        typer.Argument(help="PDF previously rendered from SOURCE"),
    ],
    presets: PresetOption = None,
):
    """
    Validate a written PDF against the layout of its source.

    The source is laid out again (with the same presets) and every section
    header is looked up on the page it was laid out on.

    Examples:\n

        $ render_resume.py validate resume.md outs/results/2025-11-14/resume_modified.pdf
    """
    typer.secho(f"\nValidating: {pdf_path}", fg=typer.colors.BLUE, bold=True)
    typer.echo("")

    text = read_source(source)
    try:
        conversion = convert_resume(
            text, original_filename=source.name, settings=resolve_settings(presets)
        )
        result = validate_document(conversion.blocks, conversion.document, pdf_path)
    except (FileNotFoundError, ValueError, FolioError) as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    if result.is_valid:
        typer.secho("✓ Validation passed", fg=typer.colors.GREEN, bold=True)
        typer.echo(f"  Page count: {result.page_count}")
    else:
        typer.secho("✗ Validation failed", fg=typer.colors.RED, bold=True)
        typer.echo(f"  Page count: {result.page_count}")
        typer.echo(f"  Diagnostic issues: {len(result.issues)}")
        typer.echo(result.feedback)
    typer.echo("")

    raise typer.Exit(code=0 if result.is_valid else 1)


@app.command("events")
def events_command(
    n: Annotated[int, typer.Option("--num", "-n", help="Number of recent events to show")] = 10,
    document: Annotated[
        Optional[str],
        typer.Option("--document", "-d", help="Filter to events for this PDF name"),
    ] = None,
    event_type: Annotated[
        Optional[str],
        typer.Option("--event-type", "-e", help="Filter to events of this type"),
    ] = None,
    relative: Annotated[
        bool,
        typer.Option("--relative", "-r", help="Show relative times (e.g. '2h ago')"),
    ] = False,
):
    """
    Show recent render and validation events from the pipeline log.

    Examples:\n

        $ render_resume.py events                          # Last 10 events

        $ render_resume.py events -e render_failed -r      # Recent failures, relative times

        $ render_resume.py events -d jane_doe_modified.pdf
    """
    events = get_recent_events(n=n, document_name=document, event_type=event_type)
    if not events:
        typer.secho("No matching events found.", fg=typer.colors.YELLOW)
        raise typer.Exit()

    colors = {
        "render_completed": typer.colors.GREEN,
        "render_failed": typer.colors.RED,
        "validation_completed": typer.colors.BLUE,
    }
    for event in events:
        stamp = format_timestamp(event.get("timestamp", ""), relative=relative)
        event_name = event.get("event_type", "?")
        typer.echo(f"{stamp}  ", nl=False)
        typer.secho(f"{event_name:<21}", fg=colors.get(event_name), nl=False)
        typer.echo(f" {event.get('document_name', '')}")


if __name__ == "__main__":
    app()
