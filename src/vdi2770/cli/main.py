"""
vdi2770 CLI
===========
Command-line interface for the vdi2770 validator.

Commands:
    validate     Validate a container archive (or an extracted folder)
    check-xml    Validate a single metadata XML file
    inspect-pdf  Show PDF/A level, encryption, text and preflight of a PDF
    pack         Pack a prepared folder into a container archive
    version      Show version information

Usage::

    vdi2770 validate delivery.zip --locale de
    vdi2770 validate delivery.zip --lenient --json-output
    vdi2770 check-xml VDI2770_Metadata.xml
    vdi2770 -v inspect-pdf VDI2770_Main.pdf

Exit codes: 0 passed, 1 errors found, 2 the input could not be processed.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .. import __version__
from ..config import load_settings
from ..container import ContainerValidator, Report, pack_container
from ..errors import ConfigurationError, MetadataError, PdfValidationError, Vdi2770Error
from ..logging_utils import configure_logging, level_from_verbosity
from ..metadata import XmlReader
from ..models.fault import FaultLevel, has_errors
from ..models.message import MessageLevel
from ..pdf import PdfInspector
from ..validator import validate_document

console = Console()

_LEVEL_COLORS = {
    "ERROR": "red",
    "WARN": "yellow",
    "WARNING": "yellow",
    "INFO": "blue",
    "INFORMATION": "blue",
}

_LEVELS = {"info": MessageLevel.INFO, "warn": MessageLevel.WARN, "error": MessageLevel.ERROR}


def _colored(level: str) -> str:
    color = _LEVEL_COLORS.get(level, "white")
    return f"[{color}]{level}[/{color}]"


@click.group()
@click.version_option(version=__version__, prog_name="vdi2770")
@click.option("-v", "--verbose", count=True, help="Log more (-v info, -vv debug)")
@click.option("--plain-log", is_flag=True, help="Plain log lines instead of rich output")
def cli(verbose: int, plain_log: bool) -> None:
    """
    vdi2770 – validator for VDI 2770 documentation containers.

    Checks metadata, nested containers and PDF/A renditions of
    manufacturer documentation packages.
    """
    configure_logging(level_from_verbosity(verbose), rich_output=not plain_log)


# ---------------------------------------------------------------------------
# validate
# ---------------------------------------------------------------------------


def _print_report(report: Report, depth: int = 0) -> None:
    status = "[bold red]FAIL[/bold red]" if report.has_errors(deep=True) else "[bold green]PASS[/bold green]"
    container_type = report.container_type.value if report.container_type else "—"
    prefix = "  " * depth

    t = Table(box=box.SIMPLE, title=f"{prefix}{report.file_name}  {status}", title_justify="left")
    t.add_column("Level", style="dim")
    t.add_column("Message")
    for m in report.visible_messages():
        t.add_row(_colored(m.level.value), m.text)
    t.caption = f"{prefix}type: {container_type}  |  sha256: {report.file_hash[:16]}…"
    console.print(t)

    for sub in report.sub_reports:
        _print_report(sub, depth + 1)


@cli.command()
@click.argument("container", type=click.Path(exists=True, path_type=Path))
@click.option("--lenient", is_flag=True, help="Case-insensitive vocabulary checks and type fallback")
@click.option("--locale", type=click.Choice(["en", "de"]), default=None, help="Message language")
@click.option("--config", "config_path", type=click.Path(exists=True, path_type=Path), default=None,
              help="YAML settings file")
@click.option("--json-output", is_flag=True, help="Output the report tree as JSON")
@click.option("--level", type=click.Choice(list(_LEVELS)), default="info", help="Lowest level shown")
def validate(
    container: Path,
    lenient: bool,
    locale: str | None,
    config_path: Path | None,
    json_output: bool,
    level: str,
) -> None:
    """Validate a VDI 2770 container archive or an extracted container folder."""
    try:
        settings = load_settings(config_path, locale=locale, strict=False if lenient else None)
    except ConfigurationError as e:
        console.print(f"[red]Configuration error: {e}[/red]")
        sys.exit(2)

    validator = ContainerValidator(settings, log_threshold=_LEVELS[level])
    try:
        if container.is_dir():
            report = validator.validate_folder(container)
        else:
            report = validator.validate(container)
    except Vdi2770Error as e:
        console.print(f"[red]Processing error: {e}[/red]")
        sys.exit(2)

    if json_output:
        click.echo(json.dumps(report.to_dict(), indent=2, ensure_ascii=False))
    else:
        console.print()
        errors = len(report.filter(MessageLevel.ERROR, deep=True))
        warnings = len(report.filter(MessageLevel.WARN, exact=True, deep=True))
        status_str = "[bold red]FAIL[/bold red]" if errors else "[bold green]PASS[/bold green]"
        console.print(Panel(
            f"[bold]{container.name}[/bold]\n"
            f"Status: {status_str}  |  "
            f"Errors: {errors}  |  Warnings: {warnings}  |  "
            f"Mode: {'strict' if settings.strict else 'lenient'}",
            title="VDI 2770 Validation",
            subtitle=" | ".join(filter(None, [settings.report_author, settings.report_logo])) or None,
            border_style=settings.report_color,
        ))
        _print_report(report)

    sys.exit(1 if report.has_errors(deep=True) else 0)


# ---------------------------------------------------------------------------
# check-xml
# ---------------------------------------------------------------------------


@cli.command("check-xml")
@click.argument("xml_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--lenient", is_flag=True)
@click.option("--locale", type=click.Choice(["en", "de"]), default="en")
@click.option("--json-output", is_flag=True)
def check_xml(xml_path: Path, lenient: bool, locale: str, json_output: bool) -> None:
    """Validate the metadata of a single VDI 2770 XML file."""
    try:
        document = XmlReader().read(xml_path)
    except MetadataError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(2)

    faults = validate_document(document, locale=locale, strict=not lenient)

    if json_output:
        output = {
            "file": str(xml_path),
            "main_document": document.is_main_document(),
            "passed": not has_errors(faults),
            "faults": [f.model_dump(mode="json", exclude_none=True) for f in faults],
        }
        click.echo(json.dumps(output, indent=2, ensure_ascii=False))
    else:
        console.print()
        status_str = "[bold red]FAIL[/bold red]" if has_errors(faults) else "[bold green]PASS[/bold green]"
        role = "main document" if document.is_main_document() else "document"
        console.print(Panel(
            f"[bold]{xml_path.name}[/bold] ({role})\n"
            f"Status: {status_str}  |  Faults: {len(faults)}",
            title="VDI 2770 Metadata",
            border_style="blue",
        ))
        if faults:
            t = Table(box=box.SIMPLE)
            t.add_column("Level")
            t.add_column("Entity")
            t.add_column("Properties", style="dim")
            t.add_column("Message")
            for f in faults:
                t.add_row(
                    _colored(f.level.value),
                    f.entity.value + (f"@{f.index}" if f.index is not None else ""),
                    ", ".join(p.value for p in f.properties),
                    f.message or f.type.value,
                )
            console.print(t)
        console.print()

    sys.exit(1 if any(f.level == FaultLevel.ERROR for f in faults) else 0)


# ---------------------------------------------------------------------------
# inspect-pdf
# ---------------------------------------------------------------------------


@cli.command("inspect-pdf")
@click.argument("pdf_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--locale", type=click.Choice(["en", "de"]), default="en")
@click.option("--json-output", is_flag=True)
def inspect_pdf(pdf_path: Path, locale: str, json_output: bool) -> None:
    """Show PDF/A level, encryption, text and preflight findings of a PDF file."""
    try:
        inspection = PdfInspector(locale).inspect(pdf_path)
    except PdfValidationError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(2)

    if json_output:
        output = {
            "file": str(pdf_path),
            "level": inspection.level,
            "encrypted": inspection.encrypted,
            "has_text": inspection.has_text,
            "error": inspection.error,
            "preflight": [{"level": m.level.value, "text": m.text} for m in inspection.preflight],
        }
        click.echo(json.dumps(output, indent=2, ensure_ascii=False))
        return

    console.print()
    console.print(Panel(
        f"[bold]{pdf_path.name}[/bold]\n"
        f"PDF/A: [cyan]{inspection.level or '—'}[/cyan]  |  "
        f"Encrypted: {'yes' if inspection.encrypted else 'no'}  |  "
        f"Text: {'yes' if inspection.has_text else 'no'}",
        title="PDF Inspection",
        border_style="cyan",
    ))
    if inspection.error:
        console.print(f"[yellow]{inspection.error}[/yellow]")
    for m in inspection.preflight:
        console.print(f"  {_colored(m.level.value)} {m.text}")
    console.print()


# ---------------------------------------------------------------------------
# pack
# ---------------------------------------------------------------------------


@cli.command()
@click.argument("folder", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.argument("target", type=click.Path(dir_okay=False, path_type=Path))
def pack(folder: Path, target: Path) -> None:
    """Pack a prepared container FOLDER into the ZIP file TARGET."""
    try:
        pack_container(folder, target)
    except Vdi2770Error as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(2)
    console.print(f"[green]✓[/green] Container written to [bold]{target}[/bold]")


# ---------------------------------------------------------------------------
# version info
# ---------------------------------------------------------------------------


@cli.command("version")
def show_version() -> None:
    """Show version information."""
    console.print(Panel(
        f"[bold cyan]vdi2770[/bold cyan] v{__version__}\n\n"
        "Validator for VDI 2770 manufacturer documentation containers\n"
        "Metadata: VDI 2770 Blatt 1:2020, classification VDI2770:2018\n"
        "PDF/A:    ISO 19005 parts 1-3",
        title="vdi2770",
        border_style="cyan",
    ))
