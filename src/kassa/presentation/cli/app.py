"""Kassa CLI application using Typer.

Offline statement tooling (format detection, preview, validation),
database setup and a launcher for the HTTP API.
"""

import asyncio
import logging
from pathlib import Path
from typing import Optional

import typer
import uvicorn
from rich.console import Console
from rich.table import Table

from kassa.application.dtos.banking import StatementPreview
from kassa.application.queries.banking import (
    DEFAULT_PREVIEW_ROWS,
    PreviewStatementQuery,
)
from kassa.domain.banking.exceptions import (
    InvalidAmountError,
    InvalidDateError,
    StatementStreamError,
)
from kassa.domain.banking.services import (
    detect_format,
    format_amount,
    parse_amount,
    parse_date_formats,
    preview_rows,
    resolve_mapping,
)
from kassa.domain.banking.value_objects import CSVColumnMapping
from kassa.infrastructure.persistence.sqlalchemy.init_db import (
    create_tables,
    display_url,
    drop_tables,
)
from kassa_config.settings import get_settings

app = typer.Typer(
    name="kassa",
    help="Kassa - bank statement import and reconciliation CLI",
    no_args_is_help=True,
)
console = Console()

statement_app = typer.Typer(
    name="statement",
    help="Inspect bank statement CSV files without importing them",
    no_args_is_help=True,
)
app.add_typer(statement_app)

db_app = typer.Typer(
    name="db",
    help="Database utilities",
    no_args_is_help=True,
)
app.add_typer(db_app)

FileArgument = typer.Argument(
    ...,
    exists=True,
    dir_okay=False,
    readable=True,
    help="Statement CSV file",
)
FormatOption = typer.Option(
    None,
    "--format",
    "-f",
    help="Layout tag (GENERIC, SWEDBANK_EE, SEB_EE, LHV_EE); detected if omitted",
)


@app.callback()
def main(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging",
    ),
) -> None:
    """Kassa command line."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _read_preview(
    path: Path,
    max_rows: int,
    statement_format: Optional[str],
    validate_all: bool,
) -> StatementPreview:
    query = PreviewStatementQuery(max_rows=max_rows)
    try:
        with path.open(encoding="utf-8-sig", newline="") as stream:
            return query.execute(
                stream,
                statement_format=statement_format,
                validate_all=validate_all,
            )
    except (OSError, StatementStreamError) as e:
        console.print(f"[red]Could not read {path.name}: {e}[/red]")
        raise typer.Exit(code=2) from e


def _day_first(date_format: str) -> Optional[bool]:
    day, month = date_format.find("%d"), date_format.find("%m")
    if day < 0 or month < 0:
        return None
    return day < month


def _display_row(row: list[str], mapping: CSVColumnMapping) -> list[str]:
    """Show date and amount cells in canonical form.

    Cells that do not parse are shown as found; the issues table says why.
    """
    cells = list(row)
    if mapping.date_column < len(cells):
        try:
            value = parse_date_formats(
                cells[mapping.date_column],
                day_first=_day_first(mapping.date_format),
            )
        except InvalidDateError:
            value = None
        if value is not None:
            cells[mapping.date_column] = value.isoformat()
    if mapping.amount_column < len(cells):
        try:
            amount = parse_amount(
                cells[mapping.amount_column],
                mapping.decimal_separator,
                mapping.thousands_separator,
            )
        except InvalidAmountError:
            amount = None
        if amount is not None:
            cells[mapping.amount_column] = format_amount(amount)
    return cells


def _print_rows(preview: StatementPreview) -> None:
    width = max((len(row) for row in preview.rows), default=0)
    table = Table(title="Rows", show_lines=False)
    table.add_column("#", justify="right", style="dim")
    header = preview.header
    for index in range(width):
        label = header[index] if index < len(header) else ""
        table.add_column(f"{index}: {label}" if label else str(index))
    for number, row in enumerate(preview.rows, start=1):
        if number > preview.mapping.header_rows:
            row = _display_row(row, preview.mapping)
        table.add_row(str(number), *row, *([""] * (width - len(row))))
    console.print(table)


def _print_issues(preview: StatementPreview) -> None:
    if not preview.issues:
        console.print("[green]All rows are valid.[/green]")
        return

    table = Table(title=f"Row errors ({len(preview.issues)})")
    table.add_column("Row", justify="right")
    table.add_column("Field")
    table.add_column("Column", justify="right")
    table.add_column("Error", style="red")
    for issue in preview.issues:
        table.add_row(
            str(issue.row_number),
            issue.field,
            "" if issue.column is None else str(issue.column),
            issue.message,
        )
    console.print(table)


@statement_app.command("detect")
def detect_statement(path: Path = FileArgument) -> None:
    """Detect the layout of a statement from its header row."""
    try:
        with path.open(encoding="utf-8-sig", newline="") as stream:
            rows = preview_rows(stream, 1)
    except (OSError, StatementStreamError) as e:
        console.print(f"[red]Could not read {path.name}: {e}[/red]")
        raise typer.Exit(code=2) from e

    header = rows[0] if rows else []
    detected = detect_format(header)
    mapping = resolve_mapping(header)

    console.print(f"[bold]{path.name}[/bold]: [cyan]{detected.value}[/cyan]")
    table = Table(title="Column mapping", show_header=False)
    table.add_column("Setting", style="dim")
    table.add_column("Value")
    for name, value in mapping.model_dump(mode="json").items():
        table.add_row(name, "-" if value is None else str(value))
    console.print(table)


@statement_app.command("preview")
def preview_statement(
    path: Path = FileArgument,
    rows: int = typer.Option(
        DEFAULT_PREVIEW_ROWS,
        "--rows",
        "-n",
        min=1,
        max=1000,
        help="Number of records to show",
    ),
    statement_format: Optional[str] = FormatOption,
) -> None:
    """Show the first records of a statement and the errors among them."""
    preview = _read_preview(path, rows, statement_format, validate_all=False)
    console.print(
        f"[bold]{path.name}[/bold]: detected [cyan]"
        f"{preview.detected_format.value}[/cyan], importing as "
        f"[cyan]{preview.mapping.format.value}[/cyan]"
    )
    _print_rows(preview)
    _print_issues(preview)


@statement_app.command("validate")
def validate_statement(
    path: Path = FileArgument,
    statement_format: Optional[str] = FormatOption,
) -> None:
    """Validate every row of a statement; exits 1 when any row fails."""
    preview = _read_preview(
        path,
        DEFAULT_PREVIEW_ROWS,
        statement_format,
        validate_all=True,
    )
    console.print(
        f"[bold]{path.name}[/bold] as [cyan]{preview.mapping.format.value}[/cyan]"
    )
    _print_issues(preview)
    if not preview.is_valid:
        raise typer.Exit(code=1)


@db_app.command("init")
def init_database(
    drop: bool = typer.Option(
        False,
        "--drop",
        help="Drop all tables first (destroys data)",
    ),
) -> None:
    """Create missing database tables (idempotent)."""
    database_url = get_settings().database_url
    if database_url.startswith("sqlite") and ":memory:" not in database_url:
        Path(database_url.split("///")[-1]).parent.mkdir(parents=True, exist_ok=True)

    if drop:
        typer.confirm(
            f"Drop all tables in {display_url(database_url)}?",
            abort=True,
        )
        asyncio.run(drop_tables(database_url))
        console.print("[yellow]Tables dropped.[/yellow]")

    asyncio.run(create_tables(database_url))
    console.print(
        f"[green]Database ready:[/green] {display_url(database_url)}"
    )


@app.command("serve")
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address"),
    port: Optional[int] = typer.Option(None, "--port", help="Bind port"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
) -> None:
    """Run the HTTP API with uvicorn."""
    settings = get_settings()
    host = host or settings.api_host
    port = port or settings.api_port

    console.print(f"[bold]Kassa API[/bold] on http://{host}:{port}")
    uvicorn.run(
        "kassa.presentation.api.app:app",
        host=host,
        port=port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()
