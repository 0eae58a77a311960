"""Command-line entry points for building article corpora."""

import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich import print as rprint
from rich import print_json
from rich.markup import escape
from rich.logging import RichHandler

from .config import get_settings
from .errors import CorpusError, FormatError, IssueReport
from .loader import read_paragraphs
from .models import RawArticle
from .output import write_report, write_table
from .pipeline import run_pipeline
from .text import build_record, extract_body

app = typer.Typer(
    help="Turn a directory of exported newspaper articles into a corpus table."
)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
        force=True,
    )


def _resolve_outlets(cli_outlets: Optional[List[str]], configured: List[str]) -> List[str]:
    return list(cli_outlets) if cli_outlets else list(configured)


@app.command("build")
def build_command(
    input_dir: Optional[Path] = typer.Argument(
        None, help="Directory of article files (defaults to NEWS_CORPUS_INPUT_DIR)."
    ),
    locale: Optional[str] = typer.Option(
        None, "--locale", "-l", help="Month-name locale: english, dutch or french."
    ),
    extension: Optional[str] = typer.Option(
        None, "--ext", "-e", help="File extension filter, e.g. .rtf or .docx."
    ),
    french_outlet: Optional[List[str]] = typer.Option(
        None,
        "--french-outlet",
        "-f",
        help="Outlet identifier tagged as French (repeatable), e.g. Le_Soir.",
    ),
    workers: Optional[int] = typer.Option(
        None, "--workers", "-w", help="Threads for per-article extraction."
    ),
    out: Optional[Path] = typer.Option(
        None, "--out", "-o", help="Write the table to .csv, .json or .parquet."
    ),
    report: Optional[Path] = typer.Option(
        None, "--report", help="Write recoverable issues to this JSON file."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log stage summaries."),
):
    """
    Load, extract and assemble a corpus table from INPUT_DIR.
    """
    _configure_logging(verbose)
    settings = get_settings()

    source_dir = input_dir or (Path(settings.input_dir) if settings.input_dir else None)
    if source_dir is None:
        raise typer.BadParameter("Provide INPUT_DIR or set NEWS_CORPUS_INPUT_DIR.")
    max_workers = workers if workers is not None else settings.max_workers
    if max_workers < 1:
        raise typer.BadParameter("workers must be >= 1.")
    outlets = _resolve_outlets(french_outlet, settings.french_outlets)
    if not outlets:
        rprint("[yellow]No French outlets given; every row will be tagged 'nl'.[/yellow]")

    try:
        result = run_pipeline(
            source_dir,
            french_outlets=outlets,
            locale=(locale or settings.locale).lower(),
            extension=extension or settings.extension,
            max_workers=max_workers,
            missing_source=settings.missing_source_column,
        )
    except (CorpusError, ValueError) as exc:
        rprint(f"[red]Failed: {escape(str(exc))}[/red]")
        raise typer.Exit(code=1)

    for issue in result.issues:
        where = f"#{issue.position}" if issue.position is not None else "-"
        rprint(f"[yellow]{issue.kind} {issue.path} ({where}): {escape(issue.reason)}[/yellow]")

    destination = out or (Path(settings.output_path) if settings.output_path else None)
    if destination:
        try:
            write_table(result.table, destination)
        except (CorpusError, ValueError) as exc:
            rprint(f"[red]Failed to write {destination}: {escape(str(exc))}[/red]")
            raise typer.Exit(code=1)
        rprint(f"[cyan]Wrote corpus to {destination}[/cyan]")
    else:
        rprint(escape(result.table.to_string(index=False)))

    if report:
        write_report(result.issues, report)
        rprint(f"[cyan]Wrote issue report to {report}[/cyan]")

    rprint(
        f"[green]Corpus complete: {len(result.table)} rows, "
        f"{len(result.issues)} issue(s).[/green]"
    )


@app.command("inspect")
def inspect_command(
    path: Path = typer.Argument(..., help="A single exported article file."),
    locale: Optional[str] = typer.Option(
        None, "--locale", "-l", help="Month-name locale: english, dutch or french."
    ),
):
    """
    Show how one article file is split and what gets extracted from it.
    """
    settings = get_settings()
    try:
        paragraphs = read_paragraphs(path)
    except FormatError as exc:
        rprint(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(code=1)

    article = RawArticle(path=path, position=1, paragraphs=tuple(paragraphs))
    issues = IssueReport()
    try:
        record = build_record(article, (locale or settings.locale).lower(), issues)
    except ValueError as exc:
        rprint(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(code=1)

    for idx, paragraph in enumerate(paragraphs):
        rprint(f"[cyan]{idx:>3}[/cyan] {escape(paragraph)}")
    rprint(f"[cyan]--- body ({len(extract_body(article))} chars) ---[/cyan]")
    payload = record.model_dump(mode="json")
    payload["issues"] = [f"{i.kind}: {i.reason}" for i in issues]
    print_json(data=payload)


def main():
    app()


if __name__ == "__main__":
    main()
