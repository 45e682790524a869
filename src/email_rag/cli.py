"""
Command-line interface for the email RAG pipeline.

Reads email records exported by the MSG reader (JSON object or array),
runs the pipeline and writes the flattened search documents as JSON.
"""

import json
from pathlib import Path
from typing import Any, Optional

import typer
from pydantic import ValidationError

from .config import Settings
from .exceptions import ConfigurationError
from .logging_config import configure_logging
from .models.input_models import EmailRecord
from .pipeline import EmailContentPipeline
from .search.export import documents_to_json, write_documents

app = typer.Typer(
    help="Clean, chunk and flatten emails into search index documents.",
    no_args_is_help=True,
    add_completion=False,
)


def _load_records(path: Path) -> list[Any]:
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    return data if isinstance(data, list) else [data]


def _build_settings(**overrides: Any) -> Settings:
    return Settings(**{key: value for key, value in overrides.items() if value is not None})


@app.command()
def process(
    input_path: Path = typer.Argument(..., exists=True, dir_okay=False, help="EmailRecord JSON file"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write documents here instead of stdout"),
    chunk_size: Optional[int] = typer.Option(None, "--chunk-size", help="Chunk size in characters"),
    overlap: Optional[int] = typer.Option(None, "--overlap", help="Chunk overlap in characters"),
    workers: Optional[int] = typer.Option(None, "--workers", help="Emails processed in parallel"),
    keep_signatures: bool = typer.Option(False, "--keep-signatures", help="Skip signature stripping"),
    log_level: str = typer.Option("WARNING", "--log-level", help="Logging level"),
):
    """Process email records into search documents."""
    settings = _build_settings(
        CHUNK_SIZE=chunk_size,
        CHUNK_OVERLAP=overlap,
        BATCH_MAX_WORKERS=workers,
        REMOVE_SIGNATURES=False if keep_signatures else None,
        LOG_LEVEL=log_level,
    )
    configure_logging(settings.LOG_LEVEL, settings.ENVIRONMENT)

    try:
        pipeline = EmailContentPipeline(settings)
    except ConfigurationError as e:
        typer.echo(f"Invalid configuration: {e}", err=True)
        raise typer.Exit(code=2)

    records: list[EmailRecord] = []
    invalid = 0
    for index, raw in enumerate(_load_records(input_path)):
        try:
            records.append(EmailRecord.model_validate(raw))
        except ValidationError as e:
            invalid += 1
            typer.echo(f"Record {index} is not a valid email record: {e.error_count()} error(s)", err=True)

    report = pipeline.process_batch(records)

    for failure in report.failures:
        typer.echo(f"Failed: {failure.file_name or '<unnamed>'} ({failure.error_type}: {failure.message})", err=True)

    if output:
        write_documents(report.documents, output)
    else:
        typer.echo(documents_to_json(report.documents))

    typer.echo(
        f"Processed {report.total} email(s): {report.succeeded} succeeded, "
        f"{report.failed + invalid} failed, {len(report.documents)} document(s)",
        err=True,
    )
    if report.failed or invalid:
        raise typer.Exit(code=1)


@app.command()
def clean(
    input_path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Plain text or HTML body"),
    html: bool = typer.Option(False, "--html", help="Treat input as HTML (default: by file extension)"),
    rag: bool = typer.Option(False, "--rag", help="Flatten output to a single line"),
):
    """Print the cleaned text of one message body."""
    settings = _build_settings(OPTIMIZE_FOR_RAG=rag, EXTRACT_ENTITIES=False)
    configure_logging("WARNING", settings.ENVIRONMENT)
    pipeline = EmailContentPipeline(settings)

    content = input_path.read_text(encoding="utf-8", errors="replace")
    is_html = html or input_path.suffix.lower() in (".html", ".htm")
    email = EmailRecord(
        body="" if is_html else content,
        html_body=content if is_html else "",
        file_name=input_path.name,
    )

    cleaned, warnings = pipeline.clean(email)
    for warning in warnings:
        typer.echo(warning, err=True)
    typer.echo(cleaned.cleaned_text)


if __name__ == "__main__":
    app()
