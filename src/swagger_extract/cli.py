"""CLI entry point for swagger-extract."""

import json
import logging
from pathlib import Path

import click
from pydantic import ValidationError

from swagger_extract.config import ParseOptions
from swagger_extract.errors import SwaggerExtractError
from swagger_extract.log import configure_logging
from swagger_extract.parser.assembler import convert_markdown_to_data, records_to_dict
from swagger_extract.pipeline import generate_markdown_from_text
from swagger_extract.source.loader import read_source


def _write(text: str, output: Path | None) -> None:
    if output is None:
        click.echo(text)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text, encoding="utf-8")
    click.echo(f"Saved to {output}", err=True)


def _render(source: str) -> str:
    try:
        return generate_markdown_from_text(read_source(source))
    except (SwaggerExtractError, OSError, ValidationError) as e:
        raise click.ClickException(str(e)) from e


def _parse(markdown: str, preserve: bool) -> str:
    options = ParseOptions(preserve_response_metadata=preserve)
    try:
        records = convert_markdown_to_data(markdown, options)
    except (SwaggerExtractError, json.JSONDecodeError) as e:
        raise click.ClickException(str(e)) from e
    click.echo(f"Found {len(records)} endpoints.", err=True)
    return json.dumps(records_to_dict(records), indent=2, ensure_ascii=False)


preserve_option = click.option(
    "--preserve-response-metadata",
    "preserve",
    is_flag=True,
    help="Keep %-line response fields when an example fence follows them.",
)
output_option = click.option(
    "-o", "--output", default=None, type=click.Path(path_type=Path), help="Output file (default: stdout)."
)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(verbose: bool):
    """swagger-extract: turn OpenAPI/Swagger definitions into per-endpoint data."""
    configure_logging(logging.DEBUG if verbose else logging.WARNING)


@main.command()
@click.argument("source")
@output_option
def render(source: str, output: Path | None):
    """Render SOURCE (URL or file) into the intermediate markdown."""
    _write(_render(source), output)


@main.command()
@click.argument("source")
@output_option
@click.option("--markdown", "markdown_path", default=None, type=click.Path(path_type=Path), help="Also save the intermediate markdown.")
@preserve_option
def extract(source: str, output: Path | None, markdown_path: Path | None, preserve: bool):
    """Full pipeline: fetch SOURCE -> render markdown -> extract endpoint records."""
    click.echo(f"Rendering {source}...", err=True)
    markdown = _render(source)
    if markdown_path is not None:
        markdown_path.parent.mkdir(parents=True, exist_ok=True)
        markdown_path.write_text(markdown, encoding="utf-8")
    _write(_parse(markdown, preserve), output)


@main.command()
@click.argument("markdown_file", type=click.Path(exists=True, path_type=Path))
@output_option
@preserve_option
def parse(markdown_file: Path, output: Path | None, preserve: bool):
    """Extract endpoint records from an already rendered markdown file."""
    _write(_parse(markdown_file.read_text(encoding="utf-8"), preserve), output)
