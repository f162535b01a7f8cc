"""hmdoc command line interface.

Usage:
    hmdoc parse -f "./src/**/*.js"                     Print extracted signatures as JSON
    hmdoc render -f "./src/*.js" -t README.md.j2       Print the rendered template
    hmdoc render -f "./src/*.js" -t README.md.j2 -o README.md
"""

import json
import logging
from dataclasses import asdict

import typer

from . import __version__
from .config import Settings
from .driver import get_markdown, parse, write_markdown_file
from .errors import BatchError, HmDocError
from .models import DocumentationSet

app = typer.Typer(
    name="hmdoc",
    help="Generate Markdown API docs from Hindley-Milner signature comments.",
    no_args_is_help=True,
    pretty_exceptions_enable=False,
)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _settings() -> Settings:
    try:
        return Settings.from_env()
    except ValueError as e:
        typer.echo(f"✗ {e}", err=True)
        raise typer.Exit(2)


def _fail(error: HmDocError) -> None:
    if isinstance(error, BatchError):
        for path, file_error in error.errors.items():
            typer.echo(f"  ✗ {path}: {file_error}", err=True)
    typer.echo(f"✗ {error}", err=True)
    raise typer.Exit(1)


def _documentation_json(documentation: DocumentationSet) -> str:
    data = {
        path: [asdict(record) for record in records]
        for path, records in documentation.items()
    }
    return json.dumps(data, indent=2)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"hmdoc {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output"),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
) -> None:
    """Generate Markdown API docs from Hindley-Milner signature comments."""
    level = "DEBUG" if verbose else _settings().log_level.upper()
    logging.basicConfig(level=level, format=LOG_FORMAT)


@app.command("parse")
def parse_cmd(
    files: str = typer.Option(
        None,
        "--files",
        "-f",
        help="Glob of files to parse, e.g. './src/**/*.js' [default: ./*.js]",
    ),
    module: bool = typer.Option(
        False, "--module", "-m", help="Parse files as ES modules"
    ),
    workers: int = typer.Option(
        None, "--workers", "-w", min=1, help="Files to parse in parallel"
    ),
) -> None:
    """Print the signatures found in each file as JSON."""
    settings = _settings()
    try:
        documentation = parse(
            files or settings.files,
            source_type="module" if module else settings.source_type,
            workers=workers or settings.workers,
        )
    except HmDocError as e:
        _fail(e)
    typer.echo(_documentation_json(documentation))


@app.command("render")
def render_cmd(
    template: str = typer.Option(
        ..., "--template", "-t", help="Jinja2 template; put {{ hmdoc() }} where docs go"
    ),
    files: str = typer.Option(
        None,
        "--files",
        "-f",
        help="Glob of files to parse, e.g. './src/**/*.js' [default: ./*.js]",
    ),
    output: str = typer.Option(
        None, "--output", "-o", help="Write to this file instead of stdout"
    ),
    module: bool = typer.Option(
        False, "--module", "-m", help="Parse files as ES modules"
    ),
    workers: int = typer.Option(
        None, "--workers", "-w", min=1, help="Files to parse in parallel"
    ),
) -> None:
    """Render a template with the extracted documentation."""
    settings = _settings()
    pattern = files or settings.files
    source_type = "module" if module else settings.source_type
    workers = workers or settings.workers
    try:
        if output:
            message = write_markdown_file(
                pattern, template, output, source_type=source_type, workers=workers
            )
            typer.echo(message)
        else:
            typer.echo(
                get_markdown(pattern, template, source_type=source_type, workers=workers),
                nl=False,
            )
    except HmDocError as e:
        _fail(e)


if __name__ == "__main__":
    app()
