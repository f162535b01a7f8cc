"""Batch driver: file discovery, reading, and rendering around the extractor."""

from __future__ import annotations

import glob
import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Mapping

from .errors import (
    BatchError,
    HmDocError,
    OutputWriteError,
    SourceReadError,
    TemplateError,
)
from .extractors import aggregate, extract_from_code
from .generators import render_markdown
from .models import DocumentationSet, SignatureRecord

log = logging.getLogger(__name__)


def load_filenames(pattern: str) -> list[str]:
    """Expand a glob such as ``./src/**/*.js`` into sorted file paths."""
    files = sorted(p for p in glob.glob(pattern, recursive=True) if Path(p).is_file())
    log.debug("load_filenames, pattern: %s, files: %s", pattern, files)
    if not files:
        log.warning("No files match %s", pattern)
    return files


def read_file(path: str) -> str:
    """Read a UTF-8 text file.

    Raises:
        SourceReadError: If the file cannot be read or decoded.
    """
    log.debug("read_file, path: %s", path)
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SourceReadError(path, f"{e.__class__.__name__}: {e}") from e


def _process(
    path: str, text: str, source_type: str
) -> tuple[list[SignatureRecord] | None, HmDocError | None]:
    try:
        records = extract_from_code(text, source_type=source_type, path=path)
    except HmDocError as e:
        log.warning("Skipping %s: %s", path, e)
        return None, e
    log.debug("%s: %d documented statements", path, len(records))
    return records, None


def parse_sources(
    sources: Mapping[str, str], source_type: str = "script", workers: int = 1
) -> DocumentationSet:
    """Extract documentation from ``{path: source text}``.

    Every file is processed even if others fail. Files without any
    documented statements are absent from the result.

    Raises:
        BatchError: If any file failed to parse. The error carries the
            documentation of the files that succeeded.
    """
    paths = list(sources)

    def run(path: str):
        return _process(path, sources[path], source_type)

    if workers > 1 and len(paths) > 1:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            outcomes = list(executor.map(run, paths))
    else:
        outcomes = [run(path) for path in paths]

    errors: dict[str, HmDocError] = {}
    results = []
    for path, (records, error) in zip(paths, outcomes):
        if error is not None:
            errors[path] = error
        else:
            results.append((path, records))

    documentation = aggregate(results)
    log.info("Documented %d of %d files", len(documentation), len(paths))

    if errors:
        raise BatchError(errors, documentation)
    return documentation


def parse(pattern: str, source_type: str = "script", workers: int = 1) -> DocumentationSet:
    """Find files matching a glob and extract their documentation.

    Example:
        docs = parse("./src/**/*.js")
        for path, records in docs.items():
            print(path, [r.display_name for r in records])

    Raises:
        BatchError: If any file could not be read or parsed.
    """
    log.debug("parse, pattern: %s", pattern)
    sources: dict[str, str] = {}
    read_errors: dict[str, HmDocError] = {}
    for path in load_filenames(pattern):
        try:
            sources[path] = read_file(path)
        except SourceReadError as e:
            log.warning("Skipping %s: %s", path, e)
            read_errors[path] = e

    try:
        documentation = parse_sources(sources, source_type=source_type, workers=workers)
    except BatchError as e:
        raise BatchError({**read_errors, **e.errors}, e.documentation) from None

    if read_errors:
        raise BatchError(read_errors, documentation)
    return documentation


def read_template(template_file: str) -> str:
    try:
        return Path(template_file).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise TemplateError(f"Cannot read template {template_file}: {e}") from e


def get_markdown(
    pattern: str, template_file: str, source_type: str = "script", workers: int = 1
) -> str:
    """Extract documentation for a glob and render it into a Jinja2 template.

    Args:
        pattern: Source file glob, e.g. "./src/**/*.js"
        template_file: Template path; use ``{{ hmdoc() }}`` where the API
            documentation should go

    Returns:
        The rendered text
    """
    template = read_template(template_file)
    documentation = parse(pattern, source_type=source_type, workers=workers)
    log.debug("get_markdown, rendering %s", template_file)
    return render_markdown(template, documentation)


def write_markdown_file(
    pattern: str,
    template_file: str,
    output_file: str,
    source_type: str = "script",
    workers: int = 1,
) -> str:
    """Render documentation into a template and write it to a file.

    Returns:
        A success message naming the written file

    Raises:
        OutputWriteError: If the output file cannot be written.
    """
    markdown = get_markdown(pattern, template_file, source_type=source_type, workers=workers)
    try:
        Path(output_file).write_text(markdown, encoding="utf-8")
    except OSError as e:
        raise OutputWriteError(f"Cannot write {output_file}: {e}") from e
    log.info("Wrote %s", output_file)
    return f"Successfully wrote filename: {output_file}"
