"""hmdoc - Markdown API docs from Hindley-Milner signature comments.

This package provides:
- parse / get_markdown / write_markdown_file: batch entry points over a glob
- extract_from_code / extract_records: the comment extraction pipeline
- render_markdown / record_to_markdown: Markdown output
- Exception classes rooted at HmDocError
"""

__version__ = "0.1.0"

from hmdoc.driver import get_markdown, parse, parse_sources, write_markdown_file
from hmdoc.errors import (
    BatchError,
    HmDocError,
    OutputWriteError,
    SignatureSyntaxError,
    SourceParseError,
    SourceReadError,
    TemplateError,
)
from hmdoc.extractors import aggregate, extract_from_code, extract_records
from hmdoc.generators import record_to_markdown, render_markdown
from hmdoc.models import DocumentationSet, SignatureRecord

__all__ = [
    "BatchError",
    "DocumentationSet",
    "HmDocError",
    "OutputWriteError",
    "SignatureRecord",
    "SignatureSyntaxError",
    "SourceParseError",
    "SourceReadError",
    "TemplateError",
    "aggregate",
    "extract_from_code",
    "extract_records",
    "get_markdown",
    "parse",
    "parse_sources",
    "record_to_markdown",
    "render_markdown",
    "write_markdown_file",
]
