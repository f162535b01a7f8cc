"""Markdown output for extracted signatures."""

from __future__ import annotations

from typing import Sequence

from jinja2 import TemplateSyntaxError, UndefinedError, pass_context
from jinja2.exceptions import SecurityError
from jinja2.sandbox import SandboxedEnvironment

from .errors import TemplateError
from .models import DocumentationSet, SignatureRecord


def record_to_markdown(record: SignatureRecord) -> str:
    """Render one record as a heading, its signature, and its description."""
    lines = [
        f"### {record.display_name}",
        f"`{record.display_signature}`",
    ]

    if record.description_text:
        lines.append("")
        lines.append(record.description_text)

    return "\n".join(lines)


def file_to_markdown(path: str, records: Sequence[SignatureRecord]) -> str:
    """Render all records of one source file under a heading for the file."""
    lines = [f"## {path}", ""]
    for record in records:
        lines.append(record_to_markdown(record))
        lines.append("")
    return "\n".join(lines)


def documentation_to_markdown(documentation: DocumentationSet) -> str:
    return "\n".join(
        file_to_markdown(path, records) for path, records in documentation.items()
    )


@pass_context
def _hmdoc(context) -> str:
    return documentation_to_markdown(context.get("files") or {})


def _environment() -> SandboxedEnvironment:
    env = SandboxedEnvironment(autoescape=False, keep_trailing_newline=True)
    env.globals["hmdoc"] = _hmdoc
    env.filters["markdown"] = record_to_markdown
    return env


def render_markdown(template_source: str, documentation: DocumentationSet) -> str:
    """Render a Jinja2 template with the extracted documentation.

    The template sees ``files`` (path -> records) and can call ``hmdoc()`` to
    insert the Markdown for every file, or loop over ``files`` and apply the
    ``markdown`` filter to individual records.

    Example template:
        # My Library

        {{ hmdoc() }}

    Raises:
        TemplateError: If the template is invalid or fails to render.
    """
    env = _environment()
    try:
        template = env.from_string(template_source)
        return template.render(files=documentation)
    except TemplateSyntaxError as e:
        raise TemplateError(f"Invalid template syntax (line {e.lineno}): {e.message}") from e
    except UndefinedError as e:
        raise TemplateError(f"Undefined variable in template: {e}") from e
    except SecurityError as e:
        raise TemplateError(f"Unsafe template operation: {e}") from e
