"""JavaScript syntax trees with attached comments, via esprima."""

from __future__ import annotations

import logging

import esprima

from .errors import SourceParseError

log = logging.getLogger(__name__)

SOURCE_TYPES = ("script", "module")


def truncate_text(text: str, limit: int = 20) -> str:
    """Shorten source text for log lines."""
    if len(text) >= limit:
        return f"{text[:limit]} ..."
    return text


def parse_source(code: str, source_type: str = "script", path: str | None = None):
    """Parse JavaScript source into an esprima Program node.

    Comments are attached to the statements that follow them as
    ``leadingComments``; each comment has a ``type`` ("Line" or "Block") and
    a ``value``.

    Args:
        code: JavaScript source text
        source_type: "script" or "module" (ES module syntax, strict mode)
        path: Optional file path, used in error messages

    Raises:
        SourceParseError: If esprima rejects the source text.
    """
    if source_type not in SOURCE_TYPES:
        raise ValueError(f"Invalid source type: {source_type}")

    log.debug("parse_source, code: %s", truncate_text(code))
    try:
        if source_type == "module":
            tree = esprima.parseModule(code, {"attachComment": True})
        else:
            tree = esprima.parseScript(code, {"attachComment": True})
    except Exception as e:
        log.debug("parse_source failed: %s", e)
        raise SourceParseError(path, f"{e.__class__.__name__}: {e}") from e

    log.debug("parse_source, parsed %d top-level statements", len(tree.body))
    return tree
