"""Signature comment extraction from JavaScript syntax trees.

A documented statement looks like this:

    /*
    Loads the contents of a URL.
    */
    // loadURL :: request -> url -> Promise
    const loadURL = request => url => ...

The first line comment above a top-level statement is the signature and the
first block comment is its description, in either order. Comments that do not
parse as a signature are dropped without error, so ordinary prose comments
never show up in the output. The pairing is a heuristic: an unrelated line
comment directly above a statement is still tried as a signature.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, Sequence

from . import signatures
from .models import (
    CommentKind,
    CommentNode,
    DocumentationSet,
    NormalizedRecord,
    ParsedRecord,
    ParseFailure,
    ParseResult,
    ParseSuccess,
    RawPair,
    SignatureRecord,
    SyntaxTree,
)
from .syntax import parse_source

log = logging.getLogger(__name__)

SIGNATURE_DELIMITER = "::"

_DECORATION_RE = re.compile(r"^[\s*]+|[\s*]+$")


def locate_comments(tree: SyntaxTree) -> list[list[CommentNode]]:
    """Collect the leading comments of each top-level statement.

    Statements without comments are skipped. A comment node already claimed
    by an earlier statement is not repeated for a later one.
    """
    groups = []
    claimed: set[int] = set()
    for statement in getattr(tree, "body", None) or []:
        comments = getattr(statement, "leadingComments", None) or []
        fresh = [c for c in comments if id(c) not in claimed]
        claimed.update(id(c) for c in comments)
        if fresh:
            groups.append(fresh)
    return groups


def _first_of_kind(comments: Sequence[CommentNode], kind: str) -> CommentNode | None:
    return next((c for c in comments if getattr(c, "type", None) == kind), None)


def extract_pair(comments: Sequence[CommentNode]) -> RawPair:
    """Pick the first line comment and the first block comment."""
    return RawPair(
        signature_comment=_first_of_kind(comments, CommentKind.LINE),
        description_comment=_first_of_kind(comments, CommentKind.BLOCK),
    )


def normalize_signature_text(text: str) -> str:
    """Strip ``*`` padding and surrounding whitespace."""
    return _DECORATION_RE.sub("", text)


def normalize_pair(pair: RawPair) -> NormalizedRecord:
    signature_text = ""
    if pair.signature_comment is not None:
        signature_text = normalize_signature_text(pair.signature_comment.value or "")

    description_text = None
    if pair.description_comment is not None:
        description_text = pair.description_comment.value

    return NormalizedRecord(signature_text=signature_text, description_text=description_text)


def parse_signature(text: str) -> ParseResult:
    """Run the signature grammar, returning ParseFailure instead of raising."""
    try:
        parsed = signatures.parse(text)
    except Exception as e:
        return ParseFailure(reason=str(e))
    return ParseSuccess(name=parsed.name, type=parsed.type, constraints=parsed.constraints)


def parse_record(record: NormalizedRecord) -> ParsedRecord:
    return ParsedRecord(
        signature_text=record.signature_text,
        description_text=record.description_text,
        parse_result=parse_signature(record.signature_text),
    )


def attach_display(record: ParsedRecord) -> SignatureRecord:
    """Split the signature text into its name and type halves."""
    head, delimiter, tail = record.signature_text.partition(SIGNATURE_DELIMITER)
    if isinstance(record.parse_result, ParseSuccess):
        display_name = record.parse_result.name
    else:
        display_name = head.strip()

    return SignatureRecord(
        signature_text=record.signature_text,
        description_text=record.description_text,
        parse_result=record.parse_result,
        display_name=display_name,
        display_signature=tail.strip() if delimiter else "",
    )


def is_legitimate(record: SignatureRecord) -> bool:
    """Check that a record is a real signature worth documenting."""
    return (
        isinstance(record.signature_text, str)
        and len(record.signature_text) > 0
        and isinstance(record.parse_result, ParseSuccess)
        and isinstance(record.display_signature, str)
        and len(record.display_signature) > 0
    )


def extract_records(tree: SyntaxTree) -> list[SignatureRecord]:
    """Extract accepted signature records from a syntax tree, in source order."""
    groups = locate_comments(tree)
    log.debug("extract_records, %d statements with comments", len(groups))

    pairs = [extract_pair(comments) for comments in groups]
    normalized = [normalize_pair(pair) for pair in pairs]
    parsed = [parse_record(record) for record in normalized]
    described = [attach_display(record) for record in parsed]
    accepted = [record for record in described if is_legitimate(record)]

    log.debug(
        "extract_records, accepted %d of %d candidates", len(accepted), len(described)
    )
    return accepted


def extract_from_code(
    code: str, source_type: str = "script", path: str | None = None
) -> list[SignatureRecord]:
    """Parse JavaScript source and extract its signature records.

    Raises:
        SourceParseError: If the source cannot be parsed.
    """
    return extract_records(parse_source(code, source_type=source_type, path=path))


def aggregate(results: Iterable[tuple[str, Sequence[SignatureRecord]]]) -> DocumentationSet:
    """Build the path -> records mapping, leaving out files with no records."""
    documentation: DocumentationSet = {}
    for path, records in results:
        documentation[path] = list(records)
    return {path: records for path, records in documentation.items() if records}
