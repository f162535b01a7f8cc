"""Data models for comment extraction."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Protocol, Sequence, Union

from .signatures import Constraint, TypeNode


class CommentKind:
    """Comment node kinds as reported by the syntax tree provider."""

    LINE = "Line"  # // ...
    BLOCK = "Block"  # /* ... */


class CommentNode(Protocol):
    type: str  # CommentKind.LINE | CommentKind.BLOCK
    value: str  # Comment text without the // or /* */ markers


class StatementNode(Protocol):
    leadingComments: Optional[Sequence[CommentNode]]


class SyntaxTree(Protocol):
    body: Sequence[StatementNode]


@dataclass(frozen=True)
class RawPair:
    """Candidate comments found above one statement."""

    signature_comment: Any = None  # First line comment, if any
    description_comment: Any = None  # First block comment, if any


@dataclass(frozen=True)
class NormalizedRecord:
    signature_text: str
    description_text: str | None = None


@dataclass(frozen=True)
class ParseSuccess:
    """Structured result of a signature that the grammar accepted."""

    name: str
    type: TypeNode
    constraints: list[Constraint] = field(default_factory=list)


@dataclass(frozen=True)
class ParseFailure:
    reason: str


ParseResult = Union[ParseSuccess, ParseFailure]


@dataclass(frozen=True)
class ParsedRecord:
    signature_text: str
    description_text: str | None
    parse_result: ParseResult


@dataclass(frozen=True)
class SignatureRecord:
    """A parsed comment pair with its display strings attached."""

    signature_text: str  # "map :: (a -> b) -> [a] -> [b]"
    description_text: str | None  # Block comment, verbatim
    parse_result: ParseResult
    display_name: str  # "map"
    display_signature: str  # "(a -> b) -> [a] -> [b]"


# A SignatureRecord that passed the legitimacy filter
AcceptedRecord = SignatureRecord

# File path -> accepted records in source order; never holds an empty list
DocumentationSet = dict[str, list[AcceptedRecord]]
