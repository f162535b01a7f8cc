"""Parser for Hindley-Milner style type signatures.

Accepts the terse signatures written in line comments above JavaScript
functions:

    map :: (a -> b) -> [a] -> [b]
    fold :: Foldable f => (b -> a -> b) -> b -> f a -> b
    readFile :: fs -> filename -> encoding -> Promise
    point :: { x :: Number, y :: Number } -> (Number, Number)
    Maybe#map :: Maybe a ~> (a -> b) -> Maybe b

Grammar:

    signature   := NAME '::' [constraints '=>'] type
    constraints := constraint | '(' constraint (',' constraint)* ')'
    constraint  := IDENT IDENT+
    type        := function ['~>' function]
    function    := application ('->' application)*
    application := atom atom*
    atom        := IDENT | '[' type ']' | '(' ')' | '(' type (',' type)* ')'
                 | '{' field (',' field)* '}'
    field       := IDENT ('::' | ':') type

Lower-case identifiers are type variables; anything else is a type
constructor. Malformed text raises SignatureSyntaxError.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import NamedTuple

from .errors import SignatureSyntaxError

_IDENT = r"[A-Za-z_$][\w$']*(?:[.#][A-Za-z_$][\w$']*)*"

_TOKEN_RE = re.compile(
    rf"""
    (?P<ws>\s+)
    |(?P<dcolon>::)
    |(?P<arrow>->)
    |(?P<fat>=>)
    |(?P<tilde>~>)
    |(?P<punct>[()\[\]{{}},:])
    |(?P<ident>{_IDENT})
    """,
    re.VERBOSE,
)


@dataclass(frozen=True)
class TypeNode:
    """One node of a parsed type expression."""

    kind: str  # "function" | "method" | "list" | "tuple" | "record" | "field" | ...
    text: str  # Source text of this node, or the identifier / field name
    children: list[TypeNode] = field(default_factory=list)


@dataclass(frozen=True)
class Constraint:
    typeclass: str  # "Functor"
    typevars: list[str]  # ["f"]


@dataclass(frozen=True)
class Signature:
    name: str
    constraints: list[Constraint]
    type: TypeNode


class _Token(NamedTuple):
    kind: str
    text: str
    pos: int

    @property
    def end(self) -> int:
        return self.pos + len(self.text)


def _tokenize(text: str) -> list[_Token]:
    tokens = []
    pos = 0
    while pos < len(text):
        match = _TOKEN_RE.match(text, pos)
        if not match:
            raise SignatureSyntaxError(text, f"unexpected character {text[pos]!r}", pos)
        kind = match.lastgroup
        if kind == "punct":
            kind = match.group()
        if kind != "ws":
            tokens.append(_Token(kind, match.group(), pos))
        pos = match.end()
    return tokens


class _Parser:
    """Recursive-descent parser over a token list."""

    _ATOM_START = ("ident", "(", "[", "{")

    def __init__(self, text: str, tokens: list[_Token]):
        self.text = text
        self.tokens = tokens
        self.index = 0

    def _peek(self) -> _Token | None:
        return self.tokens[self.index] if self.index < len(self.tokens) else None

    def _advance(self) -> _Token:
        tok = self.tokens[self.index]
        self.index += 1
        return tok

    def _accept(self, kind: str) -> _Token | None:
        tok = self._peek()
        if tok is not None and tok.kind == kind:
            return self._advance()
        return None

    def _expect(self, kind: str, what: str) -> _Token:
        tok = self._accept(kind)
        if tok is None:
            raise self._error(f"expected {what}")
        return tok

    def _error(self, message: str) -> SignatureSyntaxError:
        tok = self._peek()
        if tok is None:
            return SignatureSyntaxError(
                self.text, f"{message}, found end of signature", len(self.text)
            )
        return SignatureSyntaxError(self.text, f"{message}, found {tok.text!r}", tok.pos)

    def _start(self) -> int:
        tok = self._peek()
        return tok.pos if tok is not None else len(self.text)

    def _slice(self, start: int) -> str:
        return self.text[start : self.tokens[self.index - 1].end]

    def signature(self) -> Signature:
        name = self._expect("ident", "signature name")
        self._expect("dcolon", "'::'")
        constraints = self._constraints()
        type_ = self._type()
        if self._peek() is not None:
            raise self._error("expected end of signature")
        return Signature(name.text, constraints, type_)

    def _constraints(self) -> list[Constraint]:
        if not any(tok.kind == "fat" for tok in self.tokens[self.index :]):
            return []
        constraints = []
        if self._accept("("):
            constraints.append(self._constraint())
            while self._accept(","):
                constraints.append(self._constraint())
            self._expect(")", "')'")
        else:
            constraints.append(self._constraint())
        self._expect("fat", "'=>'")
        return constraints

    def _constraint(self) -> Constraint:
        typeclass = self._expect("ident", "type class name")
        typevars = [self._expect("ident", "type variable").text]
        while self._peek() is not None and self._peek().kind == "ident":
            typevars.append(self._advance().text)
        return Constraint(typeclass.text, typevars)

    def _type(self) -> TypeNode:
        start = self._start()
        receiver = self._function()
        if not self._accept("tilde"):
            return receiver
        method = self._function()
        return TypeNode("method", self._slice(start), [receiver, method])

    def _function(self) -> TypeNode:
        start = self._start()
        parts = [self._application()]
        while self._accept("arrow"):
            parts.append(self._application())
        if len(parts) == 1:
            return parts[0]
        return TypeNode("function", self._slice(start), parts)

    def _application(self) -> TypeNode:
        head = self._atom()
        args = []
        while self._peek() is not None and self._peek().kind in self._ATOM_START:
            args.append(self._atom())
        if not args:
            return head
        if head.kind == "typeConstructor" and not head.children:
            return TypeNode("typeConstructor", head.text, args)
        if head.kind == "typevar":
            return TypeNode("constrainedType", head.text, args)
        raise self._error(f"cannot apply {head.text!r} to arguments")

    def _atom(self) -> TypeNode:
        start = self._start()
        tok = self._peek()
        if tok is None:
            raise self._error("expected a type")

        if tok.kind == "ident":
            self._advance()
            kind = "typevar" if tok.text[0].islower() else "typeConstructor"
            return TypeNode(kind, tok.text)

        if tok.kind == "[":
            self._advance()
            inner = self._type()
            self._expect("]", "']'")
            return TypeNode("list", self._slice(start), [inner])

        if tok.kind == "(":
            self._advance()
            if self._accept(")"):
                return TypeNode("unit", "()")
            items = [self._type()]
            while self._accept(","):
                items.append(self._type())
            self._expect(")", "')'")
            if len(items) == 1:
                return items[0]
            return TypeNode("tuple", self._slice(start), items)

        if tok.kind == "{":
            self._advance()
            fields = [self._field()]
            while self._accept(","):
                fields.append(self._field())
            self._expect("}", "'}'")
            return TypeNode("record", self._slice(start), fields)

        raise self._error("expected a type")

    def _field(self) -> TypeNode:
        name = self._expect("ident", "field name")
        if not (self._accept("dcolon") or self._accept(":")):
            raise self._error("expected '::' after field name")
        return TypeNode("field", name.text, [self._type()])


def parse(text: str) -> Signature:
    """Parse a signature such as ``map :: (a -> b) -> [a] -> [b]``.

    Raises:
        SignatureSyntaxError: If the text is not a well-formed signature.
    """
    return _Parser(text, _tokenize(text)).signature()
