"""Builders for fake syntax trees shaped like esprima's output."""

from types import SimpleNamespace


def line(value: str):
    """A line comment node."""
    return SimpleNamespace(type="Line", value=value)


def block(value: str):
    """A block comment node."""
    return SimpleNamespace(type="Block", value=value)


def statement(*comments):
    """A top-level statement; no comments means no leadingComments attribute."""
    if not comments:
        return SimpleNamespace(type="ExpressionStatement")
    return SimpleNamespace(type="ExpressionStatement", leadingComments=list(comments))


def tree(*statements):
    return SimpleNamespace(type="Program", body=list(statements))
