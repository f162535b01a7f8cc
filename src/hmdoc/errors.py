"""Exceptions raised by hmdoc.

Per-comment rejections never raise; these cover file-level and I/O failures
that the batch driver reports to its caller.
"""

from __future__ import annotations


class HmDocError(Exception):
    """Base exception for hmdoc operations."""

    pass


class SourceReadError(HmDocError):
    """Raised when a source file cannot be read."""

    def __init__(self, path: str, message: str):
        super().__init__(f"{path}: {message}")
        self.path = path


class SourceParseError(HmDocError):
    """Raised when source text cannot be parsed into a syntax tree."""

    def __init__(self, path: str | None, message: str):
        super().__init__(f"{path}: {message}" if path else message)
        self.path = path


class SignatureSyntaxError(HmDocError):
    """Raised by the signature grammar for text it cannot parse."""

    def __init__(self, text: str, message: str, position: int | None = None):
        where = f" at position {position}" if position is not None else ""
        super().__init__(f"{message}{where}: {text!r}")
        self.text = text
        self.position = position


class TemplateError(HmDocError):
    """Raised when a template cannot be read or rendered."""

    pass


class OutputWriteError(HmDocError):
    """Raised when rendered output cannot be written."""

    pass


class BatchError(HmDocError):
    """Raised when one or more files in a batch failed.

    Every file is still processed; ``documentation`` holds the results of the
    files that succeeded and ``errors`` maps each failed path to its error.
    """

    def __init__(self, errors: dict[str, HmDocError], documentation: dict):
        paths = ", ".join(errors)
        super().__init__(f"{len(errors)} file(s) failed: {paths}")
        self.errors = errors
        self.documentation = documentation
