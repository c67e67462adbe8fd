from __future__ import annotations

from typing import Optional


class ConversionError(Exception):
    """Base class for every failure surfaced by a conversion."""

    def __init__(self, message: str, line: Optional[str] = None):
        super().__init__(message)
        self.line = line


class InputNotFound(ConversionError):
    def __init__(self, path: str):
        super().__init__(f"Could not find file '{path}'")
        self.path = path


class FormatError(ConversionError):
    """A line broke the envelope ordering or sat outside the data section."""

    def __init__(self, line: str, reason: Optional[str] = None):
        message = f"Unknown file format - line '{line}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, line=line)
        self.reason = reason


class ContentError(ConversionError):
    def __init__(self, line: str, reason: str = "must begin with 200"):
        super().__init__(f"Invalid CSV content - line '{line}' {reason}.", line=line)
        self.reason = reason


class WriteError(ConversionError):
    def __init__(self, path: str):
        super().__init__(f"Could not create CSV file '{path}'")
        self.path = path
