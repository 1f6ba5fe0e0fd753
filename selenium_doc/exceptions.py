"""
Custom exceptions for the Selenium doc generator.

Error philosophy:
  - ShapeViolation    → FAIL HARD: the reference page no longer has the layout we parse.
  - DuplicateKeyError → FAIL HARD: two arguments or two commands collide on a key.
  - ClassificationGap → FAIL HARD: naming rules disagree with each other (a bug, not bad input).
  - TemplateError     → FAIL HARD at generator construction.
  - DriverSourceError → FAIL HARD: the driver source lists no commands.

The input is a single static document, so nothing here is recovered from.
The CLI is the only place these are caught.
"""

from typing import Optional


class SeleniumDocError(Exception):
    """Base exception for all Selenium doc generator errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ShapeViolation(SeleniumDocError):
    """
    Raised when a match that must succeed against the reference page fails.

    Carries the raw fragment that did not match so the diagnostic shows
    exactly where the document drifted from the expected layout.
    """

    def __init__(self, message: str, fragment: str = "", details: Optional[dict] = None):
        super().__init__(message, details)
        self.fragment = fragment

    def __str__(self) -> str:
        if not self.fragment:
            return self.message
        return f"{self.message}: {self.fragment}"


class DuplicateKeyError(SeleniumDocError):
    """Raised when arguments of one command, or commands of the catalog, share a key."""

    def __init__(self, message: str, keys: Optional[list[str]] = None,
                 details: Optional[dict] = None):
        super().__init__(message, details)
        self.keys = list(keys or [])

    def __str__(self) -> str:
        if not self.keys:
            return self.message
        return f"{self.message}: {', '.join(self.keys)}"


class ClassificationGap(SeleniumDocError):
    """Raised when a command name cannot be given a subcategory (or derived into one)."""

    def __init__(self, message: str, name: str = "", details: Optional[dict] = None):
        super().__init__(message, details)
        self.name = name


# --- Outer surfaces (rendering, external command source) ---

class TemplateError(SeleniumDocError):
    """Raised when a code generator template cannot be found."""

    def __init__(self, message: str, path: str = "", details: Optional[dict] = None):
        super().__init__(message, details)
        self.path = path


class DriverSourceError(SeleniumDocError):
    """Raised when the driver source yields no command declarations."""
    pass
