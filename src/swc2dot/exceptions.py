# src/swc2dot/exceptions.py
from __future__ import annotations

# General imports (stdlib)
from typing import Optional


class Swc2DotError(Exception):
    """Base for all domain errors."""


class ConfigError(Swc2DotError):
    """Invalid or missing configuration."""


class ConfigStructureError(ConfigError):
    """Style configuration group present but not shaped as an option mapping."""


class IOFailure(Swc2DotError):
    """Input could not be read or output could not be written."""


class DataNotFound(IOFailure):
    """Required file(s) or directory not found."""


class SWCParseError(Swc2DotError):
    """
    SWC line unreadable or invalid.

    Carries the 1-based line number and the raw line once the error has been
    raised while reading a whole file.
    """

    def __init__(self, message: str, lineno: Optional[int] = None, line: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.lineno = lineno
        self.line = line

    def __str__(self) -> str:
        if self.lineno is None:
            return self.message
        return f"line {self.lineno}: {self.message}"


class MalformedRecord(SWCParseError):
    """Compartment line with the wrong number of fields."""


class InvalidField(SWCParseError):
    """Compartment field that does not parse as its expected type."""


class InvalidParentOrdering(SWCParseError):
    """Parent id not strictly less than the compartment id."""


class ValidationError(Swc2DotError):
    """Input data fails semantic checks."""


class DuplicateIdentifier(ValidationError):
    """Two compartments share an id."""

    def __init__(self, compartment_id: int) -> None:
        super().__init__(f"More than one compartment with id {compartment_id} exists")
        self.compartment_id = compartment_id


class MissingParent(ValidationError):
    """Compartment refers to a parent id that is not in the morphology."""

    def __init__(self, compartment_id: int, parent_id: int) -> None:
        super().__init__(
            f"Compartment {compartment_id} refers to parent {parent_id}, "
            f"but no compartment with id {parent_id} exists"
        )
        self.compartment_id = compartment_id
        self.parent_id = parent_id
