"""
Tracking Engine Errors

Catalog-level structural problems are raised to the caller of the load
operation. Per-object numerical problems (bad elements, decayed orbits) are
raised by the propagator and always recovered inside the engine, so that one
bad object never hides the rest of the catalog.
"""

from typing import Optional


class TrackerError(Exception):
    """Base class for all tracking engine errors."""


class MalformedCatalog(TrackerError):
    """Catalog text is structurally broken (element line before any name)."""

    def __init__(self, message: str, line_number: Optional[int] = None):
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class TruncatedRecord(TrackerError):
    """A named record is missing an element line, or it cannot be read."""

    def __init__(self, name: str, reason: str):
        self.name = name
        self.reason = reason
        super().__init__(f"{name}: {reason}")


class DuplicateCatalogEntry(TrackerError):
    """The catalog number is already tracked."""

    def __init__(self, catalog_number: int, name: str = ""):
        self.catalog_number = catalog_number
        self.name = name
        super().__init__(f"catalog number {catalog_number} already tracked ({name})")


class InvalidElements(TrackerError):
    """Element lines could not be turned into orbital elements."""


class PropagationFailure(TrackerError):
    """Propagator could not produce a position at the requested instant."""

    def __init__(self, message: str, error_code: Optional[int] = None):
        self.error_code = error_code
        super().__init__(message)


class UnresolvedDeepLinkId(TrackerError):
    """A deep-link catalog number is not present in the catalog."""

    def __init__(self, catalog_number: int):
        self.catalog_number = catalog_number
        super().__init__(f"catalog number {catalog_number} not in catalog")


class CollaboratorUnavailable(TrackerError):
    """A required collaborator (renderer, propagator) was not supplied."""
