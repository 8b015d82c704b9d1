"""Custom exception hierarchy for vidlinks.

All exceptions that cross layer boundaries must inherit from
:class:`VidlinksError`.  Raw third-party and OS exceptions (Pillow,
``OSError`` from the filesystem, ``json`` decode errors) must NEVER
propagate beyond the infrastructure layer — they must be caught and
re-raised as a typed subclass defined here.

Hierarchy
---------
VidlinksError
├── InvalidInputError
├── NotFoundError
├── PersistenceError
├── EnrichmentError
├── ImportFailedError
└── EnvironmentError
"""

from __future__ import annotations


class VidlinksError(Exception):
    """Base exception for all vidlinks errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Caller input ----------------------------------------------------------

class InvalidInputError(VidlinksError):
    """Raised when a link URL is empty or malformed."""


class NotFoundError(VidlinksError):
    """Raised by the CLI when an operation references an unknown link id.

    The registry itself reports unknown ids as ``False`` / ``None``.
    """


# --- Storage ---------------------------------------------------------------

class PersistenceError(VidlinksError):
    """Raised when the backing key-value store cannot be read or written."""


# --- Background enrichment -------------------------------------------------

class EnrichmentError(VidlinksError):
    """Raised when a format-detection or thumbnail stage fails."""


# --- Local media library ---------------------------------------------------

class ImportFailedError(VidlinksError):
    """Raised when a local file cannot be copied into the media library."""


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(VidlinksError):
    """Raised when a required runtime dependency is not available."""
