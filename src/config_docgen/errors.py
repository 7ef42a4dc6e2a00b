"""Errors raised while generating configuration documentation."""

from __future__ import annotations


class DocGenError(Exception):
    """Base class for documentation generation failures."""


class InvalidInvocationError(DocGenError, ValueError):
    """The caller did not name a known output format or destination."""


class SinkUnavailableError(DocGenError, OSError):
    """The destination could not be opened for writing."""


class WriteFailureError(DocGenError, OSError):
    """The destination rejected a write while the document was generated."""
