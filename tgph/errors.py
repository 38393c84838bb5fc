"""Error taxonomy for decoding, lookup and chart construction.

All errors derive from TgphError. Where a builtin exception describes the
same category (ValueError, LookupError) the error also derives from it so
callers can catch either.
"""

from __future__ import annotations


class TgphError(Exception):
    """Base class for all tgph errors."""


class FormatError(TgphError, ValueError):
    """The byte buffer is not a valid TGPH stream.

    Raised for bad magic, unsupported version, unknown element type,
    truncated input and undecodable strings. Decoding never returns a
    partial container list.
    """


class EncodeError(TgphError, ValueError):
    """A value cannot be represented in the TGPH wire format."""


class NotFoundError(TgphError, LookupError):
    """An exact-name lookup matched no container."""


class AmbiguousNameError(NotFoundError):
    """An exact-name lookup matched more than one container."""


class ValidationError(TgphError, ValueError):
    """A chart specification is inconsistent (e.g. mismatched lengths)."""


class SourceError(TgphError):
    """A byte source (file, HTTP) could not provide the snapshot."""
