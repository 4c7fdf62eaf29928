from __future__ import annotations


class SLCError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code = 500


class ValidationError(SLCError, ValueError):
    status_code = 400


class NotFoundError(SLCError, LookupError):
    status_code = 404


class ConfigurationError(SLCError, RuntimeError):
    status_code = 500


class UpstreamError(SLCError, RuntimeError):
    """The email provider rejected or failed to accept a send."""

    status_code = 502
