"""Exceptions raised by the matching engine."""


class MatchingError(Exception):
    """Base class for matching failures."""


class DataUnavailable(MatchingError):
    """Inputs needed to compute a match are missing entirely.

    Raised when a candidate has no parsed profile (the upstream extraction
    never completed), or when a referenced applicant or job cannot be found.
    A sparse profile is not an error; it just scores low.
    """


class InvalidArgument(MatchingError, ValueError):
    """A caller-supplied argument is structurally invalid."""
