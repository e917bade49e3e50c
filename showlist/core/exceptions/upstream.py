"""
Upstream-Related Exceptions

The fetch adapter never raises; it returns None. These exceptions are
raised one level up, by services, when a sub-resource that the response
cannot exist without came back absent.
"""

from showlist.core.exceptions.base import ShowlistError


class UpstreamError(ShowlistError):
    """Base exception for catalog provider problems."""

    status_code = 502


class UpstreamUnavailableError(UpstreamError):
    """
    Raised when an essential upstream record is unavailable.

    Mapped to 503 so clients can tell "try again later" apart from a
    generic server error.
    """

    status_code = 503
