"""
Request and Domain Exceptions

Validation, authentication, ownership and existence failures raised by the
CRUD services and the auth dependency.
"""

from showlist.core.exceptions.base import ShowlistError


class ValidationFailedError(ShowlistError):
    """Raised when request input is syntactically valid but semantically wrong."""

    status_code = 400


class DuplicateItemError(ValidationFailedError):
    """Raised when a TMDB title is already present in a watchlist."""
    pass


class AuthenticationError(ShowlistError):
    """Raised when credentials do not match a stored user."""

    status_code = 401


class TokenError(AuthenticationError):
    """
    Raised when the bearer token is missing, malformed, expired or carries
    no user id.
    """

    status_code = 403


class PermissionDeniedError(ShowlistError):
    """Raised when a user touches a resource owned by someone else."""

    status_code = 403


class NotFoundError(ShowlistError):
    """Raised when a keyed entity does not exist."""

    status_code = 404


class ConflictError(ShowlistError):
    """Raised when creating an entity whose unique key is taken."""

    status_code = 409
