"""
Error taxonomy shared by repositories and the HTTP layer.

Repositories raise these and never catch them; the API translates
``status`` straight into the response code.
"""

from typing import Optional


class JoblyError(Exception):
    """Base error carrying an HTTP-style status code."""

    status = 500

    def __init__(self, message: str = "", status: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status is not None:
            self.status = status


class BadRequestError(JoblyError):
    """Invalid input (e.g. an update with no data) or a duplicate natural key."""

    status = 400


class NotFoundError(JoblyError):
    """Raised when a key does not match any stored record."""

    status = 404


class UnauthorizedError(JoblyError):
    status = 401
