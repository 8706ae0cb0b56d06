"""Exception types raised by fintrack.

Commands catch these at the CLI boundary and print a notice; nothing below
the commands layer exits the process.
"""


class FintrackError(Exception):
    """Base class for all fintrack errors."""


class ApiError(FintrackError):
    """A repository, auth or mail call failed; the user may retry."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class AuthError(ApiError):
    """No session, or the API rejected the bearer token."""


class ValidationError(FintrackError):
    """Submitted transaction fields are missing or invalid.

    Attributes:
        errors: Mapping of field name to a human-readable problem.
    """

    def __init__(self, errors: dict[str, str]) -> None:
        self.errors = dict(errors)
        detail = "; ".join(f"{field}: {problem}" for field, problem in self.errors.items())
        super().__init__(f"Invalid transaction ({detail})")


class ExportError(FintrackError):
    """Report rendering, writing or mail dispatch failed."""
