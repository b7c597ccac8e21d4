from typing import Optional

from .enums import ErrorKind


class GitLabApiError(Exception):
    """
    Base exception for all client errors.

    Every operation of the client raises exactly one subclass of this
    exception so callers can tell bad input, transport failures, API
    refusals and unreadable payloads apart through ``kind``.

    Attributes:
        message: Human-readable error message
        kind: Category of the failure
        status_code: HTTP status code, only set for API errors
    """

    kind: ErrorKind

    def __init__(self, message: str, status_code: Optional[int] = None):
        """
        Initialize client error.

        Args:
            message: Error message describing what went wrong
            status_code: HTTP status code of the failed response (optional)
        """
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(kind={self.kind.value!r}, "
            f"status_code={self.status_code!r}, message={self.message!r})"
        )


class ValidationError(GitLabApiError, ValueError):
    """
    Raised when the caller passes invalid input.

    Examples are a missing or empty project identifier, a non-positive
    IID or a non-positive page size. No request is issued.
    """

    kind = ErrorKind.VALIDATION


class NetworkError(GitLabApiError):
    """
    Raised when no HTTP response was received.

    Connection refused, DNS failures and timeouts all end up here. The
    underlying ``requests`` exception is kept in ``cause``.
    """

    kind = ErrorKind.NETWORK

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class ApiError(GitLabApiError):
    """
    Raised when the server answers with a non-2xx status.
    """

    kind = ErrorKind.API

    def __init__(self, message: str, status_code: int):
        super().__init__(message, status_code=status_code)


class DeserializationError(GitLabApiError):
    """
    Raised when a successful response carries a body that cannot be decoded
    into the expected items.
    """

    kind = ErrorKind.DESERIALIZATION
