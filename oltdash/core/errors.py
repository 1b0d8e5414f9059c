"""Domain-specific errors for oltdash."""


class OltdashError(Exception):
    """Base error for oltdash."""


class CatalogValidationError(OltdashError):
    """Raised when a query catalog document does not conform to schema or semantics."""


class CatalogLoadError(OltdashError):
    """Raised when reading query catalog sources fails."""


class ConnectionValidationError(OltdashError):
    """Raised when connection parameters are rejected before any request is built."""


class NotConnectedError(OltdashError):
    """Raised when a query is run without an active connection."""


class QueryInProgressError(OltdashError):
    """Raised when a query is submitted while another is outstanding for the same connection."""


class ApiError(OltdashError):
    """Base error for failures reported by, or reaching, the query API."""


class AuthenticationError(ApiError):
    """Raised when the API rejects the supplied credentials (HTTP 401)."""


class ApiUnreachableError(ApiError):
    """Raised on network-level failures reaching the API."""


class QueryFailedError(ApiError):
    """Raised when the API answers with a non-200 application code."""

    def __init__(self, message: str, *, code: int | None = None) -> None:
        super().__init__(message)
        self.code = code
