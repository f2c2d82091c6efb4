class ServiceError(Exception):
    """Base exception for service layer failures."""

    def __init__(self, message: str, *, cause: Exception | None = None):
        super().__init__(message)
        self.cause = cause


class DownstreamServiceError(ServiceError):
    """Raised when the remote rental backend returns an error response."""

    def __init__(self, message: str, status_code: int | None = None, *, cause: Exception | None = None):
        super().__init__(message, cause=cause)
        self.status_code = status_code


class RecordNotFoundError(ServiceError):
    """Raised when a product, rental, order or draft does not exist."""


class ValidationFailedError(ServiceError):
    """Raised when a request is rejected by a business rule."""


class TermsNotAcceptedError(ValidationFailedError):
    def __init__(self, message: str = "Please accept the terms and conditions") -> None:
        super().__init__(message)


class LineItemNotFoundError(ServiceError, IndexError):
    def __init__(self, index: int, count: int) -> None:
        super().__init__(f"Line item {index} out of range for {count} item(s)")
        self.index = index
        self.count = count
