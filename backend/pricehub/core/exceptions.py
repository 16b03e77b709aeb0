"""Custom exception classes for the application."""


class PriceHubException(Exception):
    """Base exception for all PriceHub errors."""

    code = "internal_error"

    def __init__(self, message: str = "An unexpected error occurred"):
        self.message = message
        super().__init__(self.message)


class InvalidRequestError(PriceHubException):
    """Raised when required query parameters are missing or malformed."""

    code = "invalid_request"


class AdapterFailure(PriceHubException):
    """Raised when a site adapter fails to produce listings."""

    code = "adapter_failure"

    def __init__(self, platform: str, message: str):
        self.platform = platform
        super().__init__(f"Adapter error for {platform}: {message}")


class AdapterNotFoundError(PriceHubException):
    """Raised when no adapter can be resolved for a required platform."""

    code = "adapter_not_found"

    def __init__(self, platform: str):
        self.platform = platform
        super().__init__(f"No adapter registered for platform '{platform}'")


class PersistenceError(PriceHubException):
    """Raised when the listing store is unavailable for a read or write."""

    code = "persistence_error"


class CriticalOrchestrationError(PriceHubException):
    """Raised for unexpected failures while orchestrating a request."""

    code = "critical_error"
