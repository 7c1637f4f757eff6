"""
Langfuse provider errors.
"""


class LangfuseProviderError(Exception):
    """Base exception for all Langfuse provider errors."""
    pass


class ConfigurationError(LangfuseProviderError):
    """Missing or invalid provider configuration."""
    pass


class ValidationError(LangfuseProviderError):
    """Malformed user input, such as an import identifier."""
    pass


class NotFoundError(LangfuseProviderError):
    """Remote entity is absent on read."""

    def __init__(self, entity: str, entity_id: str):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} {entity_id} not found")


class RemoteError(LangfuseProviderError):
    """Non-2xx response or transport failure.

    Attributes:
        status_code: HTTP status, or None when the request never completed
        detail: Raw response body (or transport error text)
    """

    def __init__(self, message: str, status_code: int | None = None, detail: str = ""):
        self.status_code = status_code
        self.detail = detail
        super().__init__(message)


class DecodeError(LangfuseProviderError):
    """Response body did not match the expected shape."""
    pass
