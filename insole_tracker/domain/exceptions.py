"""Domain-specific exceptions — framework-independent."""


class RemoteStoreError(Exception):
    """Base class for failures talking to the remote spreadsheet endpoint."""

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class NotConfiguredError(RemoteStoreError):
    """Raised before any network activity when no endpoint URL is set."""

    def __init__(self, message: str = "Remote store not configured. Set REMOTE_STORE_URL."):
        super().__init__(message)


class TransportError(RemoteStoreError):
    """Raised on network failures, non-2xx statuses and unreadable bodies."""


class ApplicationError(RemoteStoreError):
    """Raised when the endpoint answers with ``success: false``."""


class ValidationError(Exception):
    """Raised when client-side input is rejected before any I/O."""

    def __init__(self, message: str, field: str | None = None):
        self.message = message
        self.field = field
        super().__init__(message)
