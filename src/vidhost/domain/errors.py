"""Exception hierarchy shared by the services and the API layer."""


class VidhostError(Exception):
    """Base class for vidhost errors."""

    pass


class ValidationError(VidhostError):
    """Raised when an upload request is rejected before any side effect."""

    pass


class StorageError(VidhostError):
    """Raised when the object store write (or lookup) fails."""

    pass


class DatabaseError(VidhostError):
    """Raised when a metadata or analytics write fails."""

    pass


class NotificationError(VidhostError):
    """Raised when the processor could not be notified.

    Only ever logged; it never fails an upload.
    """

    pass


class VideoNotFoundError(VidhostError):
    """Raised when a video id has no row."""

    pass


class AnalyticsNotFoundError(VidhostError):
    """Raised when a video id has no analytics counters."""

    pass


class ApiError(VidhostError):
    """Raised by the HTTP clients when a call fails or returns an error status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
