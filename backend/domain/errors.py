from typing import Optional


class StreamDirError(Exception):
    """Base error. `status_code` is the HTTP status the API layer answers with."""

    status_code: Optional[int] = 400

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(StreamDirError):
    """Malformed listing parameters. Raised before any query runs."""

    status_code = 400


class InvalidCursorCombination(ValidationError):
    pass


class InvalidOrder(ValidationError):
    pass


class InvalidLimit(ValidationError):
    pass


class InvalidCursor(ValidationError):
    pass


class StorageError(StreamDirError):
    """
    Underlying query failure. The driver message is kept as-is;
    status_code stays None unless the caller attaches one.
    """

    status_code = None


class NotFound(StreamDirError):
    status_code = 404
