from .serde_error import SerdeError


class EncodingError(SerdeError, ValueError):
    """Raised when a value graph cannot be written as JSON (cycles, non-string keys, non-finite numbers, reserved field names)."""
