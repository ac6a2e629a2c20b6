from .serde_error import SerdeError


class SetupError(SerdeError):
    """Exception raised for registration errors."""
