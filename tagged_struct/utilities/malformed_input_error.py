from .serde_error import SerdeError


class MalformedInputError(SerdeError, ValueError):
    """Raised when decode input is not valid JSON text. No partial result is produced.
    NOTE: lineno and colno point at the offending character when the parser reports one. """

    def __init__(self, message: str, lineno: int | None = None, colno: int | None = None):
        self.lineno = lineno
        self.colno = colno
        super().__init__(message)
