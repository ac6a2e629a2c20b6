from .serde_error import SerdeError


class UnregisteredTypeError(SerdeError, TypeError):
    """Raised when encoding a value whose runtime type has no registry entry.
    Fatal to the encode call that hit it. """

    def __init__(self, type_: type, message: str):
        self.type_ = type_
        super().__init__(message)
