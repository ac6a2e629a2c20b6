class SerdeError(Exception):
    """Base class for every error raised by tagged_struct."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)
