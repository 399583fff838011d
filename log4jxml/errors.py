"""Exceptions raised while decoding log4j event fragments."""


class FragmentDecodeError(Exception):
    """Raised when a single event fragment cannot be decoded."""

    def __init__(self, message: str, fragment: str = ""):
        super().__init__(message)
        self.fragment = fragment
