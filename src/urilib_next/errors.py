class UriError(Exception):
    """Base class for errors raised by urilib_next."""


class InvalidArgument(UriError, ValueError):
    """A required argument was missing, empty or out of range."""


class DecodeError(UriError, ValueError):
    """A query token holds a malformed percent-encoded sequence."""

    def __init__(self, token: str, position: int, reason: str):
        self.token = token
        self.position = position
        self.reason = reason
        super().__init__(f"{reason} at position {position} in {token!r}")
