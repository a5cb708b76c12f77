class LogbookError(Exception):
    """Base class for errors raised by the logbook client."""


class TransportError(LogbookError):
    """The request never completed (connection refused, timeout, bad URL...)."""

    def __init__(self, message: str, url: str = ""):
        super().__init__(message)
        self.url = url
