"""Exceptions raised by the client"""

__all__ = [
    "Error",
    "ConfigurationError",
    "ArgumentError",
    "TransportError",
    "Timeout",
    "APIError",
    "ProtocolError",
    "NotFoundError",
    "MaterializationError",
]


class Error(Exception):
    """base class for all errors raised by this library"""


class ConfigurationError(Error, ValueError):
    """the client was constructed with missing or invalid settings"""


class ArgumentError(Error, TypeError):
    """an operation was called with arguments it does not accept"""


class TransportError(Error):
    """the request could not be completed at the network level"""


class Timeout(TransportError):
    """the request did not complete in time"""


class APIError(Error):
    """the API answered with an error document"""


class ProtocolError(Error):
    """a response could not be interpreted

    Parameters
    ----------
    message: str
        the error description
    content_type: str or None
        the offending content type
    """

    def __init__(self, message, content_type=None):
        super().__init__(message)
        self.content_type = content_type


class NotFoundError(Error, LookupError):
    """a lookup by id found nothing"""

    def __init__(self, type_name, id):
        super().__init__(
            "Could not find a {} with an id of '{}'.".format(type_name, id)
        )
        self.type_name, self.id = type_name, id


class MaterializationError(Error):
    """an item could not be turned into an entity"""
