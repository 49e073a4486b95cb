"""
A client for the TeamSnap API, built at runtime from the API's own
Collection+JSON root document.

The entire public API is available at root level::

    from teamsnap import Client, NotFoundError, Request, execute, ...
"""

from . import clients, http
from .auth import *  # noqa
from .cache import *  # noqa
from .client import *  # noqa
from .clients import *  # noqa
from .collection import *  # noqa
from .entities import *  # noqa
from .errors import *  # noqa
from .http import *  # noqa
from .query import *  # noqa
from .resources import *  # noqa
from .transport import *  # noqa

__version__ = __import__("importlib.metadata").metadata.version(__name__)
__all__ = ["clients", "http"]
