"""Running single API calls: building requests, classifying responses,
and falling back on the backup cache during initialization"""
import json
import logging
from datetime import date, datetime
from functools import partial, singledispatch
from urllib.parse import urljoin

from toolz import valfilter, valmap

from .errors import APIError, ProtocolError, Timeout, TransportError
from .http import Request
from .query import execute, execute_all

__all__ = [
    "collection_request",
    "fetch",
    "fetch_initial",
    "Runner",
    "EMPTY_DOCUMENT",
]

logger = logging.getLogger(__name__)

EMPTY_DOCUMENT = {"links": []}
"""what discovery starts from when the API cannot be reached in time"""

_JSON_HEADERS = {"Accept": "application/json"}


@singledispatch
def _dump_param(val):
    return str(val)


@_dump_param.register(bool)
def _dump_bool(val):
    return "true" if val else "false"


@_dump_param.register(date)
def _dump_date(val):
    return val.isoformat()


def _json_default(obj):
    if isinstance(obj, (date, datetime)):
        return obj.isoformat()
    raise TypeError("{!r} is not JSON serializable".format(obj))


def collection_request(via, href, args=None):
    """Build the request for calling an href.

    Parameters
    ----------
    via: str
        ``"GET"`` (arguments become query parameters)
        or ``"POST"`` (arguments become a JSON body)
    href: str
        the absolute url, possibly with its own query string
    args: Mapping or None
        the call's arguments

    Returns
    -------
    ~teamsnap.http.Request
    """
    args = args or {}
    if via == "GET":
        return Request.from_href(
            "GET", href,
            params=valmap(_dump_param, valfilter(_not_none, args)),
            headers=_JSON_HEADERS,
        )
    elif via == "POST":
        return Request.from_href(
            "POST", href,
            content=json.dumps(args, default=_json_default).encode("utf-8"),
            headers={**_JSON_HEADERS, "Content-Type": "application/json"},
        )
    raise ValueError("Don't know how to run `{}`".format(via))


def _not_none(value):
    return value is not None


def _error_message(response):
    try:
        return response.json()["collection"]["error"]["message"]
    except (ValueError, KeyError, TypeError):
        return "HTTP {} error".format(response.status_code)


def _load_collection(via, response):
    """the decoded collection of a response, raise on errors"""
    if response.ok and response.is_json:
        try:
            collection = response.json().get("collection") or {}
        except (ValueError, AttributeError) as exc:
            raise ProtocolError(
                "`{}` call was unsuccessful. Invalid JSON body ({})".format(
                    via, exc),
                content_type=response.content_type,
            ) from exc
        if not isinstance(collection, dict):
            raise ProtocolError(
                "`{}` call was unsuccessful. Unexpected collection "
                "{!r}".format(via, collection),
                content_type=response.content_type,
            )
        return collection
    elif response.is_json:
        raise APIError(_error_message(response))
    raise ProtocolError(
        "`{}` call was unsuccessful. Unexpected response content-type "
        "'{}'. Check the API connection".format(via, response.content_type),
        content_type=response.content_type,
    )


def fetch(via, href, args=None):
    """Query for the collection document at an href

    Raises
    ------
    ~teamsnap.errors.APIError
        if the API returned an error document
    ~teamsnap.errors.ProtocolError
        if the response was not JSON
    """
    response = yield collection_request(via, href, args)
    return _load_collection(via, response)


def fetch_initial(href, cache=None):
    """Query for a collection document during initialization.

    Successful results are written to the backup cache.
    On failure, the cached document for the href is returned instead.
    Without one, a timeout results in an empty document,
    other errors are raised.
    """
    try:
        response = yield collection_request("GET", href)
        document = _load_collection("GET", response)
    except (TransportError, APIError, ProtocolError) as exc:
        cached = None if cache is None else cache.read(href)
        if cached is not None:
            logger.warning(
                "Connection to API failed (%s). Using backup cache file "
                "to initialize endpoints for %s", exc, href,
            )
            return cached
        elif isinstance(exc, Timeout):
            logger.warning(
                "Connection to API failed (%s). Initializing %s "
                "with empty class structure", exc, href,
            )
            return dict(EMPTY_DOCUMENT)
        raise
    if cache is not None:
        cache.write(href, document)
    return document


class Runner(object):
    """Runs calls against one API with bound settings.

    Parameters
    ----------
    url: str
        the API root, against which relative hrefs are resolved
    auth: ~typing.Callable[[Request], Request]
        request authentication
    client
        the HTTP client (see :func:`~teamsnap.clients.send`)
    cache: ~teamsnap.cache.BackupCache or None
        fallback storage for initialization calls
    timeout: float or None
        seconds to wait for regular calls
    init_timeout: float or None
        seconds to wait for initialization calls
    max_workers: int
        concurrency of :meth:`run_initial_all`
    """

    def __init__(self, url, auth, client, cache=None, timeout=None,
                 init_timeout=None, max_workers=8):
        self.url = url
        self.cache = cache
        self.max_workers = max_workers
        self._execute = partial(execute, auth=auth, client=client,
                                timeout=timeout)
        self._execute_initial = partial(execute, auth=auth, client=client,
                                        timeout=init_timeout)
        self._init_options = dict(auth=auth, client=client,
                                  timeout=init_timeout)

    def resolve(self, href):
        return urljoin(self.url, href)

    def run(self, via, href, args=None):
        """The collection document returned by calling an href"""
        return self._execute(fetch(via, self.resolve(href), args))

    def run_initial(self, href):
        """The collection document at an href, with the fallbacks of
        :func:`fetch_initial`"""
        return self._execute_initial(
            fetch_initial(self.resolve(href), self.cache))

    def run_initial_all(self, hrefs):
        """:meth:`run_initial` for several hrefs at once.
        Results are in the order of the hrefs."""
        return execute_all(
            (fetch_initial(self.resolve(h), self.cache) for h in hrefs),
            max_workers=self.max_workers,
            **self._init_options
        )

    def __repr__(self):
        return "Runner({!r})".format(self.url)
