"""Basic HTTP abstractions: immutable requests and responses"""
import json
from collections.abc import Mapping
from functools import partial
from itertools import chain
from operator import attrgetter, methodcaller
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

__all__ = [
    "Request",
    "Response",
    "header_adder",
    "GET",
    "POST",
]


class _FrozenDict(Mapping):
    __slots__ = "_inner"

    def __init__(self, inner=()):
        self._inner = dict(inner)

    __len__ = property(attrgetter("_inner.__len__"))
    __iter__ = property(attrgetter("_inner.__iter__"))
    __getitem__ = property(attrgetter("_inner.__getitem__"))
    __repr__ = property(attrgetter("_inner.__repr__"))


class _SlotsMixin(object):
    __slots__ = ()

    def _asdict(self):
        return {a: getattr(self, a) for a in self.__slots__}

    def __eq__(self, other):
        if isinstance(other, self.__class__):
            return self._asdict() == other._asdict()
        return NotImplemented

    def __ne__(self, other):
        if isinstance(other, self.__class__):
            return self._asdict() != other._asdict()
        return NotImplemented

    def replace(self, **kwargs):
        """Create a copy with replaced fields

        Parameters
        ----------
        **kwargs
            fields and values to replace
        """
        return type(self)(**_merge_maps(self._asdict(), kwargs))


def _merge_maps(m1, m2):
    """merge two Mapping objects, keeping the type of the first mapping"""
    return type(m1)(chain(m1.items(), m2.items()))


class Request(_SlotsMixin):
    """An HTTP request. Query parameters are kept apart from the url,
    in insertion order, so they can be signed exactly as they are sent.

    Parameters
    ----------
    method: str
        The http method
    url: str
        The requested url, without query string
    content: bytes or None
        The request content
    params: Mapping
        The query parameters.
    headers: Mapping
        Request headers.
    """

    __slots__ = "method", "url", "content", "params", "headers"
    __hash__ = None

    def __init__(
        self,
        method,
        url,
        content=None,
        params=_FrozenDict(),
        headers=_FrozenDict(),
    ):
        self.method = method
        self.url = url
        self.content = content
        self.params = params
        self.headers = headers

    @classmethod
    def from_href(cls, method, href, **kwargs):
        """Create a request for an href which may carry its own query string.
        Parameters from the query string come before any given ``params``.

        Note
        ----
        Parameters are a mapping, so a key repeated in the query string
        keeps only its last value. The API's hrefs carry each key once.
        """
        scheme, netloc, path, query, _ = urlsplit(href)
        params = dict(parse_qsl(query, keep_blank_values=True))
        params.update(kwargs.pop("params", {}))
        return cls(
            method,
            urlunsplit((scheme, netloc, path, "", "")),
            params=params,
            **kwargs
        )

    @property
    def query_string(self):
        """The url-encoded query parameters, in order"""
        return urlencode(list(self.params.items()))

    @property
    def full_url(self):
        query = self.query_string
        return self.url + "?" + query if query else self.url

    def with_headers(self, headers):
        """Create a new request with added headers

        Parameters
        ----------
        headers: Mapping
            the headers to add
        """
        return self.replace(headers=_merge_maps(self.headers, headers))

    def with_params(self, params):
        """Create a new request with added query parameters

        Parameters
        ----------
        params: Mapping
            the query parameters to add
        """
        return self.replace(params=_merge_maps(self.params, params))

    def __repr__(self):
        return (
            "<Request: {0.method} {0.url}, params={0.params!r}, "
            "headers={0.headers!r}>"
        ).format(self)


class Response(_SlotsMixin):
    """A simple HTTP response.

    Parameters
    ----------
    status_code: int
        The HTTP status code
    content: bytes or None
        The response content
    headers: Mapping
        The headers of the response.
        Lookup of ``Content-Type`` is case-insensitive.
    """

    __slots__ = "status_code", "content", "headers"
    __hash__ = None

    def __init__(self, status_code, content=None, headers=_FrozenDict()):
        self.status_code = status_code
        self.content = content
        self.headers = headers

    @property
    def ok(self):
        return 200 <= self.status_code < 300

    @property
    def content_type(self):
        for name, value in self.headers.items():
            if name.lower() == "content-type":
                return value
        return None

    @property
    def is_json(self):
        return "json" in (self.content_type or "")

    def json(self):
        """Decode the content as JSON"""
        return json.loads(self.content.decode("utf-8"))

    def __repr__(self):
        return (
            "<Response: {0.status_code}, " "headers={0.headers!r}>"
        ).format(self)


header_adder = partial(methodcaller, "with_headers")
header_adder.__doc__ = """
Make a callable which adds headers to a request

Example
-------

>>> func = teamsnap.header_adder({'Accept': 'application/json'})
>>> func(teamsnap.GET('https://test.dev')).headers
{'Accept': 'application/json'}
"""
GET = partial(Request, "GET")
GET.__doc__ = "Shortcut for a GET request"
POST = partial(Request, "POST")
POST.__doc__ = "Shortcut for a POST request"
