"""Types and functionality relating to queries"""
import typing as t
from concurrent.futures import ThreadPoolExecutor
from functools import partial

import requests

from .clients import send
from .errors import TransportError

__all__ = ["Query", "execute", "execute_all", "executor"]

T = t.TypeVar("T")


def _identity(obj):
    return obj


class Query(t.Generic[T]):
    """Abstract base class for query-like objects.
    Any object whose :meth:`~object.__iter__`
    returns a :class:`~teamsnap.http.Request`/:class:`~teamsnap.http.Response`
    generator implements it.

    Note
    ----
    Generator iterators themselves also implement this interface
    (i.e. :meth:`~object.__iter__` returns the generator itself).

    Note
    ----
    A :class:`~teamsnap.errors.TransportError` raised while sending
    a request is thrown into the generator at the ``yield``,
    so a query may recover from network failures.

    Example
    -------

    >>> def root() -> teamsnap.Query[dict]:
    ...    response = yield teamsnap.GET('http://apiv3.teamsnap.com/')
    ...    return response.json()['collection']
    """

    def __iter__(self):
        """A generator iterator which resolves the query

        Returns
        -------
        ~typing.Generator[Request, Response, T]
        """
        raise NotImplementedError()

    def __execute__(self, client, auth, timeout=None):
        """Default execution logic for a query,
        which uses the query's :meth:`~Query.__iter__`.

        Parameters
        ----------
        client
            the client instance passed to :func:`execute`
        auth: ~typing.Callable[[Request], Request]
            a callable to authenticate a :class:`~teamsnap.http.Request`
        timeout: float or None
            seconds to wait for each response

        Returns
        -------
        T
            the query result
        """
        gen = iter(self)
        request = next(gen)
        while True:
            try:
                response = send(client, auth(request), timeout=timeout)
            except TransportError as exc:
                step = partial(gen.throw, exc)
            else:
                step = partial(gen.send, response)
            try:
                request = step()
            except StopIteration as e:
                return e.value


def execute(query, auth=None, client=None, timeout=None):
    """Execute a query, returning its result

    Parameters
    ----------
    query: Query[T]
        The query to resolve
    auth: ~typing.Callable[[Request], Request] or None
        A callable to authenticate requests, applied last
        to each request. ``None`` for no authentication.
    client
        The HTTP client to use.
        Its type must have been registered
        with :func:`~teamsnap.clients.send`.
        If not given, a new :class:`requests.Session` is used.
    timeout: float or None
        Seconds to wait for each response.

    Returns
    -------
    T
        the query result
    """
    exec_fn = getattr(type(query), "__execute__", Query.__execute__)
    return exec_fn(
        query,
        requests.Session() if client is None else client,
        _identity if auth is None else auth,
        timeout,
    )


def execute_all(queries, max_workers=8, **kwargs):
    """Execute queries concurrently, returning their results in order.

    All queries are submitted at once to a pool of at most ``max_workers``
    threads. The call returns once every query has finished; the first
    exception (in query order) is re-raised.

    Parameters
    ----------
    queries: ~typing.Iterable[Query[T]]
        The queries to resolve
    max_workers: int
        The maximum number of requests in flight
    **kwargs
        arguments to pass to :func:`execute`

    Returns
    -------
    ~typing.List[T]
        the query results
    """
    queries = list(queries)
    if not queries:
        return []
    with ThreadPoolExecutor(max_workers=min(max_workers, len(queries))) as pool:
        futures = [pool.submit(execute, q, **kwargs) for q in queries]
    return [future.result() for future in futures]


def executor(**kwargs):
    """Create a version of :func:`execute` with bound arguments.

    Parameters
    ----------
    **kwargs
        arguments to pass to :func:`execute`

    Returns
    -------
    ~typing.Callable[[Query[T]], T]
        an :func:`execute`-like function
    """
    return partial(execute, **kwargs)
