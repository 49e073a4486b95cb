"""Sending requests with different HTTP clients in a unified manner"""
import logging
import socket
import urllib.request
from functools import singledispatch
from urllib.error import HTTPError, URLError

import requests

from .errors import Timeout, TransportError
from .http import Response

__all__ = ["send"]

logger = logging.getLogger(__name__)


@singledispatch
def send(client, request, timeout=None):
    """Given a client, send a :class:`~teamsnap.http.Request`,
    returning a :class:`~teamsnap.http.Response`.

    A :func:`~functools.singledispatch` function.
    Network failures are raised as :class:`~teamsnap.errors.TransportError`
    (:class:`~teamsnap.errors.Timeout` if the request took too long);
    HTTP error statuses are returned as regular responses.

    Parameters
    ----------
    client: any registered client type
        The client with which to send the request.

        Client types registered by default:

        * :class:`requests.Session`
        * :class:`urllib.request.OpenerDirector`
          (e.g. from :func:`~urllib.request.build_opener`)

    request: Request
        The request to send
    timeout: float or None
        Seconds to wait for the server, ``None`` for the client's default.

    Returns
    -------
    Response
        the resulting response


    Example of registering a new HTTP client:

    >>> @send.register(MyClientClass)
    ... def _send(client, request, timeout=None):
    ...     r = client.send(request, timeout=timeout)
    ...     return Response(r.status, r.read(), headers=r.get_headers())
    """
    raise TypeError("client {!r} not registered".format(client))


@send.register(requests.Session)
def _requests_send(session, req, timeout=None):
    """send a request with the `requests` library"""
    logger.debug("%s %s", req.method, req.url)
    try:
        res = session.request(
            req.method,
            req.url,
            data=req.content,
            params=list(req.params.items()),
            headers=dict(req.headers),
            timeout=timeout,
        )
    except requests.Timeout as exc:
        raise Timeout("{} {} timed out".format(req.method, req.url)) from exc
    except requests.RequestException as exc:
        raise TransportError(
            "{} {} failed: {}".format(req.method, req.url, exc)
        ) from exc
    return Response(res.status_code, res.content, headers=res.headers)


@send.register(urllib.request.OpenerDirector)
def _urllib_send(opener, req, timeout=None):
    """Send a request with an :mod:`urllib` opener"""
    logger.debug("%s %s", req.method, req.url)
    raw_req = urllib.request.Request(
        req.full_url, req.content, headers=dict(req.headers)
    )
    raw_req.method = req.method
    kwargs = {} if timeout is None else {"timeout": timeout}
    try:
        res = opener.open(raw_req, **kwargs)
    except HTTPError as http_err:
        res = http_err
    except URLError as exc:
        if isinstance(exc.reason, socket.timeout):
            raise Timeout(
                "{} {} timed out".format(req.method, req.url)
            ) from exc
        raise TransportError(
            "{} {} failed: {}".format(req.method, req.url, exc.reason)
        ) from exc
    except socket.timeout as exc:
        raise Timeout("{} {} timed out".format(req.method, req.url)) from exc
    return Response(res.getcode(), content=res.read(), headers=res.headers)
