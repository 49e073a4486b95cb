"""Request authentication: bearer tokens and HMAC signatures"""
import hashlib
import hmac
import time
import uuid

from .errors import ConfigurationError
from .http import header_adder

__all__ = [
    "token_auth",
    "HmacAuth",
    "hmac_signature",
    "make_auth",
    "HMAC_HEADER",
]

HMAC_HEADER = "X-Teamsnap-Hmac"


def token_auth(token):
    """Create a bearer token authentication callable

    Parameters
    ----------
    token: str
        The OAuth access token

    Returns
    -------
    ~typing.Callable[[Request], Request]
        A callable which adds an ``Authorization`` header to a request.
    """
    return header_adder({"Authorization": "Bearer " + token})


def hmac_signature(client_secret, query_string, body=""):
    """The signature of a request with the given query string and body.

    The message ``"/?" + query_string + body`` is hashed with SHA-256;
    the hex digest of that hash is signed with HMAC-SHA256,
    keyed with the client secret.

    Returns
    -------
    str
        the hex signature
    """
    message = "/?" + query_string + (body or "")
    message_hash = hashlib.sha256(message.encode("utf-8")).hexdigest()
    return hmac.new(
        client_secret.encode("utf-8"),
        message_hash.encode("ascii"),
        hashlib.sha256,
    ).hexdigest()


def _new_nonce():
    return str(uuid.uuid4())


class HmacAuth(object):
    """Signs requests with a client id and secret.

    The client id, a fresh nonce and the current timestamp are added to
    the query parameters, and the signature over the complete query string
    and body is sent in the :data:`HMAC_HEADER` header.
    Must be applied after all other query parameters are set.

    Parameters
    ----------
    client_id: str
    client_secret: str
    nonce: ~typing.Callable[[], str]
        Generates a unique nonce per request
    clock: ~typing.Callable[[], float]
        Returns the current Unix time
    """

    __slots__ = "client_id", "_client_secret", "_nonce", "_clock"

    def __init__(self, client_id, client_secret, nonce=_new_nonce,
                 clock=time.time):
        self.client_id = client_id
        self._client_secret = client_secret
        self._nonce, self._clock = nonce, clock

    def __call__(self, request):
        signed = request.with_params({
            "hmac_client_id": self.client_id,
            "hmac_nonce": self._nonce(),
            "hmac_timestamp": int(self._clock()),
        })
        body = signed.content.decode("utf-8") if signed.content else ""
        return signed.with_headers({
            HMAC_HEADER: hmac_signature(
                self._client_secret, signed.query_string, body
            )
        })

    def __repr__(self):
        return "HmacAuth({!r})".format(self.client_id)


def make_auth(token=None, client_id=None, client_secret=None):
    """Pick the authentication mode for the given credentials.

    A token takes precedence over a client id and secret pair.

    Raises
    ------
    ~teamsnap.errors.ConfigurationError
        if neither a token nor a complete id and secret pair is given
    """
    if token:
        return token_auth(token)
    elif client_id and client_secret:
        return HmacAuth(client_id, client_secret)
    raise ConfigurationError(
        "You must provide a token or a client_id and client_secret pair"
    )
