"""The client: discovery at construction, then access to resource types,
root operations, and bulk loading"""
import logging

import requests
from toolz import concat

from .auth import make_auth
from .cache import BackupCache
from .collection import Collection
from .discovery import discover
from .entities import Materializer
from .errors import ArgumentError
from .inflections import camelize, classify
from .resources import Namespace, Registry
from .transport import Runner

__all__ = ["Client", "DEFAULT_URL"]

logger = logging.getLogger(__name__)

DEFAULT_URL = "http://apiv3.teamsnap.com"


class Client(Namespace):
    """A client for the API, shaped by the API's own root document.

    Construction fetches the root document (or loads it from the backup
    cache) and registers a :class:`~teamsnap.resources.ResourceType`
    for each resource collection it links to.
    Resource types and the root's operations are available as attributes:

    >>> client = teamsnap.Client(token='...')
    >>> team = client.Team.find(1)
    >>> team.members
    [<Member id=1>, ...]

    Parameters
    ----------
    url: str
        The API root
    token: str or None
        An OAuth bearer token
    client_id: str or None
        The id for HMAC signed requests, together with ``client_secret``
    client_secret: str or None
        The secret for HMAC signed requests
    backup_cache: bool or str
        ``True`` for the default backup cache file, a path to use another
        file, ``False`` to disable the backup cache
    http_client
        The HTTP client, of a type registered with
        :func:`~teamsnap.clients.send`. Defaults to a new
        :class:`requests.Session`.
    timeout: float or None
        Seconds to wait for regular calls
    init_timeout: float or None
        Seconds to wait for each call during discovery
    max_workers: int
        Number of collection documents fetched at once during discovery

    Raises
    ------
    ~teamsnap.errors.ConfigurationError
        if no valid credentials are given
    """

    def __init__(self, url=DEFAULT_URL, token=None, client_id=None,
                 client_secret=None, backup_cache=True, http_client=None,
                 timeout=None, init_timeout=10, max_workers=8):
        auth = make_auth(token, client_id, client_secret)
        super().__init__()
        self.url = url
        self.types = Registry()
        self.runner = Runner(
            url, auth,
            requests.Session() if http_client is None else http_client,
            cache=BackupCache.from_option(backup_cache),
            timeout=timeout,
            init_timeout=init_timeout,
            max_workers=max_workers,
        )
        self.materializer = Materializer(self.types, self.runner)
        self.root = Collection.load(self.runner.run_initial("/"))
        self.rediscover()

    def rediscover(self):
        """Register resource types for relations of the root document
        which have none yet. Returns the newly registered types."""
        return discover(self.root, self.types, self.runner,
                        self.materializer.load, namespace=self)

    def type_for(self, name):
        """The resource type for a type name (``Team``),
        item type (``team``), or relation (``teams``)

        Raises
        ------
        KeyError
            if there is no such type
        """
        for candidate in (name, camelize(name), classify(name)):
            if candidate in self.types:
                return self.types[candidate]
        raise KeyError(name)

    def load(self, document):
        """The entities of a collection document"""
        return self.materializer.load(document)

    def bulk_load(self, team_id=None, types=(), **params):
        """Entities of several types for a team, in one list.

        Each type's ``search`` query is run with the team id and any
        other parameters. Results are ordered by type, in the given order,
        then as the API returns them.

        Parameters
        ----------
        team_id
            the team to load for
        types: ~typing.Iterable[str]
            type names, e.g. ``['team', 'member']``
        **params
            more search parameters for every type

        Raises
        ------
        ~teamsnap.errors.ArgumentError
            if no ``team_id`` is given
        """
        if team_id is None:
            raise ArgumentError("You must include a team_id parameter")
        searches = [self.type_for(name).operations["search"]
                    for name in types]
        return list(concat(
            search(team_id=team_id, **params) for search in searches
        ))

    def __getattr__(self, name):
        types = self.__dict__.get("types", {})
        if name in types:
            return types[name]
        return super().__getattr__(name)

    def __dir__(self):
        return sorted(set(super().__dir__()) | set(self.types))

    def __repr__(self):
        return "<Client: {}>".format(self.url)
