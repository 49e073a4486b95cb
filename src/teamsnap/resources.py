"""Resource types and the operations registered on them"""
import logging
from collections.abc import Mapping
from dataclasses import fields

from .collection import EXCLUDED_RELS
from .entities import entity_class
from .errors import ArgumentError, NotFoundError

__all__ = [
    "Operation",
    "Namespace",
    "ResourceType",
    "Registry",
    "register_endpoints",
]

logger = logging.getLogger(__name__)


class Operation(object):
    """A query or command of the API, callable with keyword arguments.

    Calling it validates the argument names against the declared
    parameters, runs the call, and returns the resulting entities.

    Parameters
    ----------
    descriptor: ~teamsnap.collection.Descriptor
        the query or command
    via: str
        ``"GET"`` for queries, ``"POST"`` for commands
    runner: ~teamsnap.transport.Runner
    loader: ~typing.Callable[[dict], ~typing.List[Entity]]
        turns the resulting collection document into entities
    """

    __slots__ = "rel", "href", "params", "via", "_runner", "_loader"

    def __init__(self, descriptor, via, runner, loader):
        self.rel, self.href = descriptor.rel, descriptor.href
        self.params, self.via = descriptor.params, via
        self._runner, self._loader = runner, loader

    def __call__(self, **args):
        if not all(name in self.params for name in args):
            raise ArgumentError(
                "Invalid argument(s). Valid argument(s) are {!r}".format(
                    list(self.params)))
        return self._loader(self._runner.run(self.via, self.href, args))

    def __repr__(self):
        return "<Operation: {0.via} {0.rel}({1})>".format(
            self, ", ".join(self.params))


class Namespace(object):
    """An owner of operations, which are available as attributes.

    Operations named like an existing attribute remain available
    through :attr:`operations`.
    """

    def __init__(self):
        self.operations = {}

    def add_operation(self, operation):
        self.operations[operation.rel] = operation

    def __getattr__(self, name):
        try:
            return self.__dict__["operations"][name]
        except KeyError:
            raise AttributeError("{!r} object has no attribute {!r}".format(
                type(self).__name__, name)) from None

    def __dir__(self):
        return sorted(set(super().__dir__()) | set(self.operations))


class ResourceType(Namespace):
    """A kind of entity discovered from the API.

    Parameters
    ----------
    name: str
        the type name, e.g. ``Team``
    rel: str or None
        the root relation it was discovered from, e.g. ``teams``
    href: str or None
        the location of its collection document
    """

    def __init__(self, name, rel=None, href=None):
        super().__init__()
        self.name, self.rel, self.href = name, rel, href
        self.entity_class = None

    def entity_class_for(self, sample):
        """The entity class of this type. The first sample given
        determines the fields for good."""
        if self.entity_class is None:
            self.entity_class = entity_class(self.name, sample)
            logger.debug("schema of %s: %s", self.name, list(self.schema))
        return self.entity_class

    @property
    def schema(self):
        """field names and types, or ``None`` before any item was loaded"""
        if self.entity_class is None:
            return None
        return {f.name: f.type for f in fields(self.entity_class)}

    @property
    def can_find(self):
        return "search" in self.operations

    def find(self, id):
        """The entity with the given id, using the ``search`` query.

        Raises
        ------
        ~teamsnap.errors.NotFoundError
            if there is no such entity
        AttributeError
            if the type has no ``search`` query
        """
        if not self.can_find:
            raise AttributeError(
                "{} has no search query to find by".format(self.name))
        found = self.operations["search"](id=id)
        if not found:
            raise NotFoundError(self.name, id)
        return found[0]

    def __repr__(self):
        return "<ResourceType: {}>".format(self.name)


class Registry(Mapping):
    """The resource types of a client, by name.
    Types are only ever added."""

    def __init__(self):
        self._types = {}

    def __getitem__(self, name):
        return self._types[name]

    def __iter__(self):
        return iter(self._types)

    def __len__(self):
        return len(self._types)

    def register(self, name, rel=None, href=None):
        """Add a resource type, unless one with that name exists.

        Returns
        -------
        ~typing.Tuple[ResourceType, bool]
            the type, and whether it is new
        """
        try:
            return self._types[name], False
        except KeyError:
            rtype = self._types[name] = ResourceType(name, rel, href)
            logger.debug("registered resource type %s", name)
            return rtype, True

    def ensure(self, name):
        """the resource type for a name, added if unknown"""
        return self.register(name)[0]

    def __repr__(self):
        return "<Registry: {}>".format(", ".join(self._types))


def register_endpoints(owner, collection, runner, loader):
    """Install the queries (as GET) and commands (as POST) of a collection
    on an owner, in the order they are declared.

    Parameters
    ----------
    owner: Namespace
    collection: ~teamsnap.collection.Collection
    runner: ~teamsnap.transport.Runner
    loader: ~typing.Callable[[dict], ~typing.List[Entity]]
    """
    for descriptors, via in [(collection.queries, "GET"),
                             (collection.commands, "POST")]:
        for descriptor in descriptors:
            if descriptor.rel in EXCLUDED_RELS:
                continue
            owner.add_operation(Operation(descriptor, via, runner, loader))
