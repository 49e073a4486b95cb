"""Turning collection items into entities with lazily resolved relations"""
import keyword
import re
import typing as t
from dataclasses import field, make_dataclass

import aniso8601

from .collection import Collection, EXCLUDED_RELS
from .errors import MaterializationError
from .inflections import camelize, is_singular

__all__ = ["Entity", "entity_class", "parse_data", "type_of", "Materializer"]

_UNRESOLVED = object()
_RESERVED = frozenset(["_links", "_resolve", "_resolved"])


class Entity(object):
    """Base class for materialized items.

    Subclasses are frozen dataclasses created by :func:`entity_class`.
    Besides its fields, an entity knows the relations (links) of its item.
    Each relation is fetched on first access and remembered afterwards.
    """

    _sources = {}  # data name -> field name

    def _bind(self, links, resolve):
        object.__setattr__(self, "_links", links)
        object.__setattr__(self, "_resolve", resolve)
        object.__setattr__(self, "_resolved", {})

    @property
    def relations(self):
        """names of the relations which may be followed"""
        return tuple(self.__dict__.get("_links", ()))

    def follow(self, rel):
        """The entity or entities at the end of a relation.

        Singular relations (e.g. ``team``) give one entity or ``None``,
        plural relations (e.g. ``members``) give a list.
        Only the first call for a relation fetches it.

        Raises
        ------
        KeyError
            if the entity has no such relation
        """
        value = self._resolved.get(rel, _UNRESOLVED)
        if value is _UNRESOLVED:
            entities = self._resolve(self._links[rel])
            if is_singular(rel):
                value = entities[0] if entities else None
            else:
                value = entities
            self._resolved[rel] = value
        return value

    def __getattr__(self, name):
        if name in self.__dict__.get("_links", ()):
            return self.follow(name)
        raise AttributeError("{!r} object has no attribute {!r}".format(
            type(self).__name__, name))

    def __repr__(self):
        ident = getattr(self, "id", None)
        if ident is None:
            return "<{} href={!r}>".format(type(self).__name__, self.href)
        return "<{} id={!r}>".format(type(self).__name__, ident)


def _field_name(name):
    name = re.sub(r"\W", "_", name)
    if name[:1].isdigit():
        name = "_" + name
    if (keyword.iskeyword(name) or hasattr(Entity, name)
            or name in _RESERVED):
        name += "_"
    return name


def entity_class(name, sample):
    """Create an entity dataclass from the fields of a sample item.

    Parameters
    ----------
    name: str
        the class name
    sample: ~typing.Mapping[str, ~typing.Any]
        the first item's fields. Field types are the sample values' types.

    Returns
    -------
    ~typing.Type[Entity]
    """
    sources = {"href": "href"}
    specs = [("href", t.Optional[str], field(default=None))]
    for data_name, value in sample.items():
        if data_name in sources:
            continue
        attr = sources[data_name] = _field_name(data_name)
        specs.append((attr, t.Any if value is None else type(value),
                      field(default=None)))
    return make_dataclass(name, specs, bases=(Entity,), frozen=True,
                          repr=False, namespace={"_sources": sources})


def parse_data(item):
    """The fields of an item, in order. ``DateTime`` values are parsed."""
    data = {}
    for datum in item.data:
        value = datum.value
        if value and datum.type == "DateTime":
            value = aniso8601.parse_datetime(value)
        data[datum.name] = value
    return data


def type_of(item):
    """The resource type name of an item, from its ``type`` field"""
    for datum in item.data:
        if datum.name == "type" and datum.value:
            return datum.value
    raise MaterializationError(
        "Item {!r} has no 'type' field".format(item.href))


class Materializer(object):
    """Loads the items of collection documents as entities.

    Parameters
    ----------
    registry
        provides the resource type for a name,
        see :class:`~teamsnap.resources.Registry`
    runner: ~teamsnap.transport.Runner
        used to fetch relations
    """

    def __init__(self, registry, runner):
        self.registry, self.runner = registry, runner

    def load(self, document):
        """the entities of a collection document

        Parameters
        ----------
        document: ~typing.Mapping or ~teamsnap.collection.Collection
        """
        if not isinstance(document, Collection):
            document = Collection.load(document)
        return [self.load_item(item) for item in document.items]

    def load_item(self, item):
        data = parse_data(item)
        rtype = self.registry.ensure(camelize(type_of(item)))
        cls = rtype.entity_class_for(data)
        values = {
            attr: data[name] for name, attr in cls._sources.items()
            if name in data
        }
        values["href"] = item.href
        entity = cls(**values)
        entity._bind({
            link.rel: link.href for link in item.links
            if link.rel not in EXCLUDED_RELS
        }, self.follow)
        return entity

    def follow(self, href):
        """the entities at an href"""
        return self.load(self.runner.run("GET", href))
