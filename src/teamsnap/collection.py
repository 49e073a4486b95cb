"""The Collection+JSON document shape"""
import typing as t
from dataclasses import dataclass, field

__all__ = [
    "Link",
    "Descriptor",
    "Datum",
    "Item",
    "Collection",
    "EXCLUDED_RELS",
]

EXCLUDED_RELS = frozenset([
    "me", "apiv2_root", "root", "self", "dude", "sweet", "random", "xyzzy",
])
"""navigational relations which never denote a resource type"""


@dataclass(frozen=True)
class Link:
    rel:  str
    href: str

    @property
    def excluded(self) -> bool:
        return self.rel in EXCLUDED_RELS

    @classmethod
    def load(cls, raw: t.Mapping) -> 'Link':
        return cls(raw["rel"], raw["href"])


@dataclass(frozen=True)
class Descriptor:
    """a query or command: its ``data`` entries declare parameter names"""
    rel:    str
    href:   str
    params: t.Tuple[str, ...] = ()

    @classmethod
    def load(cls, raw: t.Mapping) -> 'Descriptor':
        return cls(raw["rel"], raw["href"],
                   tuple(d["name"] for d in raw.get("data") or ()))


@dataclass(frozen=True)
class Datum:
    name:  str
    value: t.Any
    type:  t.Optional[str] = None

    @classmethod
    def load(cls, raw: t.Mapping) -> 'Datum':
        return cls(raw["name"], raw.get("value"), raw.get("type"))


@dataclass(frozen=True)
class Item:
    href:  t.Optional[str]
    data:  t.Tuple[Datum, ...] = ()
    links: t.Tuple[Link, ...] = ()

    @classmethod
    def load(cls, raw: t.Mapping) -> 'Item':
        return cls(raw.get("href"),
                   tuple(map(Datum.load, raw.get("data") or ())),
                   tuple(map(Link.load, raw.get("links") or ())))


@dataclass(frozen=True)
class Collection:
    """a decoded ``collection`` envelope. All parts may be omitted."""
    links:    t.Tuple[Link, ...] = ()
    queries:  t.Tuple[Descriptor, ...] = ()
    commands: t.Tuple[Descriptor, ...] = ()
    items:    t.Tuple[Item, ...] = ()
    error:    t.Optional[str] = None
    raw:      t.Mapping = field(default_factory=dict, compare=False,
                                repr=False)

    @classmethod
    def load(cls, raw: t.Mapping) -> 'Collection':
        error = raw.get("error")
        return cls(
            links=tuple(map(Link.load, raw.get("links") or ())),
            queries=tuple(map(Descriptor.load, raw.get("queries") or ())),
            commands=tuple(map(Descriptor.load, raw.get("commands") or ())),
            items=tuple(map(Item.load, raw.get("items") or ())),
            error=error.get("message") if error else None,
            raw=raw,
        )
