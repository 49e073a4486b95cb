"""Registering resource types from the links of a root document"""
import logging

from toolz import unique

from .collection import Collection
from .inflections import classify
from .resources import register_endpoints

__all__ = ["candidate_links", "discover"]

logger = logging.getLogger(__name__)


def candidate_links(root, registry):
    """The root links which would register a new resource type:
    not excluded, not yet registered, and the first for their type name."""
    return list(unique(
        (link for link in root.links
         if not link.excluded and classify(link.rel) not in registry),
        key=lambda link: classify(link.rel),
    ))


def discover(root, registry, runner, loader, namespace=None):
    """Register a resource type for each new relation of a root document.

    The collection documents of all new types are fetched concurrently.
    Each type then gets the queries and commands of its own collection.
    Finally, the root's own queries and commands go to ``namespace``.

    Parameters
    ----------
    root: ~teamsnap.collection.Collection
        the root document
    registry: ~teamsnap.resources.Registry
        the resource types registered so far
    runner: ~teamsnap.transport.Runner
    loader: ~typing.Callable[[dict], ~typing.List[Entity]]
        turns collection documents into entities
    namespace: ~teamsnap.resources.Namespace or None
        the owner of the root operations

    Returns
    -------
    ~typing.Set[~teamsnap.resources.ResourceType]
        the newly registered types
    """
    links = candidate_links(root, registry)
    documents = runner.run_initial_all([link.href for link in links])

    registered = []
    for link, document in zip(links, documents):
        rtype, created = registry.register(
            classify(link.rel), rel=link.rel, href=link.href)
        if created:
            registered.append((rtype, Collection.load(document)))

    for rtype, collection in registered:
        register_endpoints(rtype, collection, runner, loader)
        logger.debug("%s operations: %s", rtype.name, list(rtype.operations))

    if namespace is not None:
        register_endpoints(namespace, root, runner, loader)
    logger.info("discovered %d resource types", len(registered))
    return {rtype for rtype, _ in registered}
