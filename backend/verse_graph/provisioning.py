"""
Verse Graph API — Collection Provisioning
===========================================

What:  Ensures every required document and edge collection exists.
How:   For each name: has_collection() → create_collection(edge=...) when
       absent; when present leave it untouched and, in production mode only,
       log a warning.
Who:   Run by the application lifespan before traffic is accepted, or by hand:

           python -m verse_graph.provisioning

Idempotence:
    The existence check gates creation, so running twice creates nothing the
    second time. Names are independent; if one creation fails the error
    propagates and collections created earlier in the run are kept.
"""

import argparse
import logging
import sys
from typing import Iterable, List, Optional, Sequence, Tuple

from arango.database import StandardDatabase

from verse_graph.config import settings
from verse_graph.resources import RESOURCES

logger = logging.getLogger(__name__)

# Collections the routes are bound to; always provisioned
DOCUMENT_COLLECTIONS = tuple(r.collection for r in RESOURCES if not r.edge)
EDGE_COLLECTIONS = tuple(r.collection for r in RESOURCES if r.edge)


def required_collections(
    extra_documents: Iterable[str] = (),
    extra_edges: Iterable[str] = (),
) -> Tuple[List[str], List[str]]:
    """
    Names to provision: the routed collections first, then any extras.

    Returns:
        (document collection names, edge collection names), duplicates removed.
    """
    documents = list(dict.fromkeys([*DOCUMENT_COLLECTIONS, *extra_documents]))
    edges = list(dict.fromkeys([*EDGE_COLLECTIONS, *extra_edges]))
    return documents, edges


def _ensure_collection(
    database: StandardDatabase,
    name: str,
    edge: bool,
    production: bool,
) -> bool:
    if not database.has_collection(name):
        database.create_collection(name, edge=edge)
        logger.info("Created %s collection '%s'", "edge" if edge else "document", name)
        return True
    if production:
        logger.warning("collection %s already exists. Leaving it untouched.", name)
    return False


def provision_collections(
    database: StandardDatabase,
    document_collections: Iterable[str] = DOCUMENT_COLLECTIONS,
    edge_collections: Iterable[str] = EDGE_COLLECTIONS,
    production: Optional[bool] = None,
) -> List[str]:
    """
    Create any missing collections.

    Args:
        database:             python-arango database handle
        document_collections: Names to provision as document collections
        edge_collections:     Names to provision as edge collections
        production:           Warn about existing collections (defaults to
                              settings.is_production)

    Returns:
        Names of the collections created by this run, in creation order.
    """
    if production is None:
        production = settings.is_production

    created = []
    for name in document_collections:
        if _ensure_collection(database, name, edge=False, production=production):
            created.append(name)
    for name in edge_collections:
        if _ensure_collection(database, name, edge=True, production=production):
            created.append(name)
    return created


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="python -m verse_graph.provisioning",
        description="Create the verse/source/hasSource collections if they are missing.",
    )
    parser.add_argument(
        "--document",
        action="append",
        metavar="NAME",
        help="Extra document collection to provision (repeatable; default from DOCUMENT_COLLECTIONS)",
    )
    parser.add_argument(
        "--edge",
        action="append",
        metavar="NAME",
        help="Extra edge collection to provision (repeatable; default from EDGE_COLLECTIONS)",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )

    from verse_graph.database import connect

    database = connect(verify=True)
    documents, edges = required_collections(
        args.document or settings.document_collections_list,
        args.edge or settings.edge_collections_list,
    )
    created = provision_collections(database, documents, edges)
    logger.info("Provisioning complete: %d collection(s) created", len(created))
    return 0


if __name__ == "__main__":
    sys.exit(main())
