"""
Verse Graph API — Database Connection Management
==================================================

What:  python-arango client and database handle built from settings.
How:   ArangoClient is created once per application; `connect()` returns the
       StandardDatabase handle that every collection store shares.
Who:   Called by the application factory, the provisioning CLI, and the
       health route (through `ping()`).
When:  Handle is created at app construction; no request is sent until the
       first store call (python-arango connects lazily unless verify=True).

Connection Notes:
    python-arango keeps an HTTP session per client. The database handle is
    safe to share across the FastAPI threadpool, so there is no per-request
    session dependency as there would be with a SQL driver.
"""

import logging
from typing import Optional

from arango import ArangoClient
from arango.database import StandardDatabase
from arango.exceptions import ArangoError

from verse_graph.config import Settings, settings as default_settings

logger = logging.getLogger(__name__)


def create_client(config: Optional[Settings] = None) -> ArangoClient:
    """Build an ArangoClient for the configured host list."""
    config = config or default_settings
    hosts = [host.strip() for host in config.arango_url.split(",") if host.strip()]
    return ArangoClient(hosts=hosts if len(hosts) > 1 else hosts[0])


def connect(
    client: Optional[ArangoClient] = None,
    config: Optional[Settings] = None,
    verify: bool = False,
) -> StandardDatabase:
    """
    Return the database handle for `ARANGO_DB`.

    Args:
        client: Existing client to reuse (a new one is built when omitted)
        config: Settings to read credentials from (global settings by default)
        verify: Issue a round trip to check credentials immediately
    """
    config = config or default_settings
    client = client or create_client(config)
    logger.debug("Opening ArangoDB database '%s' at %s", config.arango_db, config.arango_url)
    return client.db(
        config.arango_db,
        username=config.arango_username,
        password=config.arango_password,
        verify=verify,
    )


def ping(database: StandardDatabase) -> bool:
    """
    Lightweight connectivity check used by GET /health.

    Returns True when ArangoDB answers a version request, False otherwise.
    """
    try:
        database.version()
        return True
    except (ArangoError, OSError) as e:
        logger.warning("ArangoDB ping failed: %s", str(e))
        return False
