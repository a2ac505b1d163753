"""Alias-keyed registry of MongoDB connections.

Documents look their database up by ``Settings.connection_alias`` at query
time, so ``connect`` must run (usually in the app lifespan) before any
query is issued.
"""

from __future__ import annotations

import logging
from typing import NamedTuple

from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import ConfigurationError
from pymongo.uri_parser import parse_uri

from gluestick.utils.exceptions import NotConnected

logger = logging.getLogger(__name__)


class _Connection(NamedTuple):
    client: AsyncMongoClient
    database: AsyncDatabase


_connections: dict[str, _Connection] = {}


def database_name(uri: str) -> str:
    """Return the database named in a MongoDB URI.

    Raises:
        ValueError: If the URI is malformed, names no database, or names a
            ``db.collection`` namespace instead of a database
    """
    try:
        parsed = parse_uri(uri)
    except ConfigurationError as e:
        raise ValueError(f"Invalid MongoDB URI: {e}") from e
    if not parsed["database"]:
        raise ValueError("MongoDB URI must name a database, e.g. mongodb://host:27017/gluestick")
    if parsed["collection"]:
        raise ValueError(f"MongoDB URI names a collection, not a database: {parsed['database']}.{parsed['collection']}")
    return parsed["database"]


async def connect(uri: str, *, alias: str = "default", **client_options) -> AsyncDatabase:
    """Open a client for ``uri`` and register it under ``alias``.

    The client connects lazily; this call performs no I/O. A second call
    with the same alias replaces the registered connection.

    Raises:
        ValueError: If the URI does not name a database
    """
    name = database_name(uri)
    client = AsyncMongoClient(uri, **client_options)
    _connections[alias] = _Connection(client, client[name])
    logger.info("Registered MongoDB database '%s' as '%s'", name, alias)
    return _connections[alias].database


async def disconnect(alias: str = "default") -> None:
    connection = _connections.pop(alias, None)
    if connection is not None:
        await connection.client.close()
        logger.info("Closed MongoDB connection '%s'", alias)


def _lookup(alias: str) -> _Connection:
    try:
        return _connections[alias]
    except KeyError:
        raise NotConnected(f"No connection registered for alias '{alias}'. Call connect() first.") from None


def get_database(alias: str = "default") -> AsyncDatabase:
    """Database registered under ``alias``; raises NotConnected otherwise."""
    return _lookup(alias).database


def get_client(alias: str = "default") -> AsyncMongoClient:
    return _lookup(alias).client
