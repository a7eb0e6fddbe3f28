"""
MongoDB integration.

``MongoGateway`` owns the single ``MongoClient`` used by the
application.  It is created once at startup (``connect``), stored on
``app.state.db`` and handed to request handlers through the ``get_db``
dependency; ``close`` releases the client at shutdown.  Tests build a
gateway around an in-memory client and pass it to ``create_app``.

Collection names follow the pluralised lowercase form used by the
existing salon data (``bookings``, ``adminusers``,
``customerloyalties`` and so on), so the API can be pointed at a
database populated by the earlier deployment.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Optional

from bson import ObjectId
from bson.errors import InvalidId
from fastapi import Request
from pymongo import ASCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.database import Database

from .config import Settings, settings as default_settings

logger = logging.getLogger(__name__)

BOOKINGS = "bookings"
SERVICES = "services"
CUSTOMERS = "customers"
ADMIN_USERS = "adminusers"
CUSTOMER_LOYALTY = "customerloyalties"


def utcnow() -> datetime:
    """Timestamp used for ``createdAt``/``updatedAt`` fields."""
    return datetime.now(timezone.utc)


def parse_object_id(value: Any) -> Optional[ObjectId]:
    """Return ``value`` as an ObjectId, or ``None`` if it is not one."""
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(str(value))
    except (InvalidId, TypeError):
        return None


class MongoGateway:
    """Typed access to the salon collections over one shared client."""

    def __init__(self, client: MongoClient, database_name: str) -> None:
        self.client = client
        self.database: Database = client[database_name]

    @classmethod
    def connect(cls, config: Settings = default_settings) -> "MongoGateway":
        """Open a client for ``config.mongodb_uri``.

        ``MongoClient`` connects lazily; the timeout bounds how long the
        first query waits for a reachable server.
        """
        logger.info("Connecting to MongoDB database %s", config.mongodb_name)
        client = MongoClient(
            config.mongodb_uri,
            serverSelectionTimeoutMS=config.mongodb_timeout_ms,
            tz_aware=True,
        )
        return cls(client, config.mongodb_name)

    def ensure_indexes(self) -> None:
        """Create the unique and ordering indexes the handlers rely on."""
        self.customers.create_index([("email", ASCENDING)], unique=True)
        self.admin_users.create_index([("email", ASCENDING)], unique=True)
        self.customer_loyalty.create_index([("customerId", ASCENDING)], unique=True)
        self.bookings.create_index([("createdAt", ASCENDING)])
        self.bookings.create_index([("date", ASCENDING), ("status", ASCENDING)])
        self.services.create_index([("createdAt", ASCENDING)])

    def ping(self) -> bool:
        self.client.admin.command("ping")
        return True

    def close(self) -> None:
        logger.info("Closing MongoDB connection")
        self.client.close()

    @property
    def bookings(self) -> Collection:
        return self.database[BOOKINGS]

    @property
    def services(self) -> Collection:
        return self.database[SERVICES]

    @property
    def customers(self) -> Collection:
        return self.database[CUSTOMERS]

    @property
    def admin_users(self) -> Collection:
        return self.database[ADMIN_USERS]

    @property
    def customer_loyalty(self) -> Collection:
        return self.database[CUSTOMER_LOYALTY]


def get_db(request: Request) -> MongoGateway:
    """FastAPI dependency returning the gateway opened at startup."""
    gateway = getattr(request.app.state, "db", None)
    if gateway is None:
        raise RuntimeError("Database is not initialised")
    return gateway
