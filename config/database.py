# config/database.py
from __future__ import annotations

import os
from typing import Optional
from urllib.parse import quote_plus

from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.server_api import ServerApi

from middleware.errors import ConfigurationError


DEFAULT_DB_NAME = "recruitment"


def _build_mongo_uri() -> str:
    """
    Build the MongoDB URI.
    Precedence:
      1. TEST_MONGODB_URI (for CI/tests)
      2. MONGODB_URI (full connection string)
      3. Individual parts: DB_USER / DB_PASSWORD / DB_HOST / DB_NAME
    """
    test_uri = os.getenv("TEST_MONGODB_URI")
    if test_uri:
        return test_uri

    uri = os.getenv("MONGODB_URI")
    if uri:
        return uri

    user = os.getenv("DB_USER", "").strip()
    pwd = os.getenv("DB_PASSWORD", "").strip()
    host = os.getenv("DB_HOST", "").strip()
    dbname = os.getenv("DB_NAME", DEFAULT_DB_NAME).strip()

    if not (user and pwd and host):
        raise ConfigurationError(
            "Missing Mongo credentials. Set TEST_MONGODB_URI, MONGODB_URI or "
            "DB_USER/DB_PASSWORD/DB_HOST (and optionally DB_NAME).",
            details={"setting": "MONGODB_URI"},
        )

    return (
        f"mongodb+srv://{user}:{quote_plus(pwd)}@{host}/{dbname}"
        f"?retryWrites=true&w=majority&tls=true"
    )


class MongoConnection:
    """
    Singleton MongoDB client & DB accessor.
    - Holds a single pooled client for the process.
    - Connects on first use, so importing repositories never touches the network.
    """

    _instance: Optional["MongoConnection"] = None

    def __new__(cls) -> "MongoConnection":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._client = None
            cls._instance._db_name = os.getenv("DB_NAME", DEFAULT_DB_NAME)
        return cls._instance

    def _init_client(self) -> None:
        uri = _build_mongo_uri()
        # Stored datetimes are UTC; decode them aware so they can be shifted to local time.
        kwargs = {"serverSelectionTimeoutMS": 5000, "tz_aware": True}
        if uri.startswith("mongodb+srv://"):
            kwargs.update(server_api=ServerApi("1"), tls=True)
        self._client = MongoClient(uri, **kwargs)
        # Fail fast if credentials/URI are wrong
        self._client.admin.command("ping")

    @property
    def client(self) -> MongoClient:
        """Return the shared MongoClient instance, connecting if needed."""
        if self._client is None:
            self._init_client()
        return self._client

    def db(self) -> Database:
        """Return the default database handle."""
        return self.client[self._db_name]

    def collection(self, name: str) -> Collection:
        """Return a collection handle from the default DB."""
        return self.db()[name]

    def close(self) -> None:
        """Close the client and reset the singleton (used in tests/shutdown)."""
        if getattr(self, "_client", None) is not None:
            self._client.close()
        self._client = None
        type(self)._instance = None


# Module-level singleton accessor
mongodb = MongoConnection()


def bootstrap_indexes() -> None:
    """
    Create the indexes used by dashboard queries.
    Only runs when DB_BOOTSTRAP_INDEXES=1.
    """
    if os.getenv("DB_BOOTSTRAP_INDEXES", "0") != "1":
        return

    db = mongodb.db()
    db["candidatures"].create_index("date_postulation")
    db["candidatures"].create_index("candidate_id")
    db["candidates"].create_index("created_at")
    db["candidates"].create_index("email")
    db["contact_messages"].create_index("created_at")
    db["company_requests"].create_index("created_at")
    db["users"].create_index("username", unique=True)
