import logging
from typing import Optional

from fastapi import Request
from pymongo import MongoClient
from pymongo.database import Database

logger = logging.getLogger("forumflow")


class MongoGateway:
    """
    Owns the single MongoDB client of the process.

    The client is created at startup by ``connect()`` and handed to request
    handlers through the ``get_db`` dependency; nothing else holds a handle.
    """

    def __init__(self, uri: Optional[str] = None, db_name: str = "forumflow", client: Optional[MongoClient] = None):
        self.uri = uri
        self.db_name = db_name
        self.client = client

    def connect(self) -> Database:
        """Create the client if needed and ping the server; raises on failure."""
        if self.client is None:
            if not self.uri:
                logger.error("MongoDB connection string is not set!")
                raise ValueError("MongoDB connection string is required")
            self.client = MongoClient(self.uri, serverSelectionTimeoutMS=5000)
        self.ping()
        logger.info(f"Connected to MongoDB database '{self.db_name}'")
        return self.db

    def _require_client(self) -> MongoClient:
        if self.client is None:
            raise RuntimeError("MongoGateway.connect() has not been called")
        return self.client

    def ping(self) -> bool:
        self._require_client().admin.command("ping")
        return True

    @property
    def db(self) -> Database:
        return self._require_client()[self.db_name]

    def close(self) -> None:
        if self.client is not None:
            self.client.close()
            logger.info("MongoDB connection closed")
            self.client = None


def get_gateway(request: Request) -> MongoGateway:
    return request.app.state.gateway


# Database dependency for FastAPI
def get_db(request: Request) -> Database:
    return get_gateway(request).db
