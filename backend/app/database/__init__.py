"""
Database module - JSON document store and Redis connections.
"""
from app.database.document_store import DocumentStore
from app.database.connections import (
    create_document_store,
    create_redis_client,
    close_redis_client,
)

__all__ = [
    "DocumentStore",
    "create_document_store",
    "create_redis_client",
    "close_redis_client",
]
