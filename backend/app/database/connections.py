"""
Connection management for the storage backends.
"""
from redis import Redis

from app.config import Settings
from app.database.document_store import DocumentStore


def create_document_store(settings: Settings) -> DocumentStore:
    """Create the document store for the configured data file."""
    return DocumentStore(settings.data_file)


def create_redis_client(settings: Settings) -> Redis:
    """Create a Redis client for the reset code backend."""
    return Redis(
        host=settings.redis_host,
        port=settings.redis_port,
        db=settings.redis_db,
        decode_responses=True,
    )


def close_redis_client(client: Redis | None) -> None:
    """Close a Redis client if one was opened."""
    if client is not None:
        client.close()
