"""MongoDB client service."""
import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient

from docbridge.config.settings import MONGODB_SERVER_SELECTION_TIMEOUT_MS, MONGODB_URI

logger = logging.getLogger(__name__)

# Global client instance
_mongodb_client: Optional[AsyncIOMotorClient] = None


def get_mongodb_client() -> AsyncIOMotorClient:
    """Get or create the global MongoDB client."""
    global _mongodb_client

    if _mongodb_client is None:
        logger.info("Creating MongoDB client")
        _mongodb_client = AsyncIOMotorClient(
            MONGODB_URI,
            serverSelectionTimeoutMS=MONGODB_SERVER_SELECTION_TIMEOUT_MS,
        )

    return _mongodb_client


def close_mongodb_client() -> None:
    """Close the global client if one was created."""
    global _mongodb_client

    if _mongodb_client is not None:
        _mongodb_client.close()
        _mongodb_client = None
        logger.info("MongoDB client closed")


async def get_client() -> AsyncIOMotorClient:
    """FastAPI dependency returning the shared MongoDB client."""
    return get_mongodb_client()
