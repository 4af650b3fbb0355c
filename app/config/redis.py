"""Redis connection and client management."""

import redis

from app.settings import settings
from app.utils.logging_config import logger


def get_redis_client() -> redis.Redis:
    """
    Returns a Redis client for the configured URL.
    No connection is opened until the first command.
    """
    return redis.Redis.from_url(
        str(settings.REDIS_URL), encoding="utf-8", decode_responses=True
    )


def check_redis_connection(client: redis.Redis | None = None):
    """
    Checks the connection to the Redis server.
    Raises an exception if the connection fails.
    """
    redis_client = client or get_redis_client()
    try:
        if redis_client.ping():
            logger.info("Redis connection successful")
        else:
            raise ConnectionError(
                "Redis connection failed: PING command returned False"
            )
    except Exception as e:
        logger.error(f"Redis connection error: {e}")
        raise
