"""Favorite locations stored in Redis.

Records live as JSON in one hash keyed by id; a second hash maps the
coordinate pair to the owning id. ``HSETNX`` on the coordinate hash makes
the uniqueness check and the claim a single atomic step; the claim is
released if the record write fails.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional

import redis.asyncio as redis

from weather_trader.config import FAVORITES_KEY_PREFIX
from weather_trader.weather.models import FavoriteLocation

logger = logging.getLogger(__name__)


class FavoriteConflictError(Exception):
    """Raised when a favorite already exists for the coordinate pair."""


class FavoriteNotFoundError(Exception):
    """Raised when no favorite exists for the requested id."""


def coordinate_key(latitude: float, longitude: float) -> str:
    return f"{float(latitude)!r},{float(longitude)!r}"


class FavoritesStore:
    """Redis-backed store of favorite locations, unique by coordinates."""

    def __init__(self, redis_client: redis.Redis, key_prefix: str = FAVORITES_KEY_PREFIX):
        """Initialize the favorites store.

        Args:
            redis_client: Async Redis client
            key_prefix: Namespace for the store's keys
        """
        self.redis_client = redis_client
        self.items_key = f"{key_prefix}:items"
        self.coords_key = f"{key_prefix}:coords"
        self.id_key = f"{key_prefix}:next_id"

    async def list(self) -> List[FavoriteLocation]:
        """All favorites, newest first."""
        raw_items = await self.redis_client.hvals(self.items_key)
        favorites = [FavoriteLocation.model_validate_json(raw) for raw in raw_items]
        favorites.sort(key=lambda f: (f.created_at, f.id), reverse=True)
        return favorites

    async def add(
        self,
        name: str,
        latitude: float,
        longitude: float,
        country: Optional[str] = None,
    ) -> FavoriteLocation:
        """Store a new favorite.

        Args:
            name: Location name
            latitude: Latitude in decimal degrees
            longitude: Longitude in decimal degrees
            country: Optional country name

        Returns:
            The stored favorite with its assigned id

        Raises:
            FavoriteConflictError: If the coordinate pair is already a favorite
        """
        coords = coordinate_key(latitude, longitude)
        favorite_id = await self.redis_client.incr(self.id_key)

        claimed = await self.redis_client.hsetnx(self.coords_key, coords, favorite_id)
        if not claimed:
            logger.info(f"Favorite already exists for ({latitude}, {longitude})")
            raise FavoriteConflictError("Location already in favorites")

        favorite = FavoriteLocation(
            id=favorite_id,
            name=name,
            latitude=latitude,
            longitude=longitude,
            country=country,
            created_at=datetime.now(timezone.utc),
        )
        try:
            await self.redis_client.hset(self.items_key, str(favorite_id), favorite.model_dump_json())
        except Exception:
            # Release the coordinate claim so the location can be added again
            logger.error(f"Failed to store favorite {favorite_id}, releasing ({latitude}, {longitude})")
            await self.redis_client.hdel(self.coords_key, coords)
            raise
        logger.info(f"Added favorite {favorite_id}: {name} ({latitude}, {longitude})")
        return favorite

    async def remove(self, favorite_id: int) -> None:
        """Delete a favorite.

        Raises:
            FavoriteNotFoundError: If no favorite has the id
        """
        raw = await self.redis_client.hget(self.items_key, str(favorite_id))
        if raw is None:
            raise FavoriteNotFoundError(f"Favorite {favorite_id} not found")

        favorite = FavoriteLocation.model_validate_json(raw)
        async with self.redis_client.pipeline(transaction=True) as pipe:
            pipe.hdel(self.items_key, str(favorite_id))
            pipe.hdel(self.coords_key, coordinate_key(favorite.latitude, favorite.longitude))
            await pipe.execute()
        logger.info(f"Removed favorite {favorite_id}")
