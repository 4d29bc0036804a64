"""API endpoints for favorite locations."""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request

from weather_trader.storage.favorites import (
    FavoriteConflictError, FavoriteNotFoundError, FavoritesStore
)
from weather_trader.weather.models import FavoriteCreate, FavoriteLocation

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/favorites", tags=["favorites"])


def get_favorites_store(request: Request) -> FavoritesStore:
    """Dependency returning the application's favorites store."""
    return request.app.state.favorites_store


@router.get("", response_model=List[FavoriteLocation])
async def list_favorites(store: FavoritesStore = Depends(get_favorites_store)) -> List[FavoriteLocation]:
    """List favorites, newest first."""
    return await store.list()


@router.post("", response_model=FavoriteLocation, status_code=201)
async def add_favorite(
    favorite: FavoriteCreate,
    store: FavoritesStore = Depends(get_favorites_store),
) -> FavoriteLocation:
    """Add a favorite location.

    Raises:
        HTTPException: 400 if a required field is missing, 409 if the
            coordinates are already a favorite
    """
    if not favorite.name or favorite.latitude is None or favorite.longitude is None:
        raise HTTPException(status_code=400, detail="Name, latitude, and longitude are required")

    try:
        return await store.add(
            name=favorite.name,
            latitude=favorite.latitude,
            longitude=favorite.longitude,
            country=favorite.country,
        )
    except FavoriteConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.delete("/{favorite_id}")
async def delete_favorite(
    favorite_id: int,
    store: FavoritesStore = Depends(get_favorites_store),
) -> dict:
    """Delete a favorite by id."""
    try:
        await store.remove(favorite_id)
    except FavoriteNotFoundError:
        raise HTTPException(status_code=404, detail="Favorite not found")
    return {"message": "Favorite deleted successfully"}
