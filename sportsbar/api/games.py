"""
Games schedule API endpoints
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import SQLAlchemyError
from typing import List
import structlog

from sportsbar.api.errors import not_found, storage_error
from sportsbar.core.dependencies import get_current_admin, get_storage
from sportsbar.schemas.schedule import GameCreate, GameResponse, GameUpdate
from sportsbar.storage.base import Storage
from sportsbar.storage.errors import StorageError

logger = structlog.get_logger(__name__)
router = APIRouter()
admin_router = APIRouter(dependencies=[Depends(get_current_admin)])


@router.get("", response_model=List[GameResponse])
def list_games(storage: Storage = Depends(get_storage)):
    """List all scheduled games by kick-off"""
    try:
        return storage.get_games()
    except (StorageError, SQLAlchemyError) as e:
        logger.error(f"Error listing games: {e}")
        return []


@router.get("/today", response_model=List[GameResponse])
def list_todays_games(storage: Storage = Depends(get_storage)):
    """Games starting today, in the bar's local time"""
    try:
        return storage.get_todays_games()
    except (StorageError, SQLAlchemyError) as e:
        logger.error(f"Error listing today's games: {e}")
        return []


@router.get("/upcoming", response_model=List[GameResponse])
def list_upcoming_games(storage: Storage = Depends(get_storage)):
    """Games that have not started yet"""
    try:
        return storage.get_upcoming_games()
    except (StorageError, SQLAlchemyError) as e:
        logger.error(f"Error listing upcoming games: {e}")
        return []


@router.get("/{game_id}", response_model=GameResponse)
def get_game(game_id: str, storage: Storage = Depends(get_storage)):
    """Get a specific game"""
    game = storage.get_game(game_id)
    if game is None:
        raise not_found("Game", game_id)
    return game


@admin_router.post("", response_model=GameResponse, status_code=status.HTTP_201_CREATED)
def create_game(game_data: GameCreate, storage: Storage = Depends(get_storage)):
    """Schedule a new game"""
    try:
        game = storage.create_game(game_data)
    except StorageError as e:
        raise storage_error(e)
    logger.info(f"Created game {game.id}: {game.home_abbr} vs {game.away_abbr}")
    return game


@admin_router.put("/{game_id}", response_model=GameResponse)
def update_game(game_id: str, game_data: GameUpdate, storage: Storage = Depends(get_storage)):
    """Update a scheduled game"""
    try:
        game = storage.update_game(game_id, game_data)
    except StorageError as e:
        raise storage_error(e)
    if game is None:
        raise not_found("Game", game_id)
    logger.info(f"Updated game {game_id}")
    return game


@admin_router.delete("/{game_id}")
def delete_game(game_id: str, storage: Storage = Depends(get_storage)):
    """Delete a scheduled game"""
    if not storage.delete_game(game_id):
        raise not_found("Game", game_id)
    logger.info(f"Deleted game {game_id}")
    return {"success": True}
