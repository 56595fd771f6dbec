"""
Menu API endpoints: public browsing and admin management
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import SQLAlchemyError
from typing import List, Optional
import structlog

from sportsbar.api.errors import not_found, storage_error
from sportsbar.core.dependencies import get_current_admin, get_storage
from sportsbar.schemas.menu import (
    MenuCategoryCreate,
    MenuCategoryResponse,
    MenuCategoryUpdate,
    MenuItemCreate,
    MenuItemResponse,
    MenuItemUpdate,
)
from sportsbar.storage.base import Storage
from sportsbar.storage.errors import StorageError

logger = structlog.get_logger(__name__)
router = APIRouter()
admin_router = APIRouter(dependencies=[Depends(get_current_admin)])


@router.get("/categories", response_model=List[MenuCategoryResponse])
def list_categories(storage: Storage = Depends(get_storage)):
    """List menu categories in display order"""
    try:
        return storage.get_menu_categories()
    except (StorageError, SQLAlchemyError) as e:
        logger.error(f"Error listing menu categories: {e}")
        return []


@router.get("/items", response_model=List[MenuItemResponse])
def list_items(
    category_id: Optional[str] = None,
    storage: Storage = Depends(get_storage)
):
    """List menu items, optionally limited to one category"""
    try:
        if category_id:
            return storage.get_menu_items_by_category(category_id)
        return storage.get_menu_items()
    except (StorageError, SQLAlchemyError) as e:
        logger.error(f"Error listing menu items: {e}")
        return []


@router.get("/items/{item_id}", response_model=MenuItemResponse)
def get_item(item_id: str, storage: Storage = Depends(get_storage)):
    """Get a specific menu item"""
    item = storage.get_menu_item(item_id)
    if item is None:
        raise not_found("Menu item", item_id)
    return item


# ============================================================================
# Admin
# ============================================================================

@admin_router.post("/categories", response_model=MenuCategoryResponse, status_code=status.HTTP_201_CREATED)
def create_category(category_data: MenuCategoryCreate, storage: Storage = Depends(get_storage)):
    """Create a new menu category"""
    try:
        category = storage.create_menu_category(category_data)
    except StorageError as e:
        raise storage_error(e)
    logger.info(f"Created menu category {category.id}")
    return category


@admin_router.put("/categories/{category_id}", response_model=MenuCategoryResponse)
def update_category(
    category_id: str,
    category_data: MenuCategoryUpdate,
    storage: Storage = Depends(get_storage)
):
    """Update a menu category"""
    try:
        category = storage.update_menu_category(category_id, category_data)
    except StorageError as e:
        raise storage_error(e)
    if category is None:
        raise not_found("Menu category", category_id)
    logger.info(f"Updated menu category {category_id}")
    return category


@admin_router.delete("/categories/{category_id}")
def delete_category(category_id: str, storage: Storage = Depends(get_storage)):
    """Delete an empty menu category"""
    try:
        deleted = storage.delete_menu_category(category_id)
    except StorageError as e:
        raise storage_error(e)
    if not deleted:
        raise not_found("Menu category", category_id)
    logger.info(f"Deleted menu category {category_id}")
    return {"success": True}


@admin_router.post("/items", response_model=MenuItemResponse, status_code=status.HTTP_201_CREATED)
def create_item(item_data: MenuItemCreate, storage: Storage = Depends(get_storage)):
    """Create a new menu item"""
    try:
        item = storage.create_menu_item(item_data)
    except StorageError as e:
        raise storage_error(e)
    logger.info(f"Created menu item {item.id} in category {item.category_id}")
    return item


@admin_router.put("/items/{item_id}", response_model=MenuItemResponse)
def update_item(item_id: str, item_data: MenuItemUpdate, storage: Storage = Depends(get_storage)):
    """Update a menu item"""
    try:
        item = storage.update_menu_item(item_id, item_data)
    except StorageError as e:
        raise storage_error(e)
    if item is None:
        raise not_found("Menu item", item_id)
    logger.info(f"Updated menu item {item_id}")
    return item


@admin_router.delete("/items/{item_id}")
def delete_item(item_id: str, storage: Storage = Depends(get_storage)):
    """Delete a menu item"""
    if not storage.delete_menu_item(item_id):
        raise not_found("Menu item", item_id)
    logger.info(f"Deleted menu item {item_id}")
    return {"success": True}
