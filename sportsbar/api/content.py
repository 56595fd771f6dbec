"""
Site content API endpoints: settings, landing page and promotions

The public getters never fail: if storage cannot be read the page still
renders from the default shapes.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
import structlog

from sportsbar.api.errors import storage_error
from sportsbar.core.dependencies import get_current_admin, get_storage
from sportsbar.schemas.content import (
    LandingData,
    LandingUpdate,
    PromotionsData,
    PromotionsUpdate,
    SiteSettingsData,
    SiteSettingsUpdate,
)
from sportsbar.storage.base import Storage
from sportsbar.storage.errors import StorageError

logger = structlog.get_logger(__name__)
router = APIRouter()
admin_router = APIRouter(dependencies=[Depends(get_current_admin)])


@router.get("/settings", response_model=SiteSettingsData)
def get_settings(storage: Storage = Depends(get_storage)):
    """Business details, opening hours and footer"""
    try:
        return storage.get_settings()
    except (StorageError, SQLAlchemyError) as e:
        logger.error(f"Error reading site settings: {e}")
        return SiteSettingsData()


@router.get("/landing", response_model=LandingData)
@router.get("/landing-content", response_model=LandingData, include_in_schema=False)
def get_landing(storage: Storage = Depends(get_storage)):
    """Landing page copy and popup configuration"""
    try:
        return storage.get_landing_data()
    except (StorageError, SQLAlchemyError) as e:
        logger.error(f"Error reading landing content: {e}")
        return LandingData()


@router.get("/promotions", response_model=PromotionsData)
def get_promotions(storage: Storage = Depends(get_storage)):
    """Active promotion banners and happy hour"""
    try:
        return storage.get_promotions_data()
    except (StorageError, SQLAlchemyError) as e:
        logger.error(f"Error reading promotions: {e}")
        return PromotionsData()


@admin_router.put("/settings", response_model=SiteSettingsData)
def update_settings(settings_data: SiteSettingsUpdate, storage: Storage = Depends(get_storage)):
    """Replace the given settings sections"""
    try:
        updated = storage.update_settings(settings_data)
    except StorageError as e:
        raise storage_error(e)
    logger.info(f"Updated site settings: {sorted(settings_data.model_fields_set)}")
    return updated


@admin_router.put("/landing", response_model=LandingData)
def update_landing(landing_data: LandingUpdate, storage: Storage = Depends(get_storage)):
    """Replace the given landing page sections"""
    try:
        updated = storage.update_landing_data(landing_data)
    except StorageError as e:
        raise storage_error(e)
    logger.info(f"Updated landing content: {sorted(landing_data.model_fields_set)}")
    return updated


@admin_router.put("/promotions", response_model=PromotionsData)
def update_promotions(promotions_data: PromotionsUpdate, storage: Storage = Depends(get_storage)):
    """Replace the given promotion sections"""
    try:
        updated = storage.update_promotions_data(promotions_data)
    except StorageError as e:
        raise storage_error(e)
    logger.info(f"Updated promotions: {sorted(promotions_data.model_fields_set)}")
    return updated
