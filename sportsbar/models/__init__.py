from sportsbar.models.menu_category import MenuCategory
from sportsbar.models.menu_item import MenuItem
from sportsbar.models.event import Event
from sportsbar.models.game import Game
from sportsbar.models.reservation import Reservation, ReservationStatus
from sportsbar.models.site_content import (
    SINGLETON_ID,
    LandingRecord,
    PromotionsRecord,
    SiteSettingsRecord,
)
from sportsbar.models.user import User
from sportsbar.models.migration_record import MigrationRecord
