"""
Singleton content shapes: site settings, promotions and landing copy

Every field has a default, so the bare model is the renderable fallback the
public pages get before anything was migrated or saved: flags off, strings
empty, lists and maps empty.
"""

from pydantic import BaseModel, Field
from typing import Dict, List, Optional


# ============================================================================
# Site settings
# ============================================================================

class OpeningHours(BaseModel):
    day: str
    open: str
    close: str


class HeroBanner(BaseModel):
    background_image: str = ""
    title: str = ""
    subtitle: str = ""


class FooterLink(BaseModel):
    title: str
    url: str


class Footer(BaseModel):
    description: str = ""
    links: List[FooterLink] = Field(default_factory=list)
    copyright: str = ""


class SiteSettingsData(BaseModel):
    """Business details shown on every page"""
    name: str = ""
    address: str = ""
    phone: str = ""
    email: str = ""
    hours: List[OpeningHours] = Field(default_factory=list)
    socials: Dict[str, str] = Field(default_factory=dict, description="Platform name to profile URL")
    hero: HeroBanner = Field(default_factory=HeroBanner)
    footer: Footer = Field(default_factory=Footer)


class SiteSettingsUpdate(BaseModel):
    """Partial settings update; sections are replaced whole"""
    name: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    hours: Optional[List[OpeningHours]] = None
    socials: Optional[Dict[str, str]] = None
    hero: Optional[HeroBanner] = None
    footer: Optional[Footer] = None


# ============================================================================
# Promotions
# ============================================================================

class LandingPromotion(BaseModel):
    enabled: bool = False
    start: str = ""
    end: str = ""
    redirect_all_routes: bool = False


class SideBanner(BaseModel):
    enabled: bool = False
    start: str = ""
    end: str = ""
    message: str = ""
    link: str = ""
    placement: str = ""


class HappyHourOffer(BaseModel):
    icon: str = ""
    title: str
    description: str = ""
    discount: str = ""


class HappyHour(BaseModel):
    enabled: bool = False
    title: str = ""
    subtitle: str = ""
    description: str = ""
    days: str = ""
    time_range: str = ""
    offers: List[HappyHourOffer] = Field(default_factory=list)


class PromotionsData(BaseModel):
    landing: LandingPromotion = Field(default_factory=LandingPromotion)
    side_banner: SideBanner = Field(default_factory=SideBanner)
    happy_hour: HappyHour = Field(default_factory=HappyHour)


class PromotionsUpdate(BaseModel):
    landing: Optional[LandingPromotion] = None
    side_banner: Optional[SideBanner] = None
    happy_hour: Optional[HappyHour] = None


# ============================================================================
# Landing page
# ============================================================================

class LandingPopup(BaseModel):
    enabled: bool = False
    duration: int = Field(default=0, ge=0, description="Seconds before auto redirect")
    auto_redirect: bool = False
    redirect_url: str = ""


class LandingHero(BaseModel):
    title: str = ""
    subtitle: str = ""
    description: str = ""
    background_image: str = ""
    cta_text: str = ""
    cta_link: str = ""


class LandingFeature(BaseModel):
    icon: str = ""
    title: str
    description: str = ""


class SpecialOffer(BaseModel):
    enabled: bool = False
    title: str = ""
    description: str = ""
    badge: str = ""


class LandingData(BaseModel):
    popup: LandingPopup = Field(default_factory=LandingPopup)
    hero: LandingHero = Field(default_factory=LandingHero)
    features: List[LandingFeature] = Field(default_factory=list)
    special_offer: SpecialOffer = Field(default_factory=SpecialOffer)


class LandingUpdate(BaseModel):
    popup: Optional[LandingPopup] = None
    hero: Optional[LandingHero] = None
    features: Optional[List[LandingFeature]] = None
    special_offer: Optional[SpecialOffer] = None
