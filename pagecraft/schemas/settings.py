# pagecraft/schemas/settings.py
# Pydantic: branding, per-section style overrides and site layout (header/footer)
from __future__ import annotations
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

# Frozen + camelCase aliases: these round-trip the JSON stored in global_settings.
_FROZEN = ConfigDict(frozen=True, populate_by_name=True)


# ---------- Branding ----------
class BrandingColors(BaseModel):
    model_config = _FROZEN

    primary: str = "#2B3A67"
    secondary: str = "#8AD4E0"
    accent: str = "#F58025"
    background: str = "#FFFFFF"
    foreground: str = "#2D3748"
    muted: str = "#F7FAFC"


class BrandingTypography(BaseModel):
    model_config = _FROZEN

    heading_font: str = Field("Montserrat", alias="headingFont")
    body_font: str = Field("Inter", alias="bodyFont")
    base_size: str = Field("16", alias="baseSize")
    heading_weight: str = Field("700", alias="headingWeight")
    body_weight: str = Field("400", alias="bodyWeight")


class BrandingSettings(BaseModel):
    model_config = _FROZEN

    colors: BrandingColors = Field(default_factory=BrandingColors)
    typography: BrandingTypography = Field(default_factory=BrandingTypography)


DEFAULT_BRANDING = BrandingSettings()

FONT_OPTIONS: List[str] = [
    "Montserrat", "Inter", "Roboto", "Open Sans", "Lato", "Poppins",
    "Playfair Display", "Merriweather", "Source Sans Pro", "Nunito", "Raleway",
]
FONT_WEIGHT_OPTIONS: List[dict] = [
    {"value": "300", "label": "Light"},
    {"value": "400", "label": "Regular"},
    {"value": "500", "label": "Medium"},
    {"value": "600", "label": "Semi Bold"},
    {"value": "700", "label": "Bold"},
]


# ---------- Style overrides (per section / per legacy block) ----------
class StyleOverrides(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    use_custom_styles: bool = Field(False, alias="useCustomStyles")
    primary_color: Optional[str] = Field(None, alias="primaryColor")
    secondary_color: Optional[str] = Field(None, alias="secondaryColor")
    accent_color: Optional[str] = Field(None, alias="accentColor")
    background_color: Optional[str] = Field(None, alias="backgroundColor")
    text_color: Optional[str] = Field(None, alias="textColor")
    heading_font: Optional[str] = Field(None, alias="headingFont")
    body_font: Optional[str] = Field(None, alias="bodyFont")
    heading_weight: Optional[str] = Field(None, alias="headingWeight")
    body_weight: Optional[str] = Field(None, alias="bodyWeight")


class EffectiveStyle(BaseModel):
    model_config = ConfigDict(frozen=True)

    primary_color: str
    secondary_color: str
    accent_color: str
    background_color: str
    text_color: str
    heading_font: str
    body_font: str
    heading_weight: str
    body_weight: str


# ---------- Site layout ----------
SocialPlatform = Literal[
    "facebook", "twitter", "instagram", "linkedin", "youtube",
    "tiktok", "pinterest", "github", "custom",
]


class LogoRef(BaseModel):
    media_id: Optional[str] = Field(None, alias="mediaId")
    url: str = ""
    alt: str = "Logo"

    model_config = _FROZEN


class MenuItem(BaseModel):
    id: str
    label: str
    url: str = ""
    open_in_new_tab: bool = Field(False, alias="openInNewTab")
    children: List["MenuItem"] = Field(default_factory=list)

    model_config = _FROZEN


class SocialLink(BaseModel):
    id: str
    platform: SocialPlatform
    url: str
    label: Optional[str] = None

    model_config = _FROZEN


class ContactInfo(BaseModel):
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None

    model_config = _FROZEN


class FooterColumn(BaseModel):
    id: str
    title: str
    links: List[MenuItem] = Field(default_factory=list)

    model_config = _FROZEN


class HeaderConfig(BaseModel):
    model_config = _FROZEN

    logo: LogoRef = Field(default_factory=LogoRef)
    show_site_name: bool = Field(True, alias="showSiteName")
    site_name: str = Field("My Site", alias="siteName")
    navigation: List[MenuItem] = Field(default_factory=list)
    show_social_links: bool = Field(False, alias="showSocialLinks")
    social_links: List[SocialLink] = Field(default_factory=list, alias="socialLinks")
    show_contact_info: bool = Field(False, alias="showContactInfo")
    contact_info: ContactInfo = Field(default_factory=ContactInfo, alias="contactInfo")
    sticky: bool = True
    layout: Literal["left", "center", "split"] = "left"


def _default_copyright() -> str:
    return f"© {datetime.now().year} My Site. All rights reserved."


class FooterConfig(BaseModel):
    model_config = _FROZEN

    logo: LogoRef = Field(default_factory=LogoRef)
    show_site_name: bool = Field(False, alias="showSiteName")
    site_name: str = Field("My Site", alias="siteName")
    columns: List[FooterColumn] = Field(default_factory=list)
    show_social_links: bool = Field(True, alias="showSocialLinks")
    social_links: List[SocialLink] = Field(default_factory=list, alias="socialLinks")
    show_contact_info: bool = Field(True, alias="showContactInfo")
    contact_info: ContactInfo = Field(default_factory=ContactInfo, alias="contactInfo")
    copyright_text: str = Field(default_factory=_default_copyright, alias="copyrightText")
    show_copyright: bool = Field(True, alias="showCopyright")
    layout: Literal["simple", "columns", "minimal"] = "simple"


# ---------- API payloads ----------
class BrandingUpdate(BaseModel):
    """Partial update; omitted groups/keys keep their stored value."""
    colors: Optional[dict] = None
    typography: Optional[dict] = None


class BrandingOut(BaseModel):
    branding: BrandingSettings
    css_variables: dict
    version: int
