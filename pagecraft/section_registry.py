"""
Static registry of section types.

Every page section names one of these types. A type declares the ordered list
of fields its content carries (used by the editor and the public renderer) and
the default content a freshly added section starts with. The registry is plain
module data: there is no runtime registration and nothing here touches the DB.
"""
from __future__ import annotations

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class FieldType(str, Enum):
    text = "text"
    textarea = "textarea"
    richtext = "richtext"
    image = "image"
    link = "link"
    select = "select"
    checkbox = "checkbox"
    color = "color"
    number = "number"
    repeater = "repeater"


@dataclass(frozen=True)
class SelectOption:
    label: str
    value: str

    def to_dict(self) -> Dict[str, str]:
        return {"label": self.label, "value": self.value}


@dataclass(frozen=True)
class FieldDefinition:
    name: str
    label: str
    type: FieldType
    required: bool = False
    placeholder: Optional[str] = None
    default_value: Any = None
    options: Tuple[SelectOption, ...] = ()
    fields: Tuple["FieldDefinition", ...] = ()  # repeater sub-fields (one level)
    min: Optional[float] = None
    max: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "name": self.name,
            "label": self.label,
            "type": self.type.value,
            "required": self.required,
        }
        if self.placeholder is not None:
            out["placeholder"] = self.placeholder
        if self.default_value is not None:
            out["defaultValue"] = self.default_value
        if self.type is FieldType.select:
            out["options"] = [o.to_dict() for o in self.options]
        if self.type is FieldType.repeater:
            out["fields"] = [f.to_dict() for f in self.fields]
        if self.min is not None:
            out["min"] = self.min
        if self.max is not None:
            out["max"] = self.max
        return out


@dataclass(frozen=True)
class SectionTypeConfig:
    type: str
    label: str
    description: str
    icon: str
    fields: Tuple[FieldDefinition, ...]
    default_content: Dict[str, Any] = field(default_factory=dict)

    def get_field(self, name: str) -> Optional[FieldDefinition]:
        for f in self.fields:
            if f.name == name:
                return f
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "label": self.label,
            "description": self.description,
            "icon": self.icon,
            "fields": [f.to_dict() for f in self.fields],
            "defaultContent": copy.deepcopy(self.default_content),
        }


class UnknownSectionType(KeyError):
    """Raised when a section type key is not in the registry."""


# -------- builders (keep the table below readable) --------
def _f(name: str, label: str, type_: str, **kw: Any) -> FieldDefinition:
    return FieldDefinition(name=name, label=label, type=FieldType(type_), **kw)


def _opts(*pairs: Tuple[str, str]) -> Tuple[SelectOption, ...]:
    return tuple(SelectOption(label=label, value=value) for label, value in pairs)


_ALIGN = _opts(("Left", "left"), ("Center", "center"), ("Right", "right"))
_COLS_234 = _opts(("2 Columns", "2"), ("3 Columns", "3"), ("4 Columns", "4"))


def _section(type_: str, label: str, description: str, icon: str,
             fields: List[FieldDefinition], default_content: Dict[str, Any]) -> SectionTypeConfig:
    return SectionTypeConfig(
        type=type_, label=label, description=description, icon=icon,
        fields=tuple(fields), default_content=default_content,
    )


# ============================ Registry ============================
_SECTIONS: List[SectionTypeConfig] = [
    _section(
        "hero", "Hero Section",
        "A prominent banner with headline, subheadline, and call-to-action", "image",
        [
            _f("headline", "Headline", "text", required=True, placeholder="Enter headline..."),
            _f("subheadline", "Subheadline", "textarea", placeholder="Enter subheadline..."),
            _f("background_image", "Background Image", "image"),
            _f("cta_text", "Button Text", "text", placeholder="Get Started"),
            _f("cta_link", "Button Link", "link", placeholder="/signup"),
            _f("overlay", "Show Overlay", "checkbox", default_value=True),
        ],
        {
            "headline": "Welcome to Our Platform",
            "subheadline": "The best solution for your needs",
            "background_image": None,
            "cta_text": "Get Started",
            "cta_link": "#",
            "overlay": True,
        },
    ),
    _section(
        "features", "Features Section",
        "Showcase key features with icons and descriptions", "grid-3x3",
        [
            _f("title", "Section Title", "text", placeholder="Our Features"),
            _f("subtitle", "Section Subtitle", "textarea", placeholder="What makes us different"),
            _f("items", "Features", "repeater", fields=(
                _f("title", "Title", "text", required=True),
                _f("description", "Description", "textarea"),
                _f("icon", "Icon Name", "text", placeholder="star"),
            )),
        ],
        {"title": "Our Features", "subtitle": "Everything you need to succeed", "items": []},
    ),
    _section(
        "testimonials", "Testimonials", "Customer quotes and reviews", "quote",
        [
            _f("title", "Section Title", "text", placeholder="What Our Clients Say"),
            _f("items", "Testimonials", "repeater", fields=(
                _f("quote", "Quote", "textarea", required=True),
                _f("author", "Author Name", "text", required=True),
                _f("company", "Company", "text"),
                _f("avatar", "Avatar", "image"),
            )),
        ],
        {"title": "What Our Clients Say", "items": []},
    ),
    _section(
        "cta", "Call to Action", "Prominent call-to-action banner", "megaphone",
        [
            _f("headline", "Headline", "text", required=True),
            _f("description", "Description", "textarea"),
            _f("button_text", "Button Text", "text", placeholder="Learn More"),
            _f("button_link", "Button Link", "link"),
            _f("background_color", "Background Color", "color", default_value="#3b82f6"),
        ],
        {
            "headline": "Ready to Get Started?",
            "description": "Join thousands of satisfied customers today.",
            "button_text": "Sign Up Now",
            "button_link": "/signup",
            "background_color": "#3b82f6",
        },
    ),
    _section(
        "text-block", "Text Block", "Rich text content with heading", "file-text",
        [
            _f("heading", "Heading", "text"),
            _f("content", "Content", "richtext", required=True),
            _f("alignment", "Text Alignment", "select", options=_ALIGN, default_value="left"),
        ],
        {"heading": "", "content": "", "alignment": "left"},
    ),
    _section(
        "image-gallery", "Image Gallery", "Grid of images with captions", "images",
        [
            _f("title", "Gallery Title", "text"),
            _f("images", "Images", "repeater", fields=(
                _f("image", "Image", "image", required=True),
                _f("caption", "Caption", "text"),
            )),
        ],
        {"title": "", "images": []},
    ),
    _section(
        "stats", "Statistics", "Numerical highlights and metrics", "trending-up",
        [
            _f("title", "Section Title", "text"),
            _f("items", "Stats", "repeater", fields=(
                _f("number", "Number", "text", required=True, placeholder="100+"),
                _f("label", "Label", "text", required=True),
                _f("description", "Description", "text"),
            )),
        ],
        {"title": "", "items": []},
    ),
    _section(
        "faq", "FAQ", "Frequently asked questions accordion", "help-circle",
        [
            _f("title", "Section Title", "text", placeholder="Frequently Asked Questions"),
            _f("items", "Questions", "repeater", fields=(
                _f("question", "Question", "text", required=True),
                _f("answer", "Answer", "textarea", required=True),
            )),
        ],
        {"title": "Frequently Asked Questions", "items": []},
    ),
    _section(
        "contact", "Contact Section", "Contact information and optional form", "mail",
        [
            _f("title", "Section Title", "text", placeholder="Contact Us"),
            _f("subtitle", "Subtitle", "textarea"),
            _f("email", "Email Address", "text", placeholder="hello@example.com"),
            _f("phone", "Phone Number", "text"),
            _f("address", "Address", "textarea"),
            _f("form_enabled", "Show Contact Form", "checkbox", default_value=True),
        ],
        {
            "title": "Contact Us",
            "subtitle": "We'd love to hear from you",
            "email": "",
            "phone": "",
            "address": "",
            "form_enabled": True,
        },
    ),
    _section(
        "team", "Team Section", "Team member profiles", "users",
        [
            _f("title", "Section Title", "text", placeholder="Meet Our Team"),
            _f("members", "Team Members", "repeater", fields=(
                _f("name", "Name", "text", required=True),
                _f("role", "Role/Title", "text"),
                _f("bio", "Bio", "textarea"),
                _f("image", "Photo", "image"),
            )),
        ],
        {"title": "Meet Our Team", "members": []},
    ),
    _section(
        "content-feed", "Content Feed",
        "Display items from a content type in various layouts", "rss",
        [
            # options are resolved at edit time from the stored content types
            _f("content_type_slug", "Content Type", "select", required=True),
            _f("title", "Section Title", "text", placeholder="Latest Posts"),
            _f("display_style", "Display Style", "select", options=_opts(
                ("Grid", "grid"), ("List", "list"), ("Cards", "cards"), ("Compact", "compact"),
            ), default_value="grid"),
            _f("items_per_page", "Items to Show", "number", default_value=6, min=1, max=50),
            _f("show_date", "Show Date", "checkbox", default_value=True),
            _f("show_excerpt", "Show Excerpt", "checkbox", default_value=True),
            _f("link_to_detail", "Link to Detail Page", "checkbox", default_value=True),
        ],
        {
            "content_type_slug": "",
            "title": "",
            "display_style": "grid",
            "items_per_page": 6,
            "show_date": True,
            "show_excerpt": True,
            "link_to_detail": True,
        },
    ),
    _section(
        "legacy-blocks", "Legacy Content", "Content from the original block editor", "layers",
        [],
        {"blocks": []},
    ),
    _section(
        "card-grid", "Card Grid", "Grid of cards with images, titles, and links", "layout-grid",
        [
            _f("title", "Section Title", "text", placeholder="Our Services"),
            _f("columns", "Columns", "select", options=_COLS_234, default_value="3"),
            _f("cards", "Cards", "repeater", fields=(
                _f("title", "Title", "text", required=True),
                _f("description", "Description", "textarea"),
                _f("image", "Image", "image"),
                _f("link", "Link", "link"),
            )),
        ],
        {"title": "", "columns": "3", "cards": []},
    ),
    _section(
        "columns", "Columns", "Multi-column text layout", "columns",
        [
            _f("title", "Section Title", "text"),
            _f("columns", "Number of Columns", "select",
               options=_opts(("2 Columns", "2"), ("3 Columns", "3")), default_value="2"),
            _f("items", "Column Content", "repeater", fields=(
                _f("heading", "Heading", "text"),
                _f("content", "Content", "richtext"),
            )),
        ],
        {"title": "", "columns": "2", "items": []},
    ),
    _section(
        "image", "Image", "Single image with caption", "image",
        [
            _f("image", "Image", "image", required=True),
            _f("caption", "Caption", "text"),
            _f("link", "Link (optional)", "link"),
            _f("alignment", "Alignment", "select", options=_ALIGN, default_value="center"),
            _f("max_width", "Max Width", "text", placeholder="100%", default_value="100%"),
        ],
        {"image": None, "caption": "", "link": "", "alignment": "center", "max_width": "100%"},
    ),
    _section(
        "button", "Button", "Standalone call-to-action button", "mouse-pointer",
        [
            _f("text", "Button Text", "text", required=True, placeholder="Click Here"),
            _f("link", "Link", "link", required=True),
            _f("variant", "Style", "select", options=_opts(
                ("Primary", "primary"), ("Secondary", "secondary"), ("Outline", "outline"),
            ), default_value="primary"),
            _f("alignment", "Alignment", "select", options=_ALIGN, default_value="center"),
        ],
        {"text": "Click Here", "link": "#", "variant": "primary", "alignment": "center"},
    ),
    _section(
        "pricing", "Pricing Table", "Compare pricing tiers side by side", "dollar-sign",
        [
            _f("title", "Section Title", "text", placeholder="Pricing Plans"),
            _f("subtitle", "Subtitle", "textarea"),
            _f("tiers", "Pricing Tiers", "repeater", fields=(
                _f("name", "Plan Name", "text", required=True),
                _f("price", "Price", "text", required=True, placeholder="$29"),
                _f("period", "Period", "text", placeholder="/month"),
                _f("description", "Description", "textarea"),
                _f("features", "Features (one per line)", "textarea"),
                _f("cta_text", "Button Text", "text", placeholder="Get Started"),
                _f("cta_link", "Button Link", "link"),
                _f("highlighted", "Highlight This Tier", "checkbox"),
            )),
        ],
        {"title": "Pricing Plans", "subtitle": "Choose the plan that works for you", "tiers": []},
    ),
    _section(
        "logo-cloud", "Logo Cloud", "Grid of partner or client logos", "building2",
        [
            _f("title", "Section Title", "text", placeholder="Trusted By"),
            _f("logos", "Logos", "repeater", fields=(
                _f("name", "Company Name", "text", required=True),
                _f("image", "Logo Image", "image", required=True),
                _f("link", "Link (optional)", "link"),
            )),
        ],
        {"title": "Trusted By", "logos": []},
    ),
    # -------- service-business sections --------
    _section(
        "hero-with-form", "Hero with Form", "Hero section with embedded contact form", "layout",
        [
            _f("headline", "Headline", "text", required=True, placeholder="Professional HVAC Services"),
            _f("subheadline", "Subheadline", "textarea", placeholder="Heating, Cooling & Indoor Air Quality"),
            _f("phone_number", "Phone Number", "text", placeholder="(555) 123-4567"),
            _f("background_image", "Background Image", "image"),
            _f("badges", "Trust Badges", "repeater", fields=(
                _f("icon", "Icon", "select", options=_opts(
                    ("Phone", "phone"), ("Clock", "clock"), ("Shield", "shield"),
                )),
                _f("text", "Text", "text"),
            )),
            _f("form_title", "Form Title", "text", placeholder="Get a Free Estimate"),
            _f("form_subtitle", "Form Subtitle", "text", placeholder="Fill out the form..."),
            _f("show_form", "Show Form", "checkbox", default_value=True),
        ],
        {
            "headline": "Professional HVAC Services",
            "subheadline": "Heating, Cooling & Indoor Air Quality Experts",
            "phone_number": "",
            "background_image": None,
            "badges": [],
            "form_title": "Get a Free Estimate",
            "form_subtitle": "Fill out the form and we'll get back to you shortly",
            "show_form": True,
        },
    ),
    _section(
        "services-grid", "Services Grid", "Grid of service cards with icons", "grid-3x3",
        [
            _f("title", "Section Title", "text", placeholder="Our Services"),
            _f("subtitle", "Section Subtitle", "textarea"),
            _f("columns", "Columns", "select", options=_COLS_234, default_value="3"),
            _f("items", "Services", "repeater", fields=(
                _f("title", "Title", "text", required=True),
                _f("description", "Description", "textarea"),
                _f("icon", "Icon", "select", options=_opts(
                    ("Snowflake (AC)", "snowflake"),
                    ("Flame (Heat)", "flame"),
                    ("Wind (Air Quality)", "wind"),
                    ("Wrench (Repair)", "wrench"),
                    ("Thermometer", "thermometer"),
                    ("Fan", "fan"),
                    ("Shield", "shield"),
                    ("Clock", "clock"),
                    ("Settings", "settings"),
                )),
                _f("link", "Link", "link"),
            )),
        ],
        {
            "title": "Our Services",
            "subtitle": "Professional HVAC solutions for your home or business",
            "columns": "3",
            "items": [],
        },
    ),
    _section(
        "service-area", "Service Area", "Display counties and regions served", "map-pin",
        [
            _f("title", "Section Title", "text", placeholder="Areas We Serve"),
            _f("subtitle", "Subtitle", "textarea"),
            _f("areas", "Service Areas", "repeater", fields=(
                _f("name", "Area Name", "text", required=True),
            )),
            _f("image", "Map Image", "image"),
            _f("cta_text", "CTA Button Text", "text", placeholder="Check Availability"),
            _f("cta_link", "CTA Button Link", "link"),
            _f("layout", "Layout", "select",
               options=_opts(("List", "list"), ("Grid", "grid")), default_value="grid"),
        ],
        {
            "title": "Areas We Serve",
            "subtitle": "Providing quality HVAC services throughout the region",
            "areas": [],
            "image": None,
            "cta_text": "Check Availability",
            "cta_link": "/contact",
            "layout": "grid",
        },
    ),
    _section(
        "trust-badges", "Trust Badges", "Display certifications and partner logos", "award",
        [
            _f("title", "Section Title", "text", placeholder="Why Choose Us"),
            _f("subtitle", "Subtitle", "textarea"),
            _f("badges", "Badges", "repeater", fields=(
                _f("title", "Title", "text", required=True),
                _f("subtitle", "Subtitle", "text"),
                _f("icon", "Icon", "select", options=_opts(
                    ("Award", "award"), ("Star", "star"), ("Shield", "shield"), ("Thumbs Up", "thumbsup"),
                )),
                _f("image", "Image (optional)", "image"),
            )),
            _f("layout", "Layout", "select",
               options=_opts(("Row", "row"), ("Grid", "grid")), default_value="row"),
            _f("background", "Background", "select", options=_opts(
                ("Light", "light"), ("Dark", "dark"), ("Primary", "primary"),
            ), default_value="light"),
        ],
        {"title": "", "subtitle": "", "badges": [], "layout": "row", "background": "light"},
    ),
    _section(
        "contact-banner", "Contact Banner", "Full-width CTA with phone number", "phone",
        [
            _f("headline", "Headline", "text", placeholder="Ready to Get Started?"),
            _f("subheadline", "Subheadline", "text"),
            _f("phone_number", "Phone Number", "text", placeholder="(555) 123-4567"),
            _f("cta_text", "Secondary CTA Text", "text", placeholder="Schedule Online"),
            _f("cta_link", "Secondary CTA Link", "link"),
            _f("show_hours", "Show Hours", "checkbox", default_value=False),
            _f("hours_text", "Hours Text", "text", placeholder="Mon-Fri: 8am-6pm"),
            _f("background", "Background Color", "select", options=_opts(
                ("Primary (Navy)", "primary"), ("Accent (Orange)", "accent"), ("Dark", "dark"),
            ), default_value="accent"),
        ],
        {
            "headline": "Ready to Get Started?",
            "subheadline": "Call us today for a free estimate",
            "phone_number": "",
            "cta_text": "Schedule Online",
            "cta_link": "/contact",
            "show_hours": False,
            "hours_text": "",
            "background": "accent",
        },
    ),
    _section(
        "two-column", "Two Column", "Image and text side by side", "columns",
        [
            _f("title", "Title", "text", required=True),
            _f("subtitle", "Eyebrow Text", "text"),
            _f("content", "Content", "richtext"),
            _f("image", "Image", "image"),
            _f("image_position", "Image Position", "select",
               options=_opts(("Left", "left"), ("Right", "right")), default_value="right"),
            _f("bullets", "Bullet Points", "repeater", fields=(
                _f("text", "Text", "text", required=True),
            )),
            _f("cta_text", "CTA Button Text", "text"),
            _f("cta_link", "CTA Button Link", "link"),
            _f("background", "Background", "select",
               options=_opts(("White", "white"), ("Muted", "muted")), default_value="white"),
        ],
        {
            "title": "",
            "subtitle": "",
            "content": "",
            "image": None,
            "image_position": "right",
            "bullets": [],
            "cta_text": "",
            "cta_link": "",
            "background": "white",
        },
    ),
    _section(
        "product-grid", "Product Grid", "Display products with prices and filtering", "shopping-bag",
        [
            _f("content_type_slug", "Content Type Slug", "text", default_value="products", placeholder="products"),
            _f("title", "Section Title", "text", placeholder="Shop Our Products"),
            _f("show_filters", "Show Category Filters", "checkbox", default_value=True),
            _f("show_price", "Show Prices", "checkbox", default_value=True),
            _f("columns", "Columns", "select", options=_COLS_234, default_value="3"),
            _f("items_per_page", "Products to Show", "number", default_value=12, min=1, max=50),
        ],
        {
            "content_type_slug": "products",
            "title": "Shop Air Filters & HVAC Supplies",
            "show_filters": True,
            "show_price": True,
            "columns": "3",
            "items_per_page": 12,
        },
    ),
    _section(
        "video-embed", "Video Embed",
        "Embed a video from Instagram, YouTube, or other platforms", "play-circle",
        [
            _f("title", "Section Title", "text", placeholder="Watch Our Video"),
            _f("embed_url", "Embed URL", "text", required=True,
               placeholder="https://www.instagram.com/reel/.../embed"),
            _f("platform", "Platform", "select", options=_opts(
                ("Instagram", "instagram"), ("YouTube", "youtube"), ("Other", "other"),
            ), default_value="instagram"),
        ],
        {"title": "Watch Our Video", "embed_url": "", "platform": "instagram"},
    ),
]

SECTION_REGISTRY: Dict[str, SectionTypeConfig] = {s.type: s for s in _SECTIONS}

LEGACY_BLOCKS_TYPE = "legacy-blocks"

# Types whose content pulls published items of a content type at render time.
FEED_SECTION_TYPES = frozenset({"content-feed", "product-grid"})


# ============================ Lookups ============================
def is_registered_type(section_type: str) -> bool:
    return section_type in SECTION_REGISTRY


def get_section_config(section_type: str) -> SectionTypeConfig:
    try:
        return SECTION_REGISTRY[section_type]
    except KeyError:
        raise UnknownSectionType(section_type) from None


def get_section_types() -> List[str]:
    return list(SECTION_REGISTRY.keys())


def get_addable_section_types() -> List[str]:
    """All types except the legacy wrapper, which only exists for migrated content."""
    return [t for t in SECTION_REGISTRY if t != LEGACY_BLOCKS_TYPE]


def get_default_content(section_type: str) -> Dict[str, Any]:
    # deep copy: callers mutate repeater lists freely
    return copy.deepcopy(get_section_config(section_type).default_content)


def get_section_label(section_type: str) -> str:
    return get_section_config(section_type).label


def get_section_icon(section_type: str) -> str:
    return get_section_config(section_type).icon
