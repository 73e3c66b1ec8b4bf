# pagecraft/content_type_presets.py
# Ready-made content types an editor can start from. Static data, like the section registry.
from __future__ import annotations

import copy
from typing import Any, Dict, List, Optional

PRESET_FIELD_TYPES = {
    "text", "textarea", "richtext", "number", "date",
    "image", "select", "checkbox", "repeater", "link",
}


def _pf(fid: str, name: str, label: str, type_: str, required: bool = False, **extra: Any) -> Dict[str, Any]:
    out: Dict[str, Any] = {"id": fid, "name": name, "label": label, "type": type_, "required": required}
    out.update(extra)
    return out


CONTENT_TYPE_PRESETS: List[Dict[str, Any]] = [
    {
        "id": "blogs",
        "name": "Blog Posts",
        "slug": "blog",
        "description": "Articles and blog posts with featured images, categories, and rich content",
        "icon": "file-text",
        "fields": [
            _pf("f1", "featured_image", "Featured Image", "image"),
            _pf("f2", "excerpt", "Excerpt", "textarea", placeholder="A brief summary of the post..."),
            _pf("f3", "content", "Content", "richtext", True),
            _pf("f4", "category", "Category", "select",
                options=["News", "Tutorial", "Case Study", "Opinion", "Announcement"]),
            _pf("f5", "tags", "Tags", "text", placeholder="Comma-separated tags"),
            _pf("f6", "author_name", "Author Name", "text"),
            _pf("f7", "reading_time", "Reading Time (minutes)", "number"),
        ],
    },
    {
        "id": "videos",
        "name": "Videos",
        "slug": "videos",
        "description": "Video content with thumbnails, embed URLs, and descriptions",
        "icon": "video",
        "fields": [
            _pf("f1", "thumbnail", "Thumbnail", "image"),
            _pf("f2", "video_url", "Video URL", "text", True, placeholder="YouTube or Vimeo URL"),
            _pf("f3", "description", "Description", "richtext"),
            _pf("f4", "duration", "Duration", "text", placeholder="5:30"),
            _pf("f5", "category", "Category", "select",
                options=["Tutorial", "Interview", "Webinar", "Demo", "Behind the Scenes"]),
            _pf("f6", "featured", "Featured Video", "checkbox"),
        ],
    },
    {
        "id": "gallery",
        "name": "Gallery",
        "slug": "gallery",
        "description": "Image galleries and photo collections with captions",
        "icon": "images",
        "fields": [
            _pf("f1", "cover_image", "Cover Image", "image", True),
            _pf("f2", "description", "Description", "textarea"),
            _pf("f3", "category", "Category", "select",
                options=["Portfolio", "Events", "Products", "Team", "Locations"]),
            _pf("f4", "location", "Location", "text", placeholder="Where was this taken?"),
            _pf("f5", "date_taken", "Date", "date"),
            _pf("f6", "photographer", "Photographer", "text"),
        ],
    },
    {
        "id": "reviews",
        "name": "Reviews",
        "slug": "reviews",
        "description": "Customer reviews and testimonials with ratings",
        "icon": "star",
        "fields": [
            _pf("f1", "reviewer_name", "Reviewer Name", "text", True),
            _pf("f2", "reviewer_photo", "Reviewer Photo", "image"),
            _pf("f3", "rating", "Rating (1-5)", "number", True),
            _pf("f4", "review_text", "Review", "textarea", True),
            _pf("f5", "company", "Company/Organization", "text"),
            _pf("f6", "position", "Position/Title", "text"),
            _pf("f7", "verified", "Verified Purchase", "checkbox"),
            _pf("f8", "product_service", "Product/Service", "text"),
        ],
    },
    {
        "id": "before-after",
        "name": "Before & After",
        "slug": "before-after",
        "description": "Transformation showcases with before/after images",
        "icon": "git-compare",
        "fields": [
            _pf("f1", "before_image", "Before Image", "image", True),
            _pf("f2", "after_image", "After Image", "image", True),
            _pf("f3", "description", "Description", "richtext"),
            _pf("f4", "category", "Category", "select",
                options=["Renovation", "Design", "Fitness", "Beauty", "Restoration"]),
            _pf("f5", "duration", "Transformation Duration", "text", placeholder="e.g., 3 months"),
            _pf("f6", "client_name", "Client Name", "text"),
            _pf("f7", "featured", "Featured", "checkbox"),
        ],
    },
    {
        "id": "news",
        "name": "News",
        "slug": "news",
        "description": "News articles and press releases",
        "icon": "newspaper",
        "fields": [
            _pf("f1", "featured_image", "Featured Image", "image"),
            _pf("f2", "headline", "Headline", "text", True),
            _pf("f3", "summary", "Summary", "textarea", True, placeholder="Brief news summary..."),
            _pf("f4", "content", "Full Article", "richtext", True),
            _pf("f5", "category", "Category", "select",
                options=["Company News", "Press Release", "Industry", "Awards", "Events"]),
            _pf("f6", "source", "Source", "text"),
            _pf("f7", "breaking", "Breaking News", "checkbox"),
        ],
    },
    {
        "id": "shop",
        "name": "Products",
        "slug": "products",
        "description": "HVAC parts, filters, and equipment for sale",
        "icon": "shopping-bag",
        "fields": [
            _pf("f1", "product_image", "Product Image", "image", True),
            _pf("f2", "price", "Price", "number", True),
            _pf("f3", "sale_price", "Sale Price", "number"),
            _pf("f4", "short_description", "Short Description", "textarea", True,
                placeholder="Brief product description..."),
            _pf("f5", "description", "Full Description", "richtext", True),
            _pf("f6", "sku", "SKU / Part Number", "text"),
            _pf("f7", "brand", "Brand", "text"),
            _pf("f8", "category", "Category", "select",
                options=["Air Filters", "Replacement Parts", "Thermostats", "UV Products", "Accessories", "Other"]),
            _pf("f9", "specifications", "Specifications", "textarea",
                placeholder="Size, weight, compatibility, etc."),
            _pf("f10", "in_stock", "In Stock", "checkbox"),
            _pf("f11", "featured", "Featured Product", "checkbox"),
        ],
    },
]

_BY_ID = {p["id"]: p for p in CONTENT_TYPE_PRESETS}


def list_presets() -> List[Dict[str, Any]]:
    return copy.deepcopy(CONTENT_TYPE_PRESETS)


def get_preset(preset_id: str) -> Optional[Dict[str, Any]]:
    preset = _BY_ID.get(preset_id)
    return copy.deepcopy(preset) if preset else None
