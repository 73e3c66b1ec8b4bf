# scripts/seed_demo_site.py
"""
Demo site: branding, header/footer, a published home page built from
sections, and a products content type (from the shop preset) with a few items.

    python -m scripts.seed_demo_site
"""
from __future__ import annotations

from sqlalchemy.orm import Session

from pagecraft.core.logging import configure_logging
from pagecraft.db.session import SessionLocal
from pagecraft.schemas.settings import FooterConfig, HeaderConfig
from pagecraft.services import (
    branding_service,
    content_type_service,
    layout_service,
    page_service,
    section_service,
)

HOME_SLUG = "home"


def _seed_settings(db: Session) -> None:
    branding_service.save_branding(
        db,
        colors={"primary": "#1F4E79", "secondary": "#9AD1D4", "accent": "#E07A5F"},
        typography={"headingFont": "Poppins", "bodyFont": "Inter", "baseSize": "17"},
    )
    layout_service.save_header_config(
        db,
        config=HeaderConfig.model_validate({
            "siteName": "Demo Air Supply",
            "navigation": [
                {"id": "nav-home", "label": "Home", "url": "/pages/home"},
                {"id": "nav-shop", "label": "Shop", "url": "/pages/home#products"},
            ],
        }),
    )
    layout_service.save_footer_config(
        db,
        config=FooterConfig.model_validate({
            "siteName": "Demo Air Supply",
            "contactInfo": {"email": "hello@example.com"},
            "copyrightText": "© Demo Air Supply",
        }),
    )
    print("+ branding, header and footer saved")


def _seed_home(db: Session) -> None:
    try:
        page_service.get_page_by_slug(db, slug=HOME_SLUG)
        print("~ home page already exists, sections left as they are")
        return
    except LookupError:
        page = page_service.create_page(db, title="Home", slug=HOME_SLUG, seo_title="Demo Air Supply")

    hero = section_service.add_section(db, page_id=page.id, section_type="hero")
    section_service.update_section_content(
        db,
        section_id=hero.id,
        content={**hero.content_json, "headline": "Clean air, all year round", "cta_link": "#products"},
    )

    features = section_service.add_section(db, page_id=page.id, section_type="features")
    section_service.update_section_content(
        db,
        section_id=features.id,
        content={
            **features.content_json,
            "items": [
                {"title": "Certified parts", "description": "Every filter meets its MERV rating.", "icon": "star"},
                {"title": "Free returns", "description": "Thirty days, no questions.", "icon": "refresh"},
            ],
        },
    )

    # product-grid reads the "products" content type by default
    section_service.add_section(db, page_id=page.id, section_type="product-grid")

    section_service.add_section(db, page_id=page.id, section_type="cta")
    page_service.set_status(db, page_id=page.id, status="published")
    print(f"+ home page published with {len(section_service.list_sections(db, page_id=page.id))} sections")


def _seed_products(db: Session) -> None:
    ct = content_type_service.get_content_type_by_slug(db, slug="products")
    if ct is None:
        ct = content_type_service.create_from_preset(db, preset_id="shop", slug="products")
        print("+ products content type created from the shop preset")
    if content_type_service.list_items(db, content_type_id=ct.id):
        return
    for title, price, category in (
        ("MERV 11 Pleated Filter", 18, "Air Filters"),
        ("Smart Thermostat", 149, "Thermostats"),
        ("UV Coil Lamp", 89, "UV Products"),
    ):
        content_type_service.create_item(
            db,
            content_type_id=ct.id,
            title=title,
            status="published",
            data={"price": price, "category": category, "short_description": title, "in_stock": True},
        )
    print("+ 3 published products")


def run() -> None:
    configure_logging("WARNING")
    db: Session = SessionLocal()
    try:
        _seed_settings(db)
        _seed_products(db)
        _seed_home(db)
        print("done: demo site seeded")
    finally:
        db.close()


if __name__ == "__main__":
    run()
