# pagecraft/schemas/content.py
# Pydantic: requests/responses for Pages, Page Sections and Reusable Components
from __future__ import annotations
from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

PageStatus = Literal["draft", "published", "archived"]


# ---------- Page ----------
class PageBase(BaseModel):
    title: str = Field(..., max_length=200)
    slug: Optional[str] = Field(None, max_length=100)
    status: PageStatus = "draft"
    seo_title: Optional[str] = Field(None, max_length=200)
    seo_description: Optional[str] = Field(None, max_length=500)
    seo_image: Optional[str] = Field(None, max_length=1024)


class PageCreate(PageBase):
    # legacy block array; new pages normally leave it empty and use sections
    content: List[Dict[str, Any]] = Field(default_factory=list)


class PageUpdate(BaseModel):
    title: Optional[str] = Field(None, max_length=200)
    slug: Optional[str] = Field(None, max_length=100)
    status: Optional[PageStatus] = None
    seo_title: Optional[str] = Field(None, max_length=200)
    seo_description: Optional[str] = Field(None, max_length=500)
    seo_image: Optional[str] = Field(None, max_length=1024)
    content: Optional[List[Dict[str, Any]]] = None

    model_config = ConfigDict(extra="ignore")


class PageOut(PageBase):
    model_config = ConfigDict(from_attributes=True)
    id: int
    slug: str
    content: Any = None
    published_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


# ---------- Page Section ----------
class SectionCreate(BaseModel):
    section_type: str = Field(..., max_length=64)


class SectionFromReusable(BaseModel):
    reusable_id: int
    # optional snapshot override; defaults to the component's current content
    content: Optional[Dict[str, Any]] = None


class SectionContentUpdate(BaseModel):
    """Whole-content replace. Callers send the full merged object, never a patch."""
    content: Dict[str, Any]


class SectionUpdate(BaseModel):
    content_json: Optional[Dict[str, Any]] = None
    is_visible: Optional[bool] = None
    is_locked: Optional[bool] = None
    style_overrides: Optional[Dict[str, Any]] = None

    model_config = ConfigDict(extra="ignore")


class SectionStyleUpdate(BaseModel):
    style_overrides: Optional[Dict[str, Any]] = None


class FieldChange(BaseModel):
    value: Any = None


class RepeaterItemUpdate(BaseModel):
    changes: Dict[str, Any]


class RepeaterItemMove(BaseModel):
    from_index: int = Field(..., ge=0)
    to_index: int = Field(..., ge=0)


class SectionReorder(BaseModel):
    from_index: int = Field(..., ge=0)
    to_index: int = Field(..., ge=0)


class SectionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    page_id: int
    section_type: str
    content_json: Dict[str, Any]
    style_overrides: Optional[Dict[str, Any]] = None
    order: int
    is_visible: bool
    is_locked: bool
    reusable_id: Optional[int] = None
    is_linked: bool
    created_at: datetime
    updated_at: datetime


# ---------- Reusable Component ----------
class ReusableCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=160)
    description: Optional[str] = None
    block_type: str = Field(..., max_length=64)
    content: Dict[str, Any] = Field(default_factory=dict)


class ReusableFromSection(BaseModel):
    section_id: int
    name: str = Field(..., min_length=1, max_length=160)
    description: Optional[str] = None


class ReusableUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=160)
    description: Optional[str] = None
    content: Optional[Dict[str, Any]] = None


class ReusableOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    name: str
    description: Optional[str] = None
    block_type: str
    content: Dict[str, Any]
    created_by: Optional[int] = None
    created_at: datetime
    updated_at: datetime


class ReusableUpdateOut(BaseModel):
    component: ReusableOut
    linked_sections_updated: int
