# pagecraft/schemas/site.py
# Pydantic: content types & items, media, users and invitations
from __future__ import annotations
from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

ItemStatus = Literal["draft", "published", "archived"]


# ---------- Content types ----------
class ContentTypeCreate(BaseModel):
    name: str = Field(..., max_length=120)
    slug: Optional[str] = Field(None, max_length=100)
    description: Optional[str] = None
    icon: Optional[str] = Field(None, max_length=64)
    fields: List[Dict[str, Any]] = Field(default_factory=list)
    page_id: Optional[int] = None


class ContentTypeFromPreset(BaseModel):
    preset_id: str
    slug: Optional[str] = Field(None, max_length=100)


class ContentTypeUpdate(BaseModel):
    name: Optional[str] = Field(None, max_length=120)
    slug: Optional[str] = Field(None, max_length=100)
    description: Optional[str] = None
    icon: Optional[str] = Field(None, max_length=64)
    fields: Optional[List[Dict[str, Any]]] = None
    page_id: Optional[int] = None


class ContentTypeOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    name: str
    slug: str
    description: Optional[str] = None
    icon: Optional[str] = None
    fields: List[Dict[str, Any]]
    page_id: Optional[int] = None
    created_at: datetime
    updated_at: datetime


class ItemCreate(BaseModel):
    title: str = Field(..., max_length=200)
    slug: Optional[str] = Field(None, max_length=100)
    status: ItemStatus = "draft"
    data: Dict[str, Any] = Field(default_factory=dict)


class ItemUpdate(BaseModel):
    title: Optional[str] = Field(None, max_length=200)
    slug: Optional[str] = Field(None, max_length=100)
    status: Optional[ItemStatus] = None
    data: Optional[Dict[str, Any]] = None


class ItemOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    content_type_id: int
    title: str
    slug: str
    status: ItemStatus
    data: Dict[str, Any]
    author_id: Optional[int] = None
    published_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


# ---------- Media ----------
class MediaCreate(BaseModel):
    name: str = Field(..., max_length=255)
    file_path: str = Field(..., max_length=1024)
    file_type: str = Field("application/octet-stream", max_length=120)
    file_size: Optional[int] = Field(None, ge=0)
    alt_text: Optional[str] = Field(None, max_length=500)
    tags: List[str] = Field(default_factory=list)


class MediaUpdate(BaseModel):
    name: Optional[str] = Field(None, max_length=255)
    alt_text: Optional[str] = Field(None, max_length=500)
    tags: Optional[List[str]] = None


class MediaOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    name: str
    file_path: str
    file_type: str
    file_size: Optional[int] = None
    alt_text: Optional[str] = None
    tags: List[str]
    url: str = ""
    created_at: datetime


# ---------- Users / invitations ----------
class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    email: str
    full_name: Optional[str] = None
    is_active: bool
    role_names: List[str] = Field(default_factory=list)


class RoleChange(BaseModel):
    role: Literal["admin", "editor"]


class InviteIn(BaseModel):
    # both optional so missing values get the service's message instead of a bare 422
    email: Optional[str] = None
    role: Optional[str] = None


class ResendIn(BaseModel):
    invitation_id: Optional[int] = Field(None, alias="invitationId")

    model_config = ConfigDict(populate_by_name=True)


class InvitationOut(BaseModel):
    id: int
    email: str
    role: str
    invited_by: Optional[int] = None
    expires_at: datetime
    created_at: Optional[datetime] = None
    is_expired: bool = False


class InviteResult(BaseModel):
    success: bool = True
    message: str
    invitation: Optional[InvitationOut] = None


class AcceptInvitationIn(BaseModel):
    token: str
    password: str
    full_name: Optional[str] = None
