# pagecraft/api/v1/router.py
from fastapi import APIRouter

from pagecraft.api.v1 import auth as auth_endpoints
from pagecraft.api.v1.endpoints import (
    content_types,
    health,
    invitations,
    media,
    pages,
    reusable,
    section_types,
    sections,
    settings as settings_endpoints,
    users,
)

api_router = APIRouter()
api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth_endpoints.router, prefix="/auth")

api_router.include_router(pages.router)           # /pages
api_router.include_router(sections.router)        # /pages/{id}/sections, /sections/{id}
api_router.include_router(section_types.router)   # /section-types
api_router.include_router(reusable.router)        # /reusable-components
api_router.include_router(settings_endpoints.router)  # /settings
api_router.include_router(content_types.router)   # /content-types
api_router.include_router(media.router)           # /media
api_router.include_router(invitations.router)     # /invitations
api_router.include_router(users.router)           # /users
