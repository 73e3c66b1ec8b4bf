# pagecraft/main.py
from __future__ import annotations

from fastapi.openapi.utils import get_openapi
from fastapi.responses import RedirectResponse
from fastapi.routing import APIRoute
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from pagecraft.api.delivery.router import router as delivery_router
from pagecraft.api.v1.router import api_router
from pagecraft.core.config import create_app
from pagecraft.core.logging import configure_logging
from pagecraft.core.settings import settings
from pagecraft.services.settings_store import SiteSettingsStore
from pagecraft.web.public.router import router as public_web_router


configure_logging(settings.LOG_LEVEL)
app = create_app()

app.add_middleware(ProxyHeadersMiddleware, trusted_hosts="*")

# one snapshot store per application; handlers reach it via get_settings_store
app.state.site_settings = SiteSettingsStore()


def _inject_bearer_security(app):
    """
    bearerAuth becomes the global default in the OpenAPI document.
    /delivery/* is cleared afterwards by _mark_delivery_routes_public (docs only).
    """
    def custom_openapi():
        if app.openapi_schema:
            return app.openapi_schema

        openapi_schema = get_openapi(
            title=settings.APP_NAME,
            version="1.0.0",
            description="Section-based website CMS",
            routes=app.routes,
        )
        components = openapi_schema.setdefault("components", {})
        components.setdefault("securitySchemes", {})["bearerAuth"] = {
            "type": "http",
            "scheme": "bearer",
            "bearerFormat": "JWT",
        }
        openapi_schema["security"] = [{"bearerAuth": []}]

        app.openapi_schema = openapi_schema
        return app.openapi_schema

    app.openapi = custom_openapi


def _mark_delivery_routes_public(app):
    for route in app.routes:
        if isinstance(route, APIRoute) and (route.path or "").startswith("/delivery/"):
            extra = dict(route.openapi_extra or {})
            extra["security"] = []
            route.openapi_extra = extra


_inject_bearer_security(app)


@app.get("/", include_in_schema=False)
def root():
    return RedirectResponse(url="/docs", status_code=302)


# admin API (JWT)
app.include_router(api_router, prefix=settings.API_V1_STR)

# public delivery JSON + server-rendered pages
app.include_router(delivery_router)
app.include_router(public_web_router)

_mark_delivery_routes_public(app)
