# storefront/main.py
import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.utils import get_openapi
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from . import admin, auth, orders, shop
from .config import Settings, get_settings
from .errors import AuthorizationError, NotFoundError, StorageError, StorefrontError, ValidationError
from .logging_config import setup_logging
from .seed import seed_demo_data
from .sql_storage import SqlStorage
from .storage import MemoryStorage, Storage

logger = logging.getLogger(__name__)

BODY_TOO_LARGE = "Request body too large"


def _field_errors(exc: RequestValidationError) -> list[dict]:
    out = []
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "path", "query")]
        out.append({"field": ".".join(loc) or None, "message": err.get("msg", "Invalid value")})
    return out


class BodySizeLimitMiddleware:
    """Rejects request bodies over `max_bytes` with 413.

    Content-Length is checked up front; chunked bodies are counted as they
    are received, so a missing header does not bypass the limit.
    """

    def __init__(self, app, max_bytes: int):
        self.app = app
        self.max_bytes = max_bytes

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        length = dict(scope["headers"]).get(b"content-length")
        if length is not None and length.isdigit() and int(length) > self.max_bytes:
            response = JSONResponse(status_code=413, content={"message": BODY_TOO_LARGE})
            await response(scope, receive, send)
            return

        received = 0

        async def limited_receive():
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.max_bytes:
                    # re-raised by FastAPI's body parsing, rendered by the HTTPException handler
                    raise HTTPException(status_code=413, detail=BODY_TOO_LARGE)
            return message

        await self.app(scope, limited_receive, send)


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"message": "Invalid request data", "errors": _field_errors(exc)})

    @app.exception_handler(ValidationError)
    async def validation_handler(request: Request, exc: ValidationError):
        return JSONResponse(status_code=400, content={"message": exc.message, "errors": exc.errors})

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content={"message": exc.message})

    @app.exception_handler(AuthorizationError)
    async def authorization_handler(request: Request, exc: AuthorizationError):
        headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message}, headers=headers)

    # storage details stay in the logs
    @app.exception_handler(StorageError)
    async def storage_handler(request: Request, exc: StorageError):
        logger.error("Storage failure on %s %s: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=500, content={"message": "Internal storage error"})

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        return JSONResponse(status_code=exc.status_code, content={"message": exc.detail}, headers=exc.headers)

    @app.exception_handler(StorefrontError)
    async def storefront_handler(request: Request, exc: StorefrontError):
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

    @app.exception_handler(Exception)
    async def unhandled_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"message": "Internal server error"})


def create_app(settings: Optional[Settings] = None, storage: Optional[Storage] = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.log_level)
    for name in settings.insecure_admin_defaults():
        logger.warning("Admin auth is enabled but %s is still the default; set it before going live", name)

    seed = settings.seed_on_startup or (storage is None and settings.storage_backend == "memory")
    if storage is None:
        if settings.storage_backend == "memory":
            storage = MemoryStorage()
        else:
            storage = SqlStorage.from_url(settings.database_url, echo=settings.sql_echo)

    app = FastAPI(
        title="Storefront API",
        description="Digital services catalog, manual-payment checkout and admin back office",
        version="1.0.0",
    )
    app.state.settings = settings
    app.state.storage = storage

    # inline base64 screenshots make bodies large, but not unbounded
    app.add_middleware(BodySizeLimitMiddleware, max_bytes=settings.max_body_bytes)

    # ✅ CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    # ✅ Routers
    app.include_router(shop.router)
    app.include_router(orders.router)
    app.include_router(auth.router)
    app.include_router(admin.router)

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    @app.on_event("startup")
    async def on_startup():
        await storage.init()
        if seed:
            await seed_demo_data(storage, settings)
        logger.info("Storefront API started (storage=%s)", type(storage).__name__)

    @app.on_event("shutdown")
    async def on_shutdown():
        await storage.close()

    # ✅ OpenAPI with a password flow so /docs shows Authorize for admin routes
    def custom_openapi():
        if app.openapi_schema:
            return app.openapi_schema
        schema = get_openapi(
            title=app.title,
            version=app.version,
            description=app.description,
            routes=app.routes,
        )
        schema.setdefault("components", {}).setdefault("securitySchemes", {})
        schema["components"]["securitySchemes"]["OAuth2PasswordBearer"] = {
            "type": "oauth2",
            "flows": {"password": {"tokenUrl": "/api/admin/login", "scopes": {}}},
        }
        app.openapi_schema = schema
        return app.openapi_schema

    app.openapi = custom_openapi
    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run("storefront.main:app", host="0.0.0.0", port=8000, reload=True)
