"""Animal Shop FastAPI application.

Every request runs inside the ``animalshop`` domain context and commands are
processed synchronously.

Usage:
    uvicorn animalshop.app:create_app --factory --host 0.0.0.0 --port 8000
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

from animalshop.api import address_router, auth_router, cart_router, category_router, order_router, product_router
from animalshop.domain import shop
from animalshop.exceptions import AuthenticationError, InsufficientStockError, PermissionDeniedError


def build_app() -> FastAPI:
    """Assemble the app around an already initialized domain."""
    app = FastAPI(
        title="Animal Shop API",
        description="Catalogue, address book, carts, checkout and orders",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Push the Protean domain context for each request."""
        with structlog.contextvars.bound_contextvars(method=request.method, path=request.url.path):
            with shop.domain_context():
                return await call_next(request)

    register_exception_handlers(app)

    @app.exception_handler(InsufficientStockError)
    async def insufficient_stock(request: Request, exc: InsufficientStockError):
        return JSONResponse(status_code=400, content={"error": exc.messages, "stock": exc.details()})

    @app.exception_handler(AuthenticationError)
    async def authentication_error(request: Request, exc: AuthenticationError):
        return JSONResponse(
            status_code=401,
            content={"error": exc.message},
            headers={"WWW-Authenticate": "Bearer"},
        )

    @app.exception_handler(PermissionDeniedError)
    async def permission_denied(request: Request, exc: PermissionDeniedError):
        return JSONResponse(status_code=403, content={"error": exc.message})

    app.include_router(auth_router)
    app.include_router(product_router)
    app.include_router(category_router)
    app.include_router(address_router)
    app.include_router(cart_router)
    app.include_router(order_router)

    @app.get("/health")
    async def health():
        return JSONResponse(content={"status": "ok", "domain": shop.name})

    return app


def create_app() -> FastAPI:
    shop.init()
    return build_app()
