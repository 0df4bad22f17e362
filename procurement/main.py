from procurement.core.config import get_settings
from procurement.core.errors import register_exception_handlers
from procurement.core.logging import configure_logging
from procurement.core.middleware import RequestIdMiddleware
from procurement.api.v1.router import v1_router

from fastapi import FastAPI


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.app_name,
        version="0.1.0",
    )

    # Middleware: Request ID
    app.add_middleware(RequestIdMiddleware, header_name=settings.request_id_header)

    # Error envelope: {success: false, error}
    register_exception_handlers(app)

    # API v1
    app.include_router(v1_router, prefix=settings.api_prefix)

    return app


app = create_app()
