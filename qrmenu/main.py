import logging

from fastapi import FastAPI, Depends
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from qrmenu.config import settings
from qrmenu.database import get_db
from qrmenu.shared.exceptions import register_exception_handlers

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        openapi_url=f"{settings.API_V1_STR}/openapi.json",
        docs_url=f"{settings.API_V1_STR}/docs",
        redoc_url=f"{settings.API_V1_STR}/redoc",
    )

    from qrmenu.routes.v1.api import api_router
    from qrmenu.auth.router import router as auth_router

    app.include_router(api_router, prefix=settings.API_V1_STR)
    app.include_router(auth_router, prefix=f"{settings.API_V1_STR}/auth", tags=["auth"])

    register_exception_handlers(app)

    # Owner dashboard and public menu pages are served from these origins
    if settings.BACKEND_CORS_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=[str(origin) for origin in settings.BACKEND_CORS_ORIGINS],
            allow_credentials=True,
            allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
            allow_headers=["Authorization", "Content-Type"],
        )

    @app.get("/health")
    async def health_check(db: AsyncSession = Depends(get_db)):
        try:
            await db.execute(text("SELECT 1"))
            database = "ok"
        except SQLAlchemyError as e:
            logger.warning(f"Health check could not reach the database: {e}")
            database = "unavailable"
        return {"status": "ok", "version": settings.VERSION, "database": database}

    logger.info(f"{settings.PROJECT_NAME} {settings.VERSION} ready, API at {settings.API_V1_STR}")
    return app


app = create_app()
