import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from train_api.config import settings
from train_api.database import init_db
from train_api.exceptions import register_exception_handlers
from train_api.auth import router as auth_router
from train_api.stations import router as stations_router
from train_api.trips import router as trips_router
from train_api.bookings import router as bookings_router
from train_api.payments import router as payments_router

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = settings.LOG_LEVEL) -> None:
    """Attach a single stream handler to the root logger"""
    root = logging.getLogger()
    root.setLevel(level.upper())
    if not any(isinstance(h, logging.StreamHandler) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.AUTO_CREATE_TABLES:
        init_db()
        logger.info("Database tables ready")
    yield


def create_app() -> FastAPI:
    configure_logging()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version="1.0.0",
        description="Train trip search, booking and payment API",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Include routers
    app.include_router(
        auth_router,
        prefix=f"{settings.API_PREFIX}/auth",
        tags=["Authentication"]
    )

    app.include_router(
        stations_router,
        prefix=f"{settings.API_PREFIX}/stations",
        tags=["Stations"]
    )

    app.include_router(
        trips_router,
        prefix=f"{settings.API_PREFIX}/trips",
        tags=["Trips"]
    )

    app.include_router(
        bookings_router,
        prefix=f"{settings.API_PREFIX}/bookings",
        tags=["Bookings"]
    )

    app.include_router(
        payments_router,
        prefix=f"{settings.API_PREFIX}/bookings",
        tags=["Payments"]
    )

    @app.get("/")
    def root():
        """Root endpoint"""
        return {
            "message": settings.PROJECT_NAME,
            "version": "1.0.0",
            "docs": "/docs"
        }

    @app.get("/health")
    def health_check():
        """Health check endpoint"""
        return {"status": "healthy"}

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
