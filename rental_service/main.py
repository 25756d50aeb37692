import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

import redis.asyncio as redis
from fastapi_limiter import FastAPILimiter

from .config import settings
from .database import Store
from .exceptions import RentalServiceError
from .routers import booking_router, equipment_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger("rental_service")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manages application startup and shutdown events.
    """
    logger.info("Rental service starting up...")

    # A database that cannot be reached after the retries stops startup here
    store = Store(settings.DATABASE_URL)
    await store.connect(
        max_retries=settings.DB_CONNECT_MAX_RETRIES,
        retry_delay=settings.DB_CONNECT_RETRY_DELAY,
        create_tables=settings.CREATE_TABLES,
    )
    app.state.store = store

    # Routes skip rate limiting unless the limiter reached Redis
    app.state.rate_limiter_ready = False
    redis_client = None
    if settings.RATE_LIMIT_ENABLED:
        try:
            redis_client = redis.from_url(settings.REDIS_URL, encoding="utf-8")
            await FastAPILimiter.init(redis_client)
            app.state.rate_limiter_ready = True
            logger.info("FastAPILimiter initialized with Redis.")
        except Exception as e:
            logger.error(f"Failed to initialize FastAPILimiter: {e}. Requests will not be rate limited.")
            if redis_client is not None:
                await redis_client.aclose()
                redis_client = None

    yield  # The application is now running

    logger.info("Rental service shutting down...")
    if redis_client is not None:
        await redis_client.aclose()
    store.dispose()


app = FastAPI(
    title="Equipment Rental API",
    description="Lists equipment, creates rental bookings and checks stock availability.",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RentalServiceError)
async def rental_service_error_handler(request: Request, exc: RentalServiceError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} rejected ({exc.status_code}): {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    # Report only the first problem with the request body
    error = exc.errors()[0]
    location = ".".join(str(part) for part in error["loc"] if part != "body") or "body"
    message = f"Invalid field {location}: {error['msg']}"
    logger.info(f"{request.method} {request.url.path} rejected (400): {message}")
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": message})


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error(f"Database error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "An error occurred on the server. Please try again later."},
    )


app.include_router(equipment_router.router, prefix="/api")
app.include_router(booking_router.router, prefix="/api")


@app.get("/")
def read_root():
    return {"message": "Welcome to the Equipment Rental API"}
