import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

# Import models so they're registered with SQLAlchemy Base
from . import models  # noqa: F401
from .config import get_settings
from .database import Base, engine
from .domain.booking.router import router as booking_router
from .domain.inquiries.router import router as inquiries_router
from .domain.leads.router import router as leads_router
from .domain.metrics.router import router as metrics_router
from .domain.rentals.router import router as rentals_router
from .domain.sitemap.router import router as sitemap_router
from .security_headers import SecurityHeadersMiddleware

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Reduce verbosity of third-party libraries
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)

settings = get_settings()

MISSING_FIELDS_MESSAGE = "Faltan campos obligatorios."


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application starting up...")
    try:
        Base.metadata.create_all(bind=engine, checkfirst=True)
        logger.info("Database tables created successfully")
    except Exception as e:
        # Ignore "already exists" errors from race conditions between workers
        error_msg = str(e)
        if "already exists" in error_msg or "duplicate key" in error_msg:
            logger.info("Database tables already exist (created by another worker)")
        else:
            logger.error(f"Failed to create database tables: {e}")

    if not settings.RESEND_API_KEY or not settings.admin_emails:
        logger.warning("RESEND_API_KEY or ADMIN_EMAIL not set - notification emails are disabled")
    if not settings.RECAPTCHA_SECRET_KEY:
        logger.warning("RECAPTCHA_SECRET_KEY not set - prize and inquiry forms will answer 500")

    yield
    logger.info("Application shutting down...")


app = FastAPI(title="Centro de Belleza API", version="1.0.0", lifespan=lifespan)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render every HTTP error as {"error": ..., "details"?: ...}"""
    if isinstance(exc.detail, dict):
        content = exc.detail
    else:
        content = {"error": exc.detail}
    return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)


def validation_message(errors: list[dict]) -> str:
    """First human-readable reason among Pydantic errors"""
    for error in errors:
        if error.get("type") == "missing":
            return MISSING_FIELDS_MESSAGE
        if error.get("type") == "value_error":
            return str(error.get("msg", "")).removeprefix("Value error, ")
    return MISSING_FIELDS_MESSAGE


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Schema failures are plain 400s for the public forms"""
    errors = exc.errors()
    logger.warning(f"Validation error for {request.url.path}: {errors}")
    details = [
        {"loc": [str(part) for part in error.get("loc", ())], "msg": str(error.get("msg", ""))}
        for error in errors
    ]
    return JSONResponse(
        status_code=400,
        content={"error": validation_message(errors), "details": details},
    )


@app.middleware("http")
async def log_requests(request: Request, call_next):
    try:
        response = await call_next(request)
        return response
    except Exception as e:
        logger.error(f"{request.method} {request.url.path} - Error: {str(e)}")
        raise


app.add_middleware(
    SecurityHeadersMiddleware,
    exclude_paths=["/health", "/docs", "/openapi.json"],
    is_production=settings.is_production,
)

logger.info(f"CORS allowed origins: {settings.allowed_origins}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=False,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

# Routes
app.include_router(booking_router)
app.include_router(leads_router)
app.include_router(inquiries_router)
app.include_router(metrics_router)
app.include_router(rentals_router)
app.include_router(sitemap_router)


@app.get("/")
def root():
    return {"message": "Centro de Belleza API is running"}


@app.get("/health")
def health():
    return {"status": "healthy"}
