from dotenv import load_dotenv
load_dotenv()
import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import OperationalError
from bakery.core.config import settings
from bakery.core.exceptions import BakeryError, BackendUnavailableError
from bakery.core.rate_limit import limiter
from bakery.db.session import Backend
from bakery.api import router as api_router
from bakery.api import auth
from bakery import __version__

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Bakery Backend",
    version=__version__
)

# Add rate limiter to app state
app.state.limiter = limiter

# Database and object storage, connected on first use
app.state.backend = Backend(settings)


@app.exception_handler(BakeryError)
async def bakery_error_handler(request: Request, exc: BakeryError):
    if exc.status_code >= 500:
        logger.error("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(OperationalError)
async def database_error_handler(request: Request, exc: OperationalError):
    logger.error("Database error on %s %s: %s", request.method, request.url.path, exc)
    error = BackendUnavailableError("Database is unavailable")
    return JSONResponse(status_code=error.status_code, content={"detail": error.message})


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


# Custom rate limit exceeded handler
@app.exception_handler(RateLimitExceeded)
async def custom_rate_limit_handler(request: Request, exc: RateLimitExceeded):
    return JSONResponse(
        status_code=429,
        content={
            "detail": "Too many requests. You have exceeded the maximum number of attempts. Please wait a few minutes before trying again."
        }
    )

origins = [
    settings.FRONTEND_URL,
    "http://localhost:3000",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(dict.fromkeys(origins)),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(api_router, prefix="/api")
app.include_router(auth.router)

# Locally stored product images are served by the API itself
if settings.STORAGE_BACKEND == "local":
    app.mount("/uploads", StaticFiles(directory=settings.STORAGE_LOCAL_PATH, check_dir=False), name="uploads")


@app.get("/")
def root():
    return {
        "message": "Bakery backend running",
        "version": __version__
    }
