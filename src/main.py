import logging
import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from database import init_db
from errors import WorkoutLogError
from exercises_api import router as exercises_router

# Load environment variables from .env file
load_dotenv()

logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


app = FastAPI(title="Workout Log", version="1.0.0", lifespan=lifespan)


@app.middleware("http")
async def log_internal_errors(request: Request, call_next):
    try:
        return await call_next(request)
    except Exception:
        logger.exception(
            "Unhandled exception during request: %s %s", request.method, request.url
        )
        raise


@app.exception_handler(WorkoutLogError)
async def workout_log_error_handler(request: Request, exc: WorkoutLogError):
    """Map core errors to their HTTP status with a JSON error body."""
    logger.warning(
        "%s on %s %s: %s", exc.code, request.method, request.url.path, exc.message
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


# Include routers
app.include_router(exercises_router)


@app.get("/")
async def root():
    return {"message": "Welcome to Workout Log"}


@app.get("/health")
async def health_check():
    return {"status": "healthy"}
