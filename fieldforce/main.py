from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from fieldforce.config import settings
from fieldforce.db import init_db
from fieldforce.envelope import fail, internal_error, violations
from fieldforce.logger import get_logger, setup_logger
from fieldforce.routes import attendance, auth, dvr, submissions, users

setup_logger()
logger = get_logger(__name__)

REQUEST_LOCATIONS = ("body", "query", "path")


@asynccontextmanager
async def lifespan(app):
    if settings.create_tables_on_startup:
        init_db()
        logger.info("database tables ensured")
    yield
    logger.info("application shutting down")


app = FastAPI(title=settings.api_title, lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    logger.info("%s %s", request.method, request.url.path)
    return await call_next(request)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        return fail("Resource not found", 404)
    return fail(str(exc.detail), exc.status_code)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = []
    for err in exc.errors():
        loc = tuple(err.get("loc", ()))
        if len(loc) > 1 and loc[0] in REQUEST_LOCATIONS:
            loc = loc[1:]
        errors.append({**err, "loc": loc})
    logger.info("request validation failed", extra={"path": request.url.path})
    return fail("Validation failed", 400, violations(errors))


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("unhandled error on %s %s", request.method, request.url.path)
    return internal_error("Internal Server Error", exc)


@app.get("/", tags=["root"])
def read_root() -> dict:
    return {"status": "ok"}


@app.get("/health", tags=["health"])
def health_check() -> dict:
    return {"status": "healthy"}


@app.get("/api", tags=["root"])
def welcome() -> dict:
    return {
        "message": "Welcome to the Field Force Management API!",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


app.include_router(auth.router, prefix="/api")
app.include_router(users.router, prefix="/api")
app.include_router(attendance.router, prefix="/api")
app.include_router(dvr.router, prefix="/api")
app.include_router(submissions.router, prefix="/api")
