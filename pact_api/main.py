"""Main FastAPI application for PACT API."""

import logging
from http import HTTPStatus
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from pact_api.api.v1 import auth, users, friends, groups, tasks
from pact_api.config import settings
from pact_api.logging_setup import setup_logging

setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

# Create FastAPI application instance
app = FastAPI(
    title=settings.PROJECT_NAME,
    debug=settings.DEBUG,
)

# The browser client sends the auth cookie, so credentials must be allowed
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.FRONTEND_URL],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error_body(status_code: int, message: Any) -> dict:
    try:
        reason = HTTPStatus(status_code).phrase
    except ValueError:
        reason = "Error"
    return {"statusCode": status_code, "message": message, "error": reason}


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.status_code, exc.detail),
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    messages = []
    for err in exc.errors():
        field = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        messages.append(f"{field}: {err.get('msg')}" if field else err.get("msg"))
    return JSONResponse(status_code=400, content=_error_body(400, messages))


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content=_error_body(500, "Internal server error"))


# Include API routers
app.include_router(
    auth.router,
    prefix=f"{settings.API_PREFIX}/auth",
    tags=["Authentication"]
)

app.include_router(
    users.router,
    prefix=settings.API_PREFIX,
    tags=["Users"]
)

app.include_router(
    friends.router,
    prefix=f"{settings.API_PREFIX}/friends",
    tags=["Friends"]
)

app.include_router(
    groups.router,
    prefix=f"{settings.API_PREFIX}/groups",
    tags=["Groups"]
)

app.include_router(
    tasks.router,
    prefix=f"{settings.API_PREFIX}/tasks",
    tags=["Tasks"]
)


@app.get("/")
def root():
    """Root endpoint - API welcome message."""
    return {
        "message": "Welcome to PACT API",
        "docs": "/docs",
        "version": "1.0.0"
    }


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
