import logging
from contextlib import asynccontextmanager
from typing import Any, cast

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from string_analyzer import database
from string_analyzer import limiter as limiter_module
from string_analyzer.config import settings
from string_analyzer.logging import RequestLoggingMiddleware, init_logging, setup_query_logging
from string_analyzer.routes import router

logger = logging.getLogger("string_analyzer")


@asynccontextmanager
async def lifespan(app: FastAPI):
    database.init_db()
    logger.info("Database ready at %s", database.engine.url.render_as_string(hide_password=True))
    if not settings.RATE_LIMIT_ENABLED:
        logger.info("Rate limiting disabled (RATE_LIMIT_ENABLED=false)")
    yield


app = FastAPI(
    title=settings.APP_NAME,
    version="1.0.0",
    description=(
        "Analyze and store strings, then query them with structured filters "
        "or plain-English phrases such as 'all single word palindromic strings'."
    ),
    lifespan=lifespan,
)

init_logging()
setup_query_logging(database.engine)

app.state.limiter = limiter_module.limiter
app.add_exception_handler(RateLimitExceeded, cast(Any, _rate_limit_exceeded_handler))
app.add_middleware(cast(Any, limiter_module.get_middleware()))
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router)


@app.get("/")
def root():
    return {
        "message": f"{settings.APP_NAME} running. Visit /docs for API documentation.",
        "endpoints": {
            "create": "POST /strings",
            "get_one": "GET /strings/{string_value}",
            "get_all": "GET /strings",
            "natural_language": "GET /strings/filter-by-natural-language",
            "delete": "DELETE /strings/{string_value}",
        },
    }


# -------------------------------
# Unified error response handlers
# -------------------------------
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    log = logger.warning if exc.status_code < 500 else logger.error
    log(
        "HTTPException: %s %s -> %s | detail=%s",
        request.method,
        request.url.path,
        exc.status_code,
        exc.detail,
    )
    body = {"error": exc.detail if isinstance(exc.detail, str) else "Error"}
    if isinstance(exc.detail, dict):
        body = {
            "error": exc.detail.get("error") or "Error",
            "details": exc.detail.get("details"),
        }
    return JSONResponse(status_code=exc.status_code, content=body, headers=getattr(exc, "headers", None))


def _validation_status(request: Request, errors: list) -> int:
    """Missing fields and malformed input are 400; a wrongly typed body value is 422.

    An explicit ``"value": null`` counts as missing.
    """
    path = request.url.path
    if request.method == "POST" and path.endswith("/strings"):
        missing_or_malformed = any(
            err.get("type") in {"missing", "json_invalid", "model_attributes_type"}
            or (err.get("type") == "string_type" and err.get("input") is None)
            for err in errors
        )
        return 400 if missing_or_malformed else 422
    return 400


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    logger.warning(
        "ValidationError: %s %s | errors=%s",
        request.method,
        request.url.path,
        errors,
    )
    return JSONResponse(
        status_code=_validation_status(request, list(errors)),
        content={"error": "Validation failed", "details": jsonable_encoder(errors)},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(
        "Unhandled exception: %s %s",
        request.method,
        request.url.path,
    )
    return JSONResponse(status_code=500, content={"error": "Internal server error"})
