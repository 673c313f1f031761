from __future__ import annotations
import datetime as dt
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.trustedhost import TrustedHostMiddleware
from starlette.responses import JSONResponse

from api_router import router
from hd_core.errors import InvalidInputError
from schemas import ErrorResponse, ErrorEnvelope, ErrorDetail
from settings import APP_NAME, APP_VERSION, CORS_ALLOW_ORIGINS, TRUSTED_HOSTS, GZIP_MIN_SIZE, REQUEST_LOGGING, LOG_LEVEL
from middleware import RequestIDMiddleware, LoggingMiddleware

logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger(__name__)

DESCRIPTION = "Human Design chart, report, connection and transit endpoints."


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("startup", extra={"app": APP_NAME, "version": APP_VERSION})
    yield
    logger.info("shutdown", extra={"app": APP_NAME})


app = FastAPI(
    title=APP_NAME,
    version=APP_VERSION,
    description=DESCRIPTION,
    lifespan=lifespan,
)

# --- Middleware ---
app.add_middleware(RequestIDMiddleware)
app.add_middleware(LoggingMiddleware, mode=REQUEST_LOGGING)
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOW_ORIGINS or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(GZipMiddleware, minimum_size=GZIP_MIN_SIZE)
app.add_middleware(TrustedHostMiddleware, allowed_hosts=TRUSTED_HOSTS or ["*"])


# --- Exception handlers -> uniform envelope ---
_HTTP_CODES = {
    status.HTTP_400_BAD_REQUEST: "BAD_REQUEST",
    status.HTTP_401_UNAUTHORIZED: "UNAUTHORIZED",
    status.HTTP_403_FORBIDDEN: "FORBIDDEN",
    status.HTTP_404_NOT_FOUND: "NOT_FOUND",
    status.HTTP_405_METHOD_NOT_ALLOWED: "METHOD_NOT_ALLOWED",
}


def _envelope(status_code: int, err: ErrorEnvelope) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=err).model_dump())


@app.exception_handler(StarletteHTTPException)
async def on_http_exception(request: Request, exc: StarletteHTTPException):
    status_code = int(getattr(exc, "status_code", 500))
    detail = getattr(exc, "detail", None)
    message = detail if isinstance(detail, str) and detail else str(exc)
    code = _HTTP_CODES.get(status_code, f"HTTP_{status_code}")
    return _envelope(status_code, ErrorEnvelope(code=code, message=message))


@app.exception_handler(InvalidInputError)
async def on_invalid_input(request: Request, exc: InvalidInputError):
    logger.info("invalid_input", extra={"path": request.url.path, "error": str(exc)})
    return _envelope(status.HTTP_400_BAD_REQUEST, ErrorEnvelope(code="BAD_REQUEST", message=str(exc)))


@app.exception_handler(RequestValidationError)
async def on_validation_error(request: Request, exc: RequestValidationError):
    details = [
        ErrorDetail(field=".".join(str(p) for p in e.get("loc", ())), issue=e.get("msg"))
        for e in exc.errors()
    ]
    err = ErrorEnvelope(code="UNPROCESSABLE_ENTITY", message="Validation error", details=details)
    return _envelope(status.HTTP_422_UNPROCESSABLE_ENTITY, err)


@app.exception_handler(Exception)
async def on_any_error(request: Request, exc: Exception):
    logger.exception("unhandled_error", extra={"path": request.url.path})
    return _envelope(status.HTTP_500_INTERNAL_SERVER_ERROR, ErrorEnvelope(code="SERVER_ERROR", message=str(exc)))


@app.get("/")
async def landing():
    return {"service": APP_NAME, "version": APP_VERSION, "ts": dt.datetime.now(dt.UTC).isoformat()}


# --- Liveness/Readiness ---
@app.get("/healthz")
async def healthz():
    return {"ok": True, "ts": dt.datetime.now(dt.UTC).isoformat()}


@app.get("/readyz")
async def readyz():
    return {"ready": True}


# --- Routes ---
app.include_router(router)


# Optional: dev run
if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="127.0.0.1", port=8787, reload=True)
