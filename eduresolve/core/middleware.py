from fastapi import FastAPI, Request, HTTPException
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from fastapi.responses import JSONResponse
from starlette.responses import Response
from colorlog import ColoredFormatter
from typing import Optional
import time, json, logging, traceback

from eduresolve.core.config import settings

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
RESET = "\033[0m"


def build_request_logger(log_file: Optional[str]) -> logging.Logger:
    """Colored console output, plus an uncolored file when `log_file` is set."""
    request_logger = logging.getLogger("eduresolve.requests")
    request_logger.setLevel(logging.INFO)
    request_logger.propagate = False
    if request_logger.handlers:
        return request_logger

    console = logging.StreamHandler()
    console.setFormatter(ColoredFormatter(
        "%(log_color)s" + LOG_FORMAT,
        log_colors={
            'DEBUG': 'cyan',
            'INFO': 'green',
            'WARNING': 'yellow',
            'ERROR': 'red',
            'CRITICAL': 'bold_red',
        },
    ))
    request_logger.addHandler(console)

    if log_file:
        to_file = logging.FileHandler(log_file)
        to_file.setFormatter(logging.Formatter(LOG_FORMAT))
        request_logger.addHandler(to_file)

    return request_logger


logger = build_request_logger(settings.LOG_FILE)


def status_color(status_code: int) -> str:
    if 200 <= status_code < 300:
        return "\033[92m"  # Green
    if 400 <= status_code < 500:
        return "\033[93m"  # Yellow
    if status_code >= 500:
        return "\033[91m"  # Red
    return RESET


def error_reason(body: bytes) -> str:
    """Pull the human-readable part out of an error response body."""
    try:
        content = json.loads(body.decode())
    except ValueError:
        return body.decode(errors="ignore")
    if isinstance(content, dict):
        return str(content.get("message") or content.get("detail") or content)
    return str(content)


def register_middleware(app: FastAPI):

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        logger.error(f"HTTPException: {exc.detail} at {request.method} {request.url.path}")
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail}, headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.error(f"Validation error at {request.method} {request.url.path}: {exc.errors()}")
        return JSONResponse(status_code=422, content={"detail": jsonable_encoder(exc.errors())})

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            logger.error(f"Unhandled error for {request.method} {request.url.path}\n{traceback.format_exc()}")
            raise
        elapsed = time.perf_counter() - started

        client = f"{request.client.host}:{request.client.port}" if request.client else "-"
        line = (
            f"{client} - {request.method} {request.url.path} - "
            f"Status: {status_color(response.status_code)}{response.status_code}{RESET} - Time: {elapsed:.2f}s"
        )

        if response.status_code >= 400:
            # the body stream can only be read once, so rebuild the response
            body = b"".join([chunk async for chunk in response.body_iterator])
            response = Response(
                content=body,
                status_code=response.status_code,
                headers=dict(response.headers),
                media_type=response.media_type,
            )
            line += f" - Reason: {error_reason(body)}"

        logger.info(line)
        return response

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
        allow_credentials=True,
    )
    app.add_middleware(TrustedHostMiddleware, allowed_hosts=settings.ALLOWED_HOSTS)
