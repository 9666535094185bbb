import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import load_settings
from app.errors import ErrorCode
from app.middleware import RequestSizeLimitMiddleware
from app.response import CORS_HEADERS, error_response, method_not_allowed_response
from app.routers import relay

API_VERSION = "1.0.0"

logger = logging.getLogger(__name__)

# Process-level knobs only; request handling resolves settings per request
startup_settings = load_settings()


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(startup_settings.log_level)
    if not startup_settings.wechat_webhook_url:
        logger.warning("WECHAT_WEBHOOK_URL is not set; POST requests will fail")
    yield


app = FastAPI(
    title=startup_settings.app_name,
    description="Forward form or JSON submissions to a WeCom group robot webhook.",
    version=API_VERSION,
    lifespan=lifespan,
    docs_url=None,
    redoc_url=None,
    openapi_url=None,
)

# CORS: every OPTIONS request is answered by the preflight route with a fixed
# header set, and every JSON response carries Access-Control-Allow-Origin
app.add_middleware(RequestSizeLimitMiddleware, max_body_size=startup_settings.max_body_bytes)


# --- Exception Handlers ---


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 405:
        return method_not_allowed_response(request.method)
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "message": str(exc.detail),
            "error": {"code": ErrorCode.UNKNOWN_ERROR.value},
        },
        headers=CORS_HEADERS,
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return error_response(ErrorCode.UNKNOWN_ERROR, details=str(exc))


# --- Routes ---

app.include_router(relay.router)


def run() -> None:
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=startup_settings.host,
        port=startup_settings.port,
        log_level=startup_settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
