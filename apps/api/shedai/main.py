from __future__ import annotations

import logging
from urllib.parse import urlparse
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration

from shedai.core.config import settings
from shedai.routes.activity_mix import router as activity_mix_router
from shedai.routes.categories import router as categories_router
from shedai.routes.parse import router as parse_router
from shedai.services.error_log import log_system_error

CORRELATION_HEADER = "x-correlation-id"

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="shedAI Parser API", version="0.1.0")


def _init_sentry() -> None:
    if not settings.is_sentry_configured():
        return
    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        integrations=[FastApiIntegration()],
        traces_sample_rate=max(0.0, min(settings.sentry_traces_sample_rate, 1.0)),
        send_default_pii=False,
        environment=settings.app_env,
    )


_init_sentry()


def _origin(url: str) -> str:
    # FRONTEND_URL may include a trailing slash or a path; CORS compares origins.
    p = urlparse(url)
    if p.scheme and p.netloc:
        return f"{p.scheme}://{p.netloc}"
    return url.rstrip("/")


_ALLOWED_ORIGINS = sorted(
    {
        _origin(str(settings.frontend_url)),
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        # Capacitor webview origins.
        "capacitor://localhost",
        "http://localhost",
    }
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_server_error_responses(request: Request, call_next):
    response = await call_next(request)
    if response.status_code >= 500:
        await log_system_error(
            route=str(request.url.path),
            message=f"Server response status {response.status_code}",
            meta={
                "status_code": response.status_code,
                "method": request.method,
                "path": str(request.url.path),
                "correlation_id": getattr(request.state, "correlation_id", None),
            },
        )
    return response


@app.middleware("http")
async def attach_correlation_id(request: Request, call_next):
    incoming = (request.headers.get(CORRELATION_HEADER) or "").strip()
    correlation_id = incoming[:128] if incoming else uuid4().hex[:12]
    request.state.correlation_id = correlation_id
    response = await call_next(request)
    response.headers[CORRELATION_HEADER] = correlation_id
    return response


@app.get("/health")
async def health() -> dict:
    return {"ok": True}


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    # Best-effort: never block the response on logging.
    correlation_id = getattr(request.state, "correlation_id", None)
    await log_system_error(
        route=str(request.url.path),
        message="Unhandled server error",
        err=exc,
        meta={"method": request.method, "correlation_id": correlation_id},
    )
    headers = {CORRELATION_HEADER: correlation_id} if correlation_id else None
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"},
        headers=headers,
    )


app.include_router(parse_router, prefix="/api")
app.include_router(categories_router, prefix="/api")
app.include_router(activity_mix_router, prefix="/api")
