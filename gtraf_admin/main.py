from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from starlette.responses import Response
from starlette.middleware.base import BaseHTTPMiddleware
from gtraf_admin.api import auth, dashboard, devis, reservations, portfolio, parametres
from gtraf_admin.core.config import settings
from gtraf_admin.core.redis import init_redis, close_redis, get_redis
from gtraf_admin.core.metrics import request_count, request_duration, db_connected, redis_connected, get_metrics_text
from gtraf_admin.db.session import init_db
from gtraf_admin.services.api_client import UpstreamError
import time
import logging

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


class MetricsMiddleware(BaseHTTPMiddleware):
    """Count and time every request, labelled by route template."""

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        status = 500

        try:
            response = await call_next(request)
            status = response.status_code
            return response
        finally:
            route = request.scope.get("route")
            endpoint = getattr(route, "path", request.url.path)
            request_count.labels(method=request.method, endpoint=endpoint, status=status).inc()
            request_duration.labels(method=request.method, endpoint=endpoint).observe(
                time.perf_counter() - started
            )


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting {settings.API_TITLE} against {settings.API_BASE_URL}")

    try:
        await init_db()
        db_connected.set(1)
        logger.info("Database ready")
    except Exception as e:
        logger.error(f"Database initialisation failed: {e}")
        db_connected.set(0)
        raise

    try:
        await init_redis()
        redis_connected.set(1)
    except Exception as e:
        logger.warning(f"Redis unavailable, running without price cache and rate limit: {e}")
        redis_connected.set(0)

    yield

    logger.info("Stopping")
    await close_redis()
    redis_connected.set(0)
    logger.info("Shutdown complete")


app = FastAPI(
    title=settings.API_TITLE,
    description=settings.API_DESCRIPTION,
    version=settings.API_VERSION,
    lifespan=lifespan
)

app.add_middleware(MetricsMiddleware)

app.include_router(auth.router)
app.include_router(dashboard.router)
app.include_router(devis.router)
app.include_router(reservations.router)
app.include_router(portfolio.router)
app.include_router(parametres.router)


@app.exception_handler(UpstreamError)
async def upstream_error_handler(request: Request, exc: UpstreamError):
    logger.warning(f"UpstreamError: {exc.message} for {request.method} {request.url}")
    status_code = 404 if exc.status_code == 404 else 502
    return JSONResponse(status_code=status_code, content={"detail": exc.message})


@app.get("/metrics", tags=["monitoring"])
async def metrics():
    return Response(
        content=get_metrics_text(),
        media_type="text/plain; version=0.0.4; charset=utf-8"
    )


@app.get("/health", tags=["monitoring"])
async def health_check():
    redis_healthy = get_redis() is not None

    return {
        "status": "healthy",
        "service": settings.API_TITLE,
        "version": settings.API_VERSION,
        "dependencies": {
            "redis": "connected" if redis_healthy else "disconnected",
            "upstream_api": settings.API_BASE_URL,
        }
    }


@app.get("/", tags=["root"])
async def root():
    return {
        "message": settings.API_TITLE,
        "version": settings.API_VERSION,
        "docs": "/docs",
        "health": "/health",
        "metrics": "/metrics"
    }
