"""Rota API."""
import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from rota_api.config import settings
from rota_api.db import init_db
from rota_api.endpoints_samples import router as samples_router
from rota_api.endpoints_users import router as users_router
from rota_api.error_handlers import register_error_handlers
from rota_api.utils.audit import record_metric

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables on startup."""
    init_db()
    logger.info("Rota API started")
    yield
    logger.info("Rota API shutting down")


app = FastAPI(title="Rota API", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def latency_metrics(request: Request, call_next):
    t0 = time.perf_counter()
    response = None
    try:
        response = await call_next(request)
        return response
    finally:
        dt_ms = round((time.perf_counter() - t0) * 1000.0, 2)
        status_code = getattr(response, "status_code", 0) if response else 500
        record_metric(
            "http.request",
            {"path": request.url.path, "method": request.method, "status": status_code},
            latency_ms=dt_ms,
        )


register_error_handlers(app)

app.include_router(users_router, prefix="/api")  # /api/users
app.include_router(samples_router, prefix="/api")  # /api/samples


@app.get("/health")
def health():
    return {"status": "ok"}
