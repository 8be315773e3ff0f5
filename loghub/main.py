from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI

from .api.admin_flags import router as admin_flags_router
from .api.deployments import router as deployments_router
from .api.health import router as health_router
from .api.logs import router as logs_router
from .config import API_PREFIX, API_VERSION
from .db import init_db
from .deps import close_shared_clients
from .logging_config import setup_logging
from .middleware import TracingMiddleware

# Configure logging at import time
setup_logging()

logger = logging.getLogger("loghub")

@asynccontextmanager
async def lifespan(application: FastAPI):
    logger.info("LogHub query starting up", extra={"component": "api"})
    init_db()
    yield
    close_shared_clients()
    logger.info("LogHub query shut down", extra={"component": "api"})

app = FastAPI(title="LogHub Query", version=API_VERSION, lifespan=lifespan)
app.add_middleware(TracingMiddleware)

app.include_router(health_router, prefix=API_PREFIX)
app.include_router(logs_router, prefix=API_PREFIX)
app.include_router(deployments_router, prefix=API_PREFIX)
app.include_router(admin_flags_router, prefix=API_PREFIX)

@app.middleware("http")
async def add_version_header(request, call_next):
    response = await call_next(request)
    response.headers["X-API-Version"] = API_VERSION
    return response
