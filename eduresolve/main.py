# eduresolve/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from prometheus_fastapi_instrumentator import Instrumentator

from eduresolve.core.config import settings
from eduresolve.core.middleware import register_middleware
from eduresolve.db.session import build_store
from eduresolve.services.ai_service import ComplaintAnalyzer
from eduresolve.errors import register_all_errors
from eduresolve.api.routers import (
    auth,
    session,
    complaints,
    admin,
)

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Lifespan manager for startup and shutdown events
@asynccontextmanager
async def lifespan(app: FastAPI):
    # On startup
    logger.info("Starting up...")
    store = build_store()
    await store.initialize()
    app.state.store = store
    app.state.analyzer = ComplaintAnalyzer()
    yield
    # On shutdown
    logger.info("Shutting down...")
    await store.dispose()


app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Backend for the EduResolve university grievance tracker.",
    version="0.1.0",
    lifespan=lifespan,
    openapi_url=f"{settings.API_V1_STR}/openapi.json"
)


# Prometheus Metrics Integration
Instrumentator().instrument(app).expose(app)


# Logging, CORS and error handlers
register_middleware(app)
register_all_errors(app)


# Include API Routers
api_prefix = settings.API_V1_STR
app.include_router(auth.router, prefix=f"{api_prefix}/auth", tags=["Auth"])
app.include_router(session.router, prefix=f"{api_prefix}/session", tags=["Session"])
app.include_router(complaints.router, prefix=f"{api_prefix}/complaints", tags=["Complaints"])
app.include_router(admin.router, prefix=f"{api_prefix}/admin", tags=["Admin"])


@app.get("/", tags=["Health Check"])
async def root():
    """Health check endpoint."""
    return {"message": "EduResolve API is running!"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("eduresolve.main:app", host="0.0.0.0", port=10000, reload=True)
