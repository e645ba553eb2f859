import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.errors import register_exception_handlers
from api.routers import additives, candidates, scan
from config import settings
from constants.rulebook import load_rulebook
from models import init_db

logger = logging.getLogger(__name__)

APP_VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    init_db()
    load_rulebook()
    if not settings.vision_api_key:
        logger.warning("VISION_API_KEY is not set; scan requests will fail")
    yield

app = FastAPI(
    title=settings.app_name,
    description="Classify food ingredient labels by halal status",
    version=APP_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, restrict this
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(scan.router, prefix="/api/v1", tags=["scan"])
app.include_router(scan.legacy_router, prefix="/api", tags=["scan"])
app.include_router(additives.router, prefix="/api/v1/additives", tags=["additives"])
app.include_router(candidates.router, prefix="/api/v1/candidates", tags=["candidates"])


@app.get("/")
async def root():
    return {
        "name": settings.app_name,
        "version": APP_VERSION,
        "status": "running",
    }


@app.get("/health")
async def health():
    return {"status": "healthy"}
