# cityfix/main.py
import logging
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from cityfix import models  # noqa: F401 - register tables on Base.metadata
from cityfix.api import reports, stats
from cityfix.config import settings
from cityfix.database import Base, engine

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

# Create database tables (alembic handles upgrades on existing databases)
Base.metadata.create_all(bind=engine)

# Initialize FastAPI app
app = FastAPI(title="CityFix API", version="1.0.0")

# CORS Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins(),
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Locally stored media is served straight from the upload directory
if settings.STORAGE_TYPE.lower() == "local":
    upload_dir = Path(settings.UPLOAD_DIR)
    upload_dir.mkdir(parents=True, exist_ok=True)
    app.mount("/uploads", StaticFiles(directory=str(upload_dir)), name="uploads")

# API routers
app.include_router(reports.router)  # /reports/*
app.include_router(stats.router)    # /stats/*

logger.info("CityFix API ready (storage=%s, env=%s)", settings.STORAGE_TYPE, settings.APP_ENV)


@app.get("/health")
def health_check():
    return {
        "status": "healthy",
        "message": "CityFix API is running",
        "version": "1.0.0",
    }
