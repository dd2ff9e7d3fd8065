# safespace/main.py - Safe Space API (chat relay + health)
from __future__ import annotations

import logging

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from safespace import models  # noqa: F401  (registers tables on Base.metadata)
from safespace.core.config import settings
from safespace.core.logging import setup_logging
from safespace.core.timezone import format_time, utc_now
from safespace.db.base import Base
from safespace.db.session import engine, get_db
from safespace.relay import CORS_HEADERS, router as relay_router

setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Safe Space",
    version=settings.VERSION,
    description="Youth mental-wellness backend: streaming AI chat relay",
)


@app.middleware("http")
async def cors_middleware(request: Request, call_next):
    try:
        response = await call_next(request)
    except Exception as e:
        logger.error("Request error on %s %s: %s", request.method, request.url.path, e, exc_info=True)
        response = JSONResponse({"error": "Internal Server Error"}, status_code=500)

    for key, value in CORS_HEADERS.items():
        response.headers.setdefault(key, value)
    return response


@app.on_event("startup")
def on_startup():
    try:
        Base.metadata.create_all(bind=engine)
        logger.info("database tables ready")
    except SQLAlchemyError as e:
        logger.error("could not create tables: %s", e)


app.include_router(relay_router, prefix="/functions/v1")


@app.get("/api/health")
def health(db: Session = Depends(get_db)):
    try:
        db.execute(text("SELECT 1"))
        database = True
    except SQLAlchemyError as e:
        logger.warning("health check: database unavailable: %s", e)
        database = False

    return {
        "ok": True,
        "time": format_time(utc_now()),
        "version": settings.VERSION,
        "database": database,
        "relay": {"configured": bool(settings.AI_GATEWAY_API_KEY)},
    }


@app.get("/")
def root():
    return {
        "name": "Safe Space",
        "version": settings.VERSION,
        "relay": "/functions/v1/chat",
        "health": "/api/health",
    }
