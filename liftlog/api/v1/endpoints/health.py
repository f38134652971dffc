"""Liveness and readiness probes."""

import logging
import os

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import func, select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from liftlog.db.session import get_db
from liftlog.models.tracking import ExerciseTracking

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("")
async def health():
    """Process is up. Includes built_at when BACKEND_BUILT_AT is set by the deploy."""
    payload: dict = {"status": "ok", "service": "liftlog"}
    built_at = os.environ.get("BACKEND_BUILT_AT")
    if built_at:
        payload["built_at"] = built_at
    return payload


@router.get("/ready")
async def readiness(db: AsyncSession = Depends(get_db)):
    """Record store reachable and migrated (the trackings table answers a count)."""
    try:
        await db.execute(text("SELECT 1"))
        trackings = await db.scalar(select(func.count()).select_from(ExerciseTracking))
    except (SQLAlchemyError, OSError) as e:
        logger.exception("Record store not ready: %s", e)
        return JSONResponse(
            status_code=503,
            content={"status": "unavailable", "record_store": type(e).__name__},
        )
    return {"status": "ok", "record_store": db.bind.dialect.name, "trackings": trackings}
