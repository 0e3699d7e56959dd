"""Metric router - View counter read and increment"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...database import get_db
from .repository import PAGE_VIEWS, MetricRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Metrics"])


@router.get("/get-views")
async def get_views(db: Session = Depends(get_db)):
    try:
        views = MetricRepository.get_value(db, PAGE_VIEWS)
    except SQLAlchemyError as e:
        logger.warning(f"⚠️ Could not fetch view count, returning 0: {e}")
        return {"views": 0}
    return {"views": views}


@router.post("/track-visit")
async def track_visit(db: Session = Depends(get_db)):
    """Tracking failures never reach the visitor"""
    try:
        MetricRepository.increment(db, PAGE_VIEWS)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"❌ Error tracking visit: {e}")
        return {"success": True, "message": "An error occurred while tracking."}
    return {"success": True}
