import logging
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...config import CLINIC_TZ
from ...database import get_db
from ...shared.validators import parse_date
from .service import build_rental_calendar, default_from_date, rentals_since

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Rentals"])


@router.get("/rentals")
async def get_rental_calendar(
    from_date: Optional[str] = Query(None, alias="from"),
    db: Session = Depends(get_db),
):
    """Days the equipment is rented out, keyed by ISO date"""
    if from_date:
        try:
            start = parse_date(from_date)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e)) from None
    else:
        start = default_from_date(datetime.now(CLINIC_TZ).date())

    try:
        rentals = rentals_since(db, start)
    except SQLAlchemyError as e:
        logger.error(f"❌ Error fetching rental schedule: {e}")
        raise HTTPException(
            status_code=500,
            detail={"error": "No se pudo cargar la agenda. Intente más tarde.", "details": str(e)},
        ) from e

    return {"rentals": build_rental_calendar(rentals)}
