import logging

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...config import Settings, get_settings
from ...database import get_db
from .service import generate_sitemap, published_posts

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Sitemap"])


@router.get("/sitemap")
async def sitemap(db: Session = Depends(get_db), settings: Settings = Depends(get_settings)):
    try:
        posts = published_posts(db)
    except SQLAlchemyError as e:
        logger.error(f"❌ Error generating sitemap: {e}")
        raise HTTPException(status_code=500, detail="Could not generate sitemap.") from e

    return Response(
        content=generate_sitemap(settings.SITE_URL, posts),
        media_type="application/xml",
        # Edge cache for an hour, stale copies allowed while revalidating
        headers={"Cache-Control": "s-maxage=3600, stale-while-revalidate"},
    )
