"""Lead router - Prize wheel endpoint"""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from ...config import Settings, get_settings
from ...database import get_db
from ...recaptcha import get_client_ip
from .schemas import PrizeClaimRequest, PrizeClaimResponse
from .service import LeadService

router = APIRouter(prefix="/api", tags=["Leads"])


def get_lead_service(
    db: Session = Depends(get_db), settings: Settings = Depends(get_settings)
) -> LeadService:
    return LeadService(db, settings)


@router.post("/claim-prize", response_model=PrizeClaimResponse)
async def claim_prize(
    data: PrizeClaimRequest,
    request: Request,
    service: LeadService = Depends(get_lead_service),
):
    await service.claim_prize(data, client_ip=get_client_ip(request))
    return PrizeClaimResponse()
