from fastapi import APIRouter, Depends, Request

from ...config import Settings, get_settings
from ...recaptcha import get_client_ip
from .schemas import InquiryRequest, InquiryResponse
from .service import InquiryService

router = APIRouter(prefix="/api", tags=["Inquiries"])


@router.post("/send-inquiry", response_model=InquiryResponse)
async def send_inquiry(
    data: InquiryRequest,
    request: Request,
    settings: Settings = Depends(get_settings),
):
    """Relay the contact form to the clinic staff once reCAPTCHA passes"""
    await InquiryService(settings).send(data, client_ip=get_client_ip(request))
    return InquiryResponse()
