from typing import Optional

from pydantic import BaseModel


class InquiryRequest(BaseModel):
    """Contact form payload. Presence is checked after reCAPTCHA, so every field is optional here."""

    name: Optional[str] = None
    whatsapp: Optional[str] = None
    message: Optional[str] = None
    recaptchaToken: Optional[str] = None

    @property
    def is_complete(self) -> bool:
        return all(v and v.strip() for v in (self.name, self.whatsapp, self.message))


class InquiryResponse(BaseModel):
    success: bool = True
    message: str = "Inquiry sent successfully!"
