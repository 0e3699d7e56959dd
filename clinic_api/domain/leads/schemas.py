"""Lead domain schemas - Pydantic models for validation"""

from typing import Optional

from pydantic import BaseModel, model_validator

from ...shared.validators import normalize_whatsapp, validate_email


class PrizeClaimRequest(BaseModel):
    """Schema for a prize wheel claim"""

    email: Optional[str] = None
    whatsapp: Optional[str] = None
    prize: Optional[str] = None
    recaptchaToken: Optional[str] = None

    @model_validator(mode="after")
    def validate_claim(self):
        self.email = self.email.strip().lower() if self.email and self.email.strip() else None
        self.whatsapp = normalize_whatsapp(self.whatsapp)
        self.prize = self.prize.strip() if self.prize and self.prize.strip() else None

        if (not self.email and not self.whatsapp) or not self.prize or not self.recaptchaToken:
            raise ValueError("Faltan campos obligatorios.")
        validate_email(self.email)
        return self


class PrizeClaimResponse(BaseModel):
    success: bool = True
