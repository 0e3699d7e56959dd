"""
Google reCAPTCHA v3 verification
"""

import logging
from dataclasses import dataclass
from typing import Optional

import httpx
from fastapi import HTTPException

from .config import Settings

logger = logging.getLogger(__name__)

RECAPTCHA_VERIFY_URL = "https://www.google.com/recaptcha/api/siteverify"
VERIFICATION_FAILED_MESSAGE = "La verificación de seguridad falló."


@dataclass
class RecaptchaResult:
    success: bool
    score: float
    action: Optional[str] = None


async def verify_recaptcha(token: str, secret_key: str, ip: Optional[str] = None) -> RecaptchaResult:
    """
    Verify a reCAPTCHA v3 token with Google.

    Args:
        token: Token produced by grecaptcha.execute on the client
        secret_key: Server-side secret key
        ip: Client IP address (optional)

    Returns:
        RecaptchaResult; a failed round-trip counts as success=False, score=0
    """
    data = {"secret": secret_key, "response": token}
    if ip:
        data["remoteip"] = ip

    try:
        async with httpx.AsyncClient() as client:
            response = await client.post(RECAPTCHA_VERIFY_URL, data=data, timeout=10.0)
            response.raise_for_status()
            result = response.json()
    except Exception as e:
        logger.error(f"❌ reCAPTCHA verification error: {str(e)}")
        return RecaptchaResult(success=False, score=0.0)

    success = bool(result.get("success", False))
    score = float(result.get("score") or 0.0)
    if not success:
        logger.warning(
            f"❌ reCAPTCHA verification failed for IP: {ip} - Errors: {result.get('error-codes', [])}"
        )
    return RecaptchaResult(success=success, score=score, action=result.get("action"))


async def require_human(
    token: str,
    settings: Settings,
    ip: Optional[str] = None,
    failure_message: str = VERIFICATION_FAILED_MESSAGE,
) -> None:
    """Raise 403 unless the token verifies with a score at or above the configured threshold"""
    if not settings.RECAPTCHA_SECRET_KEY:
        logger.error("❌ RECAPTCHA_SECRET_KEY is not set on the server")
        raise HTTPException(status_code=500, detail="Error de configuración del servidor.")

    result = await verify_recaptcha(token, settings.RECAPTCHA_SECRET_KEY, ip)
    if not result.success or result.score < settings.RECAPTCHA_MIN_SCORE:
        logger.warning(f"🤖 reCAPTCHA rejected request from {ip} (score: {result.score})")
        raise HTTPException(status_code=403, detail=failure_message)

    logger.info(f"✅ reCAPTCHA verification successful for IP: {ip} (score: {result.score})")


def get_client_ip(request) -> Optional[str]:
    """Best-effort client IP extraction behind proxies"""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else None
