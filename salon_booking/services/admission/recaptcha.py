# salon_booking/services/admission/recaptcha.py
"""
Bot-score oracle (reCAPTCHA v3 siteverify).

Not configured (no secret)  → callers skip verification entirely.
Configured                  → success requires oracle success AND
                              score >= min_score.
Any transport / decode error → failed check (fail closed).
"""

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

import httpx

from ...config import settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VerificationResult:
    success: bool
    score: float


class RecaptchaVerifier:

    def __init__(
        self,
        secret_key: Optional[str],
        verify_url: str = "https://www.google.com/recaptcha/api/siteverify",
        min_score: float = 0.5,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.secret_key = secret_key
        self.verify_url = verify_url
        self.min_score = min_score
        self.timeout = timeout
        self._transport = transport

    @property
    def configured(self) -> bool:
        return bool(self.secret_key)

    async def verify(self, token: str) -> VerificationResult:
        if not self.configured:
            logger.warning("RECAPTCHA_SECRET_KEY not configured - skipping verification")
            return VerificationResult(success=True, score=1.0)

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                transport=self._transport,
            ) as client:
                resp = await client.post(
                    self.verify_url,
                    data={"secret": self.secret_key, "response": token},
                )
                resp.raise_for_status()
                data = resp.json()
            score = float(data.get("score") or 0.0)
        except Exception as e:
            logger.error(f"reCAPTCHA verification failed: {e}")
            return VerificationResult(success=False, score=0.0)

        success = bool(data.get("success")) and score >= self.min_score
        if not success:
            logger.info(f"reCAPTCHA rejected: success={data.get('success')} score={score}")
        return VerificationResult(success=success, score=score)


@lru_cache
def get_verifier() -> RecaptchaVerifier:
    return RecaptchaVerifier(
        secret_key=settings.recaptcha_secret_key,
        verify_url=settings.recaptcha_verify_url,
        min_score=settings.recaptcha_min_score,
        timeout=settings.recaptcha_timeout_seconds,
    )
