# salon_booking/services/admission/errors.py
"""
Booking admission rejection taxonomy.

ValidationFailed   400  missing / malformed input (user-correctable)
PolicyRejected     400  pending cap, bot score, slot policy
RateLimited        429  per-IP quota, carries retry_after
DependencyFailure  500  storage / oracle failure, generic message only
"""

from typing import Optional


class AdmissionError(Exception):
    status_code = 400

    def __init__(self, message: str, retry_after: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.retry_after = retry_after

    def to_dict(self) -> dict:
        body = {"success": False, "error": self.message}
        if self.retry_after is not None:
            body["retryAfter"] = self.retry_after
        return body


class ValidationFailed(AdmissionError):
    pass


class PolicyRejected(AdmissionError):
    pass


class RateLimited(PolicyRejected):
    status_code = 429


class DependencyFailure(AdmissionError):
    status_code = 500
