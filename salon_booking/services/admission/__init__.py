# salon_booking/services/admission/__init__.py
"""
Booking admission: anti-abuse checks and pending-booking insert.
"""

from .controller import (
    AdmissionPolicy,
    AdmissionResult,
    BookingAdmission,
    get_admission_policy,
)
from .errors import (
    AdmissionError,
    DependencyFailure,
    PolicyRejected,
    RateLimited,
    ValidationFailed,
)
from .rate_limit import (
    InMemoryRateLimitStore,
    RateLimitResult,
    RateLimitStore,
    RedisRateLimitStore,
    get_rate_limiter,
)
from .recaptcha import RecaptchaVerifier, VerificationResult, get_verifier

__all__ = [
    "AdmissionPolicy",
    "AdmissionResult",
    "BookingAdmission",
    "get_admission_policy",
    "AdmissionError",
    "DependencyFailure",
    "PolicyRejected",
    "RateLimited",
    "ValidationFailed",
    "InMemoryRateLimitStore",
    "RateLimitResult",
    "RateLimitStore",
    "RedisRateLimitStore",
    "get_rate_limiter",
    "RecaptchaVerifier",
    "VerificationResult",
    "get_verifier",
]
