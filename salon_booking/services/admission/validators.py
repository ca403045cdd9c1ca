# salon_booking/services/admission/validators.py
"""
Composable admission checks.

Each check is a callable taking the AdmissionContext. It either returns
(possibly enriching the context) or raises an AdmissionError. Checks that
talk to the database or the counter store are plain blocking functions;
the bot-score check is a coroutine because the oracle client is async.
The controller runs them in a fixed order and stops at the first failure.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Optional

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...models import Bookings
from ...schemas.bookings import BookingSubmission
from ...utils.phone_utils import is_valid_phone
from ..slots.availability import calculate_day_availability
from ..slots.config import SlotsConfig, label_to_minutes
from .errors import DependencyFailure, PolicyRejected, RateLimited, ValidationFailed
from .rate_limit import RateLimitStore
from .recaptcha import RecaptchaVerifier

logger = logging.getLogger(__name__)

GENERIC_FAILURE = "Booking failed. Please try again."
REQUIRED_FIELDS = ("customerName", "customerPhone", "services", "bookingDate", "bookingTime")


@dataclass
class AdmissionContext:
    payload: dict[str, Any]
    client_ip: str
    now: datetime
    db: Session
    submission: Optional[BookingSubmission] = None
    booking_date: Optional[date] = None
    booking_minute: Optional[int] = None
    quota_remaining: Optional[int] = None


# ── Input checks ─────────────────────────────────────────────────────────


def check_honeypot(ctx: AdmissionContext) -> None:
    """Hidden decoy field must be empty. Rejection looks like any other."""
    if ctx.payload.get("honeypot"):
        logger.warning(f"Honeypot triggered ip={ctx.client_ip}")
        raise ValidationFailed(GENERIC_FAILURE)


def check_required_fields(ctx: AdmissionContext) -> None:
    if any(not ctx.payload.get(name) for name in REQUIRED_FIELDS):
        raise ValidationFailed("Missing required fields.")

    try:
        ctx.submission = BookingSubmission.model_validate(ctx.payload)
    except ValidationError as e:
        logger.info(f"Booking payload rejected: {e.error_count()} error(s)")
        raise ValidationFailed("Invalid booking details.") from None


def check_phone_format(ctx: AdmissionContext) -> None:
    if not is_valid_phone(ctx.submission.customer_phone):
        raise ValidationFailed("Invalid phone number format.")


def check_slot_format(ctx: AdmissionContext) -> None:
    try:
        ctx.booking_date = date.fromisoformat(ctx.submission.booking_date)
        ctx.booking_minute = label_to_minutes(ctx.submission.booking_time)
    except ValueError:
        raise ValidationFailed("Invalid booking date or time.") from None


# ── Policy checks ────────────────────────────────────────────────────────


class BotScoreCheck:
    """Token present → must verify. No token → only fine when not configured."""

    def __init__(self, verifier: RecaptchaVerifier):
        self.verifier = verifier

    async def __call__(self, ctx: AdmissionContext) -> None:
        token = ctx.submission.recaptcha_token
        if token:
            result = await self.verifier.verify(token)
            if not result.success:
                raise PolicyRejected(
                    "Security verification failed. Please refresh and try again."
                )
        elif self.verifier.configured:
            raise PolicyRejected("Security verification required.")


class IpQuotaCheck:
    """
    Fixed-window quota per client IP.

    The hit is consumed here, before later checks run, and is not refunded
    when a later check rejects the request.
    """

    def __init__(self, limiter: RateLimitStore, limit: int, window: int):
        self.limiter = limiter
        self.limit = limit
        self.window = window

    def __call__(self, ctx: AdmissionContext) -> None:
        result = self.limiter.hit(f"booking_ip:{ctx.client_ip}", self.limit, self.window)
        if not result.allowed:
            logger.info(f"Booking quota exhausted ip={ctx.client_ip}")
            raise RateLimited(
                "Too many booking attempts. Please try again in an hour.",
                retry_after=self.window,
            )
        ctx.quota_remaining = result.remaining


class PendingCapCheck:
    def __init__(self, max_pending: int):
        self.max_pending = max_pending

    def __call__(self, ctx: AdmissionContext) -> None:
        phone = ctx.submission.customer_phone
        try:
            pending = (
                ctx.db.query(Bookings)
                .filter(
                    Bookings.customer_phone == phone,
                    Bookings.status == "pending",
                )
                .count()
            )
        except SQLAlchemyError as e:
            logger.error(f"Pending booking lookup failed: {e}")
            raise DependencyFailure("Failed to create booking. Please try again.") from e

        if pending >= self.max_pending:
            raise PolicyRejected(
                f"You already have {pending} pending booking(s). "
                "Please wait for confirmation before booking again."
            )


class SlotCapacityCheck:
    """
    Requested slot must be on today's-or-later grid with capacity left.

    Read-only: the count and the later insert are not atomic, so two
    concurrent requests for the last place can both pass.
    """

    def __init__(self, config: SlotsConfig):
        self.config = config

    def __call__(self, ctx: AdmissionContext) -> None:
        if ctx.booking_date < ctx.now.date():
            raise PolicyRejected("Cannot book a date in the past.")

        try:
            day = calculate_day_availability(ctx.db, ctx.booking_date, ctx.now, self.config)
        except SQLAlchemyError as e:
            logger.error(f"Availability lookup failed: {e}")
            raise DependencyFailure("Failed to create booking. Please try again.") from e

        if not day.is_open:
            raise PolicyRejected(f"The salon is closed on this date ({day.reason}).")

        slot = day.get_slot(ctx.booking_minute)
        if slot is None:
            raise PolicyRejected("The selected time is not available for booking.")
        if not slot.available:
            raise PolicyRejected("The selected time slot is fully booked.")
