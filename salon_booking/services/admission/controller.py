# salon_booking/services/admission/controller.py
"""
Booking admission controller.

Fixed-order chain, short-circuiting at the first failure:
 1. honeypot
 2. required fields / payload shape
 3. phone format, then date + time format
 4. bot score
 5. per-IP quota (hit consumed here, never refunded)
 6. per-phone pending cap
 7. slot on grid with remaining capacity
 8. insert as "pending"

Blocking steps (database, counter store, commit) run in the threadpool.
Only the oracle call is awaited on the event loop.
"""

import inspect
import logging
from dataclasses import dataclass
from datetime import datetime
from functools import lru_cache
from typing import Any, Awaitable, Callable, Union

from fastapi.concurrency import run_in_threadpool
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...config import settings
from ...models import Bookings
from ..slots.config import SlotsConfig, get_slots_config, minutes_to_label
from .errors import AdmissionError, DependencyFailure, ValidationFailed
from .rate_limit import RateLimitStore
from .recaptcha import RecaptchaVerifier
from .validators import (
    AdmissionContext,
    BotScoreCheck,
    IpQuotaCheck,
    PendingCapCheck,
    SlotCapacityCheck,
    check_honeypot,
    check_phone_format,
    check_required_fields,
    check_slot_format,
)

logger = logging.getLogger(__name__)

Check = Callable[[AdmissionContext], Union[None, Awaitable[None]]]


@dataclass(frozen=True)
class AdmissionPolicy:
    max_bookings_per_ip: int = 3
    window_seconds: int = 3600
    max_pending_per_phone: int = 2


@lru_cache
def get_admission_policy() -> AdmissionPolicy:
    return AdmissionPolicy(
        max_bookings_per_ip=settings.max_bookings_per_ip,
        window_seconds=settings.rate_limit_window_seconds,
        max_pending_per_phone=settings.max_pending_per_phone,
    )


@dataclass(frozen=True)
class AdmissionResult:
    booking: Bookings
    remaining: int


def _is_async(check: Check) -> bool:
    return inspect.iscoroutinefunction(check) or inspect.iscoroutinefunction(
        getattr(check, "__call__", None)
    )


async def _run_check(check: Check, ctx: AdmissionContext) -> None:
    if _is_async(check):
        await check(ctx)
    else:
        await run_in_threadpool(check, ctx)


class BookingAdmission:

    def __init__(
        self,
        db: Session,
        verifier: RecaptchaVerifier,
        limiter: RateLimitStore,
        policy: AdmissionPolicy | None = None,
        config: SlotsConfig | None = None,
        now: datetime | None = None,
    ):
        self.db = db
        self.policy = policy or get_admission_policy()
        self.config = config or get_slots_config()
        self.now = now
        self.checks: list[Check] = [
            check_honeypot,
            check_required_fields,
            check_phone_format,
            check_slot_format,
            BotScoreCheck(verifier),
            IpQuotaCheck(limiter, self.policy.max_bookings_per_ip, self.policy.window_seconds),
            PendingCapCheck(self.policy.max_pending_per_phone),
            SlotCapacityCheck(self.config),
        ]

    async def submit(self, payload: Any, client_ip: str) -> AdmissionResult:
        """
        Run the admission chain and insert the booking.

        Raises:
            AdmissionError: request rejected (status code on the exception).
        """
        ctx = AdmissionContext(
            payload=payload if isinstance(payload, dict) else {},
            client_ip=client_ip,
            now=self.now or datetime.now(),
            db=self.db,
        )

        try:
            for check in self.checks:
                await _run_check(check, ctx)
            booking = await run_in_threadpool(self._commit, ctx)
        except AdmissionError as e:
            logger.info(f"Booking rejected [{type(e).__name__}] ip={client_ip}: {e.message}")
            raise
        except Exception as e:
            logger.exception(f"Unexpected admission failure ip={client_ip}")
            raise DependencyFailure("An unexpected error occurred.") from e

        logger.info(
            f"Booking admitted: {booking.id} {booking.booking_date} "
            f"{minutes_to_label(booking.booking_minute)} ip={client_ip}"
        )
        return AdmissionResult(booking=booking, remaining=ctx.quota_remaining or 0)

    # ── Commit ───────────────────────────────────────────────────────────

    def _commit(self, ctx: AdmissionContext) -> Bookings:
        submission = ctx.submission
        if submission is None or ctx.booking_date is None or ctx.booking_minute is None:
            raise ValidationFailed("Missing required fields.")

        services = [s.model_dump() for s in submission.services]
        total = round(sum(s.price for s in submission.services), 2)
        if submission.total_price is not None and abs(submission.total_price - total) > 0.005:
            logger.warning(
                f"Client total {submission.total_price} != services sum {total}; "
                "storing services sum"
            )

        booking = Bookings(
            customer_name=submission.customer_name,
            customer_phone=submission.customer_phone,
            customer_email=submission.customer_email or None,
            services=services,
            booking_date=ctx.booking_date,
            booking_minute=ctx.booking_minute,
            status="pending",
            notes=submission.notes or None,
            total_price=total,
        )

        try:
            self.db.add(booking)
            self.db.commit()
            self.db.refresh(booking)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Database error while creating booking: {e}")
            raise DependencyFailure("Failed to create booking. Please try again.") from e

        return booking
