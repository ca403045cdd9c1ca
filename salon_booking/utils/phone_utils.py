# salon_booking/utils/phone_utils.py
"""Customer phone rules (PH mobile: 09XXXXXXXXX)."""

import re

PHONE_PATTERN = re.compile(r"^09[0-9]{9}$")


def is_valid_phone(phone: str | None) -> bool:
    """Exactly 11 ASCII digits starting with "09". No normalisation."""
    if not isinstance(phone, str):
        return False
    return PHONE_PATTERN.fullmatch(phone) is not None
