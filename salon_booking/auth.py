import hmac
import logging
from typing import Optional

from fastapi import Header, HTTPException, status

from .config import settings

logger = logging.getLogger(__name__)


def require_admin(x_admin_token: Optional[str] = Header(None)) -> None:
    """
    Guard for administrator endpoints.

    Identity lives in the external provider; this service only checks the
    shared X-Admin-Token. No ADMIN_TOKEN configured = open (development).
    """
    expected = settings.admin_token
    if not expected:
        return

    if not x_admin_token or not hmac.compare_digest(x_admin_token, expected):
        logger.warning("Admin request rejected: bad or missing X-Admin-Token")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authorized",
        )
