# salon_booking/middleware/audit.py
# One JSON line per request on the "salon.audit" logger.
# Never blocks the request, never touches the database.
# Client errors are logged at WARNING, server errors at ERROR.

import json
import logging
import time

from fastapi import Request

from ..utils.client_ip import get_client_ip

logger = logging.getLogger("salon.audit")

SKIP_PATHS = frozenset({"/health"})


def _level_for(status_code: int) -> int:
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO


async def audit_middleware(request: Request, call_next):
    if request.url.path in SKIP_PATHS:
        return await call_next(request)

    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = round((time.perf_counter() - started) * 1000, 1)

    entry = {
        "ts": int(time.time()),
        "method": request.method,
        "path": request.url.path,
        "query": request.url.query or None,
        "status": response.status_code,
        "ip": get_client_ip(request),
        "ua": request.headers.get("User-Agent", ""),
        "duration_ms": elapsed_ms,
    }
    logger.log(_level_for(response.status_code), json.dumps(entry, ensure_ascii=False))

    return response
