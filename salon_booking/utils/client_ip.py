# salon_booking/utils/client_ip.py

from fastapi import Request


def get_client_ip(request: Request) -> str:
    """
    Client IP from proxy headers.

    X-Forwarded-For (first entry) → X-Real-IP → "unknown".
    """
    headers = request.headers

    forwarded = headers.get("X-Forwarded-For")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first

    real_ip = headers.get("X-Real-IP")
    if real_ip:
        return real_ip.strip()

    return "unknown"
