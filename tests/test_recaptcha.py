import asyncio
from urllib.parse import parse_qs

import httpx
import pytest

from salon_booking.services.admission import RecaptchaVerifier


def verifier_for(handler, min_score=0.5):
    return RecaptchaVerifier(
        secret_key="test-secret",
        verify_url="https://recaptcha.test/siteverify",
        min_score=min_score,
        transport=httpx.MockTransport(handler),
    )


def oracle(payload, status_code=200):
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(parse_qs(request.content.decode()))
        return httpx.Response(status_code, json=payload)

    return handler, seen


def test_good_score_passes():
    handler, seen = oracle({"success": True, "score": 0.9})
    result = asyncio.run(verifier_for(handler).verify("tok-123"))

    assert result.success
    assert result.score == 0.9
    assert seen == [{"secret": ["test-secret"], "response": ["tok-123"]}]


def test_score_at_threshold_passes():
    handler, _ = oracle({"success": True, "score": 0.5})
    assert asyncio.run(verifier_for(handler).verify("tok")).success


@pytest.mark.parametrize(
    "payload",
    [
        {"success": True, "score": 0.3},
        {"success": False, "score": 0.9},
        {"success": False, "error-codes": ["invalid-input-response"]},
        {"success": True},
    ],
)
def test_rejected_verdicts(payload):
    handler, _ = oracle(payload)
    assert not asyncio.run(verifier_for(handler).verify("tok")).success


def test_oracle_http_error_fails_closed():
    handler, _ = oracle({"success": True, "score": 0.9}, status_code=500)
    assert not asyncio.run(verifier_for(handler).verify("tok")).success


def test_transport_error_fails_closed():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    result = asyncio.run(verifier_for(handler).verify("tok"))
    assert not result.success
    assert result.score == 0.0


def test_garbage_score_fails_closed():
    handler, _ = oracle({"success": True, "score": "high"})
    assert not asyncio.run(verifier_for(handler).verify("tok")).success


def test_unconfigured_verifier_skips_oracle():
    verifier = RecaptchaVerifier(secret_key=None)
    assert not verifier.configured
    assert asyncio.run(verifier.verify("anything")).success
