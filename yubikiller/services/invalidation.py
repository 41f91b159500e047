"""
Entry operation: invalidate one OTP.

Wires settings, an HTTP client and a RequestContext into a
YubicoOTPInvalidator. Long-running callers that invalidate many tokens should
pass a shared ``http_client`` so connections are pooled.
"""

from __future__ import annotations

from typing import Optional

from yubikiller.config import ClientSettings
from yubikiller.infrastructure.context import RequestContext
from yubikiller.infrastructure.http_client import HttpClient
from yubikiller.infrastructure.validation.protocol import OTPInvalidator
from yubikiller.infrastructure.validation.yubico import YubicoOTPInvalidator
from yubikiller.schemas.verification import InvalidationOutcome


async def invalidate_token(
    otp: str,
    ctx: Optional[RequestContext] = None,
    *,
    settings: Optional[ClientSettings] = None,
    http_client: Optional[HttpClient] = None,
) -> InvalidationOutcome:
    """Invalidate *otp* via the verification service.

    Args:
        otp: The one-time password, passed to the service as-is.
        ctx: Cancellation/deadline scope. Defaults to a context whose
            deadline is ``settings.request_timeout_seconds``.
        settings: Client settings; loaded from the environment when omitted.
        http_client: Shared client. A temporary one is created and closed
            when omitted.

    Returns:
        The OK outcome, carrying the raw response fields.

    Raises:
        ValidationFailure: The service answered with a non-OK status.
        TransportError: Network failure, cancellation, deadline or non-200.
        ResponseReadError: The response body could not be read.
        URLBuildError: ``settings.yubico_api_url`` is malformed.
        RandomSourceError: No nonce could be generated.
    """
    settings = settings or ClientSettings()
    if ctx is None:
        ctx = RequestContext(timeout=settings.request_timeout_seconds)

    if http_client is not None:
        invalidator: OTPInvalidator = YubicoOTPInvalidator(
            http_client, settings.yubico_api_url
        )
        return await invalidator.invalidate(otp, ctx)

    async with HttpClient(timeout=settings.request_timeout_seconds) as client:
        invalidator = YubicoOTPInvalidator(client, settings.yubico_api_url)
        return await invalidator.invalidate(otp, ctx)
