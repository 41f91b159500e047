"""HTTP GET of a verification request under a RequestContext."""

import httpx

from yubikiller.errors import TransportError
from yubikiller.infrastructure.context import RequestContext
from yubikiller.infrastructure.http_client import HttpClient
from yubikiller.shared.logging import get_logger

log = get_logger(__name__)


async def send_verification_request(
    http_client: HttpClient, request_uri: str, ctx: RequestContext
) -> httpx.Response:
    """Send the request and return the open 200 response.

    The body is not read; the caller must ``aclose()`` the response.

    Raises:
        TransportError: On connection failure, cancellation, deadline expiry,
            or any status other than 200. For a non-200 reply the closed
            response is attached as ``error.response``.
    """
    try:
        response = await ctx.run(http_client.stream_get(request_uri))
    except httpx.HTTPError as e:
        log.warning(
            "verification_request_failed",
            error=str(e),
            error_type=type(e).__name__,
        )
        raise TransportError(
            f"verification request failed: {e}",
            details={"error_type": type(e).__name__},
        ) from e

    if response.status_code != 200:
        await response.aclose()
        log.error(
            "verification_api_error",
            status_code=response.status_code,
            reason_phrase=response.reason_phrase,
        )
        raise TransportError(
            f"verification service returned HTTP {response.status_code}",
            details={"status_code": response.status_code},
            response=response,
        )

    return response
