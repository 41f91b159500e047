"""Yubico validation-server implementation of OTPInvalidator.

An OTP is invalidated by presenting it for verification once: after an OK
answer the server rejects any further use of it as REPLAYED_OTP.
"""

from typing import Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from yubikiller.builders.request import build_verification_url
from yubikiller.config import YUBICO_API_URL
from yubikiller.errors import ValidationFailure
from yubikiller.infrastructure.context import RequestContext
from yubikiller.infrastructure.http_client import HttpClient
from yubikiller.infrastructure.transport import send_verification_request
from yubikiller.schemas.verification import InvalidationOutcome
from yubikiller.services.outcome import ensure_success, resolve_outcome
from yubikiller.services.response_parser import read_response
from yubikiller.shared.logging import get_logger

log = get_logger(__name__)

_MASKED_PARAMS = ("otp", "nonce")

# A YubiKey OTP starts with the key's 12 character public id
_PUBLIC_ID_LENGTH = 12


def _masked_uri(request_uri: str) -> str:
    parts = urlsplit(request_uri)
    query = urlencode(
        [
            (key, "***" if key in _MASKED_PARAMS else value)
            for key, value in parse_qsl(parts.query, keep_blank_values=True)
        ],
        safe="*",
    )
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


class YubicoOTPInvalidator:
    def __init__(self, http_client: HttpClient, api_url: str = YUBICO_API_URL) -> None:
        self._http = http_client
        self._api_url = api_url

    async def invalidate(
        self, otp: str, ctx: Optional[RequestContext] = None
    ) -> InvalidationOutcome:
        """Present *otp* to the validation server.

        Returns the OK outcome. Raises ValidationFailure for any other
        status, or RandomSourceError / URLBuildError / TransportError /
        ResponseReadError when no status could be obtained.
        """
        ctx = ctx or RequestContext()
        bound = log.bind(public_id=otp[:_PUBLIC_ID_LENGTH])

        request_uri = build_verification_url(otp, self._api_url)
        bound.debug("verification_request_built", request_uri=_masked_uri(request_uri))

        response = await send_verification_request(self._http, request_uri, ctx)
        try:
            fields = await ctx.run(read_response(response))
        finally:
            await response.aclose()

        try:
            outcome = ensure_success(resolve_outcome(fields))
        except ValidationFailure as e:
            bound.warning(
                "otp_invalidation_failed",
                status=e.status.value,
                retryable=e.retryable,
            )
            raise

        bound.info("otp_invalidated")
        return outcome
