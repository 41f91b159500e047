"""OTPInvalidator protocol: callers depend on this, not the concrete implementation."""

from typing import Optional, Protocol

from yubikiller.infrastructure.context import RequestContext
from yubikiller.schemas.verification import InvalidationOutcome


class OTPInvalidator(Protocol):
    async def invalidate(
        self, otp: str, ctx: Optional[RequestContext] = None
    ) -> InvalidationOutcome: ...
