"""
Error hierarchy for the OTP invalidation client.

YubiKillerError is the base for all typed errors. Each subclass carries an
``error_code`` and a ``retryable`` flag so callers can tell transient failures
(network, truncated body, overloaded backend) from permanent ones without
matching on message text.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

from yubikiller.schemas.verification import InvalidationOutcome, VerificationStatus

if TYPE_CHECKING:
    import httpx


class YubiKillerError(Exception):
    """Base client error. All typed errors inherit from this."""

    error_code: str = "internal_error"
    retryable: bool = False

    def __init__(self, message: str, *, details: Optional[Any] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class RandomSourceError(YubiKillerError):
    error_code = "random_source_error"


class URLBuildError(YubiKillerError):
    error_code = "url_build_error"


class TransportError(YubiKillerError):
    """Connection failure, cancellation, deadline expiry or a non-200 reply.

    ``response`` is set for non-200 replies; its body has not been read.
    """

    error_code = "transport_error"
    retryable = True

    def __init__(
        self,
        message: str,
        *,
        details: Optional[Any] = None,
        response: Optional["httpx.Response"] = None,
    ) -> None:
        super().__init__(message, details=details)
        self.response = response


class ResponseReadError(YubiKillerError):
    error_code = "response_read_error"
    retryable = True


class ValidationFailure(YubiKillerError):
    """The service answered, but with a status other than OK."""

    error_code = "validation_failure"

    def __init__(self, outcome: InvalidationOutcome) -> None:
        super().__init__(
            f"{outcome.status.value}: {outcome.status.description}",
            details=dict(outcome.response),
        )
        self.outcome = outcome

    @property
    def status(self) -> VerificationStatus:
        return self.outcome.status

    @property
    def response(self) -> dict[str, str]:
        return self.outcome.response

    @property
    def retryable(self) -> bool:  # type: ignore[override]
        return self.outcome.status.transient
