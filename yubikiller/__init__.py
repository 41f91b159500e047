"""yubikiller - invalidate YubiKey OTPs via the Yubico validation protocol."""

from yubikiller.errors import (
    RandomSourceError,
    ResponseReadError,
    TransportError,
    URLBuildError,
    ValidationFailure,
    YubiKillerError,
)
from yubikiller.infrastructure.context import RequestContext
from yubikiller.infrastructure.http_client import HttpClient
from yubikiller.infrastructure.validation.yubico import YubicoOTPInvalidator
from yubikiller.schemas.verification import InvalidationOutcome, VerificationStatus
from yubikiller.services.invalidation import invalidate_token

__version__ = "0.1.0"

__all__ = [
    "HttpClient",
    "InvalidationOutcome",
    "RandomSourceError",
    "RequestContext",
    "ResponseReadError",
    "TransportError",
    "URLBuildError",
    "ValidationFailure",
    "VerificationStatus",
    "YubiKillerError",
    "YubicoOTPInvalidator",
    "invalidate_token",
]
