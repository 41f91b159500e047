"""
Verification protocol status codes and the outcome of one invalidation.

VerificationStatus is closed: every value the service may send maps to a
member, and anything else (including a missing ``status`` field) maps to
``UNKNOWN`` rather than falling through to a generic failure.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class VerificationStatus(Enum):
    OK = "OK"
    BAD_OTP = "BAD_OTP"
    REPLAYED_OTP = "REPLAYED_OTP"
    BAD_SIGNATURE = "BAD_SIGNATURE"
    MISSING_PARAMETER = "MISSING_PARAMETER"
    NO_SUCH_CLIENT = "NO_SUCH_CLIENT"
    OPERATION_NOT_ALLOWED = "OPERATION_NOT_ALLOWED"
    BACKEND_ERROR = "BACKEND_ERROR"
    NOT_ENOUGH_ANSWERS = "NOT_ENOUGH_ANSWERS"
    REPLAYED_REQUEST = "REPLAYED_REQUEST"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def from_wire(cls, value: Optional[str]) -> "VerificationStatus":
        """Map a raw ``status`` field to a member, ``UNKNOWN`` when unrecognised."""
        if value is None:
            return cls.UNKNOWN
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]

    @property
    def transient(self) -> bool:
        """True when the same request may succeed if sent again later."""
        return self in (VerificationStatus.BACKEND_ERROR, VerificationStatus.NOT_ENOUGH_ANSWERS)


_DESCRIPTIONS = {
    VerificationStatus.OK: "verification/invalidation succeeded",
    VerificationStatus.BAD_OTP: "OTP is malformed",
    VerificationStatus.REPLAYED_OTP: "OTP already seen (replay)",
    VerificationStatus.BAD_SIGNATURE: "HMAC signature check failed",
    VerificationStatus.MISSING_PARAMETER: "request missing a required parameter",
    VerificationStatus.NO_SUCH_CLIENT: "request's client id unknown",
    VerificationStatus.OPERATION_NOT_ALLOWED: "client id not authorized for this operation",
    VerificationStatus.BACKEND_ERROR: "unexpected server-side error",
    VerificationStatus.NOT_ENOUGH_ANSWERS: "server could not reach sync quorum before timeout",
    VerificationStatus.REPLAYED_REQUEST: "OTP/nonce combination already seen",
    VerificationStatus.UNKNOWN: "unknown or unspecified failure",
}


@dataclass(frozen=True)
class InvalidationOutcome:
    """Resolved status plus the raw response fields it was read from."""

    status: VerificationStatus
    response: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status is VerificationStatus.OK
