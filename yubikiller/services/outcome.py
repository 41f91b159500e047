"""Mapping of parsed verification responses to outcomes."""

from __future__ import annotations

from typing import Mapping

from yubikiller.errors import ValidationFailure
from yubikiller.schemas.verification import InvalidationOutcome, VerificationStatus


def resolve_outcome(fields: Mapping[str, str]) -> InvalidationOutcome:
    """Resolve the ``status`` field. Missing or unrecognised values are UNKNOWN."""
    return InvalidationOutcome(
        status=VerificationStatus.from_wire(fields.get("status")),
        response=dict(fields),
    )


def ensure_success(outcome: InvalidationOutcome) -> InvalidationOutcome:
    """Return *outcome* if it is OK, otherwise raise ValidationFailure."""
    if not outcome.ok:
        raise ValidationFailure(outcome)
    return outcome
