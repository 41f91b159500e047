"""
Random value generators.

The nonce must come from the OS CSPRNG (``secrets``). If that source fails
the error propagates; there is no fallback to ``random``.
"""

from __future__ import annotations

import secrets
import string

from yubikiller.errors import RandomSourceError

NONCE_ALPHABET = string.ascii_lowercase + string.ascii_uppercase
NONCE_LENGTH = 16


def generate_nonce(length: int = NONCE_LENGTH) -> str:
    """Generate a request nonce of ASCII letters.

    Args:
        length: Number of characters (default 16; the protocol accepts 16-40).

    Returns:
        Random string drawn uniformly from ``a-zA-Z``.

    Raises:
        RandomSourceError: If the system entropy source is unavailable.
    """
    try:
        return "".join(secrets.choice(NONCE_ALPHABET) for _ in range(length))
    except (OSError, NotImplementedError) as e:
        raise RandomSourceError(
            "system entropy source unavailable",
            details={"error_type": type(e).__name__},
        ) from e
