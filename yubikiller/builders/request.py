"""Verification request URL construction."""

from __future__ import annotations

from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from yubikiller.config import YUBICO_API_URL
from yubikiller.errors import URLBuildError
from yubikiller.shared.generators import generate_nonce

_REQUEST_PARAMS = ("otp", "nonce")


def build_verification_url(otp: str, base_url: str = YUBICO_API_URL) -> str:
    """Build the GET URL that presents *otp* to the verification service.

    Parameters already on *base_url* (``id=1`` by default) are kept, ``otp``
    and ``nonce`` are replaced, and the query is re-encoded sorted by key.

    Raises:
        URLBuildError: If *base_url* is not an absolute http(s) URL.
        RandomSourceError: If a nonce cannot be generated.
    """
    try:
        parts = urlsplit(base_url)
    except ValueError as e:
        raise URLBuildError(f"malformed verification URL: {e}") from e

    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise URLBuildError(
            "verification URL must be an absolute http(s) URL",
            details={"scheme": parts.scheme, "host": parts.netloc},
        )

    params = [
        (key, value)
        for key, value in parse_qsl(parts.query, keep_blank_values=True)
        if key not in _REQUEST_PARAMS
    ]
    params.append(("otp", otp))
    params.append(("nonce", generate_nonce()))
    # sorted() is stable, so repeated keys keep their original order
    query = urlencode(sorted(params, key=lambda pair: pair[0]))

    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))
