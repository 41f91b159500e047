"""
Parsing of verification response bodies.

The service answers with one ``key=value`` pair per line, CRLF terminated,
for example::

    h=vjhFxZrNHB5CjI6vhuSeF2n46a8=
    t=2024-01-01T12:00:00Z0123
    otp=cccccccccccbgjjtrhnbcdhvlgbtjdbhikjntcneirbd
    nonce=aEFhZgLnGMBpQwXa
    status=OK

Only the first ``=`` separates key from value (``h`` is base64 and may end in
``=``). Lines without a separator are ignored.
"""

from __future__ import annotations

from typing import Iterable, Optional

import httpx

from yubikiller.errors import ResponseReadError, TransportError


def _split_line(line: str) -> Optional[tuple[str, str]]:
    key, sep, value = line.partition("=")
    if not sep:
        return None
    return key, value.rstrip("\r\n")


def parse_response_lines(lines: Iterable[str]) -> dict[str, str]:
    """Build the field mapping from body lines split on LF only."""
    fields: dict[str, str] = {}
    for line in lines:
        pair = _split_line(line)
        if pair is not None:
            fields[pair[0]] = pair[1]
    return fields


async def read_response(response: httpx.Response) -> dict[str, str]:
    """Consume a streaming response body into a field mapping.

    Does not close the response.

    Raises:
        TransportError: If the read times out.
        ResponseReadError: If the stream breaks or cannot be decoded.
    """
    # aiter_lines() would also break on \r, \x85 and \u2028 inside values
    lines: list[str] = []
    pending = ""
    try:
        async for chunk in response.aiter_text():
            pending += chunk
            *complete, pending = pending.split("\n")
            lines.extend(complete)
    except httpx.TimeoutException as e:
        raise TransportError(f"timed out reading response: {e}") from e
    except (httpx.RequestError, httpx.StreamError) as e:
        raise ResponseReadError(
            f"could not read verification response: {e}",
            details={"error_type": type(e).__name__},
        ) from e
    lines.append(pending)
    return parse_response_lines(lines)
