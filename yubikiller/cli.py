#!/usr/bin/env python3
"""
yubikiller command line entry point.

Invalidates one YubiKey OTP so it can no longer be used, e.g. after it was
accidentally pasted into a chat window:

    yubikiller cccccccccccbgjjtrhnbcdhvlgbtjdbhikjntcneirbd

Exit status is 0 on success and 2 on a usage error or any failure.
"""

import argparse
import asyncio
import sys
from typing import Optional, Sequence

from pydantic import ValidationError

from yubikiller.config import AppSettings
from yubikiller.errors import YubiKillerError
from yubikiller.infrastructure.context import RequestContext
from yubikiller.services.invalidation import invalidate_token
from yubikiller.shared.logging import get_logger, setup_logging

EXIT_FAILURE = 2

log = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="yubikiller",
        description="Invalidate a YubiKey OTP via the Yubico validation service.",
    )
    parser.add_argument("otp", nargs="*", help="the OTP to invalidate")
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="seconds before the request is abandoned (default: REQUEST_TIMEOUT_SECONDS or 10)",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if len(args.otp) != 1:
        print("requires at least 1 yubikey OTP to invalidate")
        return EXIT_FAILURE

    try:
        settings = AppSettings()
    except ValidationError as e:
        print(f"encountered error invalidating token: invalid configuration: {e}")
        return EXIT_FAILURE
    setup_logging(settings.logging)

    timeout = args.timeout if args.timeout is not None else settings.client.request_timeout_seconds
    ctx = RequestContext(timeout=timeout)

    try:
        asyncio.run(invalidate_token(args.otp[0], ctx, settings=settings.client))
    except YubiKillerError as e:
        log.debug("cli_invalidation_failed", code=e.error_code, retryable=e.retryable)
        print(f"encountered error invalidating token: {e.message!r}")
        return EXIT_FAILURE

    print("successfully invalidated token")
    return 0


if __name__ == "__main__":
    sys.exit(main())
