"""
Prints the current code of a TOTP once per second, with the number of
seconds it stays valid and the timestamp of the next step.

    python -m totp_sos --url "otpauth://totp/Github:mock%40example.com?secret=..."
    python -m totp_sos --secret KRSXG5CTMVRXEZLUKN2XAZLSKNSWG4TFOQ --issuer Github
"""

import argparse
import logging
import sys
import time
from typing import Callable, List, Optional

from .algorithm import Algorithm
from .clock import Clock
from .exceptions import TOTPError
from .totp import DEFAULT_SKEW, DEFAULT_STEP, TOTP

log = logging.getLogger(__name__)

DEMO_SECRET = b"TestSecretSuperSecret"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="totp-sos", description="Show the current TOTP code every second.")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--url", help="otpauth://totp/ provisioning URI")
    source.add_argument("--secret", help="base32 secret, without padding")
    parser.add_argument("--account", default="mock@example.com", help="account name (ignored with --url)")
    parser.add_argument("--issuer", default=None, help="issuer name (ignored with --url)")
    parser.add_argument("--interval", type=float, default=1.0, help="seconds between two lines")
    parser.add_argument("--count", type=int, default=None, help="stop after this many lines")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    return parser


def build_totp(args: argparse.Namespace) -> TOTP:
    if args.url:
        return TOTP.from_url(args.url)
    if args.secret:
        totp = TOTP.from_secret_base32(args.secret)
    else:
        totp = TOTP(Algorithm.SHA1, 6, DEFAULT_SKEW, DEFAULT_STEP, DEMO_SECRET, "", None)
    return totp.replace(account_name=args.account, issuer=args.issuer)


def main(
    argv: Optional[List[str]] = None,
    clock: Optional[Clock] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    try:
        totp = build_totp(args)
    except TOTPError as e:
        print("totp-sos: error: {}".format(e), file=sys.stderr)
        return 2

    with totp:
        print(totp.get_url())
        printed = 0
        try:
            while args.count is None or printed < args.count:
                print(
                    "code {}\t ttl {}\t valid until: {}".format(
                        totp.generate_current(clock), totp.ttl(clock), totp.next_step_current(clock)
                    ),
                    flush=True,
                )
                printed += 1
                if args.count is None or printed < args.count:
                    sleep(args.interval)
        except KeyboardInterrupt:
            log.debug("interrupted after %d codes", printed)
    return 0


if __name__ == "__main__":
    sys.exit(main())
