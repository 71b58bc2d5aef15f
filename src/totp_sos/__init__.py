"""
RFC 6238 TOTP generation and validation, with support for the
``otpauth://totp/`` provisioning URIs understood by authenticator apps.

    >>> import totp_sos
    >>> totp = totp_sos.parse_uri(
    ...     "otpauth://totp/Github:mock%40example.com?issuer=Github"
    ...     "&secret=KRSXG5CTMVRXEZLUKN2XAZLSKNSWG4TFOQ"
    ... )
    >>> totp.check(totp.generate(1000), 1000)
    True
"""

from .algorithm import Algorithm as Algorithm
from .clock import Clock as Clock
from .clock import FixedClock as FixedClock
from .clock import SystemClock as SystemClock
from .exceptions import (  # noqa:F401
    AccountNameError,
    AlgorithmError,
    ClockError,
    DigitsError,
    HostError,
    InvalidDigitsError,
    IssuerDecodingError,
    IssuerError,
    IssuerMismatchError,
    SchemeError,
    SecretError,
    SecretTooSmallError,
    SecretZeroizedError,
    SkewError,
    StepError,
    TOTPError,
    UrlError,
)
from .otp import OTP as OTP
from .totp import TOTP as TOTP


def parse_uri(uri: str) -> TOTP:
    """
    Parses the provisioning URI for a TOTP.

    See also:
        https://github.com/google/google-authenticator/wiki/Key-Uri-Format

    :param uri: the totp URI to parse
    :returns: TOTP object
    """
    return TOTP.from_url(uri)
