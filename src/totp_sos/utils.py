import base64
import binascii
import logging
import re
from hmac import compare_digest
from typing import Any, Dict, Optional, Union
from urllib.parse import parse_qsl, quote, unquote, urlsplit

from .algorithm import Algorithm
from .exceptions import (
    AccountNameError,
    DigitsError,
    HostError,
    IssuerDecodingError,
    IssuerMismatchError,
    SchemeError,
    SecretError,
    StepError,
    UrlError,
)

log = logging.getLogger(__name__)

_UNSIGNED = re.compile(r"\+?[0-9]+")


def encode_base32(data: Union[bytes, bytearray]) -> str:
    """
    Encodes raw secret bytes as RFC 4648 base32 without padding.

    The otpauth scheme does not use base32 padding for secrets whose length
    is not a multiple of 5 bytes.
    """
    return base64.b32encode(bytes(data)).decode("ascii").rstrip("=")


def decode_base32(secret: str) -> bytes:
    """
    Decodes unpadded base32 text into raw bytes.

    :param secret: base32 text, without ``=`` padding
    :raises SecretError: if the text is padded, contains characters outside
        the base32 alphabet, or has a length no encoding can produce
    """
    if "=" in secret:
        raise SecretError(secret)
    missing_padding = len(secret) % 8
    padded = secret + "=" * (8 - missing_padding) if missing_padding else secret
    try:
        return base64.b32decode(padded, casefold=True)
    except (binascii.Error, ValueError):
        raise SecretError(secret) from None


def _parse_unsigned(value: str, error: Any) -> int:
    if not _UNSIGNED.fullmatch(value):
        raise error(value)
    return int(value)


def _percent_decode(value: str, error: Any) -> str:
    try:
        return unquote(value, errors="strict")
    except UnicodeDecodeError:
        raise error(value) from None


def parse_uri(uri: str) -> Dict[str, Any]:
    """
    Parses an ``otpauth://totp/`` provisioning URI.

    See also:
        https://github.com/google/google-authenticator/wiki/Key-Uri-Format

    Only the parts carried by the URI are returned; the caller supplies the
    rest (the skew) and runs the result through the validating constructor.

    :param uri: the totp URI to parse
    :returns: keyword arguments for :class:`totp_sos.TOTP`
    :raises TOTPError: one of its subclasses, naming what was wrong
    """
    try:
        parsed_uri = urlsplit(uri)
    except ValueError as e:
        log.debug("rejecting malformed otpauth URI: %s", e)
        raise UrlError(uri, str(e)) from None
    if not parsed_uri.scheme:
        raise UrlError(uri, "relative URL without a base")

    if parsed_uri.scheme != "otpauth":
        log.debug("rejecting otpauth URI with scheme %r", parsed_uri.scheme)
        raise SchemeError(parsed_uri.scheme)
    if parsed_uri.netloc != "totp":
        log.debug("rejecting otpauth URI with host %r", parsed_uri.netloc)
        raise HostError(parsed_uri.netloc)

    otp_data: Dict[str, Any] = {
        "algorithm": Algorithm.default(),
        "digits": 6,
        "step": 30,
        "issuer": None,
    }
    secret = b""

    # The label looks like "Issuer:account" or just "account"
    path = parsed_uri.path.lstrip("/")
    if ":" in path:
        label_issuer, account_name = path.split(":", 1)
        otp_data["issuer"] = _percent_decode(label_issuer, IssuerDecodingError)
        account_name = account_name.lstrip(":")
    else:
        account_name = path
    otp_data["account_name"] = _percent_decode(account_name, AccountNameError)

    for key, value in parse_qsl(parsed_uri.query, keep_blank_values=True):
        if key == "algorithm":
            otp_data["algorithm"] = Algorithm.from_name(value)
        elif key == "digits":
            otp_data["digits"] = _parse_unsigned(value, DigitsError)
        elif key == "period":
            otp_data["step"] = _parse_unsigned(value, StepError)
        elif key == "secret":
            secret = decode_base32(value)
        elif key == "issuer":
            if otp_data["issuer"] is not None and otp_data["issuer"] != value:
                raise IssuerMismatchError(otp_data["issuer"], value)
            otp_data["issuer"] = value
        else:
            log.debug("ignoring unknown otpauth parameter %r", key)

    # Every TOTP needs a secret
    if not secret:
        raise SecretError("")
    otp_data["secret"] = secret

    return otp_data


def build_uri(
    secret: str,
    name: str,
    issuer: Optional[str] = None,
    algorithm: Optional[Algorithm] = None,
    digits: int = 6,
) -> str:
    """
    Returns the provisioning URI for a TOTP.

    This can then be encoded in a QR Code and used to provision an
    authenticator app.

    See also:
        https://github.com/google/google-authenticator/wiki/Key-Uri-Format

    The issuer is percent-encoded once and the same text is used both in the
    label and in the ``issuer`` parameter. The period is never written out,
    apps assume 30 seconds.

    :param secret: the base32 secret, without padding
    :param name: name of the account
    :param issuer: the name of the OTP issuer; this will be the
        organization title of the OTP entry in Authenticator
    :param algorithm: the algorithm used in the OTP generation
    :param digits: the length of the OTP generated code
    :returns: provisioning uri
    """
    if algorithm is None:
        algorithm = Algorithm.default()

    base_uri = "otpauth://totp/{0}secret={1}&digits={2}&algorithm={3}"

    label = quote(name, safe="") + "?"
    if issuer is not None:
        issuer = quote(issuer, safe="")
        label = "{0}:{1}issuer={0}&".format(issuer, label)

    return base_uri.format(label, secret, digits, algorithm)


def strings_equal(s1: str, s2: str) -> bool:
    """
    Compares the UTF-8 bytes of two strings in constant time.

    No Unicode normalization is applied, so full-width digits never match
    ASCII ones. Lone surrogates are encoded as-is and simply fail to match.
    Only the length of the strings leaks through timing.
    """
    return compare_digest(s1.encode("utf-8", "surrogatepass"), s2.encode("utf-8", "surrogatepass"))
