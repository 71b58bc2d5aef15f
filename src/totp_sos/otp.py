import logging
import struct
from hmac import compare_digest
from typing import Any, Optional, Union

from .algorithm import Algorithm
from .exceptions import (
    AccountNameError,
    InvalidDigitsError,
    IssuerError,
    SecretTooSmallError,
    SecretZeroizedError,
)

log = logging.getLogger(__name__)

DEFAULT_DIGITS = 6
MIN_DIGITS = 6
MAX_DIGITS = 8
MIN_SECRET_BYTES = 16

# Overwrite secrets when an OTP object is garbage collected. Recommended;
# turn it off only if secrets are shared with code that outlives the OTP.
ZEROIZE_ON_DELETE = True


class OTP(object):
    """
    Base class for OTP handlers.

    Owns the secret key material and implements the HOTP truncation that
    turns a counter into a code. Equality only looks at the secret and runs in
    constant time, so two handlers with the same key compare equal even if
    their other settings differ.
    """

    def __init__(
        self,
        secret: Union[bytes, bytearray],
        digits: int = DEFAULT_DIGITS,
        algorithm: Algorithm = Algorithm.SHA1,
        account_name: str = "",
        issuer: Optional[str] = None,
    ) -> None:
        self._secret = bytearray()
        self._zeroized = False

        if not MIN_DIGITS <= digits <= MAX_DIGITS:
            raise InvalidDigitsError(digits)
        if len(secret) < MIN_SECRET_BYTES:
            raise SecretTooSmallError(len(secret) * 8)
        if ":" in account_name:
            raise AccountNameError(account_name)
        if issuer is not None and ":" in issuer:
            raise IssuerError(issuer)

        self._algorithm = algorithm if isinstance(algorithm, Algorithm) else Algorithm.from_name(algorithm)
        self._digits = digits
        self._secret = bytearray(secret)
        self._account_name = account_name
        self._issuer = issuer

    @property
    def algorithm(self) -> Algorithm:
        return self._algorithm

    @property
    def digits(self) -> int:
        return self._digits

    @property
    def secret(self) -> bytes:
        """A copy of the raw secret. Sensitive, treat it accordingly."""
        return self.byte_secret()

    @property
    def account_name(self) -> str:
        return self._account_name

    @property
    def issuer(self) -> Optional[str]:
        return self._issuer

    @property
    def zeroized(self) -> bool:
        return self._zeroized

    def byte_secret(self) -> bytes:
        return bytes(self._byte_secret())

    def _byte_secret(self) -> bytearray:
        if self._zeroized:
            raise SecretZeroizedError()
        return self._secret

    def generate_otp(self, input: int) -> str:
        """
        :param input: the HMAC counter value to use as the OTP input.
            Usually the computed integer based on the Unix timestamp
        """
        # Implements RFC 4226
        hmac_hash = self.algorithm.sign(self._byte_secret(), self.int_to_bytestring(input))
        offset = hmac_hash[-1] & 0xF
        code = struct.unpack(">I", hmac_hash[offset : offset + 4])[0] & 0x7FFFFFFF
        return str(code % 10**self.digits).zfill(self.digits)

    @staticmethod
    def int_to_bytestring(i: int) -> bytes:
        """
        Packs a counter as the 8 byte big-endian message that RFC 4226
        signs. Negative counters have no encoding.
        """
        if i < 0:
            raise ValueError("input must be positive integer")
        return struct.pack(">Q", i)

    def zeroize(self) -> None:
        """
        Overwrites the secret in place.

        Every operation that needs the secret raises
        :class:`SecretZeroizedError` afterwards. Copies handed out earlier by
        :attr:`secret` are not affected.
        """
        for i in range(len(self._secret)):
            self._secret[i] = 0
        if not self._zeroized:
            log.debug("zeroized %s secret for %r", type(self).__name__, self._account_name)
        self._zeroized = True

    def __enter__(self) -> "OTP":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.zeroize()

    def __del__(self) -> None:
        if ZEROIZE_ON_DELETE and getattr(self, "_secret", None):
            for i in range(len(self._secret)):
                self._secret[i] = 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OTP):
            return NotImplemented
        # a wiped secret matches nothing, not even itself
        if self._zeroized or other._zeroized:
            return False
        return compare_digest(self._secret, other._secret)

    __hash__ = None  # type: ignore[assignment]
