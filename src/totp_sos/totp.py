from typing import Any, Optional, Union

from . import utils
from .algorithm import Algorithm
from .clock import Clock, system_clock
from .exceptions import SkewError, StepError
from .otp import OTP

DEFAULT_STEP = 30
DEFAULT_SKEW = 1


class TOTP(OTP):
    """
    Handler for time-based OTP counters (RFC 6238).

    Holds everything needed to generate an auth code and to validate one. The
    :attr:`secret` is sensitive; use the object as a context manager, or call
    :meth:`zeroize`, to overwrite it once it is no longer needed.

        >>> totp = TOTP(Algorithm.SHA1, 6, 1, 1, b"TestSecretSuperSecret",
        ...             "mock@example.com", "Github")
        >>> totp.generate(1000)
        '659761'
    """

    def __init__(
        self,
        algorithm: Algorithm,
        digits: int,
        skew: int,
        step: int,
        secret: Union[bytes, bytearray],
        account_name: str,
        issuer: Optional[str] = None,
    ) -> None:
        """
        :param algorithm: HMAC algorithm; SHA1 is the one every client supports
        :param digits: length of the codes, between 6 and 8
        :param skew: number of steps tolerated before and after the current
            one when checking a code. RFC 6238 recommends 1
        :param step: duration of a step in seconds. RFC 6238 recommends 30
        :param secret: raw key, at least 128 bits (160 are recommended)
        :param account_name: "mock@example.com" in "Github:mock@example.com";
            must not contain a colon
        :param issuer: "Github" in "Github:mock@example.com"; must not
            contain a colon
        """
        super().__init__(secret=secret, digits=digits, algorithm=algorithm, account_name=account_name, issuer=issuer)
        if skew < 0:
            raise SkewError(skew)
        if step <= 0:
            raise StepError(str(step))
        self._skew = skew
        self._step = step

    @property
    def skew(self) -> int:
        return self._skew

    @property
    def step(self) -> int:
        return self._step

    def timecode(self, for_time: int) -> int:
        """
        Accepts a Unix timestamp in seconds and returns the step counter.
        """
        return int(for_time) // self.step

    def sign(self, time: int) -> bytes:
        """
        Signs the step counter that contains the given timestamp.

        :param time: Unix timestamp in seconds
        :returns: the raw HMAC
        """
        return self.algorithm.sign(self._byte_secret(), self.int_to_bytestring(self.timecode(time)))

    def generate(self, time: int) -> str:
        """
        Generates the code for the given timestamp.

        :param time: Unix timestamp in seconds
        :returns: OTP value, zero-padded to :attr:`digits`
        """
        return self.generate_otp(self.timecode(time))

    def generate_current(self, clock: Optional[Clock] = None) -> str:
        """
        Generates the current code.

        :param clock: time source, the system clock by default
        """
        return self.generate(self._now(clock))

    def next_step(self, time: int) -> int:
        """
        Returns the timestamp of the first second of the step after the one
        containing the given timestamp.
        """
        return (self.timecode(time) + 1) * self.step

    def next_step_current(self, clock: Optional[Clock] = None) -> int:
        return self.next_step(self._now(clock))

    def ttl(self, clock: Optional[Clock] = None) -> int:
        """
        Number of seconds the current code stays valid.
        """
        return self.step - self._now(clock) % self.step

    def check(self, token: str, time: int) -> bool:
        """
        Verifies a token against the given timestamp, accepting :attr:`skew`
        steps on each side of the step that contains it.

        :param token: the OTP to check against
        :param time: Unix timestamp in seconds
        """
        basestep = self.timecode(time) - self.skew
        for i in range(self.skew * 2 + 1):
            # no steps before the epoch
            if basestep + i < 0:
                continue
            if utils.strings_equal(str(token), self.generate((basestep + i) * self.step)):
                return True
        return False

    def check_current(self, token: str, clock: Optional[Clock] = None) -> bool:
        """
        Verifies a token against the current time.

        :param token: the OTP to check against
        :param clock: time source, the system clock by default
        """
        return self.check(token, self._now(clock))

    def to_secret_base32(self) -> str:
        """
        Returns the base32 representation of the secret, for users who add it
        to their authenticator by hand.
        """
        return utils.encode_base32(self._byte_secret())

    @classmethod
    def from_secret_base32(cls, secret: str) -> "TOTP":
        """
        Builds a TOTP with the default settings from a base32 secret.

        The account name is empty and there is no issuer; use :meth:`replace`
        to set them.

        :raises SecretError: if the secret is not valid unpadded base32
        """
        return cls(Algorithm.SHA1, 6, DEFAULT_SKEW, DEFAULT_STEP, utils.decode_base32(secret), "", None)

    @classmethod
    def from_url(cls, url: str) -> "TOTP":
        """
        Builds a TOTP from an ``otpauth://totp/`` provisioning URI.

        The URI has no room for a skew, it is always 1.

        :raises TOTPError: one of its subclasses, naming what was wrong
        """
        return cls(skew=DEFAULT_SKEW, **utils.parse_uri(url))

    def get_url(self) -> str:
        """
        Returns the provisioning URI for the OTP. This can then be
        encoded in a QR Code and used to provision an OTP app like
        Google Authenticator.

        The label and issuer are percent-encoded and the secret is base32
        without padding. The step is not part of the URI.
        """
        return utils.build_uri(
            self.to_secret_base32(),
            self.account_name,
            issuer=self.issuer,
            algorithm=self.algorithm,
            digits=self.digits,
        )

    def replace(self, **changes: Any) -> "TOTP":
        """
        Returns a new, validated TOTP with some fields changed.

            >>> totp = TOTP.from_secret_base32("KRSXG5CTMVRXEZLUKN2XAZLSKNSWG4TFOQ")
            >>> totp = totp.replace(account_name="mock@example.com", issuer="Github")
        """
        fields = {
            "algorithm": self.algorithm,
            "digits": self.digits,
            "skew": self.skew,
            "step": self.step,
            "secret": self._byte_secret(),
            "account_name": self.account_name,
            "issuer": self.issuer,
        }
        unknown = set(changes) - set(fields)
        if unknown:
            raise TypeError("unknown TOTP fields: {}".format(", ".join(sorted(unknown))))
        fields.update(changes)
        return type(self)(**fields)

    def _now(self, clock: Optional[Clock]) -> int:
        return (clock or system_clock).now()

    def __repr__(self) -> str:
        return "{}(algorithm={}, digits={}, skew={}, step={}, account_name={!r}, issuer={!r})".format(
            type(self).__name__,
            self.algorithm,
            self.digits,
            self.skew,
            self.step,
            self.account_name,
            self.issuer,
        )
