import hashlib
import hmac
from enum import Enum

from .exceptions import AlgorithmError


class Algorithm(Enum):
    """
    The three HMAC algorithms allowed for TOTP by the RFC 6238 reference
    implementation.

    SHA1 is the most widespread and the only one every authenticator app
    supports; some apps accept SHA256 and SHA512 in a provisioning URI but
    silently fall back to SHA1, which makes every check fail.
    """

    SHA1 = "SHA1"
    SHA256 = "SHA256"
    SHA512 = "SHA512"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def default(cls) -> "Algorithm":
        return cls.SHA1

    @classmethod
    def from_name(cls, name: str) -> "Algorithm":
        """
        Looks up an algorithm by its exact otpauth name.

        :param name: ``SHA1``, ``SHA256`` or ``SHA512``
        :raises AlgorithmError: for any other value, including lower case names
        """
        try:
            return cls(name)
        except ValueError:
            raise AlgorithmError(name) from None

    @property
    def digest(self):
        return _DIGESTS[self]

    def sign(self, key: bytes, message: bytes) -> bytes:
        """
        Computes the HMAC of message under key.

        :param key: raw secret bytes
        :param message: usually the 8 byte big-endian counter
        :returns: the MAC bytes (20, 32 or 64 of them)
        """
        return hmac.new(key, message, self.digest).digest()


_DIGESTS = {
    Algorithm.SHA1: hashlib.sha1,
    Algorithm.SHA256: hashlib.sha256,
    Algorithm.SHA512: hashlib.sha512,
}
