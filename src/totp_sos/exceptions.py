from typing import Optional


class TOTPError(ValueError):
    """
    Base class for every error raised while building, parsing or using a TOTP.

    Subclasses carry the offending value as an attribute so callers can tell
    the failure kinds apart without parsing messages.
    """


class SecretError(TOTPError):
    def __init__(self, secret: str) -> None:
        self.secret = secret
        super().__init__("Secret '{}' is not a valid non-padded base32 string".format(secret))


class IssuerMismatchError(TOTPError):
    def __init__(self, label_issuer: str, query_issuer: str) -> None:
        self.label_issuer = label_issuer
        self.query_issuer = query_issuer
        super().__init__(
            "An issuer '{}' could be retrieved from the path, but a different issuer '{}' "
            "was found in the issuer URL parameter".format(label_issuer, query_issuer)
        )


class IssuerError(TOTPError):
    def __init__(self, issuer: str) -> None:
        self.issuer = issuer
        super().__init__("Issuer '{}' must not contain a colon".format(issuer))


class StepError(TOTPError):
    def __init__(self, step: str) -> None:
        self.step = step
        super().__init__("Could not parse step '{}' as a positive number".format(step))


class SkewError(TOTPError):
    def __init__(self, skew: int) -> None:
        self.skew = skew
        super().__init__("Skew must be a number of steps >= 0, not {}".format(skew))


class DigitsError(TOTPError):
    def __init__(self, digits: str) -> None:
        self.digits = digits
        super().__init__("Could not parse digits '{}' as a number".format(digits))


class AlgorithmError(TOTPError):
    def __init__(self, algorithm: str) -> None:
        self.algorithm = algorithm
        super().__init__("Algorithm can only be SHA1, SHA256 or SHA512, not '{}'".format(algorithm))


class AccountNameError(TOTPError):
    def __init__(self, account_name: str) -> None:
        self.account_name = account_name
        super().__init__("Account name '{}' must not contain a colon".format(account_name))


class IssuerDecodingError(TOTPError):
    def __init__(self, issuer: str) -> None:
        self.issuer = issuer
        super().__init__("Could not decode URL '{}'".format(issuer))


class HostError(TOTPError):
    def __init__(self, host: str) -> None:
        self.host = host
        super().__init__("Host should be totp, not '{}'".format(host))


class SchemeError(TOTPError):
    def __init__(self, scheme: str) -> None:
        self.scheme = scheme
        super().__init__("Scheme should be otpauth, not '{}'".format(scheme))


class SecretTooSmallError(TOTPError):
    """The length of the shared secret MUST be at least 128 bits."""

    def __init__(self, bits: int) -> None:
        self.bits = bits
        super().__init__(
            "The length of the shared secret MUST be at least 128 bits; {} bits is not enough".format(bits)
        )


class InvalidDigitsError(TOTPError):
    """Implementations MUST extract a 6-digit code at a minimum and possibly 7 and 8-digit code."""

    def __init__(self, digits: int) -> None:
        self.digits = digits
        super().__init__(
            "Implementations MUST extract a 6-digit code at a minimum and possibly 7 and 8-digit code; "
            "{} digits is not allowed".format(digits)
        )


class UrlError(TOTPError):
    def __init__(self, url: str, reason: Optional[str] = None) -> None:
        self.url = url
        self.reason = reason
        message = "Could not parse '{}' as a URL".format(url)
        if reason:
            message += ": " + reason
        super().__init__(message)


class ClockError(TOTPError):
    """Raised when the system clock reports a time before the Unix epoch."""

    def __init__(self, timestamp: float) -> None:
        self.timestamp = timestamp
        super().__init__("System time {} is before the Unix epoch".format(timestamp))


class SecretZeroizedError(TOTPError):
    def __init__(self) -> None:
        super().__init__("The secret of this TOTP has been zeroized and can no longer be used")
