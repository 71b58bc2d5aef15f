import pytest

from totp_sos import TOTP, Algorithm

SECRET = b"TestSecretSuperSecret"


def _make_totp(
    algorithm=Algorithm.SHA1, digits=6, skew=1, step=1, secret=SECRET, account_name="mock@example.com", issuer=None
):
    return TOTP(algorithm, digits, skew, step, secret, account_name, issuer)


@pytest.fixture
def make_totp():
    """Builds a TOTP around the test secret; every field can be overridden."""
    return _make_totp


@pytest.fixture
def totp() -> TOTP:
    return _make_totp()


@pytest.fixture
def github_totp() -> TOTP:
    return _make_totp(issuer="Github")
