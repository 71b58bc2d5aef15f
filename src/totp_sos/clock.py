import logging
import time

from .exceptions import ClockError

log = logging.getLogger(__name__)


class Clock(object):
    """
    Source of the current time for the ``*_current`` TOTP operations.

    Subclass it (or pass anything with a ``now()`` method) to pin the time in
    tests.
    """

    def now(self) -> int:
        """
        :returns: whole seconds since the Unix epoch
        :raises ClockError: if the time cannot be expressed that way
        """
        raise NotImplementedError


class SystemClock(Clock):
    def now(self) -> int:
        t = time.time()
        if t < 0:
            log.debug("system clock is before the Unix epoch: %s", t)
            raise ClockError(t)
        return int(t)


class FixedClock(Clock):
    """A clock that always reports the same timestamp."""

    def __init__(self, timestamp: int) -> None:
        if timestamp < 0:
            raise ClockError(timestamp)
        self.timestamp = int(timestamp)

    def now(self) -> int:
        return self.timestamp

    def __repr__(self) -> str:
        return "FixedClock({})".format(self.timestamp)


system_clock = SystemClock()
