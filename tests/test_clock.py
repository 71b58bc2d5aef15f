import time

import pytest

from totp_sos import ClockError, FixedClock, SystemClock
from totp_sos import clock as clock_module


def test_system_clock():
    before = int(time.time())
    now = SystemClock().now()
    assert isinstance(now, int)
    assert before <= now <= int(time.time())


def test_system_clock_before_epoch(monkeypatch):
    monkeypatch.setattr(clock_module.time, "time", lambda: -5.0)
    with pytest.raises(ClockError) as e:
        SystemClock().now()
    assert e.value.timestamp == -5.0


def test_fixed_clock():
    clock = FixedClock(1000)
    assert clock.now() == 1000
    assert clock.now() == 1000
    assert repr(clock) == "FixedClock(1000)"


def test_fixed_clock_before_epoch():
    with pytest.raises(ClockError):
        FixedClock(-1)


def test_clock_errors_propagate(totp, monkeypatch):
    monkeypatch.setattr(clock_module.time, "time", lambda: -1.0)
    with pytest.raises(ClockError):
        totp.generate_current()
    with pytest.raises(ClockError):
        totp.ttl()
    with pytest.raises(ClockError):
        totp.next_step_current()
    with pytest.raises(ClockError):
        totp.check_current("659761")


def test_any_object_with_now_is_a_clock(totp):
    class Frozen:
        def now(self):
            return 1000

    assert totp.generate_current(Frozen()) == "659761"
