import time
import uuid

from boardstore.core.environment import SystemClock, uuid4_generator


def test_system_clock_is_strictly_increasing(monkeypatch):
    monkeypatch.setattr(time, "time_ns", lambda: 5_000)
    clock = SystemClock()

    stamps = [clock.now() for _ in range(3)]

    assert stamps == [5_000, 5_001, 5_002]


def test_system_clock_never_goes_backwards(monkeypatch):
    readings = iter([9_000, 4_000, 9_500])
    monkeypatch.setattr(time, "time_ns", lambda: next(readings))
    clock = SystemClock()

    assert [clock.now() for _ in range(3)] == [9_000, 9_001, 9_500]


def test_uuid4_generator():
    first, second = uuid4_generator(), uuid4_generator()

    assert first != second
    assert uuid.UUID(first).version == 4
