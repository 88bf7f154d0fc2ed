"""Tests for Stopwatch."""

import random
from datetime import date, datetime, timezone

import pytest

from kbdx.stopwatch import DEFAULT_TEMPLATE, Stopwatch, to_epoch_ms


class FakeClock:
    """Clock returning a settable epoch-millisecond value."""

    def __init__(self, now: int = 1_700_000_000_000):
        self.now: int = now

    def __call__(self) -> int:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def watch(clock: FakeClock) -> Stopwatch:
    return Stopwatch(clock=clock)


def test_set_now_and_explicit(watch: Stopwatch, clock: FakeClock):
    """Test setting timers from the clock, an int and a datetime."""
    watch.set("t1")
    watch.set("t2", 1000)
    watch.set("t3", datetime.fromtimestamp(1, tz=timezone.utc))

    assert watch.get("t1") == clock.now
    assert watch.get("t2") == 1000
    assert watch.get("t3") == 1000
    assert watch.index("t1") == 0
    assert watch.index("t2") == 1
    assert watch.index("t3") == 2


def test_set_from_date_and_iso_string(watch: Stopwatch):
    """Test setting timers from a date and an ISO-8601 string."""
    watch.set("d", date(1970, 1, 2))
    watch.set("s", "1970-01-01T00:00:01.500Z")

    assert watch.get("d") == 86_400_000
    assert watch.get("s") == 1500


def test_set_negative_timestamp(watch: Stopwatch):
    """Test that negative timestamps are rejected."""
    with pytest.raises(ValueError, match="-5"):
        watch.set("bad", -5)
    assert "bad" not in watch


def test_set_naive_datetime(watch: Stopwatch):
    """Test that naive datetimes are rejected."""
    with pytest.raises(TypeError, match="timezone-aware"):
        watch.set("naive", datetime(2025, 1, 1))


def test_set_unsupported_type(watch: Stopwatch):
    """Test that unsupported timestamp types are rejected."""
    with pytest.raises(TypeError):
        watch.set("float", 1.5)  # type: ignore[arg-type]


def test_missing_label_sentinels(watch: Stopwatch):
    """Test that missing labels resolve to sentinels instead of raising."""
    assert watch.get("missing") == 0
    assert watch.index("missing") == -1
    assert watch.next_label("missing") is None
    assert watch.next_label(watch.index("missing")) is None


def test_matches(watch: Stopwatch):
    """Test label/label and label/value matching."""
    watch.set("t1")
    watch.set("t2", 1000)
    watch.set("t3", 1000)

    assert not watch.matches("t1", "t2")
    assert watch.matches("t2", "t3")
    assert watch.matches("t1", "t1")
    assert watch.matches("t2", 1000)
    assert not watch.matches("t2", 1001)
    assert not watch.matches("missing", 0)
    assert not watch.matches("t2", "missing")


def test_remove(watch: Stopwatch):
    """Test removing timers, including ones that do not exist."""
    watch.set("a", 1)
    watch.set("b", 2)
    watch.remove("a")
    watch.remove("never-set")

    assert watch.get("a") == 0
    assert watch.index("a") == -1
    assert watch.index("b") == 0
    assert len(watch) == 1


def test_reset_moves_label_to_end(watch: Stopwatch):
    """Test that setting an existing label re-appends it."""
    watch.set("A", 1)
    watch.set("B", 2)
    watch.set("C", 3)
    watch.set("A", 4)

    assert list(watch) == ["B", "C", "A"]
    assert watch.get("A") == 4
    assert watch.next_label("C") == "A"
    assert watch.next_label(watch.index("C")) == "A"
    assert watch.next_label("A") is None
    assert watch.next_label(watch.index("A")) is None


def test_reset_after_remove(watch: Stopwatch):
    """Test that a removed label re-enters at the end."""
    watch.set("t1")
    watch.set("t2", 1000)
    watch.set("t3", 1000)
    watch.remove("t1")
    watch.set("t1")

    assert list(watch) == ["t2", "t3", "t1"]


def test_next_label_positions(watch: Stopwatch):
    """Test next_label by position, including out-of-range positions."""
    watch.set("a", 1)
    watch.set("b", 2)

    assert watch.next_label(0) == "b"
    assert watch.next_label(1) is None
    assert watch.next_label(5) is None
    assert watch.next_label(-1) is None


def test_iteration_is_live(watch: Stopwatch):
    """Test that each iteration reflects the current order."""
    watch.set("a", 1)
    first = list(watch)
    watch.set("b", 2)
    watch.set("a", 3)

    assert first == ["a"]
    assert list(watch) == ["b", "a"]


def test_compare_start_end(watch: Stopwatch):
    """Test comparing two labelled instants."""
    watch.set("start", 1000)
    watch.set("end", 1000 + 220_300)

    assert watch.compare_ms("start", "end") == 220_300
    assert watch.compare("start", "end") == "3m 40s 300ms"
    assert watch.compare("start", "end", 2) == "3m 40s"


def test_compare_same_instant(watch: Stopwatch):
    """Test comparing timers holding the same value."""
    watch.set("t1")
    watch.set("t2", watch.get("t1"))

    assert watch.compare("t1", "t2") == "0ms"
    assert watch.compare_ms("t1", "t2") == 0


def test_compare_against_now_and_raw_values(watch: Stopwatch, clock: FakeClock):
    """Test overloads resolving from the clock, raw ints and datetimes."""
    watch.set("t", clock.now - 5000)

    assert watch.compare_ms("t") == 5000
    assert watch.compare("t") == "5s 0ms"
    assert watch.compare_ms("t", clock.now + 1000) == 6000
    assert watch.compare_ms(0, 1500) == 1500
    assert watch.compare_ms("t", datetime.fromtimestamp(0, tz=timezone.utc)) == (
        clock.now - 5000
    )


def test_compare_is_symmetric(watch: Stopwatch):
    """Test that comparisons do not depend on argument order."""
    rng = random.Random(7)
    for i in range(100):
        diff = rng.randint(2000, 345_384_583)
        watch.set(f"1timer{i}")
        watch.set(f"2timer{i}", watch.get(f"1timer{i}") + diff)

        assert watch.compare_ms(f"1timer{i}", f"2timer{i}") == diff
        assert watch.compare_ms(f"2timer{i}", f"1timer{i}") == diff
        assert watch.compare(f"1timer{i}", f"2timer{i}") == watch.compare(
            f"2timer{i}", f"1timer{i}"
        )


def test_compare_next(watch: Stopwatch):
    """Test describing a single leg."""
    watch.set("boot", 0)
    watch.set("ready", 1500)

    assert watch.compare_next("boot") == "boot => ready took 1s 500ms"
    assert watch.compare_next("ready") == ""
    assert watch.compare_next("boot", 1, "%B% after %A%: %C%") == "ready after boot: 1s"


def test_compare_next_all(watch: Stopwatch):
    """Test the report over every consecutive pair."""
    watch.set("a", 0)
    watch.set("b", 1000)
    watch.set("c", 61_000)

    assert watch.compare_next_all() == (
        "a => b took 1s 0ms\nb => c took 1m 0s 0ms"
    )
    assert watch.compare_next_all(1, "%A%-%B% %C%") == "a-b 1s\nb-c 1m"


def test_compare_next_all_single_or_empty(watch: Stopwatch):
    """Test reports without any leg."""
    assert watch.compare_next_all() == ""
    watch.set("only", 5)
    assert watch.compare_next_all() == ""


def test_compare_with_oversized_or_negative_cap(watch: Stopwatch):
    """Test caps beyond the unit count, or negative, print every unit."""
    watch.set("a", 0)
    watch.set("b", 68_603)

    assert watch.compare("a", "b", 7) == "1m 8s 603ms"
    assert watch.compare("a", "b", -2) == "1m 8s 603ms"
    with pytest.raises(ValueError):
        watch.compare("a", "b", 0)


def test_compare_next_all_pairs_neighbours(watch: Stopwatch, monkeypatch):
    """Test the report walks the labels once instead of looking each one up."""
    for i in range(500):
        watch.set(f"t{i}", i * 1000)

    def no_lookup(*args):
        raise AssertionError("per-label lookup")

    monkeypatch.setattr(watch, "next_label", no_lookup)
    monkeypatch.setattr(watch, "index", no_lookup)
    lines = watch.compare_next_all(1).splitlines()

    assert len(lines) == 499
    assert lines[0] == "t0 => t1 took 1s"
    assert lines[-1] == "t498 => t499 took 1s"


def test_default_template():
    """Test the default report template."""
    assert DEFAULT_TEMPLATE == "%A% => %B% took %C%"


def test_to_epoch_ms_offsets():
    """Test conversion of datetimes with non-UTC offsets."""
    assert to_epoch_ms("1970-01-01T01:00:00+01:00") == 0
