"""Named timestamps with elapsed-time comparison.

A `Stopwatch` keeps labels in the order they were (last) set, so a series of
checkpoints can be reported as consecutive legs:

    >>> watch = Stopwatch()
    >>> watch.set("start", 1000)
    >>> watch.set("end", 221300)
    >>> watch.compare("start", "end")
    '3m 40s 300ms'
    >>> print(watch.compare_next_all())
    start => end took 3m 40s 300ms
"""

import logging
from collections.abc import Callable, Iterator
from datetime import date, datetime, time, timedelta, timezone

from dateutil.parser import isoparse

from kbdx.duration import format_elapsed
from kbdx.util import now_ms

logger = logging.getLogger(__name__)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_MS = timedelta(milliseconds=1)

DEFAULT_TEMPLATE = "%A% => %B% took %C%"

Instant = str | int | datetime | date | None


def to_epoch_ms(value: datetime | date | str) -> int:
    """Convert a point in time to epoch milliseconds.

    Accepts:
    - datetime: Must be timezone-aware
    - date: Midnight UTC of that day
    - str: ISO-8601 timestamp with an offset, e.g. "2025-01-01T12:00:00Z"

    Raises:
        TypeError: If ``value`` is an unsupported type or a naive datetime
    """
    if isinstance(value, str):
        value = isoparse(value)
    if isinstance(value, datetime):
        if value.tzinfo is None:
            raise TypeError(
                f"Timestamp must be a timezone-aware datetime.\n"
                f"Got naive datetime: {value!r}\n"
                f"Hint: Add timezone info:\n"
                f"  dt = datetime(..., tzinfo=timezone.utc)"
            )
        return (value - _EPOCH) // _ONE_MS
    if isinstance(value, date):
        dt = datetime.combine(value, time.min, tzinfo=timezone.utc)
        return (dt - _EPOCH) // _ONE_MS
    raise TypeError(
        f"Timestamp must be int, datetime, date, or str.\n"
        f"Got {type(value).__name__!r}: {value!r}"
    )


class Stopwatch:
    """Insertion-ordered mapping of labels to epoch-millisecond timestamps.

    Missing labels are not errors: `get` returns 0, `index` returns -1 and
    `next_label` returns None.
    """

    def __init__(self, clock: Callable[[], int] = now_ms) -> None:
        """
        Args:
            clock: Returns the current time as epoch milliseconds
        """
        self._clock: Callable[[], int] = clock
        self._timers: dict[str, int] = {}

    def __iter__(self) -> Iterator[str]:
        return iter(self._timers)

    def __len__(self) -> int:
        return len(self._timers)

    def __contains__(self, label: object) -> bool:
        return label in self._timers

    def set(
        self, label: str, when: int | datetime | date | str | None = None
    ) -> None:
        """Store ``when`` (default: now) under ``label``.

        Setting a label that already exists moves it to the end of the order.

        Raises:
            ValueError: If ``when`` lies before the epoch
            TypeError: If ``when`` is a naive datetime or an unsupported type
        """
        if when is None:
            stamp = self._clock()
        else:
            stamp = when if isinstance(when, int) else to_epoch_ms(when)
            if stamp < 0:
                raise ValueError(
                    f"Timestamp must be a valid epoch instant (>= 0), got {stamp}"
                )

        self._timers.pop(label, None)
        self._timers[label] = stamp
        logger.debug("timer %r set to %d", label, stamp)

    def get(self, label: str) -> int:
        """Timestamp stored under ``label``, 0 if there is none."""
        return self._timers.get(label, 0)

    def remove(self, label: str) -> None:
        if self._timers.pop(label, None) is not None:
            logger.debug("timer %r removed", label)

    def index(self, label: str) -> int:
        """0-based position of ``label`` in set order, -1 if absent."""
        for position, key in enumerate(self._timers):
            if key == label:
                return position
        return -1

    def next_label(self, label: str | int) -> str | None:
        """Label set right after ``label`` (or after position ``label``).

        Returns None for the last label, a missing label or a position out of
        range.
        """
        keys = list(self._timers)
        if isinstance(label, str):
            if label not in self._timers:
                return None
            position = keys.index(label)
        else:
            position = label
        if position < 0:
            return None
        if position + 1 < len(keys):
            return keys[position + 1]
        return None

    def matches(self, label: str, other: str | int) -> bool:
        """True if ``label`` is set and holds the same timestamp as ``other``.

        ``other`` is either another label, which must also be set, or a raw
        timestamp.
        """
        if label not in self._timers:
            return False
        if isinstance(other, str):
            if other not in self._timers:
                return False
            return self._timers[label] == self._timers[other]
        return self._timers[label] == other

    def resolve(self, instant: Instant) -> int:
        """Epoch milliseconds for a label, raw timestamp, datetime or None (now)."""
        if instant is None:
            return self._clock()
        if isinstance(instant, str):
            return self.get(instant)
        if isinstance(instant, int):
            return instant
        return to_epoch_ms(instant)

    def compare_ms(self, first: Instant, second: Instant = None) -> int:
        """Absolute difference in milliseconds between two instants.

        Each side may be a label, a timestamp, a datetime, or None for now.
        """
        return abs(self.resolve(first) - self.resolve(second))

    def compare(
        self, first: Instant, second: Instant = None, max_elements: int = -1
    ) -> str:
        """`compare_ms` rendered as text, e.g. ``"3m 40s 300ms"``.

        Args:
            max_elements: Number of units to print, starting at the largest
                non-zero one; a negative value prints everything down to
                milliseconds
        """
        return format_elapsed(self.compare_ms(first, second), max_elements)

    def compare_next(
        self, label: str, max_elements: int = -1, template: str = DEFAULT_TEMPLATE
    ) -> str:
        """Describe the leg from ``label`` to the label set after it.

        ``%A%``, ``%B%`` and ``%C%`` in ``template`` are replaced by the two
        labels and the elapsed time. Returns "" when there is no next label.
        """
        following = self.next_label(label)
        if following is None:
            return ""
        return self._leg(label, following, max_elements, template)

    def compare_next_all(
        self, max_elements: int = -1, template: str = DEFAULT_TEMPLATE
    ) -> str:
        """`compare_next` for every label, one line per leg."""
        keys = list(self._timers)
        return "\n".join(
            self._leg(first, second, max_elements, template)
            for first, second in zip(keys, keys[1:])
        )

    def _leg(
        self, first: str, second: str, max_elements: int, template: str
    ) -> str:
        return (
            template.replace("%A%", first)
            .replace("%B%", second)
            .replace("%C%", self.compare(first, second, max_elements))
        )
