"""Human-readable durations.

Parses free text such as ``"3 days 4h"`` into milliseconds and renders a
millisecond count back into text such as ``"1y 6d 2h"``. Durations are plain
signed integers of milliseconds; `Duration` wraps one for arithmetic and
formatting convenience.

Example:
    >>> parse("3 days 4h")
    273600000
    >>> format_duration(68603)
    '1m 8s 603ms'
    >>> format_duration(68603, max_elements=2, short=False)
    '1 minute, 8 seconds'
"""

import re
from collections.abc import Callable
from dataclasses import dataclass

from typing_extensions import override

from kbdx.util import now_ms


class UnknownUnitError(ValueError):
    """Raised when a duration string names a unit that does not exist."""


class NumeralError(ValueError):
    """Raised when the number in front of a unit cannot be read."""


@dataclass(frozen=True, kw_only=True)
class Unit:
    """One link of the unit chain.

    Attributes:
        rank: Position in the chain, 0 being the smallest unit
        scale: Milliseconds in one of this unit
        short: Compact label used in short output ("ms", "h")
        singular: Full label for a magnitude of exactly one
        plural: Full label for every other magnitude
        aliases: Extra names accepted when parsing (besides the labels)
    """

    rank: int
    scale: int
    short: str
    singular: str
    plural: str
    aliases: tuple[str, ...] = ()

    @property
    def name(self) -> str:
        return self.singular

    @property
    def names(self) -> tuple[str, ...]:
        """Every name this unit answers to when parsing."""
        return (self.singular, self.plural, *self.aliases)

    @override
    def __str__(self) -> str:
        return self.plural

    @staticmethod
    def lookup(name: str) -> "Unit":
        """Find a unit by any of its names, ignoring case.

        Raises:
            UnknownUnitError: If no unit answers to ``name``
        """
        try:
            return _BY_NAME[name.lower()]
        except KeyError:
            valid = ", ".join(sorted(_BY_NAME))
            raise UnknownUnitError(
                f"Unknown unit {name!r}. Valid units: {valid}"
            ) from None

    @staticmethod
    def by_rank(rank: int) -> "Unit | None":
        if 0 <= rank < len(UNITS):
            return UNITS[rank]
        return None


def _chain(
    *links: tuple[int, str, str, str, tuple[str, ...]],
) -> tuple[Unit, ...]:
    # Each link multiplies the scale of the one before it
    units: list[Unit] = []
    scale = 1
    for rank, (multiplier, short, singular, plural, aliases) in enumerate(links):
        scale *= multiplier
        units.append(
            Unit(
                rank=rank,
                scale=scale,
                short=short,
                singular=singular,
                plural=plural,
                aliases=aliases,
            )
        )
    return tuple(units)


UNITS: tuple[Unit, ...] = _chain(
    (1, "ms", "millisecond", "milliseconds", ("millis", "ms")),
    (1000, "s", "second", "seconds", ("secs", "sec", "s")),
    (60, "m", "minute", "minutes", ("mins", "min", "m")),
    (60, "h", "hour", "hours", ("hrs", "hr", "h")),
    (24, "d", "day", "days", ("d",)),
    (365, "y", "year", "years", ("yrs", "yr", "y")),
)
MILLISECOND, SECOND, MINUTE, HOUR, DAY, YEAR = UNITS
MIN_RANK = UNITS[0].rank
MAX_RANK = UNITS[-1].rank

_BY_NAME: dict[str, Unit] = {
    name.lower(): unit for unit in UNITS for name in unit.names
}

# A number (digits may be grouped with whitespace, "," or "." as the decimal
# mark) followed by a word
_PAIR = re.compile(r"([0-9\s]*[0-9](?:[,.][0-9\s]*[0-9])?)\s*([a-zA-Z]+)")
_SPACE = re.compile(r"\s")


def parse(text: str) -> int:
    """Sum every "number unit" pair found in ``text`` as milliseconds.

    Anything between pairs is ignored, so ``"took 1h and 30 min"`` reads as
    90 minutes. Fractional amounts are truncated to whole milliseconds per
    pair. Repeated units accumulate.

    Raises:
        UnknownUnitError: If a number is followed by a word that is not a unit
        NumeralError: If the number cannot be read as an int or a float
    """
    total = 0
    for match in _PAIR.finditer(text):
        unit = Unit.lookup(match.group(2))
        numeral = _SPACE.sub("", match.group(1)).replace(",", ".")
        try:
            total += int(numeral) * unit.scale
        except ValueError:
            try:
                total += int(float(numeral) * unit.scale)
            except ValueError:
                raise NumeralError(
                    f"Unknown number {match.group(1)!r} in {text!r}"
                ) from None
    return total


def _rank(value: "int | Unit") -> int:
    return value.rank if isinstance(value, Unit) else value


def _clamp(rank: int) -> int:
    # Ranks past either end of the chain have no unit to print
    return min(max(rank, MIN_RANK), MAX_RANK)


def _top_rank(ms: int) -> int:
    """Rank of the largest unit that fits at least once into ``ms``."""
    top = MIN_RANK
    for unit in UNITS:
        if unit.scale <= ms:
            top = unit.rank
    return top


def format_duration(
    ms: int,
    min_rank: "int | Unit" = MIN_RANK,
    max_rank: "int | Unit | None" = None,
    max_elements: int = -1,
    show_empty: bool = True,
    short: bool = True,
    pre_separator: str | None = None,
    post_separator: str | None = None,
) -> str:
    """Render ``ms`` as a multi-unit string.

    The absolute value is split over the units from ``max_rank`` down to
    ``min_rank``; a negative input gets a single leading ``-``. Amounts of
    the largest unit are not wrapped, so ``max_rank=MINUTE`` renders two
    hours as ``"120m"``. Ranks past either end of the unit chain are clamped
    to it.

    Args:
        ms: Duration in milliseconds
        min_rank: Smallest unit to print (rank or `Unit`)
        max_rank: Largest unit to print; None starts at the largest unit
            that is non-zero for this duration
        max_elements: Stop after this many components; any negative value
            means no limit
        show_empty: Print zero components too. The smallest unit is always
            printed when nothing else was, so the result is never empty.
        short: "3h" style labels instead of "3 hours"
        pre_separator: Between a number and its label. Defaults to "" for
            short labels and " " for full ones.
        post_separator: Between components. Defaults to " " for short labels
            and ", " for full ones.

    Raises:
        ValueError: If ``min_rank > max_rank`` or ``max_elements`` is 0
    """
    magnitude = abs(ms)
    low = _rank(min_rank)
    if max_rank is not None and low > _rank(max_rank):
        raise ValueError(
            f"min_rank ({low}) must be <= max_rank ({_rank(max_rank)})"
        )
    low = _clamp(low)
    if max_rank is None:
        high = max(low, _top_rank(magnitude))
    else:
        high = _clamp(_rank(max_rank))
    if max_elements == 0:
        raise ValueError("max_elements can't be 0; use -1 for no limit")

    if pre_separator is None:
        pre_separator = "" if short else " "
    if post_separator is None:
        post_separator = " " if short else ", "

    parts: list[str] = []
    for unit in reversed(UNITS[low : high + 1]):
        if len(parts) == max_elements:
            break
        amount, magnitude = divmod(magnitude, unit.scale)
        if amount or show_empty or (unit.rank == low and not parts):
            if short:
                label = unit.short
            else:
                label = unit.singular if amount == 1 else unit.plural
            parts.append(f"{amount}{pre_separator}{label}")

    text = post_separator.join(parts)
    return f"-{text}" if ms < 0 else text


def format_elapsed(ms: int, parts: int = -1) -> str:
    """Render ``ms`` as ``parts`` consecutive units, largest non-zero first.

    Zero components below the first one are kept, so one hour with two parts
    is ``"1h 0m"``. A negative ``parts``, or more parts than there are units,
    prints every unit down to milliseconds.

    Raises:
        ValueError: If ``parts`` is 0
    """
    return format_duration(ms, max_elements=parts)


def _as_unit(unit: "Unit | str") -> Unit:
    return unit if isinstance(unit, Unit) else Unit.lookup(unit)


def _as_millis(value: "Duration | int | str") -> int:
    if isinstance(value, Duration):
        return value.millis
    if isinstance(value, str):
        return parse(value)
    if isinstance(value, int):
        return value
    raise TypeError(
        f"Expected Duration, int milliseconds or str, got {type(value).__name__!r}"
    )


@dataclass(frozen=True, order=True)
class Duration:
    """An immutable span of time, stored as whole milliseconds."""

    millis: int = 0

    @classmethod
    def of(cls, amount: int | float, unit: "Unit | str") -> "Duration":
        """``amount`` of ``unit``; fractional results are truncated."""
        return cls(int(amount * _as_unit(unit).scale))

    @classmethod
    def parse(cls, text: str) -> "Duration":
        return cls(parse(text))

    @classmethod
    def total(cls, *parts: "Duration | int | str | None") -> "Duration":
        """Sum of ``parts``, skipping None."""
        return cls(sum(_as_millis(p) for p in parts if p is not None))

    @classmethod
    def now(cls, clock: Callable[[], int] = now_ms) -> "Duration":
        """Time since the epoch, for measuring against with `offset`.

        >>> start = Duration.now()
        >>> ...  # work
        >>> elapsed = Duration.now().offset(start)
        """
        return cls(clock())

    def offset(self, reference: "Duration | int | str") -> "Duration":
        """This duration measured from ``reference`` (``self - reference``)."""
        return Duration(self.millis - _as_millis(reference))

    def to(self, unit: "Unit | str") -> int:
        """Whole ``unit``s in this duration, truncated toward zero."""
        whole = abs(self.millis) // _as_unit(unit).scale
        return -whole if self.millis < 0 else whole

    @property
    def milliseconds(self) -> int:
        return self.millis

    @property
    def seconds(self) -> int:
        return self.to(SECOND)

    @property
    def minutes(self) -> int:
        return self.to(MINUTE)

    @property
    def hours(self) -> int:
        return self.to(HOUR)

    @property
    def days(self) -> int:
        return self.to(DAY)

    @property
    def years(self) -> int:
        return self.to(YEAR)

    def __add__(self, other: "Duration | int | str") -> "Duration":
        if not isinstance(other, (Duration, int, str)):
            return NotImplemented
        return Duration(self.millis + _as_millis(other))

    def __radd__(self, other: "int | str") -> "Duration":
        return self.__add__(other)

    def __sub__(self, other: "Duration | int | str") -> "Duration":
        if not isinstance(other, (Duration, int, str)):
            return NotImplemented
        return Duration(self.millis - _as_millis(other))

    def __neg__(self) -> "Duration":
        return Duration(-self.millis)

    def __abs__(self) -> "Duration":
        return Duration(abs(self.millis))

    def __bool__(self) -> bool:
        return self.millis != 0

    def format(
        self,
        min_rank: "int | Unit" = MIN_RANK,
        max_rank: "int | Unit | None" = None,
        max_elements: int = -1,
        show_empty: bool = True,
        short: bool = True,
        pre_separator: str | None = None,
        post_separator: str | None = None,
    ) -> str:
        """See `format_duration`."""
        return format_duration(
            self.millis,
            min_rank,
            max_rank,
            max_elements,
            show_empty,
            short,
            pre_separator,
            post_separator,
        )

    @override
    def __str__(self) -> str:
        return format_duration(self.millis)


def milliseconds(n: int | float) -> Duration:
    return Duration.of(n, MILLISECOND)


def seconds(n: int | float) -> Duration:
    return Duration.of(n, SECOND)


def minutes(n: int | float) -> Duration:
    return Duration.of(n, MINUTE)


def hours(n: int | float) -> Duration:
    return Duration.of(n, HOUR)


def days(n: int | float) -> Duration:
    return Duration.of(n, DAY)


def years(n: int | float) -> Duration:
    return Duration.of(n, YEAR)
