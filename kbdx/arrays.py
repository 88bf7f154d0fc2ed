"""Small helpers over sequences.

Every helper leaves its input untouched and returns a new list (or a single
value). Passing None instead of a sequence raises ValueError.
"""

import random
from collections.abc import Callable, Iterable, Sequence
from typing import Any, TypeVar

T = TypeVar("T")
R = TypeVar("R")


def _not_none(item: Any) -> bool:
    return item is not None


def _require(data: Iterable[Any] | None) -> None:
    if data is None:
        raise ValueError("Expected a sequence, got None")


def random_element(
    data: Sequence[T | None],
    skip_none: bool = False,
    rng: random.Random | None = None,
) -> T | None:
    """Pick one element at random, or None from an empty sequence."""
    _require(data)
    pool = denullify(data) if skip_none else list(data)
    if not pool:
        return None
    return (rng or random).choice(pool)


def first(
    data: Sequence[T], predicate: Callable[[T], bool] = _not_none
) -> T | None:
    """First element accepted by ``predicate`` (default: first non-None)."""
    _require(data)
    for item in data:
        if predicate(item):
            return item
    return None


def last(data: Sequence[T], predicate: Callable[[T], bool] = _not_none) -> T | None:
    """Last element accepted by ``predicate`` (default: last non-None)."""
    _require(data)
    for item in reversed(data):
        if predicate(item):
            return item
    return None


def filter_items(data: Iterable[T], predicate: Callable[[T], bool]) -> list[T]:
    _require(data)
    return [item for item in data if predicate(item)]


def filter_indexed(
    data: Iterable[T], predicate: Callable[[int, T], bool]
) -> list[T]:
    """Like `filter_items`, with the element's index passed first."""
    _require(data)
    return [item for i, item in enumerate(data) if predicate(i, item)]


def transform(data: Iterable[T], fn: Callable[[T], R]) -> list[R]:
    _require(data)
    return [fn(item) for item in data]


def transform_indexed(data: Iterable[T], fn: Callable[[int, T], R]) -> list[R]:
    _require(data)
    return [fn(i, item) for i, item in enumerate(data)]


def denullify(data: Iterable[T | None]) -> list[T]:
    """Drop every None, keeping the order of the rest."""
    _require(data)
    return [item for item in data if item is not None]


def fill_none(data: Iterable[T | None], default: T) -> list[T]:
    """Replace every None with ``default``."""
    _require(data)
    return [default if item is None else item for item in data]


def consume(
    data: Iterable[T | None], fn: Callable[[T | None], Any], pass_none: bool = False
) -> None:
    """Call ``fn`` on each element, skipping None unless ``pass_none``."""
    _require(data)
    for item in data:
        if pass_none or item is not None:
            fn(item)


def consume_indexed(
    data: Iterable[T | None],
    fn: Callable[[int, T | None], Any],
    pass_none: bool = False,
) -> None:
    """Like `consume`, with a counter of the elements delivered so far.

    Skipped None elements do not advance the counter.
    """
    _require(data)
    delivered = 0
    for item in data:
        if pass_none or item is not None:
            fn(delivered, item)
            delivered += 1


def join(
    data: Iterable[Any],
    delimiter: str | None = ", ",
    before: str | None = "[",
    after: str | None = "]",
) -> str:
    """Join the string form of each element; None becomes "null".

    >>> join([1, None, "x"])
    '[1, null, x]'
    >>> join([1, 2], "-", None, None)
    '1-2'
    """
    _require(data)
    body = (delimiter or "").join(
        "null" if item is None else str(item) for item in data
    )
    return f"{before or ''}{body}{after or ''}"


def count(data: Iterable[Any], target: Any) -> int:
    _require(data)
    return sum(1 for item in data if item == target)


def index(data: Iterable[Any], target: Any) -> int:
    """Position of the first element equal to ``target``, -1 if none."""
    _require(data)
    for i, item in enumerate(data):
        if item == target:
            return i
    return -1


def has(data: Iterable[Any], target: Any) -> bool:
    return index(data, target) != -1


def average(data: Sequence[float]) -> float:
    _require(data)
    if not data:
        raise ValueError("Cannot average an empty sequence")
    return sum(data) / len(data)


def shuffle(data: Sequence[T], rng: random.Random | None = None) -> list[T]:
    """Unbiased Fisher-Yates shuffle of a copy of ``data``.

    Any permutation is equally likely, including the original order.
    """
    _require(data)
    rng = rng or random.Random()
    result = list(data)
    for i in range(len(result) - 1, 0, -1):
        j = rng.randint(0, i)
        result[i], result[j] = result[j], result[i]
    return result


def reverse(data: Sequence[T]) -> list[T]:
    _require(data)
    return list(reversed(data))


def to_hex_array(
    data: bytes | bytearray | Iterable[int], uppercase: bool = False
) -> list[str]:
    """Two-digit unsigned hex for each byte.

    Negative ints are read as signed bytes, so -1 becomes "ff".
    """
    _require(data)
    spec = "02X" if uppercase else "02x"
    return [format(byte & 0xFF, spec) for byte in data]


def to_hex_string(
    data: bytes | bytearray | Iterable[int], uppercase: bool = False
) -> str:
    return join(to_hex_array(data, uppercase), None, None, None)
