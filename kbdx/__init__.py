from .arrays import denullify, filter_items, shuffle, transform
from .duration import (
    DAY,
    HOUR,
    MILLISECOND,
    MINUTE,
    SECOND,
    UNITS,
    YEAR,
    Duration,
    NumeralError,
    Unit,
    UnknownUnitError,
    format_duration,
    format_elapsed,
    parse,
)
from .locker import ObjectLocker
from .logger import LoggerOptions, RootLogger, SubLogger, SubLoggerHandler
from .stopwatch import Stopwatch
from .table import TextTable

__all__ = [
    "Duration",
    "Unit",
    "UNITS",
    "MILLISECOND",
    "SECOND",
    "MINUTE",
    "HOUR",
    "DAY",
    "YEAR",
    "parse",
    "format_duration",
    "format_elapsed",
    "UnknownUnitError",
    "NumeralError",
    "Stopwatch",
    "TextTable",
    "RootLogger",
    "SubLogger",
    "LoggerOptions",
    "SubLoggerHandler",
    "ObjectLocker",
    "denullify",
    "filter_items",
    "transform",
    "shuffle",
]
