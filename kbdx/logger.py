"""Hierarchical line-prefixing logger.

Every line carries the names of the loggers it passed through, root first:

    >>> root = RootLogger("root")
    >>> page = root.create_child("rewriter#abc.pdf").create_child("page#1")
    >>> page.println("Started")  # root > rewriter#abc.pdf > page#1: Started

Only the root writes to the output stream, and it does so under one lock, so
children may be used from any number of threads.
"""

import logging
import sys
import threading
from dataclasses import dataclass
from typing import TextIO

from typing_extensions import override


@dataclass
class LoggerOptions:
    """Separators shared by a root logger and all of its children.

    Attributes:
        delimiter: Between two logger names
        separator: Between the last logger name and the text
    """

    delimiter: str = " > "
    separator: str = ": "


class SubLogger:
    """A named node below a `RootLogger`."""

    def __init__(self, name: str, parent: "SubLogger", root: "RootLogger") -> None:
        self.name: str = name
        self._parent: SubLogger = parent
        self._root: RootLogger = root

    @property
    def options(self) -> LoggerOptions:
        return self._root.options

    @options.setter
    def options(self, options: LoggerOptions) -> None:
        self._root.options = options

    @property
    def root(self) -> "RootLogger":
        return self._root

    def create_child(self, name: str) -> "SubLogger":
        return SubLogger(name, self, self._root)

    def println(self, text: str) -> None:
        self._parent._forward(f"{self.name}{self.options.separator}{text}")

    def flush(self) -> None:
        self._root.flush()

    def _forward(self, line: str) -> None:
        # Each level prepends its own name on the way up
        self._parent._forward(f"{self.name}{self.options.delimiter}{line}")


class RootLogger(SubLogger):
    """Top of a logger tree; owns the stream and the lock guarding it."""

    def __init__(self, name: str, stream: TextIO | None = None) -> None:
        """
        Args:
            name: First segment of every line
            stream: Where lines go; defaults to ``sys.stdout``
        """
        self.name = name
        self._parent = self
        self._root = self
        self._stream: TextIO = stream if stream is not None else sys.stdout
        self._options: LoggerOptions = LoggerOptions()
        self._lock: threading.RLock = threading.RLock()

    @property
    @override
    def options(self) -> LoggerOptions:
        return self._options

    @options.setter
    @override
    def options(self, options: LoggerOptions) -> None:
        # Children hold on to the root, not to the options object
        self._options.delimiter = options.delimiter
        self._options.separator = options.separator

    @override
    def println(self, text: str) -> None:
        self._write(f"{self.name}{self._options.separator}{text}\n")

    @override
    def flush(self) -> None:
        with self._lock:
            self._stream.flush()

    @override
    def _forward(self, line: str) -> None:
        self._write(f"{self.name}{self._options.delimiter}{line}\n")

    def _write(self, text: str) -> None:
        with self._lock:
            self._stream.write(text)


class SubLoggerHandler(logging.Handler):
    """Route standard `logging` records into a logger tree.

    Example:
        >>> root = RootLogger("app")
        >>> logging.getLogger("kbdx").addHandler(
        ...     SubLoggerHandler(root.create_child("kbdx"))
        ... )
    """

    def __init__(self, target: SubLogger, level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self.target: SubLogger = target

    @override
    def emit(self, record: logging.LogRecord) -> None:
        try:
            for line in self.format(record).splitlines() or [""]:
                self.target.println(line)
        except RecursionError:
            raise
        except Exception:
            self.handleError(record)
