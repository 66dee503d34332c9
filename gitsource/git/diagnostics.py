"""
Diagnostic log threaded through revision resolution.

A resolution chain (fetch, resolve, checkout, ...) collects human-readable
entries as it goes. The log is an immutable value: every append returns a new
log, so a failure deep in the chain can report the whole trail without any
shared, mutable logger.
"""

import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, Iterator, Tuple, Union


class LogLevel(IntEnum):
    """Severity of a diagnostic entry."""

    TRACE = 0
    INFO = 1
    WARNING = 2
    ERROR = 3

    @property
    def logging_level(self) -> int:
        return _LOGGING_LEVELS[self]


_LOGGING_LEVELS = {
    LogLevel.TRACE: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.WARNING: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
}


@dataclass(frozen=True)
class LogEntry:
    """A single diagnostic message."""

    level: LogLevel
    message: str

    def __str__(self) -> str:
        return f"{self.level.name.lower()}: {self.message}"


class DiagnosticLog:
    """Ordered, append-only sequence of LogEntry values."""

    __slots__ = ("_entries",)

    def __init__(self, entries: Iterable[LogEntry] = ()):
        self._entries: Tuple[LogEntry, ...] = tuple(entries)

    def append(self, level: LogLevel, message: str) -> "DiagnosticLog":
        """Return a new log with one more entry; the receiver is unchanged."""
        return DiagnosticLog(self._entries + (LogEntry(level, message),))

    def trace(self, message: str) -> "DiagnosticLog":
        return self.append(LogLevel.TRACE, message)

    def info(self, message: str) -> "DiagnosticLog":
        return self.append(LogLevel.INFO, message)

    def warning(self, message: str) -> "DiagnosticLog":
        return self.append(LogLevel.WARNING, message)

    def error(self, message: str) -> "DiagnosticLog":
        return self.append(LogLevel.ERROR, message)

    @property
    def entries(self) -> Tuple[LogEntry, ...]:
        return self._entries

    @property
    def has_errors(self) -> bool:
        return any(entry.level >= LogLevel.ERROR for entry in self._entries)

    def replay(self, logger: logging.Logger, start: int = 0) -> None:
        """Forward entries (from index start on) to a stdlib logger."""
        for entry in self._entries[start:]:
            logger.log(entry.level.logging_level, entry.message)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[LogEntry]:
        return iter(self._entries)

    def __getitem__(
        self, index: Union[int, slice]
    ) -> Union[LogEntry, Tuple[LogEntry, ...]]:
        return self._entries[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DiagnosticLog):
            return NotImplemented
        return self._entries == other._entries

    def __hash__(self) -> int:
        return hash(self._entries)

    def __repr__(self) -> str:
        return f"DiagnosticLog({list(self._entries)!r})"
