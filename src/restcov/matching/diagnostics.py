"""Non-fatal findings collected while building and matching a report.

The engine never logs matching events directly; it appends them to a
:class:`Diagnostics` collector that the caller may surface, aggregate or
ignore.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator


class DiagnosticLevel(StrEnum):
    WARNING = "warning"
    ERROR = "error"


class DiagnosticCode(StrEnum):
    """Kinds of schema/log mismatch the engine reports."""

    PATH_NOT_FOUND = "path_not_found"
    METHOD_NOT_FOUND = "method_not_found"
    UNKNOWN_VERB = "unknown_verb"
    INVALID_QUERY_PARAM = "invalid_query_param"
    INVALID_BODY_PARAM = "invalid_body_param"
    UNEXPECTED_BODY = "unexpected_body"
    INVALID_BODY = "invalid_body"
    UNRESOLVED_REF = "unresolved_ref"
    CYCLIC_REF = "cyclic_ref"
    HITS_CLAMPED = "hits_clamped"


@dataclass(frozen=True)
class Diagnostic:
    level: DiagnosticLevel
    code: DiagnosticCode
    message: str
    path: str = ""
    method: str = ""


DEFAULT_MAX_ENTRIES = 100


def _log_level(d: Diagnostic) -> int:
    return logging.ERROR if d.level == DiagnosticLevel.ERROR else logging.WARNING


def logging_sink(logger: logging.Logger) -> Callable[[Diagnostic], None]:
    """Return a sink that logs each diagnostic to *logger* as it is recorded."""

    def _sink(d: Diagnostic) -> None:
        logger.log(_log_level(d), "%s: %s", d.code.value, d.message)

    return _sink


@dataclass
class Diagnostics:
    """Per-code counts of recorded diagnostics plus the first few entries.

    Only the first *max_entries* diagnostics are kept in :attr:`entries`;
    later ones are counted and passed to *sink*, then dropped, so memory
    does not grow with the length of the audit log.
    """

    max_entries: int = DEFAULT_MAX_ENTRIES
    sink: Callable[[Diagnostic], None] | None = None
    entries: list[Diagnostic] = field(default_factory=list)
    _counts: Counter[str] = field(default_factory=Counter, init=False, repr=False)

    def record(self, diagnostic: Diagnostic) -> None:
        self._counts[diagnostic.code.value] += 1
        if len(self.entries) < self.max_entries:
            self.entries.append(diagnostic)
        if self.sink is not None:
            self.sink(diagnostic)

    def warning(self, code: DiagnosticCode, message: str, *, path: str = "", method: str = "") -> None:
        self.record(Diagnostic(DiagnosticLevel.WARNING, code, message, path, method))

    def error(self, code: DiagnosticCode, message: str, *, path: str = "", method: str = "") -> None:
        self.record(Diagnostic(DiagnosticLevel.ERROR, code, message, path, method))

    def __len__(self) -> int:
        """Total number of diagnostics recorded, kept or not."""
        return sum(self._counts.values())

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.entries)

    @property
    def dropped(self) -> int:
        """Number of diagnostics counted but not kept in :attr:`entries`."""
        return len(self) - len(self.entries)

    def by_code(self, code: DiagnosticCode) -> list[Diagnostic]:
        return [d for d in self.entries if d.code == code]

    def counts(self) -> dict[str, int]:
        """Return the number of diagnostics recorded per code."""
        return dict(self._counts)

    def emit(self, logger: logging.Logger) -> None:
        """Replay the kept entries to *logger* at their own level."""
        log = logging_sink(logger)
        for d in self.entries:
            log(d)
        if self.dropped:
            logger.warning("%d more diagnostics not shown", self.dropped)
