from __future__ import annotations

"""Structured diagnostics for non-fatal conversion issues.

Conversion never prints. Known gaps (currently only ``<style>`` elements) are
reported as :class:`Diagnostic` records to a sink supplied by the caller, so a
front-end can capture, display or ignore them.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol

__all__ = [
    "Diagnostic",
    "DiagnosticSink",
    "CollectingSink",
    "LoggingSink",
    "FanOutSink",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Diagnostic:
    """One non-fatal finding.

    Attributes
    ----------
    level
        Logging level name (``"WARNING"``, ``"INFO"``...).
    code
        Stable machine-readable identifier, e.g. ``"unsupported-style-element"``.
    message
        Human-readable description.
    details
        Structured ancillary data (element path, line number...).
    """

    level: str
    code: str
    message: str
    details: Dict[str, Any] = field(default_factory=dict)

    @property
    def levelno(self) -> int:
        levelno = logging.getLevelName(self.level)
        return levelno if isinstance(levelno, int) else logging.WARNING


class DiagnosticSink(Protocol):
    def emit(self, diagnostic: Diagnostic) -> None:
        ...


class CollectingSink:
    """Keeps every emitted diagnostic in memory."""

    def __init__(self) -> None:
        self.diagnostics: List[Diagnostic] = []

    def emit(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)

    def warnings(self) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.levelno >= logging.WARNING]

    def clear(self) -> None:
        self.diagnostics.clear()

    def __len__(self) -> int:
        return len(self.diagnostics)


class LoggingSink:
    """Forwards diagnostics to a :class:`logging.Logger`."""

    def __init__(self, target: Optional[logging.Logger] = None) -> None:
        self.logger = target or logger

    def emit(self, diagnostic: Diagnostic) -> None:
        self.logger.log(diagnostic.levelno, "%s: %s", diagnostic.code, diagnostic.message)


class FanOutSink:
    """Emits every diagnostic to several sinks in order."""

    def __init__(self, *sinks: Optional[DiagnosticSink]) -> None:
        self.sinks = [s for s in sinks if s is not None]

    def emit(self, diagnostic: Diagnostic) -> None:
        for sink in self.sinks:
            sink.emit(diagnostic)
