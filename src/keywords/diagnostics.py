from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, List, Optional, Protocol
import logging

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Diagnostic:
    """A value accepted only through string coercion."""
    declared_type: str
    value: Any
    path: Optional[str] = None
    message: str = "Incompatible data type provided on request body"

    def to_dict(self) -> dict:
        return {
            "path": self.path,
            "data_type": self.declared_type,
            "value": self.value,
            "message": self.message,
        }


class DiagnosticSink(Protocol):
    """
    Side channel for coercion diagnostics. Advisory only: whatever a sink does
    (or raises) never changes a validation decision.
    """
    def emit(self, diagnostic: Diagnostic) -> None: ...


class LoggingSink:
    """Sends each diagnostic to a stdlib logger at INFO."""

    def __init__(self, log: Optional[logging.Logger] = None, level: int = logging.INFO):
        self.log = log or logger
        self.level = level

    def emit(self, diagnostic: Diagnostic) -> None:
        self.log.log(
            self.level,
            "%s (path=%s, data_type=%s, value=%r)",
            diagnostic.message, diagnostic.path, diagnostic.declared_type, diagnostic.value,
            extra={
                "path": diagnostic.path,
                "data_type": diagnostic.declared_type,
                "value": diagnostic.value,
            },
        )


@dataclass
class CollectingSink:
    diagnostics: List[Diagnostic] = field(default_factory=list)

    def emit(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)

    def clear(self) -> None:
        self.diagnostics.clear()
