"""
Structured diagnostics for recoverable failures.

Transform functions never print. Each recoverable failure (a remote fetch that
times out, an image that will not decode, an SVG that is not UTF-8) is returned
as a Diagnostic record and collected by the orchestrator, which reports them
once the run is complete.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable, List, Optional


class Severity(str, Enum):
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Diagnostic:
    """
    A single recoverable problem encountered during a run.

    Attributes:
        severity: How serious the problem is (errors never abort a run here either)
        cause: Human-readable description of what went wrong
        subject: Field the problem relates to (e.g., "link 'My Website' icon")
        reference: The raw asset reference or value involved, if any
    """

    severity: Severity
    cause: str
    subject: Optional[str] = None
    reference: Optional[str] = None

    def for_subject(self, subject: str) -> "Diagnostic":
        """Copy of this diagnostic attributed to a configuration field."""
        return replace(self, subject=subject)

    def format(self) -> str:
        parts = []
        if self.subject:
            parts.append(f"{self.subject}: ")
        parts.append(self.cause)
        if self.reference and len(self.reference) <= 120:
            parts.append(f" ({self.reference})")
        return "".join(parts)

    def __str__(self) -> str:
        return self.format()


def warning(cause: str, reference: Optional[str] = None) -> Diagnostic:
    return Diagnostic(severity=Severity.WARNING, cause=cause, reference=reference)


def count_by_severity(diagnostics: Iterable[Diagnostic], severity: Severity) -> int:
    return sum(1 for diagnostic in diagnostics if diagnostic.severity == severity)


def attribute(diagnostics: Iterable[Diagnostic], subject: str) -> List[Diagnostic]:
    """Attach a subject label to every diagnostic that has none yet."""
    return [d if d.subject else d.for_subject(subject) for d in diagnostics]
