"""
Shared utilities for Genkan.

Common functionality used across contexts:
- Logger setup with provenance
- Structured diagnostics for recoverable failures
- Timestamps for log directories
"""

from genkan.utils.diagnostics import Diagnostic, Severity
from genkan.utils.timestamp import now

__all__ = ["Diagnostic", "Severity", "now"]
