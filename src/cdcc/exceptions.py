"""Custom exception hierarchy for cdcc."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cdcc.types import LoadIssue

__all__ = [
    "CdccError",
    "CompileError",
    "ConfigError",
    "GeneratorError",
    "LoadError",
    "ManifestError",
    "PluginError",
]


class CdccError(Exception):
    """Base exception for all cdcc errors."""


class ConfigError(CdccError):
    """Raised when configuration loading or validation fails."""


class LoadError(CdccError):
    """Raised when a component description cannot be loaded.

    Carries the issues reported by the description loader so callers can
    show every problem, not only the first one.
    """

    def __init__(self, source: str, issues: tuple[LoadIssue, ...] = ()) -> None:
        self.source = source
        self.issues = issues
        detail = "; ".join(str(issue) for issue in issues) or "unknown error"
        super().__init__(f"Failed to load {source}: {detail}")


class GeneratorError(CdccError):
    """Raised when an output generator fails to render."""


class CompileError(CdccError):
    """Raised when a compile request is invalid."""


class ManifestError(CdccError):
    """Raised when results manifest operations fail."""


class PluginError(CdccError):
    """Raised when generator registration or lookup fails."""
