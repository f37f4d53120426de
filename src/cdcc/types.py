"""Pipeline data contracts for cdcc.

Frozen dataclasses that flow between compile stages:
  bytes → LoadResult(Description) → (format, path) outputs → CompileResult
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cdcc.generate.base import BaseOutputGenerator

__all__ = [
    "ICON_METADATA_KEY",
    "CompileResult",
    "ComponentConfiguration",
    "Description",
    "LoadIssue",
    "LoadResult",
    "OutputRequest",
    "PreviewOptions",
]

ICON_METADATA_KEY = "org.circuit-diagram.icon-svg"


@dataclass(frozen=True)
class ComponentConfiguration:
    """A named variant of a component (e.g. a pin count or orientation)."""

    name: str
    implements: str = ""
    settings: tuple[tuple[str, str], ...] = ()


@dataclass(frozen=True)
class Description:
    """A parsed component description document."""

    component_name: str
    guid: uuid.UUID
    author: str = ""
    additional_information: str = ""
    metadata: tuple[tuple[str, str], ...] = ()
    configurations: tuple[ComponentConfiguration, ...] = ()
    version: str = ""

    def metadata_dict(self) -> dict[str, str]:
        """Return an insertion-ordered copy of the metadata entries."""
        return dict(self.metadata)


@dataclass(frozen=True)
class LoadIssue:
    """A single problem reported while loading a description."""

    message: str
    line: int | None = None

    def __str__(self) -> str:
        if self.line is None:
            return self.message
        return f"line {self.line}: {self.message}"


@dataclass(frozen=True)
class LoadResult:
    """Outcome of loading a description: the description or the reasons it failed."""

    description: Description | None = None
    errors: tuple[LoadIssue, ...] = ()
    warnings: tuple[LoadIssue, ...] = ()

    @property
    def success(self) -> bool:
        return self.description is not None and not self.errors


@dataclass(frozen=True)
class PreviewOptions:
    """Rendering hints handed unchanged to every output generator."""

    size: float = 60.0
    width: int = 640
    height: int = 480
    center: bool = True
    crop: bool = False
    horizontal: bool = True
    scale: float = 1.0
    grid: bool = False
    configuration: str | None = None
    properties: tuple[tuple[str, str], ...] = ()


@dataclass(frozen=True)
class OutputRequest:
    """A generator paired with where its output should go.

    ``destination`` may name an existing directory, a file path, or be
    ``None`` to write ``{base_name}{extension}`` into the working directory.
    """

    generator: BaseOutputGenerator
    destination: str | None = None


@dataclass(frozen=True)
class CompileResult:
    """Summary of compiling one description file."""

    author: str
    component_name: str
    guid: uuid.UUID
    success: bool
    additional_information: str
    input: str
    metadata: dict[str, str] = field(default_factory=dict)
    outputs: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, object]:
        return {
            "author": self.author,
            "name": self.component_name,
            "guid": str(self.guid),
            "success": self.success,
            "additionalInformation": self.additional_information,
            "input": self.input,
            "metadata": dict(self.metadata),
            "outputs": dict(self.outputs),
        }

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> CompileResult:
        metadata = dict(data.get("metadata") or {})  # type: ignore[call-overload]
        outputs = dict(data.get("outputs") or {})  # type: ignore[call-overload]
        return cls(
            author=str(data.get("author", "")),
            component_name=str(data["name"]),
            guid=uuid.UUID(str(data["guid"])),
            success=bool(data.get("success", False)),
            additional_information=str(data.get("additionalInformation", "")),
            input=str(data["input"]),
            metadata={str(k): str(v) for k, v in metadata.items()},
            outputs={str(k): str(v) for k, v in outputs.items()},
        )
