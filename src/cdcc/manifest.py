"""Results manifest for cdcc.

Records the outcome of a compile run as JSON so packaging and reporting
tools can pick up the produced files and component metadata.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from cdcc.exceptions import ManifestError
from cdcc.types import CompileResult

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

__all__ = ["ResultsManifest", "load_results", "save_results"]

logger = logging.getLogger(__name__)

SCHEMA_VERSION = "1"


@dataclass
class ResultsManifest:
    """All compile results from one run."""

    schema_version: str = SCHEMA_VERSION
    generated: str = ""
    components: list[CompileResult] = field(default_factory=list)


def save_results(results: Iterable[CompileResult], path: Path) -> ResultsManifest:
    """Save compile results to a JSON file."""
    manifest = ResultsManifest(
        generated=datetime.now(UTC).isoformat(),
        components=list(results),
    )
    data = {
        "schema_version": manifest.schema_version,
        "generated": manifest.generated,
        "components": [r.to_dict() for r in manifest.components],
    }
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
        logger.info("Saved results manifest to %s (%d components)", path, len(manifest.components))
    except OSError as e:
        logger.error("Failed to save results manifest to %s: %s", path, e)
        raise ManifestError(f"Failed to save results manifest to {path}: {e}") from e
    return manifest


def load_results(path: Path) -> ResultsManifest:
    """Load compile results from a JSON file."""
    if not path.exists():
        raise ManifestError(f"Results manifest not found: {path}")

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        logger.error("Failed to load results manifest from %s: %s", path, e)
        raise ManifestError(f"Failed to load results manifest from {path}: {e}") from e

    try:
        components = [CompileResult.from_dict(c) for c in data.get("components", [])]
    except (KeyError, TypeError, ValueError) as e:
        raise ManifestError(f"Invalid component entry in {path}: {e}") from e

    return ResultsManifest(
        schema_version=str(data.get("schema_version", SCHEMA_VERSION)),
        generated=str(data.get("generated", "")),
        components=components,
    )
