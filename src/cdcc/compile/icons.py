"""Icon lookup — finds an SVG icon that sits next to a description file.

Icons follow a naming convention based on the component name and, when the
component declares configurations, the configuration names::

    resistor.svg                    (no configurations)
    logic_gate--and.svg             (one file per configuration)
"""

from __future__ import annotations

import logging
import os
import posixpath
import re
from typing import TYPE_CHECKING

from cdcc.compile.paths import clean_path

if TYPE_CHECKING:
    from cdcc.types import Description

__all__ = ["find_svg_icon", "icon_candidates", "sanitize_name"]

logger = logging.getLogger(__name__)

_NON_SLUG_RE = re.compile(r"[^a-z0-9]+")


def sanitize_name(name: str) -> str:
    """Turn a display name into a file-name slug.

    ``"My Component!! v2"`` → ``"my_component_v2"``. Only a single trailing
    underscore is stripped; a leading one is kept.
    """
    result = _NON_SLUG_RE.sub("_", name.lower())
    if result.endswith("_"):
        result = result[:-1]
    return result


def icon_candidates(description: Description) -> list[str]:
    """Return icon file names to probe, in priority order.

    Components without configurations have exactly one candidate. With
    configurations there is one candidate per configuration and the bare
    component name is not considered.
    """
    slug = sanitize_name(description.component_name)
    if not description.configurations:
        return [f"{slug}.svg"]
    return [f"{slug}--{sanitize_name(c.name)}.svg" for c in description.configurations]


def find_svg_icon(directory: str, description: Description) -> str | None:
    """Locate the SVG icon for ``description`` inside ``directory``.

    Args:
        directory: Directory containing the description file. An empty
            string means the current working directory.
        description: Loaded component description.

    Returns:
        Normalized path of the first candidate that exists, or ``None``.
    """
    directory = clean_path(directory)
    probe_dir = directory or "."

    for icon in icon_candidates(description):
        if os.path.isfile(os.path.join(probe_dir, icon)):
            path = posixpath.join(directory, icon)
            logger.debug("Found icon for %s: %s", description.component_name, path)
            return path

    logger.debug("No icon found for %s in %s", description.component_name, probe_dir)
    return None
