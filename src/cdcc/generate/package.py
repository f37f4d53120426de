"""Component package generator — bundles the description into a .cdcom archive.

The archive is a zip file holding the original description bytes and a
small JSON manifest with the component's identity::

    component.xml
    manifest.json
"""

from __future__ import annotations

import json
import logging
import zipfile
from typing import TYPE_CHECKING

from cdcc.exceptions import GeneratorError
from cdcc.generate.base import BaseOutputGenerator

if TYPE_CHECKING:
    from typing import BinaryIO

    from cdcc.resources import BaseResourceProvider
    from cdcc.types import Description, PreviewOptions

__all__ = ["ComponentPackageGenerator"]

logger = logging.getLogger(__name__)

DESCRIPTION_ENTRY = "component.xml"
MANIFEST_ENTRY = "manifest.json"
PACKAGE_FORMAT_VERSION = "1"


class ComponentPackageGenerator(BaseOutputGenerator):
    """Writes a ``.cdcom`` component package."""

    @property
    def file_extension(self) -> str:
        return ".cdcom"

    def generate(
        self,
        description: Description,
        resources: BaseResourceProvider,
        preview_options: PreviewOptions,
        input_stream: BinaryIO,
        output_stream: BinaryIO,
    ) -> None:
        source = input_stream.read()
        if not source:
            raise GeneratorError(
                f"No description data to package for {description.component_name}"
            )

        manifest = {
            "formatVersion": PACKAGE_FORMAT_VERSION,
            "name": description.component_name,
            "author": description.author,
            "guid": str(description.guid),
            "configurations": [c.name for c in description.configurations],
        }

        with zipfile.ZipFile(output_stream, "w", compression=zipfile.ZIP_DEFLATED) as archive:
            archive.writestr(DESCRIPTION_ENTRY, source)
            archive.writestr(MANIFEST_ENTRY, json.dumps(manifest, indent=2))

        logger.debug("Packaged %s (%d bytes of source)", description.component_name, len(source))
