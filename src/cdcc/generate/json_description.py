"""JSON description generator — writes the loaded description as JSON."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from cdcc.exceptions import GeneratorError
from cdcc.generate.base import BaseOutputGenerator

if TYPE_CHECKING:
    from typing import BinaryIO

    from cdcc.resources import BaseResourceProvider
    from cdcc.types import Description, PreviewOptions

__all__ = ["JsonDescriptionGenerator", "description_to_dict"]

logger = logging.getLogger(__name__)


def description_to_dict(description: Description) -> dict[str, object]:
    return {
        "name": description.component_name,
        "author": description.author,
        "guid": str(description.guid),
        "version": description.version,
        "additionalInformation": description.additional_information,
        "metadata": dict(description.metadata),
        "configurations": [
            {
                "name": c.name,
                "implements": c.implements,
                "settings": dict(c.settings),
            }
            for c in description.configurations
        ],
    }


class JsonDescriptionGenerator(BaseOutputGenerator):
    """Writes identity, metadata and configurations as indented JSON."""

    def __init__(self, indent: int = 2) -> None:
        self.indent = indent

    @property
    def file_extension(self) -> str:
        return ".json"

    def generate(
        self,
        description: Description,
        resources: BaseResourceProvider,
        preview_options: PreviewOptions,
        input_stream: BinaryIO,
        output_stream: BinaryIO,
    ) -> None:
        try:
            text = json.dumps(description_to_dict(description), indent=self.indent)
        except (TypeError, ValueError) as e:
            raise GeneratorError(f"Failed to serialize {description.component_name}: {e}") from e
        output_stream.write((text + "\n").encode("utf-8"))
