"""Compile orchestrator for cdcc.

Composes loader → output fan-out → icon lookup into a single
"compile one description file" operation.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from typing import TYPE_CHECKING

from cdcc.compile.fanout import ensure_seekable, generate_outputs
from cdcc.compile.icons import find_svg_icon
from cdcc.compile.paths import clean_path
from cdcc.exceptions import CompileError, LoadError
from cdcc.ingest.component_xml import XmlDescriptionLoader
from cdcc.resources import NullResourceProvider
from cdcc.types import ICON_METADATA_KEY, CompileResult, OutputRequest

if TYPE_CHECKING:
    from collections.abc import Sequence

    from cdcc.generate.base import BaseOutputGenerator
    from cdcc.ingest.base import BaseDescriptionLoader
    from cdcc.resources import BaseResourceProvider
    from cdcc.types import PreviewOptions

__all__ = ["CompileRunner", "as_requests", "check_unique_formats"]

logger = logging.getLogger(__name__)


def as_requests(
    formats: Sequence[OutputRequest] | Mapping[BaseOutputGenerator, str | None],
) -> list[OutputRequest]:
    """Normalize a generator → destination mapping into ordered requests."""
    if isinstance(formats, Mapping):
        return [OutputRequest(generator, destination) for generator, destination in formats.items()]
    return list(formats)


def check_unique_formats(requests: Sequence[OutputRequest]) -> None:
    """Reject requests whose format labels collide in the outputs mapping.

    Raises:
        CompileError: If two requests share a format name.
    """
    seen: set[str] = set()
    for request in requests:
        name = request.generator.format_name
        if name in seen:
            raise CompileError(f"Output format '{name}' requested more than once")
        seen.add(name)


class CompileRunner:
    """Compiles component description files into output artifacts.

    The loader and resource provider are injected via the constructor,
    making the runner testable with mock implementations. A runner keeps
    no per-file state, so one instance can compile any number of files.

    Usage::

        runner = CompileRunner(resources=DirectoryResourceProvider(Path("res")))
        result = runner.compile_one(
            "components/resistor.xml",
            PreviewOptions(),
            [OutputRequest(SvgPreviewGenerator(), "out/")],
        )
    """

    def __init__(
        self,
        resources: BaseResourceProvider | None = None,
        loader: BaseDescriptionLoader | None = None,
    ) -> None:
        self.resources = resources or NullResourceProvider()
        self.loader = loader or XmlDescriptionLoader()

    def compile_one(
        self,
        input_file: str | os.PathLike[str],
        preview_options: PreviewOptions,
        formats: Sequence[OutputRequest] | Mapping[BaseOutputGenerator, str | None],
    ) -> CompileResult:
        """Load one description file and produce every requested output.

        Args:
            input_file: Path to the description file.
            preview_options: Rendering hints passed to every generator.
            formats: Generators paired with their destinations, in order.

        Returns:
            CompileResult summarizing the component and its outputs.

        Raises:
            CompileError: If two requests share a format name.
            LoadError: If the description cannot be loaded.
            OSError: If the input cannot be read or an output cannot be written.
        """
        input_file = os.fspath(input_file)
        logger.info("%s", input_file)
        requests = as_requests(formats)
        check_unique_formats(requests)

        with open(input_file, "rb") as raw:
            stream = ensure_seekable(raw)
            result = self.loader.load(stream)
            if not result.success or result.description is None:
                raise LoadError(input_file, result.errors)
            description = result.description

            base_name = os.path.splitext(os.path.basename(input_file))[0]
            outputs = generate_outputs(
                stream,
                description,
                base_name,
                requests,
                preview_options,
                self.resources,
            )

        metadata = description.metadata_dict()
        svg_icon = find_svg_icon(os.path.dirname(input_file), description)
        if svg_icon is not None:
            metadata[ICON_METADATA_KEY] = svg_icon

        return CompileResult(
            author=description.author,
            component_name=description.component_name,
            guid=description.guid,
            success=True,
            additional_information=description.additional_information,
            input=clean_path(input_file),
            metadata=metadata,
            outputs=dict(outputs),
        )
