"""Output fan-out — runs every requested generator against one description.

All generators share the single input stream. It is rewound before each
generator runs, so each one sees the complete original document no matter
how much the previous generator consumed.
"""

from __future__ import annotations

import io
import logging
import os
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence
    from typing import BinaryIO

    from cdcc.resources import BaseResourceProvider
    from cdcc.types import Description, OutputRequest, PreviewOptions

__all__ = ["ensure_seekable", "generate_outputs", "iter_outputs", "resolve_output_path"]

logger = logging.getLogger(__name__)


def ensure_seekable(stream: BinaryIO) -> BinaryIO:
    """Return ``stream`` if it can be rewound, otherwise an in-memory copy of it."""
    if stream.seekable():
        return stream
    logger.debug("Input stream is not seekable, buffering it in memory")
    return io.BytesIO(stream.read())


def resolve_output_path(destination: str | None, base_name: str, extension: str) -> str:
    """Work out where a generator's output goes.

    An existing directory receives ``{base_name}{extension}``; any other
    destination is used as the file path verbatim; no destination means
    ``{base_name}{extension}`` in the working directory.
    """
    auto_name = f"{base_name}{extension}"
    if destination is not None and os.path.isdir(destination):
        return os.path.join(destination, auto_name)
    return destination if destination is not None else auto_name


def iter_outputs(
    input_stream: BinaryIO,
    description: Description,
    base_name: str,
    requests: Sequence[OutputRequest],
    preview_options: PreviewOptions,
    resources: BaseResourceProvider,
) -> Iterator[tuple[str, str]]:
    """Lazily generate each requested output, yielding ``(format, path)``.

    Output *k* is written only when the caller pulls element *k*. A
    generator failure propagates out of the iterator; outputs already
    written stay on disk and later requests are never started.
    """
    for request in requests:
        generator = request.generator
        fmt = generator.format_name
        output_path = resolve_output_path(request.destination, base_name, generator.file_extension)

        with open(output_path, "wb") as output:
            logger.debug("Starting %s generation.", fmt)
            input_stream.seek(0)
            generator.generate(description, resources, preview_options, input_stream, output)
            logger.info("  %-4s -> %s", fmt, output_path)

        yield fmt, output_path


def generate_outputs(
    input_stream: BinaryIO,
    description: Description,
    base_name: str,
    requests: Sequence[OutputRequest],
    preview_options: PreviewOptions,
    resources: BaseResourceProvider,
) -> list[tuple[str, str]]:
    """Generate every requested output now and return them in request order."""
    return list(
        iter_outputs(
            input_stream,
            description,
            base_name,
            requests,
            preview_options,
            resources,
        )
    )
