"""Abstract base class for output generators."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import BinaryIO

    from cdcc.resources import BaseResourceProvider
    from cdcc.types import Description, PreviewOptions

__all__ = ["BaseOutputGenerator"]

logger = logging.getLogger(__name__)


class BaseOutputGenerator(ABC):
    """Base class for all output generators.

    Each generator produces one file format. The compile pipeline rewinds
    the input stream before every call, so generators may read it freely
    and never need to restore its position.
    """

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """File extension of the output, including the leading dot (e.g. ``".svg"``)."""

    @property
    def format_name(self) -> str:
        """Format label used in compile results: the extension without its dot."""
        return self.file_extension[1:]

    @abstractmethod
    def generate(
        self,
        description: Description,
        resources: BaseResourceProvider,
        preview_options: PreviewOptions,
        input_stream: BinaryIO,
        output_stream: BinaryIO,
    ) -> None:
        """Render ``description`` into ``output_stream``.

        Args:
            description: Loaded component description.
            resources: Resource lookup for auxiliary files.
            preview_options: Rendering hints.
            input_stream: The original description bytes, positioned at the start.
            output_stream: Writable binary stream for the output file.

        Raises:
            GeneratorError: If rendering fails.
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.file_extension!r})"
