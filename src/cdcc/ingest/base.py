"""Abstract base class for description loaders."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path
    from typing import BinaryIO

    from cdcc.types import LoadResult

__all__ = ["BaseDescriptionLoader"]

logger = logging.getLogger(__name__)


class BaseDescriptionLoader(ABC):
    """Base class for all component description loaders.

    Loaders never raise for bad documents. Problems are reported in the
    returned ``LoadResult`` so the caller decides whether to stop.
    """

    @abstractmethod
    def load(self, stream: BinaryIO) -> LoadResult:
        """Load a description from a binary stream.

        Args:
            stream: Stream positioned at the start of the document.

        Returns:
            LoadResult holding the description or the errors found.
        """

    @abstractmethod
    def supported_extensions(self) -> frozenset[str]:
        """Return the set of file extensions this loader handles.

        Extensions include the leading dot, e.g. ``{".xml"}``.
        """

    def can_load(self, path: Path) -> bool:
        """Check whether this loader can handle the given file."""
        return path.suffix.lower() in self.supported_extensions()
