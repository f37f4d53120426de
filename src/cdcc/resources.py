"""Resource lookup handed to output generators.

Generators may ask for auxiliary files (stylesheets, fonts) by name. The
compile pipeline never inspects resources; it passes the provider through.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import BinaryIO

__all__ = ["BaseResourceProvider", "DirectoryResourceProvider", "NullResourceProvider"]

logger = logging.getLogger(__name__)


class BaseResourceProvider(ABC):
    """Named, read-only resources available while rendering."""

    @abstractmethod
    def has_resource(self, name: str) -> bool:
        """Check whether a resource with this name exists."""

    @abstractmethod
    def open_resource(self, name: str) -> BinaryIO:
        """Open a resource for binary reading.

        Raises:
            FileNotFoundError: If the resource does not exist.
        """

    def read_text(self, name: str, encoding: str = "utf-8") -> str:
        with self.open_resource(name) as f:
            return f.read().decode(encoding)


class DirectoryResourceProvider(BaseResourceProvider):
    """Resources are plain files below a root directory."""

    def __init__(self, root: Path) -> None:
        self.root = root.resolve()

    def _resolve(self, name: str) -> Path | None:
        path = (self.root / name).resolve()
        if not path.is_relative_to(self.root):
            logger.warning("Resource %r escapes %s, ignoring", name, self.root)
            return None
        return path

    def has_resource(self, name: str) -> bool:
        path = self._resolve(name)
        return path is not None and path.is_file()

    def open_resource(self, name: str) -> BinaryIO:
        path = self._resolve(name)
        if path is None or not path.is_file():
            raise FileNotFoundError(f"Resource not found: {name}")
        return path.open("rb")


class NullResourceProvider(BaseResourceProvider):
    """Provider with no resources."""

    def has_resource(self, name: str) -> bool:
        return False

    def open_resource(self, name: str) -> BinaryIO:
        raise FileNotFoundError(f"Resource not found: {name}")
