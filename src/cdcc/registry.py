"""Generator registry for cdcc.

Maps format names to factory functions that create output generators.
Example: ``registry.create("svg", config)`` → ``SvgPreviewGenerator``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from cdcc.exceptions import PluginError

if TYPE_CHECKING:
    from collections.abc import Callable

    from cdcc.config import CdccConfig
    from cdcc.generate.base import BaseOutputGenerator

__all__ = ["GeneratorRegistry", "default_registry"]

logger = logging.getLogger(__name__)


class GeneratorRegistry:
    """Config-driven factory that maps a format name → generator instance.

    When ``auto_discover`` is ``True``, the first lookup triggers a lazy
    import of ``cdcc.generate`` so that built-in generators are registered
    without requiring an explicit import.

    Usage::

        registry = GeneratorRegistry()
        registry.register("svg", lambda cfg: SvgPreviewGenerator())
        generator = registry.create("svg", config)
    """

    def __init__(self, *, auto_discover: bool = False) -> None:
        self._factories: dict[str, Callable[[CdccConfig], BaseOutputGenerator]] = {}
        self._auto_discover = auto_discover
        self._discovered = False

    def register(
        self,
        name: str,
        factory: Callable[[CdccConfig], BaseOutputGenerator],
    ) -> None:
        """Register a generator factory.

        Args:
            name: Format name (e.g. "svg", "json").
            factory: Callable that accepts ``CdccConfig`` and returns a generator.

        Raises:
            PluginError: If a generator with the same name already exists.
        """
        if name in self._factories:
            raise PluginError(f"Generator '{name}' already registered")

        self._factories[name] = factory
        logger.debug("Registered generator %s", name)

    def _ensure_discovered(self) -> None:
        """Lazily import built-in generator modules on first use."""
        if self._discovered or not self._auto_discover:
            return
        self._discovered = True
        import cdcc.generate  # noqa: F401  (registers built-in generators)

    def create(self, name: str, config: CdccConfig) -> BaseOutputGenerator:
        """Create a generator instance from the registry.

        Raises:
            PluginError: If no generator is registered under ``name``.
        """
        self._ensure_discovered()

        if name not in self._factories:
            raise PluginError(
                f"Unknown output format '{name}'. Available: {sorted(self._factories)}"
            )

        logger.debug("Creating generator %s", name)
        return self._factories[name](config)

    def list_generators(self) -> list[str]:
        """List registered format names."""
        self._ensure_discovered()
        return sorted(self._factories)

    def has_generator(self, name: str) -> bool:
        """Check whether a format is registered."""
        self._ensure_discovered()
        return name in self._factories


default_registry = GeneratorRegistry(auto_discover=True)
