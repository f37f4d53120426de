"""Output generators — render a loaded description into output files."""

from pathlib import Path

from cdcc.generate.base import BaseOutputGenerator
from cdcc.generate.json_description import JsonDescriptionGenerator
from cdcc.generate.package import ComponentPackageGenerator
from cdcc.generate.svg import SvgPreviewGenerator
from cdcc.generate.templates import TemplateEngine
from cdcc.registry import default_registry

__all__ = [
    "BaseOutputGenerator",
    "ComponentPackageGenerator",
    "JsonDescriptionGenerator",
    "SvgPreviewGenerator",
    "TemplateEngine",
]

# Register built-in generators
default_registry.register(
    "svg",
    lambda cfg: SvgPreviewGenerator(
        template_dir=Path(cfg.resources.templates) if cfg.resources.templates else None
    ),
)
default_registry.register("json", lambda cfg: JsonDescriptionGenerator())
default_registry.register("cdcom", lambda cfg: ComponentPackageGenerator())
