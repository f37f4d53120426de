"""SVG preview generator — renders a labelled preview card of a component."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from cdcc.generate.base import BaseOutputGenerator
from cdcc.generate.templates import TemplateEngine

if TYPE_CHECKING:
    from pathlib import Path
    from typing import BinaryIO

    from cdcc.resources import BaseResourceProvider
    from cdcc.types import Description, PreviewOptions

__all__ = ["PreviewContext", "SvgPreviewGenerator"]

logger = logging.getLogger(__name__)

STYLESHEET_RESOURCE = "preview.css"
_MARGIN = 10.0
_LINE_HEIGHT = 16.0
_GRID_SPACING = 10


@dataclass(frozen=True)
class ConfigurationLabel:
    name: str
    active: bool = False


@dataclass(frozen=True)
class PreviewContext:
    """Everything the preview template needs, already laid out."""

    component_name: str
    author: str
    width: float
    height: float
    scale: float
    box_x: float
    box_y: float
    box_width: float
    box_height: float
    label_x: float
    label_y: float
    line_height: float
    configurations: tuple[ConfigurationLabel, ...] = ()
    grid_lines_x: tuple[float, ...] = ()
    grid_lines_y: tuple[float, ...] = ()
    stylesheet: str = ""


def _grid(extent: float) -> tuple[float, ...]:
    return tuple(float(x) for x in range(_GRID_SPACING, int(extent), _GRID_SPACING))


def build_preview_context(
    description: Description,
    options: PreviewOptions,
    stylesheet: str = "",
) -> PreviewContext:
    """Lay out the preview card for ``description``.

    The symbol box is ``2 * size`` by ``size`` (swapped when vertical). A
    cropped preview shrinks the canvas to the box plus labels; otherwise
    the canvas uses the requested width and height.
    """
    box_w, box_h = options.size * 2, options.size
    if not options.horizontal:
        box_w, box_h = box_h, box_w

    labels = tuple(
        ConfigurationLabel(c.name, active=c.name == options.configuration)
        for c in description.configurations
    )
    label_block = _LINE_HEIGHT * (2 + len(labels))

    if options.crop:
        width = box_w + 2 * _MARGIN
        height = box_h + label_block + 3 * _MARGIN
    else:
        width, height = float(options.width), float(options.height)

    if options.center:
        box_x = (width - box_w) / 2
        box_y = max(_MARGIN, (height - box_h - label_block) / 2)
    else:
        box_x, box_y = _MARGIN, _MARGIN

    return PreviewContext(
        component_name=description.component_name,
        author=description.author,
        width=width,
        height=height,
        scale=options.scale,
        box_x=box_x,
        box_y=box_y,
        box_width=box_w,
        box_height=box_h,
        label_x=box_x,
        label_y=box_y + box_h + _MARGIN + _LINE_HEIGHT,
        line_height=_LINE_HEIGHT,
        configurations=labels,
        grid_lines_x=_grid(width) if options.grid else (),
        grid_lines_y=_grid(height) if options.grid else (),
        stylesheet=stylesheet,
    )


class SvgPreviewGenerator(BaseOutputGenerator):
    """Renders an SVG preview using the ``preview.svg.j2`` template.

    A ``preview.css`` resource, when available, is embedded as the
    document stylesheet.
    """

    TEMPLATE = "preview.svg.j2"

    def __init__(self, template_dir: Path | None = None) -> None:
        self._engine = TemplateEngine(template_dir)

    @property
    def file_extension(self) -> str:
        return ".svg"

    def generate(
        self,
        description: Description,
        resources: BaseResourceProvider,
        preview_options: PreviewOptions,
        input_stream: BinaryIO,
        output_stream: BinaryIO,
    ) -> None:
        stylesheet = ""
        if resources.has_resource(STYLESHEET_RESOURCE):
            stylesheet = resources.read_text(STYLESHEET_RESOURCE)

        context = build_preview_context(description, preview_options, stylesheet)
        rendered = self._engine.render(self.TEMPLATE, context)
        output_stream.write(rendered.encode("utf-8"))
        logger.debug(
            "Rendered %s preview at %gx%g",
            description.component_name,
            context.width,
            context.height,
        )
