"""Jinja2 template engine for rendered outputs.

Loads templates from built-in and user-override directories. User overrides
take precedence over built-in templates in src/cdcc/templates/.
"""

from __future__ import annotations

import logging
from dataclasses import asdict
from pathlib import Path
from typing import TYPE_CHECKING

import jinja2

from cdcc.exceptions import GeneratorError

if TYPE_CHECKING:
    from _typeshed import DataclassInstance

__all__ = ["TemplateEngine"]

logger = logging.getLogger(__name__)


class TemplateEngine:
    """Jinja2 template engine with built-in and user-override support.

    Template search order:
      1. ``override_dir`` (user overrides, optional)
      2. src/cdcc/templates/ (built-in, always present)

    Args:
        override_dir: Directory whose templates replace built-in ones
            with the same name.
    """

    def __init__(self, override_dir: Path | None = None) -> None:
        from importlib.resources import files

        search_paths: list[str] = []

        if override_dir is not None:
            if override_dir.is_dir():
                search_paths.append(str(override_dir))
                logger.info("User template overrides enabled: %s", override_dir)
            else:
                logger.warning("Template override directory not found: %s", override_dir)

        builtin_dir = Path(str(files("cdcc") / "templates"))
        if not builtin_dir.is_dir():
            logger.debug("Expected template dir at: %s", builtin_dir)
            raise GeneratorError(
                "Built-in template directory not found — installation may be corrupted"
            )
        search_paths.append(str(builtin_dir))

        self._loader = jinja2.FileSystemLoader(search_paths)
        self._env = jinja2.Environment(
            loader=self._loader,
            autoescape=jinja2.select_autoescape(["svg", "svg.j2", "xml"]),
            undefined=jinja2.StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        logger.debug("TemplateEngine initialized with %d search path(s)", len(search_paths))

    def render(self, template_name: str, context: DataclassInstance) -> str:
        """Render a template with a dataclass context.

        Context is flattened via ``dataclasses.asdict()`` before passing
        to Jinja2. Nested dataclasses become dicts.

        Raises:
            GeneratorError: If the template is not found or rendering fails.
        """
        try:
            template = self._env.get_template(template_name)
        except jinja2.TemplateNotFound as e:
            raise GeneratorError(f"Template not found: {template_name}") from e

        try:
            return template.render(**asdict(context))
        except jinja2.TemplateError as e:
            raise GeneratorError(f"Failed to render template {template_name}: {e}") from e
