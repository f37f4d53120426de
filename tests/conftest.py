"""Shared fixtures for cdcc tests."""

from __future__ import annotations

from typing import TYPE_CHECKING
from xml.sax.saxutils import quoteattr

import pytest

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

WIDGET_GUID = "1b2f6a4e-6f0e-4a58-9e7b-7a3f1f0c2d11"


def build_component_xml(
    name: str,
    *,
    author: str = "Test Author",
    guid: str | None = WIDGET_GUID,
    configurations: tuple[str, ...] = (),
    meta: tuple[tuple[str, str], ...] = (),
) -> str:
    lines = [
        '<?xml version="1.0" encoding="utf-8"?>',
        '<component version="1.2" '
        'xmlns="http://schemas.circuit-diagram.org/circuitDiagramDocument/2012/component/xml">',
        "  <declaration>",
        f'    <meta name="name" value={quoteattr(name)} />',
        f'    <meta name="author" value={quoteattr(author)} />',
    ]
    if guid is not None:
        lines.append(f'    <meta name="guid" value={quoteattr(guid)} />')
    lines.append('    <meta name="additionalinformation" value="Test component" />')
    for key, value in meta:
        lines.append(f"    <meta name={quoteattr(key)} value={quoteattr(value)} />")
    lines.append("  </declaration>")
    if configurations:
        lines.append("  <configurations>")
        for configuration in configurations:
            lines.append(f"    <configuration name={quoteattr(configuration)} />")
        lines.append("  </configurations>")
    lines.append("  <render />")
    lines.append("</component>")
    return "\n".join(lines) + "\n"


@pytest.fixture
def write_component(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing a component description into ``tmp_path``."""

    def _write(filename: str, name: str, **kwargs: object) -> Path:
        path = tmp_path / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        text = build_component_xml(name, **kwargs)  # type: ignore[arg-type]
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def widget_xml(write_component: Callable[..., Path]) -> Path:
    """A component named "Widget" with no configurations."""
    return write_component("widget.xml", "Widget")


@pytest.fixture
def widget_guid() -> str:
    """The GUID written into generated descriptions unless overridden."""
    return WIDGET_GUID


@pytest.fixture
def component_xml() -> Callable[..., str]:
    """Builder returning description XML text, see ``build_component_xml``."""
    return build_component_xml
