"""Tests for cdcc.registry module — generator registry."""

from __future__ import annotations

import io
import uuid

import pytest

from cdcc.config import default_config
from cdcc.exceptions import PluginError
from cdcc.generate import ComponentPackageGenerator, JsonDescriptionGenerator, SvgPreviewGenerator
from cdcc.registry import GeneratorRegistry, default_registry
from cdcc.resources import NullResourceProvider
from cdcc.types import Description, PreviewOptions


class TestGeneratorRegistry:
    def test_register_and_create(self):
        registry = GeneratorRegistry()
        generator = JsonDescriptionGenerator()
        registry.register("mock", lambda cfg: generator)
        assert registry.create("mock", default_config()) is generator

    def test_create_unknown_raises(self):
        registry = GeneratorRegistry()
        with pytest.raises(PluginError, match="Unknown output format 'png'"):
            registry.create("png", default_config())

    def test_duplicate_register_raises(self):
        registry = GeneratorRegistry()
        registry.register("svg", lambda cfg: SvgPreviewGenerator())
        with pytest.raises(PluginError, match="already registered"):
            registry.register("svg", lambda cfg: SvgPreviewGenerator())

    def test_list_generators_sorted(self):
        registry = GeneratorRegistry()
        registry.register("svg", lambda cfg: SvgPreviewGenerator())
        registry.register("cdcom", lambda cfg: ComponentPackageGenerator())
        assert registry.list_generators() == ["cdcom", "svg"]

    def test_has_generator(self):
        registry = GeneratorRegistry()
        registry.register("json", lambda cfg: JsonDescriptionGenerator())
        assert registry.has_generator("json") is True
        assert registry.has_generator("svg") is False

    def test_factory_receives_config(self):
        registry = GeneratorRegistry()
        seen = []
        registry.register("json", lambda cfg: seen.append(cfg) or JsonDescriptionGenerator())
        config = default_config()
        registry.create("json", config)
        assert seen == [config]


class TestDefaultRegistry:
    def test_builtins_registered(self):
        assert {"svg", "json", "cdcom"} <= set(default_registry.list_generators())

    def test_creates_builtin_generators(self):
        config = default_config()
        assert isinstance(default_registry.create("svg", config), SvgPreviewGenerator)
        assert isinstance(default_registry.create("cdcom", config), ComponentPackageGenerator)

    def test_svg_uses_configured_template_dir(self, tmp_path):
        (tmp_path / "preview.svg.j2").write_text("custom", encoding="utf-8")
        config = default_config()
        config.resources.templates = str(tmp_path)
        generator = default_registry.create("svg", config)
        description = Description(component_name="Widget", guid=uuid.uuid4())
        output = io.BytesIO()
        generator.generate(
            description, NullResourceProvider(), PreviewOptions(), io.BytesIO(), output
        )
        assert output.getvalue() == b"custom"
