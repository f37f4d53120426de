"""Tests for cdcc.ingest.component_xml — XML description loading."""

from __future__ import annotations

import io
import uuid
from pathlib import Path

import pytest

from cdcc.ingest.base import BaseDescriptionLoader
from cdcc.ingest.component_xml import XmlDescriptionLoader


def _load(text: str):
    return XmlDescriptionLoader().load(io.BytesIO(text.encode("utf-8")))


class TestLoadValid:
    def test_identity_fields(self, component_xml, widget_guid):
        result = _load(component_xml("Widget", author="Jane"))
        assert result.success
        description = result.description
        assert description is not None
        assert description.component_name == "Widget"
        assert description.author == "Jane"
        assert description.guid == uuid.UUID(widget_guid)
        assert description.additional_information == "Test component"
        assert description.version == "1.2"

    def test_metadata_excludes_identity_keys(self, component_xml):
        result = _load(component_xml("Widget", meta=(("org.example.category", "Passive"),)))
        assert result.description is not None
        assert result.description.metadata == (("org.example.category", "Passive"),)

    def test_metadata_order_preserved(self, component_xml):
        meta = (("b", "2"), ("a", "1"), ("c", "3"))
        result = _load(component_xml("Widget", meta=meta))
        assert result.description is not None
        assert [k for k, _ in result.description.metadata] == ["b", "a", "c"]

    def test_duplicate_metadata_key_last_value_wins(self, component_xml):
        meta = (("k", "first"), ("other", "x"), ("k", "second"))
        result = _load(component_xml("Widget", meta=meta))
        assert result.description is not None
        assert result.description.metadata == (("k", "second"), ("other", "x"))

    def test_configurations_in_order(self, component_xml):
        result = _load(component_xml("Gate", configurations=("AND", "OR", "XOR")))
        assert result.description is not None
        assert [c.name for c in result.description.configurations] == ["AND", "OR", "XOR"]

    def test_configuration_settings(self):
        text = """<component>
          <declaration><meta name="name" value="Gate" /></declaration>
          <configurations>
            <configuration name="AND" implements="gate-and" value="type:and" />
          </configurations>
        </component>"""
        result = _load(text)
        assert result.description is not None
        configuration = result.description.configurations[0]
        assert configuration.implements == "gate-and"
        assert configuration.settings == (("value", "type:and"),)

    def test_configurations_inside_declaration(self):
        text = """<component>
          <declaration>
            <meta name="name" value="Gate" />
            <configurations><configuration name="NAND" /></configurations>
          </declaration>
        </component>"""
        result = _load(text)
        assert result.description is not None
        assert [c.name for c in result.description.configurations] == ["NAND"]

    def test_meta_value_from_text(self):
        text = """<component>
          <declaration>
            <meta name="name">Lamp</meta>
          </declaration>
        </component>"""
        result = _load(text)
        assert result.description is not None
        assert result.description.component_name == "Lamp"

    def test_without_namespace(self):
        text = '<component><declaration><meta name="name" value="Cell" /></declaration></component>'
        assert _load(text).success

    def test_missing_guid_derived_with_warning(self, component_xml):
        first = _load(component_xml("Widget", guid=None))
        second = _load(component_xml("Widget", guid=None))
        assert first.success
        assert first.warnings
        assert first.description is not None and second.description is not None
        assert first.description.guid == second.description.guid

    def test_unknown_version_warns(self):
        text = (
            '<component version="9.9">'
            '<declaration><meta name="name" value="X" /></declaration>'
            "</component>"
        )
        result = _load(text)
        assert result.success
        assert any("9.9" in str(w) for w in result.warnings)


class TestLoadInvalid:
    def test_malformed_xml(self):
        result = _load("<component><declaration>")
        assert not result.success
        assert result.description is None
        assert "Malformed XML" in result.errors[0].message
        assert result.errors[0].line is not None

    def test_wrong_root(self):
        result = _load("<device />")
        assert not result.success
        assert "<component>" in result.errors[0].message

    def test_missing_declaration(self):
        result = _load("<component />")
        assert not result.success

    def test_missing_name(self):
        result = _load(
            '<component><declaration><meta name="author" value="A" /></declaration></component>'
        )
        assert not result.success
        assert "name" in result.errors[0].message

    def test_invalid_guid(self, component_xml):
        result = _load(component_xml("Widget", guid="not-a-guid"))
        assert not result.success
        assert "GUID" in result.errors[0].message

    def test_configuration_without_name(self):
        text = """<component>
          <declaration><meta name="name" value="Gate" /></declaration>
          <configurations><configuration /></configurations>
        </component>"""
        assert not _load(text).success

    def test_rejects_doctype(self):
        text = '<?xml version="1.0"?><!DOCTYPE x [<!ENTITY e "boom">]><component />'
        result = _load(text)
        assert not result.success
        assert "unsafe" in result.errors[0].message

    def test_rejects_doctype_after_long_prologue(self):
        padding = "<!-- " + "x" * 16384 + " -->"
        text = f'<?xml version="1.0"?>{padding}<!DOCTYPE x [<!ENTITY e "boom">]><component />'
        result = _load(text)
        assert not result.success
        assert "unsafe" in result.errors[0].message

    def test_rejects_oversized_document(self):
        loader = XmlDescriptionLoader()
        loader.MAX_FILE_SIZE = 10
        result = loader.load(io.BytesIO(b"<component>" + b" " * 20 + b"</component>"))
        assert not result.success
        assert "maximum size" in result.errors[0].message


class TestLoaderContract:
    def test_cannot_instantiate_base_loader(self):
        with pytest.raises(TypeError):
            BaseDescriptionLoader()  # type: ignore[abstract]

    def test_can_load_xml_case_insensitive(self):
        loader = XmlDescriptionLoader()
        assert loader.can_load(Path("resistor.xml")) is True
        assert loader.can_load(Path("RESISTOR.XML")) is True
        assert loader.can_load(Path("resistor.svg")) is False
