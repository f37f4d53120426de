"""Tests for cdcc.manifest module — results manifest."""

from __future__ import annotations

import json
import uuid
from typing import TYPE_CHECKING

import pytest

from cdcc.exceptions import ManifestError
from cdcc.manifest import load_results, save_results
from cdcc.types import ICON_METADATA_KEY, CompileResult

if TYPE_CHECKING:
    from pathlib import Path


def _result(name: str = "Resistor") -> CompileResult:
    return CompileResult(
        author="Circuit Diagram",
        component_name=name,
        guid=uuid.UUID("dab6bd6e-e7d6-4b0f-9b2d-6d0c0b4d8b3a"),
        success=True,
        additional_information="",
        input=f"components/{name.lower()}.xml",
        metadata={ICON_METADATA_KEY: f"components/{name.lower()}.svg"},
        outputs={"svg": f"out/{name.lower()}.svg"},
    )


class TestSaveResults:
    def test_writes_json(self, tmp_path: Path):
        path = tmp_path / "results.json"
        save_results([_result()], path)
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["schema_version"] == "1"
        assert data["generated"]
        component = data["components"][0]
        assert component["name"] == "Resistor"
        assert component["guid"] == "dab6bd6e-e7d6-4b0f-9b2d-6d0c0b4d8b3a"
        assert component["outputs"] == {"svg": "out/resistor.svg"}

    def test_creates_parent_dirs(self, tmp_path: Path):
        path = tmp_path / "a" / "b" / "results.json"
        save_results([], path)
        assert path.exists()

    def test_round_trip(self, tmp_path: Path):
        path = tmp_path / "results.json"
        results = [_result("Resistor"), _result("Capacitor")]
        save_results(results, path)
        assert load_results(path).components == results


class TestLoadResults:
    def test_missing_file_raises(self, tmp_path: Path):
        with pytest.raises(ManifestError, match="not found"):
            load_results(tmp_path / "nope.json")

    def test_invalid_json_raises(self, tmp_path: Path):
        path = tmp_path / "results.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ManifestError, match="Failed to load"):
            load_results(path)

    def test_invalid_component_raises(self, tmp_path: Path):
        path = tmp_path / "results.json"
        path.write_text(json.dumps({"components": [{"name": "X"}]}), encoding="utf-8")
        with pytest.raises(ManifestError, match="Invalid component entry"):
            load_results(path)
