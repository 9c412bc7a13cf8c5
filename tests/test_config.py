"""Tests for configuration loading."""

import json
from datetime import date
from pathlib import Path

from cci_calculator.config import REPORT_FORMATS, CalculatorConfig, OutputConfig


def test_defaults():
    config = CalculatorConfig()
    assert config.organization == "Your Organization"
    assert config.assessment_date == date.today().isoformat()
    assert config.output.formats == REPORT_FORMATS
    assert config.output.report_dir.name == "cci_output"
    assert not config.verbose


def test_output_config_fields():
    assert sorted(vars(OutputConfig())) == ["base_dir", "formats"]


def test_output_formats_not_shared():
    a, b = OutputConfig(), OutputConfig()
    a.formats.remove("pdf")
    assert "pdf" in b.formats


def test_from_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({
        "organization": "Acme Securities",
        "assessment_date": "2025-03-31",
        "output": {"base_dir": str(tmp_path / "out"), "formats": ["json"], "colour": "red"},
        "form_store_dir": str(tmp_path / "store"),
        "verbose": True,
    }))
    config = CalculatorConfig.from_file(path)
    assert config.organization == "Acme Securities"
    assert config.assessment_date == "2025-03-31"
    assert config.output.formats == ["json"]
    assert config.output.report_dir == tmp_path / "out"
    assert config.form_store_dir == Path(tmp_path / "store")
    assert config.verbose


def test_create_directories(tmp_path):
    output = OutputConfig(base_dir=str(tmp_path / "a" / "b"))
    output.create_directories()
    assert output.report_dir.is_dir()
