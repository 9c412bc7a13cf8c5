"""Tests for the command-line interface."""

import json

import pytest

from cci_calculator.__main__ import main
from cci_calculator.annexure import FormStore


@pytest.fixture
def store_dir(tmp_path):
    return tmp_path / "store"


def _set_form(store_dir, *extra):
    return main([
        "annexure", "--store-dir", str(store_dir), "set",
        "--organization", "Acme Securities",
        "--entity-type", "Stock Broker",
        "--entity-category", "Major",
        "--rationale", "Qualified RE based on client count",
        "--period", "April 2024 - March 2025",
        "--signatory-name", "A. Kumar",
        "--designation", "MD",
        *extra,
    ])


class TestCalculate:
    def test_sample_run_writes_reports(self, tmp_path, capsys):
        out = tmp_path / "out"
        rc = main([
            "calculate", "--sample", "--seed", "3",
            "--organization", "Acme", "--date", "2025-03-31",
            "--output-dir", str(out), "--formats", "json", "csv",
        ])
        assert rc == 0
        names = sorted(p.name for p in out.iterdir())
        assert len(names) == 4
        assert any(n.startswith("cci_report_") for n in names)
        assert "CCI Score:" in capsys.readouterr().out

    def test_input_file_metadata_used(self, tmp_path):
        main(["sample", "--output", str(tmp_path / "in.json"), "--seed", "1", "--organization", "Acme"])
        out = tmp_path / "out"
        rc = main(["calculate", "-i", str(tmp_path / "in.json"), "-o", str(out), "--formats", "json"])
        assert rc == 0
        (report,) = out.glob("cci_report_*.json")
        assert json.loads(report.read_text())["result"]["organization"] == "Acme"

    def test_missing_input_file(self, tmp_path, capsys):
        rc = main(["calculate", "-i", str(tmp_path / "nope.json"), "-o", str(tmp_path)])
        assert rc == 1
        assert "❌" in capsys.readouterr().out

    def test_bad_input_file(self, tmp_path, capsys):
        path = tmp_path / "in.json"
        path.write_text(json.dumps({"parameters": [{"measure_id": "NOPE"}]}))
        assert main(["calculate", "-i", str(path), "-o", str(tmp_path / "out")]) == 1
        assert "Unknown measure_id" in capsys.readouterr().out

    def test_non_string_measure_id_reported(self, tmp_path, capsys):
        path = tmp_path / "in.json"
        path.write_text(json.dumps({"parameters": [{"measure_id": ["GV"]}]}))
        assert main(["calculate", "-i", str(path), "-o", str(tmp_path / "out")]) == 1
        assert "measure_id must be a string" in capsys.readouterr().out

    def test_nan_input_reported(self, tmp_path, capsys):
        path = tmp_path / "in.json"
        path.write_text(json.dumps({"parameters": [{"measure_id": "GV.RR.1", "numerator": "nan"}]}))
        assert main(["calculate", "-i", str(path), "-o", str(tmp_path / "out")]) == 1
        assert "finite number" in capsys.readouterr().out

    def test_input_source_required(self):
        with pytest.raises(SystemExit):
            main(["calculate"])


def test_template_writes_blank_input(tmp_path):
    path = tmp_path / "tpl.json"
    assert main(["template", "--output", str(path)]) == 0
    data = json.loads(path.read_text())
    assert len(data["parameters"]) == 23
    assert all(entry["denominator"] == 0 for entry in data["parameters"])


def test_no_command_prints_usage(capsys):
    assert main([]) == 1
    assert "Usage" in capsys.readouterr().out


class TestAnnexure:
    def test_set_and_show(self, store_dir, capsys):
        assert _set_form(store_dir) == 0
        assert FormStore(store_dir).load("Acme Securities") is not None

        assert main(["annexure", "--store-dir", str(store_dir), "show"]) == 0
        assert "Form is complete" in capsys.readouterr().out

    def test_set_without_organization_fails(self, store_dir):
        assert main(["annexure", "--store-dir", str(store_dir), "set", "--designation", "CEO"]) == 1

    def test_incomplete_form_lists_missing_fields(self, store_dir, capsys):
        main(["annexure", "--store-dir", str(store_dir), "set", "--organization", "Acme"])
        assert "period" in capsys.readouterr().out

    def test_export_writes_documents_and_clears_cache(self, tmp_path, store_dir):
        _set_form(store_dir)
        out = tmp_path / "out"
        rc = main([
            "annexure", "--store-dir", str(store_dir), "export",
            "--sample", "--seed", "5", "--output-dir", str(out),
        ])
        assert rc == 0
        assert (out / "Annexure-K-CCI-Report_Acme_Securities.pdf").exists()
        assert (out / "Annexure-K-CCI-Report_Acme_Securities.docx").exists()
        assert FormStore(store_dir).load() is None

    def test_export_with_incomplete_form_keeps_cache(self, tmp_path, store_dir, capsys):
        main(["annexure", "--store-dir", str(store_dir), "set", "--organization", "Acme"])
        rc = main([
            "annexure", "--store-dir", str(store_dir), "export",
            "--sample", "--output-dir", str(tmp_path / "out"),
        ])
        assert rc == 1
        assert "incomplete" in capsys.readouterr().out
        assert FormStore(store_dir).load() is not None

    def test_export_for_other_organization_fails(self, tmp_path, store_dir, capsys):
        _set_form(store_dir)
        rc = main([
            "annexure", "--store-dir", str(store_dir), "export",
            "--sample", "--organization", "Other Org", "--output-dir", str(tmp_path / "out"),
        ])
        assert rc == 1
        assert "No saved Annexure-K form" in capsys.readouterr().out

    def test_clear(self, store_dir):
        _set_form(store_dir)
        assert main(["annexure", "--store-dir", str(store_dir), "clear"]) == 0
        assert FormStore(store_dir).load() is None
