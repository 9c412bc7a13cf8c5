"""Tests for the report exporters."""

import csv
import json

import pytest

from cci_calculator.annexure import FormValidationError
from cci_calculator.reporting import (
    export_annexure_docx,
    export_annexure_pdf,
    export_csv,
    export_executive_summary,
    export_json,
    export_markdown,
    export_pdf,
)
from cci_calculator.reporting.templating import band_icon, safe_name

REPORT_ID = "20250331_test"


def test_safe_name():
    assert safe_name("Acme  Securities Ltd") == "Acme_Securities_Ltd"
    assert safe_name("   ") == "Organization"


def test_band_icon():
    assert band_icon(95) == "🟢"
    assert band_icon(5) == "🔴"


class TestJson:
    def test_payload(self, tmp_path, sample_parameters, sample_result):
        path = export_json(sample_result, sample_parameters, tmp_path, REPORT_ID)
        assert path.name == f"cci_report_{REPORT_ID}.json"
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["metadata"]["report_id"] == REPORT_ID
        assert data["result"]["total_score"] == round(sample_result.total_score, 2)
        assert len(data["parameters"]) == 23


class TestCsv:
    def test_three_files(self, tmp_path, sample_parameters, sample_result):
        paths = export_csv(sample_result, sample_parameters, tmp_path, REPORT_ID)
        assert [p.name for p in paths] == [
            f"parameter_scores_{REPORT_ID}.csv",
            f"category_scores_{REPORT_ID}.csv",
            f"cci_summary_{REPORT_ID}.csv",
        ]
        with open(paths[0], newline="", encoding="utf-8-sig") as fh:
            rows = list(csv.DictReader(fh))
        assert len(rows) == 23
        assert rows[0]["measure_id"] == "GV.RR.1"

        with open(paths[2], newline="", encoding="utf-8-sig") as fh:
            summary = dict(csv.reader(fh))
        assert summary["maturity_level"] == sample_result.maturity_level


class TestMarkdown:
    def test_detailed_report(self, tmp_path, sample_parameters, sample_result):
        path = export_markdown(sample_result, sample_parameters, tmp_path, REPORT_ID)
        text = path.read_text(encoding="utf-8")
        assert path.name == f"detailed_report_{REPORT_ID}.md"
        assert "Acme Securities" in text
        assert "Governance: Roles and Responsibilities" in text
        assert "RC.IM.1" in text

    def test_executive_summary(self, tmp_path, sample_parameters, sample_result):
        path = export_executive_summary(sample_result, sample_parameters, tmp_path, REPORT_ID)
        text = path.read_text(encoding="utf-8")
        assert path.name == f"executive_summary_{REPORT_ID}.md"
        assert sample_result.maturity_level in text
        assert "Next Steps" in text
        assert "Lowest Scoring Parameters" in text


class TestPdf:
    def test_detailed_pdf(self, tmp_path, sample_parameters, sample_result):
        path = export_pdf(sample_result, sample_parameters, tmp_path, REPORT_ID)
        assert path.name == "CCI_Detailed_Report_Acme_Securities_2025-03-31.pdf"
        assert path.read_bytes().startswith(b"%PDF")

    def test_annexure_pdf(self, tmp_path, sample_parameters, sample_result, valid_form):
        path = export_annexure_pdf(sample_result, sample_parameters, valid_form, tmp_path)
        assert path.name == "Annexure-K-CCI-Report_Acme_Securities.pdf"
        assert path.read_bytes().startswith(b"%PDF")

    def test_annexure_pdf_requires_valid_form(self, tmp_path, sample_parameters, sample_result, valid_form):
        valid_form.period = ""
        with pytest.raises(FormValidationError):
            export_annexure_pdf(sample_result, sample_parameters, valid_form, tmp_path)
        assert not list(tmp_path.iterdir())

    def test_markup_in_text_is_escaped(self, tmp_path, sample_parameters, sample_result):
        sample_result.organization = "A & B <Securities>"
        path = export_pdf(sample_result, sample_parameters, tmp_path, REPORT_ID)
        assert path.exists()


class TestDocx:
    def test_annexure_docx(self, tmp_path, sample_parameters, sample_result, valid_form):
        path = export_annexure_docx(sample_result, sample_parameters, valid_form, tmp_path)
        assert path.name == "Annexure-K-CCI-Report_Acme_Securities.docx"
        assert path.read_bytes().startswith(b"PK")

    def test_annexure_docx_requires_valid_form(self, tmp_path, sample_parameters, sample_result, valid_form):
        valid_form.designation = ""
        with pytest.raises(FormValidationError):
            export_annexure_docx(sample_result, sample_parameters, valid_form, tmp_path)
