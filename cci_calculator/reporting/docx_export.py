"""
Word exporter — Annexure-K form with CCI score and parameter details (python-docx).
"""

from __future__ import annotations

import logging
from pathlib import Path

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH

from ..annexure import (
    ANNEXURE_SUBTITLE,
    BACKGROUND,
    METHODOLOGY,
    SIGNATORY_DECLARATION,
    AnnexureKForm,
)
from ..scoring.models import CCIResult, Parameter
from .templating import safe_name

logger = logging.getLogger("cci_calculator.reporting")


def _key_value_table(doc, rows: list[tuple[str, str]]):
    table = doc.add_table(rows=0, cols=2)
    table.style = "Table Grid"
    for label, value in rows:
        cells = table.add_row().cells
        cells[0].text = label
        cells[1].text = value
    return table


def export_annexure_docx(
    result: CCIResult,
    parameters: list[Parameter],
    form: AnnexureKForm,
    output_dir: Path,
) -> Path:
    """
    Write the Annexure-K form as a Word document.
    Raises FormValidationError if *form* is invalid.
    """
    form.ensure_valid()
    output_dir.mkdir(parents=True, exist_ok=True)
    filepath = output_dir / f"Annexure-K-CCI-Report_{safe_name(form.organization)}.docx"

    doc = Document()
    doc.add_heading("Annexure-K Form", level=1).alignment = WD_ALIGN_PARAGRAPH.CENTER
    doc.add_paragraph(ANNEXURE_SUBTITLE).alignment = WD_ALIGN_PARAGRAPH.CENTER

    doc.add_heading("Organization Information", level=2)
    _key_value_table(doc, [
        ("Name of the Organisation", form.organization),
        ("Entity Type", form.entity_type),
        ("Entity Category (as per CSCRF)", form.entity_category),
        ("Period", form.period),
        ("Rationale for the Category", form.rationale),
        ("Name of the Auditing Organisation", form.auditing_organization or "Not Applicable"),
    ])

    doc.add_heading("CCI Score and Parameters", level=2)
    _key_value_table(doc, [
        ("CCI Score", f"{result.total_score:.2f}"),
        ("Maturity Level", result.maturity_level),
        ("Compliance Status", result.compliance_status),
    ])

    doc.add_heading("Parameter Details", level=2)
    scores = {ps.measure_id: ps for ps in result.parameter_scores}
    table = doc.add_table(rows=1, cols=4)
    table.style = "Table Grid"
    for cell, heading in zip(table.rows[0].cells, ("Parameter", "Score", "Weight", "Weighted")):
        cell.text = ""
        cell.paragraphs[0].add_run(heading).bold = True
    for p in parameters:
        ps = scores[p.measure_id]
        cells = table.add_row().cells
        cells[0].text = f"{p.measure_id}: {p.title}"
        cells[1].text = f"{ps.score:.2f}"
        cells[2].text = f"{p.weightage:g}%"
        cells[3].text = f"{ps.weighted_score:.2f}"

    doc.add_heading("Cyber Capability Index (CCI)", level=2)
    doc.add_paragraph("A. Background").runs[0].bold = True
    doc.add_paragraph(BACKGROUND)
    doc.add_paragraph("B. Index Calculation Methodology").runs[0].bold = True
    for line in METHODOLOGY:
        doc.add_paragraph(line, style="List Number")

    doc.add_heading("Authorised Signatory Declaration", level=2)
    doc.add_paragraph(SIGNATORY_DECLARATION)
    _key_value_table(doc, [
        ("Name of the Signatory", form.signatory_name),
        ("Designation", form.designation),
        ("Signature", ""),
        ("Company Stamp", ""),
    ])

    doc.save(str(filepath))
    logger.info(f"Wrote Word document {filepath}")
    return filepath
