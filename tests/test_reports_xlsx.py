"""Tests for the spreadsheet report renderer and report file output."""

from datetime import datetime
from io import BytesIO
from pathlib import Path

import pytest
from openpyxl import load_workbook

from fintrack.domain.models import Transaction
from fintrack.errors import ExportError
from fintrack.reports import build_xlsx_report, write_artifact

GENERATED_AT = datetime(2024, 3, 1, 9, 30)
GREEN = "FF008000"
RED = "FFCC0000"


def open_sheet(content: bytes):
    return load_workbook(BytesIO(content)).active


def amount_rows(ws) -> list:
    """Data rows: those whose column B holds a category under a header row."""
    rows = []
    in_table = False
    for row in ws.iter_rows(min_row=4):
        first = row[0].value
        if first == "Amount":
            in_table = True
            continue
        if first is None:
            in_table = False
            continue
        if in_table:
            rows.append(row)
    return rows


class TestBuildXlsxReport:
    """Tests for build_xlsx_report."""

    def test_title_and_merges(self, scenario: tuple[Transaction, ...]) -> None:
        """Should merge the title and timestamp across all columns."""
        ws = open_sheet(build_xlsx_report(scenario, GENERATED_AT))
        merged = {str(rng) for rng in ws.merged_cells.ranges}

        assert ws.title == "Transactions"
        assert ws["A1"].value == "Transaction Report"
        assert ws["A2"].value == "Generated on 2024-03-01 09:30"
        assert {"A1:D1", "A2:D2", "B4:D4", "B5:D5", "B6:D6"} <= merged

    def test_totals(self, scenario: tuple[Transaction, ...]) -> None:
        """Should write income, expense and signed balance."""
        ws = open_sheet(build_xlsx_report(scenario, GENERATED_AT))

        assert ws["A4"].value == "Total Income"
        assert float(ws["B4"].value) == pytest.approx(500)
        assert float(ws["B5"].value) == pytest.approx(150)
        assert float(ws["B6"].value) == pytest.approx(350)
        assert ws["B4"].font.color.rgb == GREEN
        assert ws["B5"].font.color.rgb == RED

    def test_sections_newest_first(self, scenario: tuple[Transaction, ...]) -> None:
        """Should order month sections by date, newest first."""
        ws = open_sheet(build_xlsx_report(scenario, GENERATED_AT))
        labels = [c.value for c in ws["A"] if c.value in ("January 2024", "February 2024")]

        assert labels == ["February 2024", "January 2024"]

    def test_rows_signed_and_coloured(self, scenario: tuple[Transaction, ...]) -> None:
        """Should sign amounts and colour rows by transaction type."""
        ws = open_sheet(build_xlsx_report(scenario, GENERATED_AT))
        rows = amount_rows(ws)

        assert len(rows) == 3
        for row in rows:
            amount = float(row[0].value)
            expected = GREEN if amount >= 0 else RED
            assert all(cell.font.color.rgb == expected for cell in row[:4])

        income = sum(float(r[0].value) for r in rows if float(r[0].value) > 0)
        expense = -sum(float(r[0].value) for r in rows if float(r[0].value) < 0)
        assert income == pytest.approx(500)
        assert expense == pytest.approx(150)

    def test_description_placeholder(self, make_transaction) -> None:
        """Should fill a missing description with a dash."""
        ws = open_sheet(build_xlsx_report([make_transaction()], GENERATED_AT))

        assert amount_rows(ws)[0][3].value == "-"

    def test_formula_like_text_stays_text(self, make_transaction) -> None:
        """Should store a description starting with "=" as a string, not a formula."""
        description = '=HYPERLINK("http://x","y")'
        ws = open_sheet(build_xlsx_report([make_transaction(description=description)], GENERATED_AT))
        cell = amount_rows(ws)[0][3]

        assert cell.data_type == "s"
        assert cell.value == description

    def test_empty(self) -> None:
        """Should render zero totals and a notice."""
        ws = open_sheet(build_xlsx_report([], GENERATED_AT))

        assert float(ws["B6"].value) == 0
        assert ws["A8"].value == "No transactions recorded."

    def test_columns_sized(self, make_transaction) -> None:
        """Should widen columns for long descriptions."""
        long_text = "Quarterly insurance premium for the car"
        ws = open_sheet(build_xlsx_report([make_transaction(description=long_text)], GENERATED_AT))

        assert ws.column_dimensions["D"].width >= len(long_text)
        assert ws.column_dimensions["B"].width >= 10


class TestWriteArtifact:
    """Tests for write_artifact."""

    def test_writes_and_creates_parents(self, tmp_path: Path) -> None:
        """Should create missing directories and write the bytes."""
        target = tmp_path / "reports" / "2024" / "report.xlsx"

        written = write_artifact(target, b"data")

        assert written == target
        assert target.read_bytes() == b"data"

    def test_replaces_existing(self, tmp_path: Path) -> None:
        """Should replace an existing file and leave no temporary files."""
        target = tmp_path / "report.pdf"
        target.write_bytes(b"old")

        write_artifact(target, b"new")

        assert target.read_bytes() == b"new"
        assert [p.name for p in tmp_path.iterdir()] == ["report.pdf"]

    def test_unwritable_target(self, tmp_path: Path) -> None:
        """Should raise ExportError when the parent is a file."""
        blocker = tmp_path / "blocker"
        blocker.write_text("x")

        with pytest.raises(ExportError):
            write_artifact(blocker / "report.pdf", b"data")
