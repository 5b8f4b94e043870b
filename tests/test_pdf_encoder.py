"""Tests for the single-page PDF writer."""

from __future__ import annotations

import re

import pytest

from campusmeal.receipt.pdf import build_text_stream, encode, escape_text, lines_per_page


def _xref_offsets(pdf: bytes) -> list[int]:
    # "startxref" also contains "xref"; the table starts on its own line
    start = pdf.index(b"\nxref\n") + 1
    rows = pdf[start:].split(b"\n")
    # rows[0] = "xref", rows[1] = "0 6", rows[2] = free entry
    return [int(row[:10]) for row in rows[3:8]]


def _startxref(pdf: bytes) -> int:
    match = re.search(rb"startxref\n(\d+)\n%%EOF$", pdf)
    assert match is not None
    return int(match.group(1))


def test_escape_text_escapes_backslash_before_parentheses() -> None:
    assert escape_text("a(b)c") == "a\\(b\\)c"
    assert escape_text("C:\\tmp") == "C:\\\\tmp"
    assert escape_text("\\(") == "\\\\\\("


def test_text_stream_places_lines_top_down() -> None:
    stream = build_text_stream(["A", "B"])

    assert stream == "BT\n/F1 14 Tf\n1 0 0 1 72 780 Tm\n(A) Tj\n1 0 0 1 72 762 Tm\n(B) Tj\nET"


def test_empty_document_has_empty_text_object() -> None:
    pdf = encode([])

    assert b"stream\nBT\n/F1 14 Tf\nET\nendstream" in pdf
    assert b"/Length 15 >>" in pdf


def test_document_structure() -> None:
    pdf = encode(["Hello"])

    assert pdf.startswith(b"%PDF-1.4\n")
    assert pdf.endswith(b"%%EOF")
    assert b"<< /Type /Catalog /Pages 2 0 R >>" in pdf
    assert b"<< /Type /Pages /Count 1 /Kids [3 0 R] >>" in pdf
    assert b"/MediaBox [0 0 612 792]" in pdf
    assert b"/BaseFont /Helvetica" in pdf
    assert b"1 0 0 1 72 780 Tm\n(Hello) Tj" in pdf
    assert b"trailer\n<< /Size 6 /Root 1 0 R >>" in pdf
    assert b"xref\n0 6\n0000000000 65535 f \n" in pdf


@pytest.mark.parametrize(
    "lines",
    [
        [],
        ["Smart Campus Restaurant", "Meal Receipt", "Price: $8.00"],
        ["\u00e9(\\)", "\u2603", "a\nb"],
    ],
)
def test_xref_offsets_point_at_objects(lines: list[str]) -> None:
    pdf = encode(lines)

    offsets = _xref_offsets(pdf)

    assert len(offsets) == 5
    for number, offset in enumerate(offsets, start=1):
        assert pdf[offset:].startswith(f"{number} 0 obj\n".encode("ascii"))
    assert _startxref(pdf) == pdf.index(b"\nxref\n") + 1


@pytest.mark.parametrize("lines", [["Line one", "Line (two)"], ["\u00e9(\\)", "\u2603", "a\nb"]])
def test_stream_length_matches_content(lines: list[str]) -> None:
    pdf = encode(lines)

    match = re.search(rb"<< /Length (\d+) >>\nstream\n(.*?)\nendstream", pdf, re.DOTALL)
    assert match is not None
    assert int(match.group(1)) == len(match.group(2))


def test_parentheses_are_escaped_in_output() -> None:
    pdf = encode(["50% (cash)"])

    assert rb"(50% \(cash\)) Tj" in pdf


def test_output_is_deterministic() -> None:
    lines = ["Meal Type: Lunch", "Price: $8.00"]

    assert encode(lines) == encode(list(lines))


def test_characters_outside_font_encoding_are_replaced() -> None:
    pdf = encode(["Caf\u00e9 \u2603"])

    assert b"(Caf\xe9 ?) Tj" in pdf


def test_lines_past_the_page_keep_descending() -> None:
    pdf = encode([f"line {i}" for i in range(50)])

    assert b"1 0 0 1 72 -102 Tm\n(line 49) Tj" in pdf


def test_lines_per_page() -> None:
    assert lines_per_page() == 44


def test_backslash_and_parentheses_escaped_once() -> None:
    pdf = encode(["Price: $5 (approx.) \\ note"])

    assert rb"(Price: $5 \(approx.\) \\ note) Tj" in pdf
