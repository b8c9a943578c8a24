"""Tests for the plain text PDF path."""

import re

import pytest

from docsynth.config import DocSynthConfig, TextDocumentOptions
from docsynth.pdfcompiler.text_document import (
    build_text_pdf,
    build_text_pdf_file,
    layout_text_pages,
    prepare_lines,
    wrap_pdf_line,
)
from docsynth.pdfcompiler.utils import to_pdf_ascii
from tests.pdfcompiler.test_writer import xref_offsets


def content_of(data: bytes, number: int) -> str:
    match = re.search(rf"\n{number} 0 obj\n<< /Length (\d+) >>\nstream\n".encode(), data)
    length = int(match.group(1))
    return data[match.end():match.end() + length].decode("ascii")


class TestSinglePage:
    """Test suite for one-page text documents."""

    def test_escaped_title_and_lines(self):
        data = build_text_pdf("Minutes", ['He said "a(b)\\c"', "Second line"])
        runs = content_of(data, 4).split("\n")

        assert runs == [
            "BT /F1 16 Tf 50 800 Td (Minutes) Tj ET",
            'BT /F1 10 Tf 50 776 Td (He said "a\\(b\\)\\\\c") Tj ET',
            "BT /F1 10 Tf 50 762 Td (Second line) Tj ET",
        ]

    def test_object_numbers(self):
        data = build_text_pdf("Minutes", ["one"])

        assert b"2 0 obj\n<< /Type /Pages /Kids [3 0 R] /Count 1 >>" in data
        assert (b"3 0 obj\n<< /Type /Page /Parent 2 0 R /MediaBox [0 0 595 842] "
                b"/Resources << /Font << /F1 5 0 R >> >> /Contents 4 0 R >>") in data
        assert b"5 0 obj\n<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>" in data
        assert len(xref_offsets(data)) == 6

    def test_empty_lines_give_title_only_page(self):
        data = build_text_pdf("Only a title", [])
        assert content_of(data, 4) == "BT /F1 16 Tf 50 800 Td (Only a title) Tj ET"

    def test_empty_title_defaults(self):
        data = build_text_pdf("", ["x"])
        assert content_of(data, 4).startswith("BT /F1 16 Tf 50 800 Td (Document) Tj ET")

    def test_non_ascii_is_replaced(self):
        data = build_text_pdf("Zürich", ["naïve  café"])
        assert content_of(data, 4).split("\n") == [
            "BT /F1 16 Tf 50 800 Td (Z rich) Tj ET",
            "BT /F1 10 Tf 50 776 Td (na ve caf) Tj ET",
        ]


class TestPagination:
    """Test suite for lines that overflow the bottom margin."""

    def test_first_page_holds_52_lines(self):
        pages = layout_text_pages("T", [f"line {n}" for n in range(52)])
        assert len(pages) == 1
        assert pages[0].runs[-1].y == 776 - 51 * 14

    def test_overflow_continues_on_new_page(self):
        data = build_text_pdf("Long", [f"line {n}" for n in range(60)])

        assert b"/Kids [3 0 R 4 0 R] /Count 2" in data
        assert b"/Font << /F1 7 0 R >>" in data
        first = content_of(data, 5).split("\n")
        second = content_of(data, 6).split("\n")
        assert len(first) == 53
        assert second[0] == "BT /F1 10 Tf 50 800 Td (line 52) Tj ET"
        assert second[-1] == "BT /F1 10 Tf 50 702 Td (line 59) Tj ET"

    def test_lines_never_go_below_bottom_margin(self):
        pages = layout_text_pages("T", ["x"] * 200)
        assert all(run.y >= 50 for page in pages for run in page.runs)
        assert sum(len(page.runs) for page in pages) == 201

    def test_pagination_disabled_drops_overflow(self, caplog):
        options = TextDocumentOptions(paginate=False)
        pages = layout_text_pages("T", [f"line {n}" for n in range(60)], options)

        assert len(pages) == 1
        assert len(pages[0].runs) == 53
        assert "Dropped 8 line(s)" in caplog.text


class TestWrapping:
    """Test suite for line preparation."""

    def test_wrap_by_characters(self):
        assert wrap_pdf_line("a" * 100) == ["a" * 91 + "-", "a" * 9]
        assert wrap_pdf_line("one two three", max_chars=7) == ["one two", "three"]
        assert wrap_pdf_line("") == [""]

    def test_wrap_by_width(self):
        # Helvetica "a" is 5.56pt wide at 10pt; 89 fit in 495pt
        assert prepare_lines(["a" * 100]) == ["a" * 89, "a" * 11]

    def test_wrap_by_character_count(self):
        options = TextDocumentOptions(wrap_mode="chars", max_chars=10)
        assert prepare_lines(["a" * 30, "one two three"], options) == [
            "aaaaaaaaa-", "aaaaaaaaa-", "aaaaaaaaa-", "aaa", "one two", "three",
        ]

    def test_wrap_disabled(self):
        assert prepare_lines(["a" * 100], wrap=False) == ["a" * 100]

    def test_blank_lines_are_kept(self):
        assert prepare_lines(["first", "", "second"]) == ["first", "", "second"]

    @pytest.mark.parametrize("value, expected", [
        ("tab\there", "tab here"),
        ("  padded  ", "padded"),
        ("€100", "100"),
        (None, ""),
        (42, "42"),
    ])
    def test_to_pdf_ascii(self, value, expected):
        assert to_pdf_ascii(value) == expected


class TestTextFile:
    """Test suite for build_text_pdf_file."""

    def test_file_has_title_info(self):
        pdf = build_text_pdf_file("Board notes", ["a"], file_name="notes.pdf",
                                  config=DocSynthConfig(producer="tests"))

        assert pdf.name == "notes.pdf"
        assert b"/Title (Board notes) /Producer (tests)" in pdf.data
        assert b"/Info 6 0 R" in pdf.data

    def test_compression_from_config(self):
        pdf = build_text_pdf_file("T", ["a"], config=DocSynthConfig(compress_streams=True))
        assert b"/Filter /FlateDecode" in pdf.data
