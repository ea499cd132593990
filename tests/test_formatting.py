import io

import pytest
from pypdf import PdfWriter

from burrow.services.formatting import format_bytes, format_timestamp
from burrow.services.pdf_info import summarize_pdf


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (None, "-"),
        (0, "0 B"),
        (512, "512 B"),
        (2048, "2.00 KB"),
        (5 * 1024 * 1024, "5.00 MB"),
    ],
)
def test_format_bytes(value, expected):
    assert format_bytes(value) == expected


def test_format_timestamp_handles_missing_values():
    assert format_timestamp(0) == "Unknown"
    assert format_timestamp(-5) == "Unknown"
    assert format_timestamp(1_700_000_000).startswith("2023-11-1")


def _pdf_bytes(title: str) -> bytes:
    writer = PdfWriter()
    writer.add_blank_page(width=72, height=72)
    writer.add_metadata({"/Title": title, "/Author": "Burrow"})
    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


def test_summarize_pdf_reports_pages_and_metadata():
    info = summarize_pdf(_pdf_bytes("Quarterly report"))
    assert info["Pages"] == "1"
    assert info["Title"] == "Quarterly report"
    assert info["Author"] == "Burrow"
    assert "Excerpt" not in info


def test_summarize_pdf_tolerates_garbage():
    info = summarize_pdf(b"this is not a pdf")
    assert list(info) == ["PDF Metadata"]
    assert info["PDF Metadata"].startswith("Unavailable")
