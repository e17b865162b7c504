import re

from pdf_generator import PDFGenerator, _paragraph_markup, generate_cover_letter_pdf


def test_generates_pdf_file(tmp_path):
    output = tmp_path / "out" / "cover-letter.pdf"
    letter = "Dear Hiring Manager,\n\nI build things & ship them <fast>.\n\nSincerely,\nJane Doe"

    assert generate_cover_letter_pdf(letter, str(output)) is True
    assert output.read_bytes().startswith(b"%PDF")


def test_long_letter_spans_multiple_pages(tmp_path):
    output = tmp_path / "long.pdf"
    letter = "\n\n".join(["A fairly long paragraph about measurable impact. " * 12] * 30)

    assert PDFGenerator().generate_cover_letter_pdf(letter, str(output)) is True
    page_counts = [int(n) for n in re.findall(rb"/Count (\d+)", output.read_bytes())]
    assert max(page_counts) >= 2


def test_unwritable_path_returns_false(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("not a directory")

    assert generate_cover_letter_pdf("Letter", str(blocker / "cover-letter.pdf")) is False


def test_markup_escapes_and_keeps_line_breaks():
    assert _paragraph_markup("Sincerely,\nJane <J&J>") == "Sincerely,<br/>Jane &lt;J&amp;J&gt;"
