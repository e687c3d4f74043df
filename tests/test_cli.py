"""Command line interface."""

import zipfile

import pytest

from html2docx import HtmlToDocx
from html2docx.cli import main
from html2docx.docx_ir import DocxArchive
from html2docx.docx_ir.base import CONTENT_TYPE
from html2docx.exceptions import RenderError


class TestCli:
    def test_convert_file(self, tmp_path, capsys):
        source = tmp_path / "page.html"
        source.write_text("<p>Hello</p>", encoding="utf-8")

        main([str(source)])

        output = tmp_path / "page.docx"
        assert output.exists()
        assert "Converted:" in capsys.readouterr().out
        assert "word/document.xml" in zipfile.ZipFile(output).namelist()

    def test_header_footer_and_margins(self, tmp_path):
        source = tmp_path / "page.html"
        source.write_text("<p>Hello</p>", encoding="utf-8")
        header = tmp_path / "header.html"
        header.write_text("<p>Report</p>", encoding="utf-8")
        output = tmp_path / "out.docx"

        main([
            str(source), "-o", str(output),
            "--header", str(header),
            "--page-number",
            "--margin-top", "1in",
            "--orientation", "landscape",
        ])

        with zipfile.ZipFile(output) as docx:
            names = docx.namelist()
            document_xml = docx.read("word/document.xml").decode("utf-8")
        assert "word/header1.xml" in names
        assert "word/footer1.xml" in names
        assert 'w:top="1440"' in document_xml
        assert 'w:orient="landscape"' in document_xml

    def test_missing_input(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc:
            main([str(tmp_path / "missing.html")])
        assert exc.value.code == 1
        assert "Error:" in capsys.readouterr().err


class TestFacade:
    def test_convert_bytes(self):
        data = HtmlToDocx({"title": "T"}).convert_bytes("<p>x</p>")
        assert data[:2] == b"PK"

    def test_convert_writes_file(self, tmp_path):
        path = HtmlToDocx().convert("<p>x</p>", tmp_path / "x.docx")
        assert path.read_bytes()[:2] == b"PK"

    def test_archive_closed_when_conversion_fails(self, monkeypatch):
        closed = []
        original_close = DocxArchive.close

        def record_close(archive):
            closed.append(archive)
            original_close(archive)

        async def fail(archive, html, options=None, header_html=None, footer_html=None):
            archive.write("word/document.xml", b"<x/>", CONTENT_TYPE["document"])
            raise RenderError("broken")

        monkeypatch.setattr(DocxArchive, "close", record_close)
        monkeypatch.setattr("html2docx.core.add_files_to_container", fail)

        with pytest.raises(RenderError):
            HtmlToDocx().convert_bytes("<p>x</p>")
        assert len(closed) == 1
