"""Package assembly: parts, relationships, content types."""

import asyncio

import pytest

from html2docx.docx_ir import DocxArchive, add_files_to_container
from html2docx.docx_ir.base import CONTENT_TYPE, NS, REL_TYPE
from html2docx.docx_ir.components.package.writer import PackageWriter
from html2docx.docx_ir.models import ArchivePart
from html2docx.exceptions import PackageError

from tests.helpers import CT_NS, REL_NS, W, build_docx, read_xml

BASE_PARTS = {
    "_rels/.rels",
    "docProps/core.xml",
    "word/theme/theme1.xml",
    "word/document.xml",
    "word/fontTable.xml",
    "word/styles.xml",
    "word/numbering.xml",
    "word/settings.xml",
    "word/webSettings.xml",
    "word/_rels/document.xml.rels",
    "[Content_Types].xml",
}


def _relationships(docx, name):
    root = read_xml(docx, name)
    return {
        rel.get("Id"): (rel.get("Type"), rel.get("Target"), rel.get("TargetMode"))
        for rel in root.findall("pr:Relationship", REL_NS)
    }


def _w_attr(element, name):
    return element.get(f"{{{NS['w']}}}{name}")


class TestPartSet:
    def test_minimal_document(self):
        docx = build_docx("<p>Hello</p>")
        assert set(docx.namelist()) == BASE_PARTS

    def test_content_types_written_last(self):
        docx = build_docx("<p>Hello</p>")
        assert docx.namelist()[-1] == "[Content_Types].xml"

    def test_header_and_footer_parts(self):
        docx = build_docx("<p>Body</p>", {"header": True, "footer": True})
        names = set(docx.namelist())
        assert names == BASE_PARTS | {"word/header1.xml", "word/footer1.xml"}

    def test_body_text(self):
        docx = build_docx("<p>Hello</p>")
        root = read_xml(docx, "word/document.xml")
        texts = [t.text for t in root.iter(f"{{{NS['w']}}}t")]
        assert texts == ["Hello"]


class TestRelationships:
    def test_root_relationships(self):
        rels = _relationships(build_docx("<p>x</p>"), "_rels/.rels")
        assert rels["rId1"] == (REL_TYPE["officeDocument"], "word/document.xml", None)
        assert rels["rId2"] == (REL_TYPE["coreProperties"], "docProps/core.xml", None)

    def test_fixed_document_relationships(self):
        rels = _relationships(build_docx("<p>x</p>"), "word/_rels/document.xml.rels")
        assert rels["rId1"][1] == "styles.xml"
        assert rels["rId2"][1] == "numbering.xml"
        assert rels["rId3"][1] == "settings.xml"
        assert rels["rId4"][1] == "webSettings.xml"
        assert rels["rId5"][1] == "fontTable.xml"
        assert rels["rId6"] == (REL_TYPE["theme"], "theme/theme1.xml", None)

    def test_header_footer_ids_continue_sequence(self):
        docx = build_docx("<p>x</p>", {"header": True, "footer": True})
        rels = _relationships(docx, "word/_rels/document.xml.rels")
        assert rels["rId6"] == (REL_TYPE["header"], "header1.xml", None)
        assert rels["rId7"] == (REL_TYPE["footer"], "footer1.xml", None)
        assert rels["rId8"][1] == "theme/theme1.xml"

        sect_pr = read_xml(docx, "word/document.xml").find("w:body/w:sectPr", W)
        header_ref = sect_pr.find("w:headerReference", W)
        footer_ref = sect_pr.find("w:footerReference", W)
        assert header_ref.get(f"{{{NS['r']}}}id") == "rId6"
        assert footer_ref.get(f"{{{NS['r']}}}id") == "rId7"

    def test_internal_targets_exist(self):
        docx = build_docx("<p>x</p>", {"header": True, "footer": True})
        names = set(docx.namelist())
        for _, target, mode in _relationships(docx, "word/_rels/document.xml.rels").values():
            if mode != "External":
                assert f"word/{target}" in names

    def test_body_hyperlink_is_external(self):
        docx = build_docx('<p><a href="https://example.com">link</a></p>')
        rels = _relationships(docx, "word/_rels/document.xml.rels")
        assert rels["rId6"] == (REL_TYPE["hyperlink"], "https://example.com", "External")

        link = read_xml(docx, "word/document.xml").find(".//w:hyperlink", W)
        assert link.get(f"{{{NS['r']}}}id") == "rId6"

    def test_header_hyperlink_uses_header_scope(self):
        docx = build_docx(
            "<p>x</p>",
            {"header": True},
            header_html='<p><a href="https://example.com/h">home</a></p>',
        )
        assert "word/_rels/header1.xml.rels" in docx.namelist()
        rels = _relationships(docx, "word/_rels/header1.xml.rels")
        assert rels == {"rId1": (REL_TYPE["hyperlink"], "https://example.com/h", "External")}

    def test_footer_without_links_has_no_rels(self):
        docx = build_docx("<p>x</p>", {"footer": True})
        assert "word/_rels/footer1.xml.rels" not in docx.namelist()


class TestContentTypes:
    def test_overrides_cover_every_non_default_part_once(self):
        docx = build_docx("<p>x</p>", {"header": True, "footer": True})
        root = read_xml(docx, "[Content_Types].xml")

        defaults = {d.get("Extension"): d.get("ContentType") for d in root.findall("ct:Default", CT_NS)}
        assert defaults == {"rels": CONTENT_TYPE["rels"], "xml": CONTENT_TYPE["xml"]}

        overrides = [o.get("PartName") for o in root.findall("ct:Override", CT_NS)]
        assert len(overrides) == len(set(overrides))

        expected = {
            f"/{name}" for name in docx.namelist()
            if not name.endswith(".rels") and name != "[Content_Types].xml"
        }
        assert set(overrides) == expected

    def test_override_types(self):
        docx = build_docx("<p>x</p>", {"footer": True})
        root = read_xml(docx, "[Content_Types].xml")
        types = {o.get("PartName"): o.get("ContentType") for o in root.findall("ct:Override", CT_NS)}
        assert types["/word/document.xml"] == CONTENT_TYPE["document"]
        assert types["/word/footer1.xml"] == CONTENT_TYPE["footer"]
        assert types["/docProps/core.xml"] == CONTENT_TYPE["coreProperties"]

    def test_plain_xml_part_uses_default(self):
        parts = [ArchivePart("custom/data.xml", CONTENT_TYPE["xml"])]
        assert PackageWriter().override_parts(parts) == []


class TestFooterPagination:
    def test_page_number_footer(self):
        docx = build_docx("<p>Body</p>", {"footer": True, "page_number": True})
        raw = docx.read("word/footer1.xml").decode("utf-8")
        assert "Page 1" not in raw

        root = read_xml(docx, "word/footer1.xml")
        instructions = [el.text for el in root.iter(f"{{{NS['w']}}}instrText")]
        assert instructions == ["PAGE", "NUMPAGES"]
        assert root.findall(".//w:r//w:r", W) == []

    def test_custom_footer_placeholder(self):
        docx = build_docx("<p>x</p>", {"footer": True}, footer_html="<p>Page</p>")
        root = read_xml(docx, "word/footer1.xml")
        assert len(list(root.iter(f"{{{NS['w']}}}instrText"))) == 2

    def test_footer_without_token_unchanged(self):
        docx = build_docx("<p>x</p>", {"footer": True}, footer_html="<p>Confidential</p>")
        root = read_xml(docx, "word/footer1.xml")
        assert list(root.iter(f"{{{NS['w']}}}instrText")) == []
        assert [t.text for t in root.iter(f"{{{NS['w']}}}t")] == ["Confidential"]

    @pytest.mark.parametrize(
        "footer_html",
        [
            '<p>Page 1 <span style="font-family: Pagella">c</span></p>',
            '<p>Page 1 <a href="#Pagetop">top</a></p>',
        ],
    )
    def test_token_in_markup_after_placeholder(self, footer_html):
        docx = build_docx("<p>x</p>", {"footer": True}, footer_html=footer_html)
        raw = docx.read("word/footer1.xml").decode("utf-8")
        assert "Page 1" not in raw

        root = read_xml(docx, "word/footer1.xml")
        instructions = [el.text for el in root.iter(f"{{{NS['w']}}}instrText")]
        assert instructions == ["PAGE", "NUMPAGES"]
        assert root.findall(".//w:r//w:r", W) == []

    def test_legacy_separator_spelling(self):
        docx = build_docx(
            "<p>x</p>",
            {"footer": True, "page_number": True, "legacy_field_char_spelling": True},
        )
        raw = docx.read("word/footer1.xml").decode("utf-8")
        assert 'w:fldCharType="seperate"' in raw

    def test_default_header_is_empty_paragraph(self):
        docx = build_docx("<p>x</p>", {"header": True})
        root = read_xml(docx, "word/header1.xml")
        assert len(root.findall("w:p", W)) == 1
        assert list(root.iter(f"{{{NS['w']}}}t")) == []


class TestSectionProperties:
    def test_margins_written_to_page_margins(self):
        docx = build_docx("<p>x</p>", {"margins": {"top": "1in", "left": "2cm"}})
        pg_mar = read_xml(docx, "word/document.xml").find(".//w:sectPr/w:pgMar", W)
        assert _w_attr(pg_mar, "top") == "1440"
        assert _w_attr(pg_mar, "left") == "1140"
        assert _w_attr(pg_mar, "right") == "1800"

    def test_landscape(self):
        docx = build_docx("<p>x</p>", {"orientation": "landscape"})
        pg_sz = read_xml(docx, "word/document.xml").find(".//w:sectPr/w:pgSz", W)
        assert _w_attr(pg_sz, "w") == "15840"
        assert _w_attr(pg_sz, "h") == "12240"
        assert _w_attr(pg_sz, "orient") == "landscape"

    def test_title_page_and_line_numbers(self):
        docx = build_docx("<p>x</p>", {"skip_first_header_footer": True, "line_number": True})
        sect_pr = read_xml(docx, "word/document.xml").find(".//w:sectPr", W)
        assert sect_pr.find("w:titlePg", W) is not None
        assert sect_pr.find("w:lnNumType", W) is not None


class TestOptions:
    def test_decode_unicode(self):
        docx = build_docx("<p>&amp;lt;caf&amp;#233;&amp;gt;</p>", {"decode_unicode": True})
        root = read_xml(docx, "word/document.xml")
        assert [t.text for t in root.iter(f"{{{NS['w']}}}t")] == ["<café>"]

    def test_decode_unicode_in_header_and_footer(self):
        docx = build_docx(
            "<p>x</p>",
            {"header": True, "footer": True, "decode_unicode": True},
            header_html="<p>&amp;lt;head&amp;gt;</p>",
            footer_html="<p>&amp;#169; ACME</p>",
        )
        header = read_xml(docx, "word/header1.xml")
        footer = read_xml(docx, "word/footer1.xml")
        assert [t.text for t in header.iter(f"{{{NS['w']}}}t")] == ["<head>"]
        assert [t.text for t in footer.iter(f"{{{NS['w']}}}t")] == ["© ACME"]

    def test_font_and_size_in_styles(self):
        docx = build_docx("<p>x</p>", {"font": "Arial", "font_size": "12pt"})
        styles = read_xml(docx, "word/styles.xml")
        rpr = styles.find("w:docDefaults/w:rPrDefault/w:rPr", W)
        assert _w_attr(rpr.find("w:rFonts", W), "ascii") == "Arial"
        assert _w_attr(rpr.find("w:sz", W), "val") == "24"

        fonts = read_xml(docx, "word/fontTable.xml")
        assert [_w_attr(font, "name") for font in fonts.findall("w:font", W)] == ["Arial"]

    def test_core_properties(self):
        docx = build_docx("<p>x</p>", {"title": "Report", "keywords": ["a", "b"]})
        core = read_xml(docx, "docProps/core.xml")
        assert core.find(f"{{{NS['dc']}}}title").text == "Report"
        assert core.find(f"{{{NS['cp']}}}keywords").text == "a, b"


class TestArchive:
    def test_duplicate_part_rejected(self):
        archive = DocxArchive()
        archive.write("word/document.xml", b"<x/>", CONTENT_TYPE["document"])
        with pytest.raises(PackageError):
            archive.write("word/document.xml", b"<x/>", CONTENT_TYPE["document"])

    def test_archive_cannot_be_reused(self):
        archive = DocxArchive()
        asyncio.run(add_files_to_container(archive, "<p>x</p>"))
        with pytest.raises(PackageError):
            asyncio.run(add_files_to_container(archive, "<p>y</p>"))
