"""HTML tree rendering into WordprocessingML blocks."""

import asyncio

import pytest
from lxml import etree

from html2docx.docx_ir import DocxDocument, DocxRenderer, convert_html, resolve_document_options
from html2docx.docx_ir.base import NS

W = {"w": NS["w"]}


def render(html, options=None, scope="document"):
    document = DocxDocument(resolve_document_options(options))
    blocks = asyncio.run(DocxRenderer(document).render(convert_html(html), scope))
    return document, blocks


def val(element, path):
    found = element.find(path, W)
    return None if found is None else found.get(f"{{{NS['w']}}}val")


def texts(element):
    return [t.text for t in element.iter(f"{{{NS['w']}}}t")]


class TestParagraphs:
    def test_plain_paragraph(self):
        _, blocks = render("<p>Hello</p>")
        assert len(blocks) == 1
        assert blocks[0].tag == f"{{{NS['w']}}}p"
        assert texts(blocks[0]) == ["Hello"]

    @pytest.mark.parametrize("level", range(1, 7))
    def test_headings(self, level):
        _, blocks = render(f"<h{level}>Title</h{level}>")
        assert val(blocks[0], "w:pPr/w:pStyle") == f"Heading{level}"

    def test_alignment(self):
        _, blocks = render('<p style="text-align: justify">x</p><p align="center">y</p>')
        assert val(blocks[0], "w:pPr/w:jc") == "both"
        assert val(blocks[1], "w:pPr/w:jc") == "center"

    def test_blockquote(self):
        _, blocks = render("<blockquote><p>quoted</p></blockquote>")
        assert val(blocks[0], "w:pPr/w:pStyle") == "Quote"

    def test_whitespace_collapses(self):
        _, blocks = render("<p>  Hello \n  <b>big</b>   world  </p>")
        assert texts(blocks[0]) == ["Hello ", "big", " world"]

    def test_whitespace_only_text_between_blocks_is_dropped(self):
        _, blocks = render("<div>\n  <p>a</p>\n  <p>b</p>\n</div>")
        assert [texts(block) for block in blocks] == [["a"], ["b"]]

    def test_empty_paragraph_kept(self):
        _, blocks = render("<p></p>")
        assert len(blocks) == 1
        assert texts(blocks[0]) == []

    def test_empty_div_renders_nothing(self):
        _, blocks = render("<div></div>")
        assert blocks == []

    def test_line_break(self):
        _, blocks = render("<p>a<br>b</p>")
        assert len(blocks[0].findall(".//w:br", W)) == 1
        assert texts(blocks[0]) == ["a", "b"]

    def test_control_characters_removed(self):
        _, blocks = render("<p>tab\x0bhere\x01</p>")
        assert texts(blocks[0]) == ["tab", "here"]
        assert len(blocks[0].findall(".//w:br", W)) == 1

    def test_preformatted_keeps_whitespace(self):
        document, blocks = render("<pre>line1\n  line2</pre>")
        assert texts(blocks[0]) == ["line1", "  line2"]
        assert len(blocks[0].findall(".//w:br", W)) == 1
        fonts = blocks[0].find(".//w:rPr/w:rFonts", W)
        assert fonts.get(f"{{{NS['w']}}}ascii") == "Courier New"
        assert "Courier New" in document.fonts

    def test_horizontal_rule(self):
        _, blocks = render("<hr>")
        assert blocks[0].find("w:pPr/w:pBdr/w:bottom", W) is not None

    def test_images_and_comments_skipped(self):
        _, blocks = render('<p>a<img src="x.png"><!-- note -->b</p>')
        assert texts(blocks[0]) == ["a", "b"]
        assert blocks[0].find(".//w:drawing", W) is None

    def test_page_break_after(self):
        _, blocks = render('<p style="page-break-after: always">a</p><p>b</p>')
        assert len(blocks) == 3
        br = blocks[1].find(".//w:br", W)
        assert br.get(f"{{{NS['w']}}}type") == "page"

    def test_page_break_class(self):
        _, blocks = render('<div class="page-break"></div><p>b</p>')
        assert blocks[0].find(".//w:br", W).get(f"{{{NS['w']}}}type") == "page"

    def test_page_break_before(self):
        _, blocks = render('<p style="page-break-before: always">a</p>')
        assert blocks[0].find("w:pPr/w:pageBreakBefore", W) is not None


class TestRunFormatting:
    def test_tags(self):
        _, blocks = render("<p><strong>b</strong><em>i</em><u>u</u><s>s</s><sup>2</sup><sub>x</sub></p>")
        runs = blocks[0].findall("w:r", W)
        assert runs[0].find("w:rPr/w:b", W) is not None
        assert runs[1].find("w:rPr/w:i", W) is not None
        assert val(runs[2], "w:rPr/w:u") == "single"
        assert runs[3].find("w:rPr/w:strike", W) is not None
        assert val(runs[4], "w:rPr/w:vertAlign") == "superscript"
        assert val(runs[5], "w:rPr/w:vertAlign") == "subscript"

    def test_nested_formatting_accumulates(self):
        _, blocks = render("<p><b><i>both</i></b></p>")
        run = blocks[0].find("w:r", W)
        assert run.find("w:rPr/w:b", W) is not None
        assert run.find("w:rPr/w:i", W) is not None

    def test_inline_css(self):
        _, blocks = render(
            '<p><span style="color: #f00; font-size: 12pt; background-color: rgb(255, 255, 0)">x</span></p>'
        )
        run = blocks[0].find("w:r", W)
        assert val(run, "w:rPr/w:color") == "FF0000"
        assert val(run, "w:rPr/w:sz") == "24"
        assert run.find("w:rPr/w:shd", W).get(f"{{{NS['w']}}}fill") == "FFFF00"

    def test_css_weight_and_decoration(self):
        _, blocks = render(
            '<p><span style="font-weight: 700; font-style: italic; text-decoration: underline line-through">x</span></p>'
        )
        rpr = blocks[0].find("w:r/w:rPr", W)
        assert rpr.find("w:b", W) is not None
        assert rpr.find("w:i", W) is not None
        assert rpr.find("w:u", W) is not None
        assert rpr.find("w:strike", W) is not None

    def test_font_family_registered(self):
        document, blocks = render("<p><span style=\"font-family: 'Arial', sans-serif\">x</span></p>")
        fonts = blocks[0].find("w:r/w:rPr/w:rFonts", W)
        assert fonts.get(f"{{{NS['w']}}}ascii") == "Arial"
        assert document.fonts == ["Times New Roman", "Arial"]

    def test_font_tag(self):
        _, blocks = render('<p><font color="navy" size="4">x</font></p>')
        run = blocks[0].find("w:r", W)
        assert val(run, "w:rPr/w:color") == "000080"
        assert val(run, "w:rPr/w:sz") == "28"


class TestHyperlinks:
    def test_external_link(self):
        document, blocks = render('<p>see <a href="https://example.com">site</a></p>')
        link = blocks[0].find("w:hyperlink", W)
        rel_id = link.get(f"{{{NS['r']}}}id")
        assert rel_id == "rId6"
        assert val(link, "w:r/w:rPr/w:rStyle") == "Hyperlink"
        rel = document.document_relationships()[-1]
        assert (rel.id, rel.target, rel.target_mode) == ("rId6", "https://example.com", "External")

    def test_each_link_gets_relationship(self):
        document, _ = render('<p><a href="https://a.org">a</a> <a href="https://b.org">b</a></p>')
        targets = [rel.target for rel in document.document_relationships()[5:]]
        assert targets == ["https://a.org", "https://b.org"]

    def test_link_with_formatting_stays_in_one_hyperlink(self):
        _, blocks = render('<p><a href="https://a.org">plain <b>bold</b></a></p>')
        links = blocks[0].findall("w:hyperlink", W)
        assert len(links) == 1
        assert texts(links[0]) == ["plain ", "bold"]

    def test_anchor_link(self):
        document, blocks = render('<p><a href="#top">up</a></p>')
        link = blocks[0].find("w:hyperlink", W)
        assert link.get(f"{{{NS['w']}}}anchor") == "top"
        assert len(document.document_relationships()) == 5

    def test_link_registered_in_owning_scope(self):
        document, _ = render('<p><a href="https://a.org">a</a></p>', scope="footer1")
        scope = document.registry.find("footer1")
        assert [rel.target for rel in scope.relationships] == ["https://a.org"]
        assert scope.relationships[0].id == "rId1"


class TestLists:
    def test_bullet_list(self):
        document, blocks = render("<ul><li>a</li><li>b</li></ul>")
        assert len(blocks) == 2
        for block in blocks:
            assert val(block, "w:pPr/w:pStyle") == "ListParagraph"
            assert val(block, "w:pPr/w:numPr/w:numId") == "1"
            assert val(block, "w:pPr/w:numPr/w:ilvl") == "0"
        assert [d.kind for d in document.lists.lists] == ["bullet"]

    def test_nested_list_levels(self):
        document, blocks = render("<ol><li>a<ul><li>b</li></ul></li><li>c</li></ol>")
        numbering = [
            (val(block, "w:pPr/w:numPr/w:numId"), val(block, "w:pPr/w:numPr/w:ilvl"))
            for block in blocks
        ]
        assert numbering == [("1", "0"), ("2", "1"), ("1", "0")]
        assert [d.kind for d in document.lists.lists] == ["ordered", "bullet"]

    def test_each_list_gets_own_instance(self):
        document, _ = render("<ol><li>a</li></ol><ol><li>b</li></ol>")
        assert [d.num_id for d in document.lists.lists] == [1, 2]

    def test_list_item_paragraph_numbered(self):
        _, blocks = render("<ul><li><p>a</p></li></ul>")
        assert len(blocks) == 1
        assert val(blocks[0], "w:pPr/w:numPr/w:numId") == "1"

    def test_ordered_list_type(self):
        document, _ = render('<ol type="a"><li>x</li></ol>')
        numbering = etree.fromstring(document.generate_numbering_xml())
        assert val(numbering, "w:abstractNum/w:lvl/w:numFmt") == "lowerLetter"

    def test_default_ordered_style_option(self):
        document, _ = render(
            "<ol><li>x</li></ol>",
            {"numbering": {"default_ordered_list_style_type": "upper-roman"}},
        )
        numbering = etree.fromstring(document.generate_numbering_xml())
        assert val(numbering, "w:abstractNum/w:lvl/w:numFmt") == "upperRoman"

    def test_numbering_part_structure(self):
        document, _ = render("<ul><li>a</li></ul><ol><li>b</li></ol>")
        numbering = etree.fromstring(document.generate_numbering_xml())
        tags = [etree.QName(child).localname for child in numbering]
        assert tags == ["abstractNum", "abstractNum", "num", "num"]


class TestTables:
    def test_header_row_and_colspan(self):
        _, blocks = render(
            "<table><thead><tr><th>A</th><th>B</th></tr></thead>"
            "<tbody><tr><td colspan=\"2\">C</td></tr></tbody></table>"
        )
        tbl = blocks[0]
        assert tbl.tag == f"{{{NS['w']}}}tbl"
        assert len(tbl.findall("w:tblGrid/w:gridCol", W)) == 2

        rows = tbl.findall("w:tr", W)
        assert rows[0].find("w:trPr/w:tblHeader", W) is not None
        assert rows[0].find("w:tc//w:b", W) is not None
        assert len(rows[1].findall("w:tc", W)) == 1
        assert val(rows[1], "w:tc/w:tcPr/w:gridSpan") == "2"

    def test_rowspan(self):
        _, blocks = render(
            '<table><tr><td rowspan="2">A</td><td>B</td></tr><tr><td>C</td></tr></table>'
        )
        rows = blocks[0].findall("w:tr", W)
        first_cells = [row.findall("w:tc", W)[0] for row in rows]
        assert val(first_cells[0], "w:tcPr/w:vMerge") == "restart"
        assert first_cells[1].find("w:tcPr/w:vMerge", W) is not None
        assert val(first_cells[1], "w:tcPr/w:vMerge") is None
        assert texts(rows[1]) == ["C"]

    def test_every_cell_ends_with_paragraph(self):
        _, blocks = render("<table><tr><td></td><td><table><tr><td>x</td></tr></table></td></tr></table>")
        for cell in blocks[0].findall("w:tr/w:tc", W):
            assert cell[-1].tag == f"{{{NS['w']}}}p"

    def test_cant_split_rows(self):
        _, blocks = render("<table><tr><td>x</td></tr></table>", {"table": {"row": {"cant_split": True}}})
        assert blocks[0].find("w:tr/w:trPr/w:cantSplit", W) is not None

    def test_table_without_cells_skipped(self):
        _, blocks = render("<table></table>")
        assert blocks == []


class TestHtmlTree:
    def test_empty_html(self):
        _, blocks = render("")
        assert blocks == []

    def test_plain_text_fragment(self):
        _, blocks = render("just text")
        assert texts(blocks[0]) == ["just text"]
