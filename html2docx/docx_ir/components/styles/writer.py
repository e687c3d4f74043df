"""스타일 Writer - styles.xml, fontTable.xml, settings.xml, webSettings.xml, theme1.xml 생성"""

from __future__ import annotations

from typing import Iterable, Optional

from lxml import etree

from html2docx.docx_ir.base import NS, PART_NSMAP, qname, to_xml_bytes, w, w_val


# 제목 수준별 글자 크기 (HIP)
HEADING_FONT_SIZES = {1: 48, 2: 36, 3: 28, 4: 24, 5: 20, 6: 18}

HYPERLINK_COLOR = "0563C1"

# 폰트 계열 (fontTable w:family)
FONT_FAMILY_MAP = {
    "Times New Roman": "roman",
    "Georgia": "roman",
    "Cambria": "roman",
    "Courier New": "modern",
    "Consolas": "modern",
    "Symbol": "roman",
    "Wingdings": "auto",
}

# 테마 색 (이름, sRGB)
THEME_COLORS = [
    ("dk2", "44546A"),
    ("lt2", "E7E6E6"),
    ("accent1", "4472C4"),
    ("accent2", "ED7D31"),
    ("accent3", "A5A5A5"),
    ("accent4", "FFC000"),
    ("accent5", "5B9BD5"),
    ("accent6", "70AD47"),
    ("hlink", "0563C1"),
    ("folHlink", "954F72"),
]


class StylesWriter:
    """스타일/설정 계열 파트 생성"""

    # ============================================================
    # styles.xml
    # ============================================================

    def build_styles_xml(
        self,
        font: str,
        font_size: Optional[int],
        complex_script_font_size: Optional[int],
        lang: str,
    ) -> bytes:
        """기본 글꼴/크기/언어와 기본 스타일 생성

        글자 크기가 None이면 w:sz/w:szCs를 생략해 Word 기본값을 따릅니다.
        """
        root = etree.Element(w("styles"), nsmap=PART_NSMAP)

        doc_defaults = etree.SubElement(root, w("docDefaults"))
        rpr = etree.SubElement(etree.SubElement(doc_defaults, w("rPrDefault")), w("rPr"))
        fonts = etree.SubElement(rpr, w("rFonts"))
        for attr in ("ascii", "eastAsia", "hAnsi", "cs"):
            fonts.set(w(attr), font)
        if font_size is not None:
            w_val(rpr, "sz", font_size)
        if complex_script_font_size is not None:
            w_val(rpr, "szCs", complex_script_font_size)
        lang_el = etree.SubElement(rpr, w("lang"))
        lang_el.set(w("val"), lang)
        lang_el.set(w("eastAsia"), lang)
        lang_el.set(w("bidi"), "ar-SA")

        ppr = etree.SubElement(etree.SubElement(doc_defaults, w("pPrDefault")), w("pPr"))
        spacing = etree.SubElement(ppr, w("spacing"))
        spacing.set(w("after"), "0")
        spacing.set(w("line"), "240")
        spacing.set(w("lineRule"), "auto")

        normal = self._add_style(root, "paragraph", "Normal", "Normal", default=True)
        etree.SubElement(normal, w("qFormat"))

        for level, size in HEADING_FONT_SIZES.items():
            heading = self._add_style(root, "paragraph", f"Heading{level}", f"heading {level}", based_on="Normal")
            w_val(heading, "next", "Normal")
            etree.SubElement(heading, w("qFormat"))
            h_ppr = etree.SubElement(heading, w("pPr"))
            etree.SubElement(h_ppr, w("keepNext"))
            h_spacing = etree.SubElement(h_ppr, w("spacing"))
            h_spacing.set(w("before"), "240")
            h_spacing.set(w("after"), "60")
            w_val(h_ppr, "outlineLvl", level - 1)
            h_rpr = etree.SubElement(heading, w("rPr"))
            etree.SubElement(h_rpr, w("b"))
            etree.SubElement(h_rpr, w("bCs"))
            w_val(h_rpr, "sz", size)
            w_val(h_rpr, "szCs", size)

        quote = self._add_style(root, "paragraph", "Quote", "Quote", based_on="Normal")
        q_ppr = etree.SubElement(quote, w("pPr"))
        q_ind = etree.SubElement(q_ppr, w("ind"))
        q_ind.set(w("left"), "720")
        q_ind.set(w("right"), "720")
        q_rpr = etree.SubElement(quote, w("rPr"))
        etree.SubElement(q_rpr, w("i"))

        list_paragraph = self._add_style(root, "paragraph", "ListParagraph", "List Paragraph", based_on="Normal")
        l_ppr = etree.SubElement(list_paragraph, w("pPr"))
        l_ind = etree.SubElement(l_ppr, w("ind"))
        l_ind.set(w("left"), "720")
        etree.SubElement(l_ppr, w("contextualSpacing"))

        hyperlink = self._add_style(root, "character", "Hyperlink", "Hyperlink")
        hl_rpr = etree.SubElement(hyperlink, w("rPr"))
        w_val(hl_rpr, "color", HYPERLINK_COLOR)
        w_val(hl_rpr, "u", "single")

        table_grid = self._add_style(root, "table", "TableGrid", "Table Grid")
        tbl_pr = etree.SubElement(table_grid, w("tblPr"))
        borders = etree.SubElement(tbl_pr, w("tblBorders"))
        for side in ("top", "left", "bottom", "right", "insideH", "insideV"):
            border = etree.SubElement(borders, w(side))
            border.set(w("val"), "single")
            border.set(w("sz"), "4")
            border.set(w("space"), "0")
            border.set(w("color"), "auto")

        return to_xml_bytes(root)

    def _add_style(
        self,
        root: etree._Element,
        style_type: str,
        style_id: str,
        name: str,
        based_on: Optional[str] = None,
        default: bool = False,
    ) -> etree._Element:
        style = etree.SubElement(root, w("style"))
        style.set(w("type"), style_type)
        if default:
            style.set(w("default"), "1")
        style.set(w("styleId"), style_id)
        w_val(style, "name", name)
        if based_on:
            w_val(style, "basedOn", based_on)
        return style

    # ============================================================
    # fontTable.xml
    # ============================================================

    def build_font_table_xml(self, fonts: Iterable[str]) -> bytes:
        """사용한 글꼴 목록"""
        root = etree.Element(w("fonts"), nsmap=PART_NSMAP)
        for name in fonts:
            font = etree.SubElement(root, w("font"))
            font.set(w("name"), name)
            w_val(font, "family", FONT_FAMILY_MAP.get(name, "swiss"))
            w_val(font, "pitch", "fixed" if FONT_FAMILY_MAP.get(name) == "modern" else "variable")
        return to_xml_bytes(root)

    # ============================================================
    # settings.xml / webSettings.xml
    # ============================================================

    def build_settings_xml(self) -> bytes:
        root = etree.Element(w("settings"), nsmap=PART_NSMAP)
        zoom = etree.SubElement(root, w("zoom"))
        zoom.set(w("percent"), "100")
        w_val(root, "defaultTabStop", 720)
        w_val(root, "characterSpacingControl", "doNotCompress")

        compat = etree.SubElement(root, w("compat"))
        setting = etree.SubElement(compat, w("compatSetting"))
        setting.set(w("name"), "compatibilityMode")
        setting.set(w("uri"), "http://schemas.microsoft.com/office/word")
        setting.set(w("val"), "15")
        return to_xml_bytes(root)

    def build_web_settings_xml(self) -> bytes:
        root = etree.Element(w("webSettings"), nsmap=PART_NSMAP)
        etree.SubElement(root, w("optimizeForBrowser"))
        etree.SubElement(root, w("allowPNG"))
        return to_xml_bytes(root)

    # ============================================================
    # theme/theme1.xml
    # ============================================================

    def build_theme_xml(self, major_font: str = "Calibri Light", minor_font: str = "Calibri") -> bytes:
        """색/글꼴/서식 구성표를 가진 Office 테마"""
        root = etree.Element(qname("a", "theme"), nsmap={"a": NS["a"]})
        root.set("name", "Office Theme")
        elements = etree.SubElement(root, qname("a", "themeElements"))

        clr_scheme = etree.SubElement(elements, qname("a", "clrScheme"))
        clr_scheme.set("name", "Office")
        for name, system, last in (("dk1", "windowText", "000000"), ("lt1", "window", "FFFFFF")):
            sys_clr = etree.SubElement(etree.SubElement(clr_scheme, qname("a", name)), qname("a", "sysClr"))
            sys_clr.set("val", system)
            sys_clr.set("lastClr", last)
        for name, rgb in THEME_COLORS:
            srgb = etree.SubElement(etree.SubElement(clr_scheme, qname("a", name)), qname("a", "srgbClr"))
            srgb.set("val", rgb)

        font_scheme = etree.SubElement(elements, qname("a", "fontScheme"))
        font_scheme.set("name", "Office")
        for local, typeface in (("majorFont", major_font), ("minorFont", minor_font)):
            font_el = etree.SubElement(font_scheme, qname("a", local))
            etree.SubElement(font_el, qname("a", "latin")).set("typeface", typeface)
            etree.SubElement(font_el, qname("a", "ea")).set("typeface", "")
            etree.SubElement(font_el, qname("a", "cs")).set("typeface", "")

        fmt_scheme = etree.SubElement(elements, qname("a", "fmtScheme"))
        fmt_scheme.set("name", "Office")

        fill_list = etree.SubElement(fmt_scheme, qname("a", "fillStyleLst"))
        for _ in range(3):
            self._append_placeholder_fill(fill_list)

        line_list = etree.SubElement(fmt_scheme, qname("a", "lnStyleLst"))
        for width in (6350, 12700, 19050):
            ln = etree.SubElement(line_list, qname("a", "ln"))
            ln.set("w", str(width))
            ln.set("cap", "flat")
            ln.set("cmpd", "sng")
            ln.set("algn", "ctr")
            self._append_placeholder_fill(ln)
            etree.SubElement(ln, qname("a", "prstDash")).set("val", "solid")

        effect_list = etree.SubElement(fmt_scheme, qname("a", "effectStyleLst"))
        for _ in range(3):
            effect_style = etree.SubElement(effect_list, qname("a", "effectStyle"))
            etree.SubElement(effect_style, qname("a", "effectLst"))

        bg_list = etree.SubElement(fmt_scheme, qname("a", "bgFillStyleLst"))
        for _ in range(3):
            self._append_placeholder_fill(bg_list)

        etree.SubElement(root, qname("a", "objectDefaults"))
        etree.SubElement(root, qname("a", "extraClrSchemeLst"))
        return to_xml_bytes(root)

    def _append_placeholder_fill(self, parent: etree._Element) -> None:
        fill = etree.SubElement(parent, qname("a", "solidFill"))
        etree.SubElement(fill, qname("a", "schemeClr")).set("val", "phClr")
