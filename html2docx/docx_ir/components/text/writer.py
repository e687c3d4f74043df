"""텍스트 런 Writer"""

from __future__ import annotations

import re
from typing import Optional

from lxml import etree

from html2docx.docx_ir.base import NS, w, w_val
from html2docx.docx_ir.models import RunStyle


CODE_FONT = "Courier New"

# XML 1.0에 쓸 수 없는 제어 문자 (탭, 줄바꿈, 복귀 제외)
_XML_ILLEGAL_CHARS = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ufffe\uffff]")
# 워드에서 붙여 넣은 HTML의 수직 탭은 줄바꿈
_VERTICAL_TAB = "\x0b"


def sanitize_text(text: str) -> str:
    """w:t에 넣을 수 있도록 제어 문자 정리"""
    return _XML_ILLEGAL_CHARS.sub("", text.replace(_VERTICAL_TAB, "\n"))


class TextWriter:
    """w:r 생성"""

    def build_run(self, text: str, style: Optional[RunStyle] = None) -> etree._Element:
        """텍스트를 w:r 요소로 변환 (줄바꿈은 w:br)"""
        run = etree.Element(w("r"))
        self._append_run_properties(run, style or RunStyle())

        parts = sanitize_text(text).split("\n")
        for idx, part in enumerate(parts):
            if idx > 0:
                etree.SubElement(run, w("br"))
            if part:
                t = etree.SubElement(run, w("t"))
                t.set(f"{{{NS['xml']}}}space", "preserve")
                t.text = part
        return run

    def build_break(self, break_type: Optional[str] = None) -> etree._Element:
        """w:br 하나를 담은 런 (break_type="page"면 쪽 나눔)"""
        run = etree.Element(w("r"))
        br = etree.SubElement(run, w("br"))
        if break_type:
            br.set(w("type"), break_type)
        return run

    def _append_run_properties(self, run: etree._Element, style: RunStyle) -> None:
        if style == RunStyle():
            return

        rpr = etree.SubElement(run, w("rPr"))
        if style.style_id:
            w_val(rpr, "rStyle", style.style_id)

        font = CODE_FONT if style.code else style.font_family
        if font:
            fonts = etree.SubElement(rpr, w("rFonts"))
            for attr in ("ascii", "hAnsi", "eastAsia", "cs"):
                fonts.set(w(attr), font)

        if style.bold:
            etree.SubElement(rpr, w("b"))
            etree.SubElement(rpr, w("bCs"))
        if style.italic:
            etree.SubElement(rpr, w("i"))
            etree.SubElement(rpr, w("iCs"))
        if style.strike:
            etree.SubElement(rpr, w("strike"))
        if style.color:
            w_val(rpr, "color", style.color)
        if style.font_size:
            w_val(rpr, "sz", style.font_size)
            w_val(rpr, "szCs", style.font_size)
        if style.underline:
            w_val(rpr, "u", "single")
        if style.highlight:
            shd = etree.SubElement(rpr, w("shd"))
            shd.set(w("val"), "clear")
            shd.set(w("color"), "auto")
            shd.set(w("fill"), style.highlight)
        if style.vert_align != "baseline":
            w_val(rpr, "vertAlign", style.vert_align)
