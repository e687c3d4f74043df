"""단락 Writer"""

from __future__ import annotations

from typing import Iterable, Optional, Tuple

from lxml import etree

from html2docx.docx_ir.base import w, w_val
from html2docx.docx_ir.models import ParagraphStyle


# CSS text-align → w:jc
ALIGNMENT_MAP = {
    "left": "left",
    "start": "left",
    "center": "center",
    "right": "right",
    "end": "right",
    "justify": "both",
}


class ParagraphWriter:
    """단락 생성"""

    def build(
        self,
        inlines: Iterable[etree._Element],
        style: Optional[ParagraphStyle] = None,
        numbering: Optional[Tuple[int, int]] = None,
    ) -> etree._Element:
        """인라인 요소(w:r, w:hyperlink)들을 w:p로 묶음

        numbering: (num_id, ilvl)
        """
        p = etree.Element(w("p"))
        self._append_paragraph_properties(p, style or ParagraphStyle(), numbering)
        for inline in inlines:
            p.append(inline)
        return p

    def build_empty(self) -> etree._Element:
        """빈 단락 생성"""
        return etree.Element(w("p"))

    def build_horizontal_rule(self) -> etree._Element:
        """아래 테두리만 있는 빈 단락 (hr)"""
        return self.build([], ParagraphStyle(bottom_border=True))

    def _append_paragraph_properties(
        self,
        p: etree._Element,
        style: ParagraphStyle,
        numbering: Optional[Tuple[int, int]],
    ) -> None:
        if style == ParagraphStyle() and numbering is None:
            return

        ppr = etree.SubElement(p, w("pPr"))
        if style.style_id:
            w_val(ppr, "pStyle", style.style_id)
        if style.page_break_before:
            etree.SubElement(ppr, w("pageBreakBefore"))

        if numbering is not None:
            num_id, level = numbering
            num_pr = etree.SubElement(ppr, w("numPr"))
            w_val(num_pr, "ilvl", level)
            w_val(num_pr, "numId", num_id)

        if style.bottom_border:
            borders = etree.SubElement(ppr, w("pBdr"))
            bottom = etree.SubElement(borders, w("bottom"))
            bottom.set(w("val"), "single")
            bottom.set(w("sz"), "6")
            bottom.set(w("space"), "1")
            bottom.set(w("color"), "auto")

        if style.indent_left:
            ind = etree.SubElement(ppr, w("ind"))
            ind.set(w("left"), str(style.indent_left))

        alignment = ALIGNMENT_MAP.get(style.alignment or "")
        if alignment:
            w_val(ppr, "jc", alignment)
