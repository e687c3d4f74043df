"""섹션 Writer"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Mapping, Optional

from lxml import etree

from html2docx.docx_ir.base import NS, w, w_val
from html2docx.docx_ir.models import HeaderFooterRef


# 줄 번호 재시작 방식
LINE_NUMBER_RESTART_MAP = {
    "continuous": "continuous",
    "newPage": "newPage",
    "new_page": "newPage",
    "newSection": "newSection",
    "new_section": "newSection",
}

MARGIN_ATTRS = ("top", "right", "bottom", "left", "header", "footer", "gutter")


class SectionWriter:
    """w:sectPr 생성"""

    def build(
        self,
        width: Any,
        height: Any,
        orientation: str,
        margins: Mapping[str, Any],
        header_refs: Iterable[HeaderFooterRef] = (),
        footer_refs: Iterable[HeaderFooterRef] = (),
        line_number_options: Optional[Dict[str, Any]] = None,
        title_page: bool = False,
    ) -> etree._Element:
        """섹션 속성 요소 생성

        스키마 순서: headerReference, footerReference, pgSz, pgMar,
        lnNumType, cols, titlePg, docGrid
        """
        sect_pr = etree.Element(w("sectPr"))

        for ref in header_refs:
            self._append_reference(sect_pr, "headerReference", ref)
        for ref in footer_refs:
            self._append_reference(sect_pr, "footerReference", ref)

        pg_sz = etree.SubElement(sect_pr, w("pgSz"))
        pg_sz.set(w("w"), str(width))
        pg_sz.set(w("h"), str(height))
        if orientation == "landscape":
            pg_sz.set(w("orient"), "landscape")

        pg_mar = etree.SubElement(sect_pr, w("pgMar"))
        for attr in MARGIN_ATTRS:
            value = margins.get(attr)
            if value is not None:
                pg_mar.set(w(attr), str(value))

        if line_number_options is not None:
            ln = etree.SubElement(sect_pr, w("lnNumType"))
            ln.set(w("countBy"), str(line_number_options.get("count_by", 1)))
            ln.set(w("start"), str(line_number_options.get("start", 0)))
            restart = line_number_options.get("restart", "continuous")
            ln.set(w("restart"), LINE_NUMBER_RESTART_MAP.get(restart, "continuous"))

        cols = etree.SubElement(sect_pr, w("cols"))
        cols.set(w("space"), "720")

        if title_page:
            etree.SubElement(sect_pr, w("titlePg"))

        w_val(sect_pr, "docGrid").set(w("linePitch"), "360")
        return sect_pr

    def _append_reference(self, sect_pr: etree._Element, tag: str, ref: HeaderFooterRef) -> None:
        reference = etree.SubElement(sect_pr, w(tag))
        reference.set(w("type"), ref.type)
        reference.set(f"{{{NS['r']}}}id", ref.relationship_id)
