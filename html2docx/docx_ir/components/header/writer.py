"""머리글/바닥글 파트 Writer"""

from __future__ import annotations

from typing import Iterable

from lxml import etree

from html2docx.docx_ir.base import PART_NSMAP, to_xml_bytes, w


class HeaderFooterWriter:
    """header{n}.xml / footer{n}.xml 루트 생성"""

    def build_header(self, blocks: Iterable[etree._Element]) -> bytes:
        """w:hdr 파트 XML"""
        return to_xml_bytes(self._build_root("hdr", blocks))

    def build_footer(self, blocks: Iterable[etree._Element]) -> bytes:
        """w:ftr 파트 XML"""
        return to_xml_bytes(self._build_root("ftr", blocks))

    def _build_root(self, local: str, blocks: Iterable[etree._Element]) -> etree._Element:
        root = etree.Element(w(local), nsmap=PART_NSMAP)
        for block in blocks:
            root.append(block)
        # 머리글/바닥글에는 단락이 하나 이상 있어야 함
        if len(root) == 0 or root[-1].tag != w("p"):
            etree.SubElement(root, w("p"))
        return root
