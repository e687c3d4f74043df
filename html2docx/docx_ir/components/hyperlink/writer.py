"""하이퍼링크 Writer"""

from __future__ import annotations

from typing import Iterable

from lxml import etree

from html2docx.docx_ir.base import NS, w


HYPERLINK_STYLE_ID = "Hyperlink"


class HyperlinkWriter:
    """w:hyperlink 생성"""

    def build(self, relationship_id: str, runs: Iterable[etree._Element]) -> etree._Element:
        """외부 관계 ID를 가리키는 하이퍼링크로 런들을 감쌈"""
        link = etree.Element(w("hyperlink"))
        link.set(f"{{{NS['r']}}}id", relationship_id)
        link.set(w("history"), "1")
        for run in runs:
            link.append(run)
        return link

    def build_anchor(self, anchor: str, runs: Iterable[etree._Element]) -> etree._Element:
        """문서 내부 책갈피(#anchor) 하이퍼링크"""
        link = etree.Element(w("hyperlink"))
        link.set(w("anchor"), anchor)
        link.set(w("history"), "1")
        for run in runs:
            link.append(run)
        return link
