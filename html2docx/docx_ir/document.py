"""DOCX 문서 빌더

변환 한 번 동안의 상태(옵션, 파트 관계, 머리글/바닥글 참조, 목록, 글꼴)를
보관하고 고정 파트 XML을 생성합니다.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from lxml import etree

from html2docx.docx_ir.base import (
    DEFAULT_FONT,
    DEFAULT_LANG,
    DOCUMENT_FILE_NAME,
    INTERNAL_RELATIONSHIP,
    PART_NSMAP,
    to_xml_bytes,
    w,
)
from html2docx.docx_ir.components import (
    NumberingWriter,
    PackageWriter,
    SectionWriter,
    StylesWriter,
)
from html2docx.docx_ir.models import HeaderFooterRef, ListRegistry, TargetMode
from html2docx.docx_ir.options import LANDSCAPE_ORIENTATION, PORTRAIT_ORIENTATION
from html2docx.docx_ir.registry import PartRegistry

logger = logging.getLogger(__name__)


def _as_int(value: Any) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


class DocxDocument:
    """변환 중인 문서"""

    def __init__(self, options: Mapping[str, Any]):
        self.options = dict(options)

        self.orientation = options.get("orientation") or PORTRAIT_ORIENTATION
        self.width, self.height = self._resolve_page_size(options["page_size"])
        self.margins: Dict[str, Any] = dict(options["margins"])

        self.font = options.get("font") or DEFAULT_FONT
        self.font_size = options.get("font_size")
        self.complex_script_font_size = options.get("complex_script_font_size")
        self.lang = options.get("lang") or DEFAULT_LANG

        self.header = bool(options.get("header"))
        self.footer = bool(options.get("footer"))
        self.skip_first_header_footer = bool(options.get("skip_first_header_footer"))
        self.line_number = bool(options.get("line_number"))
        self.line_number_options = dict(options.get("line_number_options") or {})
        self.table_row_cant_split = bool(
            ((options.get("table") or {}).get("row") or {}).get("cant_split")
        )
        self.default_ordered_list_style = (
            (options.get("numbering") or {}).get("default_ordered_list_style_type") or "decimal"
        )
        self.legacy_field_char_spelling = bool(options.get("legacy_field_char_spelling"))

        self.registry = PartRegistry()
        self.lists = ListRegistry()
        self.fonts: List[str] = [self.font]
        self.header_objects: List[HeaderFooterRef] = []
        self.footer_objects: List[HeaderFooterRef] = []
        self.body: List[etree._Element] = []

        self.package_writer = PackageWriter()
        self.styles_writer = StylesWriter()
        self.section_writer = SectionWriter()
        self.numbering_writer = NumberingWriter()

    def _resolve_page_size(self, page_size: Mapping[str, Any]) -> Tuple[Any, Any]:
        """가로 방향이면 긴 변을 너비로"""
        width, height = page_size["width"], page_size["height"]
        if self.orientation == LANDSCAPE_ORIENTATION:
            w_int, h_int = _as_int(width), _as_int(height)
            if w_int is not None and h_int is not None and w_int < h_int:
                return height, width
        return width, height

    @property
    def content_width(self) -> int:
        """여백을 뺀 본문 너비 (TWIP)"""
        width = _as_int(self.width) or 0
        left = _as_int(self.margins.get("left")) or 0
        right = _as_int(self.margins.get("right")) or 0
        return max(width - left - right, 0)

    # ============================================================
    # 관계 / 글꼴
    # ============================================================

    def create_relationship(
        self,
        file_name: str,
        rel_type: str,
        target: str,
        target_mode: TargetMode = INTERNAL_RELATIONSHIP,
    ) -> str:
        """file_name 파트 범위에 관계 추가 후 관계 ID 반환"""
        rel_id = self.registry.create_relationship(file_name, rel_type, target, target_mode)
        logger.debug("Relationship %s/%s -> %s (%s)", file_name, rel_id, target, target_mode)
        return rel_id

    def register_font(self, name: str) -> None:
        if name and name not in self.fonts:
            self.fonts.append(name)

    # ============================================================
    # 파트 XML 생성
    # ============================================================

    def generate_core_xml(self) -> bytes:
        return self.package_writer.build_core_xml(self.options)

    def generate_document_xml(self) -> bytes:
        """본문 블록 + 섹션 속성으로 document.xml 생성"""
        root = etree.Element(w("document"), nsmap=PART_NSMAP)
        body = etree.SubElement(root, w("body"))
        for block in self.body:
            body.append(block)
        body.append(self.generate_section_properties())
        return to_xml_bytes(root)

    def generate_section_properties(self) -> etree._Element:
        return self.section_writer.build(
            width=self.width,
            height=self.height,
            orientation=self.orientation,
            margins=self.margins,
            header_refs=self.header_objects,
            footer_refs=self.footer_objects,
            line_number_options=self.line_number_options if self.line_number else None,
            title_page=self.skip_first_header_footer,
        )

    def generate_font_table_xml(self) -> bytes:
        return self.styles_writer.build_font_table_xml(self.fonts)

    def generate_styles_xml(self) -> bytes:
        return self.styles_writer.build_styles_xml(
            font=self.font,
            font_size=self.font_size,
            complex_script_font_size=self.complex_script_font_size,
            lang=self.lang,
        )

    def generate_numbering_xml(self) -> bytes:
        return self.numbering_writer.build_numbering_xml(self.lists)

    def generate_settings_xml(self) -> bytes:
        return self.styles_writer.build_settings_xml()

    def generate_web_settings_xml(self) -> bytes:
        return self.styles_writer.build_web_settings_xml()

    def generate_theme_xml(self) -> bytes:
        return self.styles_writer.build_theme_xml()

    def generate_rels_xml(self) -> Iterable[Tuple[str, bytes]]:
        """(파트 이름, .rels XML) 목록. document는 항상 포함"""
        return [
            (scope.file_name, self.package_writer.build_rels(scope.relationships))
            for scope in self.registry.scopes()
        ]

    def document_relationships(self):
        return self.registry.scope(DOCUMENT_FILE_NAME).relationships
