"""DOCX 조립기

HTML 본문(과 선택적 머리글/바닥글)을 렌더링해 아카이브에 OOXML 파트를
기록합니다. [Content_Types].xml은 모든 파트가 기록된 뒤 마지막에 씁니다.

사용법:
    archive = DocxArchive()
    await add_files_to_container(archive, "<p>Hello</p>", {"page_number": True})
    archive.save("output.docx")
"""

from __future__ import annotations

import logging
import posixpath
from typing import Any, Mapping, Optional

from html2docx.docx_ir.archive import DocxArchive
from html2docx.docx_ir.base import (
    CONTENT_TYPE,
    CONTENT_TYPES_PATH,
    DEFAULT_HTML_STRING,
    DOCPROPS_FOLDER,
    DOCUMENT_FILE_NAME,
    FOOTER_TYPE,
    HEADER_TYPE,
    INTERNAL_RELATIONSHIP,
    PAGE_NUMBER_HTML_STRING,
    REL_TYPE,
    RELS_FOLDER,
    THEME_FILE_NAME,
    THEME_FOLDER,
    WORD_FOLDER,
)
from html2docx.docx_ir.components import FieldWriter, HeaderFooterWriter, inject_page_fields
from html2docx.docx_ir.document import DocxDocument
from html2docx.docx_ir.html_tree import convert_html, decode_html_entities
from html2docx.docx_ir.models import HeaderFooterRef
from html2docx.docx_ir.options import resolve_document_options
from html2docx.docx_ir.renderer import DocxRenderer
from html2docx.exceptions import PackageError

logger = logging.getLogger(__name__)


# word/ 아래 고정 파트 (파일 이름, 콘텐츠 타입 키, 생성 메서드)
FIXED_WORD_PARTS = (
    ("fontTable.xml", "fontTable", "generate_font_table_xml"),
    ("styles.xml", "styles", "generate_styles_xml"),
    ("numbering.xml", "numbering", "generate_numbering_xml"),
    ("settings.xml", "settings", "generate_settings_xml"),
    ("webSettings.xml", "webSettings", "generate_web_settings_xml"),
)


class DocxAssembler:
    """변환 한 번을 담당하는 조립기

    아카이브 하나는 조립 한 번에만 사용해야 합니다.
    """

    def __init__(self, archive: DocxArchive, options: Optional[Mapping[str, Any]] = None):
        self.archive = archive
        self.options = resolve_document_options(options)
        self.document = DocxDocument(self.options)
        self.renderer = DocxRenderer(self.document)
        self.header_footer_writer = HeaderFooterWriter()
        self.field_writer = FieldWriter(legacy_separator=self.document.legacy_field_char_spelling)

    async def assemble(
        self,
        html: Optional[str],
        header_html: Optional[str] = None,
        footer_html: Optional[str] = None,
    ) -> DocxArchive:
        document = self.document

        # 머리글/바닥글 기본 HTML
        if document.header and not header_html:
            header_html = DEFAULT_HTML_STRING
        if document.footer and not footer_html:
            footer_html = PAGE_NUMBER_HTML_STRING if self.options.get("page_number") else DEFAULT_HTML_STRING

        if self.options.get("decode_unicode"):
            html = decode_html_entities(html)
            header_html = decode_html_entities(header_html)
            footer_html = decode_html_entities(footer_html)

        document.body = await self.renderer.render(convert_html(html), DOCUMENT_FILE_NAME)

        self.archive.write(
            posixpath.join(RELS_FOLDER, ".rels"),
            document.package_writer.build_root_rels(),
            CONTENT_TYPE["rels"],
        )
        self.archive.write(
            posixpath.join(DOCPROPS_FOLDER, "core.xml"),
            document.generate_core_xml(),
            CONTENT_TYPE["coreProperties"],
        )

        if document.header and header_html:
            await self._add_header(header_html)
        if document.footer and footer_html:
            await self._add_footer(footer_html)

        theme_target = posixpath.join(THEME_FOLDER, f"{THEME_FILE_NAME}.xml")
        document.create_relationship(DOCUMENT_FILE_NAME, REL_TYPE["theme"], theme_target)
        self.archive.write(
            posixpath.join(WORD_FOLDER, theme_target),
            document.generate_theme_xml(),
            CONTENT_TYPE["theme"],
        )

        self.archive.write(
            posixpath.join(WORD_FOLDER, f"{DOCUMENT_FILE_NAME}.xml"),
            document.generate_document_xml(),
            CONTENT_TYPE["document"],
        )
        for file_name, content_type_key, generator in FIXED_WORD_PARTS:
            self.archive.write(
                posixpath.join(WORD_FOLDER, file_name),
                getattr(document, generator)(),
                CONTENT_TYPE[content_type_key],
            )

        for file_name, rels_xml in document.generate_rels_xml():
            self.archive.write(
                posixpath.join(WORD_FOLDER, RELS_FOLDER, f"{file_name}.xml.rels"),
                rels_xml,
                CONTENT_TYPE["rels"],
            )

        self._verify_relationship_targets()

        self.archive.write(
            CONTENT_TYPES_PATH,
            document.package_writer.build_content_types(self.archive.parts),
            CONTENT_TYPE["xml"],
        )
        logger.info(
            "Assembled DOCX with %d part(s) (headers=%d, footers=%d, lists=%d)",
            len(self.archive.parts),
            len(document.header_objects),
            len(document.footer_objects),
            len(document.lists.lists),
        )
        return self.archive

    # ============================================================
    # 머리글 / 바닥글
    # ============================================================

    async def _add_header(self, header_html: str) -> None:
        document = self.document
        header_id = document.registry.next_header_id()
        file_name = f"{HEADER_TYPE}{header_id}"

        blocks = await self.renderer.render(convert_html(header_html), file_name)
        relationship_id = document.create_relationship(
            DOCUMENT_FILE_NAME, REL_TYPE["header"], f"{file_name}.xml"
        )
        self.archive.write(
            posixpath.join(WORD_FOLDER, f"{file_name}.xml"),
            self.header_footer_writer.build_header(blocks),
            CONTENT_TYPE["header"],
        )
        document.header_objects.append(HeaderFooterRef(header_id, relationship_id))
        logger.debug("Added %s as %s", file_name, relationship_id)

    async def _add_footer(self, footer_html: str) -> None:
        document = self.document
        footer_id = document.registry.next_footer_id()
        file_name = f"{FOOTER_TYPE}{footer_id}"

        blocks = await self.renderer.render(convert_html(footer_html), file_name)
        relationship_id = document.create_relationship(
            DOCUMENT_FILE_NAME, REL_TYPE["footer"], f"{file_name}.xml"
        )

        footer_xml = self.header_footer_writer.build_footer(blocks).decode("utf-8")
        footer_xml = inject_page_fields(footer_xml, self.field_writer.build_page_number_fragment())
        self.archive.write(
            posixpath.join(WORD_FOLDER, f"{file_name}.xml"),
            footer_xml.encode("utf-8"),
            CONTENT_TYPE["footer"],
        )
        document.footer_objects.append(HeaderFooterRef(footer_id, relationship_id))
        logger.debug("Added %s as %s", file_name, relationship_id)

    # ============================================================
    # 검증
    # ============================================================

    def _verify_relationship_targets(self) -> None:
        """모든 내부 관계 대상이 아카이브에 있는지 확인"""
        for scope in self.document.registry.scopes():
            for rel in scope.relationships:
                if rel.target_mode != INTERNAL_RELATIONSHIP:
                    continue
                target_path = posixpath.normpath(posixpath.join(WORD_FOLDER, rel.target))
                if target_path not in self.archive:
                    raise PackageError(
                        f"Relationship {scope.file_name}/{rel.id} points to missing part {target_path}",
                        part_name=target_path,
                    )


async def add_files_to_container(
    archive: DocxArchive,
    html: Optional[str],
    options: Optional[Mapping[str, Any]] = None,
    header_html: Optional[str] = None,
    footer_html: Optional[str] = None,
) -> DocxArchive:
    """HTML을 렌더링해 archive에 DOCX 파트를 모두 기록"""
    assembler = DocxAssembler(archive, options)
    return await assembler.assemble(html, header_html=header_html, footer_html=footer_html)
