"""Package Writer - _rels/.rels, 파트별 .rels, [Content_Types].xml, docProps/core.xml 생성"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Iterable, List, Mapping, Union

from lxml import etree

from html2docx.docx_ir.base import (
    DEFAULT_EXTENSION_TYPES,
    DOCPROPS_FOLDER,
    NS,
    REL_TYPE,
    WORD_FOLDER,
    qname,
    to_xml_bytes,
)
from html2docx.docx_ir.components.text.writer import sanitize_text
from html2docx.docx_ir.models import ArchivePart, DocxRelationship


W3CDTF_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


class PackageWriter:
    """OPC 패키지 파일 생성"""

    # ============================================================
    # _rels/.rels
    # ============================================================

    def build_root_rels(self) -> bytes:
        """패키지 루트 관계 (본문, 핵심 속성)"""
        return self.build_rels([
            DocxRelationship("rId1", REL_TYPE["officeDocument"], f"{WORD_FOLDER}/document.xml"),
            DocxRelationship("rId2", REL_TYPE["coreProperties"], f"{DOCPROPS_FOLDER}/core.xml"),
        ])

    # ============================================================
    # word/_rels/*.xml.rels
    # ============================================================

    def build_rels(self, relationships: Iterable[DocxRelationship]) -> bytes:
        """관계 파일 생성"""
        root = etree.Element(qname("pr", "Relationships"), nsmap={None: NS["pr"]})

        for rel in relationships:
            rel_el = etree.SubElement(root, qname("pr", "Relationship"))
            rel_el.set("Id", rel.id)
            rel_el.set("Type", rel.type)
            rel_el.set("Target", rel.target)
            if rel.target_mode == "External":
                rel_el.set("TargetMode", "External")

        return to_xml_bytes(root)

    # ============================================================
    # [Content_Types].xml
    # ============================================================

    def build_content_types(self, parts: Iterable[ArchivePart]) -> bytes:
        """기록된 파트 목록으로 콘텐츠 타입 선언 생성

        확장자 기본값과 같은 타입의 파트는 Default로, 나머지는 Override로 선언합니다.
        """
        root = etree.Element(qname("ct", "Types"), nsmap={None: NS["ct"]})

        for extension, content_type in DEFAULT_EXTENSION_TYPES.items():
            default = etree.SubElement(root, qname("ct", "Default"))
            default.set("Extension", extension)
            default.set("ContentType", content_type)

        for part in self.override_parts(parts):
            override = etree.SubElement(root, qname("ct", "Override"))
            override.set("PartName", f"/{part.path}")
            override.set("ContentType", part.content_type)

        return to_xml_bytes(root)

    def override_parts(self, parts: Iterable[ArchivePart]) -> List[ArchivePart]:
        """Override가 필요한 파트 (확장자 기본 타입과 다른 파트)"""
        overrides = []
        for part in parts:
            extension = part.path.rsplit(".", 1)[-1].lower()
            if DEFAULT_EXTENSION_TYPES.get(extension) != part.content_type:
                overrides.append(part)
        return overrides

    # ============================================================
    # docProps/core.xml
    # ============================================================

    def build_core_xml(self, meta: Mapping[str, Any]) -> bytes:
        """핵심 문서 속성 생성"""
        root = etree.Element(
            qname("cp", "coreProperties"),
            nsmap={
                "cp": NS["cp"],
                "dc": NS["dc"],
                "dcterms": NS["dcterms"],
                "dcmitype": NS["dcmitype"],
                "xsi": NS["xsi"],
            },
        )

        keywords = meta.get("keywords") or []
        if not isinstance(keywords, str):
            keywords = ", ".join(str(keyword) for keyword in keywords)

        text_items = [
            ("dc", "title", meta.get("title")),
            ("dc", "subject", meta.get("subject")),
            ("dc", "creator", meta.get("creator")),
            ("cp", "keywords", keywords),
            ("dc", "description", meta.get("description")),
            ("cp", "lastModifiedBy", meta.get("last_modified_by")),
            ("cp", "revision", meta.get("revision")),
        ]
        for prefix, local, value in text_items:
            el = etree.SubElement(root, qname(prefix, local))
            el.text = "" if value is None else sanitize_text(str(value))

        now = datetime.now(timezone.utc)
        for local, key in (("created", "created_at"), ("modified", "modified_at")):
            el = etree.SubElement(root, qname("dcterms", local))
            el.set(qname("xsi", "type"), "dcterms:W3CDTF")
            el.text = format_w3cdtf(meta.get(key) or now)

        return to_xml_bytes(root)


def format_w3cdtf(value: Union[datetime, str]) -> str:
    """datetime → W3CDTF (UTC)"""
    if isinstance(value, str):
        return value
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime(W3CDTF_FORMAT)
