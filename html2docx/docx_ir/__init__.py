"""DOCX IR 모듈

HTML을 WordprocessingML(DOCX) 패키지로 변환하기 위한 중간 표현과 writer들.

구조:
- base.py: 공통 유틸리티 (NS, 경로/관계/콘텐츠 타입 상수, 단위 변환)
- options.py: 문서 옵션 기본값, 단위 정규화, 병합
- models.py: 관계, 런/단락 서식, 목록, 표 셀 모델
- registry.py: 머리글/바닥글 ID, 파트별 관계 ID
- archive.py: 기록한 파트를 추적하는 zip 아카이브
- html_tree.py: HTML → 요소 트리
- document.py: 변환 상태와 고정 파트 XML 생성
- renderer.py: 요소 트리 → w:p / w:tbl
- assembler.py: 파트 기록 순서와 패키지 조립
- components/: 컴포넌트별 writer
"""

from .archive import DocxArchive
from .assembler import DocxAssembler, add_files_to_container
from .document import DocxDocument
from .html_tree import convert_html, decode_html_entities
from .models import (
    ArchivePart,
    DocxRelationship,
    HeaderFooterRef,
    ListDefinition,
    ListRegistry,
    ParagraphStyle,
    RunStyle,
    TableCellSpec,
)
from .options import (
    DEFAULT_DOCUMENT_OPTIONS,
    ParsedLength,
    UnitKind,
    fixup_font_size,
    merge_options,
    normalize_document_options,
    normalize_units,
    parse_length,
    resolve_document_options,
)
from .registry import PartRegistry, RelationshipScope
from .renderer import DocxRenderer

__all__ = [
    # 조립
    "DocxArchive",
    "DocxAssembler",
    "add_files_to_container",
    "DocxDocument",
    "DocxRenderer",
    # HTML
    "convert_html",
    "decode_html_entities",
    # 모델
    "ArchivePart",
    "DocxRelationship",
    "HeaderFooterRef",
    "ListDefinition",
    "ListRegistry",
    "ParagraphStyle",
    "RunStyle",
    "TableCellSpec",
    # 옵션
    "DEFAULT_DOCUMENT_OPTIONS",
    "ParsedLength",
    "UnitKind",
    "fixup_font_size",
    "merge_options",
    "normalize_document_options",
    "normalize_units",
    "parse_length",
    "resolve_document_options",
    # 관계
    "PartRegistry",
    "RelationshipScope",
]
