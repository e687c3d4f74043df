from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, List, Literal, Optional


TargetMode = Literal["Internal", "External"]
VertAlignType = Literal["baseline", "superscript", "subscript"]
ListKind = Literal["bullet", "ordered"]


@dataclass(frozen=True)
class DocxRelationship:
    id: str
    type: str
    target: str
    target_mode: TargetMode = "Internal"


@dataclass(frozen=True)
class HeaderFooterRef:
    part_id: int
    relationship_id: str
    type: str = "default"


@dataclass(frozen=True)
class ArchivePart:
    path: str
    content_type: str


@dataclass(frozen=True)
class RunStyle:
    bold: bool = False
    italic: bool = False
    underline: bool = False
    strike: bool = False
    code: bool = False
    vert_align: VertAlignType = "baseline"
    color: Optional[str] = None  # RRGGBB
    highlight: Optional[str] = None  # 음영 RRGGBB
    font_size: Optional[int] = None  # HIP
    font_family: Optional[str] = None
    style_id: Optional[str] = None  # 문자 스타일 (Hyperlink 등)

    def merge(self, **changes) -> "RunStyle":
        return replace(self, **changes)


@dataclass(frozen=True)
class ParagraphStyle:
    style_id: Optional[str] = None
    alignment: Optional[str] = None  # left, center, right, both
    indent_left: int = 0
    page_break_before: bool = False
    bottom_border: bool = False


@dataclass
class ListDefinition:
    num_id: int
    abstract_num_id: int
    kind: ListKind
    style_type: str = "decimal"  # ordered list-style-type


@dataclass
class ListRegistry:
    lists: List[ListDefinition] = field(default_factory=list)

    def create(self, kind: ListKind, style_type: str = "decimal") -> ListDefinition:
        number = len(self.lists) + 1
        definition = ListDefinition(
            num_id=number,
            abstract_num_id=number - 1,
            kind=kind,
            style_type=style_type,
        )
        self.lists.append(definition)
        return definition


@dataclass
class TableCellSpec:
    blocks: List[Any] = field(default_factory=list)  # w:p / w:tbl 요소
    col_span: int = 1
    row_span: int = 1
    is_header: bool = False
