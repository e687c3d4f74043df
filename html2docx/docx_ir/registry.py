"""파트 레지스트리 - 머리글/바닥글 ID와 파트별 관계 ID 발급"""

from __future__ import annotations

from typing import Dict, List, Optional

from html2docx.docx_ir.base import (
    DOCUMENT_FILE_NAME,
    INTERNAL_RELATIONSHIP,
    REL_TYPE,
)
from html2docx.docx_ir.models import DocxRelationship, TargetMode


# document.xml.rels에 항상 들어가는 고정 파트 (rId1 ~ rId5)
FIXED_DOCUMENT_RELATIONSHIPS = (
    ("styles", "styles.xml"),
    ("numbering", "numbering.xml"),
    ("settings", "settings.xml"),
    ("webSettings", "webSettings.xml"),
    ("fontTable", "fontTable.xml"),
)


class RelationshipScope:
    """한 파트(.rels 파일 하나)의 관계 목록"""

    def __init__(self, file_name: str):
        self.file_name = file_name
        self._relationships: List[DocxRelationship] = []

    def add(self, rel_type: str, target: str, target_mode: TargetMode = INTERNAL_RELATIONSHIP) -> str:
        rel_id = f"rId{len(self._relationships) + 1}"
        self._relationships.append(DocxRelationship(rel_id, rel_type, target, target_mode))
        return rel_id

    @property
    def relationships(self) -> List[DocxRelationship]:
        return list(self._relationships)

    def __len__(self) -> int:
        return len(self._relationships)


class PartRegistry:
    """파트 ID 및 관계 관리"""

    def __init__(self):
        self.last_header_id = 0
        self.last_footer_id = 0
        self._scopes: Dict[str, RelationshipScope] = {}

        document_scope = self.scope(DOCUMENT_FILE_NAME)
        for rel_key, target in FIXED_DOCUMENT_RELATIONSHIPS:
            document_scope.add(REL_TYPE[rel_key], target)

    def next_header_id(self) -> int:
        self.last_header_id += 1
        return self.last_header_id

    def next_footer_id(self) -> int:
        self.last_footer_id += 1
        return self.last_footer_id

    def scope(self, file_name: str) -> RelationshipScope:
        """파트 이름(확장자 제외)의 관계 범위 (없으면 생성)"""
        existing = self._scopes.get(file_name)
        if existing is None:
            existing = RelationshipScope(file_name)
            self._scopes[file_name] = existing
        return existing

    def create_relationship(
        self,
        file_name: str,
        rel_type: str,
        target: str,
        target_mode: TargetMode = INTERNAL_RELATIONSHIP,
    ) -> str:
        return self.scope(file_name).add(rel_type, target, target_mode)

    def find(self, file_name: str) -> Optional[RelationshipScope]:
        return self._scopes.get(file_name)

    def scopes(self) -> List[RelationshipScope]:
        """.rels로 내보낼 범위들 (document는 항상, 나머지는 관계가 있을 때만)"""
        return [
            scope for name, scope in self._scopes.items()
            if name == DOCUMENT_FILE_NAME or len(scope) > 0
        ]
