"""DOCX 패키지 컴포넌트 모듈

_rels/.rels, 파트별 .rels, [Content_Types].xml, docProps/core.xml 처리
"""

from .writer import PackageWriter

__all__ = ["PackageWriter"]
