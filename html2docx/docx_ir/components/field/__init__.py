"""필드 컴포넌트 (PAGE/NUMPAGES 필드 코드, 바닥글 쪽 번호 삽입)"""

from .writer import FieldWriter, inject_page_fields

__all__ = ["FieldWriter", "inject_page_fields"]
