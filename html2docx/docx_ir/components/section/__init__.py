"""섹션 컴포넌트 (w:sectPr)"""

from .writer import SectionWriter

__all__ = ["SectionWriter"]
