"""단락 컴포넌트"""

from .writer import ParagraphWriter

__all__ = ["ParagraphWriter"]
