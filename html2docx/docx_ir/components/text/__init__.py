"""텍스트 런 컴포넌트"""

from .writer import TextWriter

__all__ = ["TextWriter"]
