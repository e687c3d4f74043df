"""하이퍼링크 컴포넌트"""

from .writer import HyperlinkWriter

__all__ = ["HyperlinkWriter"]
