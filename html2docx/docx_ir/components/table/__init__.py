"""표 컴포넌트"""

from .writer import TableWriter

__all__ = ["TableWriter"]
