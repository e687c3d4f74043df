"""목록 컴포넌트 (목록 단락, numbering.xml)"""

from .writer import ListWriter, NumberingWriter

__all__ = ["ListWriter", "NumberingWriter"]
