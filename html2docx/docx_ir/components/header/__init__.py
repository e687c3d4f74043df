"""머리글/바닥글 컴포넌트 (header{n}.xml, footer{n}.xml)"""

from .writer import HeaderFooterWriter

__all__ = ["HeaderFooterWriter"]
