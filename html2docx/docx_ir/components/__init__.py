"""DOCX IR 컴포넌트 모듈

각 컴포넌트는 writer.py를 포함합니다.
"""

from .text import TextWriter
from .paragraph import ParagraphWriter
from .hyperlink import HyperlinkWriter
from .list import ListWriter, NumberingWriter
from .table import TableWriter
from .field import FieldWriter, inject_page_fields
from .section import SectionWriter
from .header import HeaderFooterWriter
from .package import PackageWriter
from .styles import StylesWriter

__all__ = [
    # Text
    "TextWriter",
    # Paragraph
    "ParagraphWriter",
    # Hyperlink
    "HyperlinkWriter",
    # List (numbering.xml)
    "ListWriter", "NumberingWriter",
    # Table
    "TableWriter",
    # Field (PAGE / NUMPAGES)
    "FieldWriter", "inject_page_fields",
    # Section
    "SectionWriter",
    # Header / Footer
    "HeaderFooterWriter",
    # Package (.rels, [Content_Types].xml, core.xml)
    "PackageWriter",
    # Styles (styles, fontTable, settings, webSettings, theme)
    "StylesWriter",
]
