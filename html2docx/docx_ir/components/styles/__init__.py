"""스타일 컴포넌트 (styles.xml, fontTable.xml, settings.xml, webSettings.xml, theme1.xml)"""

from .writer import StylesWriter

__all__ = ["StylesWriter"]
