"""
html2docx - HTML을 DOCX로 변환하는 라이브러리
"""

from html2docx.core import HtmlToDocx
from html2docx.docx_ir import DocxArchive, add_files_to_container
from html2docx.exceptions import Html2DocxError, HtmlParseError, PackageError, RenderError

__version__ = "0.1.0"
__all__ = [
    "HtmlToDocx",
    "DocxArchive",
    "add_files_to_container",
    "Html2DocxError",
    "HtmlParseError",
    "RenderError",
    "PackageError",
]
