"""API 서버 모듈"""

from html2docx.api.server import ConvertRequest, app

__all__ = [
    "app",
    "ConvertRequest",
]
