"""
HtmlToDocx 메인 클래스
"""

import asyncio
import logging
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from html2docx.docx_ir import DocxArchive, add_files_to_container

logger = logging.getLogger(__name__)


class HtmlToDocx:
    """HTML을 DOCX로 변환하는 메인 클래스"""

    def __init__(self, options: Optional[Mapping[str, Any]] = None):
        """
        Args:
            options: 문서 옵션 (orientation, margins, font, header, footer, page_number 등)
        """
        self.options = dict(options or {})

    async def convert_async(
        self,
        html: str,
        header_html: Optional[str] = None,
        footer_html: Optional[str] = None,
    ) -> bytes:
        """
        HTML을 DOCX 바이트로 변환 (코루틴)

        Args:
            html: 본문 HTML
            header_html: 머리글 HTML (options["header"]가 참일 때 사용)
            footer_html: 바닥글 HTML (options["footer"]가 참일 때 사용)

        Returns:
            DOCX 파일 바이트
        """
        archive = DocxArchive()
        try:
            await add_files_to_container(
                archive,
                html,
                self.options,
                header_html=header_html,
                footer_html=footer_html,
            )
        finally:
            archive.close()
        return archive.getvalue()

    def convert(
        self,
        html: str,
        output_path: Union[str, Path],
        header_html: Optional[str] = None,
        footer_html: Optional[str] = None,
    ) -> Path:
        """
        HTML을 DOCX 파일로 변환

        Args:
            html: 본문 HTML
            output_path: 출력 DOCX 파일 경로

        Returns:
            생성된 DOCX 파일 경로
        """
        output_path = Path(output_path)
        data = self.convert_bytes(html, header_html=header_html, footer_html=footer_html)
        output_path.write_bytes(data)
        logger.info("Wrote %s (%d bytes)", output_path, len(data))
        return output_path

    def convert_bytes(
        self,
        html: str,
        header_html: Optional[str] = None,
        footer_html: Optional[str] = None,
    ) -> bytes:
        """HTML을 DOCX 바이트로 변환"""
        return asyncio.run(self.convert_async(html, header_html=header_html, footer_html=footer_html))
