"""DOCX 아카이브 - 기록한 파트와 콘텐츠 타입을 추적하는 zip 싱크"""

from __future__ import annotations

import io
import logging
import zipfile
from pathlib import Path
from typing import Dict, List, Union

from html2docx.docx_ir.models import ArchivePart
from html2docx.exceptions import PackageError

logger = logging.getLogger(__name__)


class DocxArchive:
    """메모리 zip 아카이브

    모든 파트는 한 번만 기록할 수 있습니다. 기록 순서와 콘텐츠 타입은
    [Content_Types].xml 생성에 사용됩니다.
    """

    def __init__(self):
        self._buffer = io.BytesIO()
        self._zip = zipfile.ZipFile(self._buffer, "w", compression=zipfile.ZIP_DEFLATED)
        self._parts: Dict[str, ArchivePart] = {}
        self._closed = False

    def write(self, path: str, data: Union[bytes, str], content_type: str) -> None:
        """파트 기록"""
        if self._closed:
            raise PackageError("Archive is already closed", part_name=path)
        if path in self._parts:
            raise PackageError(f"Part written twice: {path}", part_name=path)

        if isinstance(data, str):
            data = data.encode("utf-8")

        self._zip.writestr(path, data)
        self._parts[path] = ArchivePart(path=path, content_type=content_type)
        logger.debug("Wrote part %s (%d bytes)", path, len(data))

    def __contains__(self, path: str) -> bool:
        return path in self._parts

    @property
    def parts(self) -> List[ArchivePart]:
        return list(self._parts.values())

    def close(self) -> None:
        if not self._closed:
            self._zip.close()
            self._closed = True

    def getvalue(self) -> bytes:
        """zip 바이트 반환 (아카이브를 닫음)"""
        self.close()
        return self._buffer.getvalue()

    def save(self, output_path: Union[str, Path]) -> Path:
        output_path = Path(output_path)
        with open(output_path, "wb") as f:
            f.write(self.getvalue())
        return output_path
