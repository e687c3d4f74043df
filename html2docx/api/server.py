"""HTML → DOCX API 서버"""

import logging
import os
from typing import Any, Dict, Optional

from fastapi import FastAPI, File, Form, HTTPException, UploadFile
from fastapi.responses import Response
from pydantic import BaseModel, Field

from html2docx import __version__
from html2docx.core import HtmlToDocx
from html2docx.docx_ir.base import DOCX_MEDIA_TYPE
from html2docx.exceptions import HtmlParseError

logger = logging.getLogger(__name__)

# 업로드 최대 크기 (기본 10MB)
MAX_UPLOAD_BYTES = int(os.getenv("HTML2DOCX_MAX_UPLOAD_BYTES", str(10 * 1024 * 1024)))

app = FastAPI(
    title="html2docx API",
    description="HTML을 DOCX로 변환하는 API",
    version=__version__,
)


class ConvertRequest(BaseModel):
    """JSON 변환 요청"""

    html: str = Field(..., description="본문 HTML")
    header_html: Optional[str] = Field(None, description="머리글 HTML")
    footer_html: Optional[str] = Field(None, description="바닥글 HTML")
    options: Dict[str, Any] = Field(default_factory=dict, description="문서 옵션")
    filename: str = Field("document.docx", description="응답 파일 이름")


def _docx_response(docx_bytes: bytes, filename: str) -> Response:
    if not filename.lower().endswith(".docx"):
        filename = f"{filename}.docx"
    return Response(
        content=docx_bytes,
        media_type=DOCX_MEDIA_TYPE,
        headers={
            "Content-Disposition": f'attachment; filename="{filename}"',
            "X-Docx-Size": str(len(docx_bytes)),
        },
    )


async def _convert(
    html: str,
    options: Dict[str, Any],
    header_html: Optional[str],
    footer_html: Optional[str],
) -> bytes:
    try:
        converter = HtmlToDocx(options)
        return await converter.convert_async(html, header_html=header_html, footer_html=footer_html)
    except HtmlParseError as e:
        raise HTTPException(status_code=400, detail=f"Invalid HTML: {str(e)}")
    except Exception as e:
        logger.exception("Conversion failed")
        raise HTTPException(status_code=500, detail=f"Conversion failed: {str(e)}")


@app.post("/v1/convert")
async def convert_html(request: ConvertRequest) -> Response:
    """
    HTML 문자열을 DOCX로 변환

    - **html**: 본문 HTML
    - **header_html** / **footer_html**: options.header / options.footer가 참일 때 사용
    - **options**: orientation, margins, font, font_size, page_number 등
    """
    if len(request.html.encode("utf-8")) > MAX_UPLOAD_BYTES:
        raise HTTPException(status_code=413, detail="HTML too large")

    docx_bytes = await _convert(request.html, request.options, request.header_html, request.footer_html)
    return _docx_response(docx_bytes, request.filename)


@app.post("/v1/convert/file")
async def convert_html_file(
    file: UploadFile = File(...),
    orientation: str = Form("portrait"),
    page_number: bool = Form(False),
    decode_unicode: bool = Form(False),
) -> Response:
    """
    HTML 파일을 DOCX로 변환

    - **file**: HTML 파일 (.html, .htm)
    - **page_number**: 바닥글에 쪽 번호
    """
    if not file.filename or not file.filename.lower().endswith((".html", ".htm")):
        raise HTTPException(status_code=400, detail="HTML file required")

    html_bytes = await file.read()
    if len(html_bytes) > MAX_UPLOAD_BYTES:
        raise HTTPException(status_code=413, detail="HTML too large")

    try:
        html = html_bytes.decode("utf-8")
    except UnicodeDecodeError:
        raise HTTPException(status_code=400, detail="HTML file must be UTF-8")

    options = {
        "orientation": orientation,
        "page_number": page_number,
        "footer": page_number,
        "decode_unicode": decode_unicode,
    }
    docx_bytes = await _convert(html, options, None, None)

    output_filename = file.filename.rsplit(".", 1)[0] + ".docx"
    return _docx_response(docx_bytes, output_filename)


@app.get("/health")
async def health_check() -> dict:
    """헬스 체크"""
    return {"status": "ok", "version": __version__}


def main():
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", "8080")))


if __name__ == "__main__":
    main()
