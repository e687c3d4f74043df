"""html2docx MCP 서버"""

import asyncio
import base64
import json
import zipfile
from pathlib import Path
from typing import Any

from lxml import etree
from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import (
    Tool,
    TextContent,
    CallToolResult,
)

from html2docx import HtmlToDocx
from html2docx.docx_ir.base import NS


# MCP 서버 인스턴스
server = Server("html2docx")

W_NS = {"w": NS["w"]}

OPTIONS_SCHEMA = {
    "type": "object",
    "description": "문서 옵션 (orientation, margins, font, font_size, header, footer, page_number 등)",
}


@server.list_tools()
async def list_tools() -> list[Tool]:
    """사용 가능한 도구 목록"""
    return [
        Tool(
            name="convert_html_to_docx",
            description="HTML 파일을 DOCX (Word) 파일로 변환합니다.",
            inputSchema={
                "type": "object",
                "properties": {
                    "html_path": {
                        "type": "string",
                        "description": "변환할 HTML 파일 경로",
                    },
                    "output_path": {
                        "type": "string",
                        "description": "출력 DOCX 파일 경로 (옵션, 기본: HTML 파일명.docx)",
                    },
                    "header_path": {
                        "type": "string",
                        "description": "머리글 HTML 파일 경로 (옵션)",
                    },
                    "footer_path": {
                        "type": "string",
                        "description": "바닥글 HTML 파일 경로 (옵션)",
                    },
                    "options": OPTIONS_SCHEMA,
                },
                "required": ["html_path"],
            },
        ),
        Tool(
            name="convert_html_string_to_docx",
            description="HTML 문자열을 Base64 인코딩된 DOCX 바이트로 변환합니다.",
            inputSchema={
                "type": "object",
                "properties": {
                    "html": {
                        "type": "string",
                        "description": "본문 HTML",
                    },
                    "header_html": {
                        "type": "string",
                        "description": "머리글 HTML (옵션)",
                    },
                    "footer_html": {
                        "type": "string",
                        "description": "바닥글 HTML (옵션)",
                    },
                    "options": OPTIONS_SCHEMA,
                },
                "required": ["html"],
            },
        ),
        Tool(
            name="get_docx_info",
            description="DOCX 파일의 정보를 가져옵니다 (단락 수, 표 수, 머리글/바닥글 수 등).",
            inputSchema={
                "type": "object",
                "properties": {
                    "docx_path": {
                        "type": "string",
                        "description": "정보를 가져올 DOCX 파일 경로",
                    },
                },
                "required": ["docx_path"],
            },
        ),
    ]


@server.call_tool()
async def call_tool(name: str, arguments: dict[str, Any]) -> CallToolResult:
    """도구 실행"""
    try:
        if name == "convert_html_to_docx":
            return await convert_html_to_docx(arguments)
        elif name == "convert_html_string_to_docx":
            return await convert_html_string_to_docx(arguments)
        elif name == "get_docx_info":
            return await get_docx_info(arguments)
        else:
            return CallToolResult(
                content=[TextContent(type="text", text=f"Unknown tool: {name}")],
                isError=True,
            )
    except Exception as e:
        return CallToolResult(
            content=[TextContent(type="text", text=f"Error: {str(e)}")],
            isError=True,
        )


def _read_optional(path: Any) -> Any:
    return Path(path).read_text(encoding="utf-8") if path else None


async def convert_html_to_docx(args: dict) -> CallToolResult:
    """HTML 파일을 DOCX로 변환"""
    html_path = Path(args["html_path"])
    output_path = args.get("output_path")
    options = dict(args.get("options") or {})

    if not html_path.exists():
        return CallToolResult(
            content=[TextContent(type="text", text=f"HTML 파일을 찾을 수 없습니다: {html_path}")],
            isError=True,
        )

    if output_path is None:
        output_path = html_path.with_suffix(".docx")
    else:
        output_path = Path(output_path)

    header_html = _read_optional(args.get("header_path"))
    footer_html = _read_optional(args.get("footer_path"))
    if header_html is not None:
        options.setdefault("header", True)
    if footer_html is not None:
        options.setdefault("footer", True)

    converter = HtmlToDocx(options)
    docx_bytes = await converter.convert_async(
        html_path.read_text(encoding="utf-8"),
        header_html=header_html,
        footer_html=footer_html,
    )
    output_path.write_bytes(docx_bytes)

    return CallToolResult(
        content=[TextContent(type="text", text=f"변환 완료: {output_path}")]
    )


async def convert_html_string_to_docx(args: dict) -> CallToolResult:
    """HTML 문자열을 DOCX 바이트로 변환"""
    options = dict(args.get("options") or {})
    if args.get("header_html"):
        options.setdefault("header", True)
    if args.get("footer_html"):
        options.setdefault("footer", True)

    converter = HtmlToDocx(options)
    docx_bytes = await converter.convert_async(
        args["html"],
        header_html=args.get("header_html"),
        footer_html=args.get("footer_html"),
    )
    docx_base64 = base64.b64encode(docx_bytes).decode("utf-8")

    return CallToolResult(
        content=[TextContent(type="text", text=docx_base64)]
    )


async def get_docx_info(args: dict) -> CallToolResult:
    """DOCX 파일 정보"""
    docx_path = Path(args["docx_path"])

    if not docx_path.exists():
        return CallToolResult(
            content=[TextContent(type="text", text=f"DOCX 파일을 찾을 수 없습니다: {docx_path}")],
            isError=True,
        )

    with zipfile.ZipFile(docx_path, "r") as zf:
        document_xml = zf.read("word/document.xml")
        file_list = zf.namelist()

    root = etree.fromstring(document_xml)
    body = root.find(f"{{{NS['w']}}}body")

    info = {
        "파일": str(docx_path),
        "단락 수": len(root.findall(".//w:p", namespaces=W_NS)),
        "표 수": len(root.findall(".//w:tbl", namespaces=W_NS)),
        "최상위 블록 수": len([child for child in body if child.tag != f"{{{NS['w']}}}sectPr"]),
        "머리글 수": len([name for name in file_list if name.startswith("word/header")]),
        "바닥글 수": len([name for name in file_list if name.startswith("word/footer")]),
        "포함된 파일": file_list,
    }

    return CallToolResult(
        content=[TextContent(type="text", text=json.dumps(info, ensure_ascii=False, indent=2))]
    )


async def main():
    """MCP 서버 실행"""
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())


def run():
    asyncio.run(main())


if __name__ == "__main__":
    run()
