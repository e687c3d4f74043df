"""Shared helpers for package assembly tests."""

import asyncio
import io
import zipfile

from lxml import etree

from html2docx.docx_ir import DocxArchive, add_files_to_container
from html2docx.docx_ir.base import NS

W = {"w": NS["w"]}
REL_NS = {"pr": NS["pr"]}
CT_NS = {"ct": NS["ct"]}


def build_docx(html, options=None, header_html=None, footer_html=None) -> zipfile.ZipFile:
    """HTML을 변환해 결과 zip을 연다"""
    archive = DocxArchive()
    asyncio.run(add_files_to_container(archive, html, options, header_html, footer_html))
    return zipfile.ZipFile(io.BytesIO(archive.getvalue()))


def read_xml(docx: zipfile.ZipFile, name: str) -> etree._Element:
    return etree.fromstring(docx.read(name))

