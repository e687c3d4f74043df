"""DOCX IR 공통 유틸리티, 네임스페이스, 패키지 상수 정의"""

from __future__ import annotations

import math
from typing import Union

from lxml import etree


# WordprocessingML 네임스페이스
NS = {
    "w": "http://schemas.openxmlformats.org/wordprocessingml/2006/main",
    "r": "http://schemas.openxmlformats.org/officeDocument/2006/relationships",
    "a": "http://schemas.openxmlformats.org/drawingml/2006/main",
    "wp": "http://schemas.openxmlformats.org/drawingml/2006/wordprocessingDrawing",
    "pic": "http://schemas.openxmlformats.org/drawingml/2006/picture",
    "mc": "http://schemas.openxmlformats.org/markup-compatibility/2006",
    "w14": "http://schemas.microsoft.com/office/word/2010/wordml",
    "pr": "http://schemas.openxmlformats.org/package/2006/relationships",
    "ct": "http://schemas.openxmlformats.org/package/2006/content-types",
    "cp": "http://schemas.openxmlformats.org/package/2006/metadata/core-properties",
    "dc": "http://purl.org/dc/elements/1.1/",
    "dcterms": "http://purl.org/dc/terms/",
    "dcmitype": "http://purl.org/dc/dcmitype/",
    "xsi": "http://www.w3.org/2001/XMLSchema-instance",
    "xml": "http://www.w3.org/XML/1998/namespace",
}

# 본문/머리글/바닥글 루트에 선언하는 네임스페이스
PART_NSMAP = {
    "w": NS["w"],
    "r": NS["r"],
    "a": NS["a"],
    "wp": NS["wp"],
    "pic": NS["pic"],
    "mc": NS["mc"],
    "w14": NS["w14"],
}


def qname(prefix: str, local: str) -> etree.QName:
    """네임스페이스 QName 생성"""
    return etree.QName(NS[prefix], local)


def w(local: str) -> str:
    """w: 요소/속성 이름 (Clark 표기)"""
    return f"{{{NS['w']}}}{local}"


def w_val(parent: etree._Element, local: str, value: Union[str, int, None] = None) -> etree._Element:
    """<w:local w:val="..."/> 하위 요소 추가"""
    el = etree.SubElement(parent, w(local))
    if value is not None:
        el.set(w("val"), str(value))
    return el


def to_xml_bytes(root: etree._Element) -> bytes:
    """파트 XML 직렬화 (선언 + standalone)"""
    return etree.tostring(root, encoding="UTF-8", xml_declaration=True, standalone=True)


# ============================================================
# 패키지 경로 / 파일 이름
# ============================================================

RELS_FOLDER = "_rels"
WORD_FOLDER = "word"
THEME_FOLDER = "theme"
DOCPROPS_FOLDER = "docProps"

DOCUMENT_FILE_NAME = "document"
HEADER_TYPE = "header"
FOOTER_TYPE = "footer"
THEME_FILE_NAME = "theme1"
CONTENT_TYPES_PATH = "[Content_Types].xml"

INTERNAL_RELATIONSHIP = "Internal"
EXTERNAL_RELATIONSHIP = "External"

DEFAULT_HTML_STRING = "<p></p>"
PAGE_NUMBER_HTML_STRING = "<p>Page 1</p>"

# ============================================================
# 관계 타입
# ============================================================

_REL_BASE = "http://schemas.openxmlformats.org/officeDocument/2006/relationships"

REL_TYPE = {
    "officeDocument": f"{_REL_BASE}/officeDocument",
    "coreProperties": "http://schemas.openxmlformats.org/package/2006/relationships/metadata/core-properties",
    "styles": f"{_REL_BASE}/styles",
    "numbering": f"{_REL_BASE}/numbering",
    "settings": f"{_REL_BASE}/settings",
    "webSettings": f"{_REL_BASE}/webSettings",
    "fontTable": f"{_REL_BASE}/fontTable",
    "theme": f"{_REL_BASE}/theme",
    "header": f"{_REL_BASE}/header",
    "footer": f"{_REL_BASE}/footer",
    "hyperlink": f"{_REL_BASE}/hyperlink",
}

# ============================================================
# 콘텐츠 타입
# ============================================================

_WML = "application/vnd.openxmlformats-officedocument.wordprocessingml"

CONTENT_TYPE = {
    "rels": "application/vnd.openxmlformats-package.relationships+xml",
    "xml": "application/xml",
    "document": f"{_WML}.document.main+xml",
    "styles": f"{_WML}.styles+xml",
    "numbering": f"{_WML}.numbering+xml",
    "settings": f"{_WML}.settings+xml",
    "webSettings": f"{_WML}.webSettings+xml",
    "fontTable": f"{_WML}.fontTable+xml",
    "header": f"{_WML}.header+xml",
    "footer": f"{_WML}.footer+xml",
    "theme": "application/vnd.openxmlformats-officedocument.theme+xml",
    "coreProperties": "application/vnd.openxmlformats-package.core-properties+xml",
}

# 확장자 기본 콘텐츠 타입
DEFAULT_EXTENSION_TYPES = {
    "rels": CONTENT_TYPE["rels"],
    "xml": CONTENT_TYPE["xml"],
}

DOCX_MEDIA_TYPE = f"{_WML}.document"

# ============================================================
# 단위 변환
# ============================================================

EMU_PER_PIXEL = 9525
EMU_PER_TWIP = 635
TWIP_PER_POINT = 20
HIP_PER_POINT = 2
TWIP_PER_HIP = 10
POINT_PER_INCH = 72
INCH_PER_CM = 0.393701

# 기본 용지 (Letter, TWIP)
PORTRAIT_WIDTH = 12240
PORTRAIT_HEIGHT = 15840

DEFAULT_FONT = "Times New Roman"
DEFAULT_FONT_SIZE = 22  # 11pt (HIP)
DEFAULT_LANG = "en-US"
APPLICATION_NAME = "html2docx"


def round_half_up(value: float) -> int:
    """0.5를 올림하는 반올림"""
    return int(math.floor(value + 0.5))


def pixel_to_emu(pixels: float) -> int:
    """픽셀을 EMU로 변환"""
    return round_half_up(pixels * EMU_PER_PIXEL)


def emu_to_twip(emu: float) -> int:
    """EMU를 TWIP으로 변환"""
    return round_half_up(emu / EMU_PER_TWIP)


def pixel_to_twip(pixels: float) -> int:
    """픽셀을 TWIP으로 변환"""
    return emu_to_twip(pixel_to_emu(pixels))


def twip_to_hip(twip: float) -> int:
    """TWIP을 HIP(반 포인트)으로 변환"""
    return round_half_up(twip / TWIP_PER_HIP)


def pixel_to_hip(pixels: float) -> int:
    """픽셀을 HIP으로 변환"""
    return twip_to_hip(pixel_to_twip(pixels))


def point_to_twip(points: float) -> int:
    """포인트를 TWIP으로 변환"""
    return round_half_up(points * TWIP_PER_POINT)


def point_to_hip(points: float) -> int:
    """포인트를 HIP으로 변환"""
    return round_half_up(points * HIP_PER_POINT)


def inch_to_point(inches: float) -> int:
    """인치를 포인트로 변환"""
    return round_half_up(inches * POINT_PER_INCH)


def inch_to_twip(inches: float) -> int:
    """인치를 TWIP으로 변환"""
    return point_to_twip(inch_to_point(inches))


def cm_to_inch(cm: float) -> float:
    """센티미터를 인치로 변환"""
    return cm * INCH_PER_CM


def cm_to_twip(cm: float) -> int:
    """센티미터를 TWIP으로 변환"""
    return inch_to_twip(cm_to_inch(cm))
