"""문서 옵션 정규화 및 병합

사용자 옵션의 길이 값("96px", "2cm", "1in", "12pt")을 OOXML 단위로 바꾸고
기본 옵션 위에 덮어씁니다.

- 용지 크기/여백: TWIP (1/20 pt)
- 글자 크기: HIP (1/2 pt)
"""

from __future__ import annotations

import copy
import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from html2docx.docx_ir.base import (
    APPLICATION_NAME,
    DEFAULT_FONT,
    DEFAULT_FONT_SIZE,
    DEFAULT_LANG,
    PORTRAIT_HEIGHT,
    PORTRAIT_WIDTH,
    cm_to_twip,
    inch_to_twip,
    pixel_to_hip,
    pixel_to_twip,
    point_to_hip,
    point_to_twip,
)

logger = logging.getLogger(__name__)


PORTRAIT_ORIENTATION = "portrait"
LANDSCAPE_ORIENTATION = "landscape"

PORTRAIT_MARGINS = {
    "top": 1440,
    "right": 1800,
    "bottom": 1440,
    "left": 1800,
    "header": 720,
    "footer": 720,
    "gutter": 0,
}

LANDSCAPE_MARGINS = {
    "top": 1800,
    "right": 1440,
    "bottom": 1800,
    "left": 1440,
    "header": 720,
    "footer": 720,
    "gutter": 0,
}

DEFAULT_DOCUMENT_OPTIONS: Dict[str, Any] = {
    "orientation": PORTRAIT_ORIENTATION,
    "page_size": {"width": PORTRAIT_WIDTH, "height": PORTRAIT_HEIGHT},
    "margins": PORTRAIT_MARGINS,
    "title": "Microsoft Word Document",
    "subject": "",
    "creator": APPLICATION_NAME,
    "keywords": [APPLICATION_NAME],
    "description": "",
    "last_modified_by": APPLICATION_NAME,
    "revision": 1,
    "created_at": None,  # None이면 생성 시각
    "modified_at": None,
    "header": False,
    "footer": False,
    "font": DEFAULT_FONT,
    "font_size": DEFAULT_FONT_SIZE,
    "complex_script_font_size": DEFAULT_FONT_SIZE,
    "lang": DEFAULT_LANG,
    "table": {"row": {"cant_split": False}},
    "page_number": False,
    "skip_first_header_footer": False,
    "line_number": False,
    "line_number_options": {"count_by": 1, "start": 0, "restart": "continuous"},
    "numbering": {"default_ordered_list_style_type": "decimal"},
    "decode_unicode": False,
    "legacy_field_char_spelling": False,
}

# 단위 변환 대상 키
DIMENSION_KEYS = ("page_size", "margins")
FONT_SIZE_KEYS = ("font_size", "complex_script_font_size")


class UnitKind(str, Enum):
    """길이 값 분류"""
    PIXEL = "pixel"
    CENTIMETER = "centimeter"
    INCH = "inch"
    POINT = "point"
    NATIVE = "native"
    PASSTHROUGH = "passthrough"
    EMPTY = "empty"


_UNIT_PATTERNS = (
    (UnitKind.PIXEL, re.compile(r"^\s*(\d+(?:\.\d+)?|\.\d+)\s*px\s*$", re.IGNORECASE)),
    (UnitKind.CENTIMETER, re.compile(r"^\s*(\d+(?:\.\d+)?|\.\d+)\s*cm\s*$", re.IGNORECASE)),
    (UnitKind.INCH, re.compile(r"^\s*(\d+(?:\.\d+)?|\.\d+)\s*in\s*$", re.IGNORECASE)),
    (UnitKind.POINT, re.compile(r"^\s*(\d+(?:\.\d+)?|\.\d+)\s*pt\s*$", re.IGNORECASE)),
)
_NATIVE_PATTERN = re.compile(r"^\s*-?\d+\s*$")


@dataclass(frozen=True)
class ParsedLength:
    """분류된 길이 값

    kind가 단위 계열이면 magnitude에 숫자, NATIVE이면 정수,
    PASSTHROUGH이면 raw에 원래 값이 그대로 남습니다.
    """
    kind: UnitKind
    magnitude: Optional[float] = None
    raw: Any = None


def is_empty_value(value: Any) -> bool:
    """기본값으로 대체해야 하는 값인지 (None, "", 0, "0", False)"""
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value.strip() in ("", "0")
    if isinstance(value, (int, float)):
        return value == 0
    return False


def parse_length(value: Any) -> ParsedLength:
    """길이 값을 단위별로 분류"""
    if is_empty_value(value):
        return ParsedLength(UnitKind.EMPTY, raw=value)

    if isinstance(value, bool):
        return ParsedLength(UnitKind.PASSTHROUGH, raw=value)

    if isinstance(value, (int, float)):
        return ParsedLength(UnitKind.NATIVE, magnitude=value, raw=int(value))

    if isinstance(value, str):
        for kind, pattern in _UNIT_PATTERNS:
            match = pattern.match(value)
            if match:
                return ParsedLength(kind, magnitude=float(match.group(1)), raw=value)
        if _NATIVE_PATTERN.match(value):
            return ParsedLength(UnitKind.NATIVE, magnitude=int(value), raw=int(value))

    return ParsedLength(UnitKind.PASSTHROUGH, raw=value)


def to_twip(parsed: ParsedLength) -> Any:
    """분류된 길이를 TWIP으로 변환 (EMPTY는 None)"""
    if parsed.kind == UnitKind.PIXEL:
        return pixel_to_twip(parsed.magnitude)
    if parsed.kind == UnitKind.CENTIMETER:
        return cm_to_twip(parsed.magnitude)
    if parsed.kind == UnitKind.INCH:
        return inch_to_twip(parsed.magnitude)
    if parsed.kind == UnitKind.POINT:
        return point_to_twip(parsed.magnitude)
    if parsed.kind == UnitKind.EMPTY:
        return None
    if parsed.kind == UnitKind.PASSTHROUGH:
        logger.debug("Unrecognized length %r passed through unchanged", parsed.raw)
    return parsed.raw


def to_hip(parsed: ParsedLength) -> Any:
    """분류된 글자 크기를 HIP으로 변환 (EMPTY는 None)"""
    if parsed.kind == UnitKind.POINT:
        return point_to_hip(parsed.magnitude)
    if parsed.kind == UnitKind.PIXEL:
        return pixel_to_hip(parsed.magnitude)
    if parsed.kind == UnitKind.EMPTY:
        return None
    if parsed.kind != UnitKind.NATIVE:
        logger.debug("Font size %r passed through unchanged", parsed.raw)
    return parsed.raw


def normalize_units(
    dimensions: Any,
    default_dimensions: Mapping[str, Any],
) -> Optional[Dict[str, Any]]:
    """복합 길이 설정(page_size, margins)의 하위 필드별 정규화

    각 하위 필드는 독립적으로 변환되고, 비어 있거나 누락된 필드는
    같은 이름의 기본값으로 채웁니다.
    """
    if not isinstance(dimensions, Mapping):
        return None

    result: Dict[str, Any] = {}
    for key in list(default_dimensions) + [k for k in dimensions if k not in default_dimensions]:
        parsed = parse_length(dimensions.get(key))
        if parsed.kind == UnitKind.EMPTY:
            result[key] = default_dimensions.get(key)
        else:
            result[key] = to_twip(parsed)
    return result


def fixup_font_size(font_size: Any) -> Any:
    """글자 크기 정규화 (HIP, 없으면 None)"""
    return to_hip(parse_length(font_size))


def default_options_for(orientation: Optional[str] = None) -> Dict[str, Any]:
    """방향에 맞는 기본 옵션 사본"""
    defaults = copy.deepcopy(DEFAULT_DOCUMENT_OPTIONS)
    if orientation == LANDSCAPE_ORIENTATION:
        defaults["orientation"] = LANDSCAPE_ORIENTATION
        defaults["page_size"] = {"width": PORTRAIT_HEIGHT, "height": PORTRAIT_WIDTH}
        defaults["margins"] = dict(LANDSCAPE_MARGINS)
    return defaults


def normalize_document_options(
    document_options: Mapping[str, Any],
    defaults: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    """사용자 옵션의 단위 정규화 (입력은 변경하지 않음)"""
    if defaults is None:
        defaults = default_options_for(document_options.get("orientation"))

    normalized = dict(document_options)
    for key, value in document_options.items():
        if key in DIMENSION_KEYS:
            normalized[key] = normalize_units(value, defaults[key])
        elif key in FONT_SIZE_KEYS:
            normalized[key] = fixup_font_size(value)
    return normalized


def merge_options(options: Mapping[str, Any], patch: Mapping[str, Any]) -> Dict[str, Any]:
    """키 단위 덮어쓰기 병합 (한 단계)"""
    merged = dict(options)
    merged.update(patch)
    return merged


def resolve_document_options(document_options: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
    """정규화 후 기본 옵션 위에 병합한 최종 옵션"""
    document_options = document_options or {}
    defaults = default_options_for(document_options.get("orientation"))
    normalized = normalize_document_options(document_options, defaults)

    # page_size/margins가 dict가 아니면 None이 되므로 기본값 유지
    for key in DIMENSION_KEYS:
        if key in normalized and normalized[key] is None:
            del normalized[key]

    return merge_options(defaults, normalized)


