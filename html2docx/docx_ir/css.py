"""인라인 CSS 파싱"""

from __future__ import annotations

import re
from typing import Dict, Optional


NAMED_COLORS = {
    "black": "000000",
    "white": "FFFFFF",
    "red": "FF0000",
    "green": "008000",
    "lime": "00FF00",
    "blue": "0000FF",
    "yellow": "FFFF00",
    "cyan": "00FFFF",
    "aqua": "00FFFF",
    "magenta": "FF00FF",
    "fuchsia": "FF00FF",
    "gray": "808080",
    "grey": "808080",
    "silver": "C0C0C0",
    "maroon": "800000",
    "olive": "808000",
    "navy": "000080",
    "purple": "800080",
    "teal": "008080",
    "orange": "FFA500",
}

_HEX_COLOR = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")
_RGB_COLOR = re.compile(r"^rgba?\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*(?:,\s*[\d.]+\s*)?\)$", re.IGNORECASE)


def parse_style_attribute(style: Optional[str]) -> Dict[str, str]:
    """style="a: b; c: d" → {"a": "b", "c": "d"} (속성 이름은 소문자)"""
    declarations: Dict[str, str] = {}
    if not style:
        return declarations

    for declaration in style.split(";"):
        if ":" not in declaration:
            continue
        name, value = declaration.split(":", 1)
        name = name.strip().lower()
        value = value.strip()
        if value.lower().endswith("!important"):
            value = value[: -len("!important")].strip()
        if name and value:
            declarations[name] = value
    return declarations


def parse_color(value: Optional[str]) -> Optional[str]:
    """CSS 색상 → RRGGBB (인식하지 못하면 None)"""
    if not value:
        return None
    value = value.strip()

    named = NAMED_COLORS.get(value.lower())
    if named:
        return named

    match = _HEX_COLOR.match(value)
    if match:
        digits = match.group(1)
        if len(digits) == 3:
            digits = "".join(ch * 2 for ch in digits)
        return digits.upper()

    match = _RGB_COLOR.match(value)
    if match:
        channels = [min(int(channel), 255) for channel in match.groups()]
        return "".join(f"{channel:02X}" for channel in channels)

    return None


def first_font_family(value: Optional[str]) -> Optional[str]:
    """font-family 목록의 첫 글꼴 (따옴표 제거)"""
    if not value:
        return None
    family = value.split(",")[0].strip().strip("'\"").strip()
    return family or None
