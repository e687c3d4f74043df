"""목록 Writer - 목록 단락 번호 속성과 numbering.xml 생성"""

from __future__ import annotations

from typing import Optional

from lxml import etree

from html2docx.docx_ir.base import PART_NSMAP, to_xml_bytes, w, w_val
from html2docx.docx_ir.models import ListDefinition, ListRegistry


# CSS list-style-type → w:numFmt
NUMBER_FORMAT_MAP = {
    "decimal": "decimal",
    "decimal-leading-zero": "decimalZero",
    "lower-alpha": "lowerLetter",
    "lower-latin": "lowerLetter",
    "upper-alpha": "upperLetter",
    "upper-latin": "upperLetter",
    "lower-roman": "lowerRoman",
    "upper-roman": "upperRoman",
}

# <ol type="..."> → list-style-type
OL_TYPE_MAP = {
    "1": "decimal",
    "a": "lower-alpha",
    "A": "upper-alpha",
    "i": "lower-roman",
    "I": "upper-roman",
}

BULLET_SYMBOLS = ("•", "o", "▪")
BULLET_FONTS = ("Symbol", "Courier New", "Wingdings")

LEVEL_COUNT = 9
INDENT_STEP = 720
HANGING_INDENT = 360


class NumberingWriter:
    """numbering.xml 생성"""

    def build_numbering_xml(self, registry: ListRegistry) -> bytes:
        root = etree.Element(w("numbering"), nsmap=PART_NSMAP)

        # 스키마 순서: abstractNum 전부 → num 전부
        for definition in registry.lists:
            root.append(self._build_abstract_num(definition))
        for definition in registry.lists:
            num = etree.SubElement(root, w("num"))
            num.set(w("numId"), str(definition.num_id))
            w_val(num, "abstractNumId", definition.abstract_num_id)

        return to_xml_bytes(root)

    def _build_abstract_num(self, definition: ListDefinition) -> etree._Element:
        abstract = etree.Element(w("abstractNum"))
        abstract.set(w("abstractNumId"), str(definition.abstract_num_id))
        w_val(abstract, "multiLevelType", "hybridMultilevel")

        for level in range(LEVEL_COUNT):
            abstract.append(self._build_level(definition, level))
        return abstract

    def _build_level(self, definition: ListDefinition, level: int) -> etree._Element:
        lvl = etree.Element(w("lvl"))
        lvl.set(w("ilvl"), str(level))
        w_val(lvl, "start", 1)

        if definition.kind == "bullet":
            w_val(lvl, "numFmt", "bullet")
            w_val(lvl, "lvlText", BULLET_SYMBOLS[level % len(BULLET_SYMBOLS)])
        else:
            w_val(lvl, "numFmt", NUMBER_FORMAT_MAP.get(definition.style_type, "decimal"))
            w_val(lvl, "lvlText", f"%{level + 1}.")
        w_val(lvl, "lvlJc", "left")

        ppr = etree.SubElement(lvl, w("pPr"))
        ind = etree.SubElement(ppr, w("ind"))
        ind.set(w("left"), str(INDENT_STEP * (level + 1)))
        ind.set(w("hanging"), str(HANGING_INDENT))

        if definition.kind == "bullet":
            rpr = etree.SubElement(lvl, w("rPr"))
            fonts = etree.SubElement(rpr, w("rFonts"))
            font = BULLET_FONTS[level % len(BULLET_FONTS)]
            fonts.set(w("ascii"), font)
            fonts.set(w("hAnsi"), font)
            fonts.set(w("hint"), "default")
        return lvl


class ListWriter:
    """목록 정의 등록"""

    def __init__(self, registry: ListRegistry, default_ordered_style: str = "decimal"):
        self.registry = registry
        self.default_ordered_style = default_ordered_style

    def create_list(self, tag: str, style_type: Optional[str] = None, ol_type: Optional[str] = None) -> ListDefinition:
        """ul/ol 하나에 대한 번호 정의 생성"""
        if tag == "ul":
            return self.registry.create("bullet")

        resolved = style_type or OL_TYPE_MAP.get(ol_type or "") or self.default_ordered_style
        if resolved not in NUMBER_FORMAT_MAP:
            resolved = "decimal"
        return self.registry.create("ordered", resolved)
