"""필드 Writer - PAGE / NUMPAGES 필드 코드와 바닥글 쪽 번호 삽입"""

from __future__ import annotations

import logging
import re
from typing import List

from lxml import etree

from html2docx.docx_ir.base import NS, w, w_val

logger = logging.getLogger(__name__)


# 바닥글에서 쪽 번호 자리를 표시하는 문자열
PAGE_PLACEHOLDER_TOKEN = "Page"

FIELD_CHAR_BEGIN = "begin"
FIELD_CHAR_SEPARATE = "separate"
LEGACY_FIELD_CHAR_SEPARATE = "seperate"  # 초기 생성기와의 호환용 철자
FIELD_CHAR_END = "end"

FIELD_FONT_SIZE = 20  # 10pt (HIP)

_TEXT_START_TAG = re.compile(r"<w:t[\s>]")
_TEXT_END_TAG = "</w:t>"


class FieldWriter:
    """필드 코드 런 생성

    필드 하나는 begin / instrText / separate / end 네 개의 런으로 구성됩니다.
    구분 런의 fldCharType 기본값은 표준 철자 "separate"입니다. 초기 생성기가 쓰던
    "seperate" 철자가 필요한 소비자는 legacy_separator=True (문서 옵션
    legacy_field_char_spelling)로 되돌릴 수 있습니다.
    """

    def __init__(self, legacy_separator: bool = False):
        self.separator = LEGACY_FIELD_CHAR_SEPARATE if legacy_separator else FIELD_CHAR_SEPARATE

    def build_field_runs(self, instruction: str) -> List[etree._Element]:
        """필드 코드 네 런 생성 (PAGE, NUMPAGES 등)"""
        runs = [self._build_field_char(FIELD_CHAR_BEGIN)]

        instr_run = etree.Element(w("r"))
        rpr = etree.SubElement(instr_run, w("rPr"))
        etree.SubElement(rpr, w("b"))
        w_val(rpr, "sz", FIELD_FONT_SIZE)
        instr = etree.SubElement(instr_run, w("instrText"))
        instr.text = instruction
        runs.append(instr_run)

        runs.append(self._build_field_char(self.separator))
        runs.append(self._build_field_char(FIELD_CHAR_END))
        return runs

    def build_label_run(self, text: str) -> etree._Element:
        """고정 문구 런 ("Page ", " of ")"""
        run = etree.Element(w("r"))
        rpr = etree.SubElement(run, w("rPr"))
        w_val(rpr, "sz", FIELD_FONT_SIZE)
        t = etree.SubElement(run, w("t"))
        t.set(f"{{{NS['xml']}}}space", "preserve")
        t.text = text
        return run

    def build_page_number_runs(self) -> List[etree._Element]:
        """Page 라벨 + PAGE 필드 + of 라벨 + NUMPAGES 필드"""
        runs = [self.build_label_run("Page ")]
        runs.extend(self.build_field_runs("PAGE"))
        runs.append(self.build_label_run(" of "))
        runs.extend(self.build_field_runs("NUMPAGES"))
        return runs

    def build_page_number_fragment(self) -> str:
        """바닥글 w:t 자리에 끼워 넣을 XML 문자열

        자리 표시자가 있던 런을 닫고 필드 런들을 형제로 놓은 뒤 빈 런을 다시 엽니다.
        """
        wrapper = etree.Element(w("p"), nsmap={"w": NS["w"]})
        for run in self.build_page_number_runs():
            wrapper.append(run)
        return "</w:r>" + _serialize_children(wrapper) + "<w:r>"

    def _build_field_char(self, field_char_type: str) -> etree._Element:
        run = etree.Element(w("r"))
        fld_char = etree.SubElement(run, w("fldChar"))
        fld_char.set(w("fldCharType"), field_char_type)
        return run


def _serialize_children(wrapper: etree._Element) -> str:
    """래퍼 요소의 자식들만 직렬화 (네임스페이스 선언은 래퍼에만 남음)"""
    serialized = etree.tostring(wrapper, encoding="unicode")
    start = serialized.index(">") + 1
    end = serialized.rindex("</")
    return serialized[start:end]


def inject_page_fields(footer_xml: str, fragment: str, token: str = PAGE_PLACEHOLDER_TOKEN) -> str:
    """바닥글 XML의 쪽 번호 자리 표시자를 필드 코드 조각으로 교체

    1. token을 뒤에서부터 찾는다 (앞쪽의 같은 문구는 건드리지 않음)
    2. 그 앞의 가장 가까운 '<'와 뒤의 가장 가까운 '>'를 경계로 잡는다
    3. 경계가 w:t 요소 하나를 감쌀 때만 앞부분 + fragment + 뒷부분으로 이어 붙인다

    태그 안(글꼴 이름, 앵커 등)에 있는 token은 건너뛰고 더 앞의 위치를 찾습니다.
    적합한 위치가 없으면 입력을 그대로 반환합니다.
    """
    search_end = len(footer_xml)
    while True:
        index = footer_xml.rfind(token, 0, search_end)
        if index == -1:
            logger.debug("Page placeholder not found in footer text; leaving footer unchanged")
            return footer_xml
        search_end = index

        first = footer_xml[:index]
        last = footer_xml[index + len(token):]

        open_index = first.rfind("<")
        close_index = last.find(">")
        if open_index == -1 or close_index == -1:
            continue
        # 경계가 <w:t ...>텍스트</w:t> 하나와 정확히 맞아야 함
        if not _TEXT_START_TAG.match(first, open_index) or ">" not in first[open_index:]:
            continue
        end_tag_index = last.find("<")
        if end_tag_index == -1 or not last.startswith(_TEXT_END_TAG, end_tag_index):
            continue

        return first[:open_index] + fragment + last[close_index + 1:]
