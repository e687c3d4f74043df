"""HTML → 요소 트리 변환"""

from __future__ import annotations

import html
from typing import Optional

from lxml import etree
from lxml import html as lxml_html

from html2docx.exceptions import HtmlParseError


ROOT_TAG = "div"


def convert_html(html_string: Optional[str]) -> etree._Element:
    """HTML 조각을 하나의 <div> 루트 아래 요소 트리로 변환"""
    if html_string is None or not html_string.strip():
        return lxml_html.Element(ROOT_TAG)

    try:
        return lxml_html.fragment_fromstring(html_string, create_parent=ROOT_TAG)
    except (etree.ParserError, etree.XMLSyntaxError, ValueError) as e:
        raise HtmlParseError(f"Failed to parse HTML: {e}") from e


def decode_html_entities(html_string: Optional[str]) -> Optional[str]:
    """HTML 엔티티(&amp;, &#x...;) 디코딩"""
    if html_string is None:
        return None
    return html.unescape(html_string)
