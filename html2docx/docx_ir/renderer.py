"""HTML 요소 트리 → WordprocessingML 블록 변환

블록 요소(p, h1-h6, 목록, 표 ...)는 w:p / w:tbl로, 인라인 요소는 런 서식으로
변환합니다. 링크는 소유 파트의 관계 범위에 외부 관계로 등록됩니다.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional, Tuple

from lxml import etree

from html2docx.docx_ir.base import (
    DOCUMENT_FILE_NAME,
    EXTERNAL_RELATIONSHIP,
    REL_TYPE,
)
from html2docx.docx_ir.components import (
    HyperlinkWriter,
    ListWriter,
    ParagraphWriter,
    TableWriter,
    TextWriter,
)
from html2docx.docx_ir.components.hyperlink.writer import HYPERLINK_STYLE_ID
from html2docx.docx_ir.components.paragraph.writer import ALIGNMENT_MAP
from html2docx.docx_ir.components.text.writer import CODE_FONT
from html2docx.docx_ir.css import first_font_family, parse_color, parse_style_attribute
from html2docx.docx_ir.document import DocxDocument
from html2docx.docx_ir.models import ParagraphStyle, RunStyle, TableCellSpec
from html2docx.docx_ir.options import fixup_font_size
from html2docx.exceptions import Html2DocxError, RenderError

logger = logging.getLogger(__name__)


# ============================================================
# 태그 분류
# ============================================================

HEADING_LEVELS = {f"h{level}": level for level in range(1, 7)}

LIST_TAGS = ("ul", "ol")

CONTAINER_TAGS = {
    "div", "section", "article", "header", "footer", "main", "nav", "aside",
    "figure", "figcaption", "address", "body", "html", "center", "dl", "dd", "dt",
}

BLOCK_TAGS = (
    CONTAINER_TAGS
    | set(HEADING_LEVELS)
    | set(LIST_TAGS)
    | {"p", "blockquote", "pre", "hr", "li", "table"}
)

TABLE_SECTION_TAGS = ("thead", "tbody", "tfoot")
TABLE_CELL_TAGS = ("td", "th")

SKIPPED_TAGS = {"img", "script", "style", "head", "title", "meta", "link", "svg", "object", "iframe"}

BOLD_TAGS = {"b", "strong"}
ITALIC_TAGS = {"i", "em", "cite", "var", "dfn"}
UNDERLINE_TAGS = {"u", "ins"}
STRIKE_TAGS = {"s", "strike", "del"}
CODE_TAGS = {"code", "kbd", "samp", "tt"}

MARK_HIGHLIGHT = "FFFF00"

# <font size="1..7"> → pt
FONT_TAG_SIZES = {"1": 8, "2": 10, "3": 12, "4": 14, "5": 18, "6": 24, "7": 36}

PAGE_BREAK_VALUES = ("always", "page")
PAGE_BREAK_CLASS = "page-break"

_WHITESPACE = re.compile(r"[ \t\r\n\f]+")


# ============================================================
# 렌더링 상태
# ============================================================

@dataclass(frozen=True)
class RenderContext:
    scope: str = DOCUMENT_FILE_NAME  # 관계를 등록할 파트 이름
    list_level: int = -1
    preserve_whitespace: bool = False


@dataclass
class InlineItem:
    """단락으로 묶기 전의 인라인 조각"""
    kind: str = "text"  # text, break, page_break
    text: str = ""
    style: RunStyle = field(default_factory=RunStyle)
    href: Optional[str] = None


def _tag_name(element: etree._Element) -> Optional[str]:
    """요소 태그 이름 (주석/처리 지시문은 None)"""
    if not isinstance(element.tag, str):
        return None
    return element.tag.lower()


def _css(element: etree._Element) -> Dict[str, str]:
    return parse_style_attribute(element.get("style"))


def _span_value(value: Optional[str]) -> int:
    try:
        return max(int(value), 1)
    except (TypeError, ValueError):
        return 1


class DocxRenderer:
    """HTML 트리를 본문/머리글/바닥글 블록으로 변환"""

    def __init__(self, document: DocxDocument):
        self.document = document
        self.text_writer = TextWriter()
        self.paragraph_writer = ParagraphWriter()
        self.hyperlink_writer = HyperlinkWriter()
        self.list_writer = ListWriter(document.lists, document.default_ordered_list_style)
        self.table_writer = TableWriter(cant_split_rows=document.table_row_cant_split)

    async def render(
        self,
        tree: etree._Element,
        relationship_scope: str = DOCUMENT_FILE_NAME,
    ) -> List[etree._Element]:
        """트리 루트의 자식들을 블록 목록으로 변환

        relationship_scope: 링크 관계를 등록할 파트 (document, header1, footer1 ...)
        """
        context = RenderContext(scope=relationship_scope)
        try:
            blocks = self._render_container(tree, context, ParagraphStyle(), RunStyle())
        except Html2DocxError:
            raise
        except (ValueError, TypeError, KeyError, etree.LxmlError) as e:
            raise RenderError(f"Failed to render HTML for {relationship_scope}: {e}") from e

        logger.debug("Rendered %d block(s) for %s", len(blocks), relationship_scope)
        return blocks

    # ============================================================
    # 블록
    # ============================================================

    def _render_container(
        self,
        element: etree._Element,
        context: RenderContext,
        paragraph_style: ParagraphStyle,
        run_style: RunStyle,
        ensure_paragraph: bool = False,
        numbering: Optional[Tuple[int, int]] = None,
    ) -> List[etree._Element]:
        """자식 블록은 그대로, 사이의 인라인 내용은 단락으로 묶음

        numbering이 있으면 첫 단락에만 목록 번호를 붙입니다.
        """
        blocks: List[etree._Element] = []
        pending: List[InlineItem] = []
        def flush(force: bool = False) -> None:
            nonlocal numbering
            paragraph = self._build_paragraph(pending, paragraph_style, context, numbering, force)
            pending.clear()
            if paragraph is not None:
                blocks.append(paragraph)
                numbering = None

        if element.text:
            pending.append(InlineItem(text=element.text, style=run_style))

        for child in element:
            tag = _tag_name(child)
            if tag is None or tag in SKIPPED_TAGS:
                if tag == "img":
                    logger.debug("Skipping image element")
            elif tag in BLOCK_TAGS:
                flush()
                if tag == "p" and numbering is not None and not blocks:
                    blocks.extend(self._render_paragraph(child, context, run_style, numbering=numbering))
                    numbering = None
                elif tag in LIST_TAGS:
                    blocks.extend(self._render_list(child, context, run_style))
                else:
                    blocks.extend(self._render_block(child, context, paragraph_style, run_style))
            else:
                self._collect_inlines(child, run_style, None, context, pending)

            if child.tail:
                pending.append(InlineItem(text=child.tail, style=run_style))

        flush(force=ensure_paragraph and not blocks)
        return blocks

    def _render_block(
        self,
        element: etree._Element,
        context: RenderContext,
        inherited_style: ParagraphStyle,
        run_style: RunStyle,
    ) -> List[etree._Element]:
        tag = _tag_name(element)
        css = _css(element)

        if tag == "hr":
            return [self.paragraph_writer.build_horizontal_rule()]
        if tag == "table":
            blocks = self._render_table(element, context, run_style)
        elif tag in LIST_TAGS:
            blocks = self._render_list(element, context, run_style)
        elif tag in HEADING_LEVELS:
            style = ParagraphStyle(style_id=f"Heading{HEADING_LEVELS[tag]}")
            blocks = self._render_paragraph(element, context, run_style, base_style=style)
        elif tag == "blockquote":
            style = replace(self._paragraph_style(element, css, inherited_style), style_id="Quote")
            blocks = self._render_container(element, context, style, self._run_style(element, "span", run_style))
        elif tag == "pre":
            blocks = self._render_paragraph(
                element,
                replace(context, preserve_whitespace=True),
                self._run_style(element, "code", run_style),
            )
        elif tag in ("p", "li"):
            blocks = self._render_paragraph(element, context, run_style, base_style=inherited_style)
        else:
            style = self._paragraph_style(element, css, inherited_style)
            blocks = self._render_container(element, context, style, self._run_style(element, tag, run_style))

        return self._apply_page_breaks(element, css, blocks)

    def _render_paragraph(
        self,
        element: etree._Element,
        context: RenderContext,
        run_style: RunStyle,
        base_style: Optional[ParagraphStyle] = None,
        numbering: Optional[Tuple[int, int]] = None,
    ) -> List[etree._Element]:
        """단락 하나 이상을 반드시 만드는 블록 (p, h1-h6, pre)"""
        css = _css(element)
        style = self._paragraph_style(element, css, base_style or ParagraphStyle())
        if numbering is not None and style.style_id is None:
            style = replace(style, style_id="ListParagraph")
        blocks = self._render_container(
            element,
            context,
            style,
            self._run_style(element, "span", run_style),
            ensure_paragraph=True,
            numbering=numbering,
        )
        return blocks

    def _paragraph_style(
        self,
        element: etree._Element,
        css: Dict[str, str],
        inherited: ParagraphStyle,
    ) -> ParagraphStyle:
        style = replace(inherited, page_break_before=False, bottom_border=False)
        alignment = css.get("text-align") or element.get("align")
        if alignment:
            alignment = alignment.strip().lower()
            if alignment in ALIGNMENT_MAP:
                style = replace(style, alignment=alignment)
            else:
                logger.debug("Ignoring text-align %r", alignment)
        if self._has_page_break(css, "before"):
            style = replace(style, page_break_before=True)
        return style

    def _has_page_break(self, css: Dict[str, str], side: str) -> bool:
        for name in (f"page-break-{side}", f"break-{side}"):
            if css.get(name, "").strip().lower() in PAGE_BREAK_VALUES:
                return True
        return False

    def _apply_page_breaks(
        self,
        element: etree._Element,
        css: Dict[str, str],
        blocks: List[etree._Element],
    ) -> List[etree._Element]:
        classes = (element.get("class") or "").split()
        if PAGE_BREAK_CLASS in classes or self._has_page_break(css, "after"):
            blocks = blocks + [self.paragraph_writer.build([self.text_writer.build_break("page")])]
        return blocks

    # ============================================================
    # 목록
    # ============================================================

    def _render_list(
        self,
        element: etree._Element,
        context: RenderContext,
        run_style: RunStyle,
    ) -> List[etree._Element]:
        """ul/ol 하나마다 번호 정의 하나, 중첩 깊이는 ilvl"""
        tag = _tag_name(element)
        css = _css(element)
        definition = self.list_writer.create_list(
            tag,
            style_type=(css.get("list-style-type") or "").strip().lower() or None,
            ol_type=element.get("type"),
        )
        level = min(context.list_level + 1, 8)
        list_context = replace(context, list_level=level)
        logger.debug("List %d (%s) at level %d", definition.num_id, definition.kind, level)

        blocks: List[etree._Element] = []
        for child in element:
            child_tag = _tag_name(child)
            if child_tag is None:
                continue
            if child_tag == "li":
                blocks.extend(self._render_paragraph(
                    child,
                    list_context,
                    run_style,
                    numbering=(definition.num_id, level),
                ))
            elif child_tag in LIST_TAGS:
                blocks.extend(self._render_list(child, list_context, run_style))
            elif child_tag in BLOCK_TAGS:
                blocks.extend(self._render_block(child, list_context, ParagraphStyle(), run_style))
            else:
                blocks.extend(self._render_paragraph(child, list_context, run_style))
        return self._apply_page_breaks(element, css, blocks)

    # ============================================================
    # 표
    # ============================================================

    def _table_rows(self, element: etree._Element) -> List[etree._Element]:
        rows = []
        for child in element:
            tag = _tag_name(child)
            if tag == "tr":
                rows.append(child)
            elif tag in TABLE_SECTION_TAGS:
                rows.extend(row for row in child if _tag_name(row) == "tr")
        return rows

    def _render_table(
        self,
        element: etree._Element,
        context: RenderContext,
        run_style: RunStyle,
    ) -> List[etree._Element]:
        cell_context = replace(context, list_level=-1, preserve_whitespace=False)
        rows: List[List[TableCellSpec]] = []

        for row in self._table_rows(element):
            specs = []
            for cell in row:
                tag = _tag_name(cell)
                if tag not in TABLE_CELL_TAGS:
                    continue
                is_header = tag == "th"
                cell_run_style = run_style.merge(bold=True) if is_header else run_style
                cell_style = self._paragraph_style(cell, _css(cell), ParagraphStyle())
                blocks = self._render_container(
                    cell,
                    cell_context,
                    cell_style,
                    self._run_style(cell, "span", cell_run_style),
                    ensure_paragraph=True,
                )
                specs.append(TableCellSpec(
                    blocks=blocks,
                    col_span=_span_value(cell.get("colspan")),
                    row_span=_span_value(cell.get("rowspan")),
                    is_header=is_header,
                ))
            if specs:
                rows.append(specs)

        if not rows:
            logger.debug("Skipping table without cells")
            return []
        return [self.table_writer.build(rows, self.document.content_width)]

    # ============================================================
    # 인라인
    # ============================================================

    def _collect_inlines(
        self,
        element: etree._Element,
        run_style: RunStyle,
        href: Optional[str],
        context: RenderContext,
        out: List[InlineItem],
    ) -> None:
        tag = _tag_name(element)
        if tag is None or tag in SKIPPED_TAGS:
            if tag == "img":
                logger.debug("Skipping image element")
            return
        if tag == "br":
            out.append(InlineItem(kind="break"))
            return

        style = self._run_style(element, tag, run_style)
        if tag == "a" and element.get("href"):
            href = element.get("href").strip()
            style = style.merge(style_id=HYPERLINK_STYLE_ID)

        css = _css(element)
        if self._has_page_break(css, "before"):
            out.append(InlineItem(kind="page_break"))

        if element.text:
            out.append(InlineItem(text=element.text, style=style, href=href))
        for child in element:
            self._collect_inlines(child, style, href, context, out)
            if child.tail:
                out.append(InlineItem(text=child.tail, style=style, href=href))

        classes = (element.get("class") or "").split()
        if PAGE_BREAK_CLASS in classes or self._has_page_break(css, "after"):
            out.append(InlineItem(kind="page_break"))

    def _run_style(self, element: etree._Element, tag: str, inherited: RunStyle) -> RunStyle:
        """태그와 인라인 CSS로 런 서식 계산"""
        changes = {}

        if tag in BOLD_TAGS:
            changes["bold"] = True
        elif tag in ITALIC_TAGS:
            changes["italic"] = True
        elif tag in UNDERLINE_TAGS:
            changes["underline"] = True
        elif tag in STRIKE_TAGS:
            changes["strike"] = True
        elif tag in CODE_TAGS:
            changes["code"] = True
        elif tag == "sub":
            changes["vert_align"] = "subscript"
        elif tag == "sup":
            changes["vert_align"] = "superscript"
        elif tag == "mark":
            changes["highlight"] = MARK_HIGHLIGHT
        elif tag == "font":
            color = parse_color(element.get("color"))
            if color:
                changes["color"] = color
            face = first_font_family(element.get("face"))
            if face:
                changes["font_family"] = face
            size = FONT_TAG_SIZES.get((element.get("size") or "").strip())
            if size:
                changes["font_size"] = size * 2

        css = _css(element)
        if css:
            changes.update(self._css_run_changes(css))

        family = changes.get("font_family")
        if family:
            self.document.register_font(family)
        if changes.get("code"):
            self.document.register_font(CODE_FONT)

        return inherited.merge(**changes) if changes else inherited

    def _css_run_changes(self, css: Dict[str, str]) -> Dict[str, object]:
        changes: Dict[str, object] = {}

        color = parse_color(css.get("color"))
        if color:
            changes["color"] = color

        background = parse_color(css.get("background-color") or css.get("background"))
        if background:
            changes["highlight"] = background

        if "font-size" in css:
            size = fixup_font_size(css["font-size"])
            if isinstance(size, int) and size > 0:
                changes["font_size"] = size
            else:
                logger.debug("Ignoring font-size %r", css["font-size"])

        weight = css.get("font-weight", "").strip().lower()
        if weight in ("bold", "bolder") or (weight.isdigit() and int(weight) >= 600):
            changes["bold"] = True
        elif weight in ("normal", "lighter") or (weight.isdigit() and int(weight) < 600):
            changes["bold"] = False

        font_style = css.get("font-style", "").strip().lower()
        if font_style in ("italic", "oblique"):
            changes["italic"] = True
        elif font_style == "normal":
            changes["italic"] = False

        decoration = (css.get("text-decoration") or css.get("text-decoration-line") or "").lower()
        if "underline" in decoration:
            changes["underline"] = True
        if "line-through" in decoration:
            changes["strike"] = True
        if decoration.strip() == "none":
            changes["underline"] = False
            changes["strike"] = False

        family = first_font_family(css.get("font-family"))
        if family:
            changes["font_family"] = family

        return changes

    # ============================================================
    # 단락 조립
    # ============================================================

    def _normalize_whitespace(self, items: List[InlineItem], context: RenderContext) -> List[InlineItem]:
        """HTML 공백 규칙: 연속 공백은 하나로, 줄 앞뒤 공백은 제거"""
        if context.preserve_whitespace:
            return [item for item in items if item.kind != "text" or item.text]

        result: List[InlineItem] = []
        previous_space = True  # 줄 시작
        for item in items:
            if item.kind != "text":
                result.append(item)
                previous_space = True
                continue
            text = _WHITESPACE.sub(" ", item.text)
            if previous_space:
                text = text.lstrip(" ")
            if not text:
                continue
            previous_space = text.endswith(" ")
            result.append(replace(item, text=text))

        # 줄 끝 공백 제거
        for index in range(len(result) - 1, -1, -1):
            item = result[index]
            if item.kind != "text":
                break
            stripped = item.text.rstrip(" ")
            if stripped:
                result[index] = replace(item, text=stripped)
                break
            del result[index]
        return result

    def _build_paragraph(
        self,
        items: List[InlineItem],
        style: ParagraphStyle,
        context: RenderContext,
        numbering: Optional[Tuple[int, int]],
        force: bool,
    ) -> Optional[etree._Element]:
        items = self._normalize_whitespace(items, context)
        if not items and not force:
            return None

        inlines: List[etree._Element] = []
        index = 0
        while index < len(items):
            item = items[index]
            if item.kind == "break":
                inlines.append(self.text_writer.build_break())
            elif item.kind == "page_break":
                inlines.append(self.text_writer.build_break("page"))
            elif item.href:
                # 같은 링크로 이어지는 조각은 w:hyperlink 하나로
                runs = []
                href = item.href
                while index < len(items) and items[index].kind == "text" and items[index].href == href:
                    runs.append(self.text_writer.build_run(items[index].text, items[index].style))
                    index += 1
                inlines.append(self._build_hyperlink(href, runs, context))
                continue
            else:
                inlines.append(self.text_writer.build_run(item.text, item.style))
            index += 1

        return self.paragraph_writer.build(inlines, style, numbering)

    def _build_hyperlink(
        self,
        href: str,
        runs: List[etree._Element],
        context: RenderContext,
    ) -> etree._Element:
        if href.startswith("#"):
            return self.hyperlink_writer.build_anchor(href[1:], runs)
        relationship_id = self.document.create_relationship(
            context.scope,
            REL_TYPE["hyperlink"],
            href,
            EXTERNAL_RELATIONSHIP,
        )
        return self.hyperlink_writer.build(relationship_id, runs)
