"""표 Writer"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from lxml import etree

from html2docx.docx_ir.base import w, w_val
from html2docx.docx_ir.models import TableCellSpec


TABLE_STYLE_ID = "TableGrid"

# 행 안의 열 위치 → 셀 (None이면 위 셀의 세로 병합 연속)
_RowLayout = Dict[int, Tuple[Optional[TableCellSpec], int]]


class TableWriter:
    """표 생성"""

    def __init__(self, cant_split_rows: bool = False):
        self.cant_split_rows = cant_split_rows

    def build(self, rows: List[List[TableCellSpec]], content_width: int) -> etree._Element:
        """셀 행렬을 w:tbl로 변환 (colspan → gridSpan, rowspan → vMerge)"""
        layouts = self._layout(rows)
        col_count = max(
            (col + span for layout in layouts for col, (_, span) in layout.items()),
            default=1,
        )
        col_width = max(content_width // col_count, 1)

        tbl = etree.Element(w("tbl"))
        self._append_table_properties(tbl, content_width)

        grid = etree.SubElement(tbl, w("tblGrid"))
        for _ in range(col_count):
            grid_col = etree.SubElement(grid, w("gridCol"))
            grid_col.set(w("w"), str(col_width))

        for row_specs, layout in zip(rows, layouts):
            tbl.append(self._build_row(row_specs, layout, col_width))

        return tbl

    def _layout(self, rows: List[List[TableCellSpec]]) -> List[_RowLayout]:
        """행마다 셀이 놓이는 열 위치 계산"""
        pending: Dict[int, List[int]] = {}  # col -> [남은 행 수, col_span]
        layouts: List[_RowLayout] = []

        for row_specs in rows:
            layout: _RowLayout = {}
            col = 0
            for spec in row_specs:
                col = self._fill_continuations(layout, pending, col)
                layout[col] = (spec, spec.col_span)
                if spec.row_span > 1:
                    pending[col] = [spec.row_span - 1, spec.col_span]
                col += spec.col_span

            for pending_col in sorted(c for c in pending if c >= col):
                if pending_col not in layout:
                    self._fill_continuations(layout, pending, pending_col)

            layouts.append(layout)
        return layouts

    def _fill_continuations(self, layout: _RowLayout, pending: Dict[int, List[int]], col: int) -> int:
        while col in pending:
            remaining, span = pending[col]
            layout[col] = (None, span)
            if remaining <= 1:
                del pending[col]
            else:
                pending[col][0] = remaining - 1
            col += span
        return col

    def _append_table_properties(self, tbl: etree._Element, content_width: int) -> None:
        tbl_pr = etree.SubElement(tbl, w("tblPr"))
        w_val(tbl_pr, "tblStyle", TABLE_STYLE_ID)
        tbl_w = etree.SubElement(tbl_pr, w("tblW"))
        tbl_w.set(w("w"), str(content_width))
        tbl_w.set(w("type"), "dxa")

        borders = etree.SubElement(tbl_pr, w("tblBorders"))
        for side in ("top", "left", "bottom", "right", "insideH", "insideV"):
            border = etree.SubElement(borders, w(side))
            border.set(w("val"), "single")
            border.set(w("sz"), "4")
            border.set(w("space"), "0")
            border.set(w("color"), "auto")

        tbl_layout = etree.SubElement(tbl_pr, w("tblLayout"))
        tbl_layout.set(w("type"), "fixed")

    def _build_row(self, row_specs: List[TableCellSpec], layout: _RowLayout, col_width: int) -> etree._Element:
        tr = etree.Element(w("tr"))

        is_header_row = bool(row_specs) and all(spec.is_header for spec in row_specs)
        if self.cant_split_rows or is_header_row:
            tr_pr = etree.SubElement(tr, w("trPr"))
            if self.cant_split_rows:
                etree.SubElement(tr_pr, w("cantSplit"))
            if is_header_row:
                etree.SubElement(tr_pr, w("tblHeader"))

        for col in sorted(layout):
            spec, span = layout[col]
            tr.append(self._build_cell(spec, span, col_width))
        return tr

    def _build_cell(self, spec: Optional[TableCellSpec], span: int, col_width: int) -> etree._Element:
        tc = etree.Element(w("tc"))
        tc_pr = etree.SubElement(tc, w("tcPr"))
        tc_w = etree.SubElement(tc_pr, w("tcW"))
        tc_w.set(w("w"), str(col_width * span))
        tc_w.set(w("type"), "dxa")
        if span > 1:
            w_val(tc_pr, "gridSpan", span)

        if spec is None:
            etree.SubElement(tc_pr, w("vMerge"))
            etree.SubElement(tc, w("p"))
            return tc

        if spec.row_span > 1:
            w_val(tc_pr, "vMerge", "restart")

        for block in spec.blocks:
            tc.append(block)
        # 셀의 마지막 블록은 단락이어야 함
        if len(spec.blocks) == 0 or spec.blocks[-1].tag != w("p"):
            etree.SubElement(tc, w("p"))
        return tc
