"""
Table Mapper - Reshapes raw table cell matrices into editor table data
"""

import logging
from typing import List, Dict, Any, Optional

from ..utils.ids import generate_id
from ..utils.html_utils import parse_cell_html, parse_int
from .style_mapper import Theme

logger = logging.getLogger(__name__)

CELL_ALIGNMENTS = ('left', 'right', 'center')
BORDER_SIDES = ('top', 'bottom', 'left', 'right')
DEFAULT_BORDER_COLOR = '#eeece1'
DEFAULT_BORDER_WIDTH = 2
DEFAULT_CELL_MIN_HEIGHT = 36


def normalize_col_widths(col_widths: List[float]) -> List[float]:
    """
    Scale column widths so they sum to 1.

    Args:
        col_widths: Raw column widths, any positive unit

    Returns:
        Fractions of the table width; equal shares when the raw total is zero
    """
    if not col_widths:
        return []
    total = sum(col_widths)
    if total <= 0:
        logger.warning(f"Column widths sum to {total}, using equal widths")
        return [1 / len(col_widths)] * len(col_widths)
    return [width / total for width in col_widths]


def find_table_border(first_cell: Dict[str, Any], table: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """
    First non-empty border: the first cell's sides, then the table's own sides.
    """
    for source in (first_cell.get('borders') or {}, table.get('borders') or {}):
        for side in BORDER_SIDES:
            border = source.get(side)
            if border:
                return border
    return None


class TableMapper:
    """
    Maps raw table elements: cell text/styling from HTML fragments, normalized
    column widths and a single resolved border.
    """

    def __init__(self, ratio: float, theme: Theme):
        self.ratio = ratio
        self.theme = theme

    def map_cells(self, rows: List[List[Dict[str, Any]]]) -> List[List[Dict[str, Any]]]:
        """
        Convert the raw cell matrix.

        Args:
            rows: Raw rows of cells (text HTML, colSpan, rowSpan, fontColor, fontBold, fillColor)

        Returns:
            Editor cell matrix
        """
        data = []
        for row in rows:
            row_cells = []
            for cell in row:
                row_cells.append(self._map_cell(cell))
            data.append(row_cells)
        return data

    def _map_cell(self, cell: Dict[str, Any]) -> Dict[str, Any]:
        parsed = parse_cell_html(cell.get('text'))

        align = parsed.align if parsed.align in CELL_ALIGNMENTS else 'left'

        fontsize = ''
        size_value = parse_int(parsed.font_size)
        if size_value is not None:
            fontsize = f"{size_value * self.ratio:.1f}px"

        return {
            'id': generate_id(),
            'colspan': cell.get('colSpan') or 1,
            'rowspan': cell.get('rowSpan') or 1,
            'text': parsed.text,
            'style': {
                'fontname': parsed.font_family or '',
                'color': parsed.color or cell.get('fontColor') or self.theme.font_color,
                'align': align,
                'fontsize': fontsize,
                'bold': cell.get('fontBold'),
                'backcolor': cell.get('fillColor'),
            },
        }

    def map_outline(self, el: Dict[str, Any]) -> Dict[str, Any]:
        """Resolve the table outline from the first cell and table borders."""
        rows = el.get('data') or [[]]
        first_cell = rows[0][0] if rows and rows[0] else {}
        border = find_table_border(first_cell, el) or {}

        width = (border.get('borderWidth') or 0) * self.ratio or DEFAULT_BORDER_WIDTH
        return {
            'width': round(width, 2),
            'style': border.get('borderType') or 'solid',
            'color': border.get('borderColor') or DEFAULT_BORDER_COLOR,
        }

    def cell_min_height(self, row_heights: Optional[List[float]]) -> float:
        if row_heights and row_heights[0]:
            return row_heights[0] * self.ratio
        return DEFAULT_CELL_MIN_HEIGHT
