"""
Shape Library - Vendor shape types mapped to editor paths and path formulas
"""

import logging
from typing import Callable, Dict, Any, List, Optional

logger = logging.getLogger(__name__)


class PathFormula:
    """A parametric path generator for shapes whose geometry depends on size."""

    def __init__(self, formula: Callable[..., str], editable: bool = False,
                 default_value: Optional[List[float]] = None):
        self.formula = formula
        self.editable = editable
        self.default_value = default_value

    def build(self, width: float, height: float) -> str:
        """Build the path for a width/height using the default keypoints if editable."""
        if self.editable:
            return self.formula(width, height, self.default_value)
        return self.formula(width, height)


class ShapeEntry:
    """One row of the shape lookup table."""

    def __init__(self, vendor_type: str, path: str, view_box: List[float],
                 path_formula: Optional[str] = None):
        self.vendor_type = vendor_type
        self.path = path
        self.view_box = view_box
        self.path_formula = path_formula

    def __repr__(self) -> str:
        return f"ShapeEntry({self.vendor_type!r}, formula={self.path_formula!r})"


def _round_rect(w, h, values):
    r = min(w, h) * values[0]
    return (f"M {r} 0 L {w - r} 0 Q {w} 0 {w} {r} L {w} {h - r} "
            f"Q {w} {h} {w - r} {h} L {r} {h} Q 0 {h} 0 {h - r} L 0 {r} Q 0 0 {r} 0 Z")


def _cut_rect_single(w, h, values):
    p = min(w, h) * values[0]
    return f"M 0 0 L {w - p} 0 L {w} {p} L {w} {h} L 0 {h} Z"


def _cut_rect_diagonal(w, h, values):
    p = min(w, h) * values[0]
    return f"M 0 0 L {w - p} 0 L {w} {p} L {w} {h} L {p} {h} L 0 {h - p} Z"


def _parallelogram(w, h, values):
    p = w * values[0]
    return f"M {p} 0 L {w} 0 L {w - p} {h} L 0 {h} Z"


def _trapezoid(w, h, values):
    p = w * values[0]
    return f"M {p} 0 L {w - p} 0 L {w} {h} L 0 {h} Z"


def _plus(w, h, values):
    t = min(w, h) * values[0]
    return (f"M {t} 0 L {w - t} 0 L {w - t} {t} L {w} {t} L {w} {h - t} L {w - t} {h - t} "
            f"L {w - t} {h} L {t} {h} L {t} {h - t} L 0 {h - t} L 0 {t} L {t} {t} Z")


def _home_plate(w, h):
    p = min(w, h) / 2
    return f"M 0 0 L {w - p} 0 L {w} {h / 2} L {w - p} {h} L 0 {h} Z"


def _chevron(w, h):
    p = min(w, h) / 2
    return f"M 0 0 L {w - p} 0 L {w} {h / 2} L {w - p} {h} L 0 {h} L {p} {h / 2} Z"


def _right_arrow(w, h):
    head = min(w, h) / 2
    return (f"M 0 {h / 4} L {w - head} {h / 4} L {w - head} 0 L {w} {h / 2} "
            f"L {w - head} {h} L {w - head} {h * 3 / 4} L 0 {h * 3 / 4} Z")


PATH_FORMULAS: Dict[str, PathFormula] = {
    'ROUND_RECT': PathFormula(_round_rect, editable=True, default_value=[0.125]),
    'CUT_RECT_SINGLE': PathFormula(_cut_rect_single, editable=True, default_value=[0.2]),
    'CUT_RECT_DIAGONAL': PathFormula(_cut_rect_diagonal, editable=True, default_value=[0.2]),
    'PARALLELOGRAM': PathFormula(_parallelogram, editable=True, default_value=[0.25]),
    'TRAPEZOID': PathFormula(_trapezoid, editable=True, default_value=[0.14]),
    'PLUS': PathFormula(_plus, editable=True, default_value=[0.3]),
    'HOME_PLATE': PathFormula(_home_plate),
    'CHEVRON': PathFormula(_chevron),
    'RIGHT_ARROW': PathFormula(_right_arrow),
}


# Canonical paths are authored against a 200x200 viewBox
SHAPE_LIST: List[ShapeEntry] = [
    ShapeEntry('rect', 'M 0 0 L 200 0 L 200 200 L 0 200 Z', [200, 200]),
    ShapeEntry('roundRect', 'M 25 0 L 175 0 Q 200 0 200 25 L 200 175 Q 200 200 175 200 L 25 200 Q 0 200 0 175 L 0 25 Q 0 0 25 0 Z',
               [200, 200], 'ROUND_RECT'),
    ShapeEntry('snip1Rect', 'M 0 0 L 160 0 L 200 40 L 200 200 L 0 200 Z', [200, 200], 'CUT_RECT_SINGLE'),
    ShapeEntry('snip2DiagRect', 'M 0 0 L 160 0 L 200 40 L 200 200 L 40 200 L 0 160 Z', [200, 200], 'CUT_RECT_DIAGONAL'),
    ShapeEntry('ellipse', 'M 100 0 A 100 100 0 1 1 100 200 A 100 100 0 1 1 100 0 Z', [200, 200]),
    ShapeEntry('triangle', 'M 100 0 L 0 200 L 200 200 Z', [200, 200]),
    ShapeEntry('rtTriangle', 'M 0 0 L 0 200 L 200 200 Z', [200, 200]),
    ShapeEntry('diamond', 'M 100 0 L 0 100 L 100 200 L 200 100 Z', [200, 200]),
    ShapeEntry('parallelogram', 'M 50 0 L 200 0 L 150 200 L 0 200 Z', [200, 200], 'PARALLELOGRAM'),
    ShapeEntry('trapezoid', 'M 28 0 L 172 0 L 200 200 L 0 200 Z', [200, 200], 'TRAPEZOID'),
    ShapeEntry('pentagon', 'M 100 0 L 0 76 L 38 200 L 162 200 L 200 76 Z', [200, 200]),
    ShapeEntry('hexagon', 'M 50 0 L 150 0 L 200 100 L 150 200 L 50 200 L 0 100 Z', [200, 200]),
    ShapeEntry('heptagon', 'M 100 0 L 22 38 L 0 124 L 56 200 L 144 200 L 200 124 L 178 38 Z', [200, 200]),
    ShapeEntry('octagon', 'M 59 0 L 141 0 L 200 59 L 200 141 L 141 200 L 59 200 L 0 141 L 0 59 Z', [200, 200]),
    ShapeEntry('plus', 'M 60 0 L 140 0 L 140 60 L 200 60 L 200 140 L 140 140 L 140 200 L 60 200 L 60 140 L 0 140 L 0 60 L 60 60 Z',
               [200, 200], 'PLUS'),
    ShapeEntry('star5', 'M 100 0 L 124 72 L 200 72 L 138 117 L 162 190 L 100 145 L 38 190 L 62 117 L 0 72 L 76 72 Z', [200, 200]),
    ShapeEntry('homePlate', 'M 0 0 L 100 0 L 200 100 L 100 200 L 0 200 Z', [200, 200], 'HOME_PLATE'),
    ShapeEntry('chevron', 'M 0 0 L 100 0 L 200 100 L 100 200 L 0 200 L 100 100 Z', [200, 200], 'CHEVRON'),
    ShapeEntry('rightArrow', 'M 0 50 L 100 50 L 100 0 L 200 100 L 100 200 L 100 150 L 0 150 Z', [200, 200], 'RIGHT_ARROW'),
    ShapeEntry('leftArrow', 'M 200 50 L 100 50 L 100 0 L 0 100 L 100 200 L 100 150 L 200 150 Z', [200, 200]),
    ShapeEntry('upArrow', 'M 50 200 L 50 100 L 0 100 L 100 0 L 200 100 L 150 100 L 150 200 Z', [200, 200]),
    ShapeEntry('downArrow', 'M 50 0 L 50 100 L 0 100 L 100 200 L 200 100 L 150 100 L 150 0 Z', [200, 200]),
    ShapeEntry('flowChartProcess', 'M 0 0 L 200 0 L 200 200 L 0 200 Z', [200, 200]),
    ShapeEntry('flowChartDecision', 'M 100 0 L 0 100 L 100 200 L 200 100 Z', [200, 200]),
]


class ShapeLibrary:
    """
    Read-only lookup over the shape table and the path-formula table.
    """

    def __init__(self, shapes: Optional[List[ShapeEntry]] = None,
                 formulas: Optional[Dict[str, PathFormula]] = None):
        self.shapes = list(SHAPE_LIST if shapes is None else shapes)
        self.formulas = dict(PATH_FORMULAS if formulas is None else formulas)

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> 'ShapeLibrary':
        """
        Build the default library extended with entries from the 'shapes' config section.

        Extra entries are consulted before the built-in ones.
        """
        shapes_config = config.get('shapes', config) or {}
        extra = []
        for item in shapes_config.get('extra', []) or []:
            formula = item.get('pathFormula')
            if formula and formula not in PATH_FORMULAS:
                logger.warning(f"Shape '{item.get('vendorType')}' references unknown path formula '{formula}', ignoring formula")
                formula = None
            extra.append(ShapeEntry(item['vendorType'], item['path'], list(item['viewBox']), formula))
        if extra:
            logger.info(f"ShapeLibrary: {len(extra)} extra shape entries from config")
        return cls(extra + SHAPE_LIST)

    def find(self, vendor_type: Optional[str]) -> Optional[ShapeEntry]:
        """Return the first entry matching the vendor type exactly."""
        if not vendor_type:
            return None
        for entry in self.shapes:
            if entry.vendor_type == vendor_type:
                return entry
        return None

    def formula(self, name: str) -> Optional[PathFormula]:
        return self.formulas.get(name)
