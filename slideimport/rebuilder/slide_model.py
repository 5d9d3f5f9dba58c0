"""
Slide Model - Internal representation of editor slides and elements
"""

import logging
from typing import List, Dict, Any, Optional

from ..utils.ids import generate_id

logger = logging.getLogger(__name__)


class SlideElement:
    """
    Base class for every element placed on a slide.

    Positions and sizes are in target (viewport) units.
    """

    type = None

    def __init__(self, left: float, top: float, width: float, height: float,
                 rotate: float = 0):
        self.id = generate_id()
        self.left = left
        self.top = top
        self.width = width
        self.height = height
        self.rotate = rotate

    def _fields(self) -> Dict[str, Any]:
        """Kind-specific fields, in editor key naming."""
        return {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the editor JSON representation, dropping unset optional fields."""
        data = {
            'type': self.type,
            'id': self.id,
            'left': self.left,
            'top': self.top,
            'width': self.width,
            'height': self.height,
            'rotate': self.rotate,
        }
        for key, value in self._fields().items():
            if value is not None:
                data[key] = value
        return data

    def __repr__(self) -> str:
        return (f"{type(self).__name__}(left={self.left:.2f}, top={self.top:.2f}, "
                f"width={self.width:.2f}, height={self.height:.2f})")


class TextElement(SlideElement):
    type = 'text'

    def __init__(self, left, top, width, height, content: str, rotate: float = 0,
                 default_font_name: str = '', default_color: str = '',
                 outline: Optional[Dict[str, Any]] = None, fill: str = '',
                 vertical: Optional[bool] = None, shadow: Optional[Dict[str, Any]] = None,
                 line_height: float = 1):
        super().__init__(left, top, width, height, rotate)
        self.content = content
        self.default_font_name = default_font_name
        self.default_color = default_color
        self.outline = outline
        self.fill = fill
        self.vertical = vertical
        self.shadow = shadow
        self.line_height = line_height

    def _fields(self):
        return {
            'content': self.content,
            'defaultFontName': self.default_font_name,
            'defaultColor': self.default_color,
            'lineHeight': self.line_height,
            'outline': self.outline,
            'fill': self.fill,
            'vertical': self.vertical,
            'shadow': self.shadow,
        }


class ImageElement(SlideElement):
    type = 'image'

    def __init__(self, left, top, width, height, src: str, rotate: float = 0,
                 flip_h: Optional[bool] = None, flip_v: Optional[bool] = None,
                 outline: Optional[Dict[str, Any]] = None,
                 clip: Optional[Dict[str, Any]] = None, fixed_ratio: bool = True):
        super().__init__(left, top, width, height, rotate)
        self.src = src
        self.flip_h = flip_h
        self.flip_v = flip_v
        self.outline = outline
        self.clip = clip
        self.fixed_ratio = fixed_ratio

    def _fields(self):
        return {
            'src': self.src,
            'fixedRatio': self.fixed_ratio,
            'flipH': self.flip_h,
            'flipV': self.flip_v,
            'outline': self.outline,
            'clip': self.clip,
        }


class ShapeElement(SlideElement):
    type = 'shape'

    def __init__(self, left, top, width, height, path: str, view_box: List[float],
                 rotate: float = 0, fill: str = '', gradient: Optional[Dict[str, Any]] = None,
                 pattern: Optional[str] = None, opacity: float = 1,
                 outline: Optional[Dict[str, Any]] = None, text: Optional[Dict[str, Any]] = None,
                 flip_h: Optional[bool] = None, flip_v: Optional[bool] = None,
                 shadow: Optional[Dict[str, Any]] = None, path_formula: Optional[str] = None,
                 keypoints: Optional[List[float]] = None, special: Optional[bool] = None):
        super().__init__(left, top, width, height, rotate)
        self.path = path
        self.view_box = view_box
        self.fill = fill
        self.gradient = gradient
        self.pattern = pattern
        self.opacity = opacity
        self.outline = outline
        self.text = text
        self.flip_h = flip_h
        self.flip_v = flip_v
        self.shadow = shadow
        self.path_formula = path_formula
        self.keypoints = keypoints
        self.special = special

    def _fields(self):
        return {
            'viewBox': self.view_box,
            'path': self.path,
            'fill': self.fill,
            'gradient': self.gradient,
            'pattern': self.pattern,
            'opacity': self.opacity,
            'fixedRatio': False,
            'outline': self.outline,
            'text': self.text,
            'flipH': self.flip_h,
            'flipV': self.flip_v,
            'shadow': self.shadow,
            'pathFormula': self.path_formula,
            'keypoints': self.keypoints,
            'special': self.special,
        }


class LineElement(SlideElement):
    """
    A line or connector. 'width' is the stroke width; start/end are relative
    to (left, top).
    """

    type = 'line'

    def __init__(self, left, top, width, start, end, style: Optional[str] = None,
                 color: Optional[str] = None, points=None, broken2=None, cubic=None):
        super().__init__(left, top, width, 0)
        self.start = start
        self.end = end
        self.style = style
        self.color = color
        self.points = points or ['', '']
        self.broken2 = broken2
        self.cubic = cubic

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'type': self.type,
            'id': self.id,
            'width': self.width,
            'left': self.left,
            'top': self.top,
            'start': list(self.start),
            'end': list(self.end),
            'style': self.style,
            'color': self.color,
            'points': list(self.points),
        }
        if self.broken2 is not None:
            data['broken2'] = list(self.broken2)
        if self.cubic is not None:
            data['cubic'] = [list(point) for point in self.cubic]
        return data


class TableElement(SlideElement):
    type = 'table'

    def __init__(self, left, top, width, height, data: List[List[Dict[str, Any]]],
                 col_widths: List[float], outline: Dict[str, Any], cell_min_height: float):
        super().__init__(left, top, width, height, 0)
        self.data = data
        self.col_widths = col_widths
        self.outline = outline
        self.cell_min_height = cell_min_height

    def _fields(self):
        return {
            'colWidths': self.col_widths,
            'data': self.data,
            'outline': self.outline,
            'cellMinHeight': self.cell_min_height,
        }


class ChartElement(SlideElement):
    type = 'chart'

    def __init__(self, left, top, width, height, chart_type: str, data: Dict[str, Any],
                 options: Dict[str, Any], theme_colors: List[str], text_color: str):
        super().__init__(left, top, width, height, 0)
        self.chart_type = chart_type
        self.data = data
        self.options = options
        self.theme_colors = theme_colors
        self.text_color = text_color

    def _fields(self):
        return {
            'chartType': self.chart_type,
            'themeColors': self.theme_colors,
            'textColor': self.text_color,
            'data': self.data,
            'options': self.options,
        }


class AudioElement(SlideElement):
    type = 'audio'

    def __init__(self, left, top, width, height, src: str, color: str):
        super().__init__(left, top, width, height, 0)
        self.src = src
        self.color = color

    def _fields(self):
        return {
            'src': self.src,
            'fixedRatio': False,
            'color': self.color,
            'loop': False,
            'autoplay': False,
        }


class VideoElement(SlideElement):
    type = 'video'

    def __init__(self, left, top, width, height, src: str):
        super().__init__(left, top, width, height, 0)
        self.src = src

    def _fields(self):
        return {
            'src': self.src,
            'autoplay': False,
        }


class SolidBackground:
    type = 'solid'

    def __init__(self, color: str = '#fff'):
        self.color = color

    def to_dict(self) -> Dict[str, Any]:
        return {'type': self.type, 'color': self.color}


class GradientBackground:
    type = 'gradient'

    def __init__(self, gradient: Dict[str, Any]):
        self.gradient = gradient

    def to_dict(self) -> Dict[str, Any]:
        return {'type': self.type, 'gradient': self.gradient}


class ImageBackground:
    type = 'image'

    def __init__(self, src: str, size: str = 'cover'):
        self.src = src
        self.size = size

    def to_dict(self) -> Dict[str, Any]:
        return {'type': self.type, 'image': {'src': self.src, 'size': self.size}}


class Slide:
    """
    One editor slide: an ordered element list plus background and speaker notes.
    """

    def __init__(self, background=None, remark: str = '',
                 elements: Optional[List[SlideElement]] = None):
        self.id = generate_id()
        self.background = background or SolidBackground()
        self.remark = remark
        self.elements: List[SlideElement] = list(elements or [])

    def add_elements(self, elements: List[SlideElement]):
        self.elements.extend(elements)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'elements': [element.to_dict() for element in self.elements],
            'background': self.background.to_dict(),
            'remark': self.remark,
        }

    def __repr__(self) -> str:
        return f"Slide(id={self.id}, elements={len(self.elements)})"
