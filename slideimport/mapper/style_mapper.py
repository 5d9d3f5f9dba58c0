"""
Style Mapper - Maps raw fills, borders and shadows to editor styles
"""

import logging
from typing import Dict, Any, Optional

from ..utils.html_utils import convert_font_size_pt_to_px, parse_int

logger = logging.getLogger(__name__)

VERTICAL_ALIGN_MAP = {
    'mid': 'middle',
    'down': 'bottom',
    'up': 'top',
}


class Theme:
    """Read-only theme defaults consulted during conversion."""

    def __init__(self, font_name: str = '', font_color: str = '#333',
                 theme_colors: Optional[list] = None):
        self.font_name = font_name
        self.font_color = font_color
        self.theme_colors = list(theme_colors or ['#5b9bd5', '#ed7d31', '#a5a5a5', '#ffc000', '#4472c4', '#70ad47'])

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> 'Theme':
        theme_config = config.get('theme', config) or {}
        return cls(
            font_name=theme_config.get('font_name', ''),
            font_color=theme_config.get('font_color', '#333'),
            theme_colors=theme_config.get('theme_colors'),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'fontName': self.font_name,
            'fontColor': self.font_color,
            'themeColors': list(self.theme_colors),
        }


class StyleMapper:
    """
    Maps raw visual styles to the editor's style fields, applying the scale ratio.
    """

    def __init__(self, ratio: float, theme: Theme):
        """
        Initialize Style Mapper.

        Args:
            ratio: Scale ratio for every linear measurement
            theme: Theme defaults
        """
        self.ratio = ratio
        self.theme = theme

    def scale_width(self, value, default: float = 0) -> float:
        """Scale a stroke width, two decimals."""
        if value is None:
            value = default
        return round(value * self.ratio, 2)

    def map_outline(self, el: Dict[str, Any], default_width: float = 0) -> Dict[str, Any]:
        return {
            'color': el.get('borderColor'),
            'width': self.scale_width(el.get('borderWidth'), default_width),
            'style': el.get('borderType'),
        }

    def map_shadow(self, shadow: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
        if not shadow:
            return None
        return {
            'h': (shadow.get('h') or 0) * self.ratio,
            'v': (shadow.get('v') or 0) * self.ratio,
            'blur': (shadow.get('blur') or 0) * self.ratio,
            'color': shadow.get('color'),
        }

    def map_fill_color(self, fill: Optional[Dict[str, Any]]) -> str:
        """Solid fill colour, or '' for any other fill kind."""
        if fill and fill.get('type') == 'color':
            return fill.get('value') or ''
        return ''

    def map_gradient(self, value: Dict[str, Any], rotate_offset: float = 0) -> Dict[str, Any]:
        """
        Map a raw gradient fill value.

        Args:
            value: Raw gradient value with path, colors, rot
            rotate_offset: Added to the raw rotation (backgrounds use 90)

        Returns:
            Gradient dict with type, colors, rotate
        """
        colors = []
        for stop in value.get('colors', []) or []:
            new_stop = dict(stop)
            new_stop['pos'] = parse_int(stop.get('pos'))
            colors.append(new_stop)
        return {
            'type': 'linear' if value.get('path') == 'line' else 'radial',
            'colors': colors,
            'rotate': (value.get('rot') or 0) + rotate_offset,
        }

    def map_content(self, html: Optional[str]) -> str:
        return convert_font_size_pt_to_px(html or '', self.ratio)

    def map_vertical_align(self, v_align: Optional[str]) -> str:
        return VERTICAL_ALIGN_MAP.get(v_align, 'middle')
