"""
Style Mapper Module
Maps raw styles, shapes, tables, charts and images to editor fields.
"""

from .style_mapper import StyleMapper, Theme
from .shape_resolver import ShapeResolver

__all__ = ['StyleMapper', 'Theme', 'ShapeResolver']
