"""
Element Converter - Converts scaled raw elements into editor slide elements
"""

import re
import logging
from typing import Dict, Any, List

from ..exceptions import ElementConversionError
from ..mapper.style_mapper import StyleMapper, Theme
from ..mapper.shape_resolver import ShapeResolver
from ..mapper.table_mapper import TableMapper, normalize_col_widths
from ..mapper.chart_mapper import map_chart_type, map_chart_data
from ..mapper.image_mapper import ImageMapper, map_clip
from .geometry import rotate_segment
from .slide_model import (
    SlideElement, TextElement, ImageElement, ShapeElement, LineElement,
    TableElement, ChartElement, AudioElement, VideoElement,
)

logger = logging.getLogger(__name__)

CONNECTOR_PATTERN = re.compile(r'Connector')
STRAIGHT_CONNECTOR_PATTERN = re.compile(r'straightConnector')
BENT_CONNECTOR_PATTERN = re.compile(r'bentConnector')
CURVED_CONNECTOR_PATTERN = re.compile(r'curvedConnector')


def is_line_shape(shape_type) -> bool:
    return shape_type == 'line' or bool(shape_type and CONNECTOR_PATTERN.search(shape_type))


def line_endpoints(width: float, height: float, flip_h: bool, flip_v: bool):
    """
    Pick the bounding-box diagonal a connector runs along from its flip flags.

    Returns:
        (start, end) relative to the element origin
    """
    if not flip_v and not flip_h:
        return (0, 0), (width, height)
    if flip_v and flip_h:
        return (width, height), (0, 0)
    if flip_v:
        return (0, height), (width, 0)
    return (width, 0), (0, height)


class ElementConverter:
    """
    Converts one raw leaf element into zero or one editor elements.

    Raw elements arrive already scaled: left/top/width/height are in target
    units. The original (pre-scale) size is passed alongside for shape
    viewBox fitting.
    """

    def __init__(self, ratio: float, theme: Theme, shape_resolver: ShapeResolver,
                 image_mapper: ImageMapper):
        """
        Initialize Element Converter.

        Args:
            ratio: Scale ratio of the current import
            theme: Theme defaults
            shape_resolver: Resolver for shape geometry
            image_mapper: Image source resolver
        """
        self.ratio = ratio
        self.theme = theme
        self.style_mapper = StyleMapper(ratio, theme)
        self.table_mapper = TableMapper(ratio, theme)
        self.shape_resolver = shape_resolver
        self.image_mapper = image_mapper

    async def convert(self, el: Dict[str, Any], origin_width: float, origin_height: float) -> List[SlideElement]:
        """
        Convert any leaf element kind.

        Args:
            el: Scaled raw element
            origin_width: Pre-scale width (floored to 1)
            origin_height: Pre-scale height (floored to 1)

        Returns:
            List with the converted element, empty for unknown kinds

        Raises:
            ShapeResolutionError: for shapes without usable geometry
            ElementConversionError: for elements with malformed fields
        """
        try:
            return await self._convert_kind(el, origin_width, origin_height)
        except (TypeError, KeyError, AttributeError, ValueError, IndexError) as e:
            raise ElementConversionError(f"Malformed {el.get('type')} element", cause=e,
                                         context={'type': el.get('type')}) from e

    async def _convert_kind(self, el: Dict[str, Any], origin_width: float, origin_height: float) -> List[SlideElement]:
        el_type = el.get('type')

        if el_type == 'text':
            return [self.convert_text(el)]
        elif el_type == 'image':
            return [await self.convert_image(el)]
        elif el_type == 'math':
            return [self.convert_math(el)]
        elif el_type == 'audio':
            return [self.convert_audio(el)]
        elif el_type == 'video':
            return [self.convert_video(el)]
        elif el_type == 'shape':
            if is_line_shape(el.get('shapType')):
                return [self.convert_line(el)]
            return [self.convert_shape(el, origin_width, origin_height)]
        elif el_type == 'table':
            return [self.convert_table(el)]
        elif el_type == 'chart':
            return [self.convert_chart(el)]
        else:
            logger.warning(f"Unknown element type: {el_type}")
            return []

    def convert_text(self, el: Dict[str, Any]) -> TextElement:
        return TextElement(
            left=el['left'],
            top=el['top'],
            width=el['width'],
            height=el['height'],
            rotate=el.get('rotate') or 0,
            content=self.style_mapper.map_content(el.get('content')),
            default_font_name=self.theme.font_name,
            default_color=self.theme.font_color,
            outline=self.style_mapper.map_outline(el),
            fill=self.style_mapper.map_fill_color(el.get('fill')),
            vertical=el.get('isVertical'),
            shadow=self.style_mapper.map_shadow(el.get('shadow')),
        )

    async def convert_image(self, el: Dict[str, Any]) -> ImageElement:
        src = await self.image_mapper.resolve_source(el.get('src'))

        outline = None
        if el.get('borderWidth'):
            outline = self.style_mapper.map_outline(el)

        return ImageElement(
            left=el['left'],
            top=el['top'],
            width=el['width'],
            height=el['height'],
            rotate=el.get('rotate') or 0,
            src=src,
            flip_h=el.get('isFlipH'),
            flip_v=el.get('isFlipV'),
            outline=outline,
            clip=map_clip(el.get('rect'), el.get('geom')),
        )

    def convert_math(self, el: Dict[str, Any]) -> ImageElement:
        """Math expressions arrive pre-rendered and become plain images."""
        return ImageElement(
            left=el['left'],
            top=el['top'],
            width=el['width'],
            height=el['height'],
            src=el.get('picBase64'),
        )

    def convert_audio(self, el: Dict[str, Any]) -> AudioElement:
        return AudioElement(
            left=el['left'],
            top=el['top'],
            width=el['width'],
            height=el['height'],
            src=el.get('blob'),
            color=self.theme.theme_colors[0] if self.theme.theme_colors else self.theme.font_color,
        )

    def convert_video(self, el: Dict[str, Any]) -> VideoElement:
        return VideoElement(
            left=el['left'],
            top=el['top'],
            width=el['width'],
            height=el['height'],
            src=el.get('blob') or el.get('src'),
        )

    def convert_line(self, el: Dict[str, Any]) -> LineElement:
        shape_type = el.get('shapType') or ''
        start, end = line_endpoints(el['width'], el['height'],
                                    bool(el.get('isFlipH')), bool(el.get('isFlipV')))
        left, top = el['left'], el['top']

        if el.get('rotate'):
            start, end, offset = rotate_segment(start, end, el['rotate'])
            left += offset[0]
            top += offset[1]

        line = LineElement(
            left=left,
            top=top,
            width=self.style_mapper.scale_width(el.get('borderWidth') or 1),
            start=start,
            end=end,
            style=el.get('borderType'),
            color=el.get('borderColor'),
            points=['', 'arrow' if STRAIGHT_CONNECTOR_PATTERN.search(shape_type) else ''],
        )

        half_delta = (abs(start[0] - end[0]) / 2, abs(start[1] - end[1]) / 2)
        if BENT_CONNECTOR_PATTERN.search(shape_type):
            line.broken2 = half_delta
        if CURVED_CONNECTOR_PATTERN.search(shape_type):
            line.cubic = [half_delta, half_delta]

        return line

    def convert_shape(self, el: Dict[str, Any], origin_width: float, origin_height: float) -> ShapeElement:
        fill = el.get('fill') or {}
        fill_type = fill.get('type')
        fill_value = fill.get('value') or {}

        gradient = self.style_mapper.map_gradient(fill_value) if fill_type == 'gradient' else None
        pattern = fill_value.get('picBase64') if fill_type == 'image' else None
        opacity = fill_value.get('opacity', 1) if fill_type == 'image' else 1

        resolved = self.shape_resolver.resolve(
            el.get('shapType'), el.get('path'),
            el['width'], el['height'], origin_width, origin_height,
        )

        return ShapeElement(
            left=el['left'],
            top=el['top'],
            width=resolved.width if resolved.width is not None else el['width'],
            height=resolved.height if resolved.height is not None else el['height'],
            rotate=el.get('rotate') or 0,
            path=resolved.path,
            view_box=resolved.view_box,
            path_formula=resolved.path_formula,
            keypoints=resolved.keypoints,
            special=resolved.special or None,
            fill=self.style_mapper.map_fill_color(fill),
            gradient=gradient,
            pattern=pattern,
            opacity=opacity,
            outline=self.style_mapper.map_outline(el),
            text={
                'content': self.style_mapper.map_content(el.get('content')),
                'defaultFontName': self.theme.font_name,
                'defaultColor': self.theme.font_color,
                'align': self.style_mapper.map_vertical_align(el.get('vAlign')),
            },
            flip_h=el.get('isFlipH'),
            flip_v=el.get('isFlipV'),
            shadow=self.style_mapper.map_shadow(el.get('shadow')),
        )

    def convert_table(self, el: Dict[str, Any]) -> TableElement:
        rows = el.get('data') or []
        return TableElement(
            left=el['left'],
            top=el['top'],
            width=el['width'],
            height=el['height'],
            data=self.table_mapper.map_cells(rows),
            col_widths=normalize_col_widths(el.get('colWidths') or []),
            outline=self.table_mapper.map_outline(el),
            cell_min_height=self.table_mapper.cell_min_height(el.get('rowHeights')),
        )

    def convert_chart(self, el: Dict[str, Any]) -> ChartElement:
        vendor_type = el.get('chartType')
        chart_type, options = map_chart_type(vendor_type, el.get('barDir'), el.get('grouping'))
        return ChartElement(
            left=el['left'],
            top=el['top'],
            width=el['width'],
            height=el['height'],
            chart_type=chart_type,
            data=map_chart_data(vendor_type, el.get('data') or []),
            options=options,
            theme_colors=list(el.get('colors') or self.theme.theme_colors),
            text_color=self.theme.font_color,
        )
