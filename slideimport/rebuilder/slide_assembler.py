"""
Slide Assembler - Builds editor slides from a raw slide tree
"""

import logging
from typing import Dict, Any, List, Optional, Tuple

from ..mapper.image_mapper import ImageMapper
from ..mapper.shape_resolver import ShapeResolver
from ..mapper.style_mapper import StyleMapper, Theme
from ..reader.element_extractor import ElementExtractor
from ..shapes.shape_library import ShapeLibrary
from .element_converter import ElementConverter
from .slide_model import Slide, SolidBackground, GradientBackground, ImageBackground
from .tree_flattener import TreeFlattener, DroppedElement

logger = logging.getLogger(__name__)

DPI_RATIO = 96 / 72
TARGET_VIEWPORT_WIDTH = 1000


def compute_scale_ratio(width: Optional[float], fixed_viewport: bool = False,
                        target_width: float = TARGET_VIEWPORT_WIDTH,
                        dpi_ratio: float = DPI_RATIO) -> Tuple[float, Optional[float]]:
    """
    Compute the ScaleRatio for an import.

    Args:
        width: Declared raw canvas width, may be None
        fixed_viewport: Scale into a fixed target width instead of converting pt to px
        target_width: Viewport width used with fixed_viewport
        dpi_ratio: pt -> px ratio used otherwise

    Returns:
        Tuple of (ratio, viewport_size); viewport_size is None when the
        viewport must not change
    """
    if not width:
        return dpi_ratio, None
    if fixed_viewport:
        return target_width / width, None
    return dpi_ratio, width * dpi_ratio


class AssemblyResult:
    """Output of one raw document conversion."""

    def __init__(self, slides: List[Slide], ratio: float, viewport_size: Optional[float],
                 theme_colors: Optional[List[str]], dropped: List[DroppedElement]):
        self.slides = slides
        self.ratio = ratio
        self.viewport_size = viewport_size
        self.theme_colors = theme_colors
        self.dropped = dropped

    def __repr__(self) -> str:
        return f"AssemblyResult(slides={len(self.slides)}, ratio={self.ratio:.4f}, dropped={len(self.dropped)})"


class SlideAssembler:
    """
    Converts a raw document into an ordered list of editor slides.
    """

    def __init__(self, config: Dict[str, Any], theme: Theme,
                 shape_library: Optional[ShapeLibrary] = None,
                 image_mapper: Optional[ImageMapper] = None):
        """
        Initialize Slide Assembler.

        Args:
            config: 'importer' configuration section
            theme: Read-only theme defaults
            shape_library: Shape and path-formula tables
            image_mapper: Image source resolver
        """
        self.config = config
        self.theme = theme
        self.shape_library = shape_library or ShapeLibrary()
        self.image_mapper = image_mapper or ImageMapper()
        self.target_width = config.get('target_viewport_width', TARGET_VIEWPORT_WIDTH)
        self.dpi_ratio = config.get('dpi_ratio', DPI_RATIO)
        self.default_background = config.get('default_background', '#fff')

    async def assemble(self, raw_document: Dict[str, Any], fixed_viewport: bool = False) -> AssemblyResult:
        """
        Convert every raw slide, in order.

        Args:
            raw_document: Raw tree with size, themeColors and slides
            fixed_viewport: Scale into the fixed target width

        Returns:
            AssemblyResult
        """
        size = raw_document.get('size') or {}
        ratio, viewport_size = compute_scale_ratio(size.get('width'), fixed_viewport,
                                                   self.target_width, self.dpi_ratio)
        logger.info(f"Assembling {len(raw_document.get('slides') or [])} slides at ratio {ratio:.4f}"
                    f" (fixed viewport: {fixed_viewport})")

        theme = self._document_theme(raw_document.get('themeColors'))
        style_mapper = StyleMapper(ratio, theme)
        converter = ElementConverter(ratio, theme, ShapeResolver(self.shape_library), self.image_mapper)
        flattener = TreeFlattener(converter)

        slides = []
        dropped = []
        for index, raw_slide in enumerate(raw_document.get('slides') or []):
            slide = Slide(
                background=self._map_background(raw_slide.get('fill'), style_mapper),
                remark=raw_slide.get('note') or '',
            )
            result = await flattener.flatten(ElementExtractor.get_slide_elements(raw_slide))
            slide.add_elements(result.elements)
            dropped.extend(result.dropped)
            slides.append(slide)
            logger.info(f"Slide {index + 1}: {len(result.elements)} elements"
                        + (f", {len(result.dropped)} dropped" if result.dropped else ""))

        return AssemblyResult(slides, ratio, viewport_size, raw_document.get('themeColors'), dropped)

    def _document_theme(self, theme_colors: Optional[List[str]]) -> Theme:
        """Theme for one import: the deck's own colours replace the configured ones."""
        if not isinstance(theme_colors, list) or not theme_colors:
            return self.theme
        return Theme(self.theme.font_name, self.theme.font_color, theme_colors)

    def _map_background(self, fill: Optional[Dict[str, Any]], style_mapper: StyleMapper):
        if not fill:
            return SolidBackground(self.default_background)

        fill_type = fill.get('type', 'solid')
        value = fill.get('value')

        if fill_type == 'image':
            return ImageBackground((value or {}).get('picBase64'), 'cover')
        elif fill_type == 'gradient':
            return GradientBackground(style_mapper.map_gradient(value or {}, rotate_offset=90))
        return SolidBackground(value or self.default_background)
