"""
HTML fragment utilities for rich-text content produced by the raw parser
"""

import re
import logging
from typing import Dict, Optional

from lxml import etree
from lxml import html as lxml_html

logger = logging.getLogger(__name__)

FONT_SIZE_PT_PATTERN = re.compile(r'font-size:\s*([\d.]+)pt')
LEADING_INT_PATTERN = re.compile(r'^\s*([+-]?\d+)')


def convert_font_size_pt_to_px(html: str, ratio: float) -> str:
    """
    Rewrite every 'font-size: Npt' declaration to pixels.

    Args:
        html: HTML content
        ratio: Scale ratio applied to the point size

    Returns:
        HTML with font sizes in px, one decimal
    """
    if not html:
        return html or ''
    return FONT_SIZE_PT_PATTERN.sub(
        lambda m: f"font-size: {float(m.group(1)) * ratio:.1f}px", html)


def parse_int(value) -> Optional[int]:
    """Parse the leading integer of a value like '18pt' or '50%'; None if there is none."""
    if value is None:
        return None
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return int(value)
    match = LEADING_INT_PATTERN.match(str(value))
    return int(match.group(1)) if match else None


def parse_inline_style(style: Optional[str]) -> Dict[str, str]:
    """
    Parse an inline style attribute into a dict of lower-cased property names.
    """
    declarations = {}
    if not style:
        return declarations
    for part in style.split(';'):
        if ':' not in part:
            continue
        name, value = part.split(':', 1)
        name = name.strip().lower()
        if name:
            declarations[name] = value.strip()
    return declarations


class CellHtml:
    """
    Styling read from a table cell's HTML fragment.

    Only the first paragraph's alignment and the first span's font attributes
    are considered.
    """

    def __init__(self, text: str = '', align: Optional[str] = None,
                 font_size: Optional[str] = None, font_family: Optional[str] = None,
                 color: Optional[str] = None):
        self.text = text
        self.align = align
        self.font_size = font_size
        self.font_family = font_family
        self.color = color

    def __repr__(self) -> str:
        return f"CellHtml(text={self.text!r}, align={self.align}, font_size={self.font_size})"


def parse_cell_html(fragment: Optional[str]) -> CellHtml:
    """
    Extract text and first-paragraph/first-span styling from an HTML fragment.

    Args:
        fragment: HTML string, may be empty or plain text

    Returns:
        CellHtml
    """
    if not fragment or not fragment.strip():
        return CellHtml()

    try:
        root = lxml_html.fragment_fromstring(fragment, create_parent='div')
    except (etree.ParserError, ValueError) as e:
        logger.warning(f"Unparseable cell HTML, using raw text: {e}")
        return CellHtml(text=fragment)

    paragraphs = root.findall('.//p')
    if paragraphs:
        text = '\n'.join(p.text_content() for p in paragraphs)
    else:
        text = root.text_content()

    align = None
    if paragraphs:
        align = parse_inline_style(paragraphs[0].get('style')).get('text-align')

    font_size = font_family = color = None
    span = root.find('.//span')
    if span is not None:
        span_style = parse_inline_style(span.get('style'))
        font_size = span_style.get('font-size')
        font_family = span_style.get('font-family')
        color = span_style.get('color')

    return CellHtml(text=text, align=align, font_size=font_size,
                    font_family=font_family, color=color)
