"""
Raw Document - Decoding and classification of import documents
"""

import json
import logging
from typing import Dict, Any, List, Optional, Union

from ..exceptions import UnreadableDocumentError

logger = logging.getLogger(__name__)

VARIANT_RAW = 'raw'
VARIANT_SLIDES = 'slides'
VARIANTS = (VARIANT_RAW, VARIANT_SLIDES)


def decode_json(data: Union[str, bytes]) -> Any:
    """
    Decode a JSON document.

    Raises:
        UnreadableDocumentError: on invalid encoding or JSON syntax
    """
    try:
        if isinstance(data, bytes):
            data = data.decode('utf-8-sig')
        return json.loads(data)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise UnreadableDocumentError("Malformed JSON document", cause=e) from e


def _is_raw_signature(doc: Dict[str, Any]) -> bool:
    size = doc.get('size')
    has_width = isinstance(size, dict) and isinstance(size.get('width'), (int, float))
    has_theme_colors = isinstance(doc.get('themeColors'), list)
    return (has_width or has_theme_colors) and isinstance(doc.get('slides'), list)


def _is_slide_list(slides: Any) -> bool:
    if not isinstance(slides, list):
        return False
    for slide in slides:
        if not isinstance(slide, dict) or not isinstance(slide.get('elements'), list):
            return False
        if isinstance(slide.get('fill'), dict):
            return False
    return True


def classify_document(doc: Any, variant: Optional[str] = None) -> str:
    """
    Decide whether a decoded JSON document is a raw tree or normalized slides.

    Args:
        doc: Decoded JSON value
        variant: Variant declared by the caller, 'raw' or 'slides'

    Returns:
        'raw' or 'slides'

    Raises:
        UnreadableDocumentError: when the document matches neither shape
    """
    if variant is not None:
        if variant not in VARIANTS:
            raise UnreadableDocumentError(f"Unknown document variant: {variant}")
        if variant == VARIANT_RAW and not (isinstance(doc, dict) and isinstance(doc.get('slides'), list)):
            raise UnreadableDocumentError("Raw document must be an object with a 'slides' list")
        if variant == VARIANT_SLIDES and not _is_slide_list(extract_slides(doc)):
            raise UnreadableDocumentError("Slides document must hold a list of slides with 'elements'")
        return variant

    if isinstance(doc, list):
        if _is_slide_list(doc):
            return VARIANT_SLIDES
        raise UnreadableDocumentError("Top-level list is not a list of slides")

    if isinstance(doc, dict):
        if _is_raw_signature(doc):
            return VARIANT_RAW
        if _is_slide_list(doc.get('slides')):
            return VARIANT_SLIDES

    raise UnreadableDocumentError("Document is neither a raw slide tree nor a slide list",
                                  context={'type': type(doc).__name__})


def extract_slides(doc: Any) -> Optional[List[Dict[str, Any]]]:
    """Slide list of a normalized document ({'slides': [...]} or a bare list)."""
    if isinstance(doc, list):
        return doc
    if isinstance(doc, dict):
        return doc.get('slides')
    return None


def validate_raw_document(doc: Any) -> Dict[str, Any]:
    """
    Check the outer shape of a raw tree returned by the external parser.

    A document without slides is valid and yields no slides.

    Raises:
        UnreadableDocumentError: when the value is not a raw tree
    """
    if not isinstance(doc, dict):
        raise UnreadableDocumentError("Parser returned a non-object document",
                                      context={'type': type(doc).__name__})
    slides = doc.get('slides')
    if slides is None:
        slides = []
    if not isinstance(slides, list):
        raise UnreadableDocumentError("Raw document 'slides' is not a list")
    for index, slide in enumerate(slides):
        if not isinstance(slide, dict):
            raise UnreadableDocumentError(f"Raw slide {index} is not an object")
    validated = dict(doc)
    validated['slides'] = slides
    return validated
