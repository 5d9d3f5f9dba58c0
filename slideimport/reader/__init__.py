"""
Raw Document Reader Module
Decodes import documents and provides helpers over raw element lists.
"""

from .raw_document import classify_document, decode_json, validate_raw_document
from .element_extractor import ElementExtractor

__all__ = ['classify_document', 'decode_json', 'validate_raw_document', 'ElementExtractor']
