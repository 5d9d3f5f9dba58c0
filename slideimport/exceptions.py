"""
Exception hierarchy for the slide import pipeline.

Document-level errors abort an import; element-level and asset-level errors
are caught inside the pipeline so one malformed shape or image does not fail
a whole deck.
"""

from typing import Optional, Dict, Any


class SlideImportError(Exception):
    """Base exception for all import errors"""

    def __init__(
        self,
        message: str,
        cause: Optional[Exception] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.cause = cause
        self.context = context or {}

    def __str__(self):
        parts = [super().__str__()]
        if self.cause:
            parts.append(f" (caused by: {type(self.cause).__name__}: {str(self.cause)})")
        if self.context:
            parts.append(f" Context: {self.context}")
        return "".join(parts)


class UnreadableDocumentError(SlideImportError):
    """Input could not be decoded, parsed or classified"""
    pass


class ShapeResolutionError(SlideImportError):
    """Shape geometry could not be resolved to a path and viewBox"""
    pass


class ImageTranscodeError(SlideImportError):
    """Legacy metafile image could not be turned into a raster image"""
    pass


class ElementConversionError(SlideImportError):
    """A single raw element is malformed and cannot be converted"""
    pass
