"""
Image Mapper - Legacy metafile transcoding and clip descriptors for images
"""

import io
import re
import base64
import inspect
import logging
from typing import Callable, Dict, Any, Optional

from PIL import Image, UnidentifiedImageError

from ..exceptions import ImageTranscodeError

logger = logging.getLogger(__name__)

LEGACY_MIME_PATTERN = re.compile(r'^data:image/(x-emf|emf|x-wmf|wmf)', re.IGNORECASE)
LEGACY_EXTENSION_PATTERN = re.compile(r'\.(emf|wmf)$', re.IGNORECASE)
DATA_URL_PATTERN = re.compile(r'^data:([^;,]+)?(;base64)?,', re.IGNORECASE)

CLIP_SHAPE_TYPES = frozenset([
    'roundRect', 'ellipse', 'triangle', 'rhombus', 'pentagon', 'hexagon',
    'heptagon', 'octagon', 'parallelogram', 'trapezoid',
])

TRANSCODE_FAILED_MESSAGE = 'EMF image conversion failed'


def is_legacy_image(src) -> bool:
    """Detect EMF/WMF sources by MIME marker or file extension."""
    if not isinstance(src, str):
        return False
    return bool(LEGACY_MIME_PATTERN.match(src) or LEGACY_EXTENSION_PATTERN.search(src))


def map_clip(rect: Optional[Dict[str, Any]], geom: Optional[str]) -> Optional[Dict[str, Any]]:
    """
    Build a clip descriptor from a crop rectangle and/or a wrapping shape.

    Args:
        rect: Crop percentages from each edge (l, t, r, b)
        geom: Vendor geometry of the picture frame

    Returns:
        {'shape', 'range'} with range in 0-100 percentages, or None
    """
    clip_shape = geom if geom in CLIP_SHAPE_TYPES else None
    if rect:
        return {
            'shape': clip_shape or 'rect',
            'range': [
                [rect.get('l') or 0, rect.get('t') or 0],
                [100 - (rect.get('r') or 0), 100 - (rect.get('b') or 0)],
            ],
        }
    if clip_shape:
        return {
            'shape': clip_shape,
            'range': [[0, 0], [100, 100]],
        }
    return None


class ImageMapper:
    """
    Routes legacy vector metafile images through an external transcoder.

    The transcoder receives the base64 payload and returns a base64 raster
    (or a data URL). Failures fall back to the original source.
    """

    def __init__(self, transcoder: Optional[Callable] = None,
                 notify: Optional[Callable[[str], None]] = None):
        """
        Initialize Image Mapper.

        Args:
            transcoder: async (or sync) callable base64 -> base64
            notify: Callable receiving user-facing messages
        """
        self.transcoder = transcoder
        self.notify = notify

    async def resolve_source(self, src):
        """
        Return a usable image source, transcoding legacy metafiles.

        Args:
            src: Image source (data URL or path/URL)

        Returns:
            Transcoded PNG data URL, or the original source on failure
        """
        if not is_legacy_image(src):
            return src

        if self.transcoder is None:
            logger.warning("Legacy metafile image found but no transcoder is configured, keeping original source")
            return src

        try:
            return await self._transcode(src)
        except ImageTranscodeError as e:
            logger.error(f"Legacy image transcoding failed: {e}", exc_info=True)
            if self.notify:
                self.notify(TRANSCODE_FAILED_MESSAGE)
            return src

    async def _transcode(self, src: str) -> str:
        payload = src.split(',', 1)[1] if ',' in src else src

        try:
            result = self.transcoder(payload)
            if inspect.isawaitable(result):
                result = await result
        except Exception as e:
            raise ImageTranscodeError("Transcoder raised", cause=e) from e

        if not result or not isinstance(result, str):
            raise ImageTranscodeError("Transcoder returned no image data")

        match = DATA_URL_PATTERN.match(result)
        if match:
            mime = match.group(1) or 'image/png'
            encoded = result[match.end():]
        else:
            mime = None
            encoded = result

        image_format = self._verify_raster(encoded)
        if mime is None:
            mime = Image.MIME.get(image_format, 'image/png')

        logger.debug(f"Transcoded legacy image to {mime} ({len(encoded)} base64 chars)")
        return f"data:{mime};base64,{encoded}"

    def _verify_raster(self, encoded: str) -> str:
        """Decode the transcoder output and check it is a raster image Pillow can read."""
        try:
            raw = base64.b64decode(encoded, validate=True)
            with Image.open(io.BytesIO(raw)) as img:
                img.verify()
                image_format = img.format
        except (ValueError, UnidentifiedImageError, OSError) as e:
            raise ImageTranscodeError("Transcoder output is not a readable image", cause=e) from e

        if image_format in ('WMF', 'EMF'):
            raise ImageTranscodeError("Transcoder output is still a metafile",
                                      context={'format': image_format})
        return image_format
