"""
Deck Importer - Import entry points that convert documents and commit them to a store
"""

import asyncio
import inspect
import logging
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, Any, List, Optional, Union

from ..exceptions import SlideImportError, UnreadableDocumentError
from ..mapper.image_mapper import ImageMapper
from ..mapper.style_mapper import Theme
from ..reader.raw_document import (
    VARIANT_RAW, classify_document, decode_json, extract_slides, validate_raw_document,
)
from ..rebuilder.slide_assembler import SlideAssembler, AssemblyResult
from ..shapes.shape_library import ShapeLibrary
from .slide_store import SlideStore

logger = logging.getLogger(__name__)

UNREADABLE_MESSAGE = 'Unable to read or parse this file'


class MergeStrategy(Enum):
    REPLACE = 'replace'
    REPLACE_IF_EMPTY = 'replace_if_empty'
    APPEND = 'append'


class ImportReport:
    """Outcome of one import call."""

    def __init__(self, success: bool, slide_count: int = 0,
                 dropped: Optional[list] = None, error: Optional[Exception] = None):
        self.success = success
        self.slide_count = slide_count
        self.dropped = dropped or []
        self.error = error

    def __bool__(self):
        return self.success

    def __repr__(self) -> str:
        return f"ImportReport(success={self.success}, slides={self.slide_count}, dropped={len(self.dropped)})"


def _log_notification(message: str):
    logger.warning(f"Notification: {message}")


class DeckImporter:
    """
    Imports JSON exports and binary presentations into a slide store.

    The conversion runs to completion before the store is touched, so a failed
    import leaves the store unchanged.
    """

    def __init__(self, config: Dict[str, Any], store: Optional[SlideStore] = None,
                 theme: Optional[Theme] = None,
                 shape_library: Optional[ShapeLibrary] = None,
                 parse_raw_document: Optional[Callable] = None,
                 transcode_legacy_image: Optional[Callable] = None,
                 notify: Optional[Callable[[str], None]] = None):
        """
        Initialize Deck Importer.

        Args:
            config: Full configuration dictionary
            store: Target store, defaults to a fresh in-memory SlideStore
            theme: Theme defaults, defaults to the 'theme' config section
            shape_library: Shape tables, defaults to the built-in library plus config extras
            parse_raw_document: bytes -> raw tree, sync or async
            transcode_legacy_image: base64 -> base64 raster, sync or async
            notify: Receives user-facing messages
        """
        self.config = config
        self.importer_config = config.get('importer', {}) or {}
        self.store = store if store is not None else SlideStore()
        self.theme = theme or Theme.from_config(config)
        self.shape_library = shape_library or ShapeLibrary.from_config(config)
        self.parse_raw_document = parse_raw_document
        self.notify = notify or _log_notification
        self.image_mapper = ImageMapper(transcode_legacy_image, self.notify)
        self.default_merge = MergeStrategy(self.importer_config.get('merge', MergeStrategy.REPLACE_IF_EMPTY.value))
        self._lock: Optional[asyncio.Lock] = None

    def _import_lock(self) -> asyncio.Lock:
        # Created on first use so it binds to the running event loop
        if self._lock is None:
            self._lock = asyncio.Lock()
        return self._lock

    def _assembler(self) -> SlideAssembler:
        return SlideAssembler(self.importer_config, self.theme, self.shape_library, self.image_mapper)

    def _fixed_viewport(self, fixed_viewport: Optional[bool]) -> bool:
        if fixed_viewport is None:
            return bool(self.importer_config.get('fixed_viewport', False))
        return fixed_viewport

    async def convert_raw_document(self, raw_document: Dict[str, Any],
                                   fixed_viewport: Optional[bool] = None) -> AssemblyResult:
        """
        Convert a raw tree without touching the store.

        Raises:
            UnreadableDocumentError: when the tree's outer shape is invalid
        """
        raw_document = validate_raw_document(raw_document)
        return await self._assembler().assemble(raw_document, self._fixed_viewport(fixed_viewport))

    async def import_json(self, data: Union[str, bytes], merge: Optional[MergeStrategy] = None,
                          fixed_viewport: Optional[bool] = None,
                          variant: Optional[str] = None) -> ImportReport:
        """
        Import a JSON export: normalized slides or a raw slide tree.

        Args:
            data: JSON text
            merge: How to merge into the store
            fixed_viewport: Scale raw trees into the fixed target width
            variant: Declared document variant ('raw' or 'slides'); detected strictly when None

        Returns:
            ImportReport
        """
        async with self._import_lock():
            try:
                doc = decode_json(data)
                if classify_document(doc, variant) == VARIANT_RAW:
                    result = await self.convert_raw_document(doc, fixed_viewport)
                    return self._commit_assembly(result, merge)

                slides = extract_slides(doc)
                self._commit(slides, merge)
                logger.info(f"Imported {len(slides)} normalized slides")
                return ImportReport(True, len(slides))
            except UnreadableDocumentError as e:
                return self._fail(e)
            except Exception as e:
                return self._fail(SlideImportError("Conversion failed", cause=e))

    async def import_presentation(self, data: bytes, merge: Optional[MergeStrategy] = None,
                                  fixed_viewport: Optional[bool] = None) -> ImportReport:
        """
        Import a binary presentation through the external raw-tree parser.
        """
        async with self._import_lock():
            try:
                raw_document = await self._parse(data)
                result = await self.convert_raw_document(raw_document, fixed_viewport)
                return self._commit_assembly(result, merge)
            except UnreadableDocumentError as e:
                return self._fail(e)
            except Exception as e:
                return self._fail(SlideImportError("Conversion failed", cause=e))

    async def import_file(self, path: Union[str, Path], merge: Optional[MergeStrategy] = None,
                          fixed_viewport: Optional[bool] = None,
                          variant: Optional[str] = None) -> ImportReport:
        """
        Read a file and import it; '.json' files go through import_json.
        """
        path = Path(path)
        try:
            data = await asyncio.to_thread(path.read_bytes)
        except OSError as e:
            return self._fail(UnreadableDocumentError(f"Cannot read {path}", cause=e))

        if path.suffix.lower() == '.json':
            return await self.import_json(data, merge, fixed_viewport, variant)
        return await self.import_presentation(data, merge, fixed_viewport)

    async def _parse(self, data: bytes) -> Dict[str, Any]:
        if self.parse_raw_document is None:
            raise UnreadableDocumentError("No presentation parser configured")
        try:
            result = self.parse_raw_document(data)
            if inspect.isawaitable(result):
                result = await result
        except Exception as e:
            raise UnreadableDocumentError("Presentation parser failed", cause=e) from e
        return result

    def _commit_assembly(self, result: AssemblyResult, merge: Optional[MergeStrategy]) -> ImportReport:
        self._commit([slide.to_dict() for slide in result.slides], merge)
        if result.viewport_size:
            self.store.set_viewport_size(result.viewport_size)
        if result.theme_colors:
            self.store.set_theme({'themeColors': result.theme_colors})
        logger.info(f"Imported {len(result.slides)} slides, {len(result.dropped)} elements dropped")
        return ImportReport(True, len(result.slides), result.dropped)

    def _commit(self, slides: List[Dict[str, Any]], merge: Optional[MergeStrategy]):
        merge = merge or self.default_merge
        if merge == MergeStrategy.REPLACE:
            self.store.update_slide_index(0)
            self.store.set_slides(slides)
        elif merge == MergeStrategy.REPLACE_IF_EMPTY and self.store.is_empty():
            self.store.set_slides(slides)
        else:
            self.store.add_slides(slides)
        self.store.add_history_snapshot()

    def _fail(self, error: SlideImportError) -> ImportReport:
        logger.error(f"Import failed: {error}", exc_info=True)
        self.notify(UNREADABLE_MESSAGE)
        return ImportReport(False, error=error)
