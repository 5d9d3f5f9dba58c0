"""
Tests for the import entry points: classification, merging and failure handling.
"""

import json
import asyncio
import tempfile
import unittest
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from slideimport.exceptions import UnreadableDocumentError
from slideimport.importer import DeckImporter, MergeStrategy, SlideStore
from slideimport.importer.deck_importer import UNREADABLE_MESSAGE

CONFIG = {
    'importer': {'target_viewport_width': 1000, 'dpi_ratio': 96 / 72,
                 'fixed_viewport': False, 'merge': 'replace_if_empty'},
    'theme': {'font_name': '', 'font_color': '#333'},
    'shapes': {'extra': []},
}

RAW_DOCUMENT = {
    'size': {'width': 720, 'height': 405},
    'themeColors': ['#101010', '#202020'],
    'slides': [
        {'elements': [{'type': 'text', 'content': 'one', 'left': 0, 'top': 0, 'width': 10, 'height': 10}]},
        {'elements': [{'type': 'text', 'content': 'two', 'left': 0, 'top': 0, 'width': 10, 'height': 10}]},
    ],
}

NORMALIZED_SLIDES = [
    {'id': 's1', 'elements': [{'id': 'e1', 'type': 'text', 'content': 'kept'}],
     'background': {'type': 'solid', 'color': '#fff'}, 'remark': ''},
]


class TestDeckImporter(unittest.IsolatedAsyncioTestCase):

    def setUp(self):
        self.messages = []
        self.store = SlideStore()
        self.importer = DeckImporter(CONFIG, store=self.store, notify=self.messages.append)

    async def test_raw_json_replaces_empty_store(self):
        report = await self.importer.import_json(json.dumps(RAW_DOCUMENT))
        self.assertTrue(report)
        self.assertEqual(report.slide_count, 2)
        self.assertEqual(len(self.store.slides), 2)
        self.assertEqual(self.store.slides[0]['elements'][0]['content'], 'one')
        self.assertAlmostEqual(self.store.viewport_size, 960)
        self.assertEqual(self.store.theme['themeColors'], ['#101010', '#202020'])
        self.assertEqual(len(self.store.history), 1)
        self.assertEqual(self.messages, [])

    async def test_fixed_viewport_keeps_store_viewport(self):
        await self.importer.import_json(json.dumps(RAW_DOCUMENT), fixed_viewport=True)
        self.assertEqual(self.store.viewport_size, 1000)
        element = self.store.slides[0]['elements'][0]
        self.assertAlmostEqual(element['width'], 10 * 1000 / 720)

    async def test_normalized_slides(self):
        report = await self.importer.import_json(json.dumps({'slides': NORMALIZED_SLIDES}))
        self.assertTrue(report)
        self.assertEqual(self.store.slides, NORMALIZED_SLIDES)

    async def test_bare_slide_list(self):
        report = await self.importer.import_json(json.dumps(NORMALIZED_SLIDES).encode('utf-8'))
        self.assertTrue(report)
        self.assertEqual(self.store.slides[0]['id'], 's1')

    async def test_append_to_non_empty_store(self):
        await self.importer.import_json(json.dumps(NORMALIZED_SLIDES), MergeStrategy.REPLACE)
        report = await self.importer.import_json(json.dumps(NORMALIZED_SLIDES))
        self.assertTrue(report)
        self.assertEqual(len(self.store.slides), 2)
        self.assertNotEqual(self.store.slides[1]['id'], 's1')
        self.assertNotEqual(self.store.slides[1]['elements'][0]['id'], 'e1')
        self.assertEqual(self.store.slides[1]['elements'][0]['content'], 'kept')
        self.assertEqual(self.store.slide_index, 1)
        self.assertEqual(len(self.store.history), 2)

    async def test_explicit_replace(self):
        await self.importer.import_json(json.dumps(RAW_DOCUMENT), MergeStrategy.APPEND)
        self.assertEqual(len(self.store.slides), 3)
        await self.importer.import_json(json.dumps(NORMALIZED_SLIDES), MergeStrategy.REPLACE)
        self.assertEqual(self.store.slides, NORMALIZED_SLIDES)
        self.assertEqual(self.store.slide_index, 0)

    async def test_empty_raw_document(self):
        report = await self.importer.import_json(json.dumps({'size': {'width': 720}, 'slides': []}))
        self.assertTrue(report)
        self.assertEqual(report.slide_count, 0)
        self.assertEqual(self.messages, [])

    async def test_malformed_json_notifies_once(self):
        before = list(self.store.slides)
        with self.assertLogs('slideimport.importer.deck_importer', level='ERROR'):
            report = await self.importer.import_json('{"slides": [')
        self.assertFalse(report)
        self.assertIsInstance(report.error, UnreadableDocumentError)
        self.assertEqual(self.messages, [UNREADABLE_MESSAGE])
        self.assertEqual(self.store.slides, before)
        self.assertEqual(self.store.history, [])

    async def test_ambiguous_document_rejected(self):
        with self.assertLogs('slideimport.importer.deck_importer', level='ERROR'):
            report = await self.importer.import_json(json.dumps({'title': 'deck'}))
        self.assertFalse(report)
        self.assertEqual(self.messages, [UNREADABLE_MESSAGE])

    async def test_declared_variant(self):
        doc = {'slides': [{'elements': []}]}
        report = await self.importer.import_json(json.dumps(doc), variant='raw')
        self.assertTrue(report)
        self.assertEqual(self.store.slides[0]['elements'], [])
        self.assertIn('background', self.store.slides[0])

    async def test_declared_variant_mismatch(self):
        with self.assertLogs('slideimport.importer.deck_importer', level='ERROR'):
            report = await self.importer.import_json(json.dumps({'title': 'x'}), variant='slides')
        self.assertFalse(report)

    async def test_dropped_elements_in_report(self):
        doc = {'size': {'width': 720}, 'slides': [{'elements': [
            {'type': 'shape', 'shapType': 'mystery', 'left': 0, 'top': 0, 'width': 5, 'height': 5},
        ]}]}
        with self.assertLogs('slideimport.rebuilder.tree_flattener', level='WARNING'):
            report = await self.importer.import_json(json.dumps(doc))
        self.assertTrue(report)
        self.assertEqual([d.vendor_type for d in report.dropped], ['mystery'])

    async def test_presentation_with_async_parser(self):
        received = []

        async def parser(data):
            received.append(data)
            return RAW_DOCUMENT

        importer = DeckImporter(CONFIG, store=self.store, parse_raw_document=parser,
                                notify=self.messages.append)
        report = await importer.import_presentation(b'PK\x03\x04')
        self.assertTrue(report)
        self.assertEqual(received, [b'PK\x03\x04'])
        self.assertEqual(len(self.store.slides), 2)

    async def test_presentation_without_parser(self):
        with self.assertLogs('slideimport.importer.deck_importer', level='ERROR'):
            report = await self.importer.import_presentation(b'PK')
        self.assertFalse(report)
        self.assertEqual(self.messages, [UNREADABLE_MESSAGE])

    async def test_parser_failure(self):
        def parser(data):
            raise ValueError('corrupt archive')

        importer = DeckImporter(CONFIG, store=self.store, parse_raw_document=parser,
                                notify=self.messages.append)
        with self.assertLogs('slideimport.importer.deck_importer', level='ERROR'):
            report = await importer.import_presentation(b'PK')
        self.assertFalse(report)
        self.assertIsInstance(report.error.cause, ValueError)
        self.assertEqual(self.messages, [UNREADABLE_MESSAGE])

    async def test_parser_returning_non_object(self):
        importer = DeckImporter(CONFIG, store=self.store, parse_raw_document=lambda data: ['nope'],
                                notify=self.messages.append)
        with self.assertLogs('slideimport.importer.deck_importer', level='ERROR'):
            report = await importer.import_presentation(b'PK')
        self.assertFalse(report)

    async def test_import_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / 'deck.json'
            path.write_text(json.dumps(RAW_DOCUMENT), encoding='utf-8')
            report = await self.importer.import_file(path)
        self.assertTrue(report)
        self.assertEqual(len(self.store.slides), 2)

    async def test_import_missing_file(self):
        with self.assertLogs('slideimport.importer.deck_importer', level='ERROR'):
            report = await self.importer.import_file('/nonexistent/deck.json')
        self.assertFalse(report)
        self.assertEqual(self.messages, [UNREADABLE_MESSAGE])

    async def test_malformed_table_does_not_fail_deck(self):
        elements = [{'type': 'text', 'content': 't', 'left': 0, 'top': 0, 'width': 10, 'height': 10}] * 5
        elements = elements + [{'type': 'table', 'left': 0, 'top': 0, 'width': 10, 'height': 10,
                                'colWidths': [1, None], 'data': [[{'text': 'a'}, {'text': 'b'}]]}]
        doc = {'size': {'width': 720}, 'slides': [{'elements': elements}]}
        with self.assertLogs('slideimport.rebuilder.tree_flattener', level='WARNING'):
            report = await self.importer.import_json(json.dumps(doc))
        self.assertTrue(report)
        self.assertEqual([d.kind for d in report.dropped], ['table'])
        self.assertEqual(len(self.store.slides[0]['elements']), 5)
        self.assertEqual(self.messages, [])

    async def test_store_theme_matches_converted_elements(self):
        doc = {'size': {'width': 720}, 'themeColors': ['#111111', '#222222'], 'slides': [{'elements': [
            {'type': 'audio', 'blob': 'a.mp3', 'left': 0, 'top': 0, 'width': 10, 'height': 10},
        ]}]}
        await self.importer.import_json(json.dumps(doc))
        self.assertEqual(self.store.theme['themeColors'][0], '#111111')
        self.assertEqual(self.store.slides[0]['elements'][0]['color'], '#111111')


class TestDeckImporterOutsideLoop(unittest.TestCase):

    def test_importer_built_before_event_loop(self):
        store = SlideStore()
        importer = DeckImporter(CONFIG, store=store, notify=lambda message: None)
        first = asyncio.run(importer.import_json(json.dumps(NORMALIZED_SLIDES)))
        second = asyncio.run(importer.import_json(json.dumps(NORMALIZED_SLIDES)))
        self.assertTrue(first)
        self.assertTrue(second)
        self.assertEqual(len(store.slides), 2)


class TestSlideStore(unittest.TestCase):

    def test_starts_with_one_blank_slide(self):
        store = SlideStore()
        self.assertTrue(store.is_empty())
        self.assertEqual(len(store.slides), 1)

    def test_add_slides_does_not_alias_input(self):
        store = SlideStore()
        slides = [{'id': 'a', 'elements': [{'id': 'x'}]}]
        store.add_slides(slides)
        self.assertEqual(slides[0]['id'], 'a')
        self.assertEqual(slides[0]['elements'][0]['id'], 'x')
        self.assertFalse(store.is_empty())

    def test_add_no_slides(self):
        store = SlideStore()
        store.add_slides([])
        self.assertEqual(store.slide_index, 0)
        self.assertEqual(len(store.slides), 1)


if __name__ == '__main__':
    unittest.main()
