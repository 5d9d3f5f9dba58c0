"""
Tests for document decoding, classification and raw element helpers.
"""

import unittest
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from slideimport.exceptions import UnreadableDocumentError
from slideimport.reader.element_extractor import ElementExtractor
from slideimport.reader.raw_document import (
    classify_document, decode_json, extract_slides, validate_raw_document,
)


class TestClassification(unittest.TestCase):

    def test_raw_by_size(self):
        self.assertEqual(classify_document({'size': {'width': 960, 'height': 540}, 'slides': []}), 'raw')

    def test_raw_by_theme_colors(self):
        self.assertEqual(classify_document({'themeColors': [], 'slides': [{'fill': {}}]}), 'raw')

    def test_slide_list(self):
        self.assertEqual(classify_document([{'elements': []}]), 'slides')
        self.assertEqual(classify_document({'slides': [{'elements': [], 'background': {}}]}), 'slides')

    def test_raw_slide_fill_is_not_a_slide_list(self):
        with self.assertRaises(UnreadableDocumentError):
            classify_document({'slides': [{'elements': [], 'fill': {'type': 'color'}}]})

    def test_unrecognized_documents(self):
        for doc in ({}, {'slides': 'nope'}, [1, 2], 'text', 42, None, [{'foo': 1}]):
            with self.subTest(doc=doc):
                with self.assertRaises(UnreadableDocumentError):
                    classify_document(doc)

    def test_declared_variants(self):
        self.assertEqual(classify_document({'slides': []}, 'raw'), 'raw')
        self.assertEqual(classify_document([], 'slides'), 'slides')
        with self.assertRaises(UnreadableDocumentError):
            classify_document({'slides': []}, 'pptx')
        with self.assertRaises(UnreadableDocumentError):
            classify_document([], 'raw')

    def test_extract_slides(self):
        self.assertEqual(extract_slides([{'id': 1}]), [{'id': 1}])
        self.assertEqual(extract_slides({'slides': []}), [])
        self.assertIsNone(extract_slides('x'))


class TestDecoding(unittest.TestCase):

    def test_bytes_with_bom(self):
        self.assertEqual(decode_json('\ufeff{"a": 1}'.encode('utf-8')), {'a': 1})

    def test_invalid_json(self):
        with self.assertRaises(UnreadableDocumentError):
            decode_json('{not json')

    def test_invalid_encoding(self):
        with self.assertRaises(UnreadableDocumentError):
            decode_json(b'\xff\xfe\xfa')


class TestValidateRawDocument(unittest.TestCase):

    def test_missing_slides_means_empty(self):
        self.assertEqual(validate_raw_document({'size': {'width': 1}})['slides'], [])

    def test_rejects_non_object(self):
        with self.assertRaises(UnreadableDocumentError):
            validate_raw_document([])

    def test_rejects_bad_slides(self):
        with self.assertRaises(UnreadableDocumentError):
            validate_raw_document({'slides': {}})
        with self.assertRaises(UnreadableDocumentError):
            validate_raw_document({'slides': ['x']})


class TestElementExtractor(unittest.TestCase):

    def test_stable_order_sort(self):
        elements = [{'id': 'a', 'order': 2}, {'id': 'b'}, {'id': 'c', 'order': 2}, {'id': 'd', 'order': 1}]
        self.assertEqual([e['id'] for e in ElementExtractor.sort_by_order(elements)], ['b', 'd', 'a', 'c'])

    def test_origin_box_floors_size(self):
        self.assertEqual(ElementExtractor.origin_box({'left': 3, 'width': 0}),
                         {'left': 3, 'top': 0, 'width': 1, 'height': 1})

    def test_scale_element_copies(self):
        el = {'type': 'text', 'left': 1, 'top': 2, 'width': 3, 'height': 4}
        scaled = ElementExtractor.scale_element(el, 2)
        self.assertEqual((scaled['left'], scaled['top'], scaled['width'], scaled['height']), (2, 4, 6, 8))
        self.assertEqual(el['left'], 1)

    def test_container_detection(self):
        self.assertTrue(ElementExtractor.is_container({'type': 'group'}))
        self.assertTrue(ElementExtractor.is_container({'type': 'diagram'}))
        self.assertFalse(ElementExtractor.is_container({'type': 'shape'}))


if __name__ == '__main__':
    unittest.main()
