"""
Tests for scale ratio computation and whole-document slide assembly.
"""

import unittest
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from slideimport.mapper.style_mapper import Theme
from slideimport.rebuilder.slide_assembler import SlideAssembler, compute_scale_ratio, DPI_RATIO


class TestScaleRatio(unittest.TestCase):

    def test_points_to_pixels(self):
        ratio, viewport = compute_scale_ratio(720)
        self.assertAlmostEqual(ratio, 4 / 3)
        self.assertAlmostEqual(viewport, 960)

    def test_fixed_viewport(self):
        ratio, viewport = compute_scale_ratio(500, fixed_viewport=True)
        self.assertEqual(ratio, 2)
        self.assertIsNone(viewport)

    def test_missing_width(self):
        self.assertEqual(compute_scale_ratio(None), (DPI_RATIO, None))
        self.assertEqual(compute_scale_ratio(0, fixed_viewport=True), (DPI_RATIO, None))


class TestSlideAssembler(unittest.IsolatedAsyncioTestCase):

    def setUp(self):
        self.assembler = SlideAssembler({'default_background': '#fafafa'}, Theme())

    async def test_empty_document(self):
        result = await self.assembler.assemble({})
        self.assertEqual(result.slides, [])
        self.assertEqual(result.dropped, [])
        self.assertIsNone(result.viewport_size)

    async def test_slide_elements_then_layout_elements(self):
        raw = {
            'size': {'width': 720, 'height': 405},
            'themeColors': ['#111111'],
            'slides': [{
                'note': 'speaker notes',
                'elements': [{'type': 'text', 'content': 'body', 'left': 0, 'top': 0, 'width': 10, 'height': 10}],
                'layoutElements': [{'type': 'text', 'content': 'footer', 'left': 0, 'top': 0, 'width': 10, 'height': 10}],
            }],
        }
        result = await self.assembler.assemble(raw)
        self.assertAlmostEqual(result.viewport_size, 960)
        self.assertEqual(result.theme_colors, ['#111111'])

        [slide] = result.slides
        data = slide.to_dict()
        self.assertEqual([el['content'] for el in data['elements']], ['body', 'footer'])
        self.assertEqual(data['remark'], 'speaker notes')
        self.assertEqual(data['background'], {'type': 'solid', 'color': '#fafafa'})

    async def test_fixed_viewport_scaling(self):
        raw = {
            'size': {'width': 500},
            'slides': [{'elements': [{'type': 'text', 'content': '', 'left': 10, 'top': 10,
                                      'width': 100, 'height': 50}]}],
        }
        result = await self.assembler.assemble(raw, fixed_viewport=True)
        [el] = result.slides[0].elements
        self.assertEqual((el.left, el.top, el.width, el.height), (20, 20, 200, 100))
        self.assertIsNone(result.viewport_size)

    async def test_backgrounds(self):
        raw = {
            'size': {'width': 720},
            'slides': [
                {'fill': {'type': 'color', 'value': '#abcdef'}},
                {'fill': {'type': 'image', 'value': {'picBase64': 'data:image/png;base64,AA=='}}},
                {'fill': {'type': 'gradient', 'value': {
                    'path': 'circle', 'rot': 10, 'colors': [{'pos': '50%', 'color': '#fff'}]}}},
            ],
        }
        result = await self.assembler.assemble(raw)
        backgrounds = [slide.to_dict()['background'] for slide in result.slides]
        self.assertEqual(backgrounds[0], {'type': 'solid', 'color': '#abcdef'})
        self.assertEqual(backgrounds[1], {'type': 'image', 'image': {
            'src': 'data:image/png;base64,AA==', 'size': 'cover'}})
        self.assertEqual(backgrounds[2], {'type': 'gradient', 'gradient': {
            'type': 'radial', 'colors': [{'pos': 50, 'color': '#fff'}], 'rotate': 100}})

    async def test_dropped_elements_collected_across_slides(self):
        bad_shape = {'type': 'shape', 'shapType': 'mystery', 'left': 0, 'top': 0, 'width': 1, 'height': 1}
        raw = {'size': {'width': 720}, 'slides': [{'elements': [bad_shape]}, {'elements': [bad_shape]}]}
        with self.assertLogs('slideimport.rebuilder.tree_flattener', level='WARNING'):
            result = await self.assembler.assemble(raw)
        self.assertEqual(len(result.slides), 2)
        self.assertEqual(len(result.dropped), 2)
        self.assertEqual(result.slides[0].elements, [])

    async def test_deck_theme_colours_reach_converters(self):
        raw = {
            'size': {'width': 720},
            'themeColors': ['#111111', '#222222'],
            'slides': [{'elements': [
                {'type': 'audio', 'blob': 'a.mp3', 'left': 0, 'top': 0, 'width': 10, 'height': 10},
                {'type': 'chart', 'chartType': 'pieChart', 'left': 0, 'top': 0, 'width': 10, 'height': 10,
                 'data': [{'key': 'S', 'xlabels': {'0': 'a'}, 'values': [{'x': 0, 'y': 1}]}]},
            ]}],
        }
        result = await self.assembler.assemble(raw)
        audio, chart = [el.to_dict() for el in result.slides[0].elements]
        self.assertEqual(audio['color'], '#111111')
        self.assertEqual(chart['themeColors'], ['#111111', '#222222'])
        # configured theme itself is left untouched
        self.assertEqual(self.assembler.theme.theme_colors[0], '#5b9bd5')

    async def test_configured_theme_without_deck_colours(self):
        raw = {'size': {'width': 720}, 'slides': [{'elements': [
            {'type': 'audio', 'blob': 'a.mp3', 'left': 0, 'top': 0, 'width': 10, 'height': 10},
        ]}]}
        result = await self.assembler.assemble(raw)
        self.assertEqual(result.slides[0].elements[0].to_dict()['color'], '#5b9bd5')

    async def test_malformed_element_dropped_among_valid_ones(self):
        elements = [{'type': 'text', 'content': str(i), 'left': i, 'top': 0, 'width': 10, 'height': 10}
                    for i in range(50)]
        elements.append({'type': 'table', 'left': 0, 'top': 0, 'width': 100, 'height': 40,
                         'colWidths': [1, None], 'data': [[{'text': 'a'}, {'text': 'b'}]]})
        raw = {'size': {'width': 720}, 'slides': [{'elements': elements}]}
        with self.assertLogs('slideimport.rebuilder.tree_flattener', level='WARNING'):
            result = await self.assembler.assemble(raw)
        self.assertEqual(len(result.slides[0].elements), 50)
        [dropped] = result.dropped
        self.assertEqual(dropped.kind, 'table')
        self.assertIn('TypeError', dropped.reason)


if __name__ == '__main__':
    unittest.main()
