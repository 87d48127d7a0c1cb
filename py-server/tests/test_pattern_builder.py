import logging

import pikepdf
import pytest
from PIL import Image
from pikepdf import Name

from engine.config import PaintApplierOptions
from models.paint_types import Color, PatternPaint, Rect, TexturePaint
from processors.pattern_builder import PatternBuilder
from processors.sub_rendering import FilledRectsNode
from utils.pdf_transforms import AffineTransform

from conftest import FailingSubRenderer, operands_of, operators


@pytest.fixture
def builder(options):
    return PatternBuilder(options)


def _tile():
    return FilledRectsNode([
        (Rect(0, 0, 5, 5), Color(255, 0, 0)),
        (Rect(5, 5, 5, 5), Color(0, 0, 255)),
    ])


def _pattern(state, name='/P1'):
    return state.resources.resources['/Pattern'][name]


def _content_operators(stream):
    return [str(instruction.operator) for instruction in pikepdf.parse_content_stream(stream)]


def test_tiling_pattern_is_selected_as_color(builder, state):
    builder.apply_tiling_pattern(PatternPaint(Rect(0, 0, 10, 10), _tile()), state)

    assert operators(state.writer) == ['cs', 'scn', 'CS', 'SCN']
    assert operands_of(state.writer, b'scn') == [[Name('/P1')]]
    assert operands_of(state.writer, b'cs') == [[Name('/Pattern')]]

    pattern = _pattern(state)
    assert pattern['/Type'] == Name('/Pattern')
    assert int(pattern['/PatternType']) == 1
    assert int(pattern['/PaintType']) == 1
    assert int(pattern['/TilingType']) == 3
    assert [float(v) for v in pattern['/BBox']] == [0, 0, 10, 10]
    assert float(pattern['/XStep']) == 10
    assert float(pattern['/YStep']) == 10
    assert [float(v) for v in pattern['/Matrix']] == [1, 0, 0, -1, 0, 0]


def test_tile_content_is_a_form_xobject(builder, state):
    builder.apply_tiling_pattern(PatternPaint(Rect(0, 0, 10, 10), _tile()), state)

    pattern = _pattern(state)
    assert _content_operators(pattern) == ['Do']
    form = pattern['/Resources']['/XObject']['/X1']
    assert form['/Subtype'] == Name('/Form')
    assert _content_operators(form) == ['rg', 're', 'f', 'rg', 're', 'f']


def test_pattern_transform_composes_with_call_transform(builder, state):
    state.transform = AffineTransform.scaling(2, 2)
    paint = PatternPaint(Rect(0, 0, 4, 4), _tile(), AffineTransform.translation(5, 0))
    builder.apply_tiling_pattern(paint, state)
    assert [float(v) for v in _pattern(state)['/Matrix']] == [2, 0, 0, -2, 10, 0]


def test_tiling_type_comes_from_options(state):
    builder = PatternBuilder(PaintApplierOptions(tiling_type=1))
    builder.apply_tiling_pattern(PatternPaint(Rect(0, 0, 4, 4), _tile()), state)
    assert int(_pattern(state)['/TilingType']) == 1


def test_failing_sub_renderer_leaves_no_trace(builder, state, env, caplog):
    env.sub_renderer = FailingSubRenderer()
    with caplog.at_level(logging.ERROR):
        builder.apply_tiling_pattern(PatternPaint(Rect(0, 0, 4, 4), _tile()), state)

    assert env.sub_renderer.calls == 1
    assert len(state.writer) == 0
    assert len(state.resources) == 0
    assert "Error while drawing pattern paint tile" in caplog.text


def test_node_without_paint_entry_point_is_logged(builder, state, caplog):
    with caplog.at_level(logging.ERROR):
        builder.apply_tiling_pattern(PatternPaint(Rect(0, 0, 4, 4), object()), state)
    assert len(state.writer) == 0
    assert "has no paint() entry point" in caplog.text


def test_texture_pattern(builder, state):
    image = Image.new('RGBA', (4, 2), (255, 0, 0, 128))
    builder.apply_texture(TexturePaint(image, Rect(0, 0, 8, 4)), state)

    assert operators(state.writer) == ['cs', 'scn', 'CS', 'SCN']
    pattern = _pattern(state)
    assert [float(v) for v in pattern['/Matrix']] == [1, 0, 0, -1, 0, 4]
    assert [float(v) for v in pattern['/BBox']] == [0, 0, 8, 4]

    image_xobject = pattern['/Resources']['/XObject']['/X1']
    assert int(image_xobject['/Width']) == 4
    assert int(image_xobject['/Height']) == 2
    assert '/SMask' in image_xobject

    instructions = list(pikepdf.parse_content_stream(pattern))
    assert [str(i.operator) for i in instructions] == ['q', 'cm', 'Do', 'Q']
    assert [float(v) for v in instructions[1].operands] == [8, 0, 0, -4, 0, 4]


def test_opaque_texture_has_no_soft_mask(builder, state):
    image = Image.new('RGB', (2, 2), (0, 255, 0))
    builder.apply_texture(TexturePaint(image, Rect(0, 0, 2, 2)), state)
    image_xobject = _pattern(state)['/Resources']['/XObject']['/X1']
    assert '/SMask' not in image_xobject
    assert image_xobject['/ColorSpace'] == Name('/DeviceRGB')
