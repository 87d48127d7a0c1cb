import pytest

from models.paint_types import Color
from processors.color_mapping import DeviceRGBColorMapper
from processors.gradient_functions import GradientFunctionBuilder
from utils.validation import GradientStopError

BLACK = Color(0, 0, 0)
WHITE = Color(255, 255, 255)
RED = Color(255, 0, 0)


@pytest.fixture
def builder():
    return GradientFunctionBuilder(DeviceRGBColorMapper())


def test_full_range_needs_no_synthetic_stops(builder):
    function = builder.build([BLACK, WHITE], [0.0, 1.0])
    assert len(function.stops) == 2
    assert len(function.functions) == 1
    assert function.bounds == []
    assert function.encode == [0.0, 1.0]
    assert function.functions[0].c0 == (0.0, 0.0, 0.0)
    assert function.functions[0].c1 == (1.0, 1.0, 1.0)


def test_late_first_stop_adds_flat_segment(builder):
    function = builder.build([BLACK, WHITE], [0.2, 1.0])
    assert [stop.fraction for stop in function.stops] == [0.0, 0.2, 1.0]
    assert function.bounds == [0.2]
    assert len(function.functions) == 2
    flat = function.functions[0]
    assert flat.c0 == flat.c1 == (0.0, 0.0, 0.0)


def test_early_last_stop_adds_flat_segment(builder):
    function = builder.build([BLACK, WHITE], [0.0, 0.75])
    assert function.bounds == [0.75]
    flat = function.functions[-1]
    assert flat.c0 == flat.c1 == (1.0, 1.0, 1.0)


def test_both_ends_synthetic(builder):
    function = builder.build([BLACK, RED, WHITE], [0.2, 0.5, 0.8])
    assert function.bounds == [0.2, 0.5, 0.8]
    assert len(function.functions) == 4
    assert len(function.stops) == 5


def test_inner_fractions_are_always_bounds(builder):
    function = builder.build([BLACK, RED, WHITE], [0.0, 0.5, 1.0])
    assert function.bounds == [0.5]
    assert len(function.functions) == len(function.bounds) + 1


def test_fractions_within_epsilon_count_as_ends(builder):
    function = builder.build([BLACK, WHITE], [0.000001, 0.999999])
    assert function.bounds == []
    assert len(function.functions) == 1


def test_single_stop_paints_one_color(builder):
    function = builder.build([RED], [0.4])
    assert len(function.functions) == 1
    assert function.bounds == []
    assert function.functions[0].c0 == function.functions[0].c1 == (1.0, 0.0, 0.0)


def test_equal_adjacent_fractions_make_a_hard_stop(builder):
    function = builder.build([BLACK, BLACK, WHITE, WHITE], [0.0, 0.5, 0.5, 1.0])
    assert function.bounds == [0.5, 0.5]
    assert len(function.functions) == 3


def test_to_pdf_writes_stitching_function(builder):
    pdf_function = builder.build([BLACK, RED, WHITE], [0.0, 0.5, 1.0]).to_pdf()
    assert int(pdf_function['/FunctionType']) == 3
    assert [float(v) for v in pdf_function['/Domain']] == [0.0, 1.0]
    assert [float(v) for v in pdf_function['/Bounds']] == [0.5]
    assert [float(v) for v in pdf_function['/Encode']] == [0.0, 1.0, 0.0, 1.0]
    segments = list(pdf_function['/Functions'])
    assert len(segments) == 2
    assert int(segments[0]['/FunctionType']) == 2
    assert int(segments[0]['/N']) == 1
    assert [float(v) for v in segments[0]['/C1']] == [1.0, 0.0, 0.0]


@pytest.mark.parametrize('colors, fractions', [
    ([], []),
    ([BLACK, WHITE], [0.0]),
    ([BLACK, WHITE], [0.6, 0.4]),
    ([BLACK, WHITE], [-0.1, 1.0]),
    ([BLACK, WHITE], [0.0, 1.5]),
    ([BLACK, WHITE], [0.0, float('nan')]),
])
def test_malformed_stops_are_rejected(builder, colors, fractions):
    with pytest.raises(GradientStopError):
        builder.build(colors, fractions)
