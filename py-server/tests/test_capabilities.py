import pytest

from models.paint_types import Rect
from processors.pattern_builder import PatternBuilder
from utils.capabilities import (
    get_optional_property_value, get_property_value, has_capabilities, originates_from,
)
from utils.validation import MissingCapabilityError

from conftest import operators


class CallableNode:
    """Tile content that is itself callable."""

    def __init__(self):
        self.calls = 0

    def __call__(self):
        self.calls += 1
        return "called"

    def paint(self, target):
        target.writer.fill()


class VendorPattern:
    def __init__(self, node):
        self.graphics_node = node

    def get_pattern_rect(self):
        return Rect(0, 0, 4, 4)


class MethodAccessors:
    def colors(self):
        return ['red']

    def get_radius(self):
        return 3


def test_methods_and_getters_are_called():
    paint = MethodAccessors()
    assert get_property_value(paint, 'colors') == ['red']
    assert get_property_value(paint, 'radius') == 3


def test_callable_attribute_values_are_returned_uncalled():
    node = CallableNode()
    assert get_property_value(VendorPattern(node), 'graphics_node') is node
    assert node.calls == 0


def test_class_valued_attribute_is_returned():
    class Holder:
        kind = Rect
    assert get_property_value(Holder(), 'kind') is Rect


def test_missing_accessor_raises():
    with pytest.raises(MissingCapabilityError):
        get_property_value(object(), 'colors')
    assert get_optional_property_value(object(), 'colors', 'fallback') == 'fallback'


def test_has_capabilities_does_not_call():
    node = CallableNode()
    assert has_capabilities(VendorPattern(node), ('pattern_rect', 'graphics_node'))
    assert node.calls == 0


def test_originates_from_matches_package_prefix():
    assert originates_from(Rect(0, 0, 1, 1), ('models',))
    assert originates_from(Rect(0, 0, 1, 1), ('models.paint_types',))
    assert not originates_from(Rect(0, 0, 1, 1), ('model',))


def test_callable_tile_node_is_painted_not_called(options, state):
    node = CallableNode()
    PatternBuilder(options).apply_tiling_pattern(VendorPattern(node), state)
    assert node.calls == 0
    assert operators(state.writer) == ['cs', 'scn', 'CS', 'SCN']
