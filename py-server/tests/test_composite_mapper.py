import logging

import pytest
from pikepdf import Name

from models.paint_types import AlphaComposite, CompositeRule
from processors.composite_mapper import (
    apply_composite, blend_mode_for, coerce_rule, read_composite,
)
from utils.validation import PaintValidationError


class SVGComposite:
    """Stand-in for a third-party composite exposing alpha and an integer rule."""

    def __init__(self, alpha, rule):
        self.alpha = alpha
        self.rule = rule


class GetterComposite:
    def __init__(self, alpha, rule):
        self._alpha = alpha
        self._rule = rule

    def get_alpha(self):
        return self._alpha

    def get_rule(self):
        return self._rule


def test_no_composite_leaves_state_untouched(state):
    apply_composite(state)
    assert state.extended_state is None


def test_translucent_source_over(state):
    state.composite = AlphaComposite(CompositeRule.SRC_OVER, 0.5)
    apply_composite(state)
    pending = state.extended_state
    assert pending.stroking_alpha == 0.5
    assert pending.non_stroking_alpha == 0.5
    assert pending.blend_mode == Name('/Compatible')
    assert not pending.is_trivial


def test_opaque_source_over_is_trivial(state):
    state.composite = AlphaComposite(CompositeRule.SRC_OVER, 1.0)
    apply_composite(state)
    assert state.extended_state.stroking_alpha is None
    assert state.extended_state.is_trivial


@pytest.mark.parametrize('rule, blend_mode', [
    (CompositeRule.SRC, '/Normal'),
    (CompositeRule.SRC_OVER, '/Compatible'),
    (CompositeRule.SRC_ATOP, '/Compatible'),
    (CompositeRule.XOR, '/Exclusion'),
    (CompositeRule.CLEAR, '/Compatible'),
    (CompositeRule.DST_IN, '/Compatible'),
    (CompositeRule.DST_OVER, '/Compatible'),
])
def test_rule_to_blend_mode(rule, blend_mode):
    assert blend_mode_for(rule) == Name(blend_mode)


def test_third_party_composite_with_integer_rule():
    assert read_composite(SVGComposite(0.25, 12)) == (0.25, CompositeRule.XOR)


def test_composite_found_through_getters():
    assert read_composite(GetterComposite(0.75, 'src')) == (0.75, CompositeRule.SRC)


def test_third_party_alpha_is_validated():
    with pytest.raises(PaintValidationError):
        read_composite(SVGComposite(1.5, 3))


def test_unknown_composite_is_logged_and_ignored(state, caplog):
    state.composite = object()
    with caplog.at_level(logging.WARNING):
        apply_composite(state)
    assert "Unknown composite" in caplog.text
    assert state.extended_state.is_trivial


@pytest.mark.parametrize('value, expected', [
    (CompositeRule.DST, CompositeRule.DST),
    ('src-over', CompositeRule.SRC_OVER),
    ('SRC_ATOP', CompositeRule.SRC_ATOP),
    (2, CompositeRule.SRC),
    (12, CompositeRule.XOR),
])
def test_coerce_rule(value, expected):
    assert coerce_rule(value) is expected


@pytest.mark.parametrize('value', ['multiply', 0, 13, True, None])
def test_coerce_rule_rejects_unknown(value):
    with pytest.raises(PaintValidationError):
        coerce_rule(value)
