import logging
from typing import Any, Tuple

from pikepdf import Name

from constants.pdf_keys import VAL_BM_COMPATIBLE, VAL_BM_EXCLUSION, VAL_BM_NORMAL
from models.paint_types import RULE_CODES, AlphaComposite, CompositeRule
from processors.paint_state import TranslationState
from utils.capabilities import get_property_value, has_capabilities
from utils.validation import PaintValidationError, validate_alpha

logger = logging.getLogger(__name__)

THIRD_PARTY_COMPOSITE_NAMES = {"SVGComposite"}

# Rules without a PDF counterpart fall back to /Compatible
BLEND_MODES = {
    CompositeRule.SRC: VAL_BM_NORMAL,
    CompositeRule.SRC_OVER: VAL_BM_COMPATIBLE,
    CompositeRule.SRC_ATOP: VAL_BM_COMPATIBLE,
    CompositeRule.XOR: VAL_BM_EXCLUSION,
}


def coerce_rule(value: Any) -> CompositeRule:
    """Accept a CompositeRule, its string value, or an integer rule code."""
    if isinstance(value, CompositeRule):
        return value
    if isinstance(value, str):
        try:
            return CompositeRule(value.lower().replace('_', '-'))
        except ValueError:
            pass
    elif isinstance(value, int) and not isinstance(value, bool) and value in RULE_CODES:
        return RULE_CODES[value]
    raise PaintValidationError(f"Unknown compositing rule: {value!r}")


def blend_mode_for(rule: CompositeRule) -> Name:
    return Name(BLEND_MODES.get(rule, VAL_BM_COMPATIBLE))


def read_composite(composite: Any) -> Tuple[float, CompositeRule]:
    """Return (alpha, rule) for a native or capability-compatible composite."""
    if isinstance(composite, AlphaComposite):
        return composite.alpha, composite.rule

    if type(composite).__name__ in THIRD_PARTY_COMPOSITE_NAMES or \
            has_capabilities(composite, ('alpha', 'rule')):
        alpha = validate_alpha(get_property_value(composite, 'alpha'))
        rule = coerce_rule(get_property_value(composite, 'rule'))
        return alpha, rule

    logger.warning(f"Unknown composite {type(composite).__qualname__}")
    return 1.0, CompositeRule.SRC_OVER


def apply_composite(state: TranslationState) -> None:
    """Fold the call's composite into the pending extended graphics state."""
    # If we don't have a composite we don't need to do any mapping
    if state.composite is None:
        return

    alpha, rule = read_composite(state.composite)

    pending = state.ensure_extended_state()
    if alpha < 1:
        pending.set_alpha(alpha)
    pending.blend_mode = blend_mode_for(rule)
    logger.debug(f"Composite {rule.value} alpha={alpha} -> {pending.blend_mode}")
