import logging

from models.paint_types import Color
from processors.paint_state import TranslationState

logger = logging.getLogger(__name__)

MAX_ALPHA = 255


def apply_color(color: Color, state: TranslationState) -> None:
    """
    Set ``color`` as both stroking and non-stroking color.

    Translucent colors multiply the pending alpha constants, so a translucent
    color under a translucent composite combines both attenuations.
    """
    mapped = state.color_mapper.map_color(color)
    state.writer.set_stroking_color(mapped)
    state.writer.set_non_stroking_color(mapped)

    if color.alpha < MAX_ALPHA:
        # This is semitransparent
        state.ensure_extended_state().multiply_alpha(color.alpha / float(MAX_ALPHA))
