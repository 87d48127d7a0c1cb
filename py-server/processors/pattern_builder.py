"""Tiling pattern construction

Turns vector tiles (pattern paints) and raster tiles (texture paints) into
colored tiling patterns and selects them as the current stroke and fill
color.
"""

import logging
from typing import TYPE_CHECKING, Any

from pikepdf import Array, Name, Stream

from constants.pdf_keys import (
    KEY_BBOX, KEY_MATRIX, KEY_PAINT_TYPE, KEY_PATTERN, KEY_PATTERN_TYPE,
    KEY_RESOURCES, KEY_TILING_TYPE, KEY_TYPE, KEY_XOBJECT, KEY_X_STEP, KEY_Y_STEP,
    PAINT_TYPE_COLORED, PATTERN_TYPE_TILING, VAL_PATTERN,
)
from models.paint_types import Rect
from processors.paint_state import TranslationState
from processors.pdf_graphics import ContentStreamWriter, DocumentColor, RenderTarget, ResourcePool
from utils.capabilities import get_optional_property_value, get_property_value
from utils.pdf_transforms import AffineTransform, as_affine_transform

if TYPE_CHECKING:
    from engine.config import PaintApplierOptions

logger = logging.getLogger(__name__)


def _as_rect(value: Any) -> Rect:
    if isinstance(value, Rect):
        return value
    return Rect(float(value.x), float(value.y), float(value.width), float(value.height))


class PatternBuilder:
    """
    Builds colored tiling patterns (/PatternType 1, /PaintType 1).

    The tile cell is the anchor rectangle: /BBox covers it and the steps
    equal its size, so tiles abut without gaps.
    """

    def __init__(self, options: 'PaintApplierOptions'):
        self.options = options

    def _new_pattern(self, state: TranslationState, anchor: Rect, matrix: AffineTransform,
                     content: ContentStreamWriter) -> Stream:
        pattern = state.document.make_stream(content.to_bytes())
        pattern[KEY_TYPE] = Name(VAL_PATTERN)
        pattern[KEY_PATTERN_TYPE] = PATTERN_TYPE_TILING
        pattern[KEY_PAINT_TYPE] = PAINT_TYPE_COLORED
        pattern[KEY_TILING_TYPE] = self.options.tiling_type
        pattern[KEY_BBOX] = Array(list(anchor.to_bbox()))
        pattern[KEY_X_STEP] = anchor.width
        pattern[KEY_Y_STEP] = anchor.height
        pattern[KEY_MATRIX] = Array(matrix.to_ctm())
        pattern[KEY_RESOURCES] = content.resources.resources
        return pattern

    def _select_pattern(self, pattern: Stream, state: TranslationState) -> Name:
        name = state.resources.add(KEY_PATTERN, pattern)
        color = DocumentColor.pattern(name)
        state.writer.set_non_stroking_color(color)
        state.writer.set_stroking_color(color)
        return name

    def apply_tiling_pattern(self, paint: Any, state: TranslationState) -> None:
        """
        Render a vector tile through the sub-renderer and use it as the color.

        If the sub-renderer raises, the error is logged and nothing is
        registered or emitted.
        """
        anchor = _as_rect(get_property_value(paint, 'pattern_rect'))
        paint_transform = get_optional_property_value(paint, 'pattern_transform')
        graphics_node = get_property_value(paint, 'graphics_node')

        if paint_transform is not None:
            matrix = state.transform.concatenate(as_affine_transform(paint_transform))
        else:
            matrix = state.transform
        # Flip the top-down tile content into the bottom-up pattern space
        matrix = matrix.scale(1.0, -1.0)

        target = RenderTarget(state.document, anchor)
        try:
            state.env.sub_renderer.render_into(target, graphics_node)
        except Exception:
            logger.error("Error while drawing pattern paint tile", exc_info=True)
            return

        tile_resources = ResourcePool()
        tile_content = ContentStreamWriter(tile_resources)
        form_name = tile_resources.add(KEY_XOBJECT, target.to_form_xobject())
        tile_content.draw_xobject(form_name)

        pattern = self._new_pattern(state, anchor, matrix, tile_content)
        name = self._select_pattern(pattern, state)
        logger.debug(f"Tiling pattern {name}: {anchor.width:g}x{anchor.height:g}")

    def apply_texture(self, paint: Any, state: TranslationState) -> None:
        """Use a raster tile, scaled to fill its anchor rectangle, as the color."""
        anchor = _as_rect(get_property_value(paint, 'anchor_rect'))
        image = get_property_value(paint, 'image')

        encoded = state.env.image_encoder.encode_image(state.document, image)

        tile_resources = ResourcePool()
        tile_content = ContentStreamWriter(tile_resources)
        image_name = tile_resources.add(KEY_XOBJECT, encoded.xobject)

        ratio_w = anchor.width / encoded.width
        ratio_h = anchor.height / encoded.height
        paint_height = encoded.height * ratio_h
        tile_content.draw_image(
            image_name,
            anchor.x, anchor.y + paint_height,
            encoded.width * ratio_w, -paint_height,
        )

        matrix = AffineTransform.translation(0.0, anchor.height).scale(1.0, -1.0)
        pattern = self._new_pattern(state, anchor, matrix, tile_content)
        name = self._select_pattern(pattern, state)
        logger.debug(f"Texture pattern {name}: {encoded.width}x{encoded.height} image")
