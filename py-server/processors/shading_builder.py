"""Shading construction for gradient paints

Builds axial (/ShadingType 2) and radial (/ShadingType 3) shading
dictionaries for multi-stop and two-stop gradients, and imports ready-made
shadings carried by shading paints.

Gradient geometry is given in canvas coordinates and is mapped through the
call transform (composed with the paint's own transform, when it has one)
before being written as /Coords.
"""

import logging
from typing import TYPE_CHECKING, Any, List, Sequence, Tuple

from pikepdf import Array, Dictionary, Pdf

from constants.pdf_keys import (
    KEY_ANTI_ALIAS, KEY_COLOR_SPACE, KEY_COORDS, KEY_EXTEND, KEY_FUNCTION,
    KEY_SHADING_TYPE, SHADING_TYPE_AXIAL, SHADING_TYPE_RADIAL,
)
from models.paint_types import Color, CycleMethod, GradientPaint
from processors.color_applier import apply_color
from processors.gradient_functions import GradientFunctionBuilder
from processors.paint_state import TranslationState
from utils.capabilities import (
    get_optional_property_value, get_property_value, originates_from,
)
from utils.pdf_transforms import AffineTransform, as_affine_transform
from utils.validation import PaintValidationError, validate_gradient_stops

if TYPE_CHECKING:
    from engine.config import PaintApplierOptions

logger = logging.getLogger(__name__)


def _xy(point: Any) -> Tuple[float, float]:
    """Read a point given as an object with x/y or as an (x, y) pair."""
    if hasattr(point, 'x') and hasattr(point, 'y'):
        return float(point.x), float(point.y)
    try:
        x, y = point
    except (TypeError, ValueError):
        raise PaintValidationError(f"Not a point: {point!r}")
    return float(x), float(y)


def _extend_both() -> Array:
    # Gradients are always padded past both ends
    return Array([True, True])


class ShadingBuilder:
    """
    Builds shading dictionaries for gradient and shading paints.

    Each ``build_*`` method also sets the first gradient color as the current
    stroke and fill color, so that renderers without shading support still
    paint something sensible.
    """

    def __init__(self, options: 'PaintApplierOptions'):
        self.options = options

    def _function_builder(self, state: TranslationState) -> GradientFunctionBuilder:
        return GradientFunctionBuilder(state.color_mapper, epsilon=self.options.epsilon)

    def _new_shading(self, shading_type: int, first_color: Color, state: TranslationState,
                     coords: Sequence[float], anti_alias: bool) -> Dictionary:
        mapped = state.color_mapper.map_color(first_color)
        shading = Dictionary({
            KEY_SHADING_TYPE: shading_type,
            KEY_COLOR_SPACE: mapped.color_space,
            KEY_COORDS: Array([float(c) for c in coords]),
            KEY_EXTEND: _extend_both(),
        })
        if anti_alias:
            shading[KEY_ANTI_ALIAS] = True
        return shading

    def _read_stops(self, paint: Any) -> Tuple[List[Color], List[float]]:
        colors = list(get_property_value(paint, 'colors'))
        fractions = [float(f) for f in get_property_value(paint, 'fractions')]
        validate_gradient_stops(colors, fractions)
        return colors, fractions

    def _compose_paint_transform(self, paint: Any, state: TranslationState) -> None:
        gradient_transform = get_optional_property_value(paint, 'transform')
        if gradient_transform is not None:
            state.transform = state.transform.concatenate(as_affine_transform(gradient_transform))

    def _log_cycle_method(self, paint: Any) -> None:
        cycle_method = get_optional_property_value(paint, 'cycle_method', CycleMethod.NO_CYCLE)
        if isinstance(cycle_method, str) and not isinstance(cycle_method, CycleMethod):
            try:
                cycle_method = CycleMethod(cycle_method.lower().replace('_', '-'))
            except ValueError:
                logger.debug(f"Unrecognized cycle method {cycle_method!r}, treating as no-cycle")
                return
        if cycle_method != CycleMethod.NO_CYCLE:
            logger.debug(f"Cycle method {cycle_method} is rendered as a padded gradient")

    def build_linear(self, paint: Any, state: TranslationState) -> Dictionary:
        """
        Build an axial shading for a multi-stop linear gradient.

        Emits the rectangle spanning the gradient axis and, unless the paint
        comes from a compatibility source, the translate/scale remap from the
        top-down canvas to the bottom-up page.
        """
        colors, fractions = self._read_stops(paint)
        apply_color(colors[0], state)

        start = _xy(get_property_value(paint, 'start_point'))
        end = _xy(get_property_value(paint, 'end_point'))
        self._compose_paint_transform(paint, state)
        self._log_cycle_method(paint)

        tf_start = state.transform.transform_point(*start)
        tf_end = state.transform.transform_point(*end)
        width = tf_end[0] - tf_start[0]
        height = tf_end[1] - tf_start[1]

        compat = (
            originates_from(paint, self.options.compat_gradient_modules)
            and state.env.shape_bounds is not None
        )
        if compat:
            coords_start, coords_end = start, end
        else:
            coords_start, coords_end = tf_start, tf_end

        shading = self._new_shading(
            SHADING_TYPE_AXIAL, colors[0], state,
            coords=[*coords_start, *coords_end],
            anti_alias=self.options.anti_alias,
        )
        shading[KEY_FUNCTION] = self._function_builder(state).build(colors, fractions).to_pdf()

        if self.options.remap_linear_gradients:
            state.writer.add_rect(
                coords_start[0], coords_start[1],
                coords_end[0] - coords_start[0], coords_end[1] - coords_start[1],
            )
            degenerate = abs(width) < self.options.epsilon or abs(height) < self.options.epsilon
            if compat:
                logger.debug("Compatibility gradient: keeping untransformed coordinates")
            elif degenerate:
                logger.debug(f"Skipping gradient remap for degenerate extent {width:g}x{height:g}")
            else:
                # Canvas is top-down, PDF user space is bottom-up
                state.writer.transform(AffineTransform.translation(tf_start[0], tf_start[1] + height))
                state.writer.transform(AffineTransform.scaling(width, -height))

        return shading

    def build_radial(self, paint: Any, state: TranslationState) -> Dictionary:
        """Build a radial shading with a zero-radius start circle at the center."""
        colors, fractions = self._read_stops(paint)
        apply_color(colors[0], state)

        center = _xy(get_property_value(paint, 'center_point'))
        focus = _xy(get_optional_property_value(paint, 'focus_point', center))
        self._compose_paint_transform(paint, state)
        self._log_cycle_method(paint)

        cx, cy = state.transform.transform_point(*center)
        fx, fy = state.transform.transform_point(*focus)
        radius = abs(float(get_property_value(paint, 'radius')) * state.transform.scale_x)

        shading = self._new_shading(
            SHADING_TYPE_RADIAL, colors[0], state,
            coords=[cx, cy, 0.0, fx, fy, radius],
            anti_alias=self.options.anti_alias,
        )
        shading[KEY_FUNCTION] = self._function_builder(state).build(colors, fractions).to_pdf()
        return shading

    def build_two_stop(self, paint: GradientPaint, state: TranslationState) -> Dictionary:
        colors = [paint.color1, paint.color2]
        apply_color(colors[0], state)

        start = state.transform.transform_point(*_xy(paint.point1))
        end = state.transform.transform_point(*_xy(paint.point2))
        if paint.cyclic:
            logger.debug("Cyclic two-stop gradient is rendered as a padded gradient")

        shading = self._new_shading(
            SHADING_TYPE_AXIAL, colors[0], state,
            coords=[*start, *end],
            anti_alias=False,
        )
        shading[KEY_FUNCTION] = self._function_builder(state).build(colors, [0.0, 1.0]).to_pdf()
        return shading

    def import_shading(self, paint: Any, state: TranslationState) -> Any:
        """
        Import the ready-made shading of a shading paint into the document.

        The paint's matrix is emitted as ``cm`` before the shading is used.
        """
        shading = get_property_value(paint, 'shading')
        matrix = get_optional_property_value(paint, 'matrix')
        if matrix is not None:
            state.writer.transform(as_affine_transform(matrix))
        return self._copy_into(state.document, shading)

    def _copy_into(self, document: Pdf, shading: Any) -> Any:
        if getattr(shading, 'is_indirect', False) and not shading.is_owned_by(document):
            logger.debug(f"Copying foreign shading {shading.objgen} into target document")
            return document.copy_foreign(shading)
        return shading
