"""
Gradient function encoding.

Re-encodes an ordered list of color stops as a PDF Type 3 (stitching)
function of Type 2 (exponential, N=1) segments. Synthetic stops are added at
the ends when the first stop is not at 0 or the last is not at 1, so that the
rendered gradient is flat before the first and after the last stop.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

from pikepdf import Array, Dictionary

from constants.pdf_keys import (
    FUNCTION_TYPE_EXPONENTIAL, FUNCTION_TYPE_STITCHING, KEY_BOUNDS, KEY_C0, KEY_C1,
    KEY_DOMAIN, KEY_ENCODE, KEY_FUNCTION_TYPE, KEY_FUNCTIONS, KEY_N,
)
from models.paint_types import Color
from utils.validation import validate_gradient_stops

logger = logging.getLogger(__name__)

# Very small number, everything smaller than this is zero for us
DEFAULT_EPSILON = 0.00001

UNIT_DOMAIN = (0.0, 1.0)


@dataclass(frozen=True)
class ColorStop:
    color: Color
    fraction: float


@dataclass(frozen=True)
class InterpolationFunction:
    """Type 2 function interpolating linearly between two component vectors."""
    c0: Tuple[float, ...]
    c1: Tuple[float, ...]
    domain: Tuple[float, float] = UNIT_DOMAIN
    exponent: int = 1

    def to_pdf(self) -> Dictionary:
        return Dictionary({
            KEY_FUNCTION_TYPE: FUNCTION_TYPE_EXPONENTIAL,
            KEY_C0: Array(list(self.c0)),
            KEY_C1: Array(list(self.c1)),
            KEY_N: self.exponent,
            KEY_DOMAIN: Array(list(self.domain)),
        })


@dataclass
class GradientFunction:
    """Stitching function over [0, 1] built from color stops."""
    stops: List[ColorStop]
    functions: List[InterpolationFunction]
    bounds: List[float]
    encode: List[float] = field(default_factory=list)
    domain: Tuple[float, float] = UNIT_DOMAIN

    def to_pdf(self) -> Dictionary:
        return Dictionary({
            KEY_FUNCTION_TYPE: FUNCTION_TYPE_STITCHING,
            KEY_DOMAIN: Array(list(self.domain)),
            KEY_FUNCTIONS: Array([function.to_pdf() for function in self.functions]),
            KEY_BOUNDS: Array(list(self.bounds)),
            KEY_ENCODE: Array(list(self.encode)),
        })


class GradientFunctionBuilder:
    """
    Builds stitching functions from gradient stops.

    Example:
        >>> builder = GradientFunctionBuilder(DeviceRGBColorMapper())
        >>> function = builder.build([black, white], [0.2, 1.0])
        >>> function.bounds
        [0.2]
    """

    def __init__(self, color_mapper, epsilon: float = DEFAULT_EPSILON):
        self.color_mapper = color_mapper
        self.epsilon = epsilon

    def build(self, colors: Sequence[Color], fractions: Sequence[float]) -> GradientFunction:
        """
        Encode ``colors`` at ``fractions`` as a stitching function.

        Raises:
            GradientStopError: If the stop lists are malformed
        """
        validate_gradient_stops(colors, fractions)
        fractions = [float(f) for f in fractions]

        if len(colors) == 1:
            # A lone stop paints the whole axis in one color
            stops = [ColorStop(colors[0], 0.0), ColorStop(colors[0], 1.0)]
            return self._assemble(stops, bounds=[])

        stops = [ColorStop(color, fraction) for color, fraction in zip(colors, fractions)]
        bounds: List[float] = []

        if abs(fractions[0]) > self.epsilon:
            # Keyframe for fraction 0
            stops.insert(0, ColorStop(colors[0], 0.0))
            bounds.append(fractions[0])

        # Inner fractions are always bounds
        bounds.extend(fractions[1:-1])

        if abs(fractions[-1] - 1.0) > self.epsilon:
            # Keyframe for fraction 1
            stops.append(ColorStop(colors[-1], 1.0))
            bounds.append(fractions[-1])

        return self._assemble(stops, bounds)

    def _assemble(self, stops: List[ColorStop], bounds: List[float]) -> GradientFunction:
        functions: List[InterpolationFunction] = []
        encode: List[float] = []

        previous = self.color_mapper.map_color(stops[0].color)
        for stop in stops[1:]:
            current = self.color_mapper.map_color(stop.color)
            functions.append(InterpolationFunction(
                c0=tuple(float(c) for c in previous.components),
                c1=tuple(float(c) for c in current.components),
            ))
            encode.extend(UNIT_DOMAIN)
            previous = current

        if len(functions) != len(bounds) + 1:
            raise AssertionError(
                f"Stitching function has {len(functions)} segments but {len(bounds)} bounds"
            )

        logger.debug(f"Built stitching function: {len(functions)} segments, bounds={bounds}")
        return GradientFunction(stops=stops, functions=functions, bounds=bounds, encode=encode)
