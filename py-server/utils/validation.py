"""
Paint Validation and Error Types
Exception taxonomy and input validation for paint translation.
"""

import math
from typing import Sequence
import logging

logger = logging.getLogger(__name__)

# Validation constants
VALIDATION_CONSTANTS = {
    'MAX_COLOR_CHANNEL': 255,
    'MIN_ALPHA': 0.0,
    'MAX_ALPHA': 1.0,
    'MAX_PAGE_SIZE_PT': 14400.0,  # PDF implementation limit (200 inches)
    'MAX_PROCESSING_TIME_SECONDS': 60,
}

class PaintError(Exception):
    """Base exception for paint translation errors"""
    pass

class PaintValidationError(PaintError):
    """Custom exception for malformed paint or composite input"""
    pass

class GradientStopError(PaintValidationError):
    """Custom exception for malformed gradient color/fraction lists"""
    pass

class MissingCapabilityError(PaintError):
    """Custom exception for an expected accessor absent on a matched paint kind"""
    pass

class DelegatedRenderError(PaintError):
    """Custom exception for failures while rendering nested tile content"""
    pass

def validate_gradient_stops(colors: Sequence, fractions: Sequence[float]) -> None:
    """
    Validate a gradient's parallel color and stop-fraction lists.

    Args:
        colors: Stop colors
        fractions: Stop positions along the gradient axis

    Raises:
        GradientStopError: If the lists are empty, differ in length, or the
            fractions are outside [0, 1] or decreasing
    """
    if not colors or not fractions:
        raise GradientStopError("Gradient needs at least one color stop")

    if len(colors) != len(fractions):
        raise GradientStopError(
            f"Gradient has {len(colors)} colors but {len(fractions)} fractions"
        )

    previous = 0.0
    for index, fraction in enumerate(fractions):
        value = float(fraction)
        if math.isnan(value) or value < 0.0 or value > 1.0:
            raise GradientStopError(f"Fraction {value} at index {index} is outside [0, 1]")
        if value < previous:
            raise GradientStopError(
                f"Fractions must be non-decreasing, got {value} after {previous}"
            )
        previous = value

def validate_alpha(alpha: float) -> float:
    """
    Validate a composite alpha value.

    Returns:
        The alpha as a float

    Raises:
        PaintValidationError: If alpha is outside [0, 1]
    """
    value = float(alpha)
    if math.isnan(value) or not (VALIDATION_CONSTANTS['MIN_ALPHA'] <= value <= VALIDATION_CONSTANTS['MAX_ALPHA']):
        raise PaintValidationError(f"Composite alpha must be between 0 and 1, got {alpha}")
    return value

def validate_page_size(width: float, height: float) -> None:
    """Validate page dimensions in points."""
    limit = VALIDATION_CONSTANTS['MAX_PAGE_SIZE_PT']
    if width <= 0 or height <= 0:
        raise PaintValidationError(f"Page size must be positive, got {width}x{height}")
    if width > limit or height > limit:
        raise PaintValidationError(f"Page size {width}x{height} exceeds {limit}pt limit")
