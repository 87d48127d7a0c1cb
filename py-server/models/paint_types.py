"""
Paint and composite descriptors consumed by the paint translation layer.

These mirror the drawing-canvas side of the translation: colors use 0-255
channels, geometry is in canvas (top-down) coordinates, and transforms are
``AffineTransform`` instances.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Sequence, Tuple

from utils.pdf_transforms import AffineTransform


class PaintKind(str, Enum):
    """Classification of an incoming paint value"""
    SOLID_COLOR = "solid-color"
    LINEAR_GRADIENT = "linear-gradient"
    RADIAL_GRADIENT = "radial-gradient"
    TWO_STOP_GRADIENT = "two-stop-gradient"
    TEXTURE = "texture"
    TILED_VECTOR = "tiled-vector"
    EXTERNAL_SHADING = "external-shading"
    UNKNOWN = "unknown"


class CompositeRule(str, Enum):
    """Porter-Duff compositing rules"""
    CLEAR = "clear"
    SRC = "src"
    SRC_OVER = "src-over"
    DST_OVER = "dst-over"
    SRC_IN = "src-in"
    DST_IN = "dst-in"
    SRC_OUT = "src-out"
    DST_OUT = "dst-out"
    DST = "dst"
    SRC_ATOP = "src-atop"
    DST_ATOP = "dst-atop"
    XOR = "xor"


# Integer rule codes (CLEAR=1 ... XOR=12) used by third-party composites
RULE_CODES = {
    1: CompositeRule.CLEAR,
    2: CompositeRule.SRC,
    3: CompositeRule.SRC_OVER,
    4: CompositeRule.DST_OVER,
    5: CompositeRule.SRC_IN,
    6: CompositeRule.DST_IN,
    7: CompositeRule.SRC_OUT,
    8: CompositeRule.DST_OUT,
    9: CompositeRule.DST,
    10: CompositeRule.SRC_ATOP,
    11: CompositeRule.DST_ATOP,
    12: CompositeRule.XOR,
}


class CycleMethod(str, Enum):
    """How a gradient continues outside its defined stops"""
    NO_CYCLE = "no-cycle"
    REFLECT = "reflect"
    REPEAT = "repeat"


@dataclass(frozen=True)
class Color:
    """sRGB color with 0-255 channels"""
    r: int
    g: int
    b: int
    a: int = 255

    def __post_init__(self):
        for channel in (self.r, self.g, self.b, self.a):
            if not 0 <= channel <= 255:
                raise ValueError(f"Color channels must be within 0-255, got {self}")

    @property
    def alpha(self) -> int:
        return self.a

    @property
    def is_opaque(self) -> bool:
        return self.a >= 255

    @classmethod
    def from_hex(cls, value: str) -> 'Color':
        """Parse ``#rrggbb`` or ``#rrggbbaa``."""
        text = value.lstrip('#')
        if len(text) not in (6, 8):
            raise ValueError(f"Invalid hex color: {value}")
        channels = [int(text[i:i + 2], 16) for i in range(0, len(text), 2)]
        return cls(*channels)


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle in canvas coordinates"""
    x: float
    y: float
    width: float
    height: float

    def to_bbox(self) -> Tuple[float, float, float, float]:
        """Return [llx, lly, urx, ury] as used by /BBox."""
        return (self.x, self.y, self.x + self.width, self.y + self.height)


@dataclass
class GradientPaint:
    """Two-color gradient between two points (fractions are fixed at 0 and 1)"""
    point1: Point
    color1: Color
    point2: Point
    color2: Color
    cyclic: bool = False


@dataclass
class LinearGradientPaint:
    """Multi-stop gradient along the axis from start_point to end_point"""
    start_point: Point
    end_point: Point
    fractions: Sequence[float]
    colors: Sequence[Color]
    transform: AffineTransform = field(default_factory=AffineTransform.identity)
    cycle_method: CycleMethod = CycleMethod.NO_CYCLE


@dataclass
class RadialGradientPaint:
    """Multi-stop gradient radiating from center_point, focused at focus_point"""
    center_point: Point
    radius: float
    fractions: Sequence[float]
    colors: Sequence[Color]
    focus_point: Optional[Point] = None
    transform: AffineTransform = field(default_factory=AffineTransform.identity)
    cycle_method: CycleMethod = CycleMethod.NO_CYCLE

    def __post_init__(self):
        if self.focus_point is None:
            self.focus_point = self.center_point


@dataclass
class TexturePaint:
    """Raster tile repeated from anchor_rect"""
    image: Any  # PIL.Image.Image
    anchor_rect: Rect


@dataclass
class PatternPaint:
    """
    Vector tile repeated from pattern_rect.

    ``graphics_node`` is opaque content handed to the sub-renderer.
    """
    pattern_rect: Rect
    graphics_node: Any
    pattern_transform: Optional[AffineTransform] = None


@dataclass
class ShadingPaint:
    """Paint wrapping an already-built PDF shading dictionary"""
    shading: Any  # pikepdf.Dictionary or pikepdf.Stream
    matrix: AffineTransform = field(default_factory=AffineTransform.identity)


@dataclass(frozen=True)
class AlphaComposite:
    """Constant alpha plus a Porter-Duff rule"""
    rule: CompositeRule = CompositeRule.SRC_OVER
    alpha: float = 1.0

    def __post_init__(self):
        if not 0.0 <= self.alpha <= 1.0:
            raise ValueError(f"alpha must be between 0 and 1, got {self.alpha}")
