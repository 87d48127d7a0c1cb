"""
Pydantic models for the Paint Swatch API

Request bodies describe one paint (selected by its ``type`` field), an
optional composite and the page to render it on. Each paint model converts
to the engine's paint descriptor with ``to_paint()``.
"""

import base64
import io
from typing import Annotated, List, Literal, Optional, Tuple, Union

from PIL import Image, UnidentifiedImageError
from pydantic import AfterValidator, BaseModel, Field, field_validator

from models.paint_types import (
    AlphaComposite, Color, CompositeRule, CycleMethod, GradientPaint,
    LinearGradientPaint, PatternPaint, Point, RadialGradientPaint, Rect,
    TexturePaint,
)
from processors.sub_rendering import FilledRectsNode
from utils.pdf_transforms import AffineTransform
from utils.validation import PaintValidationError


def _parse_color(value: str) -> Color:
    try:
        return Color.from_hex(value)
    except ValueError as e:
        raise ValueError(f"Invalid color '{value}': expected #rrggbb or #rrggbbaa") from e


def _check_hex_color(value: str) -> str:
    _parse_color(value)
    return value


# Colors are "#rrggbb" or "#rrggbbaa"
HexColor = Annotated[str, AfterValidator(_check_hex_color)]


def _optional_transform(values: Optional[List[float]]) -> Optional[AffineTransform]:
    if values is None:
        return None
    return AffineTransform.from_ctm(values)


# Base geometry
class PointModel(BaseModel):
    x: float
    y: float

    def to_point(self) -> Point:
        return Point(self.x, self.y)


class RectModel(BaseModel):
    """Rectangle in page coordinates"""
    x: float
    y: float
    width: float
    height: float

    def to_rect(self) -> Rect:
        return Rect(self.x, self.y, self.width, self.height)


class StopsMixin(BaseModel):
    """Gradient stops: colors as hex strings at fractions in [0, 1]"""
    colors: List[HexColor] = Field(..., min_length=1)
    fractions: List[float] = Field(..., min_length=1)
    transform: Optional[List[float]] = Field(None, min_length=6, max_length=6)
    cycleMethod: CycleMethod = CycleMethod.NO_CYCLE

    def parsed_colors(self) -> List[Color]:
        return [_parse_color(c) for c in self.colors]


# Paint models
class SolidPaintModel(BaseModel):
    type: Literal["solid"] = "solid"
    color: HexColor

    def to_paint(self) -> Color:
        return _parse_color(self.color)


class LinearGradientModel(StopsMixin):
    type: Literal["linear"] = "linear"
    startPoint: PointModel
    endPoint: PointModel

    def to_paint(self) -> LinearGradientPaint:
        return LinearGradientPaint(
            start_point=self.startPoint.to_point(),
            end_point=self.endPoint.to_point(),
            fractions=self.fractions,
            colors=self.parsed_colors(),
            transform=_optional_transform(self.transform) or AffineTransform.identity(),
            cycle_method=self.cycleMethod,
        )


class RadialGradientModel(StopsMixin):
    type: Literal["radial"] = "radial"
    centerPoint: PointModel
    radius: float
    focusPoint: Optional[PointModel] = None

    def to_paint(self) -> RadialGradientPaint:
        return RadialGradientPaint(
            center_point=self.centerPoint.to_point(),
            radius=self.radius,
            fractions=self.fractions,
            colors=self.parsed_colors(),
            focus_point=self.focusPoint.to_point() if self.focusPoint else None,
            transform=_optional_transform(self.transform) or AffineTransform.identity(),
            cycle_method=self.cycleMethod,
        )


class TwoStopGradientModel(BaseModel):
    type: Literal["two-stop"] = "two-stop"
    point1: PointModel
    color1: HexColor
    point2: PointModel
    color2: HexColor
    cyclic: bool = False

    def to_paint(self) -> GradientPaint:
        return GradientPaint(
            point1=self.point1.to_point(),
            color1=_parse_color(self.color1),
            point2=self.point2.to_point(),
            color2=_parse_color(self.color2),
            cyclic=self.cyclic,
        )


class TexturePaintModel(BaseModel):
    """Raster tile given as base64-encoded image data (PNG, JPEG, ...)"""
    type: Literal["texture"] = "texture"
    image: str
    anchorRect: RectModel

    @field_validator("image")
    @classmethod
    def image_is_base64(cls, v):
        try:
            base64.b64decode(v, validate=True)
        except ValueError as e:
            raise ValueError("image must be base64-encoded") from e
        return v

    def to_paint(self) -> TexturePaint:
        try:
            image = Image.open(io.BytesIO(base64.b64decode(self.image)))
            image.load()
        except (UnidentifiedImageError, OSError) as e:
            raise PaintValidationError(f"Texture image could not be decoded: {e}") from e
        return TexturePaint(image=image, anchor_rect=self.anchorRect.to_rect())


class TileShape(BaseModel):
    """Filled rectangle inside a vector tile"""
    rect: RectModel
    color: HexColor


class PatternPaintModel(BaseModel):
    """Vector tile made of filled rectangles, repeated from patternRect"""
    type: Literal["pattern"] = "pattern"
    patternRect: RectModel
    shapes: List[TileShape] = Field(default_factory=list)
    patternTransform: Optional[List[float]] = Field(None, min_length=6, max_length=6)

    def to_paint(self) -> PatternPaint:
        node = FilledRectsNode([(s.rect.to_rect(), _parse_color(s.color)) for s in self.shapes])
        return PatternPaint(
            pattern_rect=self.patternRect.to_rect(),
            graphics_node=node,
            pattern_transform=_optional_transform(self.patternTransform),
        )


PaintModel = Annotated[
    Union[
        SolidPaintModel,
        LinearGradientModel,
        RadialGradientModel,
        TwoStopGradientModel,
        TexturePaintModel,
        PatternPaintModel,
    ],
    Field(discriminator="type"),
]


class CompositeModel(BaseModel):
    rule: CompositeRule = CompositeRule.SRC_OVER
    alpha: float = Field(1.0, ge=0.0, le=1.0)

    def to_composite(self) -> AlphaComposite:
        return AlphaComposite(rule=self.rule, alpha=self.alpha)


class SwatchRequest(BaseModel):
    """Render ``paint`` into ``rect`` (whole page when omitted) on a new page"""
    paint: PaintModel
    composite: Optional[CompositeModel] = None
    pageSize: Tuple[float, float] = (200.0, 200.0)
    rect: Optional[RectModel] = None
    transform: Optional[List[float]] = Field(None, min_length=6, max_length=6)

    def target_rect(self) -> Rect:
        if self.rect is not None:
            return self.rect.to_rect()
        width, height = self.pageSize
        return Rect(0.0, 0.0, width, height)

