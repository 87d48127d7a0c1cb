"""Sub-rendering of vector tile content into nested render targets."""

import logging
from typing import Any, Sequence, Tuple

from models.paint_types import Color, Rect
from processors.color_mapping import DeviceRGBColorMapper
from processors.pdf_graphics import RenderTarget
from utils.validation import DelegatedRenderError

logger = logging.getLogger(__name__)


class NodeSubRenderer:
    """Invoke ``node.paint(target)`` for nodes that know how to draw themselves."""

    def render_into(self, target: RenderTarget, node: Any) -> None:
        paint = getattr(node, 'paint', None)
        if not callable(paint):
            raise DelegatedRenderError(
                f"Graphics node {type(node).__qualname__} has no paint() entry point"
            )
        paint(target)
        logger.debug(f"Rendered {type(node).__qualname__} into {len(target.writer)} instructions")


class FilledRectsNode:
    """
    Vector tile content made of filled rectangles.

    Each entry is a (Rect, Color) pair painted in order with ``color_mapper``.
    """

    def __init__(self, shapes: Sequence[Tuple[Rect, Color]], color_mapper=None):
        self.shapes = list(shapes)
        self.color_mapper = color_mapper or DeviceRGBColorMapper()

    def paint(self, target: RenderTarget) -> None:
        for rect, color in self.shapes:
            mapped = self.color_mapper.map_color(color)
            target.writer.set_non_stroking_color(mapped)
            target.writer.add_rect(rect.x, rect.y, rect.width, rect.height)
            target.writer.fill()
