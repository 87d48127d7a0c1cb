"""
Collaborator interfaces consumed by the paint applier.

The applier depends only on these protocols. Default implementations live in
``processors.color_mapping``, ``processors.image_encoding`` and
``processors.sub_rendering``; embedding applications may pass their own.
"""

from dataclasses import dataclass
from typing import Any, Optional, Protocol

from pikepdf import Pdf

from models.paint_types import Color, Rect
from processors.image_encoding import EncodedImage
from processors.pdf_graphics import ContentStreamWriter, DocumentColor, RenderTarget, ResourcePool


class ColorMapper(Protocol):
    """Maps a canvas color to a PDF color. Must be deterministic."""

    def map_color(self, color: Color) -> DocumentColor:
        ...


class ImageEncoder(Protocol):
    """Encodes a bitmap as an image XObject owned by ``document``."""

    def encode_image(self, document: Pdf, image: Any) -> EncodedImage:
        ...


class SubRenderer(Protocol):
    """Renders opaque vector content into a nested target. May raise."""

    def render_into(self, target: RenderTarget, node: Any) -> None:
        ...


@dataclass
class PaintEnvironment:
    """
    Everything a paint application needs besides the paint, the composite and
    the transform.

    ``shape_bounds`` is the bounding box of the shape being painted, when
    known.
    """
    document: Pdf
    writer: ContentStreamWriter
    color_mapper: ColorMapper
    image_encoder: ImageEncoder
    sub_renderer: SubRenderer
    shape_bounds: Optional[Rect] = None

    @property
    def resources(self) -> ResourcePool:
        return self.writer.resources
