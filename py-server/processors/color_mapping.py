"""Default color mapping: canvas sRGB colors to /DeviceRGB or /DeviceGray."""

import logging

from pikepdf import Name

from constants.pdf_keys import VAL_DEVICE_GRAY, VAL_DEVICE_RGB
from models.paint_types import Color
from processors.pdf_graphics import DocumentColor

logger = logging.getLogger(__name__)


class DeviceRGBColorMapper:
    """Maps colors to /DeviceRGB components in [0, 1]. Alpha is ignored."""

    def map_color(self, color: Color) -> DocumentColor:
        return DocumentColor(
            components=(color.r / 255.0, color.g / 255.0, color.b / 255.0),
            color_space=Name(VAL_DEVICE_RGB),
        )


class DeviceGrayColorMapper:
    """Maps colors to /DeviceGray using Rec. 601 luma weights."""

    def map_color(self, color: Color) -> DocumentColor:
        gray = (0.299 * color.r + 0.587 * color.g + 0.114 * color.b) / 255.0
        return DocumentColor(components=(round(gray, 6),), color_space=Name(VAL_DEVICE_GRAY))
