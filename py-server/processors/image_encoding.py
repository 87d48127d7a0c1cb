"""
Lossless image encoding for tile content.

Encodes PIL images as Flate-compressed image XObjects. Alpha channels become
a /DeviceGray soft mask.
"""

import logging
import zlib
from dataclasses import dataclass
from typing import Any

from PIL import Image
from pikepdf import Name, Pdf, Stream

from constants.pdf_keys import (
    KEY_BITS_PER_COMPONENT, KEY_COLOR_SPACE, KEY_FILTER, KEY_HEIGHT, KEY_SOFT_MASK,
    KEY_SUBTYPE, KEY_TYPE, KEY_WIDTH, VAL_DEVICE_GRAY, VAL_DEVICE_RGB,
    VAL_FLATE_DECODE, VAL_IMAGE, VAL_XOBJECT,
)

logger = logging.getLogger(__name__)

# PIL modes that carry transparency
_ALPHA_MODES = {'RGBA', 'LA', 'PA', 'RGBa', 'La'}


@dataclass(frozen=True)
class EncodedImage:
    """An image XObject ready to be placed in a content stream."""
    xobject: Stream
    color_space: Any
    width: int
    height: int


class LosslessImageEncoder:
    """Encode PIL images without quality loss."""

    def __init__(self, compression_level: int = 6):
        if not 0 <= compression_level <= 9:
            raise ValueError(f"compression_level must be 0-9, got {compression_level}")
        self.compression_level = compression_level

    def encode_image(self, document: Pdf, image: Image.Image) -> EncodedImage:
        width, height = image.size
        has_alpha = image.mode in _ALPHA_MODES or (
            image.mode == 'P' and 'transparency' in image.info
        )

        if image.mode in ('1', 'L', 'LA', 'La'):
            base = image.convert('L')
            color_space = Name(VAL_DEVICE_GRAY)
        else:
            base = image.convert('RGB')
            color_space = Name(VAL_DEVICE_RGB)

        xobject = self._make_image_stream(document, base.tobytes(), width, height, color_space)

        if has_alpha:
            alpha = image.convert('RGBA').getchannel('A')
            smask = self._make_image_stream(
                document, alpha.tobytes(), width, height, Name(VAL_DEVICE_GRAY)
            )
            xobject[KEY_SOFT_MASK] = smask

        logger.debug(
            f"Encoded {image.mode} image {width}x{height} as {color_space}"
            f"{' with soft mask' if has_alpha else ''}"
        )
        return EncodedImage(xobject=xobject, color_space=color_space, width=width, height=height)

    def _make_image_stream(self, document: Pdf, raw: bytes, width: int, height: int,
                           color_space: Name) -> Stream:
        stream = document.make_stream(zlib.compress(raw, self.compression_level))
        stream[KEY_TYPE] = Name(VAL_XOBJECT)
        stream[KEY_SUBTYPE] = Name(VAL_IMAGE)
        stream[KEY_WIDTH] = width
        stream[KEY_HEIGHT] = height
        stream[KEY_COLOR_SPACE] = color_space
        stream[KEY_BITS_PER_COMPONENT] = 8
        stream[KEY_FILTER] = Name(VAL_FLATE_DECODE)
        return stream
