"""
Paint Translation Components

Stateful builders and caches used by the PaintApplier:

- ContentStreamWriter / ResourcePool: Content stream and resource output sink
- StructuralObjectCache: Deduplication of structurally equal PDF objects
- GradientFunctionBuilder: Color stops to stitching functions
- ShadingBuilder: Axial, radial and imported shadings
- PatternBuilder: Vector and raster tiling patterns
- Default collaborators: DeviceRGB color mapping, Flate image encoding, node sub-rendering

These differ from utils/ which contains pure, stateless functions.
"""

from processors.pdf_graphics import ContentStreamWriter, DocumentColor, RenderTarget, ResourcePool
from processors.object_cache import ExtGStateCache, ShadingCache, StructuralObjectCache
from processors.gradient_functions import GradientFunctionBuilder
from processors.shading_builder import ShadingBuilder
from processors.pattern_builder import PatternBuilder
from processors.color_mapping import DeviceRGBColorMapper, DeviceGrayColorMapper
from processors.image_encoding import LosslessImageEncoder, EncodedImage
from processors.sub_rendering import NodeSubRenderer

__version__ = "1.0.0"
__all__ = [
    'ContentStreamWriter',
    'DocumentColor',
    'RenderTarget',
    'ResourcePool',
    'ExtGStateCache',
    'ShadingCache',
    'StructuralObjectCache',
    'GradientFunctionBuilder',
    'ShadingBuilder',
    'PatternBuilder',
    'DeviceRGBColorMapper',
    'DeviceGrayColorMapper',
    'LosslessImageEncoder',
    'EncodedImage',
    'NodeSubRenderer',
]
