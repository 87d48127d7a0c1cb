"""Paint Applier for PaintEngine

Translates one (paint, composite, transform) triple into PDF content stream
instructions, resources and, for gradients, a shading. Paints are
recognized by type or by the capabilities they expose, so paints from other
libraries can be applied as long as they offer the same accessors.
"""

import logging
from typing import Any, Callable, Dict, Optional, TYPE_CHECKING

from constants.pdf_keys import KEY_EXT_GSTATE
from engine.base_processor import BaseProcessor
from engine.collaborators import PaintEnvironment
from engine.config import PaintApplierOptions
from models.paint_types import (
    Color, GradientPaint, LinearGradientPaint, PaintKind, PatternPaint,
    RadialGradientPaint, ShadingPaint, TexturePaint,
)
from processors.color_applier import apply_color
from processors.composite_mapper import apply_composite
from processors.object_cache import ExtGStateCache, ShadingCache
from processors.paint_state import TranslationState
from processors.pattern_builder import PatternBuilder
from processors.shading_builder import ShadingBuilder
from utils.capabilities import has_capabilities
from utils.pdf_transforms import AffineTransform

if TYPE_CHECKING:
    from engine.paint_engine import PaintEngine

logger = logging.getLogger(__name__)

# Accessors that identify paints by shape rather than by type
LINEAR_GRADIENT_CAPABILITIES = ('colors', 'fractions', 'start_point', 'end_point')
RADIAL_GRADIENT_CAPABILITIES = ('colors', 'fractions', 'center_point', 'radius')
TILED_VECTOR_CAPABILITIES = ('pattern_rect', 'graphics_node')
TEXTURE_CAPABILITIES = ('image', 'anchor_rect')
EXTERNAL_SHADING_CAPABILITIES = ('shading',)


def classify_paint(paint: Any) -> PaintKind:
    """
    Decide which translation applies to ``paint``.

    Order matters: solid colors first, then the named or capability-matched
    multi-stop gradients and vector tiles, then the two-stop gradient,
    textures and external shadings.
    """
    type_name = type(paint).__name__

    if isinstance(paint, Color):
        return PaintKind.SOLID_COLOR
    if type_name == LinearGradientPaint.__name__ or has_capabilities(paint, LINEAR_GRADIENT_CAPABILITIES):
        return PaintKind.LINEAR_GRADIENT
    if type_name == RadialGradientPaint.__name__ or has_capabilities(paint, RADIAL_GRADIENT_CAPABILITIES):
        return PaintKind.RADIAL_GRADIENT
    if type_name == PatternPaint.__name__ or has_capabilities(paint, TILED_VECTOR_CAPABILITIES):
        return PaintKind.TILED_VECTOR
    if isinstance(paint, GradientPaint):
        return PaintKind.TWO_STOP_GRADIENT
    if isinstance(paint, TexturePaint) or has_capabilities(paint, TEXTURE_CAPABILITIES):
        return PaintKind.TEXTURE
    if isinstance(paint, ShadingPaint) or has_capabilities(paint, EXTERNAL_SHADING_CAPABILITIES):
        return PaintKind.EXTERNAL_SHADING
    return PaintKind.UNKNOWN


class PaintApplier(BaseProcessor):
    """
    Paint translation processor for PaintEngine.

    Holds the ExtGState and shading caches for one engine session, so equal
    graphics states and shadings produced by different calls share one PDF
    object.

    Example:
        >>> applier = PaintApplier()
        >>> applier.apply_paint(Color(255, 0, 0, 128), None, AffineTransform.identity(), env)
    """

    def __init__(self, engine: Optional['PaintEngine'] = None,
                 options: Optional[PaintApplierOptions] = None,
                 enable_object_cache: bool = True):
        """
        Initialize paint applier.

        Args:
            engine: Parent PaintEngine instance, if any
            options: PaintApplierOptions or None for defaults
            enable_object_cache: Deduplicate ExtGState and shading objects
        """
        super().__init__(engine)
        self.options = options or PaintApplierOptions()
        self.enable_object_cache = enable_object_cache

        self.ext_gstate_cache = ExtGStateCache()
        self.shading_cache = ShadingCache()
        self._kind_cache: Dict[type, PaintKind] = {}

        self.shading_builder = ShadingBuilder(self.options)
        self.pattern_builder = PatternBuilder(self.options)

        self._handlers: Dict[PaintKind, Callable[[Any, TranslationState], Any]] = {
            PaintKind.SOLID_COLOR: apply_color,
            PaintKind.LINEAR_GRADIENT: self._shaded(self.shading_builder.build_linear),
            PaintKind.RADIAL_GRADIENT: self._shaded(self.shading_builder.build_radial),
            PaintKind.TWO_STOP_GRADIENT: self._shaded(self.shading_builder.build_two_stop),
            PaintKind.EXTERNAL_SHADING: self._shaded(self.shading_builder.import_shading),
            PaintKind.TILED_VECTOR: self.pattern_builder.apply_tiling_pattern,
            PaintKind.TEXTURE: self.pattern_builder.apply_texture,
        }

    def _shaded(self, build: Callable[[Any, TranslationState], Any]) -> Callable[[Any, TranslationState], Any]:
        def build_unique(paint: Any, state: TranslationState) -> Any:
            shading = build(paint, state)
            if not self.enable_object_cache:
                return shading
            return self.shading_cache.make_unique(shading)
        return build_unique

    def classify(self, paint: Any) -> PaintKind:
        """Classify ``paint``, resolving each concrete type only once."""
        paint_type = type(paint)
        kind = self._kind_cache.get(paint_type)
        if kind is None:
            kind = classify_paint(paint)
            self._kind_cache[paint_type] = kind
            logger.debug(f"Classified {paint_type.__qualname__} as {kind.value}")
        return kind

    def apply_paint(self, paint: Any, composite: Any, transform: Optional[AffineTransform],
                    env: PaintEnvironment) -> Optional[Any]:
        """
        Apply ``paint`` under ``composite`` and ``transform`` to ``env``.

        Args:
            paint: Paint descriptor, or None to apply only the composite
            composite: AlphaComposite-like object or None
            transform: Canvas-to-page transform for this call
            env: Output sink and collaborators

        Returns:
            The (deduplicated) shading for gradient and shading paints, for
            the caller to register and paint; None otherwise

        Raises:
            PaintValidationError: If the paint or composite is malformed
            MissingCapabilityError: If a recognized paint lacks an accessor
        """
        state = TranslationState(
            env=env,
            transform=transform if transform is not None else AffineTransform.identity(),
            composite=composite,
        )

        shading = self._apply(paint, state)
        self._flush_extended_state(state)
        return shading

    def _apply(self, paint: Any, state: TranslationState) -> Optional[Any]:
        apply_composite(state)

        # We can not apply not existing paints
        if paint is None:
            return None

        kind = self.classify(paint)
        handler = self._handlers.get(kind)
        if handler is None:
            logger.warning(f"Don't know paint {type(paint).__module__}.{type(paint).__qualname__}")
            return None
        return handler(paint, state)

    def _flush_extended_state(self, state: TranslationState) -> None:
        pending = state.extended_state
        if pending is None:
            return
        if pending.is_trivial:
            logger.debug("Discarding trivial extended graphics state")
            return

        gstate = pending.to_dictionary()
        if self.enable_object_cache:
            gstate = self.ext_gstate_cache.make_unique(gstate)
        name = state.resources.add(KEY_EXT_GSTATE, gstate)
        state.writer.set_graphics_state(name)

    def cleanup(self) -> None:
        """Drop the session caches."""
        self.ext_gstate_cache.clear()
        self.shading_cache.clear()
        self._kind_cache.clear()
        super().cleanup()

    def get_stats(self) -> Dict[str, int]:
        """Cache statistics for this session."""
        return {
            'ext_gstates': len(self.ext_gstate_cache),
            'ext_gstate_hits': self.ext_gstate_cache.hits,
            'shadings': len(self.shading_cache),
            'shading_hits': self.shading_cache.hits,
            'classified_types': len(self._kind_cache),
        }
