"""
Paint Engine - Document Session Coordinator

The PaintEngine owns a new PDF document for the duration of a session. It
creates pages, hands out paint environments, fills shapes with any paint
through its PaintApplier, and serializes the result.

Usage:
    >>> from engine.paint_engine import PaintEngine
    >>> from models.paint_types import Color, Rect
    >>>
    >>> with PaintEngine() as engine:
    ...     page = engine.new_page()
    ...     env = engine.create_environment()
    ...     engine.fill_rect(env, Rect(72, 72, 200, 100), Color(255, 0, 0))
    ...     engine.commit(page, env)
    ...     pdf_bytes = engine.to_bytes()
"""

import io
import logging
from typing import Any, Optional, Tuple

import pikepdf
from pikepdf import Page

from constants.pdf_keys import KEY_CONTENTS, KEY_RESOURCES, KEY_SHADING
from constants.pdf_operators import OP_RECTANGLE
from engine.base_processor import ProcessorRegistry
from engine.collaborators import ColorMapper, ImageEncoder, PaintEnvironment, SubRenderer
from engine.config import EngineConfig
from engine.paint_applier import PaintApplier
from models.paint_types import Rect
from processors.color_mapping import DeviceRGBColorMapper
from processors.image_encoding import LosslessImageEncoder
from processors.pdf_graphics import ContentStreamWriter, ResourcePool
from processors.sub_rendering import NodeSubRenderer
from utils.pdf_transforms import AffineTransform
from utils.validation import PaintValidationError, validate_page_size

logger = logging.getLogger(__name__)


class PaintEngine:
    """
    PDF output session with processor coordination.

    Collaborators default to /DeviceRGB color mapping, lossless Flate image
    encoding and node self-rendering.

    Example:
        >>> with PaintEngine(config=EngineConfig(enable_object_cache=False)) as engine:
        ...     page = engine.new_page((200, 200))
    """

    def __init__(self, config: Optional[EngineConfig] = None,
                 color_mapper: Optional[ColorMapper] = None,
                 image_encoder: Optional[ImageEncoder] = None,
                 sub_renderer: Optional[SubRenderer] = None):
        """
        Initialize paint engine.

        Note: The document is not created until entering the context manager.

        Args:
            config: Engine configuration (uses defaults if None)
            color_mapper: Color mapper for all environments
            image_encoder: Image encoder for all environments
            sub_renderer: Sub-renderer for vector tiles

        Raises:
            PaintValidationError: If configuration is invalid
        """
        self.config = config or EngineConfig.default()
        if not self.config.validate():
            raise PaintValidationError("Invalid engine configuration")

        self.color_mapper = color_mapper or DeviceRGBColorMapper()
        self.image_encoder = image_encoder or LosslessImageEncoder()
        self.sub_renderer = sub_renderer or NodeSubRenderer()

        self._pdf: Optional[pikepdf.Pdf] = None
        self._is_open = False
        self._processors = ProcessorRegistry()

        logger.debug(f"PaintEngine initialized: {self.config!r}")

    def __enter__(self) -> 'PaintEngine':
        """
        Enter context manager - create the document and initialize processors.

        Returns:
            Self for use in with-statement
        """
        self._pdf = pikepdf.Pdf.new()
        self._is_open = True
        self._initialize_processors()
        if not self._processors.validate_all():
            self._cleanup_resources()
            raise RuntimeError("Paint processors failed to initialize")
        logger.debug("Paint session opened")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """
        Exit context manager - clean up all resources.

        Resources are cleaned up even if an exception occurred.
        """
        self._cleanup_resources()

        if exc_type is not None:
            logger.error(f"Exception during paint session: {exc_val}")

        # Don't suppress exceptions
        return False

    def _initialize_processors(self) -> None:
        options = self.config.paint_applier_options
        if options.enabled:
            applier = PaintApplier(self, options, enable_object_cache=self.config.enable_object_cache)
            self._processors.register('paint', applier)

        self._processors.initialize_all()

    def _cleanup_resources(self) -> None:
        """Idempotent; safe to call multiple times."""
        if self._processors:
            self._processors.cleanup_all()

        if self._pdf is not None:
            try:
                self._pdf.close()
            except Exception as e:
                logger.warning(f"Error closing pikepdf document: {e}")
            finally:
                self._pdf = None

        self._is_open = False

    def _require_open(self) -> None:
        if not self._is_open or self._pdf is None:
            raise RuntimeError("Engine not opened - use within context manager")

    @property
    def is_open(self) -> bool:
        return self._is_open

    @property
    def document(self) -> pikepdf.Pdf:
        """
        Access the pikepdf document being written.

        Raises:
            RuntimeError: If engine not opened
        """
        self._require_open()
        return self._pdf

    @property
    def paint_applier(self) -> PaintApplier:
        applier = self._processors.get('paint')
        if applier is None:
            raise RuntimeError("Paint applier is disabled in this engine configuration")
        return applier

    def new_page(self, size: Optional[Tuple[float, float]] = None) -> Page:
        """
        Append a blank page.

        Args:
            size: (width, height) in points, defaults to the configured size

        Raises:
            PaintValidationError: If the size is not positive or too large
        """
        self._require_open()
        width, height = size or self.config.default_page_size
        validate_page_size(width, height)
        page = self._pdf.add_blank_page(page_size=(float(width), float(height)))
        logger.debug(f"Added page {len(self._pdf.pages)}: {width:g}x{height:g}pt")
        return page

    def create_environment(self, shape_bounds: Optional[Rect] = None) -> PaintEnvironment:
        """Create a paint environment with a fresh content stream and resource pool."""
        self._require_open()
        return PaintEnvironment(
            document=self._pdf,
            writer=ContentStreamWriter(ResourcePool()),
            color_mapper=self.color_mapper,
            image_encoder=self.image_encoder,
            sub_renderer=self.sub_renderer,
            shape_bounds=shape_bounds,
        )

    def _append_shape(self, env: PaintEnvironment, rect: Rect, transform: AffineTransform) -> None:
        a, b, c, d, e, f = transform.to_ctm()
        if b == 0 and c == 0:
            x, y = transform.transform_point(rect.x, rect.y)
            env.writer.add_rect(x, y, rect.width * a, rect.height * d)
            return
        llx, lly, urx, ury = rect.to_bbox()
        env.writer.add_polygon([
            transform.transform_point(llx, lly),
            transform.transform_point(urx, lly),
            transform.transform_point(urx, ury),
            transform.transform_point(llx, ury),
        ])

    def fill_rect(self, env: PaintEnvironment, rect: Rect, paint: Any,
                  composite: Any = None, transform: Optional[AffineTransform] = None) -> Optional[Any]:
        """
        Fill ``rect`` with ``paint``.

        Solid colors and patterns fill the rectangle directly. Shadings are
        registered in the environment's resources and painted through a clip
        to the rectangle.

        Returns:
            The shading used, if any

        Raises:
            RuntimeError: If the paint applier is not initialized

        If applying the paint fails, the instructions written for this fill
        are discarded before the error propagates.
        """
        self._require_open()
        applier = self.paint_applier
        if not applier.validate_state():
            raise RuntimeError("Paint applier not initialized")

        transform = transform if transform is not None else AffineTransform.identity()
        start = len(env.writer)
        env.shape_bounds = rect
        try:
            env.writer.save_state()
            self._append_shape(env, rect, transform)
            env.writer.clip()
            mark = len(env.writer)

            shading = applier.apply_paint(paint, composite, transform, env)

            if shading is None:
                self._append_shape(env, rect, transform)
                env.writer.fill()
            else:
                ops = env.writer.operators()
                if OP_RECTANGLE in ops[mark:]:
                    # Clip to the gradient extent before its transform pair
                    env.writer.clip_after(ops.index(OP_RECTANGLE, mark))
                name = env.resources.add(KEY_SHADING, shading)
                env.writer.shading_fill(name)
            env.writer.restore_state()
        except Exception:
            env.writer.truncate(start)
            raise
        finally:
            env.shape_bounds = None
        return shading

    def commit(self, page: Page, env: PaintEnvironment) -> None:
        """Write the environment's content stream and resources to ``page``."""
        self._require_open()
        page.obj[KEY_CONTENTS] = self._pdf.make_stream(env.writer.to_bytes())
        page.obj[KEY_RESOURCES] = env.resources.resources
        logger.debug(f"Committed {len(env.writer)} instructions, {len(env.resources)} resources")

    def to_bytes(self) -> bytes:
        """
        Serialize the document.

        Returns:
            PDF file as bytes
        """
        self._require_open()
        buffer = io.BytesIO()
        self._pdf.save(buffer)
        result_bytes = buffer.getvalue()
        logger.debug(f"Generated PDF: {len(result_bytes)} bytes")
        return result_bytes

    def get_stats(self) -> dict:
        """Session statistics for logging and debugging."""
        stats = {'pages': len(self._pdf.pages) if self._pdf is not None else 0}
        applier = self._processors.get('paint')
        if applier is not None:
            stats.update(applier.get_stats())
        return stats
