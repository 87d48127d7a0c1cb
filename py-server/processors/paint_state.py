"""
Per-call translation state.

A ``TranslationState`` lives for exactly one paint application. It carries
the working transform and the lazily created ``PendingExtendedState`` that is
flushed as one /ExtGState dictionary when the call ends.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from pikepdf import Dictionary, Name

from constants.pdf_keys import (
    KEY_BLEND_MODE, KEY_FILL_OPACITY, KEY_STROKE_OPACITY, KEY_TYPE,
    VAL_BM_COMPATIBLE, VAL_EXT_GSTATE,
)
from utils.pdf_transforms import AffineTransform

logger = logging.getLogger(__name__)


@dataclass
class PendingExtendedState:
    """Accumulates alpha constants and blend mode for one paint application."""
    stroking_alpha: Optional[float] = None
    non_stroking_alpha: Optional[float] = None
    blend_mode: Optional[Name] = None

    def multiply_alpha(self, factor: float) -> None:
        """Fold a translucency factor into both alpha constants."""
        self.stroking_alpha = (1.0 if self.stroking_alpha is None else self.stroking_alpha) * factor
        self.non_stroking_alpha = (1.0 if self.non_stroking_alpha is None else self.non_stroking_alpha) * factor

    def set_alpha(self, alpha: float) -> None:
        self.stroking_alpha = alpha
        self.non_stroking_alpha = alpha

    @property
    def is_trivial(self) -> bool:
        """True when flushing would not change the graphics state defaults."""
        return (
            self.stroking_alpha is None
            and self.non_stroking_alpha is None
            and (self.blend_mode is None or self.blend_mode == Name(VAL_BM_COMPATIBLE))
        )

    def to_dictionary(self) -> Dictionary:
        gstate = Dictionary({KEY_TYPE: Name(VAL_EXT_GSTATE)})
        if self.stroking_alpha is not None:
            gstate[KEY_STROKE_OPACITY] = self.stroking_alpha
        if self.non_stroking_alpha is not None:
            gstate[KEY_FILL_OPACITY] = self.non_stroking_alpha
        if self.blend_mode is not None:
            gstate[KEY_BLEND_MODE] = self.blend_mode
        return gstate


@dataclass
class TranslationState:
    """Mutable state owned by one ``PaintApplier.apply_paint`` call."""
    env: Any  # engine.collaborators.PaintEnvironment
    transform: AffineTransform
    composite: Any = None
    extended_state: Optional[PendingExtendedState] = field(default=None, init=False)

    @property
    def writer(self):
        return self.env.writer

    @property
    def resources(self):
        return self.env.resources

    @property
    def document(self):
        return self.env.document

    @property
    def color_mapper(self):
        return self.env.color_mapper

    def ensure_extended_state(self) -> PendingExtendedState:
        if self.extended_state is None:
            self.extended_state = PendingExtendedState()
        return self.extended_state
