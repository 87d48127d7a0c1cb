"""
Paint Translation Engine

Core engine module for turning canvas paints into PDF content.
Contains the PaintEngine session class, the PaintApplier processor and the
collaborator interfaces it depends on.
"""

__version__ = "1.0.0"

from engine.paint_engine import PaintEngine
from engine.config import EngineConfig, ProcessorOptions, PaintApplierOptions
from engine.base_processor import BaseProcessor, ProcessorRegistry
from engine.paint_applier import PaintApplier, classify_paint
from engine.collaborators import ColorMapper, ImageEncoder, SubRenderer, PaintEnvironment

__all__ = [
    'PaintEngine',
    'EngineConfig',
    'ProcessorOptions',
    'PaintApplierOptions',
    'BaseProcessor',
    'ProcessorRegistry',
    'PaintApplier',
    'classify_paint',
    'ColorMapper',
    'ImageEncoder',
    'SubRenderer',
    'PaintEnvironment',
]
