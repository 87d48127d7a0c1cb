"""
Base processor class and registry.

Defines the lifecycle that processors owned by a PaintEngine follow:
created with an engine reference, initialized before first use, and
cleaned up when the engine session ends.
"""

from abc import ABC
from typing import Optional, TYPE_CHECKING
import logging

if TYPE_CHECKING:
    from engine.paint_engine import PaintEngine

logger = logging.getLogger(__name__)


class BaseProcessor(ABC):
    """
    Abstract base class for engine processors.

    Processors receive a PaintEngine reference (or None when used
    standalone) and implement initialize() and cleanup() to manage
    per-session state.
    """

    def __init__(self, engine: Optional['PaintEngine'] = None):
        """
        Initialize processor with engine reference.

        Args:
            engine: PaintEngine instance that owns this processor
        """
        self.engine = engine
        self._initialized = False
        logger.debug(f"{self.__class__.__name__} created")

    def initialize(self) -> None:
        """
        Initialize processor-specific resources.

        Called by the engine after processor creation but before use.
        Calling it twice logs a warning and does nothing.
        """
        if self._initialized:
            logger.warning(f"{self.__class__.__name__} already initialized")
            return

        self._initialized = True
        logger.debug(f"{self.__class__.__name__} initialized")

    def cleanup(self) -> None:
        """
        Release per-session state.

        Safe to call multiple times.
        """
        if not self._initialized:
            return

        self._initialized = False
        logger.debug(f"{self.__class__.__name__} cleaned up")

    @property
    def is_initialized(self) -> bool:
        """Check if processor has been initialized."""
        return self._initialized

    def validate_state(self) -> bool:
        """
        Validate that processor is in a valid state for operations.

        Returns:
            True if processor is ready, False otherwise
        """
        if not self._initialized:
            logger.error(f"{self.__class__.__name__} not initialized")
            return False

        return True

    def __repr__(self) -> str:
        """String representation for debugging."""
        status = "initialized" if self._initialized else "not initialized"
        return f"{self.__class__.__name__}({status})"


class ProcessorRegistry:
    """
    Registry for managing processor instances.

    Tracks the processors attached to a PaintEngine and drives their
    initialization and cleanup in registration order.
    """

    def __init__(self):
        """Initialize empty registry."""
        self._processors: dict[str, BaseProcessor] = {}
        self._initialization_order: list[str] = []

    def register(self, name: str, processor: BaseProcessor) -> None:
        """
        Register a processor.

        Args:
            name: Unique name for the processor (e.g., "paint")
            processor: Processor instance to register
        """
        if name in self._processors:
            logger.warning(f"Processor '{name}' already registered, replacing")

        self._processors[name] = processor
        if name not in self._initialization_order:
            self._initialization_order.append(name)

        logger.debug(f"Registered processor: {name}")

    def get(self, name: str) -> Optional[BaseProcessor]:
        """
        Get processor by name.

        Returns:
            Processor instance or None if not found
        """
        return self._processors.get(name)

    def initialize_all(self) -> None:
        """Initialize all registered processors in registration order."""
        for name in self._initialization_order:
            processor = self._processors.get(name)
            if processor:
                try:
                    processor.initialize()
                except Exception as e:
                    logger.error(f"Failed to initialize processor '{name}': {e}")
                    raise

    def cleanup_all(self) -> None:
        """Clean up all processors in reverse registration order."""
        for name in reversed(self._initialization_order):
            processor = self._processors.get(name)
            if processor:
                try:
                    processor.cleanup()
                except Exception as e:
                    logger.warning(f"Error cleaning up processor '{name}': {e}")

    def validate_all(self) -> bool:
        """
        Validate all processors are in valid state.

        Returns:
            True if all processors valid, False otherwise
        """
        all_valid = True
        for name, processor in self._processors.items():
            if not processor.validate_state():
                logger.error(f"Processor '{name}' in invalid state")
                all_valid = False

        return all_valid

    @property
    def processor_names(self) -> list[str]:
        """Get list of registered processor names."""
        return list(self._processors.keys())

    def __len__(self) -> int:
        return len(self._processors)

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"ProcessorRegistry({len(self)} processors: {self.processor_names})"
