"""
Configuration system for the paint engine.

Provides structured configuration using dataclasses with clear defaults,
type safety, and backward compatibility with dict-based configs.
"""

from dataclasses import dataclass, field
from typing import Dict, Any, Tuple
import logging

logger = logging.getLogger(__name__)

LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _filter_known_keys(config: Dict[str, Any], valid_keys: set, owner: str) -> Dict[str, Any]:
    """Keep known keys, warning about the rest."""
    filtered_config = {}
    for key, value in config.items():
        if key in valid_keys:
            filtered_config[key] = value
        else:
            logger.warning(f"Unknown {owner} key '{key}' will be ignored")
    return filtered_config


@dataclass
class ProcessorOptions:
    """
    Base class for processor-specific configuration options.

    All processor option classes should inherit from this to provide
    consistent interface and common functionality.
    """
    enabled: bool = True

    def validate(self) -> bool:
        """
        Validate configuration options.

        Returns:
            True if configuration is valid, False otherwise
        """
        return True

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            'enabled': self.enabled,
        }


@dataclass
class PaintApplierOptions(ProcessorOptions):
    """
    Configuration options for paint translation.

    Controls gradient encoding tolerance, shading flags, the linear gradient
    remap, and tiling pattern spacing.
    """
    # Gradient encoding
    epsilon: float = 0.00001  # Fractions closer than this to 0/1 count as 0/1

    # Shading options
    anti_alias: bool = True  # /AntiAlias on multi-stop shadings
    remap_linear_gradients: bool = True  # Emit extent rect + translate/scale for linear gradients
    compat_gradient_modules: Tuple[str, ...] = ()  # Packages whose gradients use untransformed coords

    # Tiling patterns
    tiling_type: int = 3  # 1 = constant spacing, 2 = no distortion, 3 = faster tiling

    def validate(self) -> bool:
        """Validate configuration options."""
        if not 0.0 < self.epsilon < 0.5:
            logger.error("epsilon must be between 0 and 0.5")
            return False

        if self.tiling_type not in (1, 2, 3):
            logger.error("tiling_type must be 1, 2 or 3")
            return False

        return super().validate()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        base_dict = super().to_dict()
        base_dict.update({
            'epsilon': self.epsilon,
            'anti_alias': self.anti_alias,
            'remap_linear_gradients': self.remap_linear_gradients,
            'compat_gradient_modules': list(self.compat_gradient_modules),
            'tiling_type': self.tiling_type,
        })
        return base_dict

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> 'PaintApplierOptions':
        """Create options from dictionary, ignoring unknown keys with a warning."""
        valid_keys = {
            'enabled', 'epsilon', 'anti_alias', 'remap_linear_gradients',
            'compat_gradient_modules', 'tiling_type'
        }
        filtered_config = _filter_known_keys(config, valid_keys, "paint applier option")
        if 'compat_gradient_modules' in filtered_config:
            filtered_config['compat_gradient_modules'] = tuple(filtered_config['compat_gradient_modules'])
        return cls(**filtered_config)


@dataclass
class EngineConfig:
    """
    Central configuration for PaintEngine initialization.

    Example:
        >>> config = EngineConfig(enable_object_cache=False)
        >>> with PaintEngine(config=config) as engine:
        ...     page = engine.new_page()
    """

    # Resource management
    enable_object_cache: bool = True  # Deduplicate ExtGState and shading objects

    # Document defaults
    default_page_size: Tuple[float, float] = (612.0, 792.0)  # US Letter in points

    # Processor-specific options
    paint_applier_options: PaintApplierOptions = field(default_factory=PaintApplierOptions)

    # Logging
    log_level: str = "INFO"
    enable_debug_logging: bool = False

    def validate(self) -> bool:
        """
        Validate configuration values.

        Returns:
            True if all values are valid, False otherwise
        """
        width, height = self.default_page_size
        if width <= 0 or height <= 0:
            logger.error("default_page_size must be positive")
            return False

        if self.log_level.upper() not in LOG_LEVELS:
            logger.error(f"log_level must be one of {sorted(LOG_LEVELS)}")
            return False

        return self.paint_applier_options.validate()

    def effective_log_level(self) -> str:
        """Logging level for engine modules; debug logging overrides ``log_level``."""
        if self.enable_debug_logging:
            return "DEBUG"
        return self.log_level.upper()

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert configuration to dictionary.

        Useful for serialization, logging, and debugging.
        """
        return {
            'enable_object_cache': self.enable_object_cache,
            'default_page_size': list(self.default_page_size),
            'paint_applier_options': self.paint_applier_options.to_dict(),
            'log_level': self.log_level,
            'enable_debug_logging': self.enable_debug_logging
        }

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> 'EngineConfig':
        """
        Create EngineConfig from dictionary.

        Unknown keys are ignored with a warning.

        Args:
            config: Dictionary of configuration values

        Returns:
            EngineConfig instance
        """
        valid_keys = {
            'enable_object_cache', 'default_page_size', 'paint_applier_options',
            'log_level', 'enable_debug_logging'
        }
        filtered_config = _filter_known_keys(config, valid_keys, "config")

        if 'default_page_size' in filtered_config:
            filtered_config['default_page_size'] = tuple(filtered_config['default_page_size'])
        options = filtered_config.get('paint_applier_options')
        if isinstance(options, dict):
            filtered_config['paint_applier_options'] = PaintApplierOptions.from_dict(options)

        return cls(**filtered_config)

    @classmethod
    def default(cls) -> 'EngineConfig':
        """Create configuration with default values."""
        return cls()

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"EngineConfig("
            f"cache={self.enable_object_cache}, "
            f"page={self.default_page_size[0]:g}x{self.default_page_size[1]:g}, "
            f"log={self.log_level})"
        )
