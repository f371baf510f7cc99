"""Utility functions and configuration."""

from .config_loader import load_config, ScenarioConfig, ObstacleConfig, PaletteConfig
from .logging_utils import setup_logger
from .transforms import wrap_periodic

__all__ = [
    "load_config",
    "ScenarioConfig",
    "ObstacleConfig",
    "PaletteConfig",
    "setup_logger",
    "wrap_periodic",
]
