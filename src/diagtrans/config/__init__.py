"""
Configuration module for diagtrans.

Exports the main components for convenient imports.
"""

from .loader import load_config
from .schema import AppConfig, LoggingConfig

__all__ = [
    "load_config",
    "AppConfig",
    "LoggingConfig",
]
