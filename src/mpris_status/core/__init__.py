"""Core infrastructure layer - no business logic dependencies.

This module provides foundation-level services:
- Configuration (dataclasses built from CLI flags)
- Logging (Loguru)
- Console management (Rich)
"""

# Configuration
from .config import (
    BusConfig,
    Config,
    LoggingConfig,
    StoreConfig,
)

# Console
from .console import get_console, safe_print

# Logging
from .output import setup_loguru

__all__ = [
    # Config
    "BusConfig",
    "Config",
    "LoggingConfig",
    "StoreConfig",
    # Console
    "get_console",
    "safe_print",
    # Logging
    "setup_loguru",
]
