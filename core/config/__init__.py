# ============================================================================
# CONFIGURATION MODULE
# ============================================================================
# EPOCH: 1 - SCHEMA GENERATION
# STATUS: Core - Configuration and defaults
# PURPOSE: Centralized configuration management
# CREATED: 18 OCT 2026
# ============================================================================
"""
Configuration Module

Provides centralized configuration and defaults for schema deployment.
"""

from core.config.defaults import (
    StorageDefaults,
    LoggingDefaults,
    Defaults,
    get_defaults,
    reset_defaults,
)

__all__ = [
    "StorageDefaults",
    "LoggingDefaults",
    "Defaults",
    "get_defaults",
    "reset_defaults",
]
