# ============================================================================
# CONFIGURATION DEFAULTS
# ============================================================================
# EPOCH: 1 - SCHEMA GENERATION
# STATUS: Core - Default configuration values
# PURPOSE: Defaults for the storage target and logging of callers
# CREATED: 18 OCT 2026
# ============================================================================
"""
Configuration Defaults

Used by the callers (main.py, scripts/deploy_schema.py, SchemaInitializer).
Schema generation itself reads no configuration.

Design:
- Immutable dataclasses for defaults
- Environment variable overrides
"""

import os
from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class StorageDefaults:
    """
    Defaults for the SQLite storage target.
    """
    database_path: str = "company.db"
    timeout_seconds: float = 5.0  # sqlite3 busy timeout

    @classmethod
    def from_env(cls) -> "StorageDefaults":
        """Create from environment variables."""
        return cls(
            database_path=os.getenv("SCHEMA_DB_PATH", "company.db"),
            timeout_seconds=float(os.getenv("SCHEMA_DB_TIMEOUT", 5.0)),
        )


@dataclass(frozen=True)
class LoggingDefaults:
    """
    Defaults for log output.
    """
    level: str = "INFO"
    json_output: bool = False

    @classmethod
    def from_env(cls) -> "LoggingDefaults":
        """Create from environment variables."""
        return cls(
            level=os.getenv("LOG_LEVEL", "INFO").upper(),
            json_output=os.getenv("LOG_FORMAT", "").lower() == "json",
        )


# ============================================================================
# GLOBAL DEFAULTS INSTANCE
# ============================================================================

@dataclass
class Defaults:
    """Container for all default configurations."""
    storage: StorageDefaults = field(default_factory=StorageDefaults)
    logging: LoggingDefaults = field(default_factory=LoggingDefaults)

    @classmethod
    def from_env(cls) -> "Defaults":
        """Create all defaults from environment variables."""
        return cls(
            storage=StorageDefaults.from_env(),
            logging=LoggingDefaults.from_env(),
        )


_defaults: Optional[Defaults] = None


def get_defaults() -> Defaults:
    """Get global defaults instance."""
    global _defaults
    if _defaults is None:
        _defaults = Defaults.from_env()
    return _defaults


def reset_defaults() -> None:
    """Reset defaults (for testing)."""
    global _defaults
    _defaults = None


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "StorageDefaults",
    "LoggingDefaults",
    "Defaults",
    "get_defaults",
    "reset_defaults",
]
