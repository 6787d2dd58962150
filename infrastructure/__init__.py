# ============================================================================
# INFRASTRUCTURE MODULE
# ============================================================================
# EPOCH: 1 - SCHEMA GENERATION
# STATUS: Infrastructure - DDL execution and schema deployment
# PURPOSE: Apply generated DDL to SQLite databases
# CREATED: 18 OCT 2026
# ============================================================================
"""
Infrastructure module for record schema deployment.

Provides:
- apply_ddl / SQLiteRepository: execute DDL against a SQLite file
- SchemaInitializer: deploy every registered record in one pass

Usage:
    from infrastructure import SchemaInitializer, apply_ddl

    apply_ddl("company.db", User.__sql_ddl__)

    initializer = SchemaInitializer("company.db")
    result = initializer.initialize_all()
"""

from infrastructure.sqlite import (
    RepositoryError,
    ExecutionError,
    SQLiteRepository,
    apply_ddl,
)
from infrastructure.schema_initializer import (
    SchemaInitializer,
    InitializationResult,
    StepResult,
)

__all__ = [
    # Execution
    "RepositoryError",
    "ExecutionError",
    "SQLiteRepository",
    "apply_ddl",
    # Deployment
    "SchemaInitializer",
    "InitializationResult",
    "StepResult",
]
