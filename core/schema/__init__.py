# ============================================================================
# SCHEMA MODULE
# ============================================================================
# EPOCH: 1 - SCHEMA GENERATION
# STATUS: Core - Schema generation from record shapes
# PURPOSE: Generate SQLite DDL from declared records (single source of truth)
# CREATED: 18 OCT 2026
# ============================================================================

from core.schema.ddl_utils import (
    ColumnBuilder,
    TYPE_MAP,
    derive_table_name,
    map_type,
)
from core.schema.sql_generator import (
    RecordToSQL,
    build_schema,
    compose,
    generate_ddl,
    render,
)

__all__ = [
    # Generator
    "RecordToSQL",
    "build_schema",
    "compose",
    "render",
    "generate_ddl",
    # Utilities
    "ColumnBuilder",
    "TYPE_MAP",
    "derive_table_name",
    "map_type",
]
