# ============================================================================
# CORE MODULE
# ============================================================================
# EPOCH: 1 - SCHEMA GENERATION
# STATUS: Core module initialization
# PURPOSE: Export contracts, models, and schema generation
# CREATED: 18 OCT 2026
# ============================================================================

from core.contracts import StorageType
from core.models import (
    FieldDescriptor,
    RecordShape,
    ColumnDescriptor,
    SchemaDescriptor,
    RecordRegistry,
    register_record,
    default_registry,
)
from core.schema import (
    RecordToSQL,
    build_schema,
    derive_table_name,
    generate_ddl,
    map_type,
    render,
)

__all__ = [
    # Enums
    "StorageType",
    # Models
    "FieldDescriptor",
    "RecordShape",
    "ColumnDescriptor",
    "SchemaDescriptor",
    "RecordRegistry",
    "register_record",
    "default_registry",
    # Schema
    "RecordToSQL",
    "build_schema",
    "derive_table_name",
    "generate_ddl",
    "map_type",
    "render",
]
