# ============================================================================
# MODELS MODULE
# ============================================================================
# EPOCH: 1 - SCHEMA GENERATION
# STATUS: Model exports
# PURPOSE: Central export point for record and schema models
# CREATED: 18 OCT 2026
# ============================================================================
"""
Models Module - Central Export Point

Single Source of Truth Pattern:
    - Records are declared once (RecordShape or @register_record model)
    - build_schema derives the SchemaDescriptor
    - render produces the SQLite DDL
"""

from core.models.schema import (
    FieldDescriptor,
    RecordShape,
    ColumnDescriptor,
    SchemaDescriptor,
)
from core.models.record import (
    RecordRegistry,
    RegisteredRecord,
    register_record,
    default_registry,
)

__all__ = [
    # Input
    "FieldDescriptor",
    "RecordShape",
    # Derived
    "ColumnDescriptor",
    "SchemaDescriptor",
    # Registry
    "RecordRegistry",
    "RegisteredRecord",
    "register_record",
    "default_registry",
]
