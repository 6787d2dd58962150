# ============================================================================
# BASE CONTRACTS & ENUMS
# ============================================================================
# EPOCH: 1 - SCHEMA GENERATION
# STATUS: Foundation - Storage type enum and type tag groups
# PURPOSE: Define the closed set of column storage types
# CREATED: 18 OCT 2026
# EXPORTS: StorageType, INTEGER_TYPE_TAGS, REAL_TYPE_TAGS, TEXT_TYPE_TAGS,
#          BOOLEAN_TYPE_TAGS, BLOB_TYPE_TAGS
# DEPENDENCIES: enum
# ============================================================================
"""
Base contracts for record schema generation.

Declared field types are plain string tags ("i32", "String", "bool", ...).
Every tag resolves to exactly one StorageType; the tag groups below are the
whole mapping table.
"""

from enum import Enum


# ============================================================================
# STORAGE TYPES
# ============================================================================

class StorageType(str, Enum):
    """
    Column storage types understood by the DDL renderer.

    The value is the exact SQL type keyword emitted in CREATE TABLE.
    """
    INTEGER = "INTEGER"
    REAL = "REAL"
    TEXT = "TEXT"
    BLOB = "BLOB"


# ============================================================================
# DECLARED TYPE TAG GROUPS
# ============================================================================

INTEGER_TYPE_TAGS = frozenset({"i32", "i64", "u32", "u64", "isize", "usize"})
REAL_TYPE_TAGS = frozenset({"f32", "f64"})
TEXT_TYPE_TAGS = frozenset({"String", "string-slice"})
BOOLEAN_TYPE_TAGS = frozenset({"bool"})         # stored as 0/1
BLOB_TYPE_TAGS = frozenset({"byte-sequence"})   # growable sequence of bytes

# Unmapped tags fall back to this type
DEFAULT_STORAGE_TYPE = StorageType.TEXT


__all__ = [
    "StorageType",
    "INTEGER_TYPE_TAGS",
    "REAL_TYPE_TAGS",
    "TEXT_TYPE_TAGS",
    "BOOLEAN_TYPE_TAGS",
    "BLOB_TYPE_TAGS",
    "DEFAULT_STORAGE_TYPE",
]
