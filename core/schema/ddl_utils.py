# ============================================================================
# DDL UTILITIES
# ============================================================================
# EPOCH: 1 - SCHEMA GENERATION
# STATUS: Core - Naming rule, type mapping and column fragments
# PURPOSE: Shared building blocks for CREATE TABLE generation
# CREATED: 18 OCT 2026
# EXPORTS: TYPE_MAP, map_type, derive_table_name, ColumnBuilder
# DEPENDENCIES: psycopg
# ============================================================================
"""
DDL Utilities - Shared SQL Generation Patterns.

Fragments are psycopg.sql objects so statements are assembled by
composition rather than string concatenation. Identifiers are emitted
verbatim through sql.SQL (not sql.Identifier) because the generated DDL
must read exactly as `name TYPE`, without quoting.

Usage:
    from core.schema.ddl_utils import map_type, derive_table_name

    derive_table_name("User")     # "users"
    map_type("u64")               # StorageType.INTEGER
    map_type("CustomType")        # StorageType.TEXT
"""

from typing import Dict

from psycopg import sql

from core.contracts import (
    StorageType,
    INTEGER_TYPE_TAGS,
    REAL_TYPE_TAGS,
    TEXT_TYPE_TAGS,
    BOOLEAN_TYPE_TAGS,
    BLOB_TYPE_TAGS,
    DEFAULT_STORAGE_TYPE,
)


# ============================================================================
# TYPE MAPPING
# ============================================================================

TYPE_MAP: Dict[str, StorageType] = {
    **{tag: StorageType.INTEGER for tag in INTEGER_TYPE_TAGS},
    **{tag: StorageType.REAL for tag in REAL_TYPE_TAGS},
    **{tag: StorageType.TEXT for tag in TEXT_TYPE_TAGS},
    **{tag: StorageType.INTEGER for tag in BOOLEAN_TYPE_TAGS},
    **{tag: StorageType.BLOB for tag in BLOB_TYPE_TAGS},
}


def map_type(declared_type: str) -> StorageType:
    """
    Map a declared type tag to a storage type.

    Case-sensitive exact match against TYPE_MAP. Anything unmapped is TEXT;
    this function never raises.

    Args:
        declared_type: Source type tag (e.g. "i32", "String", "byte-sequence")

    Returns:
        StorageType
    """
    return TYPE_MAP.get(declared_type, DEFAULT_STORAGE_TYPE)


# ============================================================================
# NAMING
# ============================================================================

TABLE_NAME_SUFFIX = "s"


def derive_table_name(record_name: str) -> str:
    """
    Derive a table name from a record name: lower-case plus a literal "s".

    Purely mechanical. "Address" becomes "addresss" and "Category" becomes
    "categorys"; there is no irregular pluralisation.
    """
    return record_name.lower() + TABLE_NAME_SUFFIX


# ============================================================================
# COLUMN BUILDER
# ============================================================================

class ColumnBuilder:
    """
    Builder for column definition fragments.

    All methods are static and return sql.Composed objects.
    """

    INDENT = sql.SQL("    ")
    PRIMARY_KEY_SUFFIX = sql.SQL(" PRIMARY KEY AUTOINCREMENT")

    @staticmethod
    def definition(name: str, storage_type: StorageType, primary_key: bool = False) -> sql.Composed:
        """
        Column definition: `name TYPE` with optional primary key suffix.

        Args:
            name: Column name
            storage_type: Column storage type
            primary_key: If True, append PRIMARY KEY AUTOINCREMENT

        Returns:
            sql.Composed column fragment (unindented)
        """
        parts = [
            sql.SQL(name),
            sql.SQL(" "),
            sql.SQL(StorageType(storage_type).value),
        ]
        if primary_key:
            parts.append(ColumnBuilder.PRIMARY_KEY_SUFFIX)
        return sql.Composed(parts)

    @staticmethod
    def indented(fragment: sql.Composable) -> sql.Composed:
        """Prefix a fragment with the statement body indentation."""
        return sql.Composed([ColumnBuilder.INDENT, fragment])


__all__ = [
    "TYPE_MAP",
    "map_type",
    "derive_table_name",
    "ColumnBuilder",
]
