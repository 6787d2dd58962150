# ============================================================================
# SCHEMA MODELS
# ============================================================================
# EPOCH: 1 - SCHEMA GENERATION
# STATUS: Core model - Record shapes and derived schema descriptors
# PURPOSE: Static record input and the table description derived from it
# CREATED: 18 OCT 2026
# EXPORTS: FieldDescriptor, RecordShape, ColumnDescriptor, SchemaDescriptor
# DEPENDENCIES: pydantic
# ============================================================================
"""
Schema Models

Input side:
    RecordShape - record name plus ordered (field name, declared type) pairs

Derived side:
    SchemaDescriptor - table name plus ordered typed columns

Every model is frozen. Shapes are declared once at import time and the
descriptors derived from them are rebuilt on every generation call.
"""

import types
from typing import Any, ClassVar, Dict, Optional, Tuple, Type, Union, get_args, get_origin

from pydantic import BaseModel, Field, field_validator, model_validator

from core.contracts import StorageType


# ============================================================================
# RECORD SHAPE (INPUT)
# ============================================================================

class FieldDescriptor(BaseModel):
    """One declared field of a record."""
    name: str = Field(..., min_length=1, description="Field name, copied to the column name")
    declared_type: str = Field(..., description="Source type tag, e.g. 'i32', 'String', 'bool'")

    model_config = {"frozen": True}


class RecordShape(BaseModel):
    """
    Static name and field list of a record type.

    Field order is significant: columns are rendered in declaration order.
    Fields may be given as FieldDescriptor instances, dicts or
    (name, declared_type) pairs.
    """

    # Python annotation -> declared type tag (exact type match, bool before int)
    PYTHON_TYPE_TAGS: ClassVar[Dict[type, str]] = {
        bool: "bool",
        int: "i64",
        float: "f64",
        str: "String",
        bytes: "byte-sequence",
        bytearray: "byte-sequence",
    }

    name: str = Field(..., min_length=1, description="Record name, source of the table name")
    fields: Tuple[FieldDescriptor, ...] = Field(..., min_length=1)

    model_config = {"frozen": True}

    @field_validator("fields", mode="before")
    @classmethod
    def _coerce_field_pairs(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple)):
            return tuple(
                {"name": item[0], "declared_type": item[1]}
                if isinstance(item, (list, tuple)) else item
                for item in value
            )
        return value

    @property
    def field_names(self) -> Tuple[str, ...]:
        return tuple(f.name for f in self.fields)

    # =========================================================================
    # DERIVATION FROM PYDANTIC MODELS
    # =========================================================================

    @classmethod
    def annotation_to_tag(cls, annotation: Any) -> str:
        """
        Convert a Python annotation to a declared type tag.

        Optional[X] is unwrapped to X (nullability is not modeled).
        Unknown annotations keep their class name and later map to TEXT.
        """
        origin = get_origin(annotation)
        if origin is Union or origin is types.UnionType:
            args = [a for a in get_args(annotation) if a is not type(None)]
            if len(args) == 1:
                annotation = args[0]

        tag = cls.PYTHON_TYPE_TAGS.get(annotation)
        if tag:
            return tag

        return getattr(annotation, "__name__", None) or str(annotation)

    @classmethod
    def from_model(cls, model: Type[BaseModel]) -> "RecordShape":
        """
        Build a shape from a pydantic model class.

        The class name becomes the record name; model_fields supplies the
        fields in declaration order.
        """
        return cls(
            name=model.__name__,
            fields=[
                (field_name, cls.annotation_to_tag(field_info.annotation))
                for field_name, field_info in model.model_fields.items()
            ],
        )


# ============================================================================
# SCHEMA DESCRIPTOR (DERIVED)
# ============================================================================

class ColumnDescriptor(BaseModel):
    """One table column derived from a FieldDescriptor."""
    name: str = Field(..., min_length=1)
    storage_type: StorageType
    is_primary_key: bool = False

    model_config = {"frozen": True}


class SchemaDescriptor(BaseModel):
    """
    Backend-agnostic description of one table.

    Invariant: at most one column is the primary key.
    """
    table_name: str = Field(..., min_length=1)
    columns: Tuple[ColumnDescriptor, ...] = Field(..., min_length=1)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _single_primary_key(self) -> "SchemaDescriptor":
        pk_columns = [c.name for c in self.columns if c.is_primary_key]
        if len(pk_columns) > 1:
            raise ValueError(
                f"Table {self.table_name} has {len(pk_columns)} primary key columns: {pk_columns}"
            )
        return self

    @property
    def primary_key(self) -> Optional[ColumnDescriptor]:
        """The primary key column, or None."""
        for column in self.columns:
            if column.is_primary_key:
                return column
        return None

    @property
    def column_names(self) -> Tuple[str, ...]:
        return tuple(c.name for c in self.columns)


__all__ = [
    "FieldDescriptor",
    "RecordShape",
    "ColumnDescriptor",
    "SchemaDescriptor",
]
