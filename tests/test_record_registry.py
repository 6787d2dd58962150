# ============================================================================
# RECORD MODEL & REGISTRY TESTS
# ============================================================================
# EPOCH: 1 - SCHEMA GENERATION
# STATUS: Tests - Record shapes, descriptors and declaration-time generation
# PURPOSE: Verify model validation, annotation mapping and the registry
# CREATED: 18 OCT 2026
# ============================================================================
"""
Record Model & Registry Tests

Covers:
1. RecordShape / SchemaDescriptor validation
2. Python annotation -> declared type tag mapping
3. @register_record attributes and registry ordering
4. Table name collisions

Run with:
    pytest tests/test_record_registry.py -v
"""

from typing import Dict, List, Optional

import pytest
from pydantic import BaseModel, ValidationError

from core.contracts import StorageType
from core.models import (
    ColumnDescriptor,
    FieldDescriptor,
    RecordRegistry,
    RecordShape,
    SchemaDescriptor,
    register_record,
)
from core.models.examples import Product, User


# ============================================================================
# RECORD SHAPE
# ============================================================================

class TestRecordShape:
    def test_pairs_are_coerced(self):
        shape = RecordShape(name="User", fields=[("id", "i32"), ("name", "String")])
        assert shape.fields == (
            FieldDescriptor(name="id", declared_type="i32"),
            FieldDescriptor(name="name", declared_type="String"),
        )

    def test_descriptors_and_dicts_accepted(self):
        shape = RecordShape(
            name="User",
            fields=[
                FieldDescriptor(name="id", declared_type="i32"),
                {"name": "email", "declared_type": "String"},
            ],
        )
        assert shape.field_names == ("id", "email")

    def test_empty_fields_rejected(self):
        with pytest.raises(ValidationError):
            RecordShape(name="Empty", fields=[])

    def test_empty_name_rejected(self):
        with pytest.raises(ValidationError):
            RecordShape(name="", fields=[("id", "i32")])

    def test_frozen(self):
        shape = RecordShape(name="User", fields=[("id", "i32")])
        with pytest.raises(ValidationError):
            shape.name = "Other"

    def test_equal_shapes_compare_equal(self):
        a = RecordShape(name="User", fields=[("id", "i32")])
        b = RecordShape(name="User", fields=[FieldDescriptor(name="id", declared_type="i32")])
        assert a == b


class TestSchemaDescriptor:
    def test_two_primary_keys_rejected(self):
        with pytest.raises(ValidationError):
            SchemaDescriptor(
                table_name="bad",
                columns=[
                    ColumnDescriptor(name="id", storage_type=StorageType.INTEGER, is_primary_key=True),
                    ColumnDescriptor(name="other", storage_type=StorageType.INTEGER, is_primary_key=True),
                ],
            )

    def test_empty_columns_rejected(self):
        with pytest.raises(ValidationError):
            SchemaDescriptor(table_name="bad", columns=[])

    def test_storage_type_from_string(self):
        column = ColumnDescriptor(name="price", storage_type="REAL")
        assert column.storage_type is StorageType.REAL
        assert column.is_primary_key is False


# ============================================================================
# ANNOTATION MAPPING
# ============================================================================

class TestFromModel:
    def test_python_types(self):
        class Sample(BaseModel):
            count: int
            ratio: float
            label: str
            flag: bool
            raw: bytes

        shape = RecordShape.from_model(Sample)
        assert shape.name == "Sample"
        assert [(f.name, f.declared_type) for f in shape.fields] == [
            ("count", "i64"),
            ("ratio", "f64"),
            ("label", "String"),
            ("flag", "bool"),
            ("raw", "byte-sequence"),
        ]

    def test_optional_is_unwrapped(self):
        class Maybe(BaseModel):
            id: Optional[int] = None
            note: str | None = None

        shape = RecordShape.from_model(Maybe)
        assert [f.declared_type for f in shape.fields] == ["i64", "String"]

    def test_unknown_annotations_keep_a_name(self):
        class Nested(BaseModel):
            value: int

        class Holder(BaseModel):
            child: Nested
            tags: List[str]
            meta: Dict[str, int]

        shape = RecordShape.from_model(Holder)
        assert shape.fields[0].declared_type == "Nested"
        assert all(f.declared_type for f in shape.fields)

    def test_example_user_matches_declared_shape(self):
        assert User.__record_shape__ == RecordShape(
            name="User",
            fields=[
                ("id", "i64"),
                ("name", "String"),
                ("email", "String"),
                ("age", "i64"),
                ("is_active", "bool"),
            ],
        )


# ============================================================================
# REGISTRY
# ============================================================================

class TestRegisterRecord:
    def test_attributes_attached(self):
        registry = RecordRegistry()

        @register_record(registry=registry)
        class Account(BaseModel):
            id: int
            owner: str

        assert Account.__sql_table__ == "accounts"
        assert Account.__sql_ddl__ == (
            "CREATE TABLE IF NOT EXISTS accounts (\n"
            "    id INTEGER PRIMARY KEY AUTOINCREMENT,\n"
            "    owner TEXT\n"
            ");"
        )
        assert Account.__record_shape__.name == "Account"
        assert "accounts" in registry
        assert registry.get("accounts").model is Account

    def test_model_still_usable(self):
        registry = RecordRegistry()

        @register_record(registry=registry)
        class Account(BaseModel):
            id: int
            owner: str

        account = Account(id=1, owner="ada")
        assert account.owner == "ada"

    def test_declaration_order_kept(self):
        registry = RecordRegistry()

        @register_record(registry=registry)
        class Zebra(BaseModel):
            id: int

        @register_record(registry=registry)
        class Apple(BaseModel):
            id: int

        assert registry.table_names() == ["zebras", "apples"]
        assert len(registry) == 2
        assert [r.shape.name for r in registry] == ["Zebra", "Apple"]

    def test_identical_shape_registers_once(self):
        registry = RecordRegistry()
        shape = RecordShape(name="User", fields=[("id", "i32")])

        first = registry.register(shape)
        second = registry.register(shape)

        assert first is second
        assert len(registry) == 1

    def test_table_name_collision_rejected(self):
        registry = RecordRegistry()
        registry.register(RecordShape(name="User", fields=[("id", "i32")]))

        with pytest.raises(ValueError, match="users"):
            registry.register(RecordShape(name="USER", fields=[("id", "i32")]))

    def test_clear(self):
        registry = RecordRegistry()
        registry.register(RecordShape(name="User", fields=[("id", "i32")]))
        registry.clear()
        assert len(registry) == 0

    def test_examples_in_default_registry(self):
        from core.models import default_registry

        assert "users" in default_registry
        assert "products" in default_registry
        assert Product.__sql_ddl__.endswith("image_data BLOB\n);")
