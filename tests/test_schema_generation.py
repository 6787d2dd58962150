# ============================================================================
# SCHEMA GENERATION TESTS
# ============================================================================
# EPOCH: 1 - SCHEMA GENERATION
# STATUS: Tests - Naming, type mapping, schema building and DDL rendering
# PURPOSE: Pin the exact CREATE TABLE text produced for declared records
# CREATED: 18 OCT 2026
# ============================================================================
"""
Schema Generation Tests

Covers:
1. Table naming (lower-case + "s", no irregular plurals)
2. Type mapping table and its TEXT default
3. Primary key rule ("id" + INTEGER, first match only)
4. DDL rendering (exact text, no trailing comma, byte-identical reruns)
5. RecordToSQL over explicit shapes

Run with:
    pytest tests/test_schema_generation.py -v
"""

import pytest
from psycopg import sql

from core.contracts import StorageType
from core.models.schema import RecordShape
from core.schema import TYPE_MAP, RecordToSQL, build_schema, compose, derive_table_name, generate_ddl, map_type, render


# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture
def user_shape():
    return RecordShape(
        name="User",
        fields=[
            ("id", "i32"),
            ("name", "String"),
            ("email", "String"),
            ("age", "u32"),
            ("is_active", "bool"),
        ],
    )


@pytest.fixture
def product_shape():
    return RecordShape(
        name="Product",
        fields=[
            ("id", "i32"),
            ("name", "String"),
            ("price", "f64"),
            ("in_stock", "bool"),
            ("image_data", "byte-sequence"),
        ],
    )


# ============================================================================
# NAMING
# ============================================================================

class TestDeriveTableName:
    def test_examples(self):
        assert derive_table_name("User") == "users"
        assert derive_table_name("Product") == "products"

    @pytest.mark.parametrize("name", ["User", "OrderLine", "X", "already_lower", "ÄPFEL"])
    def test_lower_plus_s(self, name):
        assert derive_table_name(name) == name.lower() + "s"

    def test_no_irregular_plurals(self):
        assert derive_table_name("Address") == "addresss"
        assert derive_table_name("Category") == "categorys"
        assert derive_table_name("Match") == "matchs"
        assert derive_table_name("Wish") == "wishs"


# ============================================================================
# TYPE MAPPING
# ============================================================================

class TestMapType:
    @pytest.mark.parametrize("tag", ["i32", "i64", "u32", "u64", "isize", "usize"])
    def test_integer_tags(self, tag):
        assert map_type(tag) is StorageType.INTEGER

    @pytest.mark.parametrize("tag", ["f32", "f64"])
    def test_real_tags(self, tag):
        assert map_type(tag) is StorageType.REAL

    @pytest.mark.parametrize("tag", ["String", "string-slice"])
    def test_text_tags(self, tag):
        assert map_type(tag) is StorageType.TEXT

    def test_bool_is_integer(self):
        assert map_type("bool") is StorageType.INTEGER

    def test_byte_sequence_is_blob(self):
        assert map_type("byte-sequence") is StorageType.BLOB

    @pytest.mark.parametrize("tag", ["CustomType", "", "string", "I32", "Bool", "bytes-sequence", "Option<i32>"])
    def test_unmapped_defaults_to_text(self, tag):
        """Matching is exact and case-sensitive; everything else is TEXT."""
        assert map_type(tag) is StorageType.TEXT

    def test_table_covers_exactly_the_declared_tags(self):
        assert set(TYPE_MAP) == {
            "i32", "i64", "u32", "u64", "isize", "usize",
            "f32", "f64",
            "String", "string-slice",
            "bool",
            "byte-sequence",
        }


# ============================================================================
# SCHEMA BUILDER
# ============================================================================

class TestBuildSchema:
    def test_columns_follow_declaration_order(self, user_shape):
        schema = build_schema(user_shape)
        assert schema.table_name == "users"
        assert schema.column_names == ("id", "name", "email", "age", "is_active")
        assert [c.storage_type for c in schema.columns] == [
            StorageType.INTEGER,
            StorageType.TEXT,
            StorageType.TEXT,
            StorageType.INTEGER,
            StorageType.INTEGER,
        ]

    def test_integer_id_is_primary_key(self, user_shape):
        schema = build_schema(user_shape)
        assert schema.primary_key.name == "id"
        assert [c.is_primary_key for c in schema.columns] == [True, False, False, False, False]

    def test_text_id_is_not_primary_key(self):
        schema = build_schema(RecordShape(name="Token", fields=[("id", "String"), ("value", "String")]))
        assert schema.primary_key is None
        assert not any(c.is_primary_key for c in schema.columns)

    def test_name_must_be_exactly_id(self):
        schema = build_schema(RecordShape(
            name="Thing",
            fields=[("ID", "i32"), ("user_id", "i64"), ("Id", "u64")],
        ))
        assert schema.primary_key is None

    def test_bool_id_is_primary_key(self):
        """bool maps to INTEGER, so the rule matches."""
        schema = build_schema(RecordShape(name="Flag", fields=[("id", "bool")]))
        assert schema.primary_key.name == "id"

    def test_duplicate_id_marks_only_first(self):
        schema = build_schema(RecordShape(
            name="Odd",
            fields=[("id", "i32"), ("other", "String"), ("id", "i64")],
        ))
        assert [c.is_primary_key for c in schema.columns] == [True, False, False]
        assert len(schema.columns) == 3

    def test_first_integer_id_wins_after_text_id(self):
        schema = build_schema(RecordShape(
            name="Odd",
            fields=[("id", "String"), ("id", "u32")],
        ))
        assert [c.is_primary_key for c in schema.columns] == [False, True]

    def test_pk_can_be_anywhere(self):
        schema = build_schema(RecordShape(name="Late", fields=[("label", "String"), ("id", "usize")]))
        assert schema.primary_key.name == "id"
        assert schema.columns[1].is_primary_key

    def test_unknown_types_never_fail(self):
        schema = build_schema(RecordShape(name="Blob", fields=[("payload", "HashMap<String, i32>")]))
        assert schema.columns[0].storage_type is StorageType.TEXT


# ============================================================================
# DDL RENDERER
# ============================================================================

class TestRender:
    def test_user_scenario(self, user_shape):
        expected = (
            "CREATE TABLE IF NOT EXISTS users (\n"
            "    id INTEGER PRIMARY KEY AUTOINCREMENT,\n"
            "    name TEXT,\n"
            "    email TEXT,\n"
            "    age INTEGER,\n"
            "    is_active INTEGER\n"
            ");"
        )
        assert render(build_schema(user_shape)) == expected

    def test_product_scenario(self, product_shape):
        ddl = generate_ddl(product_shape)
        assert ddl.startswith("CREATE TABLE IF NOT EXISTS products (\n")
        assert "    id INTEGER PRIMARY KEY AUTOINCREMENT,\n" in ddl
        assert "    price REAL,\n" in ddl
        assert ddl.endswith("image_data BLOB\n);")

    def test_single_column(self):
        ddl = generate_ddl(RecordShape(name="Note", fields=[("body", "String")]))
        assert ddl == "CREATE TABLE IF NOT EXISTS notes (\n    body TEXT\n);"

    def test_no_trailing_comma(self, user_shape, product_shape):
        for shape in (user_shape, product_shape):
            ddl = generate_ddl(shape)
            assert ",\n)" not in ddl
            assert ddl.endswith("\n);")
            assert ddl.count("\n);") == 1

    def test_text_id_has_no_pk_suffix(self):
        ddl = generate_ddl(RecordShape(name="Token", fields=[("id", "String")]))
        assert "PRIMARY KEY" not in ddl
        assert "    id TEXT\n" in ddl

    def test_rendering_is_idempotent(self, user_shape):
        assert render(build_schema(user_shape)) == render(build_schema(user_shape))

    def test_names_are_not_quoted(self, user_shape):
        assert '"' not in generate_ddl(user_shape)

    def test_compose_returns_composed(self, user_shape):
        stmt = compose(build_schema(user_shape))
        assert isinstance(stmt, sql.Composed)
        assert stmt.as_string(None) == generate_ddl(user_shape)


# ============================================================================
# RECORD TO SQL
# ============================================================================

class TestRecordToSQL:
    def test_generate_all_keeps_order(self, user_shape, product_shape):
        generator = RecordToSQL(shapes=[product_shape, user_shape])
        statements = generator.generate_all()
        assert len(statements) == 2
        assert statements[0].startswith("CREATE TABLE IF NOT EXISTS products")
        assert statements[1].startswith("CREATE TABLE IF NOT EXISTS users")

    def test_generate_table_matches_generate_ddl(self, user_shape):
        assert RecordToSQL(shapes=[]).generate_table(user_shape) == generate_ddl(user_shape)
