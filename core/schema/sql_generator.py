# ============================================================================
# RECORD TO SQL GENERATOR
# ============================================================================
# EPOCH: 1 - SCHEMA GENERATION
# STATUS: Core - DDL generation from record shapes
# PURPOSE: Build schema descriptors and render SQLite CREATE TABLE statements
# CREATED: 18 OCT 2026
# EXPORTS: build_schema, render, generate_ddl, RecordToSQL
# DEPENDENCIES: pydantic, psycopg
# ============================================================================
"""
Record Shape to SQLite Schema Generator.

Two pure steps:

    build_schema(shape)  -> SchemaDescriptor
        table name  = lower(record name) + "s"
        column type = map_type(declared type), unknown tags -> TEXT
        primary key = first field named exactly "id" whose type is INTEGER

    render(schema)       -> str
        CREATE TABLE IF NOT EXISTS users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT
        );

IF NOT EXISTS makes every statement safe to re-run against a database that
already has the table.

Usage:
    generator = RecordToSQL()                 # default registry
    for stmt in generator.generate_all():
        conn.execute(stmt)
"""

from typing import Iterable, List, Optional

from psycopg import sql

from core.contracts import StorageType
from core.logging import get_logger
from core.models.schema import ColumnDescriptor, RecordShape, SchemaDescriptor
from core.schema.ddl_utils import ColumnBuilder, derive_table_name, map_type

# Setup logger
logger = get_logger(__name__)

# Field name that becomes the auto-increment primary key (when INTEGER)
PRIMARY_KEY_FIELD = "id"

CREATE_TABLE_TEMPLATE = sql.SQL("CREATE TABLE IF NOT EXISTS {table} (\n{columns}\n);")
COLUMN_SEPARATOR = sql.SQL(",\n")


# =========================================================================
# SCHEMA DESCRIPTOR BUILDER
# =========================================================================

def build_schema(shape: RecordShape) -> SchemaDescriptor:
    """
    Convert a record shape into a schema descriptor.

    A column is the primary key iff its name is exactly "id" and its type
    maps to INTEGER. Only the first match is marked; duplicate "id" fields
    after it become ordinary columns.

    Field and record names are carried through verbatim and rendered
    unquoted. Names that are SQL reserved words (e.g. "order", "group")
    produce DDL that SQLite rejects with a syntax error at apply time.

    Args:
        shape: Declared record shape

    Returns:
        SchemaDescriptor with one column per field, in declaration order
    """
    columns = []
    has_primary_key = False

    for field in shape.fields:
        storage_type = map_type(field.declared_type)
        is_primary_key = (
            not has_primary_key
            and field.name == PRIMARY_KEY_FIELD
            and storage_type is StorageType.INTEGER
        )
        if is_primary_key:
            has_primary_key = True

        columns.append(ColumnDescriptor(
            name=field.name,
            storage_type=storage_type,
            is_primary_key=is_primary_key,
        ))

    table_name = derive_table_name(shape.name)
    logger.debug(f"Built schema {table_name} from {shape.name} ({len(columns)} columns)")

    return SchemaDescriptor(table_name=table_name, columns=columns)


# =========================================================================
# DDL RENDERER
# =========================================================================

def compose(schema: SchemaDescriptor) -> sql.Composed:
    """Compose the CREATE TABLE statement for a schema descriptor."""
    columns = COLUMN_SEPARATOR.join(
        ColumnBuilder.indented(
            ColumnBuilder.definition(c.name, c.storage_type, primary_key=c.is_primary_key)
        )
        for c in schema.columns
    )
    return CREATE_TABLE_TEMPLATE.format(table=sql.SQL(schema.table_name), columns=columns)


def render(schema: SchemaDescriptor) -> str:
    """
    Render a schema descriptor as a CREATE TABLE IF NOT EXISTS statement.

    Columns are joined with ",\\n" and the statement closes with "\\n);".
    No connection is needed: every fragment is plain SQL text.
    """
    return compose(schema).as_string(None)


def generate_ddl(shape: RecordShape) -> str:
    """Shortcut for render(build_schema(shape))."""
    return render(build_schema(shape))


# =========================================================================
# REGISTRY-WIDE GENERATION
# =========================================================================

class RecordToSQL:
    """
    Generate DDL for a set of records.

    Records come from a RecordRegistry (the default registry when nothing
    is given) or from an explicit list of shapes.
    """

    def __init__(self, registry=None, shapes: Optional[Iterable[RecordShape]] = None):
        """
        Initialize the generator.

        Args:
            registry: RecordRegistry to read shapes from
            shapes: Explicit shapes; takes precedence over registry
        """
        if shapes is None and registry is None:
            from core.models.record import default_registry
            registry = default_registry

        self.registry = registry
        self._shapes = list(shapes) if shapes is not None else None

    @property
    def shapes(self) -> List[RecordShape]:
        if self._shapes is not None:
            return list(self._shapes)
        return self.registry.shapes()

    def generate_table(self, shape: RecordShape) -> str:
        """Generate the CREATE TABLE statement for one shape."""
        return generate_ddl(shape)

    def generate_all(self) -> List[str]:
        """
        Generate one statement per record, in declaration order.

        Returns:
            List of DDL strings ready for execution
        """
        statements = [self.generate_table(shape) for shape in self.shapes]
        logger.info(f"Generated {len(statements)} DDL statements")
        return statements


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = ['build_schema', 'compose', 'render', 'generate_ddl', 'RecordToSQL', 'PRIMARY_KEY_FIELD']
