# ============================================================================
# RECORD REGISTRY
# ============================================================================
# EPOCH: 1 - SCHEMA GENERATION
# STATUS: Core model - Declaration-time schema generation
# PURPOSE: Register record types and derive their DDL when they are declared
# CREATED: 18 OCT 2026
# EXPORTS: RecordRegistry, RegisteredRecord, register_record, default_registry
# DEPENDENCIES: pydantic
# ============================================================================
"""
Record Registry

Declaring a record and generating its schema happen in one place:

    @register_record
    class User(BaseModel):
        id: int
        name: str

    User.__sql_table__   # "users"
    User.__sql_ddl__     # "CREATE TABLE IF NOT EXISTS users (..."

The DDL is computed once, when the class body is executed, so there is no
reflection at call time and the DDL cannot drift from the class. Shapes that
are not pydantic models can be registered directly with
RecordRegistry.register().
"""

import threading
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Type

from pydantic import BaseModel

from core.logging import get_logger
from core.models.schema import RecordShape, SchemaDescriptor
from core.schema.sql_generator import build_schema, render

logger = get_logger(__name__)


@dataclass(frozen=True)
class RegisteredRecord:
    """A declared record with its derived schema and DDL."""
    shape: RecordShape
    schema: SchemaDescriptor
    ddl: str
    model: Optional[Type[BaseModel]] = None

    @property
    def table_name(self) -> str:
        return self.schema.table_name


class RecordRegistry:
    """
    Ordered set of declared records, keyed by table name.

    Iteration follows registration order, which is the order tables are
    created in by RecordToSQL.generate_all().
    """

    def __init__(self):
        self._records: Dict[str, RegisteredRecord] = {}
        self._lock = threading.Lock()

    def register(self, shape: RecordShape, model: Optional[Type[BaseModel]] = None) -> RegisteredRecord:
        """
        Register a record shape.

        Re-registering an identical shape returns the existing entry.

        Raises:
            ValueError: another record already derives the same table name
        """
        schema = build_schema(shape)
        with self._lock:
            existing = self._records.get(schema.table_name)
            if existing is not None:
                if existing.shape == shape:
                    return existing
                raise ValueError(
                    f"Record {shape.name} maps to table '{schema.table_name}', "
                    f"already registered by record {existing.shape.name}"
                )

            entry = RegisteredRecord(shape=shape, schema=schema, ddl=render(schema), model=model)
            self._records[schema.table_name] = entry

        logger.debug(f"Registered record {shape.name} -> table {schema.table_name}")
        return entry

    def register_model(self, model: Type[BaseModel]) -> RegisteredRecord:
        """Register a pydantic model class by its field annotations."""
        return self.register(RecordShape.from_model(model), model=model)

    def get(self, table_name: str) -> Optional[RegisteredRecord]:
        return self._records.get(table_name)

    def records(self) -> List[RegisteredRecord]:
        with self._lock:
            return list(self._records.values())

    def shapes(self) -> List[RecordShape]:
        return [r.shape for r in self.records()]

    def table_names(self) -> List[str]:
        return [r.table_name for r in self.records()]

    def clear(self) -> None:
        with self._lock:
            self._records.clear()

    def __contains__(self, table_name: object) -> bool:
        return table_name in self._records

    def __iter__(self) -> Iterator[RegisteredRecord]:
        return iter(self.records())

    def __len__(self) -> int:
        return len(self._records)


# Process-wide registry used by @register_record without arguments
default_registry = RecordRegistry()


def register_record(model: Optional[Type[BaseModel]] = None, *, registry: Optional[RecordRegistry] = None):
    """
    Class decorator: register a pydantic model and attach its schema.

    Usable bare (@register_record) or with a registry
    (@register_record(registry=my_registry)).

    Sets on the class:
        __record_shape__: RecordShape
        __sql_table__: derived table name
        __sql_ddl__: CREATE TABLE statement
    """
    target = registry if registry is not None else default_registry

    def decorator(cls: Type[BaseModel]) -> Type[BaseModel]:
        entry = target.register_model(cls)
        cls.__record_shape__ = entry.shape
        cls.__sql_table__ = entry.table_name
        cls.__sql_ddl__ = entry.ddl
        return cls

    if model is None:
        return decorator
    return decorator(model)


__all__ = [
    "RecordRegistry",
    "RegisteredRecord",
    "register_record",
    "default_registry",
]
