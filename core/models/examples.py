# ============================================================================
# EXAMPLE RECORDS
# ============================================================================
# EPOCH: 1 - SCHEMA GENERATION
# STATUS: Examples - Demonstration records
# PURPOSE: User and Product records used by main.py and the deploy script
# CREATED: 18 OCT 2026
# ============================================================================
"""
Example records.

Importing this module registers both records with the default registry.
Each class carries its generated DDL in __sql_ddl__.
"""

from pydantic import BaseModel

from core.models.record import register_record


@register_record
class User(BaseModel):
    """Maps to: users table."""
    id: int
    name: str
    email: str
    age: int
    is_active: bool


@register_record
class Product(BaseModel):
    """Maps to: products table."""
    id: int
    name: str
    price: float
    in_stock: bool
    image_data: bytes  # BLOB


__all__ = ["User", "Product"]
