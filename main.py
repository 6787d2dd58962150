# ============================================================================
# RECORD SCHEMA - DEMONSTRATION ENTRY POINT
# ============================================================================
# EPOCH: 1 - SCHEMA GENERATION
# STATUS: Example - Create tables for the User and Product records
# PURPOSE: Print generated SQL and create both tables in one database
# CREATED: 18 OCT 2026
# ============================================================================
"""
Demonstration program.

Creates the users and products tables in company.db (or SCHEMA_DB_PATH),
printing the generated SQL for each. Safe to run repeatedly.

Run with:
    python main.py
"""

import sys

from core.config import get_defaults
from core.logging import configure_logging, get_logger, log_context
from core.models.examples import Product, User
from infrastructure.sqlite import ExecutionError, SQLiteRepository

logger = get_logger(__name__)


def create_table(repo: SQLiteRepository, record) -> bool:
    """Print the record's DDL, apply it, and report the outcome."""
    print("--- Generated SQL ---")
    print(record.__sql_ddl__)
    print("---------------------")

    with log_context(record_name=record.__name__, table_name=record.__sql_table__):
        try:
            repo.create_table(record)
        except ExecutionError as e:
            logger.error(f"Error creating {record.__name__} table: {e}")
            return False

    print(f"Successfully created table '{record.__sql_table__}'.")
    return True


def main() -> int:
    defaults = get_defaults()
    configure_logging(defaults.logging.level, json_output=defaults.logging.json_output)

    repo = SQLiteRepository(defaults.storage.database_path)

    ok = True
    for record in (User, Product):
        if create_table(repo, record):
            print(f"{record.__name__} table creation successful.\n")
        else:
            ok = False

    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
