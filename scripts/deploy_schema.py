#!/usr/bin/env python
# ============================================================================
# SCHEMA DEPLOYMENT SCRIPT
# ============================================================================
# EPOCH: 1 - SCHEMA GENERATION
# PURPOSE: Deploy declared record tables to a SQLite database
# USAGE:
#   python scripts/deploy_schema.py --dry-run    # Preview SQL
#   python scripts/deploy_schema.py              # Execute deployment
#   python scripts/deploy_schema.py --status     # Check current status
# ============================================================================

import argparse
import importlib
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.config import get_defaults
from core.logging import configure_logging
from infrastructure import SchemaInitializer


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Create SQLite tables for declared records",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/deploy_schema.py --dry-run                 # Preview DDL
  python scripts/deploy_schema.py --database app.db         # Deploy schema
  python scripts/deploy_schema.py --module myapp.records    # Deploy other records

Environment Variables:
  SCHEMA_DB_PATH        SQLite database file (default: company.db)
  SCHEMA_DB_TIMEOUT     Busy timeout in seconds (default: 5.0)
  LOG_LEVEL             Log level (default: INFO)
  LOG_FORMAT            Set to "json" for structured logs
        """
    )
    parser.add_argument(
        "--database",
        type=str,
        help="SQLite database file (overrides environment)"
    )
    parser.add_argument(
        "--module",
        action="append",
        default=None,
        help="Module declaring @register_record models (repeatable, default: core.models.examples)"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print DDL without executing"
    )
    parser.add_argument(
        "--status",
        action="store_true",
        help="Check current installation status"
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Emit JSON log lines"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging"
    )
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    defaults = get_defaults()

    configure_logging(
        level="DEBUG" if args.verbose else defaults.logging.level,
        json_output=args.json_logs or defaults.logging.json_output,
    )

    # Importing a records module registers its records
    for module_name in args.module or ["core.models.examples"]:
        importlib.import_module(module_name)

    initializer = SchemaInitializer(database_path=args.database)

    print("=" * 70)
    print("RECORD SCHEMA - Table Deployment")
    print("=" * 70)
    print(f"Database: {initializer.database_path}")
    print(f"Tables: {', '.join(initializer.expected_tables)}")
    print("=" * 70)

    if args.status:
        print("\n[STATUS CHECK]\n")
        status = initializer.verify_installation()

        if status.get("error"):
            print(f"Error: {status['error']}")
            return 1

        for table, info in status["tables"].items():
            print(f"  - {table} ({info['columns']} columns)")
        for table in status["missing"]:
            print(f"  - {table} (missing)")

        print("\n" + "=" * 70)
        return 0

    print(f"\nMode: {'DRY RUN' if args.dry_run else 'EXECUTE'}\n")

    if args.dry_run:
        for entry in initializer.registry:
            print(f"--- Generated SQL ({entry.table_name}) ---")
            print(entry.ddl)
            print()

    result = initializer.initialize_all(dry_run=args.dry_run)

    print("\n[RESULTS]\n")
    for step in result.steps:
        print(f"[{step.status.upper()}] {step.name}: {step.message}")
        if step.error:
            print(f"   Error: {step.error}")

    print("\n" + "=" * 70)
    if not result.success:
        print("Deployment failed!")
        for error in result.errors:
            print(f"   - {error}")
        return 1

    print("Deployment completed successfully!")
    print("=" * 70)
    return 0


if __name__ == "__main__":
    sys.exit(main())
