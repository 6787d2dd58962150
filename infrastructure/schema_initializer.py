# ============================================================================
# SCHEMA INITIALIZER - INFRASTRUCTURE AS CODE
# ============================================================================
# EPOCH: 1 - SCHEMA GENERATION
# STATUS: Infrastructure - Schema deployment orchestrator
# PURPOSE: Create every registered record's table in one SQLite database
# CREATED: 18 OCT 2026
# ============================================================================
"""
SchemaInitializer - Infrastructure as Code for declared records.

Deployment workflow:
1. Connection test
2. Table creation from the record registry (CREATE TABLE IF NOT EXISTS)
3. Verification that every expected table exists

Declared records are the SINGLE SOURCE OF TRUTH for schema.
DDL is generated via RecordToSQL.generate_all().

Usage:
    from infrastructure import SchemaInitializer

    initializer = SchemaInitializer("company.db")
    result = initializer.initialize_all()

    # Dry run (show SQL without executing)
    result = initializer.initialize_all(dry_run=True)

    # Verify installation
    status = initializer.verify_installation()
"""

import traceback
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from core.logging import get_logger, log_checkpoint, log_context
from core.models.record import RecordRegistry, default_registry
from core.schema.sql_generator import RecordToSQL
from infrastructure.sqlite import SQLiteRepository

logger = get_logger(__name__)


# ============================================================================
# DATA CLASSES
# ============================================================================

@dataclass
class StepResult:
    """Result of a single initialization step."""
    name: str
    status: str  # 'success', 'failed', 'skipped'
    message: str = ""
    error: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)


@dataclass
class InitializationResult:
    """Complete result of schema initialization."""
    storage_location: str
    timestamp: str
    success: bool
    steps: List[StepResult] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "storage_location": self.storage_location,
            "timestamp": self.timestamp,
            "success": self.success,
            "steps": [
                {
                    "name": s.name,
                    "status": s.status,
                    "message": s.message,
                    "error": s.error,
                    "details": s.details
                }
                for s in self.steps
            ],
            "errors": self.errors,
            "warnings": self.warnings,
            "summary": {
                "total_steps": len(self.steps),
                "successful": len([s for s in self.steps if s.status == "success"]),
                "failed": len([s for s in self.steps if s.status == "failed"]),
                "skipped": len([s for s in self.steps if s.status == "skipped"])
            }
        }


# ============================================================================
# SCHEMA INITIALIZER
# ============================================================================

class SchemaInitializer:
    """
    Schema deployment orchestrator for one SQLite database.

    All operations are idempotent (safe to run multiple times).
    """

    def __init__(
        self,
        database_path: Optional[str] = None,
        registry: Optional[RecordRegistry] = None,
    ):
        """
        Args:
            database_path: SQLite file (default from SCHEMA_DB_PATH)
            registry: Records to deploy (default: process-wide registry)
        """
        self.repo = SQLiteRepository(database_path)
        self.registry = registry if registry is not None else default_registry

        logger.info(f"SchemaInitializer created for {self.database_path}")

    @property
    def database_path(self) -> str:
        return self.repo.database_path

    @property
    def expected_tables(self) -> List[str]:
        return self.registry.table_names()

    def _generate_ddl_statements(self) -> List[str]:
        """Generate one CREATE TABLE statement per registered record."""
        return RecordToSQL(registry=self.registry).generate_all()

    # ========================================================================
    # DEPLOYMENT
    # ========================================================================

    def initialize_all(self, dry_run: bool = False) -> InitializationResult:
        """
        Deploy every registered table.

        Args:
            dry_run: If True, log SQL but don't execute

        Returns:
            InitializationResult with detailed step results
        """
        result = InitializationResult(
            storage_location=self.database_path,
            timestamp=datetime.now(timezone.utc).isoformat(),
            success=False
        )

        logger.info("=" * 70)
        logger.info("RECORD SCHEMA - DATABASE INITIALIZATION")
        logger.info(f"   Target: {self.database_path}")
        logger.info(f"   Tables: {', '.join(self.expected_tables) or '(none registered)'}")
        logger.info(f"   Mode: {'DRY RUN' if dry_run else 'EXECUTE'}")
        logger.info("=" * 70)

        with log_context(storage_location=self.database_path, operation="initialize"):
            try:
                # Step 1: Test connection
                if dry_run:
                    step_result = StepResult(
                        name="test_connection",
                        status="skipped",
                        message="[DRY RUN] Connection not opened",
                    )
                else:
                    step_result = self._test_connection()
                result.steps.append(step_result)
                if step_result.status == "failed":
                    result.errors.append(f"Connection failed: {step_result.error}")
                    return result

                # Step 2: Deploy tables
                step_result = self._deploy_schema(dry_run=dry_run)
                result.steps.append(step_result)
                if step_result.status == "failed":
                    result.errors.append(f"Schema deployment failed: {step_result.error}")

                # Step 3: Verify installation
                if not dry_run:
                    step_result = self._verify_tables()
                    result.steps.append(step_result)
                    if step_result.status == "failed":
                        result.warnings.append(f"Verification issue: {step_result.error}")

                critical_failures = [
                    s for s in result.steps
                    if s.status == "failed" and s.name != "verify_tables"
                ]
                result.success = len(critical_failures) == 0

            except Exception as e:
                logger.error(f"Initialization failed: {e}")
                logger.error(traceback.format_exc())
                result.errors.append(str(e))
                result.success = False

            summary = result.to_dict()["summary"]
            log_checkpoint(
                "schema_initialized" if result.success else "schema_initialization_failed",
                data=summary,
            )

        logger.info("=" * 70)
        logger.info(f"INITIALIZATION {'COMPLETE' if result.success else 'FAILED'}")
        logger.info(f"   Steps: {summary['successful']} succeeded, {summary['failed']} failed")
        if result.errors:
            logger.warning(f"   Errors: {result.errors}")
        logger.info("=" * 70)

        return result

    def _test_connection(self) -> StepResult:
        """Open the database and read the SQLite version."""
        step = StepResult(name="test_connection", status="pending")

        logger.info("Step: Testing database connection...")

        try:
            row = self.repo.fetch_one("SELECT sqlite_version() AS version")
            step.status = "success"
            step.message = f"Opened {self.database_path}"
            step.details = {"version": row["version"], "database": self.database_path}

        except Exception as e:
            step.status = "failed"
            step.error = str(e)
            step.message = f"Connection failed: {e}"
            logger.error(f"Connection test failed: {e}")

        logger.info(f"   Result: {step.status} - {step.message}")
        return step

    def _deploy_schema(self, dry_run: bool = False) -> StepResult:
        """Create tables from the registry."""
        step = StepResult(name="deploy_schema", status="pending")

        logger.info("Step: Deploying tables...")

        try:
            statements = self._generate_ddl_statements()
            logger.info(f"   Generated {len(statements)} DDL statements from declared records")

            if dry_run:
                for i, stmt in enumerate(statements, 1):
                    logger.info(f"   [{i}]\n{stmt}")

                step.status = "success"
                step.message = f"[DRY RUN] Would execute {len(statements)} statements"
                step.details = {"statements_count": len(statements), "statements": statements}
                return step

            exec_result = self.repo.execute_ddl_statements(statements)

            step.status = "success" if exec_result["success"] else "failed"
            step.message = f"Deployed {exec_result['executed']} of {len(statements)} statements"
            step.details = {
                "statements_executed": exec_result["executed"],
                "errors": exec_result["errors"] if exec_result["errors"] else None,
            }

            if exec_result["errors"]:
                step.error = "; ".join(exec_result["errors"][:3])

        except Exception as e:
            step.status = "failed"
            step.error = str(e)
            step.message = f"Schema deployment failed: {e}"
            logger.error(f"Schema deployment failed: {e}")
            logger.error(traceback.format_exc())

        logger.info(f"   Result: {step.status} - {step.message}")
        return step

    def _verify_tables(self) -> StepResult:
        """Verify expected tables exist."""
        step = StepResult(name="verify_tables", status="pending")

        logger.info("Step: Verifying tables...")

        try:
            existing = self.repo.get_tables()
            expected = self.expected_tables

            missing = [t for t in expected if t not in existing]
            extra = [t for t in existing if t not in expected]

            if missing:
                step.status = "failed"
                step.error = f"Missing tables: {missing}"
                step.message = f"Verification failed: {len(missing)} tables missing"
            else:
                step.status = "success"
                step.message = f"All {len(expected)} expected tables exist"

            step.details = {
                "expected": expected,
                "existing": existing,
                "missing": missing,
                "extra": extra,
            }

        except Exception as e:
            step.status = "failed"
            step.error = str(e)
            step.message = f"Verification failed: {e}"

        logger.info(f"   Result: {step.status} - {step.message}")
        return step

    # ========================================================================
    # STATUS
    # ========================================================================

    def verify_installation(self) -> Dict[str, Any]:
        """
        Report which registered tables exist and their column counts.

        Returns:
            Dict with tables, missing and (on failure) error keys
        """
        status: Dict[str, Any] = {"tables": {}, "missing": []}

        try:
            existing = set(self.repo.get_tables())
            for table in self.expected_tables:
                if table in existing:
                    status["tables"][table] = {"columns": len(self.repo.get_columns(table))}
                else:
                    status["missing"].append(table)
        except Exception as e:
            status["error"] = str(e)

        return status


__all__ = [
    "SchemaInitializer",
    "InitializationResult",
    "StepResult",
]
