# ============================================================================
# STRUCTURED LOGGING
# ============================================================================
# EPOCH: 1 - SCHEMA GENERATION
# STATUS: Core - Structured logging with context
# PURPOSE: Consistent logging for generation and DDL execution
# CREATED: 18 OCT 2026
# ============================================================================
"""
Structured Logging

Human-readable output for local runs, JSON output for log aggregation.

Features:
- Contextual fields (record_name, table_name, storage_location)
- JSON output selectable by flag or LOG_FORMAT=json
- Named checkpoints around deployment steps

Usage:
    from core.logging import get_logger, log_context

    logger = get_logger("infrastructure.sqlite")

    with log_context(table_name="users", storage_location="company.db"):
        logger.info("Applying DDL")
"""

import json
import logging
import os
import sys
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field, asdict
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Union


@dataclass
class LogContext:
    """
    Context for structured logging.

    Thread-local storage for contextual fields.
    """
    record_name: Optional[str] = None
    table_name: Optional[str] = None
    storage_location: Optional[str] = None
    operation: Optional[str] = None
    component: Optional[str] = None
    correlation_id: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict, excluding None values."""
        result = {}
        for key, value in asdict(self).items():
            if value is not None and key != "extra":
                result[key] = value
        if self.extra:
            result.update(self.extra)
        return result


# Thread-local context storage
_context_stack = threading.local()


def _get_context_stack() -> list:
    if not hasattr(_context_stack, "stack"):
        _context_stack.stack = []
    return _context_stack.stack


def get_current_context() -> LogContext:
    """Get current logging context."""
    stack = _get_context_stack()
    if stack:
        return stack[-1]
    return LogContext()


@contextmanager
def log_context(**kwargs):
    """
    Context manager for adding logging context.

    Unspecified fields are inherited from the enclosing context.

    Example:
        with log_context(storage_location="company.db"):
            with log_context(table_name="users"):
                logger.info("Applying DDL")   # carries both fields
    """
    parent = get_current_context()
    new_context = LogContext(
        record_name=kwargs.get("record_name", parent.record_name),
        table_name=kwargs.get("table_name", parent.table_name),
        storage_location=kwargs.get("storage_location", parent.storage_location),
        operation=kwargs.get("operation", parent.operation),
        component=kwargs.get("component", parent.component),
        correlation_id=kwargs.get("correlation_id", parent.correlation_id),
        extra={**parent.extra, **kwargs.get("extra", {})},
    )

    stack = _get_context_stack()
    stack.append(new_context)
    try:
        yield new_context
    finally:
        stack.pop()


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class StructuredFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    One JSON object per record.
    """

    def __init__(self, include_context: bool = True, include_source: bool = True):
        super().__init__()
        self.include_context = include_context
        self.include_source = include_source

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data: Dict[str, Any] = {
            "timestamp": _utc_now().isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if self.include_context:
            context_dict = get_current_context().to_dict()
            if context_dict:
                log_data["context"] = context_dict

        # Extra fields attached by ContextLogger / log_checkpoint
        if hasattr(record, "extra") and record.extra:
            log_data["data"] = record.extra

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if self.include_source:
            log_data["source"] = {
                "file": record.filename,
                "line": record.lineno,
                "function": record.funcName,
            }

        return json.dumps(log_data, default=str)


class HumanFormatter(logging.Formatter):
    """
    Human-readable formatter for development.

    Includes context fields inline for easy reading.
    """

    def format(self, record: logging.LogRecord) -> str:
        timestamp = _utc_now().strftime("%Y-%m-%d %H:%M:%S")
        level = record.levelname.ljust(8)

        context = get_current_context()
        context_parts = []
        if context.storage_location:
            context_parts.append(f"db={context.storage_location}")
        if context.record_name:
            context_parts.append(f"record={context.record_name}")
        if context.table_name:
            context_parts.append(f"table={context.table_name}")

        context_str = f" [{', '.join(context_parts)}]" if context_parts else ""

        result = f"{timestamp} {level} {record.name}{context_str}: {record.getMessage()}"

        if record.exc_info:
            result += f"\n{self.formatException(record.exc_info)}"

        return result


class ContextLogger(logging.LoggerAdapter):
    """
    Logger adapter that includes context in log records.

    The merged fields are stored on the record as `record.extra`.
    """

    def process(self, msg, kwargs):
        extra = dict(kwargs.get("extra") or {})
        extra.update(get_current_context().to_dict())
        kwargs["extra"] = {"extra": extra}
        return msg, kwargs


def get_logger(name: str) -> ContextLogger:
    """
    Get a context-aware logger.

    Args:
        name: Logger name (e.g., "infrastructure.sqlite")

    Returns:
        ContextLogger instance
    """
    return ContextLogger(logging.getLogger(name), {})


def configure_logging(
    level: Union[str, int] = "INFO",
    json_output: bool = False,
    stream=None,
) -> None:
    """
    Configure the root logger.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        json_output: Use JSON format (also enabled by LOG_FORMAT=json)
        stream: Output stream (default stdout)
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    if json_output or os.getenv("LOG_FORMAT", "").lower() == "json":
        formatter = StructuredFormatter(include_context=True)
    else:
        formatter = HumanFormatter()

    root = logging.getLogger()
    root.setLevel(level)

    for handler in root.handlers[:]:
        root.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(formatter)
    root.addHandler(handler)


# ============================================================================
# CHECKPOINT LOGGING
# ============================================================================

def log_checkpoint(
    name: str,
    data: Optional[Dict[str, Any]] = None,
    logger: Optional[logging.Logger] = None,
) -> None:
    """
    Log a named checkpoint (e.g. "schema_deployed", "table_created").

    Args:
        name: Checkpoint name
        data: Optional checkpoint data
        logger: Optional specific logger to use
    """
    if logger is None:
        logger = logging.getLogger("checkpoint")

    checkpoint_data: Dict[str, Any] = {"checkpoint": name}
    checkpoint_data.update(get_current_context().to_dict())
    if data:
        checkpoint_data["data"] = data

    logger.info(f"CHECKPOINT: {name}", extra={"extra": checkpoint_data})


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "LogContext",
    "StructuredFormatter",
    "HumanFormatter",
    "ContextLogger",
    "get_logger",
    "configure_logging",
    "log_context",
    "get_current_context",
    "log_checkpoint",
]
