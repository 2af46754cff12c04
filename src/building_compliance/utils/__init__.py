# File: src/building_compliance/utils/__init__.py
"""Shared utilities (logging)."""

from building_compliance.utils.logging_config import ComplianceLogger, get_logger

__all__ = ["ComplianceLogger", "get_logger"]
