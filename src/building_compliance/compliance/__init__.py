# File: src/building_compliance/compliance/__init__.py
"""Thermal compliance check of element build-ups."""

from building_compliance.compliance.checker import (
    MAX_U_VALUES,
    ComplianceDetails,
    ComplianceResult,
    areal_mass,
    check_compliance,
    max_u_value_for,
    thermal_resistance,
    u_value,
)

__all__ = [
    "MAX_U_VALUES",
    "ComplianceDetails",
    "ComplianceResult",
    "areal_mass",
    "check_compliance",
    "max_u_value_for",
    "thermal_resistance",
    "u_value",
]
