# File: src/building_compliance/config/__init__.py

"""
Configuration rules for building elements.
Provides:
- The generic cascading-select abstraction
- The element decision table (type, sub-type, outside wall fields)
- Validation of persisted element configurations
"""

from building_compliance.config.cascade import (
    CascadeStep,
    CascadingSelect,
    InvalidSelectionError,
    ResetPolicy,
)

from building_compliance.config.element_rules import (
    ELEMENT_CASCADE,
    BuildMethod,
    BuildMethodIsolation,
    ElementConfigurationError,
    ElementType,
    IsolationCoverage,
    OutsideCover,
    SubType,
    apply_change,
    available_options,
    build_methods_for,
    configuration_values,
    element_types,
    isolation_methods_for,
    missing_fields,
    outside_covers,
    sub_types_for,
    validate_element,
)

__all__ = [
    "CascadeStep",
    "CascadingSelect",
    "InvalidSelectionError",
    "ResetPolicy",
    "ELEMENT_CASCADE",
    "BuildMethod",
    "BuildMethodIsolation",
    "ElementConfigurationError",
    "ElementType",
    "IsolationCoverage",
    "OutsideCover",
    "SubType",
    "apply_change",
    "available_options",
    "build_methods_for",
    "configuration_values",
    "element_types",
    "isolation_methods_for",
    "missing_fields",
    "outside_covers",
    "sub_types_for",
    "validate_element",
]
