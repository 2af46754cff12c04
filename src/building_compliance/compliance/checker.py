# File: src/building_compliance/compliance/checker.py

"""Thermal compliance check of an element's build-up.

The element passes when it has layers, every layer matches the catalog
(in the element's context and within its thickness range), and the
thermal transmittance of the build-up does not exceed the limit for the
element's type and sub-type:

    R = Rsi + sum(d / lambda) + Rse      d in metres
    U = 1 / R                            W/(m2*K)

Surface resistances follow EN ISO 6946 for horizontal (walls), upward
(ceilings) and downward (floors) heat flow.

Usage:
    from building_compliance.compliance import check_compliance

    result = check_compliance(element)
    result.is_compliant, result.u_value
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from building_compliance.catalog.queries import resolve_entry, thickness_in_range
from building_compliance.layers.layer import ElementConfiguration
from building_compliance.utils.logging_config import get_logger

logger = get_logger(__name__)

CM_PER_M = 100.0

CHECK_BUILD_UP = "Layer build-up"
CHECK_CATALOG = "Catalog consistency"
CHECK_THERMAL = "Thermal transmittance"


@dataclass(frozen=True)
class SurfaceResistance:
    """Inside and outside surface resistances in m2*K/W."""

    inside: float
    outside: float


SURFACE_RESISTANCES: Dict[str, SurfaceResistance] = {
    "Wall": SurfaceResistance(inside=0.13, outside=0.04),
    "Ceiling": SurfaceResistance(inside=0.10, outside=0.04),
    "Floor": SurfaceResistance(inside=0.17, outside=0.04),
    "Thermal Bridge": SurfaceResistance(inside=0.13, outside=0.04),
}

# Maximum U-value (W/(m2*K)) by (type, sub_type)
MAX_U_VALUES: Dict[Tuple[str, Optional[str]], float] = {
    ("Wall", "Outside Wall"): 0.8,
    ("Wall", "Isolation Wall"): 1.2,
    ("Ceiling", "Upper Roof"): 0.6,
    ("Ceiling", "Under Roof"): 0.6,
    ("Ceiling", "Upper Open Space"): 0.9,
    ("Ceiling", "Upper Close Room"): 1.2,
    ("Floor", "Upper Open Space"): 0.9,
    ("Floor", "Upper Close Room"): 1.2,
    ("Thermal Bridge", None): 1.1,
}

# Dark outside surfaces absorb more sun; their walls get a stricter limit
DARK_COLOR_U_REDUCTION = 0.1


@dataclass
class ComplianceDetails:
    checks_passed: List[str] = field(default_factory=list)
    checks_failed: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)


@dataclass
class ComplianceResult:
    """Outcome of a compliance check.

    Attributes:
        is_compliant: True when no check failed.
        u_value: Thermal transmittance of the build-up, None without layers.
        max_u_value: Limit applied, None when the element has no limit.
        areal_mass: Mass per square metre of the build-up in kg/m2.
        details: Passed and failed checks with recommendations.
    """

    is_compliant: bool
    u_value: Optional[float] = None
    max_u_value: Optional[float] = None
    areal_mass: float = 0.0
    details: ComplianceDetails = field(default_factory=ComplianceDetails)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to JSON-compatible dict."""
        return {
            "is_compliant": self.is_compliant,
            "u_value": self.u_value,
            "max_u_value": self.max_u_value,
            "areal_mass": self.areal_mass,
            "details": {
                "checks_passed": list(self.details.checks_passed),
                "checks_failed": list(self.details.checks_failed),
                "recommendations": list(self.details.recommendations),
            },
        }


def max_u_value_for(element: ElementConfiguration) -> Optional[float]:
    """Limit for an element, tightened for dark outside walls."""
    limit = MAX_U_VALUES.get((element.type, element.sub_type or None))
    if limit is None:
        return None
    if element.sub_type == "Outside Wall" and element.isolation_coverage == "dark color":
        limit = round(limit - DARK_COLOR_U_REDUCTION, 3)
    return limit


def thermal_resistance(element: ElementConfiguration) -> float:
    """Total resistance R of the build-up including surface resistances."""
    surfaces = SURFACE_RESISTANCES.get(element.type, SURFACE_RESISTANCES["Wall"])
    resistance = surfaces.inside + surfaces.outside
    for layer in element.layers:
        if layer.thermal_conductivity > 0:
            resistance += (layer.thickness / CM_PER_M) / layer.thermal_conductivity
    return resistance


def u_value(element: ElementConfiguration) -> float:
    """Thermal transmittance U = 1 / R."""
    return 1.0 / thermal_resistance(element)


def areal_mass(element: ElementConfiguration) -> float:
    """Mass per square metre: sum of density times thickness."""
    return sum(layer.mass * layer.thickness / CM_PER_M for layer in element.layers)


def _catalog_problems(element: ElementConfiguration) -> List[str]:
    problems = []
    for index, layer in enumerate(element.layers):
        label = layer.display_name(index)
        entry = resolve_entry(layer.substance, layer.maker, layer.product, element)
        if entry is None:
            problems.append(f"{label}: material is not available for this element")
        elif not thickness_in_range(entry, layer.thickness):
            problems.append(
                f"{label}: thickness {layer.thickness} cm outside "
                f"{entry.min_thickness}-{entry.max_thickness} cm"
            )
    return problems


def check_compliance(element: ElementConfiguration) -> ComplianceResult:
    """Run every check on an element.

    Args:
        element: Element with its layers.

    Returns:
        ComplianceResult; is_compliant is False if any check failed.
    """
    details = ComplianceDetails()
    result = ComplianceResult(is_compliant=False, details=details)

    if not element.layers:
        details.checks_failed.append(CHECK_BUILD_UP)
        details.recommendations.append("Add the layers of the element before checking it")
        logger.info(f"Compliance check of element {element.element_id}: no layers")
        return result
    details.checks_passed.append(CHECK_BUILD_UP)

    problems = _catalog_problems(element)
    if problems:
        details.checks_failed.append(CHECK_CATALOG)
        details.recommendations.extend(problems)
    else:
        details.checks_passed.append(CHECK_CATALOG)

    result.u_value = round(u_value(element), 3)
    result.areal_mass = round(areal_mass(element), 2)
    result.max_u_value = max_u_value_for(element)

    if result.max_u_value is None or result.u_value <= result.max_u_value:
        details.checks_passed.append(CHECK_THERMAL)
    else:
        details.checks_failed.append(CHECK_THERMAL)
        details.recommendations.append("Increase insulation thickness to meet standards")

    result.is_compliant = not details.checks_failed
    logger.info(
        f"Compliance check of element {element.element_id}: U={result.u_value} "
        f"(max {result.max_u_value}), compliant={result.is_compliant}"
    )
    return result
