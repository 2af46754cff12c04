# File: src/building_compliance/config/element_rules.py

"""Element configuration decision table.

Which fields an element asks for, and which values they accept, depends
on the choices above them:

    type -> sub_type -> outside_cover -> build_method
         -> build_method_isolation -> isolation_coverage

Only an Outside Wall goes past sub_type. The tables below are the whole
rule set; ELEMENT_CASCADE turns them into a CascadingSelect so that the
transition behaviour (reset to first sub-type, clear on cover change,
auto-collapse of single isolation options) comes from the step policies.

Usage:
    from building_compliance.config.element_rules import apply_change

    values = apply_change({"type": "Wall"}, "sub_type", "Outside Wall")
    values = apply_change(values, "outside_cover", "dry hang")
    values = apply_change(values, "build_method", "amir wall")
    values["build_method_isolation"]  # "outside isolation"
"""

from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Union

from building_compliance.config.cascade import (
    CascadeStep,
    CascadingSelect,
    ResetPolicy,
)
from building_compliance.utils.logging_config import get_logger

logger = get_logger(__name__)


# =============================================================================
# Enumerations
# =============================================================================


class ElementType(Enum):
    """Kind of building element."""

    WALL = "Wall"
    CEILING = "Ceiling"
    FLOOR = "Floor"
    THERMAL_BRIDGE = "Thermal Bridge"


class SubType(Enum):
    """Position of the element relative to its surroundings."""

    OUTSIDE_WALL = "Outside Wall"
    ISOLATION_WALL = "Isolation Wall"
    UPPER_OPEN_SPACE = "Upper Open Space"
    UPPER_CLOSE_ROOM = "Upper Close Room"
    UPPER_ROOF = "Upper Roof"
    UNDER_ROOF = "Under Roof"


class OutsideCover(Enum):
    """Outer cladding of an outside wall."""

    TIAH = "tiah"
    """Wet-applied render."""

    DRY_HANG = "dry hang"
    """Mechanically hung cladding panels."""

    WET_HANG = "wet hang"
    """Cladding stones set in mortar."""


class BuildMethod(Enum):
    """Construction technique of an outside wall."""

    BLOCKS = "blocks"
    CONCRETE = "concrete"
    AMIR_WALL = "amir wall"
    BARANOVICH = "baranovich"
    LIGHT_BUILD = "light build"


class BuildMethodIsolation(Enum):
    """How the build method is insulated."""

    NO_EXTRA_COVER = "no extra cover"
    EXTRA_COVER = "extra cover"
    INSIDE_ISOLATION = "inside isolation"
    OUTSIDE_ISOLATION = "outside isolation"


class IsolationCoverage(Enum):
    """Colour of the outer surface, which drives solar gain."""

    DARK_COLOR = "dark color"
    BRIGHT_COLOR = "bright color"


# =============================================================================
# Decision tables
# =============================================================================

SUB_TYPES: Dict[ElementType, List[SubType]] = {
    ElementType.WALL: [SubType.OUTSIDE_WALL, SubType.ISOLATION_WALL],
    ElementType.FLOOR: [SubType.UPPER_OPEN_SPACE, SubType.UPPER_CLOSE_ROOM],
    ElementType.CEILING: [
        SubType.UPPER_OPEN_SPACE,
        SubType.UPPER_CLOSE_ROOM,
        SubType.UPPER_ROOF,
        SubType.UNDER_ROOF,
    ],
    ElementType.THERMAL_BRIDGE: [],
}

# Every cover can be combined with every build method.
BUILD_METHODS: Dict[OutsideCover, List[BuildMethod]] = {
    cover: list(BuildMethod) for cover in OutsideCover
}

ISOLATION_METHODS: Dict[BuildMethod, List[BuildMethodIsolation]] = {
    BuildMethod.BLOCKS: [
        BuildMethodIsolation.NO_EXTRA_COVER,
        BuildMethodIsolation.EXTRA_COVER,
    ],
    BuildMethod.CONCRETE: [
        BuildMethodIsolation.INSIDE_ISOLATION,
        BuildMethodIsolation.OUTSIDE_ISOLATION,
    ],
    BuildMethod.AMIR_WALL: [BuildMethodIsolation.OUTSIDE_ISOLATION],
    BuildMethod.BARANOVICH: [BuildMethodIsolation.INSIDE_ISOLATION],
    BuildMethod.LIGHT_BUILD: [],
}

OUTSIDE_WALL_FIELDS = (
    "outside_cover",
    "build_method",
    "build_method_isolation",
    "isolation_coverage",
)

EnumOrStr = Union[Enum, str, None]


def _coerce(enum_cls, value: EnumOrStr):
    """Turn a raw value into an enum member, None if unknown or empty."""
    if value is None or value == "":
        return None
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(getattr(value, "value", value))
    except ValueError:
        return None


def _values(members) -> List[str]:
    return [member.value for member in members]


# =============================================================================
# Lookups
# =============================================================================


def element_types() -> List[str]:
    return _values(ElementType)


def sub_types_for(element_type: EnumOrStr) -> List[str]:
    """Sub-types allowed for an element type ([] for unknown types)."""
    member = _coerce(ElementType, element_type)
    return _values(SUB_TYPES.get(member, []))


def outside_covers() -> List[str]:
    return _values(OutsideCover)


def build_methods_for(outside_cover: EnumOrStr) -> List[str]:
    """Build methods allowed with an outside cover ([] until a cover is chosen)."""
    member = _coerce(OutsideCover, outside_cover)
    return _values(BUILD_METHODS.get(member, []))


def isolation_methods_for(build_method: EnumOrStr) -> List[str]:
    """Isolation methods allowed for a build method."""
    member = _coerce(BuildMethod, build_method)
    return _values(ISOLATION_METHODS.get(member, []))


def is_outside_wall(values: Mapping[str, Any]) -> bool:
    return (
        _coerce(ElementType, values.get("type")) is ElementType.WALL
        and _coerce(SubType, values.get("sub_type")) is SubType.OUTSIDE_WALL
    )


# =============================================================================
# Cascade
# =============================================================================


def _sub_type_options(values: Mapping[str, Any]) -> List[str]:
    return sub_types_for(values.get("type"))


def _outside_cover_options(values: Mapping[str, Any]) -> List[str]:
    return outside_covers() if is_outside_wall(values) else []


def _build_method_options(values: Mapping[str, Any]) -> List[str]:
    if not is_outside_wall(values):
        return []
    return build_methods_for(values.get("outside_cover"))


def _isolation_options(values: Mapping[str, Any]) -> List[str]:
    if not is_outside_wall(values):
        return []
    return isolation_methods_for(values.get("build_method"))


def _coverage_options(values: Mapping[str, Any]) -> List[str]:
    # Asked only once the build method is set and its isolation answered or skipped
    if not is_outside_wall(values) or not values.get("build_method"):
        return []
    if _isolation_options(values) and not values.get("build_method_isolation"):
        return []
    return _values(IsolationCoverage)


ELEMENT_CASCADE = CascadingSelect([
    CascadeStep("type", lambda values: element_types()),
    CascadeStep("sub_type", _sub_type_options, reset=ResetPolicy.FIRST),
    CascadeStep("outside_cover", _outside_cover_options, reset=ResetPolicy.CLEAR),
    CascadeStep("build_method", _build_method_options, reset=ResetPolicy.CLEAR),
    CascadeStep("build_method_isolation", _isolation_options, reset=ResetPolicy.COLLAPSE),
    CascadeStep("isolation_coverage", _coverage_options, reset=ResetPolicy.KEEP_IF_VALID),
])


def configuration_values(element: Any) -> Dict[str, Any]:
    """Extract the cascade fields from a mapping or an element object."""
    if hasattr(element, "get"):
        raw = {field: element.get(field) for field in ELEMENT_CASCADE.fields}
    else:
        raw = {field: getattr(element, field, None) for field in ELEMENT_CASCADE.fields}
    return {field: getattr(value, "value", value) for field, value in raw.items()}


def apply_change(values: Mapping[str, Any], field: str, value: Optional[str]) -> Dict[str, Any]:
    """Apply one field change to an element configuration.

    Args:
        values: Current configuration values (other keys are carried along).
        field: One of the cascade fields.
        value: New value, or None to clear.

    Returns:
        New values with every downstream field re-derived.

    Raises:
        InvalidSelectionError: If the value is not allowed at this point.
    """
    return ELEMENT_CASCADE.apply(values, field, getattr(value, "value", value))


def available_options(values: Mapping[str, Any]) -> Dict[str, List[str]]:
    """Options of every configuration field for the current values."""
    return ELEMENT_CASCADE.all_options(configuration_values(values))


def missing_fields(values: Mapping[str, Any]) -> List[str]:
    """Configuration fields that must still be chosen."""
    return ELEMENT_CASCADE.missing_fields(configuration_values(values))


# =============================================================================
# Validation of persisted elements
# =============================================================================


class ElementConfigurationError(ValueError):
    """Raised when a stored element violates the configuration rules."""

    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        super().__init__(message)


_REQUIRED_MESSAGES = {
    "outside_cover": "Outside Cover is required for Outside Wall elements",
    "build_method": "Build Method is required for Outside Wall elements",
    "build_method_isolation": "Build Method Isolation is required for this build method",
    "isolation_coverage": "Isolation Coverage is required for Outside Wall elements",
}


def validate_element(element: Any) -> None:
    """Check an element against the decision table.

    Sub-type must belong to the type (a thermal bridge has none). For an
    Outside Wall the cover, build method and coverage are required, and
    the isolation method too when the build method offers any.

    Raises:
        ElementConfigurationError: On the first violation found.
    """
    values = configuration_values(element)

    if values.get("type") not in element_types():
        raise ElementConfigurationError(f"Unknown element type: {values.get('type')}", "type")

    allowed_sub_types = sub_types_for(values["type"])
    sub_type = values.get("sub_type")
    if (sub_type and sub_type not in allowed_sub_types) or (not sub_type and allowed_sub_types):
        raise ElementConfigurationError("SubType does not match Element Type", "sub_type")

    if not is_outside_wall(values):
        return

    for field in OUTSIDE_WALL_FIELDS:
        allowed = ELEMENT_CASCADE.options(values, field)
        value = values.get(field)
        if value in (None, ""):
            if allowed:
                logger.warning(f"Element rejected: missing {field}")
                raise ElementConfigurationError(_REQUIRED_MESSAGES[field], field)
            continue
        if value not in allowed:
            raise ElementConfigurationError(
                f"{field.replace('_', ' ').capitalize()} '{value}' is not allowed here", field
            )
