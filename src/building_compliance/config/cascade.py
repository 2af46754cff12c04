# File: src/building_compliance/config/cascade.py

"""Generic cascading selection.

A cascade is an ordered list of steps. Each step owns one field, knows
which options it offers given the values of the fields above it, and
declares what happens to its value when an upstream field changes.
The rules themselves are plain data handed to CascadingSelect; nothing
here knows about walls or build methods.

Usage:
    cascade = CascadingSelect([
        CascadeStep("type", lambda values: ["Wall", "Floor"]),
        CascadeStep("sub_type", sub_types_of, reset=ResetPolicy.FIRST),
    ])
    values = cascade.apply({}, "type", "Wall")
    values["sub_type"]  # first sub-type of a wall
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from building_compliance.utils.logging_config import get_logger

logger = get_logger(__name__)


class ResetPolicy(Enum):
    """What a step does with its value when an upstream field changes."""

    FIRST = "first"
    """Reset to the first allowed option (cleared if there is none)."""

    CLEAR = "clear"
    """Always cleared; the user must choose again."""

    COLLAPSE = "collapse"
    """Auto-select a single option, clear otherwise; no options skips the step."""

    KEEP_IF_VALID = "keep_if_valid"
    """Keep the current value while it is still allowed."""


class InvalidSelectionError(ValueError):
    """Raised when a value is not among the options of its field."""

    def __init__(self, field: str, value: Any, allowed: Sequence[str]):
        self.field = field
        self.value = value
        self.allowed = list(allowed)
        if self.allowed:
            message = f"'{value}' is not a valid {field}; expected one of {self.allowed}"
        else:
            message = f"{field} does not apply to the current selection"
        super().__init__(message)


@dataclass(frozen=True)
class CascadeStep:
    """One field of a cascade.

    Attributes:
        field: Name of the field in the values mapping.
        options: Function of the current values returning the allowed options.
        reset: Reset policy applied when an upstream field changes.
    """

    field: str
    options: Callable[[Mapping[str, Any]], Sequence[str]]
    reset: ResetPolicy = ResetPolicy.CLEAR


class CascadingSelect:
    """Applies field changes to a values mapping according to a list of steps."""

    def __init__(self, steps: Sequence[CascadeStep]):
        self.steps: List[CascadeStep] = list(steps)
        self._positions: Dict[str, int] = {}
        for position, step in enumerate(self.steps):
            if step.field in self._positions:
                raise ValueError(f"Duplicate cascade field: {step.field}")
            self._positions[step.field] = position

    @property
    def fields(self) -> List[str]:
        return [step.field for step in self.steps]

    def step(self, field: str) -> CascadeStep:
        try:
            return self.steps[self._positions[field]]
        except KeyError:
            raise KeyError(f"Unknown cascade field: {field}") from None

    def options(self, values: Mapping[str, Any], field: str) -> List[str]:
        """Options currently offered for a field."""
        return list(self.step(field).options(values))

    def all_options(self, values: Mapping[str, Any]) -> Dict[str, List[str]]:
        """Options of every field, keyed by field name."""
        return {step.field: list(step.options(values)) for step in self.steps}

    def is_applicable(self, values: Mapping[str, Any], field: str) -> bool:
        """A field with no options is skipped entirely."""
        return bool(self.options(values, field))

    def apply(self, values: Mapping[str, Any], field: str, value: Optional[str]) -> Dict[str, Any]:
        """Set one field and re-derive every field below it.

        Args:
            values: Current values; not modified.
            field: Field being changed.
            value: New value, or None/"" to clear the field.

        Returns:
            A new values dict.

        Raises:
            KeyError: If the field is not part of the cascade.
            InvalidSelectionError: If the value is not currently allowed.
        """
        position = self._positions.get(field)
        if position is None:
            raise KeyError(f"Unknown cascade field: {field}")

        updated = dict(values)
        if value in (None, ""):
            value = None
        else:
            allowed = self.options(updated, field)
            if value not in allowed:
                raise InvalidSelectionError(field, value, allowed)

        if updated.get(field) == value:
            return updated

        updated[field] = value
        for step in self.steps[position + 1:]:
            updated[step.field] = self._reset_value(step, updated)

        logger.debug(f"Cascade change {field}={value!r} -> {updated}")
        return updated

    def normalize(self, values: Mapping[str, Any]) -> Dict[str, Any]:
        """Keep every still-valid value, reset the others top-down."""
        normalized = dict(values)
        for step in self.steps:
            allowed = list(step.options(normalized))
            if normalized.get(step.field) not in allowed:
                normalized[step.field] = self._reset_value(step, normalized)
        return normalized

    def missing_fields(self, values: Mapping[str, Any]) -> List[str]:
        """Applicable fields that still have no value, in cascade order."""
        return [
            step.field
            for step in self.steps
            if step.options(values) and values.get(step.field) in (None, "")
        ]

    @staticmethod
    def _reset_value(step: CascadeStep, values: Mapping[str, Any]) -> Optional[str]:
        allowed = list(step.options(values))
        if not allowed:
            return None
        if step.reset is ResetPolicy.FIRST:
            return allowed[0]
        if step.reset is ResetPolicy.COLLAPSE:
            return allowed[0] if len(allowed) == 1 else None
        if step.reset is ResetPolicy.KEEP_IF_VALID:
            current = values.get(step.field)
            return current if current in allowed else None
        return None
