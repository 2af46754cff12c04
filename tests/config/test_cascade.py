# File: tests/config/test_cascade.py

"""Tests for the generic cascading selection.

Tests cover:
- Step ordering and duplicate detection
- Each reset policy (FIRST, CLEAR, COLLAPSE, KEEP_IF_VALID)
- Rejection of values that are not offered
- Unchanged values leave downstream fields alone
- normalize and missing_fields
"""

import pytest

from building_compliance.config.cascade import (
    CascadeStep,
    CascadingSelect,
    InvalidSelectionError,
    ResetPolicy,
)

COLOURS = {"fruit": ["red", "green"], "berry": ["blue"], "nut": []}
SIZES = {"red": ["small", "large"], "green": ["large"], "blue": ["tiny"]}


@pytest.fixture
def cascade() -> CascadingSelect:
    return CascadingSelect([
        CascadeStep("kind", lambda values: ["fruit", "berry", "nut"]),
        CascadeStep("colour", lambda values: COLOURS.get(values.get("kind"), []), reset=ResetPolicy.FIRST),
        CascadeStep("size", lambda values: SIZES.get(values.get("colour"), []), reset=ResetPolicy.COLLAPSE),
        CascadeStep(
            "label",
            lambda values: ["plain", "fancy"] if values.get("size") else [],
            reset=ResetPolicy.KEEP_IF_VALID,
        ),
        CascadeStep("note", lambda values: ["a", "b"], reset=ResetPolicy.CLEAR),
    ])


class TestCascadingSelect:
    """Tests for CascadingSelect."""

    def test_fields_in_order(self, cascade) -> None:
        assert cascade.fields == ["kind", "colour", "size", "label", "note"]

    def test_duplicate_field_rejected(self) -> None:
        with pytest.raises(ValueError, match="Duplicate cascade field"):
            CascadingSelect([
                CascadeStep("a", lambda values: []),
                CascadeStep("a", lambda values: []),
            ])

    def test_unknown_field(self, cascade) -> None:
        with pytest.raises(KeyError):
            cascade.apply({}, "shape", "round")
        with pytest.raises(KeyError):
            cascade.step("shape")

    def test_first_policy(self, cascade) -> None:
        values = cascade.apply({}, "kind", "fruit")
        assert values["colour"] == "red"

    def test_first_policy_without_options(self, cascade) -> None:
        values = cascade.apply({}, "kind", "nut")
        assert values["colour"] is None
        assert values["size"] is None

    def test_collapse_single_option(self, cascade) -> None:
        values = cascade.apply({"kind": "fruit", "colour": "red"}, "colour", "green")
        assert values["size"] == "large"

    def test_collapse_leaves_choice_open(self, cascade) -> None:
        values = cascade.apply({"kind": "fruit", "colour": "green", "size": "large"}, "colour", "red")
        assert values["size"] is None

    def test_keep_if_valid(self, cascade) -> None:
        values = {"kind": "fruit", "colour": "red", "size": "small", "label": "fancy"}
        values = cascade.apply(values, "size", "large")
        assert values["label"] == "fancy"

    def test_keep_if_valid_drops_invalid(self, cascade) -> None:
        values = {"kind": "fruit", "colour": "red", "size": "small", "label": "fancy"}
        values = cascade.apply(values, "size", None)
        assert values["label"] is None

    def test_clear_policy(self, cascade) -> None:
        values = {"kind": "fruit", "colour": "red", "size": "small", "note": "a"}
        values = cascade.apply(values, "size", "large")
        assert values["note"] is None

    def test_rejects_value_not_offered(self, cascade) -> None:
        with pytest.raises(InvalidSelectionError) as info:
            cascade.apply({"kind": "berry"}, "colour", "red")
        assert info.value.field == "colour"
        assert info.value.allowed == ["blue"]

    def test_rejects_field_without_options(self, cascade) -> None:
        with pytest.raises(InvalidSelectionError, match="does not apply"):
            cascade.apply({"kind": "nut"}, "colour", "red")

    def test_unchanged_value_keeps_downstream(self, cascade) -> None:
        values = {"kind": "fruit", "colour": "red", "size": "small", "note": "b"}
        assert cascade.apply(values, "colour", "red") == values

    def test_empty_string_clears(self, cascade) -> None:
        values = cascade.apply({"kind": "fruit", "colour": "red", "size": "small"}, "size", "")
        assert values["size"] is None

    def test_input_not_mutated(self, cascade) -> None:
        values = {"kind": "fruit", "colour": "red"}
        cascade.apply(values, "kind", "berry")
        assert values == {"kind": "fruit", "colour": "red"}

    def test_extra_keys_carried(self, cascade) -> None:
        values = cascade.apply({"name": "basket"}, "kind", "berry")
        assert values["name"] == "basket"

    def test_normalize(self, cascade) -> None:
        values = cascade.normalize({"kind": "berry", "colour": "red", "note": "a"})
        assert values["colour"] == "blue"
        assert values["size"] == "tiny"
        assert values["note"] == "a"

    def test_missing_fields(self, cascade) -> None:
        values = cascade.apply({}, "kind", "fruit")
        assert cascade.missing_fields(values) == ["size", "note"]

    def test_is_applicable(self, cascade) -> None:
        assert not cascade.is_applicable({"kind": "nut"}, "colour")
        assert cascade.is_applicable({"kind": "fruit"}, "colour")

    def test_all_options(self, cascade) -> None:
        options = cascade.all_options({"kind": "berry", "colour": "blue"})
        assert options["colour"] == ["blue"]
        assert options["size"] == ["tiny"]
        assert options["label"] == []
