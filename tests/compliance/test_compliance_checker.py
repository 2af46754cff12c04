# File: tests/compliance/test_compliance_checker.py

"""Tests for the thermal compliance check.

Tests cover:
- U-value and areal mass of a build-up
- Limits per element type, dark coverage tightening
- Failing checks and their recommendations
"""

import pytest

from building_compliance.compliance import (
    areal_mass,
    check_compliance,
    max_u_value_for,
    thermal_resistance,
    u_value,
)
from building_compliance.layers import ElementConfiguration, Layer


def layer(product_key, thickness, conductivity, mass, name=""):
    substance, maker, product = product_key
    return Layer(
        id=product,
        name=name,
        substance=substance,
        maker=maker,
        product=product,
        thickness=thickness,
        thermal_conductivity=conductivity,
        mass=mass,
    )


AERATED_BLOCK = ("blocks", "Ytong", "Autoclaved aerated block")
HOLLOW_BLOCK = ("blocks", "Tikva", "Hollow concrete block")
CEMENT_PLASTER = ("plaster", "Tambour", "Cement plaster")
EPS_15 = ("polystyrene", "Kalkar", "EPS 15")


@pytest.fixture
def insulated_blocks_wall(blocks_wall):
    return blocks_wall.with_layers([
        layer(AERATED_BLOCK, 20, 0.12, 500),
        layer(CEMENT_PLASTER, 2, 1.0, 1800),
    ])


class TestCalculations:
    """Tests for the physical quantities."""

    def test_thermal_resistance(self, insulated_blocks_wall) -> None:
        assert thermal_resistance(insulated_blocks_wall) == pytest.approx(0.13 + 0.04 + 0.2 / 0.12 + 0.02 / 1.0)

    def test_u_value(self, insulated_blocks_wall) -> None:
        assert u_value(insulated_blocks_wall) == pytest.approx(0.5386, abs=1e-4)

    def test_floor_surface_resistances(self) -> None:
        floor = ElementConfiguration(type="Floor", sub_type="Upper Close Room",
                                     layers=[layer(EPS_15, 10, 0.038, 15)])
        assert u_value(floor) == pytest.approx(1 / (0.17 + 0.04 + 0.1 / 0.038))

    def test_areal_mass(self, insulated_blocks_wall) -> None:
        assert areal_mass(insulated_blocks_wall) == pytest.approx(136.0)

    def test_zero_conductivity_layer_ignored(self, blocks_wall) -> None:
        element = blocks_wall.with_layers([layer(AERATED_BLOCK, 20, 0.0, 500)])
        assert thermal_resistance(element) == pytest.approx(0.17)


class TestLimits:
    """Tests for max_u_value_for."""

    def test_outside_wall(self, blocks_wall) -> None:
        assert max_u_value_for(blocks_wall) == 0.8

    def test_dark_coverage_is_stricter(self, blocks_wall) -> None:
        blocks_wall.isolation_coverage = "dark color"
        assert max_u_value_for(blocks_wall) == 0.7

    def test_thermal_bridge(self) -> None:
        assert max_u_value_for(ElementConfiguration(type="Thermal Bridge")) == 1.1

    def test_unknown_combination(self) -> None:
        assert max_u_value_for(ElementConfiguration(type="Wall", sub_type=None)) is None


class TestCheckCompliance:
    """Tests for check_compliance."""

    def test_compliant_wall(self, insulated_blocks_wall) -> None:
        result = check_compliance(insulated_blocks_wall)
        assert result.is_compliant
        assert result.u_value == 0.539
        assert result.max_u_value == 0.8
        assert result.areal_mass == 136.0
        assert result.details.checks_passed == [
            "Layer build-up",
            "Catalog consistency",
            "Thermal transmittance",
        ]
        assert result.details.checks_failed == []
        assert result.details.recommendations == []

    def test_poorly_insulated_wall(self, blocks_wall) -> None:
        element = blocks_wall.with_layers([
            layer(HOLLOW_BLOCK, 20, 1.0, 1300),
            layer(CEMENT_PLASTER, 2, 1.0, 1800),
        ])
        result = check_compliance(element)
        assert not result.is_compliant
        assert result.u_value == pytest.approx(2.564, abs=1e-3)
        assert result.details.checks_failed == ["Thermal transmittance"]
        assert result.details.recommendations == ["Increase insulation thickness to meet standards"]

    def test_no_layers(self, blocks_wall) -> None:
        result = check_compliance(blocks_wall)
        assert not result.is_compliant
        assert result.u_value is None
        assert result.details.checks_failed == ["Layer build-up"]

    def test_thickness_outside_catalog_range(self, blocks_wall) -> None:
        element = blocks_wall.with_layers([layer(AERATED_BLOCK, 40, 0.12, 500)])
        result = check_compliance(element)
        assert "Catalog consistency" in result.details.checks_failed
        assert "Thermal transmittance" in result.details.checks_passed
        assert result.details.recommendations == ["Layer 1: thickness 40 cm outside 10-30 cm"]

    def test_material_outside_context(self, outside_concrete_wall) -> None:
        element = outside_concrete_wall.with_layers([layer(EPS_15, 10, 0.038, 15, name="Insulation")])
        result = check_compliance(element)
        assert "Catalog consistency" in result.details.checks_failed
        assert result.details.recommendations[0] == "Insulation: material is not available for this element"

    def test_to_dict(self, insulated_blocks_wall) -> None:
        data = check_compliance(insulated_blocks_wall).to_dict()
        assert set(data) == {"is_compliant", "u_value", "max_u_value", "areal_mass", "details"}
        assert set(data["details"]) == {"checks_passed", "checks_failed", "recommendations"}
