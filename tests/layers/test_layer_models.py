# File: tests/layers/test_layer_models.py

"""Tests for Layer and ElementConfiguration serialization."""

from building_compliance.layers import ElementConfiguration, Layer, LayerGroup


class TestLayer:
    """Tests for the Layer dataclass."""

    def test_defaults(self) -> None:
        layer = Layer()
        assert layer.thickness == 0.0
        assert layer.group == LayerGroup.OUTER_COVER.value

    def test_display_name(self) -> None:
        assert Layer(name="Render").display_name(0) == "Render"
        assert Layer().display_name(2) == "Layer 3"

    def test_from_dict_casts_and_ignores_unknown(self) -> None:
        layer = Layer.from_dict({
            "id": "a",
            "substance": "plaster",
            "thickness": "1.5",
            "group": "2",
            "mass": None,
            "_id": "mongo-id",
        })
        assert layer.thickness == 1.5
        assert layer.group == 2
        assert layer.mass == 0.0

    def test_to_dict_keys(self) -> None:
        assert set(Layer().to_dict()) == {
            "id", "name", "substance", "maker", "product",
            "thickness", "thermal_conductivity", "mass", "group",
        }


class TestElementConfiguration:
    """Tests for the ElementConfiguration dataclass."""

    def test_with_layers_copies(self, layer_factory) -> None:
        layers = layer_factory(2)
        element = ElementConfiguration().with_layers(layers)
        element.layers[0].name = "changed"
        assert layers[0].name == "Layer 1"

    def test_with_layers_keeps_other_fields(self, outside_concrete_wall, layer_factory) -> None:
        element = outside_concrete_wall.with_layers(layer_factory(1))
        assert element.build_method == "concrete"
        assert outside_concrete_wall.layers == []

    def test_dict_round_trip(self, outside_concrete_wall, layer_factory) -> None:
        element = outside_concrete_wall.with_layers(layer_factory(3))
        assert ElementConfiguration.from_dict(element.to_dict()) == element

    def test_from_dict_tolerates_storage_columns(self) -> None:
        element = ElementConfiguration.from_dict({
            "id": 17,
            "type": "Floor",
            "sub_type": "Upper Close Room",
            "parameters": None,
            "layers": None,
        })
        assert element.parameters == {}
        assert element.layers == []
