# tests/conftest.py
import sys
import os

# Add src directory and project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../src')))
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pytest
from typing import Any, Dict, List, Optional

from building_compliance.layers import ElementConfiguration, ElementSession, Layer
from building_compliance.persistence import ElementLocation, UpdateResult


class RecordingUpdater:
    """In-memory persistence collaborator.

    Echoes the element back as stored, or rejects every call when
    ``fail_with`` is set. Every call is recorded.
    """

    def __init__(self, fail_with: Optional[str] = None, raise_error: Optional[Exception] = None):
        self.fail_with = fail_with
        self.raise_error = raise_error
        self.calls: List[Dict[str, Any]] = []

    def update_element(self, project_id, type_id, space_id, element_id, element_data):
        self.calls.append({
            "project_id": project_id,
            "type_id": type_id,
            "space_id": space_id,
            "element_id": element_id,
            "element_data": element_data,
        })
        if self.raise_error is not None:
            raise self.raise_error
        if self.fail_with is not None:
            return UpdateResult(success=False, message=self.fail_with)
        stored = dict(element_data)
        stored["updated_at"] = "2025-03-11T00:01:00"
        return UpdateResult(success=True, data=stored)

    @property
    def last_layers(self) -> List[Dict[str, Any]]:
        return self.calls[-1]["element_data"]["layers"]


def make_layers(count: int) -> List[Layer]:
    """Numbered EPS layers with ids L0..L{count-1}."""
    return [
        Layer(
            id=f"L{i}",
            name=f"Layer {i + 1}",
            substance="polystyrene",
            maker="Kalkar",
            product="EPS 15",
            thickness=5.0,
            thermal_conductivity=0.038,
            mass=15.0,
            group=(i % 3) + 1,
        )
        for i in range(count)
    ]


@pytest.fixture
def location():
    return ElementLocation(project_id="p1", type_id="t1", space_id="s1", element_id="e1")


@pytest.fixture
def updater():
    return RecordingUpdater()


@pytest.fixture
def outside_concrete_wall():
    """Outside concrete wall with outside isolation, no layers yet."""
    return ElementConfiguration(
        type="Wall",
        sub_type="Outside Wall",
        outside_cover="tiah",
        build_method="concrete",
        build_method_isolation="outside isolation",
        isolation_coverage="bright color",
        name="North facade",
        element_id="e1",
        project_id="p1",
        type_id="t1",
        space_id="s1",
    )


@pytest.fixture
def blocks_wall():
    """Outside blocks wall: the whole catalog is usable."""
    return ElementConfiguration(
        type="Wall",
        sub_type="Outside Wall",
        outside_cover="dry hang",
        build_method="blocks",
        build_method_isolation="extra cover",
        isolation_coverage="bright color",
        element_id="e1",
    )


@pytest.fixture
def session(blocks_wall, location, updater):
    return ElementSession(blocks_wall, location, updater)


@pytest.fixture
def layer_factory():
    return make_layers


@pytest.fixture
def updater_factory():
    """Build collaborators with a given failure mode."""
    return RecordingUpdater
