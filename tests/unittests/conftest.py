"""Contains configurations for the test run."""

import json
from pathlib import Path
from typing import Any

import pytest

from letsgodex.models import PokemonTypeData, TypeDamageRelations


@pytest.fixture(scope="session")
def resources_folder() -> Path:
    """Returns the path to the test resources folder."""
    return Path(__file__).parents[1] / "resources"


@pytest.fixture(scope="session")
def load_resource(resources_folder: Path):
    """Returns a loader for JSON payloads stored in the resources folder."""

    def _load(name: str) -> Any:
        return json.loads((resources_folder / name).read_text(encoding="utf-8"))

    return _load


@pytest.fixture(scope="session")
def type_data(load_resource) -> dict[str, PokemonTypeData]:
    """Fire, water, and ground ``/type`` payloads keyed by name."""
    return {
        name: PokemonTypeData.model_validate(load_resource(f"type_{name}.json"))
        for name in ("fire", "water", "ground")
    }


@pytest.fixture(scope="session")
def relations_by_type(type_data: dict[str, PokemonTypeData]) -> dict[str, TypeDamageRelations]:
    """Damage relations of the fixture types keyed by name."""
    return {name: data.damage_relations for name, data in type_data.items()}
