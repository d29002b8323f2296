"""
Test data loading: YAML -> dataclasses with schema validation.

Verifies the shipped data pack loads with the expected species constants,
and that missing files, schema violations and dangling references raise
DataLoadError.
"""

import sys
from pathlib import Path

import pytest
import yaml

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from wetland.constants import DEFAULT_DATA_ROOT, KEYSTONE_SPECIES
from wetland.data_types import SpeciesKind, TimeOfDay
from wetland.loader import (
    DataLoadError, load_species, load_world, load_all_data, parse_species
)


SCHEMA_DIR = DEFAULT_DATA_ROOT / "schemas"


def test_load_world():
    world = load_world(DEFAULT_DATA_ROOT / "world" / "wetland.yaml", SCHEMA_DIR)

    print(f"[OK] Loaded world: {world.name} ({world.world_id})")
    print(f"  Grid: {world.parameters.depth}x{world.parameters.width}, seed={world.parameters.seed}")

    assert world.parameters.depth == 80
    assert world.parameters.width == 120
    assert world.simulation.day_length_steps == 10
    assert world.simulation.weather_period_steps == 20
    assert world.simulation.infection_probability == pytest.approx(0.10)
    assert world.simulation.keystone_species == KEYSTONE_SPECIES
    assert world.simulation.honor_eaten_flag is False
    assert world.species[:5] == ['crocodile', 'bird', 'snake', 'fish', 'lizard']


def test_load_all_data():
    data = load_all_data(DEFAULT_DATA_ROOT)
    species = data['species']

    print(f"[OK] Loaded {len(species)} species: {', '.join(species)}")

    assert list(species) == data['world'].species, "Registry not in trial order"
    assert len(species) == 8
    assert sum(1 for sp in species.values() if sp.is_plant) == 3


@pytest.mark.parametrize(
    "species_id, phase, breeding_age, max_age, probability, litter, fog",
    [
        pytest.param('crocodile', TimeOfDay.NIGHT, 3, 100, 0.95, 20, True, id="crocodile"),
        pytest.param('snake', TimeOfDay.DAY, 3, 100, 0.95, 10, True, id="snake"),
        pytest.param('fish', TimeOfDay.NIGHT, 2, 70, 0.98, 15, False, id="fish"),
        pytest.param('lizard', TimeOfDay.DAY, 2, 70, 0.98, 15, False, id="lizard"),
        pytest.param('bird', TimeOfDay.DAY, 2, 70, 0.98, 15, False, id="bird"),
    ],
)
def test_animal_constants(species_id, phase, breeding_age, max_age, probability, litter, fog):
    species = load_species(DEFAULT_DATA_ROOT / "species" / f"{species_id}.yaml", SCHEMA_DIR)

    assert species.kind is SpeciesKind.ANIMAL
    assert species.active_phase is phase
    assert species.breeding_age == breeding_age
    assert species.max_age == max_age
    assert species.breeding_probability == pytest.approx(probability)
    assert species.max_litter_size == litter
    assert species.fog_sensitive is fog


def test_diets():
    species = load_all_data(DEFAULT_DATA_ROOT)['species']

    assert species['crocodile'].diet == {'bird': 20, 'fish': 80}
    assert species['snake'].diet == {'bird': 80, 'lizard': 60}
    assert species['fish'].diet == {'algae': 100}
    assert species['lizard'].diet == {'leaf': 100}
    assert species['crocodile'].max_food_value == 80


def test_plant_constants():
    species = load_all_data(DEFAULT_DATA_ROOT)['species']

    assert species['fruit'].max_age == 50
    assert species['algae'].max_age == 30
    assert species['leaf'].max_age == 30
    assert species['leaf'].active_phase is None
    assert species['leaf'].diet == {}


def test_missing_file():
    with pytest.raises(DataLoadError, match="File not found"):
        load_species(DEFAULT_DATA_ROOT / "species" / "heron.yaml")


def test_schema_violation(tmp_path):
    """Out-of-range probability is rejected by the species schema"""
    bad = {
        'species_id': 'heron',
        'name': 'Heron',
        'kind': 'animal',
        'max_age': 40,
        'active_phase': 'day',
        'breeding_probability': 1.5,
        'diet': {'fish': 30},
    }
    path = tmp_path / "heron.yaml"
    path.write_text(yaml.safe_dump(bad))

    with pytest.raises(DataLoadError, match="Validation error"):
        load_species(path, SCHEMA_DIR)


def test_animal_without_phase_rejected(tmp_path):
    """Even without schemas an animal must declare when it is active"""
    path = tmp_path / "heron.yaml"
    path.write_text(yaml.safe_dump({
        'species_id': 'heron', 'name': 'Heron', 'kind': 'animal', 'max_age': 40,
    }))

    with pytest.raises(DataLoadError, match="active_phase"):
        load_species(path)


def test_parse_species_bad_kind():
    with pytest.raises(DataLoadError):
        parse_species({'species_id': 'x', 'name': 'X', 'kind': 'fungus', 'max_age': 3})


def copy_pack(tmp_path: Path) -> Path:
    """Copy the shipped data pack (world + species, no schemas) into tmp_path"""
    root = tmp_path / "data"
    for sub in ("world", "species"):
        (root / sub).mkdir(parents=True)
        for source in (DEFAULT_DATA_ROOT / sub).glob("*.yaml"):
            (root / sub / source.name).write_text(source.read_text())
    return root


def test_unknown_diet_reference(tmp_path):
    root = copy_pack(tmp_path)
    lizard_path = root / "species" / "lizard.yaml"
    lizard = yaml.safe_load(lizard_path.read_text())
    lizard['diet']['moss'] = 40
    lizard_path.write_text(yaml.safe_dump(lizard))

    with pytest.raises(DataLoadError, match="moss"):
        load_all_data(root)


def test_unknown_world_species(tmp_path):
    root = copy_pack(tmp_path)
    world_path = root / "world" / "wetland.yaml"
    world = yaml.safe_load(world_path.read_text())
    world['species'].append('heron')
    world_path.write_text(yaml.safe_dump(world))

    with pytest.raises(DataLoadError, match="heron"):
        load_all_data(root)


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
