"""
Test population and infection reporting.
"""

import sys
from pathlib import Path

import pytest

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from wetland.entity import EntityArena
from wetland.field import Field
from wetland.rng import RandomSource
from wetland.stats import Counter, FieldStats
from wetland.tests.scenario import add


def make_field() -> Field:
    field = Field(4, 4, EntityArena(), RandomSource(0))
    add(field, 'fish', 0, 0, infected=True)
    add(field, 'fish', 0, 1)
    add(field, 'lizard', 1, 0)
    add(field, 'algae', 2, 2)
    return field


def test_counter():
    counter = Counter('fish')
    counter.increment()
    counter.increment(3)
    counter.increment_infections()

    assert (counter.count, counter.infection_count) == (4, 1)

    counter.reset()
    assert (counter.count, counter.infection_count) == (0, 0)


def test_generate_counts():
    field = make_field()
    stats = FieldStats()
    stats.generate_counts(field)

    assert stats.counts_valid
    assert stats.as_dict() == {
        'fish': {'alive': 2, 'infected': 1},
        'lizard': {'alive': 1, 'infected': 0},
        'algae': {'alive': 1, 'infected': 0},
    }


def test_details_regenerate_after_reset():
    field = make_field()
    stats = FieldStats(animal_species={'fish', 'lizard'})
    stats.reset()
    assert not stats.counts_valid

    population = stats.get_population_details(field)
    infection = stats.get_infection_details(field)

    print(f"  Population: {population}")
    print(f"  Infection:  {infection}")

    assert stats.counts_valid
    assert "fish: 2" in population
    assert "algae: 1" in population
    assert "fish: 1" in infection
    assert "algae" not in infection


def test_dead_not_counted():
    field = make_field()
    dead = add(field, 'lizard', 3, 3)
    dead.set_dead()

    stats = FieldStats()
    stats.generate_counts(field)

    assert stats.as_dict()['lizard']['alive'] == 1


def test_counters_reset_between_scans():
    field = make_field()
    stats = FieldStats()
    stats.generate_counts(field)
    stats.generate_counts(field)

    assert stats.as_dict()['fish']['alive'] == 2


def test_extinct_species_reported_as_zero():
    """A species seen once keeps its counter at 0 after dying out; census drops it"""
    field = make_field()
    stats = FieldStats(animal_species={'fish', 'lizard'})
    stats.generate_counts(field)

    for entity in field.all_entities():
        if entity.species_id == 'lizard':
            entity.set_dead()

    stats.reset()
    population = stats.get_population_details(field)
    census = field.census()

    assert 'lizard' not in census
    assert stats.as_dict()['lizard'] == {'alive': 0, 'infected': 0}
    assert "lizard: 0" in population
    for species_id, counts in stats.as_dict().items():
        assert (counts['alive'], counts['infected']) == census.get(species_id, (0, 0))
    print("[OK] Extinct lizard reported as 0")


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
