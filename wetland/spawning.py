"""
Entity spawning system.

Creates entities for the initial population and for offspring/regrowth
during a step. All draws go through the injected RandomSource in a fixed
order so runs are reproducible from their seed.
"""

from typing import Dict, List

from .entity import Entity, EntityArena
from .data_types import Gender, Species
from .field import Field
from .rng import RandomSource
from .spatial import Location


def spawn_entity(
    arena: EntityArena,
    species: Species,
    location: Location,
    rng: RandomSource,
    random_age: bool = False
) -> Entity:
    """
    Create one entity of the given species (not yet placed in any field).

    Draw order for animals: gender, age (only if random_age), food level.
    Plants draw only their age, and only if random_age.

    Args:
        arena: Entity store to register with
        species: Species definition
        location: Cell the entity will occupy
        rng: Shared random source
        random_age: True at population time, False for newborns (age 0)

    Returns:
        New Entity
    """
    if species.is_animal:
        gender = Gender.MALE if rng.uniform_int(2) == 0 else Gender.FEMALE
        age = rng.uniform_int(species.max_age) if random_age else 0
        max_food = species.max_food_value
        food_level = rng.uniform_int(max_food) if max_food > 0 else 0

        return arena.create(
            species.species_id,
            location,
            age=age,
            gender=gender,
            food_level=food_level,
        )

    age = rng.uniform_int(species.max_age) if random_age else 0
    return arena.create(species.species_id, location, age=age)


def spawn_offspring(field: Field, species: Species, location: Location, rng: RandomSource) -> Entity:
    """
    Create a newborn (age 0, uninfected) and place it into field at location.

    Returns:
        The newborn entity
    """
    young = spawn_entity(field.arena, species, location, rng, random_age=False)
    field.place(young, location)
    return young


def populate(
    field: Field,
    species_order: List[str],
    species_registry: Dict[str, Species],
    rng: RandomSource
) -> int:
    """
    Fill an empty field with a random initial population.

    Each cell is visited row by row. For every cell the species are tried in
    species_order, each with a fresh uniform draw against its creation
    probability; the first success claims the cell and later species are not
    tried. Cells where no draw succeeds stay empty.

    Args:
        field: Field to populate (cleared first)
        species_order: Species IDs in trial order
        species_registry: Dict of species_id -> Species
        rng: Shared random source

    Returns:
        Number of entities created
    """
    field.clear()
    created = 0

    for row in range(field.depth):
        for col in range(field.width):
            for species_id in species_order:
                species = species_registry[species_id]
                if rng.uniform_double() <= species.creation_probability:
                    location = Location(row, col)
                    entity = spawn_entity(field.arena, species, location, rng, random_age=True)
                    field.place(entity, location)
                    created += 1
                    break

    return created
