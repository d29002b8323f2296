"""
Behavior rules for wetland entities.

Two shared templates (animal, plant) parameterised by each species' data
table. Rules read the current field for lookups and record every survivor,
newborn and regrowth into the next field. Death is always a state change on
the entity, never an exception.
"""

from typing import List, Optional

from .entity import Entity
from .data_types import Species, StepContext, TimeOfDay, Weather
from .field import Field
from .spawning import spawn_offspring
from .spatial import Location


# ============================================================================
# Dispatch
# ============================================================================

def update_entity_behavior(entity: Entity, context: StepContext, current: Field, next_field: Field):
    """
    Run one step of the entity's species rule.

    Safe to call on dead entities (no-op), which happens when an entity
    was eaten earlier in the same step.

    Args:
        entity: Entity to update
        context: Clock, random source and species tables for this step
        current: Field at the start of the step (lookups only)
        next_field: Field being built for the next generation
    """
    species = context.species_of(entity)

    if species.is_animal:
        animal_act(entity, species, context, current, next_field)
    else:
        plant_act(entity, species, context, current, next_field)


# ============================================================================
# Animal Template
# ============================================================================

def animal_act(entity: Entity, species: Species, context: StepContext, current: Field, next_field: Field):
    """
    Age, hunger, then (in the active phase) breed and move; finally spread disease.

    Outside its active phase the animal stays where it is but still ages
    and hungers.
    """
    if not entity.alive:
        return

    if increment_age(entity, species):
        return

    if increment_hunger(entity, context):
        return

    # Free cells are judged against the next field so siblings that already
    # acted this step keep their claimed cells.
    free_locations = next_field.free_adjacent(entity.location)

    if context.time_of_day is species.active_phase:
        if free_locations:
            give_birth(entity, species, context, current, next_field, free_locations)

        next_location = find_food(entity, species, context, current, next_field)
        if next_location is None and free_locations:
            next_location = free_locations.pop(0)

        if next_location is None:
            # Overcrowding
            entity.set_dead()
            return

        entity.location = next_location
        next_field.place(entity, next_location)
    else:
        next_field.place(entity, entity.location)

    infect_neighbours(entity, context, current)


def increment_age(entity: Entity, species: Species) -> bool:
    """
    Advance age by one step.

    Returns:
        True if the entity died of old age
    """
    entity.age += 1
    if entity.age > species.max_age:
        entity.set_dead()
        return True
    return False


def increment_hunger(entity: Entity, context: StepContext) -> bool:
    """
    Burn one step of food (more if infected).

    Returns:
        True if the entity starved
    """
    config = context.config
    entity.food_level -= config.infected_hunger_cost if entity.infected else config.hunger_cost

    if entity.food_level <= 0:
        entity.set_dead()
        return True
    return False


def find_food(
    entity: Entity,
    species: Species,
    context: StepContext,
    current: Field,
    next_field: Field
) -> Optional[Location]:
    """
    Eat the first living diet item found in shuffled adjacency.

    Animal prey is killed in place. Plant food runs the plant's growth
    routine out of band with the eaten indicator set, which may make it die
    and regrow into the next field. Either way the eater's food level is
    reset to the diet's food value for that species and it moves onto the
    food's cell.

    Fog suppresses foraging for fog-sensitive species (predators); the
    adjacency is still drawn so the random sequence does not depend on the
    weather.

    Returns:
        Location of the food eaten, or None
    """
    adjacent = current.adjacent(entity.location)

    if species.fog_sensitive and context.weather is Weather.FOGGY:
        return None

    for loc in adjacent:
        food = current.entity_at(loc)
        if food is None or not food.alive:
            continue

        food_value = species.diet.get(food.species_id)
        if food_value is None:
            continue

        food_species = context.species_of(food)
        if food_species.is_plant:
            grow_plant(food, food_species, context, next_field, eaten=True)
        else:
            food.set_dead()

        entity.food_level = food_value
        return loc

    return None


def can_breed(entity: Entity, species: Species, current: Field) -> bool:
    """
    Check breeding eligibility.

    Female, at or above breeding age, with a living male of the same
    species adjacent in the pre-step field.
    """
    if not entity.is_female or entity.age < species.breeding_age:
        return False

    for loc in current.adjacent(entity.location):
        mate = current.entity_at(loc)
        if (mate is not None and mate.alive and mate.is_male
                and mate.species_id == entity.species_id):
            return True

    return False


def breed(species: Species, context: StepContext) -> int:
    """
    Draw a litter size.

    Returns:
        Number of births in [1, max_litter_size] with the species' breeding
        probability, else 0
    """
    rng = context.rng
    if rng.uniform_double() <= species.breeding_probability and species.max_litter_size > 0:
        return rng.uniform_int(species.max_litter_size) + 1
    return 0


def give_birth(
    entity: Entity,
    species: Species,
    context: StepContext,
    current: Field,
    next_field: Field,
    free_locations: List[Location]
) -> int:
    """
    Place newborns into free cells of the next field.

    Each birth consumes the head of free_locations, the same list the parent
    later moves into, so a large litter can leave the parent nowhere to go.

    Returns:
        Number of newborns placed
    """
    if not can_breed(entity, species, current):
        return 0

    births = breed(species, context)
    placed = 0

    while placed < births and free_locations:
        loc = free_locations.pop(0)
        spawn_offspring(next_field, species, loc, context.rng)
        placed += 1

    return placed


def infect_neighbours(entity: Entity, context: StepContext, current: Field) -> int:
    """
    Spread disease to adjacent living, uninfected animals.

    Neighbours are looked up in the current field but are the same records
    carried into the next generation, so the infection persists and may be
    seen by a neighbour that has not yet acted this step.

    Returns:
        Number of newly infected neighbours
    """
    infected = 0
    probability = context.config.infection_probability

    for loc in current.adjacent(entity.location):
        other = current.entity_at(loc)
        if other is None or not other.alive or other.infected:
            continue
        if not context.species_of(other).is_animal:
            continue

        if context.rng.uniform_double() <= probability:
            other.infected = True
            infected += 1

    return infected


# ============================================================================
# Plant Template
# ============================================================================

def plant_act(entity: Entity, species: Species, context: StepContext, current: Field, next_field: Field):
    """
    Grow in sunny daytime, then stay in place if still alive.

    Plants never move.
    """
    if not entity.alive:
        return

    if context.time_of_day is TimeOfDay.DAY and context.weather is Weather.SUNNY:
        grow_plant(entity, species, context, next_field, eaten=False)

    if entity.alive:
        next_field.place(entity, entity.location)


def grow_plant(plant: Entity, species: Species, context: StepContext, next_field: Field, eaten: bool) -> bool:
    """
    Age a plant by one step; past max age it regrows and dies.

    Regrowth places one age-0 plant of the same species into every free
    adjacent cell of the next field. With the stock rules only the plant's
    own eaten flag (never set) is consulted, so the eaten indicator from a
    grazer just costs one extra step of age. SimulationConfig.honor_eaten_flag
    records the indicator on the plant instead, making an eaten plant die and
    regrow at once.

    Returns:
        True if the plant died (and regrew)
    """
    plant.age += 1

    if eaten and context.config.honor_eaten_flag:
        plant.eaten = True

    if plant.age > species.max_age or plant.eaten:
        for loc in next_field.free_adjacent(plant.location):
            spawn_offspring(next_field, species, loc, context.rng)
        plant.set_dead()
        return True

    return False
