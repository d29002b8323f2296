"""
Entity runtime representation.

Entities are spawned from species definitions and live in an EntityArena
keyed by a stable integer id. Fields store ids, never copies, so a survivor
carried into the next generation is the same record: an infection or move
written through any holder is visible to every other holder.
"""

from dataclasses import dataclass
from typing import Dict, Iterator, Optional

from .data_types import Gender
from .spatial import Location


@dataclass(eq=False)
class Entity:
    """
    Runtime entity in simulation.

    Attributes:
        entity_id: Stable arena key (never reused within a run)
        species_id: Species definition ID (e.g., "crocodile")
        location: Current cell, None once dead
        alive: Whether the entity is still alive
        age: Steps lived (plants age only in sunny daytime)
        gender: Animals only
        food_level: Hunger budget, animals only
        infected: Disease flag, animals only
        eaten: Plant consumption flag (never set by the stock rules)
    """
    entity_id: int
    species_id: str
    location: Optional[Location]
    alive: bool = True
    age: int = 0
    gender: Optional[Gender] = None
    food_level: int = 0
    infected: bool = False
    eaten: bool = False

    @property
    def is_male(self) -> bool:
        return self.gender is Gender.MALE

    @property
    def is_female(self) -> bool:
        return self.gender is Gender.FEMALE

    def set_dead(self):
        """Mark entity dead and release its location"""
        self.alive = False
        self.location = None

    def to_dict(self) -> dict:
        """
        Serialize entity to JSON-compatible dict.

        Returns:
            Dict with all entity fields
        """
        return {
            'entity_id': self.entity_id,
            'species_id': self.species_id,
            'location': list(self.location) if self.location is not None else None,
            'alive': self.alive,
            'age': self.age,
            'gender': self.gender.value if self.gender is not None else None,
            'food_level': self.food_level,
            'infected': self.infected,
            'eaten': self.eaten,
        }

    def __repr__(self) -> str:
        return (f"{self.species_id}{{id={self.entity_id}, age={self.age}, "
                f"alive={self.alive}, location={self.location}, "
                f"food_level={self.food_level}, infected={self.infected}}}")


class EntityArena:
    """
    Owner of every entity created during a run.

    Ids are handed out sequentially. Dead entities stay in the arena (a
    Field may still reference one until the next generation replaces it);
    prune() drops records no live Field needs any more.
    """

    def __init__(self):
        self._entities: Dict[int, Entity] = {}
        self._next_id: int = 0

    def create(self, species_id: str, location: Location, **fields) -> Entity:
        """
        Create and register a new entity.

        Args:
            species_id: Species definition ID
            location: Initial cell
            **fields: Optional Entity fields (age, gender, food_level, ...)

        Returns:
            New Entity with a fresh id
        """
        entity = Entity(entity_id=self._next_id, species_id=species_id, location=location, **fields)
        self._entities[entity.entity_id] = entity
        self._next_id += 1
        return entity

    def get(self, entity_id: int) -> Entity:
        return self._entities[entity_id]

    def prune(self, keep_ids) -> int:
        """
        Drop entities whose ids are not in keep_ids.

        Returns:
            Number of records removed
        """
        keep = set(keep_ids)
        stale = [eid for eid in self._entities if eid not in keep]
        for eid in stale:
            del self._entities[eid]
        return len(stale)

    def clear(self):
        self._entities.clear()

    def __contains__(self, entity_id: int) -> bool:
        return entity_id in self._entities

    def __len__(self) -> int:
        return len(self._entities)

    def __iter__(self) -> Iterator[Entity]:
        return iter(self._entities.values())
