"""
Field: one generation's grid state.

Maps each occupied Location to the id of at most one entity and keeps the
insertion order in which entities were placed. The insertion order drives
the next step's update order and the early-exit viability scan.
"""

from typing import Dict, Iterable, List, Optional, Tuple

from .entity import Entity, EntityArena
from .rng import RandomSource
from .spatial import Location, in_bounds, neighbours


class Field:
    """
    Rectangular grid of cells, each holding at most one entity.

    Placement is last-write-wins: placing into an occupied cell evicts the
    previous occupant from the active-entity order. Adjacency queries are
    reshuffled on every call with the shared random source, so callers that
    take the first match get an unbiased neighbour.
    """

    def __init__(self, depth: int, width: int, arena: EntityArena, rng: RandomSource):
        """
        Args:
            depth: Number of rows (positive)
            width: Number of columns (positive)
            arena: Entity store resolving ids to records
            rng: Shared random source used for adjacency shuffles
        """
        self.depth = depth
        self.width = width
        self.arena = arena
        self.rng = rng

        self._cells: Dict[Location, int] = {}
        # Ordered set of placed ids (dict preserves insertion order)
        self._order: Dict[int, None] = {}

    def spawn_empty(self) -> 'Field':
        """Return an empty field with the same dimensions and collaborators"""
        return Field(self.depth, self.width, self.arena, self.rng)

    # ------------------------------------------------------------------
    # Placement and lookup
    # ------------------------------------------------------------------

    def place(self, entity: Entity, location: Location):
        """
        Place an entity at the given location.

        Any previous occupant of the cell is dropped from the active order.
        The entity's own location attribute is not touched.

        Raises:
            ValueError: If location lies outside the grid
        """
        if location is None or not in_bounds(location.row, location.col, self.depth, self.width):
            raise ValueError(f"Location {location} outside {self.depth}x{self.width} field")

        previous = self._cells.get(location)
        if previous is not None:
            self._order.pop(previous, None)

        self._cells[location] = entity.entity_id
        self._order[entity.entity_id] = None

    def entity_at(self, location: Location) -> Optional[Entity]:
        """Return the entity at location, or None if the cell is empty"""
        entity_id = self._cells.get(location)
        if entity_id is None:
            return None
        return self.arena.get(entity_id)

    def clear(self):
        """Empty the field"""
        self._cells.clear()
        self._order.clear()

    # ------------------------------------------------------------------
    # Adjacency
    # ------------------------------------------------------------------

    def adjacent(self, location: Optional[Location]) -> List[Location]:
        """
        Return a shuffled list of in-bounds locations adjacent to the given one.

        The list never includes the location itself. A None location (dead
        entity) has no neighbours and consumes no random draws.
        """
        if location is None:
            return []

        locations = list(neighbours(location, self.depth, self.width))
        self.rng.shuffle(locations)
        return locations

    def free_adjacent(self, location: Optional[Location]) -> List[Location]:
        """
        Return the shuffled adjacent locations that are empty or hold a dead entity.
        """
        free = []
        for loc in self.adjacent(location):
            occupant = self.entity_at(loc)
            if occupant is None or not occupant.alive:
                free.append(loc)
        return free

    # ------------------------------------------------------------------
    # Whole-population queries
    # ------------------------------------------------------------------

    def all_entities(self) -> List[Entity]:
        """Entities in placement order (snapshot list, safe to iterate while placing elsewhere)"""
        return [self.arena.get(eid) for eid in self._order]

    def entity_ids(self) -> List[int]:
        return list(self._order)

    def referenced_ids(self) -> set:
        """Ids reachable from either the cell mapping or the active order"""
        return set(self._order) | set(self._cells.values())

    def is_viable(self, keystone_species: Iterable[str]) -> bool:
        """
        Check that every keystone species has at least one living member.

        Scans the active order and stops as soon as all are found.
        """
        missing = set(keystone_species)
        if not missing:
            return True

        for eid in self._order:
            entity = self.arena.get(eid)
            if entity.alive and entity.species_id in missing:
                missing.discard(entity.species_id)
                if not missing:
                    return True

        return False

    def census(self) -> Dict[str, Tuple[int, int]]:
        """
        Count living and infected entities per species over every occupied cell.

        Returns:
            {species_id: (alive_count, infected_count)}
        """
        counts: Dict[str, List[int]] = {}
        for eid in self._cells.values():
            entity = self.arena.get(eid)
            if not entity.alive:
                continue
            tally = counts.setdefault(entity.species_id, [0, 0])
            tally[0] += 1
            if entity.infected:
                tally[1] += 1

        return {species_id: (alive, infected) for species_id, (alive, infected) in counts.items()}

    def __len__(self) -> int:
        return len(self._order)

    def __repr__(self) -> str:
        return f"Field({self.depth}x{self.width}, entities={len(self._order)})"
