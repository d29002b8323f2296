"""
Population and infection reporting.

FieldStats keeps one Counter per species and formats population and
infection details for a Field. Counts are regenerated lazily from
Field.census() after reset().
"""

from typing import Dict, Optional

from .field import Field


class Counter:
    """Live and infected tally for one species"""

    def __init__(self, name: str):
        self.name = name
        self.count = 0
        self.infection_count = 0

    def increment(self, amount: int = 1):
        self.count += amount

    def increment_infections(self, amount: int = 1):
        self.infection_count += amount

    def reset(self):
        self.count = 0
        self.infection_count = 0


class FieldStats:
    """
    Per-species counters for one field.

    Lifecycle: reset() invalidates the counts; the next details call (or an
    explicit generate_counts()) rescans the field and marks them valid again.
    """

    def __init__(self, animal_species: Optional[set] = None):
        """
        Args:
            animal_species: Species IDs shown in infection details
                (None = every counted species)
        """
        self.counters: Dict[str, Counter] = {}
        self.counts_valid = True
        self._animal_species = animal_species

    def reset(self):
        """Invalidate counts (next query rescans)"""
        self.counts_valid = False
        for counter in self.counters.values():
            counter.reset()

    def _counter(self, species_id: str) -> Counter:
        counter = self.counters.get(species_id)
        if counter is None:
            counter = Counter(species_id)
            self.counters[species_id] = counter
        return counter

    def generate_counts(self, field: Field):
        """Rescan the field and refresh every counter"""
        self.reset()
        for species_id, (alive, infected) in field.census().items():
            counter = self._counter(species_id)
            counter.increment(alive)
            counter.increment_infections(infected)
        self.counts_valid = True

    def get_population_details(self, field: Field) -> str:
        """Return 'species: count' pairs for every counted species"""
        if not self.counts_valid:
            self.generate_counts(field)

        return " ".join(f"{c.name}: {c.count}" for c in self.counters.values())

    def get_infection_details(self, field: Field) -> str:
        """Return 'species: infected' pairs for animal species"""
        if not self.counts_valid:
            self.generate_counts(field)

        parts = [
            f"{c.name}: {c.infection_count}"
            for species_id, c in self.counters.items()
            if self._animal_species is None or species_id in self._animal_species
        ]
        return " ".join(parts)

    def as_dict(self) -> Dict[str, Dict[str, int]]:
        return {
            species_id: {'alive': c.count, 'infected': c.infection_count}
            for species_id, c in self.counters.items()
        }
