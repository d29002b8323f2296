"""
Data types mirroring YAML schema structures.

These dataclasses are populated by loader.py from YAML files.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Optional, TYPE_CHECKING
from enum import Enum

from .constants import (
    DAY_LENGTH_STEPS,
    WEATHER_PERIOD_STEPS,
    HUNGER_COST,
    INFECTED_HUNGER_COST,
    INFECTION_PROBABILITY,
    KEYSTONE_SPECIES,
)

if TYPE_CHECKING:
    from .entity import EntityArena
    from .rng import RandomSource


# ============================================================================
# Enumerations
# ============================================================================

class TimeOfDay(Enum):
    """Global day/night phase"""
    DAY = "day"
    NIGHT = "night"

    def toggled(self) -> 'TimeOfDay':
        return TimeOfDay.NIGHT if self is TimeOfDay.DAY else TimeOfDay.DAY


class Weather(Enum):
    """Global weather state, redrawn once per full day"""
    SUNNY = "sunny"
    RAINY = "rainy"
    FOGGY = "foggy"


# Weather index drawn by uniform_int(3) at each redraw
WEATHER_DRAW_ORDER = (Weather.RAINY, Weather.FOGGY, Weather.SUNNY)


class Gender(Enum):
    MALE = "male"
    FEMALE = "female"


class SpeciesKind(Enum):
    """Capability set of a species"""
    ANIMAL = "animal"
    PLANT = "plant"


# ============================================================================
# Species Definition
# ============================================================================

@dataclass
class Species:
    """
    Complete species definition.

    One table per species drives the shared animal/plant rules in
    behavior.py. Plant species leave the animal-only fields at defaults.
    """
    species_id: str
    name: str
    kind: SpeciesKind
    max_age: int
    creation_probability: float = 0.0
    active_phase: Optional[TimeOfDay] = None  # Animals only
    breeding_age: int = 0
    breeding_probability: float = 0.0
    max_litter_size: int = 0
    diet: Dict[str, int] = field(default_factory=dict)  # {prey species_id: food value}
    fog_sensitive: bool = False  # Fog suppresses foraging
    description: Optional[str] = None

    @property
    def is_animal(self) -> bool:
        return self.kind is SpeciesKind.ANIMAL

    @property
    def is_plant(self) -> bool:
        return self.kind is SpeciesKind.PLANT

    @property
    def max_food_value(self) -> int:
        """Largest food value in the diet (0 for plants)"""
        return max(self.diet.values(), default=0)


# ============================================================================
# World Definition
# ============================================================================

@dataclass
class WorldParameters:
    """Grid dimensions and seed"""
    depth: int
    width: int
    seed: Optional[int] = None


@dataclass
class SimulationConfig:
    """Simulation global rules"""
    day_length_steps: int = DAY_LENGTH_STEPS
    weather_period_steps: int = WEATHER_PERIOD_STEPS
    infection_probability: float = INFECTION_PROBABILITY
    hunger_cost: int = HUNGER_COST
    infected_hunger_cost: int = INFECTED_HUNGER_COST
    keystone_species: List[str] = field(default_factory=lambda: list(KEYSTONE_SPECIES))
    # False reproduces the stock rules: the eaten indicator passed by a grazer
    # is ignored and only the plant's own (never set) flag is consulted.
    honor_eaten_flag: bool = False


@dataclass
class World:
    """World configuration"""
    world_id: str
    name: str
    parameters: WorldParameters
    simulation: SimulationConfig
    species: List[str] = field(default_factory=list)  # Population trial order
    description: Optional[str] = None


# ============================================================================
# Step Context
# ============================================================================

@dataclass
class StepContext:
    """
    Read-mostly view of global state handed to behavior rules.

    Constructed once per step by the simulation so rules see the clock that
    was current when the step began.
    """
    time_of_day: TimeOfDay
    weather: Weather
    rng: 'RandomSource'
    arena: 'EntityArena'
    species_registry: Dict[str, Species]
    config: SimulationConfig

    def species_of(self, entity) -> Species:
        return self.species_registry[entity.species_id]
