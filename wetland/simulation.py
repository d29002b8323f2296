"""
Wetland simulation kernel.

Main simulation class that owns the current Field, the step counter and the
day/night and weather clocks, and drives one generational transition per
step.
"""

import time
from pathlib import Path
from typing import Callable, Dict, List, Optional

from .entity import EntityArena
from .data_types import (
    Species, StepContext, TimeOfDay, Weather, World, WorldParameters, SimulationConfig,
    WEATHER_DRAW_ORDER,
)
from .field import Field
from .loader import load_all_data
from .behavior import update_entity_behavior
from .rng import RandomSource, make_seed
from .spawning import populate as populate_field
from .stats import FieldStats
from .constants import (
    DEFAULT_DATA_ROOT,
    DEFAULT_DEPTH,
    DEFAULT_WIDTH,
    LONG_RUN_STEPS,
    TICK_TIME_WINDOW,
)


# Observer signature: (step, field) -> None
StepObserver = Callable[[int, Field], None]


class WetlandSimulation:
    """
    Main simulation class for the wetland ecosystem.

    Each step builds an empty next-generation Field, runs every entity of
    the current Field in placement order against (current, next), advances
    the clocks and swaps the next Field in. Entities are shared by id through
    the arena, so survivors are the same records from step to step.
    """

    def __init__(
        self,
        data_root: Optional[Path] = None,
        schema_dir: Optional[Path] = None,
        world: Optional[World] = None,
        species_registry: Optional[Dict[str, Species]] = None,
        depth: Optional[int] = None,
        width: Optional[int] = None,
        seed: Optional[int] = None,
        rng: Optional[RandomSource] = None,
        populate: bool = True,
        verbose: bool = True
    ):
        """
        Initialize simulation from data pack.

        Args:
            data_root: Path to data directory (default: repository data pack)
            schema_dir: Optional path to JSON schemas
            world: Pre-built world config (skips YAML loading with species_registry)
            species_registry: Pre-built species tables, in population trial order
            depth: Grid rows override (non-positive falls back to default)
            width: Grid columns override (non-positive falls back to default)
            seed: Seed override (default: world seed)
            rng: Injected random source (overrides seed)
            populate: Fill the grid at reset (False = start empty, for tests)
            verbose: Print clock changes and initialisation lines
        """
        self.verbose = verbose

        if world is None or species_registry is None:
            self._log("Loading data pack...")
            data = load_all_data(data_root or DEFAULT_DATA_ROOT, schema_dir)
            world = world or data['world']
            species_registry = species_registry or data['species']

        self.world: World = world
        self.species_registry: Dict[str, Species] = species_registry
        self.config: SimulationConfig = world.simulation
        self.species_order: List[str] = list(world.species) or list(species_registry)

        depth = world.parameters.depth if depth is None else depth
        width = world.parameters.width if width is None else width
        if depth <= 0 or width <= 0:
            print(f"[WARN] The dimensions must be > zero (got {depth}x{width}), "
                  f"using defaults {DEFAULT_DEPTH}x{DEFAULT_WIDTH}")
            depth, width = DEFAULT_DEPTH, DEFAULT_WIDTH

        if rng is None:
            seed = world.parameters.seed if seed is None else seed
            rng = RandomSource(make_seed(seed, world.world_id) if seed is not None else None)
        self.rng = rng

        # Simulation state
        self.arena = EntityArena()
        self.field = Field(depth, width, self.arena, self.rng)
        self.step: int = 0
        self.time_of_day: TimeOfDay = TimeOfDay.DAY
        self.weather: Weather = Weather.SUNNY
        self.populate_on_reset = populate

        # Reporting collaborators
        self.stats = FieldStats({sid for sid, sp in species_registry.items() if sp.is_animal})
        self._observers: List[StepObserver] = []

        # Performance metrics
        self._tick_times: List[float] = []
        self._tick_time_window: int = TICK_TIME_WINDOW  # Rolling average window

        self.reset()

        self._log(f"[OK] Simulation initialized: {len(self.field)} entities, "
                  f"grid={depth}x{width}, seed={getattr(self.rng, 'seed', None)}")

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def reset(self):
        """Restart at step 0 with fresh clocks and (optionally) a new random population"""
        self.step = 0
        self.time_of_day = TimeOfDay.DAY
        self.weather = Weather.SUNNY
        self.arena.clear()
        self.field = self.field.spawn_empty()

        if self.populate_on_reset:
            populate_field(self.field, self.species_order, self.species_registry, self.rng)

        self._tick_times.clear()
        self._notify_observers()

    def add_observer(self, observer: StepObserver):
        """Register a view callback invoked with (step, field) at reset and after each step"""
        self._observers.append(observer)

    def is_viable(self) -> bool:
        return self.field.is_viable(self.config.keystone_species)

    # ------------------------------------------------------------------
    # Run loop
    # ------------------------------------------------------------------

    def run_long_simulation(self) -> int:
        """Run a long simulation (500 steps, stopping early if not viable)"""
        return self.simulate(LONG_RUN_STEPS)

    def simulate(self, num_steps: int, delay_ms: int = 0) -> int:
        """
        Run up to num_steps steps, stopping as soon as the field is not viable.

        Viability is checked before every step, so a field that starts
        without every keystone species runs zero steps.

        Args:
            num_steps: Maximum steps to run
            delay_ms: Optional pause between steps (for live views)

        Returns:
            Number of steps actually executed
        """
        self.report_stats()

        executed = 0
        for _ in range(num_steps):
            if not self.is_viable():
                break

            self.simulate_one_step()
            executed += 1

            if delay_ms > 0:
                time.sleep(delay_ms / 1000.0)

        return executed

    def simulate_one_step(self):
        """
        Advance the whole population by one generation.

        Entities are processed in the current field's placement order. Dead
        entities are still visited; their rule is a no-op.
        """
        tick_start = time.perf_counter()

        context = self._make_context()
        next_field = self.field.spawn_empty()

        for entity in self.field.all_entities():
            update_entity_behavior(entity, context, self.field, next_field)

        self.step += 1
        self._advance_clocks()

        # Replace the old state with the new one
        self.field = next_field
        self.arena.prune(next_field.referenced_ids())

        self._record_tick_time(time.perf_counter() - tick_start)

        self.report_stats()
        self._notify_observers()

    def _make_context(self) -> StepContext:
        return StepContext(
            time_of_day=self.time_of_day,
            weather=self.weather,
            rng=self.rng,
            arena=self.arena,
            species_registry=self.species_registry,
            config=self.config
        )

    def _advance_clocks(self):
        """Toggle day/night and redraw weather on their periods"""
        if self.step % self.config.day_length_steps == 0:
            self.time_of_day = self.time_of_day.toggled()
            self._log(f"It is now {self.time_of_day.value}")

        if self.step % self.config.weather_period_steps == 0:
            self.weather = WEATHER_DRAW_ORDER[self.rng.uniform_int(len(WEATHER_DRAW_ORDER))]
            self._log(f"The weather today is {self.weather.value}")

    # ------------------------------------------------------------------
    # Reporting
    # ------------------------------------------------------------------

    def report_stats(self):
        """Refresh per-species counters for the current field"""
        self.stats.reset()
        self.stats.generate_counts(self.field)

    def _notify_observers(self):
        for observer in self._observers:
            observer(self.step, self.field)

    def _record_tick_time(self, elapsed: float):
        """Record tick time for rolling average"""
        self._tick_times.append(elapsed)
        if len(self._tick_times) > self._tick_time_window:
            self._tick_times.pop(0)

    def get_tick_stats(self) -> dict:
        """
        Get current step statistics.

        Returns:
            Dict with tick_count, entity_count, clocks, population and timing
        """
        avg_time = sum(self._tick_times) / len(self._tick_times) if self._tick_times else 0.0
        last_time = self._tick_times[-1] if self._tick_times else 0.0

        return {
            'tick_count': self.step,
            'entity_count': len(self.field),
            'time_of_day': self.time_of_day.value,
            'weather': self.weather.value,
            'viable': self.is_viable(),
            'population': self.stats.as_dict(),
            'avg_tick_time_ms': avg_time * 1000.0,
            'last_tick_time_ms': last_time * 1000.0,
        }

    def get_snapshot(self) -> dict:
        """
        Get JSON-compatible snapshot of the current generation.

        Returns:
            Dict with step, clocks, grid size and every placed entity
        """
        return {
            'step': self.step,
            'time_of_day': self.time_of_day.value,
            'weather': self.weather.value,
            'depth': self.field.depth,
            'width': self.field.width,
            'entities': [e.to_dict() for e in self.field.all_entities()]
        }

    def print_tick_summary(self):
        """Print one-line summary of the current step"""
        stats = self.get_tick_stats()
        print(f"Step {stats['tick_count']:5d} | "
              f"{stats['time_of_day']:5s} {stats['weather']:5s} | "
              f"Entities: {stats['entity_count']:5d} | "
              f"Avg: {stats['avg_tick_time_ms']:6.2f} ms | "
              f"{self.stats.get_population_details(self.field)}")

    def print_infection_summary(self):
        print(f"Infected | {self.stats.get_infection_details(self.field)}")

    def _log(self, message: str):
        if self.verbose:
            print(message)


def make_world(
    depth: int,
    width: int,
    species: List[str],
    seed: Optional[int] = None,
    world_id: str = "wetland-custom",
    **simulation_overrides
) -> World:
    """
    Build a World in code (tests and scripted scenarios).

    Args:
        depth: Grid rows
        width: Grid columns
        species: Population trial order
        seed: World seed
        world_id: World identifier (mixed into the run seed)
        **simulation_overrides: SimulationConfig fields to override

    Returns:
        World instance
    """
    return World(
        world_id=world_id,
        name=world_id,
        parameters=WorldParameters(depth=depth, width=width, seed=seed),
        simulation=SimulationConfig(**simulation_overrides),
        species=list(species)
    )
