"""
YAML data loader with schema validation.

Loads the world configuration and species definitions from YAML files and
validates them against JSON schemas.
"""

import yaml
import json
from pathlib import Path
from typing import Dict, Optional
import jsonschema

from .constants import DEFAULT_WORLD_FILE
from .data_types import (
    Species, SpeciesKind, TimeOfDay, World, WorldParameters, SimulationConfig
)


class DataLoadError(Exception):
    """Raised when data loading or validation fails"""
    pass


def load_yaml(file_path: Path) -> dict:
    """Load YAML file and return parsed dict"""
    if not file_path.exists():
        raise DataLoadError(f"File not found: {file_path}")

    try:
        with open(file_path, 'r') as f:
            return yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise DataLoadError(f"YAML parse error in {file_path}: {e}")


def validate_against_schema(data: dict, schema_path: Path, data_path: Path):
    """Validate data dict against JSON schema"""
    if not schema_path.exists():
        # Schema validation optional (custom data packs may ship without schemas)
        return

    try:
        with open(schema_path, 'r') as f:
            schema = json.load(f)
        jsonschema.validate(instance=data, schema=schema)
    except jsonschema.ValidationError as e:
        raise DataLoadError(f"Validation error in {data_path}: {e.message}")
    except json.JSONDecodeError as e:
        raise DataLoadError(f"Invalid JSON schema {schema_path}: {e}")


def parse_species(data: dict, source: str = "<dict>") -> Species:
    """Build a Species from an already-parsed mapping"""
    try:
        kind = SpeciesKind(data['kind'])
        active_phase = data.get('active_phase')

        return Species(
            species_id=data['species_id'],
            name=data['name'],
            kind=kind,
            max_age=data['max_age'],
            creation_probability=data.get('creation_probability', 0.0),
            active_phase=TimeOfDay(active_phase) if active_phase is not None else None,
            breeding_age=data.get('breeding_age', 0),
            breeding_probability=data.get('breeding_probability', 0.0),
            max_litter_size=data.get('max_litter_size', 0),
            diet=dict(data.get('diet', {})),
            fog_sensitive=data.get('fog_sensitive', False),
            description=data.get('description')
        )
    except (KeyError, ValueError) as e:
        raise DataLoadError(f"Invalid species definition in {source}: {e}")


def load_species(file_path: Path, schema_dir: Optional[Path] = None) -> Species:
    """Load species definition from YAML"""
    data = load_yaml(file_path)

    # Validate if schema available
    if schema_dir:
        schema_path = schema_dir / "species.schema.json"
        validate_against_schema(data, schema_path, file_path)

    species = parse_species(data, str(file_path))

    if species.is_animal and species.active_phase is None:
        raise DataLoadError(f"Animal species {species.species_id} has no active_phase ({file_path})")

    return species


def load_world(file_path: Path, schema_dir: Optional[Path] = None) -> World:
    """Load world configuration from YAML"""
    data = load_yaml(file_path)

    # Validate if schema available
    if schema_dir:
        schema_path = schema_dir / "world.schema.json"
        validate_against_schema(data, schema_path, file_path)

    try:
        parameters = WorldParameters(**data['parameters'])
        simulation = SimulationConfig(**data.get('simulation', {}))

        return World(
            world_id=data['world_id'],
            name=data['name'],
            parameters=parameters,
            simulation=simulation,
            species=list(data['species']),
            description=data.get('description')
        )
    except (KeyError, TypeError) as e:
        raise DataLoadError(f"Invalid world definition in {file_path}: {e}")


def load_species_registry(species_dir: Path, schema_dir: Optional[Path] = None) -> Dict[str, Species]:
    """Load all species from directory"""
    species_dir = Path(species_dir)
    if not species_dir.exists():
        raise DataLoadError(f"Species directory not found: {species_dir}")

    registry = {}
    for yaml_file in sorted(species_dir.glob("*.yaml")):
        species = load_species(yaml_file, schema_dir)
        registry[species.species_id] = species

    if not registry:
        raise DataLoadError(f"No species files found in {species_dir}")

    return registry


def check_references(world: World, species: Dict[str, Species]):
    """
    Verify that every species named by the world or a diet exists.

    Raises:
        DataLoadError: On the first dangling reference
    """
    for species_id in world.species:
        if species_id not in species:
            raise DataLoadError(f"World {world.world_id} lists unknown species '{species_id}'")

    for species_id in world.simulation.keystone_species:
        if species_id not in species:
            raise DataLoadError(f"Unknown keystone species '{species_id}'")

    for sp in species.values():
        for prey_id in sp.diet:
            if prey_id not in species:
                raise DataLoadError(f"Species {sp.species_id} eats unknown species '{prey_id}'")


def load_all_data(data_root: Path, schema_dir: Optional[Path] = None) -> dict:
    """Load all simulation data from data directory

    Returns dict with keys: world, species

    The species dict is ordered as the world's species list, which is also
    the trial order used when populating the grid.
    """
    data_root = Path(data_root)

    if schema_dir is None and (data_root / "schemas").exists():
        schema_dir = data_root / "schemas"

    # Load world
    world = load_world(data_root / DEFAULT_WORLD_FILE, schema_dir)

    # Load species
    registry = load_species_registry(data_root / "species", schema_dir)
    check_references(world, registry)

    species = {species_id: registry[species_id] for species_id in world.species}
    for species_id, sp in registry.items():
        species.setdefault(species_id, sp)

    return {
        'world': world,
        'species': species
    }
