"""
Central configuration constants for wetland simulation.

Defines default values, thresholds, and configuration parameters
used across multiple modules. World YAML values override these.
"""

from pathlib import Path


# ============================================================================
# Data Pack
# ============================================================================

# Repository data pack (world, species, schemas)
DEFAULT_DATA_ROOT = Path(__file__).resolve().parent.parent / "data"

# World file relative to data root
DEFAULT_WORLD_FILE = Path("world") / "wetland.yaml"


# ============================================================================
# Grid Configuration
# ============================================================================

# Fallback dimensions when configured depth/width are not positive
DEFAULT_DEPTH = 80
DEFAULT_WIDTH = 120


# ============================================================================
# Clock Configuration
# ============================================================================

# Steps between day/night toggles
DAY_LENGTH_STEPS = 10

# Steps between weather redraws (one full day)
WEATHER_PERIOD_STEPS = 20


# ============================================================================
# Metabolism and Disease
# ============================================================================

# Food lost per step by a healthy animal
HUNGER_COST = 1

# Food lost per step by an infected animal
INFECTED_HUNGER_COST = 5

# Chance that an adjacent uninfected animal catches the disease each step
INFECTION_PROBABILITY = 0.10


# ============================================================================
# Viability
# ============================================================================

# Species that must all have a living member for the run to continue
KEYSTONE_SPECIES = ['crocodile', 'snake', 'fish', 'lizard', 'bird']


# ============================================================================
# Run Loop
# ============================================================================

# Steps executed by run_long_simulation()
LONG_RUN_STEPS = 500

# Tick timing window for rolling average
TICK_TIME_WINDOW = 100  # Number of ticks to average

# Default tick summary interval (print every N ticks)
TICK_SUMMARY_INTERVAL = 50
