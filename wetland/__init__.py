"""
Wetland Ecosystem Simulation

A discrete-time, headless predator/grazer/plant simulator on a bounded 2-D grid.
Entities age, move, eat, breed, spread disease and die under a day/night and
weather clock.

Architecture: the Field is the source of truth for one generation. Views and
reporting are consumers.
"""

__version__ = "0.1.0"
