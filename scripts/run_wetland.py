"""
Headless wetland run.

Runs the default data pack for a number of steps (or until a keystone
species dies out) and prints a summary line every few steps plus a final
population and infection table.

Usage:
    python scripts/run_wetland.py [steps] [seed]
"""

import sys
import time

from wetland.simulation import WetlandSimulation
from wetland.constants import LONG_RUN_STEPS, TICK_SUMMARY_INTERVAL


def main():
    """Run the default wetland and report."""
    steps = int(sys.argv[1]) if len(sys.argv) > 1 else LONG_RUN_STEPS
    seed = int(sys.argv[2]) if len(sys.argv) > 2 else None

    print("=" * 80)
    print("Wetland Simulation")
    print("=" * 80)
    print()

    sim = WetlandSimulation(seed=seed, verbose=False)

    def summary(step, field):
        if step % TICK_SUMMARY_INTERVAL == 0:
            sim.print_tick_summary()
            sim.print_infection_summary()

    sim.add_observer(summary)

    start = time.perf_counter()
    executed = sim.simulate(steps)
    elapsed = time.perf_counter() - start

    print()
    print("=" * 80)
    if executed < steps:
        print(f"Stopped at step {sim.step}: a keystone species died out")
    else:
        print(f"Completed {executed} steps")
    print(f"Wall time: {elapsed:.2f}s")
    print()

    print("| Species    | Alive | Infected |")
    print("|------------|-------|----------|")
    for species_id, counts in sim.stats.as_dict().items():
        print(f"| {species_id:10s} | {counts['alive']:5d} | {counts['infected']:8d} |")

    print()
    print("=" * 80)


if __name__ == '__main__':
    main()
