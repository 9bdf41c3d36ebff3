#!/usr/bin/env python3
"""
Two-Species Simulation Runner

Seeds a grid (the standard demo scene or a random fill), runs it for a
number of generations and reports population counts along the way.
"""

import sys
import os
import logging

# Add repository root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Configure logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

from speciesca import (
    CellState,
    ConfigurationError,
    GridModel,
    RuleParameters,
    SimulationEngine,
    seed_demo_layout,
)
from speciesca.core.params import THRESHOLD_NAMES


def format_population(counts):
    return ", ".join(f"{state.char}={count}" for state, count in counts.items()
                     if state != CellState.EMPTY)


def run_simulation(columns=64, rows=48, generations=100, layout="demo",
                   seed=None, interval=10, params=None):
    """Run a simulation and return the final grid."""
    params = params or RuleParameters.standard()

    logger.info("=== TWO-SPECIES SIMULATION ===")
    logger.info(f"Grid size: {columns}x{rows}")
    logger.info(f"Generations: {generations}")
    logger.info(f"Rules: {params}")

    grid = GridModel(columns, rows)
    if layout == "random":
        grid.randomize(params.density, params.gdensity, seed=seed)
    else:
        seed_demo_layout(grid)

    engine = SimulationEngine(grid, params)
    logger.info(f"Generation 0: {format_population(grid.population())}")

    for _ in range(generations):
        engine.step()
        if engine.generation % interval == 0 or engine.generation == generations:
            logger.info(f"Generation {engine.generation}: {format_population(grid.population())}")

    return grid


if __name__ == "__main__":
    import argparse
    defaults = RuleParameters.standard()

    parser = argparse.ArgumentParser(description="Two-Species Cellular Automaton")
    parser.add_argument("--columns", type=int, default=64, help="Grid width in cells")
    parser.add_argument("--rows", type=int, default=48, help="Grid height in cells")
    parser.add_argument("--generations", type=int, default=100, help="Generations to run")
    parser.add_argument("--layout", choices=["demo", "random"], default="demo", help="Starting layout")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for the random layout")
    parser.add_argument("--interval", type=int, default=10, help="Report every N generations")
    parser.add_argument("--density", type=int, default=int(defaults.density * 100),
                        help="Occupied percentage for the random layout")
    parser.add_argument("--gdensity", type=int, default=int(defaults.gdensity * 100),
                        help="Diseased percentage of occupied cells for the random layout")
    parser.add_argument("--quiet", action="store_true", help="Don't print the final grid")
    for name in THRESHOLD_NAMES:
        parser.add_argument(f"--{name}", type=int, default=getattr(defaults, name))

    args = parser.parse_args()

    try:
        values = {name: getattr(args, name) for name in THRESHOLD_NAMES}
        values["density"] = args.density
        values["gdensity"] = args.gdensity
        params = RuleParameters.from_percentages(values)

        grid = run_simulation(
            columns=args.columns,
            rows=args.rows,
            generations=args.generations,
            layout=args.layout,
            seed=args.seed,
            interval=max(1, args.interval),
            params=params,
        )
    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e}")
        sys.exit(2)

    if not args.quiet:
        print(grid)
