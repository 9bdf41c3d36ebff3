"""
Two-species cellular automaton on a toroidal grid.

Species A and B compete for territory, disputed cells become Contested
until one side wins or the dispute decays, and a disease spreads through
occupied cells before burning out.
"""

from .core import (
    CellState,
    ConfigurationError,
    GridModel,
    InvalidDimension,
    NeighborCounts,
    RuleParameterProvider,
    RuleParameters,
    SimulationEngine,
)
from .patterns import parse_pattern, seed_demo_layout

__version__ = "0.1.0"

__all__ = [
    'CellState',
    'ConfigurationError',
    'GridModel',
    'InvalidDimension',
    'NeighborCounts',
    'RuleParameterProvider',
    'RuleParameters',
    'SimulationEngine',
    'parse_pattern',
    'seed_demo_layout',
]
