"""Grid model, rule parameters and the generation engine."""

from .engine import SimulationEngine
from .errors import ConfigurationError, InvalidDimension
from .grid import GridModel, NeighborCounts
from .params import RuleParameters, RuleParameterProvider
from .states import CellState

__all__ = [
    'CellState',
    'ConfigurationError',
    'GridModel',
    'InvalidDimension',
    'NeighborCounts',
    'RuleParameterProvider',
    'RuleParameters',
    'SimulationEngine',
]
