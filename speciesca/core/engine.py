"""Generation stepping for the two-species automaton.

The engine owns no state of its own beyond a generation counter: each
``step`` takes one parameter snapshot, evaluates every cell of the grid's
current buffer into its next buffer, then swaps the two.
"""

from typing import Dict, List, Optional, Union
import logging

from .grid import GridModel
from .params import RuleParameters, RuleParameterProvider
from .rules import evolve
from .states import CellState

logger = logging.getLogger(__name__)

ParameterSource = Union[RuleParameters, RuleParameterProvider]


class SimulationEngine:
    """Advances a GridModel one synchronous generation at a time.

    Attributes:
        grid: The grid being evolved
        generation: Number of generations stepped since creation or reset
    """

    def __init__(self, grid: GridModel, parameters: Optional[ParameterSource] = None):
        """Bind the engine to a grid and a parameter source.

        Args:
            grid: Grid to evolve
            parameters: A provider queried once per generation, a fixed
                snapshot, or None for the standard rules
        """
        self.grid = grid
        if parameters is None:
            parameters = RuleParameterProvider()
        elif isinstance(parameters, RuleParameters):
            parameters = RuleParameterProvider(parameters)
        self.parameters = parameters
        self.generation = 0

    def step(self, params: Optional[RuleParameters] = None) -> None:
        """Advance one generation.

        Under assertions (the default), buffer shapes and age/state lockstep
        are checked before the pass; the compiled kernel does no bounds
        checking of its own.

        Args:
            params: Snapshot to use for this generation; defaults to the
                provider's current snapshot

        Raises:
            AssertionError: If buffers disagree in shape or an age is stale
        """
        if params is None:
            params = self.parameters.snapshot()

        grid = self.grid
        if __debug__:
            grid.check_invariants()
        evolve(grid.current, grid.next, grid.age_disease, grid.age_contested,
               *params.kernel_args())
        grid.swap_buffers()
        self.generation += 1

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"Generation {self.generation}: {self._summary()}")

    def step_multiple(self, steps: int,
                      log_interval: Optional[int] = None) -> List[Dict[CellState, int]]:
        """Advance several generations.

        Args:
            steps: Number of generations
            log_interval: If provided, only record populations at these intervals

        Returns:
            Population counts after each recorded generation
        """
        populations = []

        for step_num in range(steps):
            self.step()

            if log_interval is None or step_num % log_interval == 0:
                populations.append(self.grid.population())

        return populations

    def reset(self) -> None:
        """Clear the grid and restart the generation count."""
        self.grid.clear()
        self.generation = 0

    def _summary(self) -> str:
        counts = self.grid.population()
        return " ".join(f"{state.char}={count}" for state, count in counts.items()
                        if state != CellState.EMPTY)
