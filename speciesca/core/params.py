"""Rule parameters for the two-species automaton.

A ``RuleParameters`` value is an immutable snapshot of the twelve tunables.
The engine reads exactly one snapshot per generation, so edits made through
a ``RuleParameterProvider`` never take effect halfway through a step.
"""

import numbers
from dataclasses import dataclass, asdict, fields, replace as _dc_replace
from typing import Any, Dict, Mapping, Tuple
import logging

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

# Age counters are uint8, so decay thresholds must fit below the ceiling
AGE_MAX = 255

# Order matches the threshold arguments of rules.transition()
THRESHOLD_NAMES: Tuple[str, ...] = (
    'birth', 'smin', 'smax', 'over', 'cmin', 'marg', 'istr', 'iweak', 'tau', 'ydec'
)
DENSITY_NAMES: Tuple[str, ...] = ('density', 'gdensity')


@dataclass(frozen=True)
class RuleParameters:
    """Immutable snapshot of the rule thresholds.

    Attributes:
        birth: Minimum effective pressure for an Empty cell to be born
        smin: Minimum same-species neighbors for survival
        smax: Maximum same-species neighbors for survival
        over: Overcrowding limit; survival requires both raw counts below it
        cmin: Minimum opposing pressure to contest (or resolve) a cell
        marg: Pressure margin needed to contest or resolve
        istr: Diseased neighbors that always infect
        iweak: Diseased neighbors that infect weak cells (0 disables)
        tau: Generations a Diseased cell lasts before clearing
        ydec: Generations after which an unresolved Contested cell decays
        density: Occupied fraction used when randomizing (0.0 to 1.0)
        gdensity: Diseased fraction of occupied cells when randomizing
    """

    birth: int = 3
    smin: int = 2
    smax: int = 3
    over: int = 6
    cmin: int = 3
    marg: int = 1
    istr: int = 3
    iweak: int = 1
    tau: int = 8
    ydec: int = 6
    density: float = 0.35
    gdensity: float = 0.05

    def __post_init__(self):
        for name in THRESHOLD_NAMES:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Integral):
                raise ConfigurationError(f"{name} must be an integer, got {value!r}")
            if value < 0:
                raise ConfigurationError(f"{name} must be non-negative, got {value}")
            # numpy integer scalars are stored as plain ints
            object.__setattr__(self, name, int(value))

        for name in ('tau', 'ydec'):
            if getattr(self, name) > AGE_MAX:
                raise ConfigurationError(f"{name} cannot exceed {AGE_MAX}")

        for name in DENSITY_NAMES:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Real):
                raise ConfigurationError(f"{name} must be a number, got {value!r}")
            if not (0.0 <= value <= 1.0):
                raise ConfigurationError(f"{name} must be between 0.0 and 1.0, got {value}")
            object.__setattr__(self, name, float(value))

    @classmethod
    def standard(cls) -> 'RuleParameters':
        """Create the default rule set."""
        return cls()

    @classmethod
    def from_dict(cls, values: Mapping[str, Any]) -> 'RuleParameters':
        """Build a snapshot from a mapping; missing keys keep their defaults.

        Raises:
            ConfigurationError: On unknown keys or invalid values
        """
        known = {f.name for f in fields(cls)}
        unknown = set(values) - known
        if unknown:
            raise ConfigurationError(f"Unknown rule parameters: {sorted(unknown)}")
        return cls(**dict(values))

    @classmethod
    def from_percentages(cls, values: Mapping[str, Any]) -> 'RuleParameters':
        """Like from_dict, but density and gdensity are given as 0-100 percentages."""
        converted = dict(values)
        for name in DENSITY_NAMES:
            if name in converted:
                converted[name] = converted[name] / 100
        return cls.from_dict(converted)

    def replace(self, **changes: Any) -> 'RuleParameters':
        """Return a validated copy with some values changed."""
        return _dc_replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def kernel_args(self) -> Tuple[int, ...]:
        """Integer thresholds in the order the transition kernel expects."""
        return tuple(getattr(self, name) for name in THRESHOLD_NAMES)


class RuleParameterProvider:
    """Mutable source of rule parameters handing out immutable snapshots.

    Stands where an interactive front end would bind its controls: the
    front end calls ``update`` whenever a value changes, and the engine
    calls ``snapshot`` once at the start of each generation.
    """

    def __init__(self, initial: RuleParameters = None):
        self._current = initial if initial is not None else RuleParameters.standard()

    def snapshot(self) -> RuleParameters:
        """Current parameter values as an immutable snapshot."""
        return self._current

    def update(self, **changes: Any) -> RuleParameters:
        """Validate and install new values.

        Raises:
            ConfigurationError: If any value is invalid; the previous
                snapshot stays in place
        """
        unknown = set(changes) - {f.name for f in fields(RuleParameters)}
        if unknown:
            raise ConfigurationError(f"Unknown rule parameters: {sorted(unknown)}")
        self._current = self._current.replace(**changes)
        logger.debug(f"Rule parameters updated: {changes}")
        return self._current

    def __repr__(self) -> str:
        return f"RuleParameterProvider({self._current!r})"
