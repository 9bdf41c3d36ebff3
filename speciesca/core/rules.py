"""Transition rules for the two-species automaton.

Five rules are tried in priority order for every cell and the first match
wins: infection, disease decay, birth, survival/contest, contested
resolution. Effective species pressure counts contested neighbors as
reinforcement for whichever species is already present:

    SA = A + 0.5 * Y * A
    SB = B + 0.5 * Y * B

All functions here are numba-compiled and work on raw uint8 buffers shaped
(rows, columns). ``GridModel`` and ``SimulationEngine`` wrap them.
"""

import numpy as np
from numba import jit

from .states import EMPTY, SPECIES_A, SPECIES_B, DISEASED, CONTESTED


@jit(nopython=True, cache=True)
def count_neighbors(states: np.ndarray, x: int, y: int):
    """Count the Moore neighbors of (x, y) by state, wrapping on both axes.

    Args:
        states: 2D uint8 state buffer
        x: Cell column
        y: Cell row

    Returns:
        (a, b, g, y) counts of SpeciesA, SpeciesB, Diseased and Contested
        neighbors. Empty neighbors are not counted.
    """
    rows, columns = states.shape
    a = 0
    b = 0
    g = 0
    c = 0

    for dy in range(-1, 2):
        ny = (y + dy) % rows
        for dx in range(-1, 2):
            if dx == 0 and dy == 0:
                continue
            nx = (x + dx) % columns

            state = states[ny, nx]
            if state == SPECIES_A:
                a += 1
            elif state == SPECIES_B:
                b += 1
            elif state == DISEASED:
                g += 1
            elif state == CONTESTED:
                c += 1

    return a, b, g, c


@jit(nopython=True, cache=True)
def transition(state, age_disease, age_contested, a, b, g, c,
               birth, smin, smax, over, cmin, marg, istr, iweak, tau, ydec):
    """Compute the next state and ages of one cell.

    Args:
        state: Current state code
        age_disease: Generations spent Diseased so far
        age_contested: Generations spent Contested so far
        a, b, g, c: SpeciesA, SpeciesB, Diseased and Contested neighbor counts
        birth ... ydec: Integer thresholds (see RuleParameters)

    Returns:
        (next_state, next_age_disease, next_age_contested). An age is
        always 0 unless the next state is the one it tracks.
    """
    s = int(state)
    age_g = int(age_disease)
    age_y = int(age_contested)

    # 1. Infection
    if s == SPECIES_A or s == SPECIES_B or s == CONTESTED:
        if s == SPECIES_A:
            weak = a <= 1
        elif s == SPECIES_B:
            weak = b <= 1
        else:
            weak = min(a, b) <= 1

        strong = g >= istr
        weak_infection = iweak > 0 and g >= iweak and weak
        if strong or weak_infection:
            return DISEASED, 0, 0

    # 2. Disease decay
    if s == DISEASED:
        if age_g >= tau:
            return EMPTY, 0, 0
        return DISEASED, age_g + 1, 0

    sa = a + 0.5 * c * a
    sb = b + 0.5 * c * b

    # 3. Birth
    if s == EMPTY:
        if sa >= birth and sb >= birth:
            return CONTESTED, 0, 0
        if sa >= birth:
            return SPECIES_A, 0, 0
        if sb >= birth:
            return SPECIES_B, 0, 0
        return EMPTY, 0, 0

    # 4. Survival / contest
    if s == SPECIES_A or s == SPECIES_B:
        if s == SPECIES_A:
            n_same, n_opp, s_same, s_opp = a, b, sa, sb
        else:
            n_same, n_opp, s_same, s_opp = b, a, sb, sa

        survives = smin <= n_same <= smax and n_same < over and n_opp < over
        contested = s_opp >= cmin and s_opp - s_same >= marg
        if contested:
            return CONTESTED, 0, 0
        if survives:
            return s, 0, 0
        return EMPTY, 0, 0

    # 5. Contested resolution
    if s == CONTESTED:
        if sa >= cmin and sa - sb >= marg:
            return SPECIES_A, 0, 0
        if sb >= cmin and sb - sa >= marg:
            return SPECIES_B, 0, 0
        if a + b < 2 or age_y + 1 >= ydec:
            return EMPTY, 0, 0
        return CONTESTED, 0, age_y + 1

    return EMPTY, 0, 0


@jit(nopython=True, cache=True)
def evolve(current, nxt, age_disease, age_contested,
           birth, smin, smax, over, cmin, marg, istr, iweak, tau, ydec):
    """Run one synchronous generation.

    Reads only ``current``; writes every cell of ``nxt`` and updates both
    age arrays in place. Each cell's ages depend only on its own previous
    state and ages, so in-place age updates never leak between cells.
    """
    rows, columns = current.shape
    for y in range(rows):
        for x in range(columns):
            a, b, g, c = count_neighbors(current, x, y)
            state, age_g, age_y = transition(
                current[y, x], age_disease[y, x], age_contested[y, x],
                a, b, g, c,
                birth, smin, smax, over, cmin, marg, istr, iweak, tau, ydec,
            )
            nxt[y, x] = state
            age_disease[y, x] = age_g
            age_contested[y, x] = age_y
