import logging
from math import gcd
from typing import List, Sequence, Tuple

from codeerrors import InvalidParameterError
from mathutils import flatten_cosets

log = logging.getLogger(__name__)

# default for find_delta(refine=...)
REFINE_HARTMANN_TZENG = True


def consecutive_runs(n: int, defset: Sequence[int]) -> List[List[int]]:
    """
    Maximal runs x, x+1, x+2, ... (mod n) inside the defining set, in the
    order of their first element. A run only starts where its predecessor is
    missing from the set, so no run is a tail of another.
    """
    members = set(defset)
    if len(members) >= n:
        raise InvalidParameterError("Defining set covers every residue; no run has an end")
    runs = []
    for x in sorted(members):
        if (x - 1) % n in members:
            continue
        run = [x]
        y = (x + 1) % n
        while y in members:
            run.append(y)
            y = (y + 1) % n
        runs.append(run)
    return runs


def hartmann_tzeng(n: int, members: set, run: Sequence[int], delta: int) -> int:
    """
    Hartmann-Tzeng refinement of the BCH bound delta for one run of delta - 1
    consecutive exponents: the largest delta + s such that run + {0, c, ..., sc}
    lies in the defining set for some c with gcd(c, n) < delta.
    """
    best = delta
    for c in range(1, n):
        if gcd(c, n) >= delta:
            continue
        for s in range(1, delta - 1):
            shifted = [(a + s * c) % n for a in run]
            if not all(x in members for x in shifted):
                break
            best = max(best, delta + s)
    return best


def find_delta(n: int, cosets: Sequence[Sequence[int]],
               refine: bool = REFINE_HARTMANN_TZENG) -> Tuple[int, int, int]:
    """
    BCH bound of the cyclic code of length n with the given cyclotomic cosets.

    Returns
    -------
    delta : int
        One more than the longest run of consecutive exponents.
    offset : int
        First exponent of the first longest run.
    bound : int
        Lower bound on the minimum distance: delta, raised by the
        Hartmann-Tzeng refinement when `refine` is set.
    """
    defset = flatten_cosets(cosets)
    if not defset:
        raise InvalidParameterError("Empty defining set has no BCH bound")
    runs = consecutive_runs(n, defset)
    longest = max(len(run) for run in runs)
    first = next(run for run in runs if len(run) == longest)
    delta = longest + 1
    offset = first[0]

    bound = delta
    if refine and delta > 2:
        members = set(defset)
        for run in runs:
            if len(run) == longest:
                bound = max(bound, hartmann_tzeng(n, members, run, delta))
    log.debug(f"find_delta(n={n}): delta={delta}, offset={offset}, bound={bound}")
    return delta, offset, bound
