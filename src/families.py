import logging
from typing import Iterable, List

import pandas as pd
from joblib import Parallel, delayed

from cycliccode import BCHCode, bch_code
from linearcode import LinearCode
from mathutils import defining_set

log = logging.getLogger(__name__)

TABLE_COLUMNS = ["family", "q", "n", "k", "d", "lower_bound", "upper_bound",
                 "design_distance", "offset"]


def bch_design_distances(q: int, n: int, b: int = 1) -> List[int]:
    """
    The smallest design distance of each distinct BCH defining set of length n
    and offset b, as delta grows from 2 until only the zero code is left.
    """
    deltas = []
    seen = set()
    for delta in range(2, n + 1):
        defset = tuple(defining_set(range(b, b + delta - 1), q, n))
        if len(defset) == n:
            break
        if defset not in seen:
            seen.add(defset)
            deltas.append(delta)
    log.debug(f"BCH design distances for q={q}, n={n}, b={b}: {deltas}")
    return deltas


def bch_family(q: int, n: int, b: int = 1, n_jobs: int = 1) -> List[BCHCode]:
    """
    Every distinct BCH code of length n over GF(q) with offset b.

    Codes are built independently; n_jobs > 1 (or -1 for all cores) fans the
    constructions out over joblib's threading backend.
    """
    deltas = bch_design_distances(q, n, b)
    codes = Parallel(n_jobs=n_jobs, prefer="threads")(
        delayed(bch_code)(q, n, delta, b) for delta in deltas
    )
    log.info(f"Built {len(codes)} BCH codes of length {n} over GF({q})")
    return codes


def parameter_table(codes: Iterable[LinearCode]) -> pd.DataFrame:
    """One row of parameters per code; d is None while only bounds are known."""
    rows = []
    for code in codes:
        rows.append({
            "family": type(code).__name__,
            "q": code.field.order,
            "n": code.n,
            "k": code.k,
            "d": code.d,
            "lower_bound": code.lower_bound,
            "upper_bound": code.upper_bound,
            "design_distance": getattr(code, "design_distance", None),
            "offset": getattr(code, "offset", None),
        })
    return pd.DataFrame(rows, columns=TABLE_COLUMNS)
