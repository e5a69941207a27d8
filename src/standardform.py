import logging
from typing import List, Optional, Tuple

import numpy as np

from codeerrors import InvalidParameterError

log = logging.getLogger(__name__)


def is_zero(M) -> bool:
    """True if every entry of the field matrix M is zero."""
    return not np.any(M.view(np.ndarray))


def remove_zero_rows(M):
    """Drop the all-zero rows of M."""
    mask = np.any(M.view(np.ndarray) != 0, axis=1)
    return M[mask]


def row_weights(M) -> np.ndarray:
    """Hamming weight of every row of M."""
    return np.count_nonzero(M.view(np.ndarray), axis=1)


def min_row_weight(M) -> int:
    """Smallest non-zero row weight of M."""
    weights = row_weights(M)
    weights = weights[weights > 0]
    if weights.size == 0:
        raise InvalidParameterError("Matrix has no non-zero rows")
    return int(weights.min())


def _rref_col_swap(G) -> Tuple[object, List[int], bool, int]:
    """
    Reduced row echelon form of G with column pivoting, so that the leading
    `rank` columns become the identity.

    Returns the reduced matrix (zero rows dropped), the column order, whether
    any column was swapped, and the rank.
    """
    M = G.copy()
    nrows, ncols = M.shape
    vals = M.view(np.ndarray)
    perm = list(range(ncols))
    swapped = False
    rank = 0

    for i in range(min(nrows, ncols)):
        pivots = np.nonzero(vals[i:, i])[0]
        if pivots.size == 0:
            # lowest later column with a non-zero entry at or below row i
            candidates = np.nonzero(np.any(vals[i:, i + 1:] != 0, axis=0))[0]
            if candidates.size == 0:
                break
            j = i + 1 + int(candidates[0])
            M[:, [i, j]] = M[:, [j, i]]
            perm[i], perm[j] = perm[j], perm[i]
            swapped = True
            log.debug(f"Column swap {i} <-> {j}")
            pivots = np.nonzero(vals[i:, i])[0]

        r = i + int(pivots[0])
        if r != i:
            M[[i, r]] = M[[r, i]]
        M[i] = M[i] / M[i, i]
        for row in range(nrows):
            if row != i and vals[row, i] != 0:
                M[row] = M[row] - M[row, i] * M[i]
        rank += 1

    return M[:rank], perm, swapped, rank


def standard_form(G) -> Tuple[object, object, Optional[List[int]], int]:
    """
    Canonical systematic form of the generator matrix G.

    Parameters
    ----------
    G
        Non-zero 2-D galois FieldArray.

    Returns
    -------
    G_stand
        Row-reduced matrix with rank rows whose leading rank columns form the
        identity.
    H_stand
        Parity-check matrix [-A^T | I] of G_stand, where G_stand = [I | A].
    P
        Column order: column j of G_stand is column P[j] of G. None when no
        column swap was needed.
    rank
        Row rank of G.

    Raises
    ------
    InvalidParameterError
        If G is the zero matrix.
    """
    if is_zero(G):
        raise InvalidParameterError("Cannot reduce the zero matrix; the code is undefined")

    F = type(G)
    ncols = G.shape[1]
    G_stand, perm, swapped, rank = _rref_col_swap(G)
    if rank == ncols:
        H_stand = F.Zeros((0, ncols))
    else:
        A = G_stand[:, rank:]
        H_stand = np.hstack((-A.T, F.Identity(ncols - rank)))
    log.debug(f"Standard form: {G.shape[0]}x{ncols} matrix of rank {rank}, swaps={swapped}")
    return G_stand, H_stand, (perm if swapped else None), rank


def parity_check_from(G, H_stand, P: Optional[List[int]]):
    """
    Parity-check matrix for G in its original column order.

    Without a permutation the null space of G is used; otherwise the columns
    of the systematic parity-check matrix are put back in place.
    """
    if P is None:
        return remove_zero_rows(G.null_space())
    return H_stand[:, np.argsort(P)]


def rank(M) -> int:
    """Row rank of M over its field."""
    if is_zero(M):
        return 0
    return _rref_col_swap(M)[3]


def direct_sum_matrix(A, B):
    """Block diagonal matrix [[A, 0], [0, B]]."""
    F = type(A)
    ra, ca = A.shape
    rb, cb = B.shape
    M = F.Zeros((ra + rb, ca + cb))
    M[:ra, :ca] = A
    M[ra:, ca:] = B
    return M


def kronecker(A, B):
    """Kronecker product of two matrices over the same field."""
    F = type(A)
    ra, ca = A.shape
    rb, cb = B.shape
    M = F.Zeros((ra * rb, ca * cb))
    for i in range(ra):
        for j in range(ca):
            if A[i, j] != 0:
                M[i * rb:(i + 1) * rb, j * cb:(j + 1) * cb] = A[i, j] * B
    return M
