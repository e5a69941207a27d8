import numpy as np
import pytest
import galois

from codeerrors import InvalidParameterError
from standardform import (
    direct_sum_matrix,
    is_zero,
    kronecker,
    min_row_weight,
    parity_check_from,
    rank,
    remove_zero_rows,
    standard_form,
)

GF2 = galois.GF(2)
GF3 = galois.GF(3)

HAMMING_G = GF2([
    [1, 0, 0, 0, 0, 1, 1],
    [0, 1, 0, 0, 1, 0, 1],
    [0, 0, 1, 0, 1, 1, 0],
    [0, 0, 0, 1, 1, 1, 1],
])


def ints(M):
    return M.view(np.ndarray).tolist()


# -------------------------------------------------------------------------
# Standard form
# -------------------------------------------------------------------------

def test_already_systematic_is_unchanged():
    G_stand, H_stand, P, k = standard_form(HAMMING_G)
    assert k == 4
    assert P is None
    assert ints(G_stand) == ints(HAMMING_G)
    assert H_stand.shape == (3, 7)
    assert is_zero(G_stand @ H_stand.T)


def test_idempotent():
    M = GF3([[2, 1, 0, 1], [1, 1, 1, 0], [0, 2, 1, 2]])
    G_stand, _, _, k = standard_form(M)
    again, _, P, k2 = standard_form(G_stand)
    assert k == k2
    assert P is None
    assert ints(again) == ints(G_stand)


def test_column_swap_is_recorded():
    G = GF2([[1, 1, 0], [1, 1, 1]])
    G_stand, H_stand, P, k = standard_form(G)
    assert k == 2
    assert P == [0, 2, 1]
    assert ints(G_stand) == [[1, 0, 1], [0, 1, 0]]
    assert ints(H_stand) == [[1, 0, 1]]
    # undoing the permutation gives a parity-check matrix of G itself
    H = parity_check_from(G, H_stand, P)
    assert ints(H) == [[1, 1, 0]]
    assert is_zero(G @ H.T)


def test_rank_deficient_input():
    G = GF3([[2, 1, 0], [1, 2, 0]])
    G_stand, H_stand, P, k = standard_form(G)
    assert k == 1
    assert G_stand.shape == (1, 3)
    assert ints(G_stand) == [[1, 2, 0]]
    assert H_stand.shape == (2, 3)
    assert is_zero(G_stand @ H_stand.T)


def test_full_rank_has_empty_parity():
    _, H_stand, P, k = standard_form(GF2.Identity(3))
    assert k == 3
    assert P is None
    assert H_stand.shape == (0, 3)


def test_zero_matrix_rejected():
    with pytest.raises(InvalidParameterError):
        standard_form(GF2.Zeros((2, 4)))


def test_null_space_parity_when_unpermuted():
    G_stand, H_stand, P, _ = standard_form(HAMMING_G)
    H = parity_check_from(HAMMING_G, H_stand, P)
    assert H.shape == (3, 7)
    assert is_zero(HAMMING_G @ H.T)


# -------------------------------------------------------------------------
# Helpers
# -------------------------------------------------------------------------

def test_rank_and_zero_rows():
    M = GF2([[1, 1, 0], [0, 0, 0], [1, 1, 0]])
    assert rank(M) == 1
    assert remove_zero_rows(M).shape == (2, 3)
    assert rank(GF2.Zeros((2, 2))) == 0


def test_min_row_weight():
    assert min_row_weight(HAMMING_G) == 3
    with pytest.raises(InvalidParameterError):
        min_row_weight(GF2.Zeros((1, 3)))


def test_direct_sum_matrix():
    A = GF2([[1, 1]])
    B = GF2([[1, 0, 1], [0, 1, 1]])
    M = direct_sum_matrix(A, B)
    assert ints(M) == [[1, 1, 0, 0, 0], [0, 0, 1, 0, 1], [0, 0, 0, 1, 1]]


def test_kronecker_matches_numpy():
    A = GF3([[1, 2], [0, 1]])
    B = GF3([[1, 1, 0], [2, 0, 1]])
    expected = np.kron(A.view(np.ndarray), B.view(np.ndarray)) % 3
    assert ints(kronecker(A, B)) == expected.tolist()


if __name__ == "__main__":
    raise SystemExit(pytest.main([__file__]))
