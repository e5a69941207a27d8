import pytest
import galois

from codeerrors import (
    ConstructionPreconditionError,
    InvalidDistanceError,
    InvalidFieldError,
    InvalidLengthError,
    InvalidParameterError,
)
from cycliccode import (
    BCHCode,
    CyclicCode,
    ReedSolomonCode,
    bch_code,
    cyclic_code,
    cyclic_code_from_polynomial,
    is_cyclic,
    quadratic_residue_code,
)
from fieldutils import x_n_minus_one
from linearcode import LinearCode
from mathutils import defining_set
from standardform import is_zero

GF2 = galois.GF(2)


def hamming_cyclic():
    return cyclic_code(2, 7, [[1, 2, 4]])


# -------------------------------------------------------------------------
# BCH construction
# -------------------------------------------------------------------------

def test_bch_15_from_offset_3():
    C = BCHCode(2, 15, 4, 3)
    assert type(C) is BCHCode
    assert C.cosets == [[3, 6, 12, 9], [4, 8, 1, 2], [5, 10]]
    assert C.coset_representatives == [1, 3, 5]
    assert C.defining_set == [1, 2, 3, 4, 5, 6, 8, 9, 10, 12]
    assert C.generator_polynomial.degree == 10
    assert (C.n, C.k) == (15, 5)
    assert C.lower_bound >= 7
    assert C.design_distance == 7
    assert C.offset == 1
    assert C.is_narrow_sense()
    assert C.is_primitive()
    assert C.bch_bound() == 7
    assert is_zero(C.G @ C.H.T)


def test_polynomials_are_consistent():
    C = BCHCode(2, 15, 5, 1)
    xn = x_n_minus_one(15, GF2)
    g, h, e = C.generator_polynomial, C.parity_polynomial, C.idempotent
    assert g * h == xn
    assert xn % g == galois.Poly.Zero(GF2)
    assert (e * e) % xn == e
    assert g.degree == C.n - C.k


def test_bch_code_over_extension_field():
    C = bch_code(4, 5, 2, 1)
    assert type(C) is BCHCode
    assert C.defining_set == [1, 4]
    assert (C.n, C.k) == (5, 3)
    assert C.generator_polynomial.field.order == 4
    assert C.splitting.m == 2
    assert is_zero(C.G @ C.H.T)


def test_bch_rejects_small_delta():
    with pytest.raises(InvalidDistanceError):
        BCHCode(2, 15, 1)


def test_bch_rejects_full_defining_set():
    with pytest.raises(InvalidDistanceError):
        BCHCode(2, 15, 16, 1)


@pytest.mark.parametrize("build", [bch_code, BCHCode])
def test_bch_keeps_requested_pair_when_run_differs(build):
    # cosets of 7 and 8: the first longest run {1, 2} generates only C_1
    C = build(2, 15, 3, 7)
    assert type(C) is BCHCode
    assert C.defining_set == [1, 2, 4, 7, 8, 11, 13, 14]
    assert (C.design_distance, C.offset) == (3, 7)
    assert defining_set(range(C.offset, C.offset + C.design_distance - 1), 2, 15) == C.defining_set


# -------------------------------------------------------------------------
# Reed-Solomon
# -------------------------------------------------------------------------

def test_reed_solomon_13():
    C = ReedSolomonCode(13, 5, 1)
    assert (C.n, C.k, C.d) == (12, 8, 5)
    assert C.is_mds() is True
    assert repr(C) == "[12, 8, 5]_13 Reed-Solomon code"


@pytest.mark.parametrize("q", [5, 7, 8, 9, 11, 16])
@pytest.mark.parametrize("b", [0, 1, 2])
def test_reed_solomon_is_mds(q, b):
    for d in range(2, q - 1):
        C = ReedSolomonCode(q, d, b)
        assert C.d == d
        assert C.k + C.d == C.n + 1
        assert C.is_mds() is True
        assert is_zero(C.G @ C.H.T)


def test_reed_solomon_rejects():
    with pytest.raises(InvalidDistanceError):
        ReedSolomonCode(13, 1)
    with pytest.raises(InvalidFieldError):
        ReedSolomonCode(4, 3)
    with pytest.raises(InvalidFieldError):
        ReedSolomonCode(6, 3)


def test_bch_code_classifies_reed_solomon():
    C = bch_code(7, 6, 3, 1)
    assert isinstance(C, ReedSolomonCode)
    assert (C.k, C.d) == (4, 3)


def test_reed_solomon_subfield_subcode_is_bch():
    # binary words with zeros beta, beta^2 in GF(8): the Hamming code
    S = ReedSolomonCode(8, 3, 1).subfield_subcode()
    assert (S.n, S.k) == (7, 4)
    assert S.lower_bound >= 3
    assert S.is_equivalent(BCHCode(2, 7, 3, 1))


# -------------------------------------------------------------------------
# Generic cyclic codes and classification
# -------------------------------------------------------------------------

def test_hamming_is_classified_bch():
    C = hamming_cyclic()
    assert type(C) is BCHCode
    assert (C.n, C.k, C.d) == (7, 4, 3)


def test_direct_constructor_keeps_generic_variant():
    C = CyclicCode(2, 7, [[1, 2, 4]])
    assert type(C) is CyclicCode
    assert C.k == 4


def test_non_bch_cyclic_code():
    C = cyclic_code(2, 15, [[1, 2, 4, 8], [5, 10]])
    assert type(C) is CyclicCode
    assert C.k == 9
    assert C.design_distance == 3
    B = C.bch_supercode()
    assert isinstance(B, BCHCode)
    assert C.is_subcode(B)


@pytest.mark.parametrize("q, n, cosets, error", [
    (6, 7, [[1, 2, 4]], InvalidFieldError),
    (2, 1, [[0]], InvalidLengthError),
    (2, 14, [[1, 2, 4, 8]], InvalidLengthError),
    (2, 7, [[1, 2]], InvalidParameterError),
    (2, 7, [[1, 2, 4], [4, 1, 2]], InvalidParameterError),
    (2, 7, [], InvalidParameterError),
    (2, 7, [[0], [1, 2, 4], [3, 6, 5]], InvalidParameterError),
])
def test_cyclic_code_rejects(q, n, cosets, error):
    with pytest.raises(error):
        cyclic_code(q, n, cosets)


def test_zeros_and_minimal_polynomials():
    C = BCHCode(2, 15, 5, 1)
    assert len(C.zeros()) == len(C.defining_set)
    assert len(C.nonzeros()) == C.k
    product = galois.Poly.One(GF2)
    for m in C.minimal_polynomials():
        product = product * m
    assert product == C.generator_polynomial


def test_reversible_and_degenerate():
    assert not hamming_cyclic().is_reversible()
    assert cyclic_code(2, 7, [[0]]).is_reversible()
    assert not hamming_cyclic().is_degenerate()
    # nonzeros {0, 3, 6}: h(x) = x^3 - 1
    D = cyclic_code(2, 9, [[1, 2, 4, 8, 7, 5]])
    assert D.k == 3
    assert D.is_degenerate()
    assert not D.is_primitive()


def test_from_polynomial():
    g = galois.Poly([1, 0, 1, 1], field=GF2)
    C = cyclic_code_from_polynomial(7, g)
    assert C.k == 4
    assert C.generator_polynomial == g
    with pytest.raises(InvalidParameterError):
        cyclic_code_from_polynomial(7, galois.Poly([1, 1, 1], field=GF2))
    with pytest.raises(InvalidParameterError):
        cyclic_code_from_polynomial(7, galois.Poly([1], field=GF2))


def test_quadratic_residue_codes():
    C = quadratic_residue_code(2, 7)
    assert (C.n, C.k) == (7, 4)
    golay = quadratic_residue_code(2, 23)
    assert (golay.n, golay.k) == (23, 12)
    assert golay.lower_bound >= 5
    with pytest.raises(InvalidParameterError):
        quadratic_residue_code(3, 7)


def test_is_cyclic():
    C = BCHCode(2, 15, 5, 1)
    flag, rebuilt = is_cyclic(LinearCode(C.G))
    assert flag
    assert rebuilt.defining_set == C.defining_set
    assert is_cyclic(C) == (True, C)
    assert is_cyclic(LinearCode(GF2([[1, 1, 0, 0, 1, 1]]))) == (False, None)
    assert is_cyclic(LinearCode(GF2([[1, 1, 0, 0, 0, 0, 0]])))[0] is False


# -------------------------------------------------------------------------
# Cyclic operators
# -------------------------------------------------------------------------

def test_subcode_by_defining_sets():
    B3 = BCHCode(2, 15, 3, 1)
    B5 = BCHCode(2, 15, 5, 1)
    assert B5.is_subcode(B3)
    assert not B3.is_subcode(B5)
    # agrees with the matrix test
    assert LinearCode.is_subcode(B5, B3)
    assert not LinearCode.is_subcode(B3, B5)


def test_dual_recomputed():
    C = hamming_cyclic()
    D = C.dual()
    assert isinstance(D, CyclicCode)
    assert D.defining_set == [0, 1, 2, 4]
    assert D.k == 3
    assert LinearCode.dual(C).is_equivalent(D)
    assert D.dual().defining_set == C.defining_set


def test_self_dual_by_defining_set():
    assert not hamming_cyclic().is_self_dual()


def test_intersection_and_sum():
    B3 = BCHCode(2, 15, 3, 1)
    B5 = BCHCode(2, 15, 5, 1)
    even = cyclic_code(2, 15, [[0]])
    I = B3.intersection(even)
    assert I.defining_set == [0, 1, 2, 4, 8]
    assert I.k == 10
    S = B5.code_sum(B3)
    assert S.defining_set == B3.defining_set
    assert S.is_equivalent(B3)


def test_sum_with_empty_defining_set():
    A = cyclic_code(2, 7, [[1, 2, 4]])
    B = cyclic_code(2, 7, [[3, 6, 5]])
    with pytest.raises(ConstructionPreconditionError):
        A.code_sum(B)
    with pytest.raises(ConstructionPreconditionError):
        A.intersection(cyclic_code(2, 15, [[0]]))


def test_complement():
    C = hamming_cyclic()
    D = C.complement()
    assert D.defining_set == [0, 3, 5, 6]
    assert D.k == 3
    assert D.generator_polynomial == C.parity_polynomial


if __name__ == "__main__":
    raise SystemExit(pytest.main([__file__]))
