import pytest

from codeerrors import CodeError, InvalidFieldError, InvalidLengthError, InvalidParameterError
from mathutils import (
    complement_cosets,
    coset_representatives,
    cyclotomic_coset,
    defining_set,
    dual_cosets,
    dual_defining_set,
    is_union_of_cosets,
    order,
    prime_power,
    quadratic_residues,
)


# -------------------------------------------------------------------------
# Multiplicative order and field sizes
# -------------------------------------------------------------------------

@pytest.mark.parametrize("q, n, m", [
    (2, 7, 3),
    (2, 15, 4),
    (2, 23, 11),
    (4, 5, 2),
    (13, 12, 1),
    (3, 1, 1),
])
def test_order(q, n, m):
    assert order(q, n) == m


def test_order_requires_coprime():
    with pytest.raises(InvalidLengthError):
        order(2, 6)
    with pytest.raises(InvalidLengthError):
        order(2, 0)


@pytest.mark.parametrize("q, expected", [(2, (2, 1)), (8, (2, 3)), (9, (3, 2)), (13, (13, 1))])
def test_prime_power(q, expected):
    assert prime_power(q) == expected


def test_prime_power_rejects():
    with pytest.raises(InvalidFieldError) as err:
        prime_power(12)
    assert err.value.order == 12
    # every error in the taxonomy is still a ValueError
    with pytest.raises(ValueError):
        prime_power(6)
    with pytest.raises(InvalidLengthError):
        prime_power(1)


# -------------------------------------------------------------------------
# Cyclotomic cosets
# -------------------------------------------------------------------------

@pytest.mark.parametrize("x, coset", [
    (0, [0]),
    (1, [1, 2, 4, 8]),
    (3, [3, 6, 12, 9]),
    (5, [5, 10]),
    (7, [7, 14, 13, 11]),
    (16, [1, 2, 4, 8]),
])
def test_cyclotomic_coset_orbit_order(x, coset):
    assert cyclotomic_coset(x, 2, 15) == coset


def test_defining_set_bch_example():
    # q=2, n=15, b=3, delta=4
    cosets = defining_set(range(3, 6), 2, 15, flatten=False)
    assert cosets == [[3, 6, 12, 9], [4, 8, 1, 2], [5, 10]]
    assert defining_set(range(3, 6), 2, 15) == [1, 2, 3, 4, 5, 6, 8, 9, 10, 12]
    assert coset_representatives(cosets) == [1, 3, 5]


def test_defining_set_skips_repeated_cosets():
    assert defining_set([1, 2, 4, 8], 2, 15, flatten=False) == [[1, 2, 4, 8]]


def test_complement_cosets():
    cosets = defining_set(range(3, 6), 2, 15, flatten=False)
    assert complement_cosets(2, 15, cosets) == [[0], [7, 14, 13, 11]]


def test_dual_defining_set():
    assert dual_defining_set([1, 2, 4, 8], 15) == [0, 1, 2, 3, 4, 5, 6, 8, 9, 10, 12]
    # Hamming code of length 7: dual defining set is {0} plus the coset of 1
    assert dual_defining_set([1, 2, 4], 7) == [0, 1, 2, 4]


def test_dual_cosets_are_cosets():
    cosets = dual_cosets(2, 7, [[1, 2, 4]])
    assert sorted(x for c in cosets for x in c) == [0, 1, 2, 4]
    for c in cosets:
        assert is_union_of_cosets(c, 2, 7)


def test_is_union_of_cosets():
    assert is_union_of_cosets([1, 2, 4, 8], 2, 15)
    assert not is_union_of_cosets([1, 2], 2, 15)
    assert is_union_of_cosets([], 2, 15)


# -------------------------------------------------------------------------
# Quadratic residues
# -------------------------------------------------------------------------

@pytest.mark.parametrize("n, residues", [
    (7, [1, 2, 4]),
    (11, [1, 3, 4, 5, 9]),
    (23, [1, 2, 3, 4, 6, 8, 9, 12, 13, 16, 18]),
])
def test_quadratic_residues(n, residues):
    assert sorted(quadratic_residues(n)) == residues


@pytest.mark.parametrize("n", [2, 9, 15])
def test_quadratic_residues_need_odd_prime(n):
    with pytest.raises(InvalidParameterError):
        quadratic_residues(n)


def test_error_taxonomy():
    assert issubclass(InvalidFieldError, InvalidParameterError)
    assert issubclass(InvalidLengthError, CodeError)


if __name__ == "__main__":
    raise SystemExit(pytest.main([__file__]))
