import logging
from math import gcd
from typing import Iterable, List, Sequence, Tuple, Union

from sympy import factorint, isprime
from sympy.ntheory.residue_ntheory import quadratic_residues as _sympy_residues

from codeerrors import InvalidFieldError, InvalidLengthError, InvalidParameterError

log = logging.getLogger(__name__)

Cosets = List[List[int]]


def order(q: int, n: int) -> int:
    """
    Multiplicative order of q modulo n: smallest m>0 with q^m ≡ 1 (mod n).
    Raises InvalidLengthError if gcd(q, n) != 1 (no order exists).
    """
    if n <= 0:
        raise InvalidLengthError("n must be positive")
    if n == 1:
        return 1
    if gcd(q, n) != 1:
        raise InvalidLengthError(f"No multiplicative order for q={q} mod n={n}: gcd(q, n) != 1")
    tx = q % n
    for m in range(1, n + 1):
        if tx == 1:
            return m
        tx = (tx * q) % n
    raise InvalidLengthError(f"No multiplicative order for q={q} mod n={n}")


def prime_power(q: int) -> Tuple[int, int]:
    """Return (p, t) with q = p^t, or raise InvalidFieldError."""
    if q <= 1:
        raise InvalidLengthError(f"Field size must exceed 1, got q={q}")
    factors = factorint(q)
    if len(factors) != 1:
        raise InvalidFieldError(f"There is no finite field of order {q}", order=q)
    (p, t), = factors.items()
    return int(p), int(t)


def cyclotomic_coset(x: int, q: int, n: int) -> List[int]:
    """
    The q-cyclotomic coset of x modulo n, in orbit order [x, xq, xq^2, ...].
    """
    if n <= 0:
        raise InvalidLengthError("n must be positive")
    start = x % n
    coset = [start]
    y = (start * q) % n
    while y != start:
        coset.append(y)
        y = (y * q) % n
    return coset


def defining_set(values: Iterable[int], q: int, n: int,
                 flatten: bool = True) -> Union[List[int], Cosets]:
    """
    Union of the q-cyclotomic cosets modulo n of the numbers in `values`.

    With `flatten` the result is a single sorted list, otherwise the list of
    disjoint cosets in the order their first member was met.
    """
    cosets: Cosets = []
    seen = set()
    for x in values:
        if x % n in seen:
            continue
        cx = cyclotomic_coset(x, q, n)
        seen.update(cx)
        cosets.append(cx)
    log.debug(f"{q}-cyclotomic cosets modulo {n}: {cosets}")

    if flatten:
        return sorted(seen)
    return cosets


def flatten_cosets(cosets: Sequence[Sequence[int]]) -> List[int]:
    """Sorted union of a list of cosets."""
    return sorted(x for coset in cosets for x in coset)


def coset_representatives(cosets: Sequence[Sequence[int]]) -> List[int]:
    """Sorted list of the smallest member of every coset."""
    return sorted(min(coset) for coset in cosets)


def complement_cosets(q: int, n: int, cosets: Sequence[Sequence[int]]) -> Cosets:
    """The q-cyclotomic cosets partitioning {0, ..., n-1} minus the defining set."""
    used = set(flatten_cosets(cosets))
    return defining_set([x for x in range(n) if x not in used], q, n, flatten=False)


def dual_defining_set(defset: Sequence[int], n: int) -> List[int]:
    """Defining set of the dual of the length-n cyclic code with defining set `defset`."""
    used = set(defset)
    return sorted((n - i) % n for i in range(n) if i not in used)


def dual_cosets(q: int, n: int, cosets: Sequence[Sequence[int]]) -> Cosets:
    """The q-cyclotomic cosets of the dual defining set."""
    return defining_set(dual_defining_set(flatten_cosets(cosets), n), q, n, flatten=False)


def is_union_of_cosets(defset: Iterable[int], q: int, n: int) -> bool:
    """True if `defset` is closed under multiplication by q modulo n."""
    members = set(defset)
    return all((x * q) % n in members for x in members)


def quadratic_residues(n: int) -> List[int]:
    """Non-zero quadratic residues modulo the odd prime n."""
    if n <= 2 or not isprime(n):
        raise InvalidParameterError(f"Quadratic residues are only taken modulo an odd prime, got n={n}")
    return [r for r in _sympy_residues(n) if r != 0]
