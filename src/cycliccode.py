import logging
from math import gcd
from typing import Optional, Sequence, Tuple

import galois

from codeerrors import (
    ConstructionPreconditionError,
    InternalConsistencyError,
    InvalidDistanceError,
    InvalidFieldError,
    InvalidLengthError,
    InvalidParameterError,
)
from distancebounds import find_delta
from fieldutils import SplittingField, same_field, x_n_minus_one
from linearcode import LinearCode
from mathutils import (
    complement_cosets,
    coset_representatives,
    defining_set,
    dual_cosets,
    dual_defining_set,
    flatten_cosets,
    is_union_of_cosets,
    prime_power,
    quadratic_residues,
)
from standardform import is_zero, row_weights, standard_form

log = logging.getLogger(__name__)


def _check_length(q: int, n: int) -> None:
    prime_power(q)
    if n <= 1:
        raise InvalidLengthError(f"Cyclic codes need length n > 1, got n={n}")
    if gcd(q, n) != 1:
        raise InvalidLengthError(f"Length n={n} must be coprime to the field order q={q}")


def _shift_matrix(F, n: int, rows: int, coeffs):
    """`rows` shifts of the ascending coefficient vector `coeffs`."""
    width = len(coeffs)
    if rows + width - 1 > n:
        raise InternalConsistencyError(f"Too many coefficients for {rows} shifts of length {n}")
    M = F.Zeros((rows, n))
    for i in range(rows):
        M[i, i:i + width] = coeffs
    return M


def _build(q: int, n: int, cosets: Sequence[Sequence[int]]) -> dict:
    """
    Construct every ingredient of the cyclic code of length n over GF(q) whose
    defining set is the union of `cosets`.

    Returns a dict of parts consumed by CyclicCode._assign. Raises
    InternalConsistencyError if g, h and the matrices do not agree.
    """
    _check_length(q, n)
    cosets = [list(c) for c in cosets]
    defset = flatten_cosets(cosets)
    if len(set(defset)) != len(defset):
        raise InvalidParameterError("Cyclotomic cosets are not disjoint")
    if any(x < 0 or x >= n for x in defset):
        raise InvalidParameterError(f"Defining set must lie in 0..{n - 1}")
    if not defset:
        raise InvalidParameterError("Empty defining set defines the full space, not a cyclic code")
    if len(defset) == n:
        raise InvalidParameterError("Defining set covers every residue; the code is zero")
    if not is_union_of_cosets(defset, q, n):
        raise InvalidParameterError(f"Defining set is not a union of {q}-cyclotomic cosets modulo {n}")

    S = SplittingField(q, n)
    F = S.F
    comp = complement_cosets(q, n, cosets)
    k = n - len(defset)

    g_E = S.poly_from_exponents(defset)
    h_E = S.poly_from_exponents(flatten_cosets(comp))
    _, a, _ = galois.egcd(g_E, h_E)
    e_E = (a * g_E) % x_n_minus_one(n, S.E)
    g, h, e = S.lower_poly(g_E), S.lower_poly(h_E), S.lower_poly(e_E)
    log.debug(f"g(x) = {g}, h(x) = {h}, e(x) = {e}")

    G = _shift_matrix(F, n, k, g.coeffs[::-1])
    H = _shift_matrix(F, n, n - k, h.coeffs)
    G_stand, H_stand, P, _ = standard_form(G)

    delta, b, ht = find_delta(n, cosets)
    upper = int(row_weights(G[:1])[0])

    quotient, remainder = divmod(x_n_minus_one(n, F), g)
    if remainder != galois.Poly.Zero(F):
        raise InternalConsistencyError(f"Incorrect generator polynomial, does not divide x^{n} - 1")
    if quotient != h:
        raise InternalConsistencyError(
            "Division of x^n - 1 by the generator polynomial does not yield the parity-check polynomial")
    if not is_zero(G @ H.T):
        raise InternalConsistencyError("Generator and parity-check matrices are not transpose orthogonal")

    return dict(field=F, splitting=S, n=n, k=k, cosets=cosets, defset=defset,
                g=g, h=h, e=e, G=G, H=H, G_stand=G_stand, H_stand=H_stand, P=P,
                delta=delta, offset=b, ht=ht, lower=min(ht, upper), upper=upper)


def _is_bch(q: int, n: int, defset, delta: int, b: int) -> bool:
    return delta >= 2 and list(defset) == defining_set(range(b, b + delta - 1), q, n)


def _classify(parts: dict):
    if _is_bch(parts["field"].order, parts["n"], parts["defset"], parts["delta"], parts["offset"]):
        if parts["splitting"].m == 1 and parts["n"] == parts["field"].order - 1:
            return ReedSolomonCode
        return BCHCode
    return CyclicCode


def _bch_cosets(q: int, n: int, delta: int, b: int):
    if delta < 2:
        raise InvalidDistanceError(f"BCH codes require delta >= 2, got delta={delta}")
    _check_length(q, n)
    cosets = defining_set(range(b, b + delta - 1), q, n, flatten=False)
    if len(flatten_cosets(cosets)) == n:
        raise InvalidDistanceError(f"Design distance {delta} leaves no information symbols at length {n}")
    return cosets


def _bch_build(q: int, n: int, delta: int, b: int) -> dict:
    """
    Parts of the BCH code with design distance delta and offset b. When the
    first longest run of the defining set does not generate it again, the
    requested (delta, b) are kept as the BCH parameters.
    """
    parts = _build(q, n, _bch_cosets(q, n, delta, b))
    if not _is_bch(q, n, parts["defset"], parts["delta"], parts["offset"]):
        log.warning(f"Defining set of delta={delta}, b={b} is not generated by its longest run "
                    f"(delta={parts['delta']}, b={parts['offset']}); keeping the requested pair")
        parts["delta"], parts["offset"] = delta, b
    return parts


class CyclicCode(LinearCode):
    """
    Cyclic code of length n over GF(q) given by its q-cyclotomic cosets.

    Besides the LinearCode attributes it carries the splitting field of
    x^n - 1, the cosets and their sorted representatives, the defining set, the
    generator, parity-check and idempotent polynomials over GF(q), and the BCH
    bound (design_distance, offset) with its Hartmann-Tzeng refinement ht_bound.
    """

    _family = "cyclic"

    def __init__(self, q: int, n: int, cosets: Sequence[Sequence[int]]):
        self._assign(_build(q, n, cosets))
        log.info(f"Built {self!r} with defining set {self.defining_set}")

    @classmethod
    def _from_build(cls, parts: dict) -> "CyclicCode":
        code = cls.__new__(cls)
        code._assign(parts)
        log.info(f"Built {code!r} with defining set {code.defining_set}")
        return code

    def _assign(self, parts: dict, d: Optional[int] = None) -> None:
        self._set_core(parts["field"], parts["n"], parts["k"], parts["G"], parts["H"],
                       parts["G_stand"], parts["H_stand"], parts["P"],
                       lower=parts["lower"], upper=parts["upper"], d=d)
        self.splitting = parts["splitting"]
        self.cosets = parts["cosets"]
        self.coset_representatives = coset_representatives(self.cosets)
        self.defining_set = parts["defset"]
        self.generator_polynomial = parts["g"]
        self.parity_polynomial = parts["h"]
        self.idempotent = parts["e"]
        self.design_distance = parts["delta"]
        self.offset = parts["offset"]
        self.ht_bound = parts["ht"]

    def __repr__(self) -> str:
        q = self.field.order
        if self.d is None:
            return f"[{self.n}, {self.k}]_{q} {self._family} code"
        return f"[{self.n}, {self.k}, {self.d}]_{q} {self._family} code"

    # ------------------------------------------------------------------
    # accessors
    # ------------------------------------------------------------------

    def zeros(self):
        """beta^i for i in the defining set, over the splitting field."""
        return self.splitting.elements(self.defining_set)

    def nonzeros(self):
        used = set(self.defining_set)
        return self.splitting.elements([i for i in range(self.n) if i not in used])

    def minimal_polynomials(self):
        return [self.splitting.minimal_polynomial(r) for r in self.coset_representatives]

    def is_primitive(self) -> bool:
        return self.n == self.field.order ** self.splitting.m - 1

    def is_narrow_sense(self) -> bool:
        return self.offset == 1

    def is_reversible(self) -> bool:
        used = set(self.defining_set)
        return all((self.n - i) % self.n in used for i in used)

    def is_degenerate(self) -> bool:
        """True if h(x) divides x^r - 1 for some r < n."""
        for r in range(1, self.n):
            if x_n_minus_one(r, self.field) % self.parity_polynomial == galois.Poly.Zero(self.field):
                return True
        return False

    def bch_bound(self) -> int:
        return self.design_distance

    # ------------------------------------------------------------------
    # operators
    # ------------------------------------------------------------------

    def _same_ambient(self, other) -> bool:
        return isinstance(other, CyclicCode) and same_field(self.field, other.field) and self.n == other.n

    def is_subcode(self, other: LinearCode) -> bool:
        """C1 is a subcode of C2 iff the defining set of C2 lies in that of C1."""
        if self._same_ambient(other):
            return set(other.defining_set) <= set(self.defining_set)
        return super().is_subcode(other)

    def is_self_dual(self) -> bool:
        return dual_defining_set(self.defining_set, self.n) == self.defining_set

    def dual(self) -> "CyclicCode":
        """The dual, rebuilt from the dual cosets so its polynomials are stored."""
        q = self.field.order
        D = cyclic_code(q, self.n, dual_cosets(q, self.n, self.cosets))
        if self.weight_enumerator is not None:
            D.weight_enumerator = self.weight_enumerator.macwilliams_dual(self)
            D.set_minimum_distance(D.weight_enumerator.minimum_weight())
        return D

    def intersection(self, other: LinearCode) -> LinearCode:
        """Generated by lcm(g1, g2): the union of the defining sets."""
        if not self._same_ambient(other):
            return super().intersection(other)
        q = self.field.order
        union = set(self.defining_set) | set(other.defining_set)
        if len(union) == self.n:
            raise ConstructionPreconditionError("The intersection of the codes is the zero code")
        return cyclic_code(q, self.n, defining_set(sorted(union), q, self.n, flatten=False))

    def code_sum(self, other: LinearCode) -> LinearCode:
        """Generated by gcd(g1, g2): the intersection of the defining sets."""
        if not self._same_ambient(other):
            return super().code_sum(other)
        q = self.field.order
        common = set(self.defining_set) & set(other.defining_set)
        if not common:
            raise ConstructionPreconditionError("The sum of the codes has an empty defining set")
        return cyclic_code(q, self.n, defining_set(sorted(common), q, self.n, flatten=False))

    def complement(self) -> "CyclicCode":
        """The cyclic code whose cosets are the complement of this code's."""
        q = self.field.order
        D = cyclic_code(q, self.n, complement_cosets(q, self.n, self.cosets))
        if self.parity_polynomial != D.generator_polynomial or \
                D.idempotent != galois.Poly.One(self.field) - self.idempotent:
            raise InternalConsistencyError("Error constructing the complement cyclic code")
        return D

    def bch_supercode(self) -> "BCHCode":
        """The BCH code of this code's BCH bound and offset, which contains it."""
        if isinstance(self, BCHCode):
            return self
        B = bch_code(self.field.order, self.n, self.design_distance, self.offset)
        if not self.is_subcode(B):
            raise InternalConsistencyError("Failed to create BCH supercode")
        return B


class BCHCode(CyclicCode):
    """
    BCH code: the cyclic code whose defining set is generated by the
    delta - 1 consecutive exponents b, b+1, ..., b+delta-2.
    """

    _family = "BCH"

    def __init__(self, q: int, n: int, delta: int, b: int = 0):
        self._assign(_bch_build(q, n, delta, b))
        log.info(f"Built {self!r}: design distance {self.design_distance}, offset {self.offset}")


class ReedSolomonCode(BCHCode):
    """Reed-Solomon code: a BCH code of length q - 1; d = n - k + 1 exactly."""

    _family = "Reed-Solomon"

    def __init__(self, q: int, d: int, b: int = 0):
        if d < 2:
            raise InvalidDistanceError(f"Reed-Solomon codes require d >= 2, got d={d}")
        if q <= 4:
            raise InvalidFieldError(f"Field too small for a Reed-Solomon code: q={q}", order=q)
        prime_power(q)
        n = q - 1
        self._assign(_bch_build(q, n, d, b))
        log.info(f"Built {self!r}")

    def _assign(self, parts: dict, d: Optional[int] = None) -> None:
        super()._assign(parts, d=parts["n"] - parts["k"] + 1)


def cyclic_code(q: int, n: int, cosets: Sequence[Sequence[int]]) -> CyclicCode:
    """
    Build the cyclic code of length n over GF(q) with the given cosets and
    return it as a ReedSolomonCode, BCHCode or CyclicCode by its defining set.
    """
    parts = _build(q, n, cosets)
    return _classify(parts)._from_build(parts)


def bch_code(q: int, n: int, delta: int, b: int = 0) -> BCHCode:
    """BCH code with design distance delta and offset b; Reed-Solomon when n = q - 1."""
    parts = _bch_build(q, n, delta, b)
    return _classify(parts)._from_build(parts)


def cyclic_code_from_polynomial(n: int, g: galois.Poly) -> CyclicCode:
    """The cyclic code of length n generated by g, which must divide x^n - 1."""
    F = g.field
    q = F.order
    _check_length(q, n)
    if g.degree < 1:
        raise InvalidParameterError("A constant generator polynomial defines the full space")
    if x_n_minus_one(n, F) % g != galois.Poly.Zero(F):
        raise InvalidParameterError(f"Generator polynomial does not divide x^{n} - 1")

    S = SplittingField(q, n)
    exps = S.roots_to_exponents(S.lift_poly(g).roots())
    return cyclic_code(q, n, defining_set(exps, q, n, flatten=False))


def quadratic_residue_code(q: int, n: int) -> CyclicCode:
    """Cyclic code of prime length n whose defining set is the quadratic residues."""
    residues = quadratic_residues(n)
    if not is_union_of_cosets(residues, q, n):
        raise InvalidParameterError(f"q={q} is not a quadratic residue modulo {n}")
    return cyclic_code(q, n, defining_set(residues, q, n, flatten=False))


def is_cyclic(code: LinearCode) -> Tuple[bool, Optional[CyclicCode]]:
    """
    Decide whether a linear code is cyclic. When it is, the code is rebuilt from
    the gcd of its generator rows (read as polynomials) and returned as well.
    """
    if isinstance(code, CyclicCode):
        return True, code
    F = code.field
    if gcd(code.n, F.order) != 1 or code.k == code.n:
        return False, None

    rows = code.G
    g = galois.Poly(rows[0][::-1])
    for r in range(1, rows.shape[0]):
        g = galois.gcd(g, galois.Poly(rows[r][::-1]))
    if g.degree != code.n - code.k:
        return False, None
    if x_n_minus_one(code.n, F) % g != galois.Poly.Zero(F):
        return False, None

    shifts = _shift_matrix(F, code.n, code.k, g.coeffs[::-1])
    if any(not code.is_codeword(row) for row in shifts):
        return False, None
    return True, cyclic_code_from_polynomial(code.n, g)
