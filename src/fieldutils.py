import logging
from typing import Dict, Iterable, List

import numpy as np
import galois

from codeerrors import InternalConsistencyError
from mathutils import cyclotomic_coset, order, prime_power

log = logging.getLogger(__name__)


def base_field(q: int):
    """Return GF(q), raising InvalidFieldError when q is not a prime power."""
    prime_power(q)
    return galois.GF(q)


def same_field(F1, F2) -> bool:
    """True if two galois field classes describe the same field."""
    if F1 is F2:
        return True
    return F1.order == F2.order and F1.irreducible_poly == F2.irreducible_poly


def x_n_minus_one(n: int, field) -> galois.Poly:
    """The polynomial x^n - 1 over `field`."""
    return galois.Poly.Degrees([n], field=field) - galois.Poly.One(field)


class SplittingField:
    """
    Splitting field E = GF(q^m) of x^n - 1 over F = GF(q), where m is the
    multiplicative order of q modulo n, together with a primitive n-th root
    of unity beta and the embedding of F into E.
    """

    def __init__(self, q: int, n: int):
        self.p, self.t = prime_power(q)
        self.q, self.n = q, n
        self.m = order(q, n)
        self.F = galois.GF(q)
        self.E = self.F if self.m == 1 else galois.GF(q ** self.m)
        alpha = self.E.primitive_element
        self.beta = alpha ** ((q ** self.m - 1) // n)
        self._powers = [int(self.beta ** i) for i in range(n)]
        self._lift = self._embedding()
        self._lower = {int(v): a for a, v in enumerate(self._lift)}
        log.debug(f"Splitting field of x^{n} - 1 over GF({q}): GF({self.E.order}), m={self.m}")

    def _embedding(self) -> np.ndarray:
        # Integer a in F has base-p digits equal to its coefficients in F's
        # polynomial basis; map the basis root onto a root of F's modulus in E.
        if self.E is self.F or self.t == 1:
            return np.arange(self.q, dtype=np.int64)
        modulus = galois.Poly(self.F.irreducible_poly.coeffs.view(np.ndarray), field=self.E)
        gamma = modulus.roots()[0]
        basis = [gamma ** i for i in range(self.t)]
        table = []
        for a in range(self.q):
            v = self.E(0)
            digits = a
            for i in range(self.t):
                digits, c = divmod(digits, self.p)
                if c:
                    v = v + self.E(c) * basis[i]
            table.append(int(v))
        return np.array(table, dtype=np.int64)

    def lift(self, arr):
        """Map an array over F into E."""
        if self.E is self.F:
            return arr.copy()
        return self.E(self._lift[arr.view(np.ndarray)])

    def lower(self, arr):
        """Map an array over E whose entries lie in F back onto F."""
        if self.E is self.F:
            return arr.copy()
        ints = arr.view(np.ndarray)
        try:
            out = [self._lower[int(v)] for v in ints.flat]
        except KeyError as err:
            raise InternalConsistencyError(f"Element {err} of GF({self.E.order}) is not in GF({self.q})") from err
        return self.F(np.array(out, dtype=np.int64).reshape(ints.shape))

    def lift_poly(self, f: galois.Poly) -> galois.Poly:
        return galois.Poly(self.lift(f.coeffs))

    def lower_poly(self, f: galois.Poly) -> galois.Poly:
        return galois.Poly(self.lower(f.coeffs))

    def power(self, i: int):
        """beta^i as an element of E."""
        return self.E(self._powers[i % self.n])

    def elements(self, exponents: Iterable[int]):
        """[beta^i for i in exponents] as an array over E."""
        return self.E([self._powers[i % self.n] for i in exponents])

    def exponent_map(self) -> Dict[int, int]:
        """Map each n-th root of unity (as an integer of E) to its exponent of beta."""
        return {v: i for i, v in enumerate(self._powers)}

    def poly_from_exponents(self, exponents: Iterable[int]) -> galois.Poly:
        """The product of (x - beta^i) over `exponents`, as a polynomial over E."""
        exponents = list(exponents)
        if not exponents:
            return galois.Poly.One(self.E)
        return galois.Poly.Roots(self.elements(exponents))

    def minimal_polynomial(self, x: int) -> galois.Poly:
        """
        Minimal polynomial of beta^x over F: the product of (x - beta^j) over
        the cyclotomic coset of x.
        """
        return self.lower_poly(self.poly_from_exponents(cyclotomic_coset(x, self.q, self.n)))

    def roots_to_exponents(self, roots) -> List[int]:
        """Exponents i with beta^i equal to each of `roots`."""
        lookup = self.exponent_map()
        exps = []
        for r in roots.view(np.ndarray).flat:
            if int(r) not in lookup:
                raise InternalConsistencyError(f"Root {int(r)} is not an {self.n}-th root of unity")
            exps.append(lookup[int(r)])
        return sorted(exps)
