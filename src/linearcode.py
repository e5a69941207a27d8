import copy
import itertools
import logging
from fractions import Fraction
from typing import Optional, Sequence, Tuple

import numpy as np
import galois

from codeerrors import (
    ConstructionPreconditionError,
    InternalConsistencyError,
    InvalidFieldError,
    InvalidParameterError,
)
from fieldutils import same_field
from mathutils import prime_power
from standardform import (
    is_zero,
    min_row_weight,
    parity_check_from,
    rank,
    remove_zero_rows,
    row_weights,
    standard_form,
)

log = logging.getLogger(__name__)


def singleton_bound(n: int, a: int) -> int:
    """n - a + 1: the largest distance of a dimension-a code, or vice versa."""
    if n < 0 or a < 0 or a > n:
        raise InvalidParameterError(f"Invalid parameters for the Singleton bound: n={n}, k/d={a}")
    return n - a + 1


def _generator_parts(G):
    """Standard form, parity-check matrix and row-weight upper bound of G."""
    G_stand, H_stand, P, k = standard_form(G)
    H = parity_check_from(G, H_stand, P)
    ub = min(min_row_weight(G), min_row_weight(G_stand))
    return G_stand, H_stand, P, k, H, ub


class LinearCode:
    """
    Linear code over a finite field.

    Attributes:
        field: galois field class GF(q) of the matrices.
        n (int): length.
        k (int): dimension.
        d (Optional[int]): minimum distance, None while only bounds are known.
        lower_bound, upper_bound (int): 1 <= lower_bound <= d <= upper_bound <= n.
        G, H: generator and parity-check matrices, G @ H.T == 0.
        G_stand, H_stand: systematic forms [I | A] and [-A^T | I].
        P (Optional[List[int]]): column j of G_stand is column P[j] of G;
            None when the reduction needed no column swap.
        G_orig, H_orig: matrices this code was built or derived from, or None.
        weight_enumerator: optional enumerator with `macwilliams_dual(code)`
            and `minimum_weight()`; used by `dual`.
    """

    def __init__(self, G, parity: bool = False):
        """
        Build the code generated by the rows of G, or, with `parity`, the code
        whose parity-check matrix is G.

        Zero rows are removed and G need not have full rank. Zero columns are kept.

        Raises:
            InvalidParameterError: if G is not a 2-D FieldArray or is all zero.
        """
        if not isinstance(G, galois.FieldArray) or G.ndim != 2:
            raise InvalidParameterError("LinearCode expects a 2-D galois FieldArray")
        if is_zero(G):
            raise InvalidParameterError("Zero matrix passed into the LinearCode constructor")

        field = type(G)
        M = remove_zero_rows(G)
        M_stand, M_stand_parity, P, r, N, ub = _generator_parts(M)
        n = M.shape[1]
        if parity:
            if r == n:
                raise InvalidParameterError("A full-rank parity-check matrix defines the zero code")
            ub = min(min_row_weight(N), min_row_weight(M_stand_parity))
            self._set_core(field, n, n - r, N, M, M_stand_parity, M_stand, P,
                           upper=ub, H_orig=G.copy())
        else:
            self._set_core(field, n, r, M, N, M_stand, M_stand_parity, P,
                           upper=ub, G_orig=G.copy())
        log.info(f"Built {self!r}")

    def _set_core(self, field, n: int, k: int, G, H, G_stand, H_stand, P,
                  lower: int = 1, upper: Optional[int] = None, d: Optional[int] = None,
                  G_orig=None, H_orig=None, weight_enumerator=None) -> None:
        self.field = field
        self.n, self.k = n, k
        self.G, self.H = G, H
        self.G_stand, self.H_stand = G_stand, H_stand
        self.P = list(P) if P is not None else None
        self.G_orig, self.H_orig = G_orig, H_orig
        self.weight_enumerator = weight_enumerator

        if upper is None:
            upper = n
        if d is not None:
            lower = upper = d
        if not 1 <= lower <= upper <= n:
            raise InternalConsistencyError(
                f"Inconsistent distance bounds {lower} <= d <= {upper} for length {n}")
        self.lower_bound, self.upper_bound = lower, upper
        self.d = lower if lower == upper else None

        if H.shape[0] and not is_zero(G @ H.T):
            raise InternalConsistencyError("Generator and parity-check matrices are not transpose orthogonal")

    @classmethod
    def _from_parts(cls, field, n: int, k: int, G, H, G_stand, H_stand, P, **kwargs):
        code = cls.__new__(cls)
        code._set_core(field, n, k, G, H, G_stand, H_stand, P, **kwargs)
        return code

    @classmethod
    def _derived(cls, G, lower: int = 1, upper: Optional[int] = None, d: Optional[int] = None,
                 G_orig=None, H_orig=None) -> "LinearCode":
        """A LinearCode generated by G, recomputing the standard form and bounds."""
        G = remove_zero_rows(G)
        G_stand, H_stand, P, k, H, ub = _generator_parts(G)
        if upper is not None:
            ub = min(ub, upper)
        return LinearCode._from_parts(type(G), G.shape[1], k, G, H, G_stand, H_stand, P,
                                      lower=lower, upper=ub, d=d, G_orig=G_orig, H_orig=H_orig)

    def __repr__(self) -> str:
        q = self.field.order
        if self.d is None:
            return f"[{self.n}, {self.k}]_{q} linear code"
        return f"[{self.n}, {self.k}, {self.d}]_{q} linear code"

    # ------------------------------------------------------------------
    # accessors
    # ------------------------------------------------------------------

    @property
    def length(self) -> int:
        return self.n

    @property
    def dimension(self) -> int:
        return self.k

    @property
    def minimum_distance(self) -> Optional[int]:
        """The minimum distance, or None if only bounds are known."""
        return self.d

    def generator_matrix(self, standard: bool = False):
        return self.G_stand if standard else self.G

    def parity_check_matrix(self, standard: bool = False):
        return self.H_stand if standard else self.H

    def basis(self):
        """k x n generator matrix of full rank, in the code's own column order."""
        if self.P is None:
            return self.G_stand
        return self.G_stand[:, np.argsort(self.P)]

    def original_generator_matrix(self):
        """
        The matrix this code was built from or derived by (puncturing,
        extending, ...), not necessarily a generator matrix of the code.
        """
        return self.G_orig

    def original_parity_check_matrix(self):
        return self.H_orig

    @property
    def cardinality(self) -> int:
        return self.field.order ** self.k

    @property
    def rate(self) -> float:
        return self.k / self.n

    def relative_distance(self) -> Optional[Fraction]:
        if self.d is None:
            return None
        return Fraction(self.d, self.n)

    def singleton_bound(self) -> int:
        return singleton_bound(self.n, self.k)

    def is_mds(self) -> Optional[bool]:
        """
        True if the code meets the Singleton bound d = n - k + 1.

        Returns None when the distance bounds cannot decide it.
        """
        sb = self.singleton_bound()
        if self.d is not None:
            return self.d == sb
        if self.lower_bound == sb:
            return True
        if self.upper_bound < sb:
            return False
        return None

    def genus(self) -> Optional[int]:
        if self.d is None:
            return None
        return self.n + 1 - self.k - self.d

    def number_correctable_errors(self) -> int:
        """floor((d - 1) / 2), using the lower bound while d is unknown."""
        d = self.d if self.d is not None else self.lower_bound
        return (d - 1) // 2

    # ------------------------------------------------------------------
    # distance bounds
    # ------------------------------------------------------------------

    def set_distance_lower_bound(self, l: int) -> None:
        """Raise the lower bound to l if l is better than the current one."""
        if not 1 <= l <= self.upper_bound:
            raise InvalidParameterError(
                f"The lower bound must be between 1 and the upper bound {self.upper_bound}; got {l}")
        if self.lower_bound < l:
            self.lower_bound = l
        if self.lower_bound == self.upper_bound and self.d is None:
            log.warning("The new lower bound is equal to the upper bound; setting the minimum distance.")
            self.d = self.lower_bound

    def set_distance_upper_bound(self, u: int) -> None:
        """Lower the upper bound to u if u is better than the current one."""
        if not self.lower_bound <= u <= self.n:
            raise InvalidParameterError(
                f"The upper bound must be between the lower bound {self.lower_bound} and n={self.n}; got {u}")
        if u < self.upper_bound:
            self.upper_bound = u
        if self.lower_bound == self.upper_bound and self.d is None:
            log.warning("The new upper bound is equal to the lower bound; setting the minimum distance.")
            self.d = self.lower_bound

    def set_minimum_distance(self, d: int) -> None:
        """Fix the minimum distance; only 1 <= d <= n is checked."""
        if not 1 <= d <= self.n:
            raise InvalidParameterError(f"The minimum distance must satisfy 1 <= d <= {self.n}; got d={d}")
        self.d = d
        self.lower_bound = self.upper_bound = d

    # ------------------------------------------------------------------
    # vectors
    # ------------------------------------------------------------------

    def _vector(self, v, size: int):
        vec = self.field(v) if not isinstance(v, self.field) else v
        vec = vec.reshape(-1)
        if vec.shape != (size,):
            raise InvalidParameterError(f"Vector has incorrect length; expected {size}, received {vec.shape}")
        return vec

    def encode(self, v):
        """Return v @ G for a message v of length nrows(G)."""
        return self._vector(v, self.G.shape[0]) @ self.G

    def syndrome(self, v):
        """Return H @ v for a word v of length n."""
        vec = self._vector(v, self.n)
        if self.H.shape[0] == 0:
            return self.field.Zeros(0)
        return self.H @ vec

    def is_codeword(self, v) -> bool:
        return is_zero(self.syndrome(v))

    def codewords(self):
        """All q^k codewords, one per row."""
        messages = self.field(np.array(list(itertools.product(range(self.field.order), repeat=self.k))))
        return messages @ self.basis()

    # ------------------------------------------------------------------
    # relations
    # ------------------------------------------------------------------

    def _check_compatible(self, other: "LinearCode", what: str) -> None:
        if not same_field(self.field, other.field):
            raise ConstructionPreconditionError(f"Codes must be over the same field in {what}")
        if self.n != other.n:
            raise ConstructionPreconditionError(f"Codes must have the same length in {what}")

    def is_subcode(self, other: "LinearCode") -> bool:
        """True if every row of G has zero syndrome under other's parity-check matrix."""
        if not same_field(self.field, other.field) or self.n != other.n or self.k > other.k:
            return False
        if other.H.shape[0] == 0:
            return True
        return is_zero(self.G @ other.H.T)

    def is_equivalent(self, other: "LinearCode") -> bool:
        return self.is_subcode(other) and other.is_subcode(self)

    def is_self_dual(self) -> bool:
        return 2 * self.k == self.n and self.is_self_orthogonal()

    def is_self_orthogonal(self) -> bool:
        """True if the code is contained in its dual."""
        return is_zero(self.G @ self.G.T)

    def is_dual_containing(self) -> bool:
        """True if the dual is contained in the code."""
        if self.H.shape[0] == 0:
            return True
        return is_zero(self.H @ self.H.T)

    # ------------------------------------------------------------------
    # derived codes
    # ------------------------------------------------------------------

    def dual(self) -> "LinearCode":
        """
        The dual code: generator and parity-check roles are swapped. If a weight
        enumerator is attached, the dual enumerator and the exact dual distance
        are obtained through the MacWilliams identity.
        """
        if self.k == self.n:
            raise ConstructionPreconditionError("The dual of the full space is the zero code")
        ub = min(min_row_weight(self.H), min_row_weight(self.H_stand))
        d = None
        enumerator = None
        if self.weight_enumerator is not None:
            enumerator = self.weight_enumerator.macwilliams_dual(self)
            d = enumerator.minimum_weight()
        return LinearCode._from_parts(
            self.field, self.n, self.n - self.k,
            self.H.copy(), self.G.copy(), self.H_stand.copy(), self.G_stand.copy(), self.P,
            upper=ub, d=d,
            G_orig=copy.deepcopy(self.H_orig), H_orig=copy.deepcopy(self.G_orig),
            weight_enumerator=enumerator)

    def code_sum(self, other: "LinearCode") -> "LinearCode":
        """The code spanned by the codewords of both codes."""
        self._check_compatible(other, "the sum of codes")
        return LinearCode._derived(np.vstack((self.G, other.G)))

    def intersection(self, other: "LinearCode") -> "LinearCode":
        """The code of the words lying in both codes."""
        self._check_compatible(other, "the intersection of codes")
        if self.H.shape[0] == 0:
            return copy.deepcopy(other)
        if other.H.shape[0] == 0:
            return copy.deepcopy(self)
        H = np.vstack((self.H, other.H))
        if rank(H) == self.n:
            raise ConstructionPreconditionError("The intersection of the codes is the zero code")
        code = LinearCode(H, parity=True)
        code.set_distance_lower_bound(max(self.lower_bound, other.lower_bound))
        return code

    def puncture(self, cols: Sequence[int]) -> "LinearCode":
        """Delete the columns `cols` of the generator matrix."""
        cols = sorted(set(cols))
        if not cols:
            return copy.deepcopy(self)
        if cols[0] < 0 or cols[-1] >= self.n:
            raise InvalidParameterError("Columns to puncture are not a subset of the index set")
        if len(cols) == self.n:
            raise ConstructionPreconditionError("Cannot puncture all columns of a generator matrix")

        drop = set(cols)
        G = self.G[:, [j for j in range(self.n) if j not in drop]]
        if is_zero(G):
            raise ConstructionPreconditionError("Puncturing leaves only the zero code")
        return LinearCode._derived(G, lower=max(1, self.lower_bound - len(cols)),
                                   G_orig=self.G.copy(), H_orig=self.H.copy())

    def expurgate(self, rows: Sequence[int]) -> "LinearCode":
        """Delete the rows `rows` of the generator matrix."""
        rows = sorted(set(rows))
        if not rows:
            return copy.deepcopy(self)
        nr = self.G.shape[0]
        if rows[0] < 0 or rows[-1] >= nr:
            raise InvalidParameterError("Rows to expurgate are not a subset of the index set")
        if len(rows) == nr:
            raise ConstructionPreconditionError("Cannot expurgate all rows of a generator matrix")

        drop = set(rows)
        G = self.G[[i for i in range(nr) if i not in drop]]
        return LinearCode._derived(G, lower=self.lower_bound,
                                   G_orig=self.G.copy(), H_orig=self.H.copy())

    def augment(self, M) -> "LinearCode":
        """Append the rows of M to the generator matrix."""
        if not isinstance(M, galois.FieldArray) or not same_field(type(M), self.field):
            raise ConstructionPreconditionError("Rows to augment must have the same base field as the code")
        M = M.reshape(1, -1) if M.ndim == 1 else M
        if M.shape[1] != self.n:
            raise ConstructionPreconditionError(
                "Rows to augment must have the same number of columns as the generator matrix")
        if is_zero(M):
            raise InvalidParameterError("Zero matrix passed to augment")
        G = np.vstack((self.G, remove_zero_rows(M)))
        return LinearCode._derived(G, G_orig=self.G.copy(), H_orig=self.H.copy())

    def extend(self) -> "LinearCode":
        """
        Even-like extension: append a column making every generator row sum to zero.

        A known binary distance d becomes d (even) or d + 1 (odd); over larger
        fields the new distance is d or d + 1.
        """
        F = self.field
        col = F.Zeros(self.G.shape[0])
        for j in range(self.n):
            col = col + self.G[:, j]
        G = np.hstack((self.G, (-col).reshape(-1, 1)))

        top = F.Ones((1, self.n + 1))
        H = np.vstack((top, np.hstack((self.H, F.Zeros((self.H.shape[0], 1))))))
        G_stand, H_stand, P, k = standard_form(G)
        ub = min(min_row_weight(G), min_row_weight(G_stand))

        d = None
        if self.d is not None:
            if F.order == 2:
                d = self.d if self.d % 2 == 0 else self.d + 1
                lower, upper = d, d
            else:
                lower, upper = self.d, min(self.d + 1, ub)
        else:
            lower, upper = self.lower_bound, ub
        return LinearCode._from_parts(F, self.n + 1, k, G, H, G_stand, H_stand, P,
                                      lower=lower, upper=upper, d=d,
                                      G_orig=self.G.copy(), H_orig=self.H.copy())

    def shorten(self, L: Sequence[int]) -> "LinearCode":
        """
        Shorten on the coordinates L: keep the codewords vanishing on L and
        delete those coordinates, computed as dual(puncture(dual(C), L)).
        """
        if not list(L):
            return copy.deepcopy(self)
        return self.dual().puncture(L).dual()

    def lengthen(self) -> "LinearCode":
        """Augment the all-ones row, then extend."""
        return self.augment(self.field.Ones((1, self.n))).extend()

    def subcode(self, k: int) -> "LinearCode":
        """A k-dimensional subcode spanned by the first k rows of the reduced basis."""
        if not 1 <= k <= self.k:
            raise InvalidParameterError(f"Cannot construct a {k}-dimensional subcode of a {self.k}-dimensional code")
        if k == self.k:
            return copy.deepcopy(self)
        return LinearCode._derived(self.basis()[:k], lower=self.lower_bound)

    def subcode_from_rows(self, rows: Sequence[int]) -> "LinearCode":
        """The subcode spanned by the listed rows of the generator matrix."""
        rows = sorted(set(rows))
        if not rows:
            raise InvalidParameterError("Row index set empty in subcode")
        if rows[0] < 0 or rows[-1] >= self.G.shape[0]:
            raise InvalidParameterError("Rows are not a subset of the index set")
        return LinearCode._derived(self.G[rows], lower=self.lower_bound)

    def quotient(self, sub: "LinearCode") -> "LinearCode":
        """
        The code C / sub spanned by rows of C completing a basis of `sub`
        to a basis of C.
        """
        if not sub.is_subcode(self):
            raise ConstructionPreconditionError("The divisor must be a subcode of the code")
        if sub.k == self.k:
            raise ConstructionPreconditionError("The quotient of a code by an equivalent code is the zero code")

        rows = self.basis()
        basis = sub.basis()
        current = sub.k
        chosen = []
        for i in range(rows.shape[0]):
            trial = np.vstack((basis, rows[i:i + 1]))
            if rank(trial) > current:
                basis = trial
                current += 1
                chosen.append(i)
            if current == self.k:
                break

        Q = rows[chosen]
        for row in Q:
            if sub.is_codeword(row):
                raise InternalConsistencyError("Error in creation of basis for the quotient code")
        return LinearCode._derived(Q, lower=self.lower_bound)

    def permute(self, order: Sequence[int]) -> "LinearCode":
        """The code whose generator matrix has its columns in the given order."""
        order = list(order)
        if sorted(order) != list(range(self.n)):
            raise InvalidParameterError("Column order must be a permutation of range(n)")
        return LinearCode._derived(self.G[:, order], lower=self.lower_bound,
                                   upper=self.upper_bound, d=self.d)

    def hull(self) -> Tuple[Optional["LinearCode"], int]:
        """The intersection of the code and its dual, with its dimension."""
        if self.H.shape[0] == 0:
            return None, 0
        M = np.vstack((self.H, self.G))
        if rank(M) == self.n:
            return None, 0
        code = LinearCode(M, parity=True)
        code.set_distance_lower_bound(self.lower_bound)
        return code, code.k

    def is_lcd(self) -> bool:
        """True if the code is linear complementary dual (trivial hull)."""
        return self.hull()[1] == 0

    def _hermitian_exponent(self) -> int:
        p, t = prime_power(self.field.order)
        if t % 2:
            raise InvalidFieldError("Hermitian duals need a field of square order", order=self.field.order)
        return p ** (t // 2)

    def _hermitian_conjugate(self, M):
        return M ** self._hermitian_exponent()

    def hermitian_dual(self) -> "LinearCode":
        """The Hermitian dual of a code over a quadratic extension."""
        return LinearCode(self._hermitian_conjugate(self.G)).dual()

    def is_hermitian_self_orthogonal(self) -> bool:
        return self.is_subcode(self.hermitian_dual())

    def is_hermitian_self_dual(self) -> bool:
        return 2 * self.k == self.n and self.is_hermitian_self_orthogonal()

    def is_hermitian_dual_containing(self) -> bool:
        """True if the Hermitian dual is contained in the code."""
        self._hermitian_exponent()
        if self.k == self.n:
            return True
        return self.hermitian_dual().is_subcode(self)

    def hermitian_hull(self) -> Tuple[Optional["LinearCode"], int]:
        """The intersection of the code and its Hermitian dual, with its dimension."""
        M = self._hermitian_conjugate(self.G)
        if self.H.shape[0]:
            M = np.vstack((self.H, M))
        if rank(M) == self.n:
            return None, 0
        code = LinearCode(M, parity=True)
        code.set_distance_lower_bound(self.lower_bound)
        return code, code.k

    def is_hermitian_lcd(self) -> bool:
        """True if the Hermitian hull is trivial."""
        return self.hermitian_hull()[1] == 0

    # ------------------------------------------------------------------
    # subfields
    # ------------------------------------------------------------------

    def _subfield_rows(self, M):
        """Replace every entry of M by its coordinates over GF(p), one row per coordinate."""
        vec = M.vector()
        return vec.transpose(0, 2, 1).reshape(-1, M.shape[1])

    def expanded_code(self) -> "LinearCode":
        """
        The code over the prime subfield GF(p) obtained by writing every symbol
        of every codeword in the polynomial basis of GF(p^t). An [n, k] code
        becomes an [n t, k t] code.
        """
        F = self.field
        t = F.degree
        B = self.basis()
        scalars = F.primitive_element ** np.arange(t)
        rows = np.vstack([w * B for w in scalars])
        G = rows.vector().reshape(rows.shape[0], self.n * t)
        code = LinearCode(G)
        if code.k != self.k * t:
            raise InternalConsistencyError(f"Unexpected dimension {code.k} of the expanded code")
        code.set_distance_lower_bound(self.lower_bound)
        return code

    def subfield_subcode(self) -> "LinearCode":
        """The codewords with every entry in the prime subfield GF(p)."""
        K = self.field.prime_subfield
        if self.H.shape[0] == 0:
            return LinearCode(K.Identity(self.n))
        H = self._subfield_rows(self.H)
        if rank(H) == self.n:
            raise ConstructionPreconditionError("The subfield subcode is the zero code")
        code = LinearCode(H, parity=True)
        code.set_distance_lower_bound(self.lower_bound)
        return code

    def trace_code(self) -> "LinearCode":
        """The trace code over GF(p), computed by Delsarte's theorem as dual(subfield_subcode(dual(C)))."""
        return self.dual().subfield_subcode().dual()

    # ------------------------------------------------------------------
    # binary divisibility
    # ------------------------------------------------------------------

    def _binary_rows(self) -> np.ndarray:
        if self.field.order != 2:
            raise InvalidFieldError("Even-ness is only defined for binary codes", order=self.field.order)
        return self.G.view(np.ndarray).astype(np.int64)

    def is_even(self) -> bool:
        # every generator row of even weight
        rows = self._binary_rows()
        return bool(np.all(rows.sum(axis=1) % 2 == 0))

    def is_doubly_even(self) -> bool:
        rows = self._binary_rows()
        if np.any(rows.sum(axis=1) % 4):
            return False
        for r1, r2 in itertools.combinations(range(rows.shape[0]), 2):
            if ((rows[r1] ^ rows[r2]).sum()) % 4:
                return False
        return True

    def is_triply_even(self) -> bool:
        # Ward's divisibility conditions
        rows = self._binary_rows()
        nr = rows.shape[0]
        if np.any(rows.sum(axis=1) % 8):
            return False
        for r1, r2 in itertools.combinations(range(nr), 2):
            if (rows[r1] & rows[r2]).sum() % 4:
                return False
        for r1, r2, r3 in itertools.combinations(range(nr), 3):
            if (rows[r1] & rows[r2] & rows[r3]).sum() % 2:
                return False
        return True

    def even_subcode(self) -> Optional["LinearCode"]:
        """The subcode of even-weight words, or None if it is the zero code."""
        self._binary_rows()
        ones = self.field.Ones((1, self.n))
        M = ones if self.H.shape[0] == 0 else np.vstack((self.H, ones))
        if rank(M) == self.n:
            return None
        code = LinearCode(M, parity=True)
        code.set_distance_lower_bound(max(2, self.lower_bound))
        return code

    def doubly_even_subcode(self) -> Optional["LinearCode"]:
        """
        A subcode whose words all have weight divisible by four, or None if it
        is the zero code.

        Inside the even subcode, keep the words meeting every even word in an
        even number of positions; on that space half the weight mod 2 is linear,
        and its kernel is returned.
        """
        E = self.even_subcode()
        if E is None:
            return None
        B = E.basis()
        N = (B @ B.T).null_space()
        if N.shape[0] == 0:
            return None
        R = N @ B
        half = self.field(((row_weights(R) // 2) % 2).reshape(1, -1))
        K = half.null_space()
        if K.shape[0] == 0:
            return None
        code = LinearCode(K @ R)
        code.set_distance_lower_bound(4 * max(1, -(-self.lower_bound // 4)))
        return code
