import copy
import logging

import numpy as np

from codeerrors import ConstructionPreconditionError, InternalConsistencyError, InvalidParameterError
from fieldutils import same_field
from linearcode import LinearCode
from standardform import (
    direct_sum_matrix,
    is_zero,
    kronecker,
    min_row_weight,
    remove_zero_rows,
    standard_form,
)

log = logging.getLogger(__name__)


def _require_same_field(what: str, *codes: LinearCode) -> None:
    F = codes[0].field
    if not all(same_field(F, C.field) for C in codes[1:]):
        raise ConstructionPreconditionError(f"All codes must be over the same base field in {what}")


def _require_same_length(what: str, *codes: LinearCode) -> None:
    if len({C.n for C in codes}) != 1:
        raise ConstructionPreconditionError(f"All codes must have the same length in {what}")


def _require_proper_subcode(what: str, small: LinearCode, big: LinearCode, labels: str) -> None:
    if not small.is_subcode(big):
        raise ConstructionPreconditionError(f"The {labels} must be nested in {what}")
    if small.k == big.k:
        raise ConstructionPreconditionError(f"The {labels} must be properly nested in {what}")


def _assemble(G, H, lower: int, upper: int, d=None, expected_k=None) -> LinearCode:
    """A LinearCode from a generator matrix with a known parity-check matrix H."""
    F = type(G)
    G_stand, H_stand, P, k = standard_form(G)
    if expected_k is not None and k != expected_k:
        raise InternalConsistencyError(f"Unexpected dimension {k}; expected {expected_k}")
    ub = min(min_row_weight(G), min_row_weight(G_stand))
    return LinearCode._from_parts(F, G.shape[1], k, G, H, G_stand, H_stand, P,
                                  lower=lower, upper=min(upper, ub), d=d)


def direct_sum(C1: LinearCode, C2: LinearCode) -> LinearCode:
    """
    The direct sum C1 + C2 = {(c1 | c2)} with block-diagonal generator and
    parity-check matrices; d = min(d1, d2).
    """
    _require_same_field("the direct sum", C1, C2)
    G = direct_sum_matrix(C1.G, C2.G)
    H = direct_sum_matrix(C1.H, C2.H)
    if C1.d is not None and C2.d is not None:
        d = min(C1.d, C2.d)
        code = _assemble(G, H, d, d, d=d, expected_k=C1.k + C2.k)
    else:
        code = _assemble(G, H, min(C1.lower_bound, C2.lower_bound),
                         min(C1.upper_bound, C2.upper_bound), expected_k=C1.k + C2.k)
    log.info(f"Direct sum {C1!r} + {C2!r} -> {code!r}")
    return code


def direct_product(C1: LinearCode, C2: LinearCode) -> LinearCode:
    """
    Product code with generator matrix G1 (x) G2 and parity-check matrix taken
    from the standard form of the product; d = d1 * d2.
    """
    _require_same_field("the direct product", C1, C2)
    G = kronecker(C1.basis(), C2.basis())
    if C1.d is not None and C2.d is not None:
        d = C1.d * C2.d
        code = LinearCode._derived(G, d=d)
    else:
        code = LinearCode._derived(G, lower=C1.lower_bound * C2.lower_bound,
                                   upper=C1.upper_bound * C2.upper_bound)
    if code.k != C1.k * C2.k:
        raise InternalConsistencyError("Unexpected dimension in direct product output")
    log.info(f"Direct product {C1!r} x {C2!r} -> {code!r}")
    return code


def plotkin_construction(C1: LinearCode, C2: LinearCode) -> LinearCode:
    """The (u | u + v) construction with u in C1 and v in C2; d = min(2 d1, d2)."""
    _require_same_field("the Plotkin (u | u + v) construction", C1, C2)
    _require_same_length("the Plotkin (u | u + v) construction", C1, C2)
    F = C1.field
    G1, G2, H1, H2 = C1.G, C2.G, C1.H, C2.H
    G = np.vstack((np.hstack((G1, G1)), np.hstack((F.Zeros(G2.shape), G2))))
    H = np.vstack((np.hstack((H1, F.Zeros(H1.shape))), np.hstack((-H2, H2))))
    if C1.d is not None and C2.d is not None:
        d = min(2 * C1.d, C2.d)
        return _assemble(G, H, d, d, d=d, expected_k=C1.k + C2.k)
    return _assemble(G, H, min(2 * C1.lower_bound, C2.lower_bound), 2 * C1.n,
                     expected_k=C1.k + C2.k)


def construction_x(C1: LinearCode, C2: LinearCode, C3: LinearCode) -> LinearCode:
    """
    Construction X for C1 properly contained in C2 and an auxiliary code C3 with
    dim C2 = dim C1 + dim C3:

        G = [[G(C2 / C1), G3],
             [G1,          0]]

    giving a code of length n + n3, dimension dim C2 and d >= min(d1, d2 + d3).
    """
    what = "construction X"
    _require_same_field(what, C1, C2, C3)
    _require_proper_subcode(what, C1, C2, "first and second codes")
    if C2.k != C1.k + C3.k:
        raise ConstructionPreconditionError(
            "The dimension of the second code must be the sum of the dimensions of the first and third codes")

    F = C1.field
    B1 = C1.basis()
    G = np.vstack((np.hstack((C2.quotient(C1).basis(), C3.basis())),
                   np.hstack((B1, F.Zeros((C1.k, C3.n))))))
    code = LinearCode(G)
    if code.n != C1.n + C3.n or code.k != C2.k:
        raise InternalConsistencyError(f"Unexpected parameters {code!r} in construction X")
    code.set_distance_lower_bound(min(C1.lower_bound, C2.lower_bound + C3.lower_bound))
    return code


def construction_x3(C1: LinearCode, C2: LinearCode, C3: LinearCode,
                    C4: LinearCode, C5: LinearCode) -> LinearCode:
    """
    Construction X3 for a chain C1 < C2 < C3 of length n with auxiliary codes
    C4 of dimension k2 - k1 and C5 of dimension k3 - k2:

        G = [[G1,          0,  0 ],
             [G(C2 / C1),  G4, 0 ],
             [G(C3 / C2),  0,  G5]]

    giving an [n + n4 + n5, k3] code with d >= min(d1, d2 + d4, d3 + d5).
    """
    what = "construction X3"
    _require_same_field(what, C1, C2, C3, C4, C5)
    _require_proper_subcode(what, C1, C2, "first and second codes")
    _require_proper_subcode(what, C2, C3, "second and third codes")
    if C2.k != C1.k + C4.k:
        raise ConstructionPreconditionError(
            "The dimension of the second code must be the sum of the dimensions of the first and fourth codes")
    if C3.k != C2.k + C5.k:
        raise ConstructionPreconditionError(
            "The dimension of the third code must be the sum of the dimensions of the second and fifth codes")

    F = C1.field
    n4, n5 = C4.n, C5.n
    G = np.vstack((
        np.hstack((C1.basis(), F.Zeros((C1.k, n4)), F.Zeros((C1.k, n5)))),
        np.hstack((C2.quotient(C1).basis(), C4.basis(), F.Zeros((C4.k, n5)))),
        np.hstack((C3.quotient(C2).basis(), F.Zeros((C5.k, n4)), C5.basis())),
    ))
    code = LinearCode(G)
    if code.k != C3.k:
        raise InternalConsistencyError(f"Unexpected dimension {code.k} in construction X3; expected {C3.k}")
    code.set_distance_lower_bound(min(C1.lower_bound, C2.lower_bound + C4.lower_bound,
                                      C3.lower_bound + C5.lower_bound))
    return code


def uw_vw_uvw_construction(C1: LinearCode, C2: LinearCode) -> LinearCode:
    """
    The (u + w | v + w | u + v + w) construction with u, v in C1 and w in C2,
    a [3n, 2 k1 + k2] code.
    """
    what = "the (u + w | v + w | u + v + w) construction"
    _require_same_field(what, C1, C2)
    _require_same_length(what, C1, C2)
    F = C1.field
    B1, B2 = C1.basis(), C2.basis()
    Z = F.Zeros(B1.shape)
    G = np.vstack((np.hstack((B1, Z, B1)),
                   np.hstack((B2, B2, B2)),
                   np.hstack((Z, B1, B1))))
    return LinearCode(G)


def juxtaposition(C1: LinearCode, C2: LinearCode) -> LinearCode:
    """The code generated by [G1 | G2] for two codes of equal dimension."""
    _require_same_field("juxtaposition", C1, C2)
    if C1.k != C2.k:
        raise ConstructionPreconditionError("Cannot juxtapose two codes of different dimensions")
    code = LinearCode(np.hstack((C1.basis(), C2.basis())))
    code.set_distance_lower_bound(C1.lower_bound + C2.lower_bound)
    return code


def entrywise_product(C1: LinearCode, C2: LinearCode) -> LinearCode:
    """The Schur product: the span of all entrywise products c1 * c2."""
    _require_same_field("the Schur product", C1, C2)
    _require_same_length("the Schur product", C1, C2)
    B1, B2 = C1.basis(), C2.basis()
    if C1 is C2:
        pairs = [(i, j) for i in range(C1.k) for j in range(i, C1.k)]
    else:
        pairs = [(i, j) for i in range(C1.k) for j in range(C2.k)]
    rows = np.vstack([(B1[i] * B2[j]).reshape(1, -1) for i, j in pairs])
    if is_zero(rows):
        raise ConstructionPreconditionError("The Schur product of the codes is the zero code")
    return LinearCode(remove_zero_rows(rows))


def subcode_between(C1: LinearCode, C2: LinearCode, k: int) -> LinearCode:
    """
    A code of dimension k lying between C2 and C1 (C2 a subcode of C1), built
    by augmenting C2 with rows of C1 / C2.
    """
    if not C2.is_subcode(C1):
        raise ConstructionPreconditionError("The second code must be a subcode of the first")
    if not C2.k <= k <= C1.k:
        raise InvalidParameterError(f"The dimension must lie between {C2.k} and {C1.k}; got {k}")
    if k == C2.k:
        return copy.deepcopy(C2)
    if k == C1.k:
        return copy.deepcopy(C1)
    Q = C1.quotient(C2).basis()
    return C2.augment(Q[:k - C2.k])
