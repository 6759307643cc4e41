from .ecc import CurveRootGenerator
from .polynomial import (
    evaluate_lagrange_coefficients,
    interpolate_over_domain,
    vanishing_polynomial,
)
from .r1cs import R1CS


class QAP:
    """
    Quadratic Arithmetic Program of an R1CS over the multiplicative
    subgroup of `domain` roots of unity, row `i` sitting at `omega^i`
    """

    def __init__(self, r1cs: R1CS, curve: str = "BN254"):
        self.r1cs = r1cs
        self.p = r1cs.p
        self.n_public = r1cs.n_public
        self.domain = r1cs.domain_size
        self.generator = CurveRootGenerator[curve].value

    def evaluate_at(self, x: int):
        """
        Evaluate every column polynomial `u_j, v_j, w_j` at `x`
        and the vanishing polynomial `Z(x)`

        Return:
            U, V, W, t: per-column evaluations and `Z(x)`
        """
        lagrange = evaluate_lagrange_coefficients(
            self.domain, x, self.p, self.generator
        )

        U = self.r1cs.A.column_evaluations(lagrange)
        V = self.r1cs.B.column_evaluations(lagrange)
        W = self.r1cs.C.column_evaluations(lagrange)
        t = (pow(x, self.domain, self.p) - 1) % self.p

        return U, V, W, t

    def evaluate_witness(self, witness: list):
        """
        Evaluate QAP with witness vector.

        Args:
            witness: witness vector (public+private) to be evaluated

        Return:
            U, V, W, H, remainder: resulting polynomials to be proved,
            `remainder` is non-zero when the witness does not satisfy the R1CS
        """

        def interpolate(m):
            evals = m.dot(witness) + [0] * (self.domain - m.n_row)
            return interpolate_over_domain(evals, self.p, self.generator)

        U = interpolate(self.r1cs.A)
        V = interpolate(self.r1cs.B)
        W = interpolate(self.r1cs.C)

        # H = (U * V - W) / Z
        H, remainder = (U * V - W) / vanishing_polynomial(self.domain, self.p)

        return U, V, W, H, remainder
