from ..ecc import EllipticCurve
from ..errors import VerificationError
from .serialization import Proof, VerifyingKey


class Verifier:
    """
    Verifier object

    Args:
        key: `VerifyingKey` from trusted setup
        curve: `BN254` or `BLS12_381`
    """

    def __init__(self, key: VerifyingKey, curve: str = "BN254"):
        self.key = key
        self.E = EllipticCurve(curve)

        if key.curve != self.E.name:
            raise VerificationError(
                f"Verifying key is over {key.curve}, verifier over {self.E.name}"
            )

    def verify(self, proof: Proof, public_inputs: list) -> bool:
        """
        Verify proof by providing the public inputs in allocation order,
        without the leading constant 1
        """
        if proof.curve != self.E.name:
            raise VerificationError(
                f"Proof is over {proof.curve}, verifier over {self.E.name}"
            )

        if len(public_inputs) != self.key.n_inputs:
            raise VerificationError(
                f"Expected {self.key.n_inputs} public inputs, got {len(public_inputs)}"
            )

        for x in public_inputs:
            if isinstance(x, bool) or not isinstance(x, int) or not 0 <= x < self.E.order:
                raise VerificationError(f"Public input {x!r} is not a field element")

        # points decoded without validation may lie off the curve
        if not all(p.is_on_curve() for p in proof.points()):
            raise VerificationError("Proof has a point off the curve")
        if not all(p.is_on_curve() for p in self.key.points()):
            raise VerificationError("Verifying key has a point off the curve")

        sum_gamma_witness = self.E.multiexp(self.key.ic, [1] + list(public_inputs))

        # e(A, B) == e(alpha, beta) * e(sum_gamma_witness, gamma) * e(C, delta)
        return self.E.pairing(proof.A, proof.B) == self.E.multi_pairing(
            [self.key.alpha_1, sum_gamma_witness, proof.C],
            [self.key.beta_2, self.key.gamma_2, self.key.delta_2],
        )
