import logging

from ..ecc import EllipticCurve
from ..errors import ShapeMismatch
from ..qap import QAP
from ..r1cs import R1CS
from ..utils import get_random_int, Timer
from .serialization import Proof, ProvingKey

logger = logging.getLogger(__name__)


class Prover:
    """
    Prover object

    Args:
        r1cs: compiled R1CS to be proved from
        key: `ProvingKey` from trusted setup
        curve: `BN254` or `BLS12_381`
    """

    def __init__(self, r1cs: R1CS, key: ProvingKey, curve: str = "BN254"):
        self.r1cs = r1cs
        self.key = key
        self.E = EllipticCurve(curve)
        self.order = self.E.order
        self.qap = QAP(r1cs, curve)

        self._check_shape()

    def _check_shape(self):
        if self.key.curve != self.E.name:
            raise ShapeMismatch(
                f"Proving key is over {self.key.curve}, prover over {self.E.name}"
            )
        if (
            self.key.n_public != self.r1cs.n_public
            or self.key.n_private != self.r1cs.n_private
            or self.key.domain != self.qap.domain
        ):
            raise ShapeMismatch(
                "Proving key expects "
                f"{self.key.n_public} public/{self.key.n_private} private variables "
                f"over a domain of {self.key.domain}, circuit has "
                f"{self.r1cs.n_public}/{self.r1cs.n_private} over {self.qap.domain}"
            )
        if self.key.digest != self.r1cs.digest():
            raise ShapeMismatch("Proving key was generated for different constraints")

    def prove(self, public_witness: list, private_witness: list) -> Proof:
        """
        Prove statement from R1CS by providing public and private witness

        A witness that does not satisfy the R1CS still yields a proof,
        which the verifier rejects.
        """
        if len(public_witness) != self.r1cs.n_public or len(private_witness) != len(
            self.key.kdelta_1
        ):
            raise ShapeMismatch("Witness length does not match the proving key")

        r = get_random_int(self.order - 1)
        s = get_random_int(self.order - 1)

        witness = public_witness + private_witness

        with Timer("prove"):
            _, _, _, H, remainder = self.qap.evaluate_witness(witness)
            if not remainder.is_zero():
                logger.warning(
                    "witness does not satisfy the constraint system, "
                    "the proof will not verify"
                )

            A = (
                self.E.multiexp(self.key.a_1, witness)
                + self.key.alpha_1
                + (self.key.delta_1 * r)
            )
            B1 = (
                self.E.multiexp(self.key.b_1, witness)
                + self.key.beta_1
                + (self.key.delta_1 * s)
            )
            B2 = (
                self.E.multiexp(self.key.b_2, witness)
                + self.key.beta_2
                + (self.key.delta_2 * s)
            )

            h = H.coeffs()[: len(self.key.target_1)]
            HZ = self.E.multiexp(self.key.target_1[: len(h)], h)

            if len(private_witness) > 0:
                sum_delta_witness = self.E.multiexp(self.key.kdelta_1, private_witness)
            else:  # all inputs are public
                sum_delta_witness = self.E.zero_G1()

            C = (
                HZ
                + sum_delta_witness
                + (A * s)
                + (B1 * r)
                + (-self.key.delta_1 * (r * s % self.order))
            )

        return Proof(A, B2, C)
