"""Trusted setup module of Groth16 protocol"""

import logging

from ..ecc import EllipticCurve
from ..qap import QAP
from ..r1cs import R1CS
from ..utils import get_random_int, Timer
from .serialization import ProvingKey, VerifyingKey

logger = logging.getLogger(__name__)


class Setup:

    def __init__(self, r1cs: R1CS, curve: str = "BN254"):
        """
        Trusted setup object

        Args:
            r1cs: compiled R1CS to be set up from
            curve: `BN254` or `BLS12_381`
        """
        self.r1cs = r1cs
        self.E = EllipticCurve(curve)
        self.order = self.E.order
        self.qap = QAP(r1cs, curve)

    def _random_point(self):
        # tau must stay outside the evaluation domain
        while True:
            tau = get_random_int(self.order - 1)
            if pow(tau, self.qap.domain, self.order) != 1:
                return tau

    def generate(self) -> tuple[ProvingKey, VerifyingKey]:
        """Generate `ProvingKey` and `VerifyingKey`"""

        G1 = self.E.G1()
        G2 = self.E.G2()

        # generate random toxic waste
        tau = self._random_point()
        alpha = get_random_int(self.order - 1)
        beta = get_random_int(self.order - 1)
        gamma = get_random_int(self.order - 1)
        delta = get_random_int(self.order - 1)

        inv_gamma = pow(gamma, -1, self.order)
        inv_delta = pow(delta, -1, self.order)

        with Timer("setup"):
            alpha_G1 = G1 * alpha
            beta_G1 = G1 * beta
            beta_G2 = G2 * beta
            gamma_G2 = G2 * gamma
            delta_G1 = G1 * delta
            delta_G2 = G2 * delta

            U, V, W, t = self.qap.evaluate_at(tau)

            K = [
                (beta * u + alpha * v + w) % self.order for u, v, w in zip(U, V, W)
            ]

            a_G1 = self.E.batch_mul(G1, U)
            b_G1 = self.E.batch_mul(G1, V)
            b_G2 = self.E.batch_mul(G2, V)

            o = self.order
            target = t * inv_delta % o
            tau_div_delta = []
            for _ in range(self.qap.domain - 1):
                tau_div_delta.append(target)
                target = target * tau % o

            target_G1 = self.E.batch_mul(G1, tau_div_delta)

            n_public = self.r1cs.n_public
            k_gamma_G1 = self.E.batch_mul(G1, [k * inv_gamma % o for k in K[:n_public]])
            k_delta_G1 = self.E.batch_mul(G1, [k * inv_delta % o for k in K[n_public:]])

        logger.debug(
            "generated keys for %d constraints, %d public and %d private variables",
            self.r1cs.n_constraints,
            n_public,
            self.r1cs.n_private,
        )

        pkey = ProvingKey(
            self.r1cs.digest(),
            alpha_G1,
            beta_G1,
            beta_G2,
            delta_G1,
            delta_G2,
            a_G1,
            b_G1,
            b_G2,
            target_G1,
            k_delta_G1,
        )
        vkey = VerifyingKey(alpha_G1, beta_G2, gamma_G2, delta_G2, k_gamma_G1)

        return pkey, vkey
