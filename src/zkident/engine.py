"""
Setup, prove and verify for the supported predicates.

Object level functions take and return `ProvingKey`, `VerifyingKey` and
`Proof`. The `*_bytes` variants speak the codec encoding and decode
caller supplied keys and proofs with full point validation.
"""

import logging
from typing import Mapping, Sequence, Union

from . import codec
from .circuits import Circuit
from .config import get_settings
from .ecc import EllipticCurve
from .errors import InvalidInput, SetupError, SynthesisError
from .groth16 import Proof, Prover, ProvingKey, Setup, Verifier, VerifyingKey
from .predicates import Predicate
from .r1cs import ConstraintSystem
from .utils import Timer

logger = logging.getLogger(__name__)


def synthesize(circuit: Circuit, curve: str = None):
    """
    Run the circuit against a fresh constraint system

    Returns:
        `(r1cs, public_witness, private_witness)`
    """
    E = EllipticCurve(curve or get_settings().curve)
    cs = ConstraintSystem(E.order)
    circuit.synthesize(cs)
    r1cs = cs.compile()
    public, private = cs.witness()
    return r1cs, public, private


def setup(predicate: Union[Predicate, str], curve: str = None):
    """
    Generate a fresh key pair for the predicate from its dummy instance

    Returns:
        `(ProvingKey, VerifyingKey)`
    """
    predicate = Predicate.parse(predicate)
    curve = curve or get_settings().curve

    try:
        r1cs, _, _ = synthesize(predicate.dummy_circuit(), curve)
        with Timer(f"setup {predicate.value}") as timer:
            pk, vk = Setup(r1cs, curve).generate()
    except (SynthesisError, NotImplementedError, OSError, ValueError) as exc:
        raise SetupError(f"Setup of {predicate.value} failed: {exc}") from exc

    logger.info(
        "setup %s on %s: %d constraints in %.2fs",
        predicate.value,
        curve,
        r1cs.n_constraints,
        timer.elapsed,
    )
    return pk, vk


def _circuit(predicate: Predicate, values) -> Circuit:
    if isinstance(values, Circuit):
        if not isinstance(values, predicate.circuit):
            raise InvalidInput(
                f"{type(values).__name__} is not a {predicate.circuit.__name__} circuit"
            )
        return values
    if not isinstance(values, Mapping):
        raise InvalidInput(
            f"{predicate.value} values must be a mapping, got {type(values).__name__}"
        )
    return predicate.build_circuit(values)


def prove(
    predicate: Union[Predicate, str],
    pk: ProvingKey,
    values: Union[Mapping[str, int], Circuit],
) -> Proof:
    """
    Prove the predicate holds for `values`

    Raises:
        AssignmentMissing: a value was left unset on a circuit instance
        SynthesisError: the values are rejected by a gadget,
            or `ShapeMismatch` when `pk` belongs to another circuit
    """
    predicate = Predicate.parse(predicate)
    circuit = _circuit(predicate, values)

    r1cs, public, private = synthesize(circuit, pk.curve)
    with Timer(f"prove {predicate.value}"):
        proof = Prover(r1cs, pk, pk.curve).prove(public, private)

    logger.debug("proved %r", circuit)
    return proof


def verify(
    predicate: Union[Predicate, str],
    vk: VerifyingKey,
    proof: Proof,
    public_values: Union[Mapping[str, int], Sequence[int]],
) -> bool:
    """
    Check `proof` against the public values of the predicate.

    An invalid proof yields `False`. Structural mismatches between key,
    proof and inputs raise `VerificationError`.
    """
    predicate = Predicate.parse(predicate)
    inputs = predicate.public_values(public_values)

    result = Verifier(vk, vk.curve).verify(proof, inputs)
    logger.debug("verify %s: %s", predicate.value, result)
    return result


def setup_bytes(predicate: Union[Predicate, str], curve: str = None):
    pk, vk = setup(predicate, curve)
    return codec.encode(pk), codec.encode(vk)


def prove_bytes(
    predicate: Union[Predicate, str],
    pk_bytes: bytes,
    values: Mapping[str, int],
    curve: str = None,
) -> bytes:
    pk = codec.decode("proving_key", pk_bytes, curve, validate=True)
    return codec.encode(prove(predicate, pk, values))


def verify_bytes(
    predicate: Union[Predicate, str],
    vk_bytes: bytes,
    proof_bytes: bytes,
    public_values: Union[Mapping[str, int], Sequence[int]],
    curve: str = None,
) -> bool:
    vk = codec.decode("verifying_key", vk_bytes, curve, validate=True)
    proof = codec.decode("proof", proof_bytes, curve, validate=True)
    return verify(predicate, vk, proof, public_values)
