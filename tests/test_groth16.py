import pytest

from zkident import engine
from zkident.circuits import AgeThreshold
from zkident.ecc import EllipticCurve
from zkident.errors import (
    AssignmentMissing,
    InvalidInput,
    ShapeMismatch,
    SynthesisError,
    VerificationError,
)
from zkident.groth16 import Proof, Prover, ProvingKey, Setup, Verifier, VerifyingKey
from zkident.predicates import Predicate
from zkident.r1cs import ConstraintSystem
from zkident.utils import U64_MAX


@pytest.fixture(scope="module")
def age_keys():
    return engine.setup(Predicate.AGE_THRESHOLD, "BN254")


@pytest.fixture(scope="module")
def membership_keys():
    return engine.setup(Predicate.MEMBERSHIP, "BN254")


@pytest.fixture(scope="module")
def credential_keys():
    return engine.setup(Predicate.CREDENTIAL_CHECK, "BN254")


def r1cs_data(p):
    # y == x^3 + x + 5, with an unused public input
    cs = ConstraintSystem(p)
    y = cs.alloc_input("y", 35)
    cs.alloc_input("unused", 1337)
    x = cs.alloc_witness("x", 3)
    v1 = cs.alloc_witness("v1", 9)
    cs.enforce(x, x, v1)
    cs.add_constraint(y - 5 - x == v1 * x)

    return cs.compile(), cs.witness()


def test_groth16_bn254():
    E = EllipticCurve("BN254")
    r1cs, (pub, priv) = r1cs_data(E.order)

    pk, vk = Setup(r1cs).generate()
    proof = Prover(r1cs, pk).prove(pub, priv)

    assert Verifier(vk).verify(proof, pub[1:])


def test_groth16_bls12_381():
    E = EllipticCurve("BLS12_381")
    r1cs, (pub, priv) = r1cs_data(E.order)

    pk, vk = Setup(r1cs, "BLS12_381").generate()
    proof = Prover(r1cs, pk, "BLS12_381").prove(pub, priv)

    assert proof.curve == "BLS12_381"
    assert Verifier(vk, "BLS12_381").verify(proof, pub[1:])


def test_unused_public_input():
    r1cs, (pub, priv) = r1cs_data(EllipticCurve("BN254").order)

    pk, vk = Setup(r1cs).generate()
    proof = Prover(r1cs, pk).prove(pub, priv)

    # try to forge public witness with same proof
    assert Verifier(vk).verify(proof, [35, 1337])
    assert Verifier(vk).verify(proof, [35, 1330000000]) is False


def test_age_threshold_accepted(age_keys):
    pk, vk = age_keys

    proof = engine.prove("age_threshold", pk, {"user_age": 25, "min_age": 18})

    assert engine.verify("age_threshold", vk, proof, [18]) is True
    assert engine.verify("age_threshold", vk, proof, {"min_age": 18}) is True


def test_age_threshold_other_public_input(age_keys):
    pk, vk = age_keys

    proof = engine.prove("age_threshold", pk, {"user_age": 25, "min_age": 18})

    assert engine.verify("age_threshold", vk, proof, [19]) is False


def test_age_threshold_boundaries(age_keys):
    pk, vk = age_keys

    for user_age, min_age in ((18, 18), (U64_MAX, 0), (0, 0)):
        proof = engine.prove(
            Predicate.AGE_THRESHOLD, pk, {"user_age": user_age, "min_age": min_age}
        )
        assert engine.verify(Predicate.AGE_THRESHOLD, vk, proof, [min_age])


def test_age_below_threshold(age_keys):
    pk, _ = age_keys

    with pytest.raises(SynthesisError):
        engine.prove("age_threshold", pk, {"user_age": 17, "min_age": 18})


def test_membership(membership_keys):
    pk, vk = membership_keys

    proof = engine.prove("membership", pk, {"root": 10, "path": 5, "leaf": 5})
    assert engine.verify("membership", vk, proof, [10]) is True

    # the witness does not satisfy the circuit, the proof is still produced
    proof = engine.prove("membership", pk, {"root": 10, "path": 5, "leaf": 6})
    assert isinstance(proof, Proof)
    assert engine.verify("membership", vk, proof, [10]) is False


def test_credential_check(credential_keys):
    pk, vk = credential_keys

    values = {"issuer_key": 25, "credential": 10, "signature": 15}
    proof = engine.prove("credential_check", pk, values)

    assert engine.verify("credential_check", vk, proof, {"issuer_key": 25})
    assert engine.verify("credential_check", vk, proof, {"issuer_key": 26}) is False


def test_proofs_are_randomized(membership_keys):
    pk, vk = membership_keys
    values = {"root": 10, "path": 3, "leaf": 7}

    proof1 = engine.prove("membership", pk, values)
    proof2 = engine.prove("membership", pk, values)

    assert proof1 != proof2
    assert engine.verify("membership", vk, proof1, [10])
    assert engine.verify("membership", vk, proof2, [10])


def test_verification_is_deterministic(membership_keys):
    pk, vk = membership_keys
    proof = engine.prove("membership", pk, {"root": 10, "path": 3, "leaf": 7})

    results = {engine.verify("membership", vk, proof, [10]) for _ in range(2)}
    assert results == {True}


def test_keys_from_different_setups_do_not_mix(membership_keys):
    pk, _ = membership_keys
    _, other_vk = engine.setup("membership", "BN254")

    proof = engine.prove("membership", pk, {"root": 10, "path": 5, "leaf": 5})
    assert engine.verify("membership", other_vk, proof, [10]) is False


def test_proving_key_of_other_circuit(age_keys):
    pk, _ = age_keys

    with pytest.raises(ShapeMismatch):
        engine.prove("membership", pk, {"root": 10, "path": 5, "leaf": 5})


def test_wrong_number_of_public_inputs(membership_keys):
    pk, vk = membership_keys
    proof = engine.prove("membership", pk, {"root": 10, "path": 5, "leaf": 5})

    with pytest.raises(VerificationError):
        engine.verify("membership", vk, proof, [10, 1])

    with pytest.raises(VerificationError):
        engine.verify("membership", vk, proof, [])


def test_verifier_rejects_key_of_other_curve(membership_keys):
    _, vk = membership_keys

    with pytest.raises(VerificationError):
        Verifier(vk, "BLS12_381")


def test_missing_assignment(age_keys):
    pk, _ = age_keys

    with pytest.raises(AssignmentMissing):
        engine.prove("age_threshold", pk, AgeThreshold(min_age=18))

    with pytest.raises(InvalidInput):
        engine.prove("age_threshold", pk, {"min_age": 18})


def test_circuit_instance_must_match_predicate(membership_keys):
    pk, _ = membership_keys

    with pytest.raises(InvalidInput):
        engine.prove("membership", pk, AgeThreshold(user_age=20, min_age=18))


def test_key_shapes(age_keys):
    pk, vk = age_keys
    r1cs, _, _ = engine.synthesize(AgeThreshold.dummy(), "BN254")

    assert isinstance(pk, ProvingKey) and isinstance(vk, VerifyingKey)
    assert pk.digest == r1cs.digest()
    assert pk.n_public == r1cs.n_public == 2
    assert pk.n_private == r1cs.n_private
    assert pk.domain == r1cs.domain_size
    assert vk.n_inputs == 1


def test_setup_bytes_roundtrip():
    pk_bytes, vk_bytes = engine.setup_bytes("credential_check", "BN254")

    values = {"issuer_key": 25, "credential": 10, "signature": 15}
    proof_bytes = engine.prove_bytes("credential_check", pk_bytes, values, "BN254")

    assert engine.verify_bytes("credential_check", vk_bytes, proof_bytes, [25], "BN254")
    assert not engine.verify_bytes(
        "credential_check", vk_bytes, proof_bytes, [24], "BN254"
    )


def test_verifier_rejects_non_field_inputs():
    E = EllipticCurve("BN254")
    r1cs, (pub, priv) = r1cs_data(E.order)

    pk, vk = Setup(r1cs).generate()
    proof = Prover(r1cs, pk).prove(pub, priv)

    for inputs in ([35, E.order], [35, -1], [35, "1337"]):
        with pytest.raises(VerificationError):
            Verifier(vk).verify(proof, inputs)

    with pytest.raises(InvalidInput):
        engine.verify("membership", vk, proof, [1 << 64])
