import base64

import pytest

from zkident import codec, engine
from zkident.ecc import EllipticCurve, Point
from zkident.errors import DecodeError, VerificationError
from zkident.groth16 import Proof, ProvingKey, VerifyingKey


@pytest.fixture(scope="module")
def membership_data():
    pk, vk = engine.setup("membership", "BN254")
    proof = engine.prove("membership", pk, {"root": 10, "path": 5, "leaf": 5})
    return pk, vk, proof


def test_proof_serialization():

    for crv in ("BN254", "BLS12_381"):
        E = EllipticCurve(crv)
        G1 = E.G1()
        G2 = E.G2()

        proof1 = Proof(G1 * 1337, G2 * 133337, G1 * 1333337)

        s = codec.encode(proof1)
        assert len(s) == 2 * E.G1_size() + E.G2_size()

        proof2 = codec.decode("proof", s, crv, validate=True)
        assert proof1 == proof2
        assert proof2.curve == crv


def test_key_serialization(membership_data):
    pk, vk, _ = membership_data

    pk_bytes = codec.encode(pk)
    pk2 = codec.decode(ProvingKey, pk_bytes, "BN254")
    assert pk2.to_bytes() == pk_bytes
    assert pk2.digest == pk.digest

    vk_bytes = codec.encode(vk)
    vk2 = codec.decode("verifying_key", vk_bytes, "BN254", validate=True)
    assert vk2.to_bytes() == vk_bytes
    assert vk2.n_inputs == 1


def test_text_roundtrip(membership_data):
    _, vk, proof = membership_data

    text = codec.encode_text(proof)
    assert "\n" not in text
    assert base64.b64decode(text) == codec.encode(proof)

    proof2 = codec.decode_text("proof", text, "BN254", validate=True)
    vk2 = codec.decode_text("verifying_key", codec.encode_text(vk), "BN254")

    assert engine.verify("membership", vk2, proof2, [10])


def test_truncated_proof(membership_data):
    _, _, proof = membership_data
    s = codec.encode(proof)

    for data in (s[:-1], s[:10], b"", s + b"\x00"):
        with pytest.raises(DecodeError):
            codec.decode("proof", data, "BN254")


def test_corrupted_proof(membership_data):
    _, _, proof = membership_data
    s = bytearray(codec.encode(proof))

    # flip the lowest bit of the x coordinate of A
    s[31] ^= 1
    with pytest.raises(DecodeError):
        codec.decode("proof", bytes(s), "BN254", validate=True)


def test_non_canonical_coordinate(membership_data):
    _, _, proof = membership_data
    s = codec.encode(proof)

    modulus = EllipticCurve("BN254").field_modulus.to_bytes(32, "big")
    with pytest.raises(DecodeError):
        codec.decode("proof", modulus + s[32:], "BN254")


def test_truncated_keys(membership_data):
    pk, vk, _ = membership_data

    for kind, key in (("proving_key", pk), ("verifying_key", vk)):
        s = codec.encode(key)
        for data in (s[:-1], s[: len(s) // 2], s + b"\x00"):
            with pytest.raises(DecodeError):
                codec.decode(kind, data, "BN254")


def test_oversized_vector_length(membership_data):
    _, vk, _ = membership_data
    s = bytearray(codec.encode(vk))

    # length prefix of the IC vector follows four points
    offset = EllipticCurve("BN254").G1_size() + 3 * EllipticCurve("BN254").G2_size()
    s[offset : offset + 8] = (1 << 40).to_bytes(8, "little")

    with pytest.raises(DecodeError):
        codec.decode("verifying_key", bytes(s), "BN254")


def test_empty_verifying_key():
    E = EllipticCurve("BN254")
    vk = VerifyingKey(E.G1(), E.G2(), E.G2(), E.G2(), [])

    with pytest.raises(DecodeError):
        codec.decode("verifying_key", codec.encode(vk), "BN254")


def test_invalid_text():

    for text in ("not base64!", "QUJD\n", "QUJ"):
        with pytest.raises(DecodeError):
            codec.decode_text("proof", text, "BN254")

    with pytest.raises(DecodeError):
        codec.decode_text("proof", b"QUJD", "BN254")

    with pytest.raises(DecodeError):
        codec.decode("proof", "QUJD", "BN254")


def test_unknown_kind():
    with pytest.raises(ValueError):
        codec.decode("signature", b"", "BN254")

    with pytest.raises(TypeError):
        codec.encode(b"proof")


def test_off_curve_proof_fails_verification(membership_data):
    _, vk, proof = membership_data
    s = bytearray(codec.encode(proof))
    s[31] ^= 1

    # the fast path only checks the structure
    corrupted = codec.decode("proof", bytes(s), "BN254")
    assert not corrupted.A.is_on_curve()

    with pytest.raises(VerificationError):
        engine.verify("membership", vk, corrupted, [10])


def test_off_curve_verifying_key_fails_verification(membership_data):
    _, vk, proof = membership_data
    s = bytearray(codec.encode(vk))
    s[31] ^= 1

    corrupted = codec.decode("verifying_key", bytes(s), "BN254")

    with pytest.raises(VerificationError):
        engine.verify("membership", corrupted, proof, [10])


def test_bls12_381_g1_outside_subgroup():
    E = EllipticCurve("BLS12_381")
    p = E.field_modulus

    # first x with x^3 + 4 a square, p = 3 mod 4
    x = 0
    while True:
        rhs = (x**3 + 4) % p
        y = pow(rhs, (p + 1) // 4, p)
        if y * y % p == rhs:
            break
        x += 1

    point = Point.from_affine(x, y, "BLS12_381")
    assert point.is_on_curve()
    assert not point.is_in_subgroup()

    s = Proof(point, E.G2(), E.G1()).to_bytes()

    with pytest.raises(DecodeError):
        codec.decode("proof", s, "BLS12_381", validate=True)

    # structure alone is fine
    assert codec.decode("proof", s, "BLS12_381").A == point

    # in-subgroup points are still accepted
    s = Proof(E.G1() * 5, E.G2(), E.G1() * 7).to_bytes()
    assert codec.decode("proof", s, "BLS12_381", validate=True).A == E.G1() * 5
