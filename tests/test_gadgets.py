import pytest

from zkident.ecc import EllipticCurve
from zkident.errors import SynthesisError
from zkident.gadgets import bits_to_num, combine, enforce_greater_equal, num_to_bits
from zkident.r1cs import ConstraintSystem
from zkident.utils import U64_MAX

P = EllipticCurve("BN254").order


@pytest.fixture
def constraint_data():
    return [
        {"x": 12345, "y": 1337},
        {"x": 100, "y": 0},
        {"x": 18, "y": 18},
        {"x": U64_MAX, "y": 0},
        {"x": U64_MAX, "y": U64_MAX},
    ]


def test_bit_conversion():
    n_bit = 16

    cs = ConstraintSystem(P)
    x = cs.alloc_witness("x", 1337)
    bits = num_to_bits(cs, x, n_bit, "x")

    expected_bits = [(1337 >> i) & 1 for i in range(n_bit)]
    assert [cs.evaluate(b) for b in bits] == expected_bits
    assert cs.evaluate(bits_to_num(bits)) == 1337
    assert cs.is_satisfied()
    # one boolean constraint per bit and one packing constraint
    assert len(cs.constraints) == n_bit + 1


def test_bit_conversion_overflow():
    cs = ConstraintSystem(P)
    x = cs.alloc_witness("x", 1 << 16)

    with pytest.raises(SynthesisError):
        num_to_bits(cs, x, 16, "x")


def test_non_boolean_bit_is_unsatisfied():
    cs = ConstraintSystem(P)
    x = cs.alloc_witness("x", 5)
    num_to_bits(cs, x, 4, "x")

    # x = 5 = 0b0101, rewrite bits as [3, 1, 0, 0] which still packs to 5
    cs.private_values[1:5] = [3, 1, 0, 0]
    assert not cs.is_satisfied()


def test_greater_equal(constraint_data):

    for data in constraint_data:
        cs = ConstraintSystem(P)
        x = cs.alloc_witness("x", data["x"])
        y = cs.alloc_input("y", data["y"])

        enforce_greater_equal(cs, x, y, 64)

        assert cs.is_satisfied()
        r1cs = cs.compile()
        assert r1cs.is_sat(*cs.witness())


def test_greater_equal_rejects_smaller_operand():

    for x_value, y_value in ((1337, 12345), (17, 18), (0, 1)):
        cs = ConstraintSystem(P)
        x = cs.alloc_witness("x", x_value)
        y = cs.alloc_input("y", y_value)

        with pytest.raises(SynthesisError):
            enforce_greater_equal(cs, x, y, 64)


def test_greater_equal_topology_is_value_independent():
    digests = set()

    for x_value, y_value in ((20, 18), (U64_MAX, 0), (5, 5)):
        cs = ConstraintSystem(P)
        x = cs.alloc_witness("x", x_value)
        y = cs.alloc_input("y", y_value)
        enforce_greater_equal(cs, x, y, 64)
        digests.add(cs.compile().digest())

    assert len(digests) == 1


def test_combine():
    cs = ConstraintSystem(P)
    a = cs.alloc_witness("a", 5)
    b = cs.alloc_witness("b", 6)

    assert cs.evaluate(combine(a, b)) == 11
    assert cs.evaluate(combine()) == 0
