from ..errors import SynthesisError
from ..r1cs import ConstraintSystem
from ..symbolic import LinearCombination


def num_to_bits(cs: ConstraintSystem, inp: LinearCombination, n: int, name: str):
    """
    Decompose `inp` into `n` little-endian bits allocated as private witnesses

    Raises `SynthesisError` when the value of `inp` does not fit in `n` bits,
    because no assignment of the bits could satisfy the packing constraint.
    """
    value = cs.evaluate(inp)
    if value >> n:
        raise SynthesisError(f"{name} does not fit in {n} bits")

    bits = [cs.alloc_witness(f"{name}.bit[{i}]", (value >> i) & 1) for i in range(n)]

    for b in bits:
        cs.enforce(b, 1 - b, 0)

    cs.enforce_equal(inp, bits_to_num(bits))

    return bits


def bits_to_num(bits: list) -> LinearCombination:
    """Pack little-endian bits into one linear combination"""
    eq = LinearCombination()
    for i, b in enumerate(bits):
        eq += (1 << i) * b

    return eq
