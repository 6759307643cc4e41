from ..errors import SynthesisError
from ..r1cs import ConstraintSystem
from ..symbolic import LinearCombination

from .bitify import num_to_bits


def enforce_greater_equal(
    cs: ConstraintSystem,
    inp1: LinearCombination,
    inp2: LinearCombination,
    n: int,
    name: str = "gte",
):
    """
    Enforce `inp1 >= inp2` as unsigned `n`-bit integers

    Both operands are range checked to `n` bits, then
    `inp1 + 2^n - inp2` is decomposed into `n + 1` bits
    whose most significant bit must be set.
    """
    num_to_bits(cs, inp1, n, f"{name}.lhs")
    num_to_bits(cs, inp2, n, f"{name}.rhs")

    if cs.evaluate(inp1) < cs.evaluate(inp2):
        raise SynthesisError(f"{name}: left operand is less than right operand")

    diff = inp1 + (1 << n) - inp2
    bits = num_to_bits(cs, diff, n + 1, f"{name}.diff")

    cs.enforce_equal(bits[n], 1)
