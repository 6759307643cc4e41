from ..symbolic import LinearCombination


def combine(*inputs: LinearCombination) -> LinearCombination:
    """
    Placeholder commitment: the field sum of `inputs`.

    It is neither hiding nor collision resistant. Membership and credential
    circuits call it where a real hash (Merkle path, sponge) or signature
    verification gadget belongs; swapping this function keeps their
    setup, prove and verify flow unchanged.
    """
    acc = LinearCombination()
    for inp in inputs:
        acc += inp

    return acc
