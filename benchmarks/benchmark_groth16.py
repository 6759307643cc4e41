import time

from zkident import engine
from zkident.ecc import EllipticCurve
from zkident.groth16 import Prover, Setup, Verifier
from zkident.r1cs import ConstraintSystem


def run(n_power, crv):

    time_results = []

    start = time.time()
    cs = ConstraintSystem(EllipticCurve(crv).order)
    inp = cs.alloc_witness("inp", 2)
    out = cs.alloc_input("out", 2**n_power)

    v = [inp]
    for i in range(n_power - 1):
        v.append(cs.alloc_witness(f"v{i}", 2 ** (i + 2)))
        cs.enforce(v[i], inp, v[i + 1])

    cs.enforce_equal(out, v[-1])
    r1cs = cs.compile()
    pub, priv = cs.witness()
    end = time.time() - start
    time_results.append(end)

    start = time.time()
    pk, vk = Setup(r1cs, crv).generate()
    end = time.time() - start
    time_results.append(end)

    start = time.time()
    proof = Prover(r1cs, pk, crv).prove(pub, priv)
    end = time.time() - start
    time_results.append(end)

    start = time.time()
    assert Verifier(vk, crv).verify(proof, pub[1:])
    end = time.time() - start
    time_results.append(end)

    return time_results


def run_predicate(predicate, values, public, crv):

    time_results = []

    start = time.time()
    pk, vk = engine.setup(predicate, crv)
    time_results.append(time.time() - start)

    start = time.time()
    proof = engine.prove(predicate, pk, values)
    time_results.append(time.time() - start)

    start = time.time()
    assert engine.verify(predicate, vk, proof, public)
    time_results.append(time.time() - start)

    return time_results


n_constraint = [2**6, 2**8, 2**10]
crvs = ["BN254", "BLS12_381"]

for n in n_constraint:
    for crv in crvs:
        result = run(n, crv)
        print(f"{n} constraints with {crv} curve")
        print("=" * 50)
        print("Compile time:", result[0])
        print("Setup time:", result[1])
        print("Prove time:", result[2])
        print("Verify time:", result[3])
        print()

predicates = [
    ("age_threshold", {"user_age": 25, "min_age": 18}, [18]),
    ("membership", {"root": 10, "path": 5, "leaf": 5}, [10]),
    ("credential_check", {"issuer_key": 25, "credential": 10, "signature": 15}, [25]),
]

for predicate, values, public in predicates:
    result = run_predicate(predicate, values, public, "BN254")
    print(f"{predicate} with BN254 curve")
    print("=" * 50)
    print("Setup time:", result[0])
    print("Prove time:", result[1])
    print("Verify time:", result[2])
    print()
