"""
Prove that a user is at least 18 years old without revealing the age itself
"""

from zkident import SynthesisError, engine

pk, vk = engine.setup("age_threshold")

# secret age
proof = engine.prove("age_threshold", pk, {"user_age": 25, "min_age": 18})
assert engine.verify("age_threshold", vk, proof, {"min_age": 18})
print("Proof is valid: user is at least 18")

# the same proof does not hold for another threshold
assert not engine.verify("age_threshold", vk, proof, {"min_age": 19})
print("Proof is invalid for threshold 19")

try:
    engine.prove("age_threshold", pk, {"user_age": 17, "min_age": 18})
except SynthesisError as exc:
    print(f"Cannot prove 17 >= 18: {exc}")
