"""
Prove knowledge of (path, leaf) combining into a public root,
proofs and keys exchanged as base64 text
"""

from zkident import codec, engine

pk, vk = engine.setup("membership")

vk_text = codec.encode_text(vk)

proof = engine.prove("membership", pk, {"root": 10, "path": 5, "leaf": 5})
proof_text = codec.encode_text(proof)
print("Proof:", proof_text)

# verifier side, only the texts and the public root are known
vk = codec.decode_text("verifying_key", vk_text, validate=True)
proof = codec.decode_text("proof", proof_text, validate=True)
assert engine.verify("membership", vk, proof, {"root": 10})
print("Proof is valid: member of root 10")

# a wrong witness still yields a proof, which does not verify
proof = engine.prove("membership", pk, {"root": 10, "path": 5, "leaf": 6})
assert not engine.verify("membership", vk, proof, {"root": 10})
print("Proof is invalid: 5 and 6 do not combine into 10")
