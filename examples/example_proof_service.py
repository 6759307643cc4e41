"""
Serve proof and verification requests from a worker pool,
keys are generated once per predicate and persisted under ./keys
"""

from zkident import KeyStore, ProofService
from zkident.config import configure_logging

configure_logging("INFO")

with ProofService(KeyStore(directory="keys"), max_workers=4) as service:
    requests = [
        ("credential_check", {"issuer_key": 25, "credential": 10, "signature": 15}),
        ("membership", {"root": 42, "path": 40, "leaf": 2}),
    ]

    futures = [(p, v, service.prove(p, v)) for p, v in requests]

    for predicate, values, future in futures:
        proof = future.result(timeout=600)
        public = [values[name] for name in ("issuer_key", "root") if name in values]

        valid = service.verify(predicate, proof, public).result(timeout=600)
        print(f"{predicate}: proof of {len(proof)} bytes, valid = {valid}")
