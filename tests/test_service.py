import pytest

from zkident import codec
from zkident.errors import InvalidInput
from zkident.keystore import KeyStore
from zkident.service import ProofService


@pytest.fixture(scope="module")
def service():
    with ProofService(KeyStore(curve="BN254"), max_workers=2) as svc:
        yield svc


def test_prove_and_verify(service):
    proof = service.prove("membership", {"root": 10, "path": 4, "leaf": 6})
    proof_bytes = proof.result(timeout=300)

    assert isinstance(proof_bytes, bytes)
    assert service.verify("membership", proof_bytes, [10]).result(timeout=300)
    assert not service.verify("membership", proof_bytes, {"root": 11}).result(
        timeout=300
    )


def test_concurrent_requests(service):
    futures = [
        service.prove("membership", {"root": 10 + i, "path": i, "leaf": 10})
        for i in range(4)
    ]
    proofs = [f.result(timeout=300) for f in futures]

    checks = [
        service.verify("membership", proof, [10 + i]) for i, proof in enumerate(proofs)
    ]
    assert all(c.result(timeout=300) for c in checks)


def test_errors_surface_through_futures(service):
    future = service.prove("membership", {"root": 10, "path": 4})
    with pytest.raises(InvalidInput):
        future.result(timeout=300)

    with pytest.raises(InvalidInput):
        service.prove("unknown", {})


def test_verifying_key_bytes(service):
    vk_bytes = service.verifying_key("membership")
    vk = codec.decode("verifying_key", vk_bytes, "BN254", validate=True)

    assert vk.to_bytes() == vk_bytes
    assert vk.n_inputs == 1
