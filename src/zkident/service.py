"""
Thread pool front end over the engine.

Requests run on a bounded `ThreadPoolExecutor` and return futures;
callers apply deadlines with `Future.result(timeout=...)`. Keys always
come from the `KeyStore`.
"""

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Mapping, Optional, Sequence, Union

from . import codec, engine
from .config import get_settings
from .keystore import KeyStore
from .predicates import Predicate

logger = logging.getLogger(__name__)


class ProofService:
    """
    Args:
        keystore: source of key pairs, a fresh `KeyStore` if omitted
        max_workers: pool size, `ZKIDENT_WORKERS` if omitted
    """

    def __init__(
        self, keystore: Optional[KeyStore] = None, max_workers: Optional[int] = None
    ):
        self.keystore = keystore or KeyStore()
        self.max_workers = max_workers or get_settings().max_workers
        self._executor = ThreadPoolExecutor(
            max_workers=self.max_workers, thread_name_prefix="zkident"
        )

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self, wait: bool = True):
        self._executor.shutdown(wait=wait)

    def _prove(self, predicate: Predicate, values: Mapping[str, int]) -> bytes:
        pk = self.keystore.proving_key(predicate)
        return codec.encode(engine.prove(predicate, pk, values))

    def _verify(self, predicate: Predicate, proof_bytes: bytes, public_values) -> bool:
        vk = self.keystore.verifying_key(predicate)
        proof = codec.decode("proof", proof_bytes, vk.curve, validate=True)
        return engine.verify(predicate, vk, proof, public_values)

    def prove(
        self, predicate: Union[Predicate, str], values: Mapping[str, int]
    ) -> Future:
        """Submit a proof request, the future resolves to proof bytes"""
        predicate = Predicate.parse(predicate)
        logger.debug("submit prove %s", predicate.value)
        return self._executor.submit(self._prove, predicate, values)

    def verify(
        self,
        predicate: Union[Predicate, str],
        proof_bytes: bytes,
        public_values: Union[Mapping[str, int], Sequence[int]],
    ) -> Future:
        """Submit a verification request, the future resolves to a bool"""
        predicate = Predicate.parse(predicate)
        logger.debug("submit verify %s", predicate.value)
        return self._executor.submit(self._verify, predicate, proof_bytes, public_values)

    def verifying_key(self, predicate: Union[Predicate, str]) -> bytes:
        """Encoded verifying key of the predicate, for distribution to verifiers"""
        return codec.encode(self.keystore.verifying_key(predicate))
