"""
Process wide cache of key pairs, one per predicate.

Keys are generated lazily on first use. Concurrent callers asking for
the same predicate wait on a per-predicate lock so setup runs once.
"""

import logging
import os
import tempfile
import threading
from typing import Optional, Union

from . import codec, engine
from .config import get_settings
from .errors import DecodeError
from .groth16 import ProvingKey, VerifyingKey
from .predicates import Predicate

logger = logging.getLogger(__name__)


class KeyStore:
    """
    Args:
        curve: curve of the generated keys, from configuration if omitted
        directory: where key pairs are persisted as `<predicate>.pk` and
            `<predicate>.vk`, `ZKIDENT_KEY_DIR` if omitted, in memory only
            when neither is set
    """

    def __init__(self, curve: Optional[str] = None, directory: Optional[str] = None):
        settings = get_settings()
        self.curve = curve or settings.curve
        self.directory = directory or settings.key_dir

        self._keys = {}
        self._locks = {}
        self._guard = threading.Lock()

    def _lock(self, predicate: Predicate) -> threading.Lock:
        with self._guard:
            return self._locks.setdefault(predicate, threading.Lock())

    def get(self, predicate: Union[Predicate, str]) -> tuple:
        """Return `(ProvingKey, VerifyingKey)` of the predicate"""
        predicate = Predicate.parse(predicate)

        keys = self._keys.get(predicate)
        if keys is not None:
            return keys

        with self._lock(predicate):
            keys = self._keys.get(predicate)
            if keys is None:
                keys = self._load(predicate)
            if keys is None:
                keys = engine.setup(predicate, self.curve)
                self._save(predicate, keys)
            self._keys[predicate] = keys

        return keys

    def proving_key(self, predicate) -> ProvingKey:
        return self.get(predicate)[0]

    def verifying_key(self, predicate) -> VerifyingKey:
        return self.get(predicate)[1]

    def clear(self):
        """Forget cached keys, persisted files are kept"""
        with self._guard:
            self._keys.clear()

    def _paths(self, predicate: Predicate):
        base = os.path.join(self.directory, predicate.value)
        return base + ".pk", base + ".vk"

    def _load(self, predicate: Predicate):
        if not self.directory:
            return None

        pk_path, vk_path = self._paths(predicate)
        if not (os.path.exists(pk_path) and os.path.exists(vk_path)):
            return None

        # files are written by this store, the fast path applies
        try:
            with open(pk_path, "rb") as f:
                pk = codec.decode("proving_key", f.read(), self.curve)
            with open(vk_path, "rb") as f:
                vk = codec.decode("verifying_key", f.read(), self.curve)
            _check_pair(pk, vk)
        except (OSError, DecodeError) as exc:
            logger.warning(
                "discarding unreadable keys of %s in %s: %s",
                predicate.value,
                self.directory,
                exc,
            )
            return None

        logger.info("loaded keys of %s from %s", predicate.value, self.directory)
        return pk, vk

    def _save(self, predicate: Predicate, keys: tuple):
        if not self.directory:
            return

        os.makedirs(self.directory, exist_ok=True)
        for path, key in zip(self._paths(predicate), keys):
            _write_atomic(path, codec.encode(key))

        logger.info("saved keys of %s to %s", predicate.value, self.directory)


def _write_atomic(path: str, data: bytes):
    fd, tmp = tempfile.mkstemp(dir=os.path.dirname(path), suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.replace(tmp, path)
    except BaseException:
        os.unlink(tmp)
        raise


def _check_pair(pk: ProvingKey, vk: VerifyingKey):
    """Both keys must come from one setup run and lie on the curve"""
    if not all(p.is_on_curve() for p in pk.points() + vk.points()):
        raise DecodeError("Persisted key has a point off the curve")

    if (
        pk.alpha_1 != vk.alpha_1
        or pk.beta_2 != vk.beta_2
        or pk.delta_2 != vk.delta_2
        or pk.n_public != len(vk.ic)
    ):
        raise DecodeError("Persisted proving and verifying keys do not match")
