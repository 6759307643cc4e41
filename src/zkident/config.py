"""
Runtime configuration read from environment variables

- `ZKIDENT_CURVE`: `BN254` (default) or `BLS12_381`
- `ZKIDENT_PARALLEL_CPU`: joblib `n_jobs`, `-1` uses every core (default `1`)
- `ZKIDENT_KEY_DIR`: directory where the key store persists keys
- `ZKIDENT_WORKERS`: size of the `ProofService` worker pool (default `4`)
- `ZKIDENT_LOG_LEVEL`: level applied by `configure_logging` (default `INFO`)
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_CURVE = "BN254"


@dataclass(frozen=True)
class Settings:
    curve: str = DEFAULT_CURVE
    n_jobs: int = 1
    key_dir: Optional[str] = None
    max_workers: int = 4
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ=None):
        env = os.environ if environ is None else environ

        return cls(
            curve=env.get("ZKIDENT_CURVE", DEFAULT_CURVE).upper(),
            n_jobs=int(env.get("ZKIDENT_PARALLEL_CPU", 1)),
            key_dir=env.get("ZKIDENT_KEY_DIR") or None,
            max_workers=int(env.get("ZKIDENT_WORKERS", 4)),
            log_level=env.get("ZKIDENT_LOG_LEVEL", "INFO").upper(),
        )


def get_settings() -> Settings:
    return Settings.from_env()


def configure_logging(level: Optional[str] = None):
    """Attach a stream handler to the `zkident` logger, for scripts and benchmarks"""
    level = level or get_settings().log_level
    logger = logging.getLogger("zkident")
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(handler)
    logger.setLevel(level)
