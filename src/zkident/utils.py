import logging
import random
import time

from .config import get_settings
from .errors import InvalidInput

logger = logging.getLogger(__name__)

U64_MAX = (1 << 64) - 1


def get_random_int(n_max):
    """Get random integer in [1, n_max] range"""
    rand = random.SystemRandom()
    return rand.randint(1, n_max)


def get_n_jobs():
    """Get number of joblib workers for data parallel loops"""
    return get_settings().n_jobs


def split_list(data, n):
    """Split data into chunks of n"""
    return [data[i : i + n] for i in range(0, len(data), n)]


def next_power_of_two(n: int):
    """Get next 2^x number from n"""
    return 1 << (n - 1).bit_length()


def is_power_of_two(n):
    return (n & (n - 1)) == 0


def batch_modinv(a: list, m: int):
    """
    Compute modular inverse of `a[i]` over modulus `m` in batch
    """
    n = len(a)
    if n == 0:
        return []

    prefix_products = [1] * n

    for i in range(1, n):
        prefix_products[i] = (prefix_products[i - 1] * a[i - 1]) % m

    total_product = (prefix_products[-1] * a[-1]) % m

    total_inverse = pow(total_product, -1, m)

    inverses = [0] * n
    suffix_inverse = total_inverse
    for i in range(n - 1, -1, -1):
        inverses[i] = (suffix_inverse * prefix_products[i]) % m
        suffix_inverse = (suffix_inverse * a[i]) % m

    return inverses


def to_field(value: int, name: str = "value") -> int:
    """
    Embed an unsigned 64-bit application integer into the scalar field.
    Every supported field is larger than 2^64, so the embedding is injective.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInput(f"{name} must be an integer, got {type(value).__name__}")
    if not 0 <= value <= U64_MAX:
        raise InvalidInput(f"{name} must be an unsigned 64-bit integer, got {value}")
    return value


class Timer:
    def __init__(self, name):
        self.start_time = 0
        self.end_time = 0
        self.elapsed = 0
        self.name = name

    def __enter__(self):
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.end_time = time.perf_counter()
        self.elapsed = self.end_time - self.start_time
        logger.debug("%s: %.2f seconds", self.name, self.elapsed)
