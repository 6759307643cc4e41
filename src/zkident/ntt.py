"""
Stockham NTT algorithm
which is much faster than recursive NTT with divide-and-conquer
Source: https://github.com/pdroalves/fft_ntt_comparison/blob/master/stockham/stockham_ntt.py
"""

from .utils import is_power_of_two

_omega_cache = {}


def get_primitive_root(n, p, generator):
    """Return a primitive `n`-th root of unity of Fp from a multiplicative generator"""
    assert is_power_of_two(n), "Domain size must be a power of two"
    assert (p - 1) % n == 0, f"Field has no subgroup of size {n}"

    k = (p - 1) // n
    omega = pow(generator, k, p)

    assert pow(omega, n, p) == 1
    assert n == 1 or pow(omega, n // 2, p) != 1, "Root of unity is not primitive"

    return omega


def build_omega(n, p, generator):
    """Return powers of the `n`-th root of unity and of its inverse"""
    key = (n, p, generator)
    if key in _omega_cache:
        return _omega_cache[key]

    omega = get_primitive_root(n, p, generator)

    w = [1] * n
    for j in range(1, n):
        w[j] = w[j - 1] * omega % p

    omega_inv = pow(omega, -1, p)
    w_inv = [1] * n
    for j in range(1, n):
        w_inv[j] = w_inv[j - 1] * omega_inv % p

    _omega_cache[key] = (w, w_inv)
    return w, w_inv


def CPU_NTT(data, w, p):
    N = len(w)
    assert N > 0 and is_power_of_two(N)
    R = 2
    Ns = 1
    a = list(data) + [0] * (N - len(data))
    b = [0] * N
    while Ns < N:
        for j in range(N // R):
            NTTIteration(j, N, R, Ns, a, b, w, p)
        a, b = b, a
        Ns = Ns * R
    return a


def CPU_INTT(data, w_inv, p):
    ninv = pow(len(w_inv), -1, p)

    transformed_values = CPU_NTT(data, w_inv, p)
    return [ninv * tv % p for tv in transformed_values]


def NTTIteration(j, N, R, Ns, data0, data1, w, p):
    v = [0] * R
    idxS = j
    w_index = ((j % Ns) * N) // (Ns * R)

    for r in range(R):
        v[r] = data0[idxS + r * (N // R)] * w[r * w_index] % p

    v = butterfly(v, p)
    idxD = expand(j, Ns, R)
    for r in range(R):
        data1[idxD + r * Ns] = v[r]


def butterfly(v, p):
    return [(v[0] + v[1]) % p, (v[0] - v[1]) % p]


def expand(idxL, N1, N2):
    return (idxL // N1) * N1 * N2 + (idxL % N1)
