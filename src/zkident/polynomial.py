from typing import Union

# pylint: disable=no-name-in-module
from flint import (
    fmpz_mod_poly,
    fmpz_mod_poly_ctx,
    fmpz_mod_ctx,
)

from .ntt import build_omega, CPU_INTT
from .utils import batch_modinv

_ctx_cache = {}


def _poly_ctx(p):
    if p not in _ctx_cache:
        _ctx_cache[p] = fmpz_mod_poly_ctx(fmpz_mod_ctx(p))
    return _ctx_cache[p]


class PolynomialRing:
    def __init__(self, arg: Union[list, fmpz_mod_poly], p):
        """
        Initialize the polynomial with coefficients.

        arg: list of coefficients, where arg[i] is the coefficient of x^i,
            or an already built `fmpz_mod_poly`
        p: prime number representing the finite field.
        """
        self.p = int(p)
        if isinstance(arg, fmpz_mod_poly):
            self.poly = arg
        else:
            self.poly = _poly_ctx(self.p)([int(c) % self.p for c in arg])

    def coeffs(self):
        """Return the list of coefficents of the polynomial."""
        coeffs = self.poly.coeffs() or [0]
        return [int(x) for x in coeffs]

    def degree(self):
        """Return the degree of the polynomial."""
        return len(self.coeffs()) - 1

    def is_zero(self):
        """Return the boolean whether the polynomial is equal to zero"""
        return self.poly.is_zero()

    def __bool__(self):
        return not self.is_zero()

    def __str__(self):
        return str(self.poly)

    def __repr__(self):
        return self.__str__()

    def __add__(self, other):
        return PolynomialRing(self.poly + other.poly, self.p)

    def __neg__(self):
        return PolynomialRing(-self.poly, self.p)

    def __sub__(self, other):
        return PolynomialRing(self.poly - other.poly, self.p)

    def __mul__(self, other):
        if isinstance(other, PolynomialRing):
            return PolynomialRing(self.poly * other.poly, self.p)
        if isinstance(other, int):
            return PolynomialRing(self.poly * (other % self.p), self.p)
        return NotImplemented

    def __rmul__(self, other):
        return self.__mul__(other)

    def __truediv__(self, other):
        """
        Divide two polynomials.
        Return quotient and remainder
        """
        if other.is_zero():
            raise ZeroDivisionError("Division by zero polynomial")
        quotient, remainder = divmod(self.poly, other.poly)
        return PolynomialRing(quotient, self.p), PolynomialRing(remainder, self.p)

    def __call__(self, point: int) -> int:
        """Evaluate the polynomial at point"""
        return int(self.poly(point % self.p))


def interpolate_over_domain(evals: list, p: int, generator: int) -> PolynomialRing:
    """
    Interpolate the polynomial taking `evals[i]` at `omega^i`
    where `omega` is the primitive root of unity of size `len(evals)`
    """
    _, omega_inv = build_omega(len(evals), p, generator)
    return PolynomialRing(CPU_INTT(evals, omega_inv, p), p)


def vanishing_polynomial(domain: int, p: int) -> PolynomialRing:
    """Return `Z(x) = x^domain - 1`, zero at every `domain`-th root of unity"""
    return PolynomialRing([p - 1] + [0] * (domain - 1) + [1], p)


def evaluate_vanishing_polynomial(domain: int, x: int, p: int) -> int:
    return (pow(x, domain, p) - 1) % p


def evaluate_lagrange_coefficients(domain: int, x: int, p: int, generator: int):
    """
    Evaluate every Lagrange basis polynomial of the root of unity domain at `x`,
    `L_i(x) = Z(x) * omega^i / (domain * (x - omega^i))`
    """
    omega, _ = build_omega(domain, p, generator)
    z = evaluate_vanishing_polynomial(domain, x, p)
    if z == 0:
        raise ValueError("Evaluation point lies inside the domain")

    denominators = [domain * (x - w) % p for w in omega]
    inverses = batch_modinv(denominators, p)

    return [z * w * inv % p for w, inv in zip(omega, inverses)]
