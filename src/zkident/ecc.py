import os
from enum import Enum
from typing import Union

from joblib import Parallel, delayed
from py_ecc import optimized_bls12_381, optimized_bn128
from py_ecc.fields import (
    optimized_bn128_FQ,
    optimized_bn128_FQ2,
    optimized_bls12_381_FQ,
    optimized_bls12_381_FQ2,
)

from .errors import DecodeError
from .utils import get_n_jobs, split_list

# minimum number of scalars dispatched to joblib workers
PARALLEL_THRESHOLD = 16


class CurveType(Enum):
    BN128 = optimized_bn128
    BN254 = optimized_bn128
    ALT_BN128 = optimized_bn128
    BLS12_381 = optimized_bls12_381


class CurveFQ(Enum):
    BN128 = optimized_bn128_FQ
    BN254 = optimized_bn128_FQ
    ALT_BN128 = optimized_bn128_FQ
    BLS12_381 = optimized_bls12_381_FQ


class CurveFQ2(Enum):
    BN128 = optimized_bn128_FQ2
    BN254 = optimized_bn128_FQ2
    ALT_BN128 = optimized_bn128_FQ2
    BLS12_381 = optimized_bls12_381_FQ2


class CurvePointSize(Enum):
    """Size in bytes of one base field coordinate"""

    BN128 = 32
    BN254 = 32
    ALT_BN128 = 32
    BLS12_381 = 48


class CurveRootGenerator(Enum):
    """Multiplicative generator of the scalar field, used for roots of unity"""

    BN128 = 5
    BN254 = 5
    ALT_BN128 = 5
    BLS12_381 = 7


class CurveG1Cofactor(Enum):
    """Cofactor of G1, points of a curve with cofactor 1 need no subgroup check"""

    BN128 = 1
    BN254 = 1
    ALT_BN128 = 1
    BLS12_381 = 0x396C8C005555E1568C00AAAB0000AAAB


class EllipticCurve:
    def __init__(self, curve: str):
        if curve not in CurveType.__members__:
            raise ValueError(f"Unsupported curve: {curve}")

        self.name = curve
        self.curve = CurveType[curve].value
        self.order = self.curve.curve_order
        self.field_modulus = self.curve.field_modulus

    def G1(self):
        """
        Return generator G1 of the curve
        """
        return Point(self.curve.G1, self.name)

    def G2(self):
        """
        Return generator G2 of the curve
        """
        return Point(self.curve.G2, self.name)

    def zero_G1(self):
        return Point(self.curve.Z1, self.name)

    def zero_G2(self):
        return Point(self.curve.Z2, self.name)

    def pairing(self, a, b):
        """
        Compute pairing, that is `e(a, b)`, where `a in G1` and `b in G2`
        """
        return self.curve.pairing(b.point, a.point)

    def batch_mul(self, g, s: list) -> list:
        """
        Perform EC multiplication of `g` by every scalar of `s`,
        in parallel chunks when joblib workers are configured
        """
        n_jobs = get_n_jobs()
        if n_jobs == 1 or len(s) < PARALLEL_THRESHOLD:
            return _mul_chunk(g, s)

        chunks = split_list(s, max(1, len(s) // _worker_count(n_jobs)))
        results = Parallel(n_jobs=n_jobs)(
            delayed(_mul_chunk)(g, chunk) for chunk in chunks
        )
        return [p for chunk in results for p in chunk]

    def multiexp(self, g: list, s: list):
        """
        Perform Multi-Scalar-Multiplication (MSM)
        to compute sum of g[i] * s[i] where g is
        Elliptic Curve point and s is scalar
        """
        assert len(g) == len(s), "Length of points and scalars must be equal"

        pairs = [(point, scalar % self.order) for point, scalar in zip(g, s)]
        pairs = [(point, scalar) for point, scalar in pairs if scalar != 0]
        if not pairs:
            return Point(self.curve.Z2 if g and g[0].is_g2 else self.curve.Z1, self.name)

        n_jobs = get_n_jobs()
        if n_jobs == 1 or len(pairs) < PARALLEL_THRESHOLD:
            return _msm_chunk(pairs)

        chunks = split_list(pairs, max(1, len(pairs) // _worker_count(n_jobs)))
        partials = Parallel(n_jobs=n_jobs)(
            delayed(_msm_chunk)(chunk) for chunk in chunks
        )
        total = partials[0]
        for partial in partials[1:]:
            total += partial
        return total

    def multi_pairing(self, a: list, b: list):
        """
        Compute product of pairings `e(a[i], b[i])`
        """
        assert len(a) == len(b), "Length of a and b must be equal"

        n_jobs = get_n_jobs()
        if n_jobs == 1:
            results = [self.pairing(x, y) for x, y in zip(a, b)]
        else:
            results = Parallel(n_jobs=n_jobs)(
                delayed(_pairing)(self.name, x.point, y.point) for x, y in zip(a, b)
            )

        total = results[0]
        for r in results[1:]:
            total = total * r
        return total

    def G1_size(self) -> int:
        return CurvePointSize[self.name].value * 2

    def G2_size(self) -> int:
        return CurvePointSize[self.name].value * 4


class Point:
    """
    Elliptic curve point in projective coordinates over `py_ecc` field elements.

    Only the curve name is stored next to the coordinates so that points
    survive pickling into joblib workers.
    """

    __slots__ = ("point", "name")

    def __init__(self, point: tuple, crv: str):
        self.point = point
        self.name = crv

    @property
    def curve(self):
        return CurveType[self.name].value

    @property
    def is_g2(self) -> bool:
        return isinstance(self.point[0], CurveFQ2[self.name].value)

    @classmethod
    def from_affine(
        cls,
        x: Union[int, tuple[int, int]],
        y: Union[int, tuple[int, int]],
        crv: str,
        verify=True,
    ):
        curve = CurveType[crv].value

        if isinstance(x, (tuple, list)) and isinstance(y, (tuple, list)):
            fq2 = CurveFQ2[crv].value
            if all(c == 0 for c in (*x, *y)):
                return cls(curve.Z2, crv)

            point = (fq2(x), fq2(y), fq2.one())
            b = curve.b2
        elif isinstance(x, int) and isinstance(y, int):
            fq = CurveFQ[crv].value
            if x == 0 and y == 0:
                return cls(curve.Z1, crv)

            point = (fq(x), fq(y), fq.one())
            b = curve.b
        else:
            raise TypeError(f"Unknown coordinate type: {type(x)} and {type(y)}")

        if verify and not curve.is_on_curve(point, b):
            raise ValueError("Point is not on the curve")

        return cls(point, crv)

    def __add__(self, other):
        if not isinstance(other, Point):
            raise TypeError(
                f"Addition of {type(self)} with {type(other)} is not allowed"
            )

        return Point(self.curve.add(self.point, other.point), self.name)

    def __radd__(self, other):
        return self.__add__(other)

    def __sub__(self, other):
        return self.__add__(-other)

    def __mul__(self, other):
        if not isinstance(other, int):
            raise TypeError(
                f"Multiplication of {type(self)} with {type(other)} is not allowed"
            )

        return Point(self.curve.multiply(self.point, other), self.name)

    def __rmul__(self, other):
        return self.__mul__(other)

    def __neg__(self):
        return Point(self.curve.neg(self.point), self.name)

    def __eq__(self, other):
        if not isinstance(other, Point):
            return NotImplemented
        return self.name == other.name and self.curve.eq(self.point, other.point)

    def __hash__(self):
        return hash((self.name, self.to_bytes()))

    def __str__(self) -> str:
        if self.is_zero():
            return "O"
        return f"{self.curve.normalize(self.point)}"

    def __repr__(self) -> str:
        return self.__str__()

    def is_zero(self) -> bool:
        return self.curve.is_inf(self.point)

    def is_on_curve(self) -> bool:
        b = self.curve.b2 if self.is_g2 else self.curve.b
        return self.curve.is_on_curve(self.point, b)

    def is_in_subgroup(self) -> bool:
        return self.curve.is_inf(self.curve.multiply(self.point, self.curve.curve_order))

    def to_bytes(self) -> bytes:
        """Uncompressed big-endian encoding, infinity is encoded as zero bytes"""
        n = CurvePointSize[self.name].value

        if self.is_zero():
            return bytes(n * (4 if self.is_g2 else 2))

        x, y = self.curve.normalize(self.point)
        if self.is_g2:
            coords = (*x.coeffs, *y.coeffs)
        else:
            coords = (x, y)

        return b"".join(int(c).to_bytes(n, "big") for c in coords)

    @classmethod
    def from_bytes(cls, s: bytes, crv: str, validate=False):
        """
        Parse a point from its uncompressed encoding.

        Structure (length, coordinate range) is always checked. With
        `validate`, the point must also lie on the curve and in the prime
        order subgroup. G1 of a curve with cofactor 1 skips the subgroup check.
        """
        n = CurvePointSize[crv].value
        modulus = CurveType[crv].value.field_modulus

        if len(s) not in (n * 2, n * 4):
            raise DecodeError(
                f"Point encoding of {n * 2} or {n * 4} bytes expected, got {len(s)}"
            )

        coords = [int.from_bytes(s[i : i + n], "big") for i in range(0, len(s), n)]
        if any(c >= modulus for c in coords):
            raise DecodeError("Point coordinate is not a canonical field element")

        if len(coords) == 2:
            x, y = coords[0], coords[1]
        else:
            x, y = (coords[0], coords[1]), (coords[2], coords[3])

        try:
            point = cls.from_affine(x, y, crv, verify=validate)
        except ValueError as exc:
            raise DecodeError(str(exc)) from exc

        needs_subgroup_check = point.is_g2 or CurveG1Cofactor[crv].value != 1
        if validate and needs_subgroup_check and not point.is_in_subgroup():
            group = "G2" if point.is_g2 else "G1"
            raise DecodeError(f"{group} point is not in the prime order subgroup")

        return point


def _worker_count(n_jobs: int) -> int:
    if n_jobs < 0:
        return os.cpu_count() or 1
    return n_jobs


def _mul_chunk(g, scalars):
    return [g * s for s in scalars]


def _msm_chunk(pairs):
    total = None
    for point, scalar in pairs:
        term = point if scalar == 1 else point * scalar
        total = term if total is None else total + term
    return total


def _pairing(crv, a, b):
    return CurveType[crv].value.pairing(b, a)
