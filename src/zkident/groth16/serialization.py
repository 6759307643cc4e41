from ..ecc import EllipticCurve, CurvePointSize, Point
from ..errors import DecodeError
from ..utils import split_list

DIGEST_SIZE = 32
LENGTH_SIZE = 8


class _Reader:
    """Cursor over encoded bytes, every read is bounds checked"""

    def __init__(self, data: bytes, crv: str, validate: bool):
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise DecodeError(f"Expected bytes, got {type(data).__name__}")

        self.data = bytes(data)
        self.offset = 0
        self.crv = crv
        self.validate = validate
        self.n = CurvePointSize[crv].value

    def take(self, size: int) -> bytes:
        if self.offset + size > len(self.data):
            raise DecodeError(
                f"Unexpected end of data: {size} bytes needed at offset {self.offset}, "
                f"{len(self.data) - self.offset} left"
            )
        chunk = self.data[self.offset : self.offset + size]
        self.offset += size
        return chunk

    def g1(self) -> Point:
        return Point.from_bytes(self.take(self.n * 2), self.crv, self.validate)

    def g2(self) -> Point:
        return Point.from_bytes(self.take(self.n * 4), self.crv, self.validate)

    def length(self) -> int:
        length = int.from_bytes(self.take(LENGTH_SIZE), "little")
        if length > len(self.data):
            raise DecodeError(f"Vector length {length} exceeds the data size")
        return length

    def g1_vector(self) -> list:
        length = self.length()
        blocks = split_list(self.take(length * self.n * 2), self.n * 2)
        return [Point.from_bytes(b, self.crv, self.validate) for b in blocks]

    def g2_vector(self) -> list:
        length = self.length()
        blocks = split_list(self.take(length * self.n * 4), self.n * 4)
        return [Point.from_bytes(b, self.crv, self.validate) for b in blocks]

    def finish(self):
        if self.offset != len(self.data):
            raise DecodeError(f"{len(self.data) - self.offset} trailing bytes")


def _vector_bytes(points: list) -> bytes:
    s = int.to_bytes(len(points), LENGTH_SIZE, "little")
    for point in points:
        s += point.to_bytes()
    return s


class Proof:

    def __init__(self, A, B, C):
        self.A = A
        self.B = B
        self.C = C

    def __str__(self):
        return f"A = {self.A}\nB = {self.B}\nC = {self.C}"

    def __repr__(self):
        return self.__str__()

    def __eq__(self, other):
        if not isinstance(other, Proof):
            return NotImplemented
        return self.to_bytes() == other.to_bytes()

    def __hash__(self):
        return hash(self.to_bytes())

    @property
    def curve(self):
        return self.A.name

    def points(self) -> list:
        return [self.A, self.B, self.C]

    @classmethod
    def from_bytes(cls, s: bytes, crv="BN254", validate=False):
        """Parse Proof from serialized bytes"""
        reader = _Reader(s, crv, validate)

        expected = EllipticCurve(crv).G1_size() * 2 + EllipticCurve(crv).G2_size()
        if len(reader.data) != expected:
            raise DecodeError(
                f"Length of the Proof must equal {expected} bytes, got {len(reader.data)}"
            )

        A = reader.g1()
        B = reader.g2()
        C = reader.g1()
        reader.finish()

        return Proof(A, B, C)

    def to_bytes(self) -> bytes:
        """Return bytes representation of the Proof"""
        return self.A.to_bytes() + self.B.to_bytes() + self.C.to_bytes()


class ProvingKey:
    def __init__(
        self,
        digest,
        alpha_G1,
        beta_G1,
        beta_G2,
        delta_G1,
        delta_G2,
        a_G1,
        b_G1,
        b_G2,
        target_G1,
        k_delta_G1,
    ):
        self.digest = digest
        self.alpha_1 = alpha_G1
        self.beta_1 = beta_G1
        self.beta_2 = beta_G2
        self.delta_1 = delta_G1
        self.delta_2 = delta_G2
        self.a_1 = a_G1
        self.b_1 = b_G1
        self.b_2 = b_G2
        self.target_1 = target_G1
        self.kdelta_1 = k_delta_G1

    @property
    def curve(self):
        return self.alpha_1.name

    def points(self) -> list:
        return [
            self.alpha_1,
            self.beta_1,
            self.beta_2,
            self.delta_1,
            self.delta_2,
            *self.a_1,
            *self.b_1,
            *self.b_2,
            *self.target_1,
            *self.kdelta_1,
        ]

    @property
    def n_witness(self):
        return len(self.a_1)

    @property
    def n_private(self):
        return len(self.kdelta_1)

    @property
    def n_public(self):
        return len(self.a_1) - len(self.kdelta_1)

    @property
    def domain(self):
        return len(self.target_1) + 1

    @classmethod
    def from_bytes(cls, s: bytes, crv="BN254", validate=False):
        """Construct ProvingKey from bytes"""
        reader = _Reader(s, crv, validate)

        digest = reader.take(DIGEST_SIZE)
        alpha_1 = reader.g1()
        beta_1 = reader.g1()
        beta_2 = reader.g2()
        delta_1 = reader.g1()
        delta_2 = reader.g2()

        a_1 = reader.g1_vector()
        b_1 = reader.g1_vector()
        b_2 = reader.g2_vector()
        target_1 = reader.g1_vector()
        kdelta_1 = reader.g1_vector()
        reader.finish()

        if not len(a_1) == len(b_1) == len(b_2) or len(kdelta_1) > len(a_1):
            raise DecodeError("Inconsistent proving key vector lengths")

        return ProvingKey(
            digest,
            alpha_1,
            beta_1,
            beta_2,
            delta_1,
            delta_2,
            a_1,
            b_1,
            b_2,
            target_1,
            kdelta_1,
        )

    def to_bytes(self) -> bytes:
        """Return bytes representation of the ProvingKey"""
        s = (
            self.digest
            + self.alpha_1.to_bytes()
            + self.beta_1.to_bytes()
            + self.beta_2.to_bytes()
            + self.delta_1.to_bytes()
            + self.delta_2.to_bytes()
        )

        for vector in (self.a_1, self.b_1, self.b_2, self.target_1, self.kdelta_1):
            s += _vector_bytes(vector)

        return s


class VerifyingKey:
    def __init__(
        self,
        alpha_G1,  # vk_alpha_1
        beta_G2,  # vk_beta_2
        gamma_G2,  # vk_gamma_2
        delta_G2,  # vk_delta_2
        IC,  # ic
    ):
        self.alpha_1 = alpha_G1
        self.beta_2 = beta_G2
        self.gamma_2 = gamma_G2
        self.delta_2 = delta_G2
        self.ic = IC

    @property
    def curve(self):
        return self.alpha_1.name

    def points(self) -> list:
        return [self.alpha_1, self.beta_2, self.gamma_2, self.delta_2, *self.ic]

    @property
    def n_inputs(self):
        """Number of public inputs, the constant one excluded"""
        return len(self.ic) - 1

    @classmethod
    def from_bytes(cls, s: bytes, crv="BN254", validate=False):
        """Construct VerifyingKey from bytes"""
        reader = _Reader(s, crv, validate)

        alpha_1 = reader.g1()
        beta_2 = reader.g2()
        gamma_2 = reader.g2()
        delta_2 = reader.g2()
        ic = reader.g1_vector()
        reader.finish()

        if not ic:
            raise DecodeError("Verifying key has no IC points")

        return VerifyingKey(alpha_1, beta_2, gamma_2, delta_2, ic)

    def to_bytes(self) -> bytes:
        """Return bytes representation of the VerifyingKey"""
        s = (
            self.alpha_1.to_bytes()
            + self.beta_2.to_bytes()
            + self.gamma_2.to_bytes()
            + self.delta_2.to_bytes()
        )

        return s + _vector_bytes(self.ic)
