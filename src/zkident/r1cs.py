import hashlib
import logging
from typing import Optional, Union

from .array import SparseArray
from .errors import AssignmentMissing
from .symbolic import (
    ONE,
    PRIVATE,
    PUBLIC,
    Equation,
    LinearCombination,
    Product,
    Variable,
)
from .utils import next_power_of_two

logger = logging.getLogger(__name__)


class R1CS:
    """
    Compiled Rank-1 Constraint System `A.z * B.z = C.z`
    where `z = [1, public..., private...]`
    """

    def __init__(
        self,
        A: SparseArray,
        B: SparseArray,
        C: SparseArray,
        n_public: int,
        names: list,
        p: int,
    ):
        self.A = A
        self.B = B
        self.C = C
        self.n_public = n_public
        self.n_private = A.n_col - n_public
        self.n_constraints = A.n_row
        self.names = names
        self.p = p

    @property
    def n_witness(self):
        return self.A.n_col

    @property
    def domain_size(self):
        return next_power_of_two(max(self.n_constraints, 2))

    def is_sat(self, public_witness: list, private_witness: list):
        """
        Check R1CS satisfiability with the given `witness`
        """
        return self.which_is_unsat(public_witness, private_witness) is None

    def which_is_unsat(self, public_witness: list, private_witness: list):
        """Return the index of the first unsatisfied row, or None"""
        w = public_witness + private_witness
        Az = self.A.dot(w)
        Bz = self.B.dot(w)
        Cz = self.C.dot(w)

        for i, (a, b, c) in enumerate(zip(Az, Bz, Cz)):
            if a * b % self.p != c:
                return i

        return None

    def digest(self) -> bytes:
        """SHA-256 over the constraint topology, independent of any assignment"""
        h = hashlib.sha256()
        h.update(int.to_bytes(self.n_public, 8, "little"))
        for m in (self.A, self.B, self.C):
            h.update(m.to_bytes())
        return h.digest()


class ConstraintSystem:
    """
    Builder of a constraint system over Fp.

    Public inputs and private witnesses are allocated with a value.
    Allocating without a value raises `AssignmentMissing`.
    """

    def __init__(self, p: int):
        self.p = p
        self.public_names = ["one"]
        self.public_values = [1]
        self.private_names = []
        self.private_values = []
        self.constraints = []

    @property
    def n_public(self):
        return len(self.public_names)

    @property
    def n_private(self):
        return len(self.private_names)

    def one(self) -> Variable:
        return Variable(*ONE, "one")

    def alloc_input(self, name: str, value: Optional[int]) -> Variable:
        """Allocate a public input variable"""
        if value is None:
            raise AssignmentMissing(name)

        self.public_names.append(name)
        self.public_values.append(int(value) % self.p)
        return Variable(PUBLIC, len(self.public_names) - 1, name)

    def alloc_witness(self, name: str, value: Optional[int]) -> Variable:
        """Allocate a private witness variable"""
        if value is None:
            raise AssignmentMissing(name)

        self.private_names.append(name)
        self.private_values.append(int(value) % self.p)
        return Variable(PRIVATE, len(self.private_names) - 1, name)

    def add_constraint(self, eq: Equation):
        """
        Add new constraint to the system.

        Args:
            eq: equation in the form of `c == a * b` or `x == y`
        """
        if not isinstance(eq, Equation):
            raise TypeError(f"Constraint must be an Equation, got {type(eq).__name__}")
        self.constraints.append(eq)

    def enforce(
        self,
        a: Union[LinearCombination, int],
        b: Union[LinearCombination, int],
        c: Union[LinearCombination, int],
    ):
        """Add constraint `a * b == c`"""
        self.add_constraint(_lc(c) == Product(_lc(a), _lc(b)))

    def enforce_equal(self, x, y):
        self.add_constraint(_lc(x) == _lc(y))

    def _values(self):
        values = {}
        for i, v in enumerate(self.public_values):
            values[(PUBLIC, i)] = v
        for i, v in enumerate(self.private_values):
            values[(PRIVATE, i)] = v
        return values

    def evaluate(self, lc: Union[LinearCombination, int]) -> int:
        """Evaluate a linear combination under the current assignment"""
        return _lc(lc).evaluate(self._values(), self.p)

    def which_is_unsatisfied(self):
        """Return the first unsatisfied constraint, or None"""
        values = self._values()
        for eq in self.constraints:
            a, b, c = (
                LinearCombination(t).evaluate(values, self.p) for t in eq.to_rows()
            )
            if a * b % self.p != c:
                return eq
        return None

    def is_satisfied(self) -> bool:
        return self.which_is_unsatisfied() is None

    def _column(self, key):
        kind, index = key
        if kind == PUBLIC:
            return index
        return self.n_public + index

    def compile(self) -> R1CS:
        """
        Compile the constraints into R1CS sparse arrays

        One extra row `x_i * 0 = 0` is added per public column so that
        the verifying key points are linearly independent and unused
        public inputs cannot be malleated.
        See: https://geometry.xyz/notebook/groth16-malleability
        """
        rows_a, rows_b, rows_c = [], [], []

        for eq in self.constraints:
            for rows, terms in zip((rows_a, rows_b, rows_c), eq.to_rows()):
                row = {}
                for key, coeff in terms.items():
                    col = self._column(key)
                    row[col] = (row.get(col, 0) + coeff) % self.p
                rows.append(row)

        for i in range(self.n_public):
            rows_a.append({i: 1})
            rows_b.append({})
            rows_c.append({})

        n_row = len(rows_a)
        n_col = self.n_public + self.n_private

        logger.debug(
            "compiled %d constraints over %d public and %d private variables",
            n_row,
            self.n_public,
            self.n_private,
        )

        return R1CS(
            SparseArray(rows_a, n_row, n_col, self.p),
            SparseArray(rows_b, n_row, n_col, self.p),
            SparseArray(rows_c, n_row, n_col, self.p),
            self.n_public,
            self.public_names + self.private_names,
            self.p,
        )

    def witness(self):
        """
        Return `(public_witness, private_witness)`,
        the public one starting with the constant 1
        """
        return list(self.public_values), list(self.private_values)


def _lc(x):
    if isinstance(x, LinearCombination):
        return x
    return LinearCombination() + x
