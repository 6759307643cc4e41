"""
Symbolic terms used to write constraints with Python operators.

Variables are keyed by `(kind, index)` where `kind` is `PUBLIC` or `PRIVATE`.
Public index 0 is the constant one. A constraint is written as either

    c == a * b      (quadratic, a, b, c linear combinations)
    x == y          (linear)
"""

PUBLIC = "public"
PRIVATE = "private"

ONE = (PUBLIC, 0)


def _as_lc(other):
    if isinstance(other, LinearCombination):
        return other
    if isinstance(other, int) and not isinstance(other, bool):
        return LinearCombination({ONE: other} if other else {})
    raise TypeError(f"Cannot use {type(other).__name__} in a linear combination")


class LinearCombination:
    """Sum of `coeff * variable` terms"""

    def __init__(self, terms=None):
        self.terms = dict(terms or {})

    def __str__(self):
        if not self.terms:
            return "0"

        parts = []
        for (kind, index), coeff in self.terms.items():
            name = "1" if (kind, index) == ONE else f"{kind}[{index}]"
            parts.append(name if coeff == 1 else f"{coeff}*{name}")
        return " + ".join(parts)

    def __repr__(self):
        return self.__str__()

    def __add__(self, other):
        other = _as_lc(other)
        terms = dict(self.terms)
        for key, coeff in other.terms.items():
            terms[key] = terms.get(key, 0) + coeff
        return LinearCombination(terms)

    def __radd__(self, other):
        return self.__add__(other)

    def __neg__(self):
        return LinearCombination({k: -c for k, c in self.terms.items()})

    def __sub__(self, other):
        return self.__add__(-_as_lc(other))

    def __rsub__(self, other):
        return _as_lc(other).__add__(-self)

    def __mul__(self, other):
        if isinstance(other, LinearCombination):
            return Product(self, other)
        if isinstance(other, int) and not isinstance(other, bool):
            return LinearCombination({k: c * other for k, c in self.terms.items()})
        return NotImplemented

    def __rmul__(self, other):
        return self.__mul__(other)

    def __eq__(self, other):
        if isinstance(other, Product):
            return Equation(self, other)
        return Equation(self, _as_lc(other))

    __hash__ = None

    def __pow__(self, other):
        raise SyntaxError(
            "Integer power is not supported. Consider converting power to multiplication."
        )

    def __truediv__(self, other):
        raise SyntaxError("Division is not supported in constraints")

    def evaluate(self, values: dict, p: int) -> int:
        """Evaluate with `values` mapping variable keys to field elements"""
        total = 0
        for key, coeff in self.terms.items():
            value = values[key]
            if value is None:
                raise ValueError(f"Variable {key} has no value")
            total += coeff * value
        return total % p


class Variable(LinearCombination):
    """Allocated variable of a constraint system"""

    def __init__(self, kind: str, index: int, name: str):
        super().__init__({(kind, index): 1})
        self.kind = kind
        self.index = index
        self.name = name

    @property
    def key(self):
        return (self.kind, self.index)

    def __str__(self):
        return self.name


class Product:
    """Product of two linear combinations, valid only on one side of an equation"""

    def __init__(self, left: LinearCombination, right: LinearCombination):
        self.left = left
        self.right = right

    def __str__(self):
        return f"({self.left}) * ({self.right})"

    def __repr__(self):
        return self.__str__()

    def __eq__(self, other):
        return Equation(_as_lc(other), self)

    __hash__ = None

    def __mul__(self, other):
        raise SyntaxError(f"Constraint {self} is not in the form of C = A*B")

    __rmul__ = __mul__

    def __add__(self, other):
        raise SyntaxError(f"Constraint {self} is not in the form of C = A*B")

    __radd__ = __add__
    __sub__ = __add__
    __rsub__ = __add__


class Equation:
    """`left == right` where `left` is linear and `right` is linear or a product"""

    def __init__(self, left: LinearCombination, right):
        self.left = left
        self.right = right

    def __str__(self):
        return f"{self.left} = {self.right}"

    def __repr__(self):
        return self.__str__()

    def __bool__(self):
        raise TypeError("Equation is a constraint, add it to a ConstraintSystem")

    def to_rows(self):
        """Return `(A, B, C)` term dicts such that `A * B = C`"""
        if isinstance(self.right, Product):
            return self.right.left.terms, self.right.right.terms, self.left.terms

        diff = self.left - self.right
        return diff.terms, {ONE: 1}, {}
