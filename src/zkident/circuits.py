"""
Predicate circuits.

Every circuit holds optional values for its public inputs and private
witnesses. `synthesize` allocates them in a fixed order and asserts the
predicate; the constraints it produces depend only on the circuit type,
never on the values, so the dummy instance used by setup and every real
instance share one topology.
"""

from typing import Optional

from .errors import AssignmentMissing, InvalidInput
from .gadgets import combine, enforce_greater_equal
from .r1cs import ConstraintSystem


class Circuit:
    """
    Base class of predicate circuits

    `PUBLIC_INPUTS` lists public inputs in allocation order,
    which is the order `verify` expects them in.
    """

    PUBLIC_INPUTS: tuple = ()
    WITNESSES: tuple = ()

    def __init__(self, **values: Optional[int]):
        fields = self.fields()
        unknown = set(values) - set(fields)
        if unknown:
            raise InvalidInput(
                f"{self.__class__.__name__} has no field(s) {sorted(unknown)}"
            )

        for name in fields:
            setattr(self, name, values.get(name))

    def __repr__(self):
        # witnesses stay out of logs and tracebacks
        inputs = ", ".join(f"{k}={getattr(self, k)}" for k in self.PUBLIC_INPUTS)
        return f"{self.__class__.__name__}({inputs})"

    @classmethod
    def fields(cls) -> tuple:
        return cls.PUBLIC_INPUTS + cls.WITNESSES

    @classmethod
    def dummy(cls) -> "Circuit":
        """Instance with placeholder values satisfying the predicate, for setup"""
        raise NotImplementedError(
            f"dummy instance of {cls.__name__} is not implemented"
        )

    def public_inputs(self) -> list:
        """Public input values in allocation order"""
        values = []
        for name in self.PUBLIC_INPUTS:
            value = getattr(self, name)
            if value is None:
                raise AssignmentMissing(name)
            values.append(value)
        return values

    def synthesize(self, cs: ConstraintSystem):
        raise NotImplementedError(
            f"synthesize function of {self.__class__.__name__} is not implemented"
        )


class AgeThreshold(Circuit):
    """
    Prove `user_age >= min_age` without revealing `user_age`

    public: `min_age`
    private: `user_age`
    """

    PUBLIC_INPUTS = ("min_age",)
    WITNESSES = ("user_age",)

    def __init__(self, user_age=None, min_age=None, n_bits: int = 64):
        super().__init__(user_age=user_age, min_age=min_age)
        self.n_bits = n_bits

    @classmethod
    def dummy(cls):
        return cls(user_age=20, min_age=18)

    def synthesize(self, cs: ConstraintSystem):
        user_age = cs.alloc_witness("user_age", self.user_age)
        min_age = cs.alloc_input("min_age", self.min_age)

        enforce_greater_equal(cs, user_age, min_age, self.n_bits, "age")


class Membership(Circuit):
    """
    Placeholder membership check `combine(path, leaf) == root`

    public: `root`
    private: `path`, `leaf`
    """

    PUBLIC_INPUTS = ("root",)
    WITNESSES = ("path", "leaf")

    @classmethod
    def dummy(cls):
        return cls(root=123456, path=98765, leaf=24691)

    def synthesize(self, cs: ConstraintSystem):
        root = cs.alloc_input("root", self.root)
        path = cs.alloc_witness("path", self.path)
        leaf = cs.alloc_witness("leaf", self.leaf)

        cs.enforce_equal(combine(path, leaf), root)


class CredentialCheck(Circuit):
    """
    Placeholder signature check `combine(credential, signature) == issuer_key`

    public: `issuer_key`
    private: `credential`, `signature`
    """

    PUBLIC_INPUTS = ("issuer_key",)
    WITNESSES = ("credential", "signature")

    @classmethod
    def dummy(cls):
        return cls(issuer_key=25, credential=10, signature=15)

    def synthesize(self, cs: ConstraintSystem):
        issuer_key = cs.alloc_input("issuer_key", self.issuer_key)
        credential = cs.alloc_witness("credential", self.credential)
        signature = cs.alloc_witness("signature", self.signature)

        cs.enforce_equal(combine(credential, signature), issuer_key)
