from enum import Enum
from typing import Mapping, Sequence, Union

from .circuits import AgeThreshold, Circuit, CredentialCheck, Membership
from .errors import InvalidInput
from .utils import to_field


class Predicate(Enum):
    """Supported predicates, each selecting one circuit type"""

    AGE_THRESHOLD = "age_threshold"
    MEMBERSHIP = "membership"
    CREDENTIAL_CHECK = "credential_check"

    @classmethod
    def parse(cls, value: Union["Predicate", str]) -> "Predicate":
        if isinstance(value, Predicate):
            return value
        try:
            return cls(str(value).lower())
        except ValueError as exc:
            raise InvalidInput(f"Unknown predicate: {value}") from exc

    @property
    def circuit(self) -> type:
        return _CIRCUITS[self]

    @property
    def public_input_order(self) -> tuple:
        return self.circuit.PUBLIC_INPUTS

    def dummy_circuit(self) -> Circuit:
        return self.circuit.dummy()

    def build_circuit(self, values: Mapping[str, int]) -> Circuit:
        """
        Build a fully assigned circuit from unsigned 64-bit application values
        """
        fields = self.circuit.fields()
        missing = [name for name in fields if name not in values]
        if missing:
            raise InvalidInput(f"{self.value} requires value(s) for {missing}")

        unknown = sorted(set(values) - set(fields))
        if unknown:
            raise InvalidInput(f"{self.value} has no field(s) {unknown}")

        return self.circuit(**{k: to_field(v, k) for k, v in values.items()})

    def public_values(self, values: Union[Mapping[str, int], Sequence[int]]) -> list:
        """
        Order public values as the circuit allocated them.
        `values` is either a sequence already in that order or a mapping by name.
        """
        if isinstance(values, Mapping):
            try:
                ordered = [values[name] for name in self.public_input_order]
            except KeyError as exc:
                raise InvalidInput(
                    f"{self.value} requires public value {exc.args[0]}"
                ) from exc
            names = self.public_input_order
        else:
            ordered = list(values)
            names = [f"public[{i}]" for i in range(len(ordered))]

        return [to_field(v, name) for v, name in zip(ordered, names)]


_CIRCUITS = {
    Predicate.AGE_THRESHOLD: AgeThreshold,
    Predicate.MEMBERSHIP: Membership,
    Predicate.CREDENTIAL_CHECK: CredentialCheck,
}
