"""
Groth16 zero-knowledge proofs for identity predicates
"""

from .circuits import AgeThreshold, Circuit, CredentialCheck, Membership
from .engine import (
    prove,
    prove_bytes,
    setup,
    setup_bytes,
    synthesize,
    verify,
    verify_bytes,
)
from .errors import (
    AssignmentMissing,
    DecodeError,
    InvalidInput,
    SetupError,
    ShapeMismatch,
    SynthesisError,
    VerificationError,
    ZKIdentError,
)
from .groth16 import Proof, ProvingKey, VerifyingKey
from .keystore import KeyStore
from .predicates import Predicate
from .service import ProofService

__version__ = "0.1.0"
