"""
Groth16 proof system
"""

from .prover import Prover
from .serialization import Proof, ProvingKey, VerifyingKey
from .setup import Setup
from .verifier import Verifier
