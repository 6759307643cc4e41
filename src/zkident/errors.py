"""
Exception types raised by zkident.

A cryptographically invalid proof is never an error: `verify` returns
`False` for it. Everything below is a malformed request or a broken
setup, and retrying with the same inputs fails the same way.
"""


class ZKIdentError(Exception):
    """Base class of every zkident error"""


class AssignmentMissing(ZKIdentError):
    """A witness or public input was unset when it was allocated"""

    def __init__(self, name: str):
        super().__init__(f"Assignment for '{name}' is missing")
        self.name = name


class SynthesisError(ZKIdentError):
    """The circuit was rejected while its constraints were synthesized"""


class ShapeMismatch(SynthesisError):
    """The proving key was generated for a different constraint topology"""


class SetupError(ZKIdentError):
    """Trusted setup could not produce a key pair"""


class DecodeError(ZKIdentError, ValueError):
    """Malformed or truncated bytes/text given to the codec"""


class VerificationError(ZKIdentError):
    """Verifying key, proof and public inputs do not fit together structurally"""


class InvalidInput(ZKIdentError, ValueError):
    """Application level value is unknown, missing or out of its domain"""
