"""
Byte and text encoding of proofs and keys.

Text is standard base64 of the byte encoding, without line wrapping.
"""

import base64
import binascii
from typing import Union

from .config import get_settings
from .errors import DecodeError
from .groth16.serialization import Proof, ProvingKey, VerifyingKey

KINDS = {
    "proof": Proof,
    "proving_key": ProvingKey,
    "verifying_key": VerifyingKey,
}


def _kind(kind: Union[str, type]) -> type:
    if isinstance(kind, type) and kind in KINDS.values():
        return kind
    try:
        return KINDS[kind]
    except (KeyError, TypeError) as exc:
        raise ValueError(f"Unknown object kind: {kind!r}") from exc


def encode(obj) -> bytes:
    if not isinstance(obj, tuple(KINDS.values())):
        raise TypeError(f"Cannot encode {type(obj).__name__}")
    return obj.to_bytes()


def decode(kind, data: bytes, curve: str = None, validate: bool = False):
    """
    Decode a `Proof`, `ProvingKey` or `VerifyingKey` from bytes.

    Args:
        kind: `"proof"`, `"proving_key"`, `"verifying_key"` or the class itself
        data: encoded bytes
        curve: curve the object lives on, from configuration if omitted
        validate: check that every point is on the curve and in its subgroup,
            required for bytes from an untrusted producer
    """
    cls = _kind(kind)
    return cls.from_bytes(data, curve or get_settings().curve, validate)


def encode_text(obj) -> str:
    return base64.b64encode(encode(obj)).decode("ascii")


def decode_text(kind, text: str, curve: str = None, validate: bool = False):
    data = text_to_bytes(text)
    return decode(kind, data, curve, validate)


def text_to_bytes(text: str) -> bytes:
    if not isinstance(text, str):
        raise DecodeError(f"Expected base64 text, got {type(text).__name__}")
    try:
        return base64.b64decode(text.encode("ascii"), validate=True)
    except (binascii.Error, UnicodeEncodeError) as exc:
        raise DecodeError(f"Invalid base64 text: {exc}") from exc
