"""
Token codec - packs a payment request into an opaque URL path segment.

There is no database: the image endpoint reconstructs the payment request
from the token alone. Tokens are AES-SIV ciphertexts (deterministic
authenticated encryption) of the JSON array [payee, amount, message],
hex-encoded. A token that was tampered with, truncated, or produced under a
different key fails authentication and raises DecodeError.
"""

import json
import re

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.ciphers.aead import AESSIV
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC
from pydantic import ValidationError

from swishme.core.errors import DecodeError
from swishme.schemas.payment import PaymentRequest

# AES-256-SIV takes a 512-bit key (two 256-bit halves: MAC and CTR)
KEY_LENGTH_BYTES = 64

# Authenticated with every token, never transmitted
ASSOCIATED_DATA = [b"swishme:payment-request:v1"]

_HEX_TOKEN = re.compile(r"^[0-9a-f]+$")


def derive_key(secret: str, salt: str, iterations: int) -> bytes:
    """Derive the AES-SIV key from the configured secret via PBKDF2-SHA256."""
    if not secret:
        raise ValueError("Token cipher secret must not be empty")
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=KEY_LENGTH_BYTES,
        salt=salt.encode("utf-8"),
        iterations=iterations,
    )
    return kdf.derive(secret.encode("utf-8"))


class TokenCodec:
    """
    Encrypts payment requests into tokens and back.

    Construct once per process; PBKDF2 runs in the constructor.

    Args:
        secret: Shared cipher secret from configuration
        salt: PBKDF2 salt
        iterations: PBKDF2 iteration count
    """

    def __init__(self, secret: str, salt: str, iterations: int):
        self._cipher = AESSIV(derive_key(secret, salt, iterations))

    def encode(self, request: PaymentRequest) -> str:
        """
        Serialize and encrypt a payment request.

        Returns:
            Lowercase hex token (same request and key always give the same token)
        """
        plaintext = json.dumps(
            [request.payee, request.amount, request.message],
            ensure_ascii=False,
            separators=(",", ":"),
        ).encode("utf-8")
        return self._cipher.encrypt(plaintext, ASSOCIATED_DATA).hex()

    def decode(self, token: str) -> PaymentRequest:
        """
        Decrypt and deserialize a token produced by encode().

        Raises:
            DecodeError: If the token is malformed, tampered with, or was
                produced under a different key
        """
        if not isinstance(token, str) or not _HEX_TOKEN.match(token) or len(token) % 2:
            raise DecodeError("Token is not a lowercase hex string")

        try:
            plaintext = self._cipher.decrypt(bytes.fromhex(token), ASSOCIATED_DATA)
        except (InvalidTag, ValueError) as e:
            raise DecodeError("Token failed authentication") from e

        try:
            fields = json.loads(plaintext.decode("utf-8"))
        except ValueError as e:
            raise DecodeError("Token payload is not valid JSON") from e

        if not isinstance(fields, list) or len(fields) != 3:
            raise DecodeError("Token payload has the wrong shape")

        payee, amount, message = fields
        try:
            return PaymentRequest(payee=payee, amount=amount, message=message)
        except ValidationError as e:
            raise DecodeError(f"Token payload is invalid: {e.error_count()} field error(s)") from e
