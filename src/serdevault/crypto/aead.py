import os

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from typing import Tuple

from serdevault.crypto.secret import SecretBuffer
from serdevault.errors import DecryptionFailed, EncryptionError
from serdevault.utils.dataModels import KEY_SIZE, NONCE_SIZE


def aead_encrypt(key: SecretBuffer | bytes, plaintext: bytes | bytearray) -> Tuple[bytes, bytes]:
    """AES-256-GCM under a fresh random nonce. Returns (ciphertext||tag, nonce)."""
    key_bytes = key.data if isinstance(key, SecretBuffer) else key
    if len(key_bytes) != KEY_SIZE:
        raise EncryptionError(f"key must be {KEY_SIZE} bytes, got {len(key_bytes)}")
    nonce = os.urandom(NONCE_SIZE)
    try:
        ct = AESGCM(key_bytes).encrypt(nonce, plaintext, None)
    except (ValueError, TypeError, OverflowError) as e:
        raise EncryptionError(str(e)) from e
    return ct, nonce


def aead_decrypt(key: SecretBuffer | bytes, nonce: bytes, ct: bytes) -> SecretBuffer:
    """Verify the tag, then return the plaintext in a wipeable buffer.

    Every failure, whatever the cause, is reported as DecryptionFailed.
    """
    key_bytes = key.data if isinstance(key, SecretBuffer) else key
    if len(key_bytes) != KEY_SIZE or len(nonce) != NONCE_SIZE:
        raise DecryptionFailed()
    try:
        plaintext = AESGCM(key_bytes).decrypt(nonce, ct, None)
    except (InvalidTag, ValueError):
        raise DecryptionFailed() from None
    return SecretBuffer(plaintext)
