"""
serdevault: password-encrypted storage for a single structured value.

Binary vault layout (little-endian):
    magic     : 4 bytes   -> b"SVLT"
    version   : 1 byte    -> 0x01
    salt      : 32 bytes
    m_cost    : u32  (KiB)
    t_cost    : u32
    parallel  : u32
    nonce     : 12 bytes
    ciphertext: remaining bytes (AES-256-GCM over the serialized value, 16-byte tag)

Security choices:
  - AEAD: AES-256-GCM via cryptography.hazmat
  - Argon2id via argon2-cffi low-level API
"""
from serdevault.errors import (
    DecryptionFailed,
    DeserializationError,
    EncryptionError,
    InvalidFormat,
    KdfError,
    SerdeVaultError,
    SerializationError,
    UnsupportedVersion,
    VaultIOError,
)
from serdevault.model import VaultModel
from serdevault.serialize import JsonSerializer, Serializer
from serdevault.utils.dataModels import (
    DEFAULT_KDF_PARAMS,
    FORMAT_VERSION,
    HEADER_SIZE,
    MAGIC,
    KdfParams,
    VaultHeader,
)
from serdevault.vault import VaultFile

__version__ = "0.1.0"

__all__ = [
    "VaultFile",
    "VaultModel",
    "JsonSerializer",
    "Serializer",
    "KdfParams",
    "VaultHeader",
    "DEFAULT_KDF_PARAMS",
    "FORMAT_VERSION",
    "HEADER_SIZE",
    "MAGIC",
    "SerdeVaultError",
    "VaultIOError",
    "InvalidFormat",
    "UnsupportedVersion",
    "KdfError",
    "EncryptionError",
    "DecryptionFailed",
    "SerializationError",
    "DeserializationError",
]
