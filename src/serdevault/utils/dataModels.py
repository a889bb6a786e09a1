import struct

from dataclasses import dataclass

# Argon2id defaults (KiB / iterations / lanes)
DEFAULT_M_COST_KiB = 65536  # 64 MiB
DEFAULT_T_COST = 3
DEFAULT_PARALLELISM = 1

SALT_SIZE = 32
NONCE_SIZE = 12  # AES-GCM standard
KEY_SIZE = 32    # AES-256
TAG_SIZE = 16

MAGIC = b"SVLT"
FORMAT_VERSION = 1
VAULT_HDR_FMT = "<4sB32sIII12s"  # magic, ver, salt(32), m, t, p, nonce(12)
HEADER_SIZE = struct.calcsize(VAULT_HDR_FMT)

U32_MAX = 0xFFFFFFFF


@dataclass(frozen=True)
class KdfParams:
    memory_cost: int
    time_cost: int
    parallelism: int

    def as_tuple(self) -> tuple[int, int, int]:
        return self.memory_cost, self.time_cost, self.parallelism


DEFAULT_KDF_PARAMS = KdfParams(DEFAULT_M_COST_KiB, DEFAULT_T_COST, DEFAULT_PARALLELISM)


@dataclass(frozen=True)
class VaultHeader:
    """Plaintext metadata stored in front of the ciphertext.

    Not encrypted, but altering the salt, params or nonce changes the derived
    key or the nonce, so tag verification fails on load.
    """
    salt: bytes
    kdf_params: KdfParams
    nonce: bytes
