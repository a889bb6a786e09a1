import struct

from pathlib import Path
from typing import Tuple

from serdevault.errors import InvalidFormat, UnsupportedVersion, VaultIOError
from serdevault.utils.dataModels import (
    FORMAT_VERSION,
    HEADER_SIZE,
    MAGIC,
    VAULT_HDR_FMT,
    KdfParams,
    VaultHeader,
)


def encode(header: VaultHeader, ct: bytes) -> bytes:
    m, t, p = header.kdf_params.as_tuple()
    packed = struct.pack(VAULT_HDR_FMT, MAGIC, FORMAT_VERSION, header.salt, m, t, p, header.nonce)
    return packed + bytes(ct)


def decode(data: bytes) -> Tuple[VaultHeader, bytes]:
    """Split vault bytes into (header, ciphertext). Structural checks only, no crypto."""
    if len(data) < HEADER_SIZE:
        raise InvalidFormat(f"file too small: {len(data)} bytes (minimum is {HEADER_SIZE})")
    if data[:4] != MAGIC:
        raise InvalidFormat("invalid magic number, not a serdevault file")
    if data[4] != FORMAT_VERSION:
        raise UnsupportedVersion(data[4])
    _, _, salt, m, t, p, nonce = struct.unpack(VAULT_HDR_FMT, data[:HEADER_SIZE])
    header = VaultHeader(salt=salt, kdf_params=KdfParams(m, t, p), nonce=nonce)
    return header, bytes(data[HEADER_SIZE:])


def read_vault(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as e:
        raise VaultIOError(f"cannot read {path}: {e.strerror or e}", path) from e


def read_header(path: Path) -> VaultHeader:
    """Parse only the header of a vault file, for inspection."""
    try:
        with path.open("rb") as f:
            head = f.read(HEADER_SIZE)
    except OSError as e:
        raise VaultIOError(f"cannot read {path}: {e.strerror or e}", path) from e
    header, _ = decode(head)
    return header
