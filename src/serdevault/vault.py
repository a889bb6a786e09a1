"""
VaultFile: a password-protected file holding one serialized value.

Encryption uses AES-256-GCM with a key derived from the password via
Argon2id. Each save draws a fresh salt and nonce and writes atomically.

    vault = VaultFile("~/.my.vault", "my_password")
    vault.save({"api_key": "..."})
    data = vault.load()
"""
import logging
import os

from pathlib import Path
from typing import Any

from serdevault.crypto.aead import aead_encrypt, aead_decrypt
from serdevault.crypto.kdf import derive_key_for
from serdevault.crypto.secret import SecretBuffer
from serdevault.serialize import JsonSerializer, Serializer
from serdevault.storage.atomic import atomic_write
from serdevault.storage.vault import decode, encode, read_header, read_vault
from serdevault.utils.dataModels import DEFAULT_KDF_PARAMS, SALT_SIZE, KdfParams, VaultHeader
from serdevault.utils.helper import expand_home

logger = logging.getLogger(__name__)


class VaultFile:
    """Handle to an encrypted vault file.

    No I/O happens on construction; the file is read on ``load`` and written on
    ``save``. Cost parameters set with ``with_params`` only affect saves: loads
    always use the parameters recorded in the file.
    """

    def __init__(self, path: str | os.PathLike, password: str, serializer: Serializer | None = None):
        self.path: Path = expand_home(path)
        self._password = SecretBuffer.from_text(password)
        self._closed = False
        self.params: KdfParams = DEFAULT_KDF_PARAMS
        self.serializer: Serializer = serializer if serializer is not None else JsonSerializer()

    @classmethod
    def open(cls, path: str | os.PathLike, password: str, serializer: Serializer | None = None) -> "VaultFile":
        return cls(path, password, serializer)

    def __repr__(self) -> str:
        return f"VaultFile(path={str(self.path)!r}, params={self.params})"

    def __enter__(self) -> "VaultFile":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        """Wipe the held password. The handle is unusable afterwards."""
        self._password.wipe()
        self._closed = True

    def with_params(self, memory_cost: int, time_cost: int, parallelism: int) -> "VaultFile":
        """Override the Argon2id parameters used by the next ``save``."""
        self.params = KdfParams(memory_cost, time_cost, parallelism)
        return self

    def exists(self) -> bool:
        return self.path.exists()

    def inspect(self) -> VaultHeader:
        return read_header(self.path)

    def save(self, value: Any) -> None:
        """Serialize ``value``, encrypt it and atomically replace the vault file."""
        self._check_open()
        with SecretBuffer(self.serializer.dumps(value)) as plaintext:
            salt = os.urandom(SALT_SIZE)
            with derive_key_for(self._password.data, salt, self.params) as key:
                ct, nonce = aead_encrypt(key, plaintext.data)
            payload = encode(VaultHeader(salt=salt, kdf_params=self.params, nonce=nonce), ct)
            atomic_write(self.path, payload)
        logger.debug("Saved vault %s (%d bytes)", self.path, len(payload))

    def load(self, cls: Any = None) -> Any:
        """Read, verify and decrypt the vault, then deserialize into ``cls``."""
        value, _ = self.load_with_header(cls)
        return value

    def load_with_header(self, cls: Any = None) -> tuple[Any, VaultHeader]:
        """Like ``load``, also returning the header of the same read."""
        self._check_open()
        header, ct = decode(read_vault(self.path))
        with derive_key_for(self._password.data, header.salt, header.kdf_params) as key:
            plaintext = aead_decrypt(key, header.nonce, ct)
        with plaintext:
            value = self.serializer.loads(plaintext.data, cls)
        logger.debug("Loaded vault %s", self.path)
        return value, header

    def _check_open(self) -> None:
        if self._closed:
            raise ValueError("VaultFile is closed")
