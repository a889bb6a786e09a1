"""Error types raised by serdevault.

Every failure surfaces as a subclass of SerdeVaultError so callers can catch
the whole family at once. None of the messages carry key or plaintext bytes.
"""


class SerdeVaultError(Exception):
    """Base class for all vault errors."""


class VaultIOError(SerdeVaultError):
    """Filesystem access failed (missing file, permissions, disk full)."""

    def __init__(self, message: str, path=None):
        super().__init__(message)
        self.path = path


class InvalidFormat(SerdeVaultError):
    """Vault bytes are structurally malformed (too short, wrong magic)."""


class UnsupportedVersion(SerdeVaultError):
    def __init__(self, version: int):
        super().__init__(f"Unsupported vault version: {version}")
        self.version = version


class KdfError(SerdeVaultError):
    """Invalid Argon2 cost parameters or internal KDF failure."""


class EncryptionError(SerdeVaultError):
    pass


class DecryptionFailed(SerdeVaultError):
    """Authentication failed.

    Wrong password, corrupted salt/nonce and corrupted or truncated ciphertext
    all end up here, with the same message.
    """

    def __init__(self):
        super().__init__("Decryption failed - wrong password or corrupted vault")


class SerializationError(SerdeVaultError):
    pass


class DeserializationError(SerdeVaultError):
    pass
