import logging

from argon2.exceptions import HashingError
from argon2.low_level import hash_secret_raw, Type as Argon2Type

from serdevault.crypto.secret import SecretBuffer
from serdevault.errors import KdfError
from serdevault.utils.dataModels import KdfParams, KEY_SIZE, SALT_SIZE, U32_MAX

logger = logging.getLogger(__name__)


def _check_cost(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise KdfError(f"{name} must be an integer, got {type(value).__name__}")
    if not 1 <= value <= U32_MAX:
        raise KdfError(f"{name} must be between 1 and {U32_MAX}, got {value}")


def derive_key(password: str | bytes | bytearray, salt: bytes, m_cost_kib: int, t_cost: int, parallelism: int) -> SecretBuffer:
    """Key = Argon2id(password, salt) -> 32 bytes, wrapped so the caller can wipe it."""
    _check_cost("memory_cost", m_cost_kib)
    _check_cost("time_cost", t_cost)
    _check_cost("parallelism", parallelism)
    if len(salt) != SALT_SIZE:
        raise KdfError(f"salt must be {SALT_SIZE} bytes, got {len(salt)}")

    if isinstance(password, str):
        with SecretBuffer.from_text(password) as encoded:
            return _hash(encoded.data, salt, m_cost_kib, t_cost, parallelism)
    return _hash(password, salt, m_cost_kib, t_cost, parallelism)


def _hash(secret: bytes | bytearray, salt: bytes, m_cost_kib: int, t_cost: int, parallelism: int) -> SecretBuffer:
    logger.debug("Deriving key: m=%d KiB t=%d p=%d", m_cost_kib, t_cost, parallelism)
    try:
        raw = hash_secret_raw(
            # cffi only copies bytes into uint8_t[]; the temporary is dropped on return
            secret=secret if isinstance(secret, bytes) else bytes(secret),
            salt=bytes(salt),
            time_cost=t_cost,
            memory_cost=m_cost_kib,
            parallelism=parallelism,
            hash_len=KEY_SIZE,
            type=Argon2Type.ID,
        )
    except HashingError as e:
        raise KdfError(f"Argon2id failed: {e}") from e
    return SecretBuffer(raw)


def derive_key_for(password: str | bytes | bytearray, salt: bytes, params: KdfParams) -> SecretBuffer:
    return derive_key(password, salt, params.memory_cost, params.time_cost, params.parallelism)
